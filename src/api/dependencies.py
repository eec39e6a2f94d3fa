"""FastAPI dependencies for authentication, database and services."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.asset_service import AssetService
from src.services.auth import TokenService
from src.services.exceptions import Unauthenticated
from src.services.storage import AvatarStorage, get_avatar_storage
from src.services.token_registry import TokenRegistry, get_token_registry
from src.services.user_service import UserService

# Errors are raised here instead of by HTTPBearer so every failure is a 401
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """The authenticated user of a request and the token they presented."""

    user: User
    token: str


def get_token_service(
    registry: Annotated[TokenRegistry, Depends(get_token_registry)],
) -> TokenService:
    """Get token service backed by the configured revocation registry."""
    return TokenService(registry)


def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthContext:
    """Verify the bearer token and resolve the user it was issued to."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("No token provided")

    token = credentials.credentials
    user_id = token_service.verify(token)

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise Unauthenticated("Token invalid")

    return AuthContext(user=user, token=token)


def get_current_user(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
) -> User:
    """Get the current authenticated user from JWT token."""
    return auth.user


def get_asset_service(
    db: Annotated[Session, Depends(get_db)],
) -> AssetService:
    """Get asset service with dependencies."""
    return AssetService(db)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    storage: Annotated[AvatarStorage, Depends(get_avatar_storage)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db, token_service, storage)
