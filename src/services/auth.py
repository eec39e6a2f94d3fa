"""Authentication service for JWT and password handling."""

import logging
import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from src.config import get_settings
from src.services.exceptions import Unauthenticated
from src.services.token_registry import TokenRegistry

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token bound to a user id."""
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expiration_minutes))
    to_encode = {
        "sub": str(user_id),
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


class TokenService:
    """Issues, verifies and revokes bearer tokens."""

    def __init__(self, registry: TokenRegistry):
        self.registry = registry

    def issue(self, user_id: int) -> str:
        return create_access_token(user_id)

    def verify(self, token: str) -> int:
        """Return the user id bound to a token.

        Raises:
            Unauthenticated: bad signature, expired, no subject, or revoked.
        """
        payload = decode_access_token(token)
        if payload is None:
            raise Unauthenticated()

        subject = payload.get("sub")
        if subject is None or not str(subject).isdigit():
            raise Unauthenticated()

        if self.registry.is_revoked(token):
            raise Unauthenticated("Token has been revoked")

        return int(subject)

    def revoke(self, token: str) -> None:
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            claims = {}

        ttl_seconds = None
        if "exp" in claims:
            ttl_seconds = int(claims["exp"] - datetime.now(UTC).timestamp()) + 1
        self.registry.revoke(token, ttl_seconds=ttl_seconds)
        logger.info("Revoked access token")
