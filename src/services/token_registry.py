"""Registries of bearer tokens revoked before their natural expiry."""

import hashlib
import logging
import threading
from abc import ABC, abstractmethod

import redis

from src.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class TokenRegistry(ABC):
    """Records revoked tokens and answers membership checks."""

    @abstractmethod
    def revoke(self, token: str, ttl_seconds: int | None = None) -> None:
        """Mark a token as revoked. Revoking twice has no further effect."""

    @abstractmethod
    def is_revoked(self, token: str) -> bool:
        """Check whether a token has been revoked."""


class InMemoryTokenRegistry(TokenRegistry):
    """Revocations held in this process only.

    Entries are never pruned, so the set grows for the life of the process.
    Other processes do not see these revocations; use RedisTokenRegistry when
    running more than one instance.
    """

    def __init__(self) -> None:
        self._revoked: set[str] = set()
        self._lock = threading.Lock()

    def revoke(self, token: str, ttl_seconds: int | None = None) -> None:
        with self._lock:
            self._revoked.add(token)

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            return token in self._revoked

    def __len__(self) -> int:
        return len(self._revoked)


class RedisTokenRegistry(TokenRegistry):
    """Revocations shared through Redis, expiring together with the token."""

    key_prefix = "revoked_token:"

    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    def _key(self, token: str) -> str:
        return self.key_prefix + hashlib.sha256(token.encode("utf-8")).hexdigest()

    def revoke(self, token: str, ttl_seconds: int | None = None) -> None:
        key = self._key(token)
        if ttl_seconds is not None and ttl_seconds <= 0:
            # Already expired, verification rejects it anyway
            return
        if ttl_seconds is None:
            self.client.set(key, 1)
        else:
            self.client.set(key, 1, ex=ttl_seconds)

    def is_revoked(self, token: str) -> bool:
        return bool(self.client.exists(self._key(token)))


_registry: TokenRegistry | None = None


def get_token_registry() -> TokenRegistry:
    """Get the process-wide registry selected by TOKEN_REGISTRY_BACKEND."""
    global _registry
    if _registry is None:
        if settings.token_registry_backend == "redis":
            _registry = RedisTokenRegistry(redis.from_url(settings.redis_url))
        else:
            _registry = InMemoryTokenRegistry()
        logger.info(f"Using {type(_registry).__name__} for token revocation")
    return _registry
