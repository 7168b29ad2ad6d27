"""Session storage for outcome histories: Redis with in-memory fallback."""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

import redis.asyncio as redis
from redis.exceptions import RedisError
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from config import config
from core.history import OutcomeHistory

logger = logging.getLogger(__name__)

SESSION_KEY_HISTORY = "history"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key or config.security.secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        try:
            return self._serializer.loads(token, max_age=max_age or config.session_ttl)
        except (BadSignature, SignatureExpired):
            return None


_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class SessionStore(ABC):
    """Abstract session store."""

    @abstractmethod
    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Get session data."""
        ...

    @abstractmethod
    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data."""
        ...

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """Delete session."""
        ...

    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        return await self.get(session_id) is not None

    def create_session_id(self) -> str:
        """Create a new signed session token."""
        return get_session_signer().sign(str(uuid4()))


class InMemorySessionStore(SessionStore):
    """In-memory session store for local development and tests."""

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[dict[str, Any], datetime]] = {}

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Get session data, dropping it if expired."""
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        data, expiry = entry
        if expiry < datetime.now():
            await self.delete(session_id)
            return None
        return data

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data."""
        expiry = datetime.now() + timedelta(seconds=ttl or config.session_ttl)
        self._sessions[session_id] = (data, expiry)

    async def delete(self, session_id: str) -> None:
        """Delete session."""
        self._sessions.pop(session_id, None)

    async def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._sessions.items() if expiry < now]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)


class RedisSessionStore(SessionStore):
    """Redis-backed session store."""

    def __init__(self, redis_client: redis.Redis) -> None:
        self._redis = redis_client
        self._prefix = "baccarat:session:"

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Get session data."""
        data = await self._redis.get(self._key(session_id))
        if data is None:
            return None
        return json.loads(data)

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data."""
        await self._redis.setex(self._key(session_id), ttl or config.session_ttl, json.dumps(data))

    async def delete(self, session_id: str) -> None:
        """Delete session."""
        await self._redis.delete(self._key(session_id))

    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        return await self._redis.exists(self._key(session_id)) > 0


_session_store: SessionStore | None = None


async def get_session_store() -> SessionStore:
    """Get or create the session store, preferring Redis when reachable."""
    global _session_store

    if _session_store is not None:
        return _session_store

    try:
        redis_client = redis.from_url(config.redis.url)
        await redis_client.ping()
        _session_store = RedisSessionStore(redis_client)
    except (RedisError, OSError) as exc:
        logger.warning("Redis unavailable (%s); using in-memory sessions", exc)
        _session_store = InMemorySessionStore()
    return _session_store


def set_session_store(store: SessionStore | None) -> None:
    """Replace the global session store (None resets to lazy detection)."""
    global _session_store
    _session_store = store


async def create_session() -> str:
    """Create a new session holding an empty history."""
    store = await get_session_store()
    session_id = store.create_session_id()
    now = int(datetime.now().timestamp())
    await store.set(
        session_id,
        {
            SESSION_KEY_HISTORY: OutcomeHistory().to_dict(),
            SESSION_KEY_CREATED_AT: now,
            SESSION_KEY_LAST_ACTIVITY: now,
        },
    )
    return session_id


async def load_history(session_id: str) -> OutcomeHistory | None:
    """Load the outcome history for a session, or None if the session is unknown."""
    store = await get_session_store()
    data = await store.get(session_id)
    if data is None:
        return None
    return OutcomeHistory.from_dict(data.get(SESSION_KEY_HISTORY, {}), config.history.max_outcomes)


async def save_history(session_id: str, history: OutcomeHistory) -> None:
    """Persist the outcome history for a session."""
    store = await get_session_store()
    data = await store.get(session_id) or {SESSION_KEY_CREATED_AT: int(datetime.now().timestamp())}
    data[SESSION_KEY_HISTORY] = history.to_dict()
    data[SESSION_KEY_LAST_ACTIVITY] = int(datetime.now().timestamp())
    await store.set(session_id, data)


async def delete_session(session_id: str) -> None:
    """Delete a session."""
    store = await get_session_store()
    await store.delete(session_id)


def extract_session_id(token: str) -> str | None:
    """Extract the raw session ID from a signed token."""
    return get_session_signer().unsign(token)
