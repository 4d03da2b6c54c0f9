"""Profile caches with a fixed time-to-live."""

import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import sessionmaker

from lead_enricher.models import EnrichmentProfile
from lead_enricher.models.database import DBProfileCache

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


def cache_key(company_name: str, location: str) -> str:
    """Cache key for a (company, location) pair."""
    return f"enrichment:{company_name.strip().lower()}:{location.strip().lower()}"


class ProfileCache(ABC):
    """Lookaside cache of enrichment profiles.

    Expired entries are indistinguishable from missing ones. Implementations
    may raise on backend faults; callers treat that as a miss.
    """

    name: str = "base"

    @abstractmethod
    async def get(self, key: str) -> Optional[EnrichmentProfile]:
        pass

    @abstractmethod
    async def set(
        self,
        key: str,
        profile: EnrichmentProfile,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        pass

    async def close(self) -> None:
        return None


class InMemoryProfileCache(ProfileCache):
    """Process-local cache, mostly for tests and single-process runs."""

    name = "memory"

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, str]] = {}

    async def get(self, key: str) -> Optional[EnrichmentProfile]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, payload = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return EnrichmentProfile.model_validate_json(payload)

    async def set(
        self,
        key: str,
        profile: EnrichmentProfile,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        self._entries[key] = (self._clock() + ttl_seconds, profile.model_dump_json())

    def __len__(self) -> int:
        return len(self._entries)


class SQLProfileCache(ProfileCache):
    """Cache stored in the ``profile_cache`` table."""

    name = "sql"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def get(self, key: str) -> Optional[EnrichmentProfile]:
        session = self.session_factory()
        try:
            cached = session.query(DBProfileCache).filter_by(key=key).first()
            if cached and cached.expires_at > datetime.utcnow():
                return EnrichmentProfile.model_validate_json(cached.payload)
            return None
        finally:
            session.close()

    async def set(
        self,
        key: str,
        profile: EnrichmentProfile,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        session = self.session_factory()
        try:
            now = datetime.utcnow()
            expires_at = now + timedelta(seconds=ttl_seconds)

            cached = session.query(DBProfileCache).filter_by(key=key).first()
            if cached:
                cached.payload = profile.model_dump_json()
                cached.stored_at = now
                cached.expires_at = expires_at
            else:
                cached = DBProfileCache(
                    key=key,
                    payload=profile.model_dump_json(),
                    stored_at=now,
                    expires_at=expires_at,
                )
                session.add(cached)

            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


class RedisProfileCache(ProfileCache):
    """Cache stored in Redis with native key expiry."""

    name = "redis"

    def __init__(self, redis_url: str, client=None):
        if client is None:
            from redis.asyncio import Redis

            client = Redis.from_url(redis_url, decode_responses=True)
        self.client = client

    async def get(self, key: str) -> Optional[EnrichmentProfile]:
        payload = await self.client.get(key)
        if not payload:
            return None
        return EnrichmentProfile.model_validate_json(payload)

    async def set(
        self,
        key: str,
        profile: EnrichmentProfile,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        await self.client.set(key, profile.model_dump_json(), ex=ttl_seconds)

    async def close(self) -> None:
        await self.client.aclose()
