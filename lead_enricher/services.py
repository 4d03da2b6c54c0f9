"""Construction and lifecycle of the enrichment services."""

import logging
from dataclasses import dataclass
from typing import Optional

from lead_enricher.config import Settings, settings as default_settings
from lead_enricher.connectors import (
    DuckDuckGoSearchProvider,
    SearchProvider,
    StaticSearchProvider,
    SyntheticSearchProvider,
)
from lead_enricher.enrich import EmailPatternGenerator
from lead_enricher.models.database import init_db
from lead_enricher.pipeline import BatchCoordinator, EnrichmentOrchestrator, Mode
from lead_enricher.storage import (
    InMemoryProfileCache,
    LeadRepository,
    ProfileCache,
    RedisProfileCache,
    SQLProfileCache,
)

logger = logging.getLogger(__name__)


@dataclass
class EnrichmentServices:
    """Process-wide collaborators, opened at startup and closed on shutdown."""

    orchestrator: EnrichmentOrchestrator
    batch: BatchCoordinator
    repository: Optional[LeadRepository] = None
    cache: Optional[ProfileCache] = None

    async def close(self):
        if self.cache is not None:
            try:
                await self.cache.close()
            except Exception as e:
                logger.warning(f"Failed to close {self.cache.name} cache: {e}")
        await self.orchestrator.provider.close()
        if self.repository is not None:
            self.repository.session_factory.kw["bind"].dispose()


def build_provider(config: Settings) -> SearchProvider:
    """Create the configured discovery provider."""
    if config.discovery_provider == "duckduckgo":
        return DuckDuckGoSearchProvider(results_per_query=config.search_results_per_query)
    if config.discovery_provider == "none":
        return StaticSearchProvider()
    if config.discovery_provider != "synthetic":
        raise ValueError(f"Unknown discovery provider: {config.discovery_provider}")
    return SyntheticSearchProvider(seed=config.discovery_seed)


def build_cache(config: Settings, session_factory) -> ProfileCache:
    """Create the configured profile cache."""
    if config.cache_backend == "memory":
        return InMemoryProfileCache()
    if config.cache_backend == "redis":
        return RedisProfileCache(config.redis_url)
    if config.cache_backend != "sql":
        raise ValueError(f"Unknown cache backend: {config.cache_backend}")
    return SQLProfileCache(session_factory)


def open_services(
    config: Optional[Settings] = None,
    provider: Optional[SearchProvider] = None,
) -> EnrichmentServices:
    """Wire the orchestrator and its collaborators from settings.

    In memory-only mode no database is opened and no cache is created.
    Database initialization errors propagate so startup fails loudly.
    """
    config = config or default_settings
    provider = provider or build_provider(config)

    repository = None
    cache = None
    if not config.memory_only:
        session_factory = init_db(config.database_url)
        repository = LeadRepository(session_factory)
        cache = build_cache(config, session_factory)

    orchestrator = EnrichmentOrchestrator(
        provider=provider,
        email_generator=EmailPatternGenerator(
            local_parts=config.email_local_parts,
            top_n=config.email_top_n,
        ),
        cache=cache,
        repository=repository,
        mode=Mode(record_side_effects=not config.memory_only),
        cache_ttl_seconds=config.cache_ttl_seconds,
    )
    batch = BatchCoordinator(orchestrator, delay_seconds=config.batch_delay_seconds)

    logger.info(
        f"Enrichment services ready (provider={provider.name}, "
        f"cache={cache.name if cache else 'off'}, "
        f"persistence={'on' if repository else 'off'})"
    )
    return EnrichmentServices(
        orchestrator=orchestrator,
        batch=batch,
        repository=repository,
        cache=cache,
    )
