"""Tests for per-company enrichment orchestration."""

import asyncio

import pytest

from lead_enricher.connectors import StaticSearchProvider
from lead_enricher.models import CompanyInput, FounderCandidate, WebResult
from lead_enricher.models.database import init_db
from lead_enricher.pipeline import EnrichmentOrchestrator, Mode
from lead_enricher.storage import InMemoryProfileCache, LeadRepository, ProfileCache


def make_company(**kwargs) -> CompanyInput:
    """Create a test company input."""
    defaults = {
        "company_name": "Tacos El Buen Sabor",
        "phone": "+52 55 1234 5678",
        "location": "Ciudad de México",
    }
    defaults.update(kwargs)
    return CompanyInput.model_validate(defaults)


def make_full_provider() -> StaticSearchProvider:
    """Provider that finds every kind of signal."""
    return StaticSearchProvider(
        results=[
            WebResult(
                title="Tacos El Buen Sabor",
                url="https://tacoselbuensabor.com.mx",
                snippet="Taquería familiar en la colonia Roma",
            ),
        ],
        founders=[
            FounderCandidate(name="María González", position="Fundadora", confidence=0.8),
        ],
        social_media={"facebook": "https://facebook.com/tacoselbuensabor"},
    )


class FailingCache(ProfileCache):
    """Cache whose backend is always down."""

    async def get(self, key):
        raise ConnectionError("cache unavailable")

    async def set(self, key, profile, ttl_seconds=3600):
        raise ConnectionError("cache unavailable")


class FounderSearchDown(StaticSearchProvider):
    """Provider that fails halfway through discovery."""

    async def search_founders(self, company_name, location):
        raise RuntimeError("founder search unavailable")


class EmptyAnswers(StaticSearchProvider):
    """Provider that answers None instead of empty collections."""

    async def perform_web_search(self, company_name, location):
        return None

    async def search_founders(self, company_name, location):
        return None

    async def find_social_media(self, company_name):
        return None


class MalformedFounders(StaticSearchProvider):
    """Provider whose founder records are not founders."""

    async def search_founders(self, company_name, location):
        return [{"name": "María González"}]


class TestEnrich:
    """Tests for a single enrichment run."""

    def test_emails_only_run(self):
        orchestrator = EnrichmentOrchestrator(StaticSearchProvider())
        profile = asyncio.run(orchestrator.enrich(make_company()))

        assert profile.company_name == "Tacos El Buen Sabor"
        assert profile.phone == "+52 55 1234 5678"
        assert profile.location == "Ciudad de México"
        assert len(profile.emails) == 5
        assert all(e.address.endswith("@tacoselbuensabor.com.mx") for e in profile.emails)
        assert profile.founders == []
        assert profile.website is None
        assert profile.industry == "restaurante"
        assert profile.lead_score == 60
        assert profile.confidence_score == pytest.approx(0.68)
        assert profile.sources == ["email_generation"]
        assert profile.enrichment_error is None
        assert profile.processing_time_ms >= 0

    def test_every_stage_contributes(self):
        orchestrator = EnrichmentOrchestrator(make_full_provider())
        profile = asyncio.run(orchestrator.enrich(make_company()))

        assert profile.sources == [
            "web_search",
            "official_website",
            "email_generation",
            "founder_search",
            "social_media",
        ]
        assert profile.website == "https://tacoselbuensabor.com.mx"
        assert profile.founders[0].name == "María González"
        assert profile.social_media == {"facebook": "https://facebook.com/tacoselbuensabor"}
        assert profile.lead_score == 100
        assert 0.0 < profile.confidence_score <= 1.0

    def test_supplied_industry_is_kept(self):
        orchestrator = EnrichmentOrchestrator(StaticSearchProvider())
        profile = asyncio.run(orchestrator.enrich(make_company(industry="comercio")))
        assert profile.industry == "comercio"

    def test_unknown_industry_falls_back_to_general(self):
        orchestrator = EnrichmentOrchestrator(StaticSearchProvider())
        profile = asyncio.run(orchestrator.enrich(make_company(company_name="Grupo Delta")))
        assert profile.industry == "general"

    def test_discovery_failure_yields_partial_profile(self):
        cache = InMemoryProfileCache()
        orchestrator = EnrichmentOrchestrator(FounderSearchDown(), cache=cache)
        profile = asyncio.run(orchestrator.enrich(make_company()))

        assert profile.enrichment_error == "founder search unavailable"
        assert len(profile.emails) == 5
        assert profile.lead_score == 0
        assert profile.confidence_score == 0.0
        assert len(cache) == 0

    def test_missing_provider_answers_count_as_empty(self):
        orchestrator = EnrichmentOrchestrator(EmptyAnswers())
        profile = asyncio.run(orchestrator.enrich(make_company()))

        assert profile.enrichment_error is None
        assert profile.founders == []
        assert profile.social_media == {}
        assert profile.sources == ["email_generation"]
        assert profile.lead_score == 60

    def test_malformed_provider_data_yields_partial_profile(self):
        cache = InMemoryProfileCache()
        orchestrator = EnrichmentOrchestrator(MalformedFounders(), cache=cache)
        profile = asyncio.run(orchestrator.enrich(make_company()))

        assert profile.enrichment_error
        assert profile.founders == []
        assert len(profile.emails) == 5
        assert profile.lead_score == 0
        assert len(cache) == 0


class TestCaching:
    """Tests for the lookaside cache."""

    def test_second_call_is_served_from_cache(self):
        provider = make_full_provider()
        orchestrator = EnrichmentOrchestrator(provider, cache=InMemoryProfileCache())

        first = asyncio.run(orchestrator.enrich(make_company()))
        calls = list(provider.calls)
        second = asyncio.run(orchestrator.enrich(make_company()))

        assert second.model_dump_json() == first.model_dump_json()
        assert provider.calls == calls

    def test_key_ignores_case_and_padding(self):
        provider = StaticSearchProvider()
        orchestrator = EnrichmentOrchestrator(provider, cache=InMemoryProfileCache())

        asyncio.run(orchestrator.enrich(make_company()))
        calls = len(provider.calls)
        asyncio.run(orchestrator.enrich(make_company(
            company_name="  tacos el buen sabor ",
            location="CIUDAD DE MÉXICO",
        )))
        assert len(provider.calls) == calls

    def test_different_location_recomputes(self):
        provider = StaticSearchProvider()
        orchestrator = EnrichmentOrchestrator(provider, cache=InMemoryProfileCache())

        asyncio.run(orchestrator.enrich(make_company()))
        calls = len(provider.calls)
        asyncio.run(orchestrator.enrich(make_company(location="Guadalajara")))
        assert len(provider.calls) == calls + 3

    def test_expired_entry_recomputes(self):
        now = [1000.0]
        provider = StaticSearchProvider()
        cache = InMemoryProfileCache(clock=lambda: now[0])
        orchestrator = EnrichmentOrchestrator(provider, cache=cache, cache_ttl_seconds=3600)

        asyncio.run(orchestrator.enrich(make_company()))
        calls = len(provider.calls)

        now[0] += 3599
        asyncio.run(orchestrator.enrich(make_company()))
        assert len(provider.calls) == calls

        now[0] += 2
        asyncio.run(orchestrator.enrich(make_company()))
        assert len(provider.calls) == calls + 3

    def test_cache_faults_are_tolerated(self):
        orchestrator = EnrichmentOrchestrator(StaticSearchProvider(), cache=FailingCache())
        profile = asyncio.run(orchestrator.enrich(make_company()))
        assert profile.enrichment_error is None
        assert profile.lead_score == 60


class TestSideEffects:
    """Tests for cache and store writes under each mode."""

    def test_profile_is_stored(self):
        repository = LeadRepository(init_db("sqlite://"))
        orchestrator = EnrichmentOrchestrator(make_full_provider(), repository=repository)

        profile = asyncio.run(orchestrator.enrich(make_company()))
        stored = asyncio.run(repository.get("Tacos El Buen Sabor", "+52 55 1234 5678"))

        assert stored is not None
        assert stored.lead_score == profile.lead_score
        assert stored.sources == profile.sources
        assert [e.address for e in stored.emails] == [e.address for e in profile.emails]

    def test_failed_profile_is_not_stored(self):
        repository = LeadRepository(init_db("sqlite://"))
        orchestrator = EnrichmentOrchestrator(FounderSearchDown(), repository=repository)

        asyncio.run(orchestrator.enrich(make_company()))
        assert asyncio.run(repository.get("Tacos El Buen Sabor", "+52 55 1234 5678")) is None

    def test_memory_only_mode_has_no_side_effects(self):
        cache = InMemoryProfileCache()
        repository = LeadRepository(init_db("sqlite://"))
        provider = StaticSearchProvider()
        orchestrator = EnrichmentOrchestrator(
            provider,
            cache=cache,
            repository=repository,
            mode=Mode(record_side_effects=False),
        )

        asyncio.run(orchestrator.enrich(make_company()))
        asyncio.run(orchestrator.enrich(make_company()))

        assert len(cache) == 0
        assert len(provider.calls) == 6
        assert asyncio.run(repository.summary()).total_leads == 0

    def test_persist_off_still_caches(self):
        cache = InMemoryProfileCache()
        repository = LeadRepository(init_db("sqlite://"))
        orchestrator = EnrichmentOrchestrator(
            StaticSearchProvider(),
            cache=cache,
            repository=repository,
            mode=Mode(persist=False),
        )

        asyncio.run(orchestrator.enrich(make_company()))

        assert len(cache) == 1
        assert asyncio.run(repository.summary()).total_leads == 0
