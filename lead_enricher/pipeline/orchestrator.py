"""Per-company enrichment orchestration."""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from pydantic import ValidationError

from lead_enricher.connectors import SearchProvider
from lead_enricher.enrich import EmailPatternGenerator, IndustryClassifier
from lead_enricher.models import (
    CompanyInput,
    EmailCandidate,
    EnrichmentProfile,
    FounderCandidate,
)
from lead_enricher.score import LeadScorer
from lead_enricher.storage import LeadRepository, ProfileCache, cache_key
from lead_enricher.storage.cache import DEFAULT_TTL_SECONDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mode:
    """Side-effect policy for an orchestrator.

    With ``record_side_effects`` off nothing is read from or written to the
    cache or the store. ``persist`` additionally gates the store write.
    """

    record_side_effects: bool = True
    persist: bool = True


@dataclass
class ProfileDraft:
    """Mutable accumulator for a profile under construction."""

    company: CompanyInput
    industry: Optional[str] = None
    emails: list[EmailCandidate] = field(default_factory=list)
    founders: list[FounderCandidate] = field(default_factory=list)
    website: Optional[str] = None
    social_media: dict[str, str] = field(default_factory=dict)
    sources: list[str] = field(default_factory=list)

    def add_source(self, source: str):
        if source not in self.sources:
            self.sources.append(source)

    def build(
        self,
        processing_time_ms: int = 0,
        error: Optional[str] = None,
    ) -> EnrichmentProfile:
        return EnrichmentProfile(
            company_name=self.company.name,
            phone=self.company.phone,
            location=self.company.location,
            industry=self.industry,
            emails=self.emails,
            founders=self.founders,
            website=self.website,
            social_media=self.social_media,
            sources=self.sources,
            processing_time_ms=processing_time_ms,
            enrichment_error=error,
        )


class EnrichmentOrchestrator:
    """Build one enrichment profile per company.

    Steps run strictly in sequence: cache lookup, web search, official
    website, emails, founders, industry, social media, scoring, then the
    cache and store writes. Failures inside discovery or scoring produce a
    partial profile carrying ``enrichment_error`` instead of an exception.
    """

    def __init__(
        self,
        provider: SearchProvider,
        email_generator: Optional[EmailPatternGenerator] = None,
        classifier: Optional[IndustryClassifier] = None,
        scorer: Optional[LeadScorer] = None,
        cache: Optional[ProfileCache] = None,
        repository: Optional[LeadRepository] = None,
        mode: Mode = Mode(),
        cache_ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        self.provider = provider
        self.email_generator = email_generator or EmailPatternGenerator()
        self.classifier = classifier or IndustryClassifier()
        self.scorer = scorer or LeadScorer()
        self.cache = cache
        self.repository = repository
        self.mode = mode
        self.cache_ttl_seconds = cache_ttl_seconds

    async def enrich(self, company: CompanyInput) -> EnrichmentProfile:
        """Enrich a single company, serving from cache when possible."""
        started = time.perf_counter()
        key = cache_key(company.name, company.location)

        cached = await self._cache_get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {company.name}")
            return cached

        draft = ProfileDraft(company=company, industry=company.industry)
        try:
            profile = await self._run_steps(draft)
        except Exception as e:
            logger.warning(f"Enrichment failed for {company.name}: {e}")
            return self._partial_profile(
                draft,
                processing_time_ms=self._elapsed_ms(started),
                error=str(e) or e.__class__.__name__,
            )

        profile = profile.model_copy(
            update={"processing_time_ms": self._elapsed_ms(started)}
        )

        await self._cache_set(key, profile)
        await self._persist(profile)

        logger.info(
            f"Enriched {company.name}: score={profile.lead_score} "
            f"confidence={profile.confidence_score} sources={profile.sources}"
        )
        return profile

    async def _run_steps(self, draft: ProfileDraft) -> EnrichmentProfile:
        name = draft.company.name
        location = draft.company.location

        results = list(await self.provider.perform_web_search(name, location) or [])
        if results:
            draft.add_source("web_search")

        website = self.provider.find_official_website(results, name)
        if website:
            draft.website = website
            draft.add_source("official_website")

        draft.emails = self.email_generator.find_contact_emails(name, draft.website)
        if draft.emails:
            draft.add_source("email_generation")

        draft.founders = list(await self.provider.search_founders(name, location) or [])
        if draft.founders:
            draft.add_source("founder_search")

        if not draft.industry:
            draft.industry = self.classifier.detect_industry(name, results)

        draft.social_media = dict(await self.provider.find_social_media(name) or {})
        if draft.social_media:
            draft.add_source("social_media")

        return self.scorer.score(draft.build())

    @staticmethod
    def _partial_profile(
        draft: ProfileDraft,
        processing_time_ms: int,
        error: str,
    ) -> EnrichmentProfile:
        """Build the error profile, dropping draft fields that fail validation."""
        try:
            return draft.build(processing_time_ms=processing_time_ms, error=error)
        except ValidationError as e:
            invalid = {err["loc"][0] for err in e.errors() if err.get("loc")}
            logger.debug(f"Dropping invalid draft fields for {draft.company.name}: {invalid}")

        fallback = ProfileDraft(company=draft.company)
        for name in ("industry", "emails", "founders", "website", "social_media", "sources"):
            if name not in invalid:
                setattr(fallback, name, getattr(draft, name))
        try:
            return fallback.build(processing_time_ms=processing_time_ms, error=error)
        except ValidationError:
            return ProfileDraft(company=draft.company).build(
                processing_time_ms=processing_time_ms,
                error=error,
            )

    async def _cache_get(self, key: str) -> Optional[EnrichmentProfile]:
        if not self.mode.record_side_effects or self.cache is None:
            return None
        try:
            return await self.cache.get(key)
        except Exception as e:
            logger.warning(f"Cache read failed for '{key}': {e}")
            return None

    async def _cache_set(self, key: str, profile: EnrichmentProfile):
        if not self.mode.record_side_effects or self.cache is None:
            return
        try:
            await self.cache.set(key, profile, self.cache_ttl_seconds)
        except Exception as e:
            logger.warning(f"Cache write failed for '{key}': {e}")

    async def _persist(self, profile: EnrichmentProfile):
        if not (self.mode.record_side_effects and self.mode.persist):
            return
        if self.repository is None:
            return
        lead_id = await self.repository.upsert(profile)
        if lead_id is not None:
            logger.debug(f"Stored {profile.company_name} as lead {lead_id}")

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.perf_counter() - started) * 1000)
