"""Durable storage of enriched leads."""

import json
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import sessionmaker

from lead_enricher.models import EnrichmentProfile, LeadsSummary
from lead_enricher.models.database import DBLead

logger = logging.getLogger(__name__)

HIGH_QUALITY_SCORE = 80


class LeadRepository:
    """Insert-or-update leads keyed by (company_name, phone)."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def upsert(self, profile: EnrichmentProfile) -> Optional[int]:
        """Store a profile and return the lead id, or None on failure.

        Conflicting rows get their enrichment fields overwritten and
        ``updated_at`` refreshed. Storage faults are logged, never raised.
        """
        session = self.session_factory()
        try:
            lead = (
                session.query(DBLead)
                .filter_by(company_name=profile.company_name, phone=profile.phone)
                .first()
            )
            now = datetime.utcnow()
            if lead is None:
                lead = DBLead(
                    company_name=profile.company_name,
                    phone=profile.phone,
                    created_at=now,
                )
                session.add(lead)

            self._apply_profile(lead, profile)
            lead.updated_at = now

            session.commit()
            return lead.id

        except Exception as e:
            session.rollback()
            logger.warning(f"Failed to store lead {profile.company_name!r}: {e}")
            return None

        finally:
            session.close()

    async def get(
        self,
        company_name: str,
        phone: Optional[str] = None,
    ) -> Optional[EnrichmentProfile]:
        """Load the stored profile for a lead."""
        session = self.session_factory()
        try:
            lead = (
                session.query(DBLead)
                .filter_by(company_name=company_name, phone=phone)
                .first()
            )
            return self._to_profile(lead) if lead else None
        finally:
            session.close()

    async def summary(self) -> LeadsSummary:
        """Aggregate statistics over all stored leads."""
        session = self.session_factory()
        try:
            total, avg_score, last_import = session.query(
                func.count(DBLead.id),
                func.avg(DBLead.lead_score),
                func.max(DBLead.created_at),
            ).one()

            high_quality = (
                session.query(func.count(DBLead.id))
                .filter(DBLead.lead_score >= HIGH_QUALITY_SCORE)
                .scalar()
            )
            with_emails = (
                session.query(func.count(DBLead.id))
                .filter(DBLead.emails.notin_(["[]", ""]))
                .scalar()
            )
            with_founders = (
                session.query(func.count(DBLead.id))
                .filter(DBLead.founders.notin_(["[]", ""]))
                .scalar()
            )
            industries = session.query(func.count(func.distinct(DBLead.industry))).scalar()

            return LeadsSummary(
                total_leads=total or 0,
                avg_score=round(float(avg_score), 2) if avg_score is not None else None,
                high_quality_leads=high_quality or 0,
                leads_with_emails=with_emails or 0,
                leads_with_founders=with_founders or 0,
                industries_covered=industries or 0,
                last_import=last_import,
            )
        finally:
            session.close()

    @staticmethod
    def _apply_profile(lead: DBLead, profile: EnrichmentProfile):
        """Copy enrichment fields onto a row; workflow columns are untouched."""
        data = profile.model_dump(mode="json")
        lead.location = profile.location
        lead.industry = profile.industry
        lead.emails = json.dumps(data["emails"], ensure_ascii=False)
        lead.founders = json.dumps(data["founders"], ensure_ascii=False)
        lead.website = profile.website
        lead.social_media = json.dumps(data["social_media"], ensure_ascii=False)
        lead.sources = json.dumps(data["sources"], ensure_ascii=False)
        lead.lead_score = profile.lead_score
        lead.confidence_score = profile.confidence_score
        lead.enriched_at = profile.enriched_at
        lead.processing_time_ms = profile.processing_time_ms
        lead.enrichment_error = profile.enrichment_error

    @staticmethod
    def _to_profile(lead: DBLead) -> EnrichmentProfile:
        return EnrichmentProfile(
            company_name=lead.company_name,
            phone=lead.phone,
            location=lead.location or "",
            industry=lead.industry,
            emails=lead.get_emails(),
            founders=lead.get_founders(),
            website=lead.website,
            social_media=lead.get_social_media(),
            lead_score=lead.lead_score or 0,
            confidence_score=lead.confidence_score or 0.0,
            sources=lead.get_sources(),
            enriched_at=lead.enriched_at or lead.updated_at,
            processing_time_ms=lead.processing_time_ms or 0,
            enrichment_error=lead.enrichment_error,
        )
