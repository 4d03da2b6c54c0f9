"""Lead and confidence scoring for enrichment profiles."""

import logging

from lead_enricher.models import GENERAL_INDUSTRY, EnrichmentProfile

logger = logging.getLogger(__name__)


class LeadScorer:
    """Score enrichment profiles.

    The lead score is a capped sum of bounded bonuses. The confidence score
    is a weighted average over the signal categories that are present.
    """

    BASE_SCORE = 20
    MAX_SCORE = 100

    # Lead score bonuses
    BONUSES = {
        "emails": 20,
        "founders": 25,
        "website": 15,
        "industry": 10,
        "social_media": 5,
        "sources": 5,
    }
    PER_EMAIL_BONUS = 3
    MAX_EMAIL_COUNT_BONUS = 10
    MIN_SOURCES_FOR_BONUS = 3

    # Confidence weights per signal category
    CONFIDENCE_WEIGHTS = {
        "emails": 0.4,
        "founders": 0.3,
        "sources": 0.3,
    }
    PER_SOURCE_CONFIDENCE = 0.1
    MAX_SOURCE_CONFIDENCE = 0.3

    def score(self, profile: EnrichmentProfile) -> EnrichmentProfile:
        """Return a copy of the profile with both scores filled in."""
        lead_score = self.calculate_lead_score(profile)
        confidence_score = self.calculate_confidence_score(profile)
        logger.debug(
            f"{profile.company_name}: lead_score={lead_score} "
            f"confidence={confidence_score}"
        )
        return profile.model_copy(
            update={"lead_score": lead_score, "confidence_score": confidence_score}
        )

    def calculate_lead_score(self, profile: EnrichmentProfile) -> int:
        """Lead score in [0, 100]."""
        score = self.BASE_SCORE

        if profile.emails:
            score += self.BONUSES["emails"]
            score += min(len(profile.emails) * self.PER_EMAIL_BONUS, self.MAX_EMAIL_COUNT_BONUS)

        if profile.founders:
            score += self.BONUSES["founders"]

        if profile.website:
            score += self.BONUSES["website"]

        if profile.industry and profile.industry != GENERAL_INDUSTRY:
            score += self.BONUSES["industry"]

        if profile.social_media:
            score += self.BONUSES["social_media"]

        if len(set(profile.sources)) >= self.MIN_SOURCES_FOR_BONUS:
            score += self.BONUSES["sources"]

        return max(0, min(score, self.MAX_SCORE))

    def calculate_confidence_score(self, profile: EnrichmentProfile) -> float:
        """Confidence in [0, 1]; 0 when no signal category is present.

        The sources term is added as-is rather than multiplied by its
        weight, while its weight still counts in the denominator.
        """
        weighted_sum = 0.0
        total_weight = 0.0

        if profile.emails:
            mean = sum(e.confidence for e in profile.emails) / len(profile.emails)
            weighted_sum += self.CONFIDENCE_WEIGHTS["emails"] * mean
            total_weight += self.CONFIDENCE_WEIGHTS["emails"]

        if profile.founders:
            mean = sum(f.confidence for f in profile.founders) / len(profile.founders)
            weighted_sum += self.CONFIDENCE_WEIGHTS["founders"] * mean
            total_weight += self.CONFIDENCE_WEIGHTS["founders"]

        if profile.sources:
            weighted_sum += min(
                len(profile.sources) * self.PER_SOURCE_CONFIDENCE,
                self.MAX_SOURCE_CONFIDENCE,
            )
            total_weight += self.CONFIDENCE_WEIGHTS["sources"]

        if total_weight == 0:
            return 0.0

        return round(max(0.0, min(weighted_sum / total_weight, 1.0)), 2)
