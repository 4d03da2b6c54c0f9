"""Corporate email pattern generation."""

import logging
from typing import Optional

from lead_enricher.models import EmailCandidate, EmailSource
from .domain import DEFAULT_TLD, compact_name, guess_domain

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_PARTS = [
    "contacto",
    "info",
    "ventas",
    "administracion",
    "gerencia",
    "atencion",
    "comercial",
    "direccion",
    "director",
]

UNRANKED_PRIORITY = 99


class EmailPatternGenerator:
    """Generate ranked candidate addresses for a company's guessed domain.

    Ordering contract: priority ascending, then confidence descending, then
    address ascending. Only the top ``top_n`` candidates are returned.
    """

    BASE_CONFIDENCE = 0.5
    NAME_MATCH_BONUS = 0.3
    PREFERRED_LOCAL_BONUS = 0.2
    MX_DOMAIN_BONUS = 0.1
    NAME_MATCH_CHARS = 8
    PREFERRED_COUNT = 2
    MIN_TOP_N = 3
    MAX_TOP_N = 5

    def __init__(
        self,
        local_parts: Optional[list[str]] = None,
        top_n: int = 5,
    ):
        if not self.MIN_TOP_N <= top_n <= self.MAX_TOP_N:
            raise ValueError(f"top_n must be between {self.MIN_TOP_N} and {self.MAX_TOP_N}, got {top_n}")
        self.local_parts = list(local_parts or DEFAULT_LOCAL_PARTS)
        self.top_n = top_n

    def find_contact_emails(
        self,
        company_name: str,
        website: Optional[str] = None,
    ) -> list[EmailCandidate]:
        """Return the best candidate emails for a company."""
        domain = guess_domain(company_name, website)
        if not domain or domain.startswith("."):
            logger.debug(f"No usable domain for {company_name!r}")
            return []

        candidates = [
            EmailCandidate(
                address=f"{local}@{domain}",
                confidence=self.score_candidate(local, domain, company_name),
                source=EmailSource.PATTERN_GENERATION,
                priority=self.priority_of(local),
            )
            for local in dict.fromkeys(self.local_parts)
        ]

        candidates.sort(key=lambda c: (c.priority, -c.confidence, c.address))
        return candidates[: self.top_n]

    def priority_of(self, local_part: str) -> int:
        """1-based rank of a local-part in the configured list."""
        try:
            return self.local_parts.index(local_part) + 1
        except ValueError:
            return UNRANKED_PRIORITY

    def score_candidate(self, local_part: str, domain: str, company_name: str) -> float:
        """Confidence that an address is real, in [0, 1]."""
        confidence = self.BASE_CONFIDENCE

        name_prefix = compact_name(company_name)[: self.NAME_MATCH_CHARS]
        if name_prefix and name_prefix in domain:
            confidence += self.NAME_MATCH_BONUS

        if local_part in self.local_parts[: self.PREFERRED_COUNT]:
            confidence += self.PREFERRED_LOCAL_BONUS

        if domain.endswith(DEFAULT_TLD):
            confidence += self.MX_DOMAIN_BONUS

        return round(max(0.0, min(confidence, 1.0)), 2)


def find_contact_emails(
    company_name: str,
    website: Optional[str] = None,
) -> list[EmailCandidate]:
    """Generate candidate emails with the default configuration."""
    return EmailPatternGenerator().find_contact_emails(company_name, website)
