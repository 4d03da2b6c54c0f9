"""Synthetic discovery provider producing templated, seeded results."""

import logging
import random

from lead_enricher.enrich.domain import company_slug
from lead_enricher.models import FounderCandidate, WebResult
from .base import SearchProvider

logger = logging.getLogger(__name__)


class SyntheticSearchProvider(SearchProvider):
    """Stand-in for a real search backend.

    Results are built from the company name and location. Founder and
    social presence are drawn from a ``random.Random`` seeded with
    ``seed`` and the company name, so the same company always gets the
    same output for a given seed.
    """

    name = "synthetic"

    FOUNDER_ROSTER = [
        ("María González", "Fundadora y CEO"),
        ("Carlos Martínez", "Propietario"),
        ("Ana López", "Directora General"),
        ("José Hernández", "Fundador"),
        ("Laura Ramírez", "Socia Fundadora"),
        ("Miguel Torres", "Director General"),
    ]
    MAX_FOUNDERS = 2

    SOCIAL_TEMPLATES = {
        "facebook": "https://facebook.com/{slug}",
        "instagram": "https://instagram.com/{slug}",
        "linkedin": "https://www.linkedin.com/company/{slug}",
        "twitter": "https://twitter.com/{slug}",
    }
    SOCIAL_PRESENCE_RATE = 0.5

    def __init__(self, seed: int = 0):
        self.seed = seed

    def _rng(self, company_name: str, purpose: str) -> random.Random:
        return random.Random(f"{self.seed}:{purpose}:{company_name.strip().lower()}")

    async def perform_web_search(
        self,
        company_name: str,
        location: str,
    ) -> list[WebResult]:
        """Return templated pages for the company."""
        slug = company_slug(company_name)
        if not slug:
            return []

        return [
            WebResult(
                title=f"{company_name} - {location}",
                url=f"https://www.{slug}.com.mx",
                snippet=f"Información de contacto y ubicación de {company_name} en {location}.",
            ),
            WebResult(
                title=f"{company_name} | Directorio",
                url=f"https://directorio.example.mx/{slug}",
                snippet=f"Teléfono y dirección de {company_name}, {location}.",
            ),
        ]

    async def search_founders(
        self,
        company_name: str,
        location: str,
    ) -> list[FounderCandidate]:
        """Pick zero to two people from a fixed roster."""
        rng = self._rng(company_name, "founders")
        count = rng.randint(0, self.MAX_FOUNDERS)
        picks = rng.sample(self.FOUNDER_ROSTER, count)
        return [
            FounderCandidate(
                name=name,
                position=position,
                confidence=round(rng.uniform(0.6, 0.85), 2),
                source="web_search",
            )
            for name, position in picks
        ]

    async def find_social_media(self, company_name: str) -> dict[str, str]:
        """Return templated profile URLs for a random subset of platforms."""
        slug = company_slug(company_name)
        if not slug:
            return {}

        rng = self._rng(company_name, "social")
        return {
            platform: template.format(slug=slug)
            for platform, template in self.SOCIAL_TEMPLATES.items()
            if rng.random() < self.SOCIAL_PRESENCE_RATE
        }
