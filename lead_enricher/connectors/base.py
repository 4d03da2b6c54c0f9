"""Abstract base class for discovery providers."""

from abc import ABC, abstractmethod
from typing import Optional

from lead_enricher.enrich.domain import company_slug
from lead_enricher.models import FounderCandidate, WebResult


class SearchProvider(ABC):
    """Pluggable source of web pages, founders and social profiles."""

    name: str = "base"

    # Domains accepted as an official website, checked against the URL end
    OFFICIAL_TLDS = (".com.mx", ".mx", ".com")

    @abstractmethod
    async def perform_web_search(
        self,
        company_name: str,
        location: str,
    ) -> list[WebResult]:
        """
        Search the web for pages about a company.

        Args:
            company_name: Name of the company
            location: Approximate location used to narrow the search

        Returns:
            List of web results, possibly empty
        """
        pass

    @abstractmethod
    async def search_founders(
        self,
        company_name: str,
        location: str,
    ) -> list[FounderCandidate]:
        """Find people who plausibly founded or own the company."""
        pass

    @abstractmethod
    async def find_social_media(self, company_name: str) -> dict[str, str]:
        """Map platform name to profile URL."""
        pass

    def find_official_website(
        self,
        results: list[WebResult],
        company_name: str,
    ) -> Optional[str]:
        """Pick the first result URL that looks like the company's own site."""
        slug = company_slug(company_name)
        if not slug:
            return None

        for result in results:
            url = result.url.lower().rstrip("/")
            if slug in url and url.endswith(self.OFFICIAL_TLDS):
                return result.url
        return None

    async def close(self) -> None:
        """Release provider resources."""
        return None
