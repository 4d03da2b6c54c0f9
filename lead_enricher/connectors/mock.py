"""Static discovery provider for tests and disabled discovery."""

from typing import Optional

from lead_enricher.models import FounderCandidate, WebResult
from .base import SearchProvider


class StaticSearchProvider(SearchProvider):
    """Provider that returns fixed data, empty by default."""

    name = "static"

    def __init__(
        self,
        results: Optional[list[WebResult]] = None,
        founders: Optional[list[FounderCandidate]] = None,
        social_media: Optional[dict[str, str]] = None,
    ):
        self._results = results or []
        self._founders = founders or []
        self._social_media = social_media or {}
        self.calls: list[str] = []

    async def perform_web_search(
        self,
        company_name: str,
        location: str,
    ) -> list[WebResult]:
        self.calls.append(f"web_search:{company_name}")
        return list(self._results)

    async def search_founders(
        self,
        company_name: str,
        location: str,
    ) -> list[FounderCandidate]:
        self.calls.append(f"founders:{company_name}")
        return list(self._founders)

    async def find_social_media(self, company_name: str) -> dict[str, str]:
        self.calls.append(f"social:{company_name}")
        return dict(self._social_media)
