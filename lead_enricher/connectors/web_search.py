"""DuckDuckGo web search provider."""

import asyncio
import logging
import re
from typing import Optional
from urllib.parse import urlparse

from duckduckgo_search import DDGS

from lead_enricher.models import FounderCandidate, WebResult
from .base import SearchProvider

logger = logging.getLogger(__name__)

_NAME = r"[A-ZÁÉÍÓÚÑ][a-záéíóúñ]+(?:\s+[A-ZÁÉÍÓÚÑ][a-záéíóúñ]+){1,2}"
_ROLE = (
    r"fundador(?:a)?|propietari[oa]|dueñ[oa]|director(?:a)?\s+general"
    r"|ceo|socio\s+fundador|socia\s+fundadora"
)

# "María González, fundadora" or "fundador Carlos Martínez"
FOUNDER_PATTERNS = [
    re.compile(rf"(?P<name>{_NAME})\s*[,\-–]\s*(?:es\s+)?(?:el\s+|la\s+|su\s+)?(?P<role>(?i:{_ROLE}))\b"),
    re.compile(rf"\b(?P<role>(?i:{_ROLE}))\s*[:,]?\s+(?:es\s+)?(?P<name>{_NAME})"),
]


class DuckDuckGoSearchProvider(SearchProvider):
    """Discover company pages, founders and social profiles with DuckDuckGo."""

    name = "duckduckgo"

    SOCIAL_HOSTS = {
        "facebook": ["facebook.com"],
        "instagram": ["instagram.com"],
        "linkedin": ["linkedin.com"],
        "twitter": ["twitter.com", "x.com"],
        "tiktok": ["tiktok.com"],
    }
    FOUNDER_CONFIDENCE = 0.5

    def __init__(self, results_per_query: int = 10):
        self.results_per_query = results_per_query

    async def perform_web_search(
        self,
        company_name: str,
        location: str,
    ) -> list[WebResult]:
        """Search DuckDuckGo for pages about the company."""
        query = f'"{company_name}" {location}'
        raw = await asyncio.to_thread(self._execute_search, query)
        return [r for r in (self._parse_result(item) for item in raw) if r]

    async def search_founders(
        self,
        company_name: str,
        location: str,
    ) -> list[FounderCandidate]:
        """Extract founder names from search snippets."""
        query = f'"{company_name}" fundador OR propietario OR "director general" {location}'
        raw = await asyncio.to_thread(self._execute_search, query)

        founders: dict[str, FounderCandidate] = {}
        for item in raw:
            text = f"{item.get('title', '')}. {item.get('body', '')}"
            for candidate in self.extract_founders(text):
                founders.setdefault(candidate.name.lower(), candidate)

        return list(founders.values())[:3]

    async def find_social_media(self, company_name: str) -> dict[str, str]:
        """Pick profile URLs from results hosted on known social platforms."""
        query = f'"{company_name}" facebook OR instagram OR linkedin'
        raw = await asyncio.to_thread(self._execute_search, query)

        social: dict[str, str] = {}
        for item in raw:
            url = item.get("href", "")
            platform = self.platform_for(url)
            if platform and platform not in social:
                social[platform] = url
        return social

    def extract_founders(self, text: str) -> list[FounderCandidate]:
        """Find 'name, role' mentions in free text."""
        found = []
        for pattern in FOUNDER_PATTERNS:
            for match in pattern.finditer(text):
                found.append(
                    FounderCandidate(
                        name=match.group("name").strip(),
                        position=match.group("role").strip().capitalize(),
                        confidence=self.FOUNDER_CONFIDENCE,
                        source=self.name,
                    )
                )
        return found

    def platform_for(self, url: str) -> Optional[str]:
        """Return the social platform a URL belongs to, if any."""
        host = (urlparse(url).hostname or "").lower()
        for platform, hosts in self.SOCIAL_HOSTS.items():
            if any(host == h or host.endswith(f".{h}") for h in hosts):
                return platform
        return None

    def _execute_search(self, query: str) -> list[dict]:
        """Execute a DuckDuckGo search (synchronous)."""
        try:
            with DDGS() as ddgs:
                return list(ddgs.text(query, region="mx-es", max_results=self.results_per_query))
        except Exception as e:
            logger.warning(f"DDG search error for '{query}': {e}")
            return []

    def _parse_result(self, result: dict) -> Optional[WebResult]:
        """Parse a DuckDuckGo result into a WebResult."""
        url = result.get("href", "")
        if not url:
            return None
        return WebResult(
            title=result.get("title", ""),
            url=url,
            snippet=(result.get("body") or "")[:500],
        )
