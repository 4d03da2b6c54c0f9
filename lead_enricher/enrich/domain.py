"""Domain guessing and company-name normalization."""

import logging
import re
import unicodedata
from typing import Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

DEFAULT_TLD = ".com.mx"

# Mexican legal-entity suffixes, matched at the end of the name
LEGAL_SUFFIXES = [
    r"s\.?\s*de\s*r\.?\s*l\.?(\s*de\s*c\.?\s*v\.?)?",
    r"s\.?\s*a\.?\s*p\.?\s*i\.?(\s*de\s*c\.?\s*v\.?)?",
    r"s\.?\s*a\.?\s*de\s*c\.?\s*v\.?",
    r"s\.\s*a\.?",
    r"s\.\s*c\.?",
]

_SUFFIX_RE = re.compile(
    r"[\s,]+(" + "|".join(LEGAL_SUFFIXES) + r")\s*$",
    flags=re.I,
)
_HOST_RE = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?(\.[a-z0-9]([a-z0-9-]*[a-z0-9])?)+$")


def strip_legal_suffix(name: str) -> str:
    """Remove trailing legal-entity suffixes such as 'S.A. de C.V.'."""
    previous = None
    name = name.strip()
    while previous != name:
        previous = name
        name = _SUFFIX_RE.sub("", name).strip()
    return name


def compact_name(name: str) -> str:
    """Lowercase ASCII alphanumerics of a name, accents folded."""
    folded = unicodedata.normalize("NFKD", name or "")
    folded = folded.encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]", "", folded.lower())


def company_slug(company_name: str) -> str:
    """Slug used for guessed domains: suffix stripped, compacted."""
    return compact_name(strip_legal_suffix(company_name or ""))


def extract_host(url: Optional[str]) -> Optional[str]:
    """Return the normalized host of a syntactically valid URL, else None."""
    if not url or not url.strip():
        return None

    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"http://{candidate}"

    try:
        parsed = urlparse(candidate)
    except ValueError:
        return None

    if parsed.scheme not in ("http", "https"):
        return None

    host = (parsed.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]

    if not _HOST_RE.match(host):
        return None
    return host


def guess_domain(company_name: str, website: Optional[str] = None) -> str:
    """Guess the web domain of a company.

    A valid website wins; otherwise the domain is the company slug plus
    ``.com.mx``. An empty slug still yields the bare suffix.
    """
    host = extract_host(website)
    if host:
        return host

    if website:
        logger.debug(f"Ignoring invalid website '{website}' for {company_name}")

    return f"{company_slug(company_name)}{DEFAULT_TLD}"
