"""Data models for the Lead Enricher."""

from .company import (
    GENERAL_INDUSTRY,
    CompanyInput,
    EmailCandidate,
    EmailSource,
    EnrichmentProfile,
    FounderCandidate,
    LeadsSummary,
    WebResult,
)

__all__ = [
    "GENERAL_INDUSTRY",
    "CompanyInput",
    "EmailCandidate",
    "EmailSource",
    "EnrichmentProfile",
    "FounderCandidate",
    "LeadsSummary",
    "WebResult",
]
