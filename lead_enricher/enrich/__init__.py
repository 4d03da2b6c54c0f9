"""Enrichment building blocks: domains, emails and industries."""

from .domain import guess_domain, company_slug, extract_host
from .emails import EmailPatternGenerator, find_contact_emails
from .classifier import IndustryClassifier

__all__ = [
    "guess_domain",
    "company_slug",
    "extract_host",
    "EmailPatternGenerator",
    "find_contact_emails",
    "IndustryClassifier",
]
