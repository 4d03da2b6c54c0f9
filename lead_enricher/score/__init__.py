"""Scoring engine for enriched leads."""

from .scorer import LeadScorer

__all__ = ["LeadScorer"]
