"""Enrichment orchestration and batch coordination."""

from .orchestrator import EnrichmentOrchestrator, Mode, ProfileDraft
from .batch import BatchCoordinator, BatchItem, BatchResult, describe_validation_error

__all__ = [
    "EnrichmentOrchestrator",
    "Mode",
    "ProfileDraft",
    "BatchCoordinator",
    "BatchItem",
    "BatchResult",
    "describe_validation_error",
]
