"""Sequential batch enrichment with a fixed inter-company delay."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional

from pydantic import ValidationError

from lead_enricher.models import CompanyInput, EnrichmentProfile
from .orchestrator import EnrichmentOrchestrator

logger = logging.getLogger(__name__)

NAME_FIELDS = ("company_name", "name", "nombre", "empresa", "business_name")


def describe_validation_error(error: ValidationError) -> str:
    """Human-readable reason a company record was rejected."""
    for err in error.errors():
        if err.get("loc") and err["loc"][0] in NAME_FIELDS:
            return "company_name is required"
    return "; ".join(err["msg"] for err in error.errors())


@dataclass
class BatchItem:
    """Outcome for one record of a batch."""

    index: int
    success: bool
    profile: Optional[EnrichmentProfile] = None
    error: Optional[str] = None
    input: dict[str, Any] = field(default_factory=dict)

    def to_response(self) -> dict[str, Any]:
        if self.profile is not None:
            return {"success": self.success, **self.profile.model_dump(mode="json")}
        return {
            "success": False,
            "index": self.index,
            "error": self.error,
            "input": self.input,
        }


@dataclass
class BatchResult:
    """Aggregate outcome of a batch."""

    items: list[BatchItem]
    processed_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def processed(self) -> int:
        return len(self.items)

    @property
    def successful(self) -> int:
        return sum(1 for item in self.items if item.success)

    @property
    def failed(self) -> int:
        return self.processed - self.successful

    @property
    def profiles(self) -> list[EnrichmentProfile]:
        return [item.profile for item in self.items if item.profile is not None]

    def to_response(self) -> dict[str, Any]:
        return {
            "success": True,
            "processed": self.processed,
            "successful": self.successful,
            "failed": self.failed,
            "results": [item.to_response() for item in self.items],
            "processed_at": self.processed_at.isoformat(),
        }


class BatchCoordinator:
    """Enrich companies one after another.

    Every record that reaches the orchestrator is followed by a fixed
    ``delay_seconds`` pause to respect external rate limits. Records without
    a company name become error entries without stopping the batch.
    """

    def __init__(
        self,
        orchestrator: EnrichmentOrchestrator,
        delay_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.orchestrator = orchestrator
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def enrich_batch(self, records: Any) -> BatchResult:
        """Enrich a list of raw company records."""
        if not isinstance(records, list):
            raise ValueError("companies must be a list of company records")

        items: list[BatchItem] = []
        total = len(records)

        for index, record in enumerate(records):
            if not isinstance(record, dict):
                items.append(BatchItem(
                    index=index,
                    success=False,
                    error="company record must be an object",
                ))
                continue

            try:
                company = CompanyInput.model_validate(record)
            except ValidationError as e:
                error = describe_validation_error(e)
                logger.warning(f"Skipping record {index + 1}/{total}: {error}")
                items.append(BatchItem(index=index, success=False, error=error, input=record))
                continue

            logger.info(f"Enriching {index + 1}/{total}: {company.name}")
            profile = await self.orchestrator.enrich(company)
            items.append(BatchItem(
                index=index,
                success=profile.enrichment_error is None,
                profile=profile,
                error=profile.enrichment_error,
                input=record,
            ))

            await self._sleep(self.delay_seconds)

        result = BatchResult(items=items)
        logger.info(
            f"Batch finished: {result.successful} successful, {result.failed} failed"
        )
        return result
