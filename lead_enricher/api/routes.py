"""API routes for lead enrichment."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, Request
from pydantic import BaseModel, ValidationError

from lead_enricher.models import CompanyInput, LeadsSummary
from lead_enricher.pipeline import describe_validation_error
from lead_enricher.services import EnrichmentServices

logger = logging.getLogger(__name__)

router = APIRouter()


class BatchRequest(BaseModel):
    """Request body for batch enrichment."""
    companies: list[Any]


def get_services(request: Request) -> EnrichmentServices:
    return request.app.state.services


@router.post("/enrich-batch")
async def enrich_batch(request: Request, body: BatchRequest):
    """Enrich a list of companies sequentially."""
    services = get_services(request)
    logger.info(f"Batch request with {len(body.companies)} companies")

    try:
        result = await services.batch.enrich_batch(body.companies)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return result.to_response()


@router.post("/enrich")
async def enrich_company(request: Request, record: dict[str, Any] = Body(...)):
    """Enrich a single company record."""
    services = get_services(request)

    try:
        company = CompanyInput.model_validate(record)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=describe_validation_error(e))

    profile = await services.orchestrator.enrich(company)
    return {
        "success": profile.enrichment_error is None,
        **profile.model_dump(mode="json"),
    }


@router.get("/leads/stats", response_model=LeadsSummary)
async def lead_stats(request: Request):
    """Aggregate statistics over stored leads."""
    services = get_services(request)
    if services.repository is None:
        raise HTTPException(status_code=503, detail="Persistence is disabled")
    return await services.repository.summary()


@router.get("/leads/lookup")
async def lookup_lead(
    request: Request,
    company_name: str,
    phone: Optional[str] = None,
):
    """Fetch the stored profile of a lead."""
    services = get_services(request)
    if services.repository is None:
        raise HTTPException(status_code=503, detail="Persistence is disabled")

    profile = await services.repository.get(company_name, phone)
    if profile is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    return profile.model_dump(mode="json")
