"""Company input and enrichment profile models."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_LOCATION = "México"
GENERAL_INDUSTRY = "general"


class EmailSource(str, Enum):
    """Where an email candidate came from."""

    PATTERN_GENERATION = "pattern_generation"
    DISCOVERED = "discovered"


class CompanyInput(BaseModel):
    """A raw business record submitted for enrichment."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(
        validation_alias=AliasChoices(
            "company_name", "name", "nombre", "empresa", "business_name"
        ),
        description="Company name",
    )
    phone: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("phone", "telefono", "teléfono", "phone_number"),
    )
    location: str = Field(
        default=DEFAULT_LOCATION,
        validation_alias=AliasChoices(
            "location", "ubicacion", "ubicación", "city", "ciudad"
        ),
    )
    industry: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("industry", "industria", "giro", "category"),
    )

    @field_validator("name", mode="before")
    @classmethod
    def _require_name(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            raise ValueError("company_name is required")
        return str(value).strip()

    @field_validator("phone", "industry", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("location", mode="before")
    @classmethod
    def _default_location(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_LOCATION
        return str(value).strip()


class WebResult(BaseModel):
    """A single web page returned by a discovery provider."""

    title: str = ""
    url: str
    snippet: str = ""


class EmailCandidate(BaseModel):
    """A plausible corporate email address."""

    address: str = Field(description="Candidate email address")
    confidence: float = Field(ge=0.0, le=1.0)
    source: EmailSource = EmailSource.PATTERN_GENERATION
    priority: int = Field(description="Rank of the local-part, lower is better")
    validated: bool = False


class FounderCandidate(BaseModel):
    """A person who plausibly founded or owns the company."""

    name: str
    position: str
    confidence: float = Field(ge=0.0, le=1.0)
    source: str = "web_search"


class EnrichmentProfile(BaseModel):
    """Structured result of enriching one company.

    Profiles are frozen: the scorer hands back a copy with its computed
    fields instead of mutating the draft.
    """

    model_config = ConfigDict(frozen=True)

    company_name: str
    phone: Optional[str] = None
    location: str = DEFAULT_LOCATION
    industry: Optional[str] = None

    emails: list[EmailCandidate] = Field(default_factory=list)
    founders: list[FounderCandidate] = Field(default_factory=list)
    website: Optional[str] = None
    social_media: dict[str, str] = Field(default_factory=dict)

    lead_score: int = Field(default=0, ge=0, le=100)
    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)
    sources: list[str] = Field(
        default_factory=list,
        description="Discovery stages that contributed data, in order",
    )

    enriched_at: datetime = Field(default_factory=datetime.utcnow)
    processing_time_ms: int = 0
    enrichment_error: Optional[str] = None


class LeadsSummary(BaseModel):
    """Aggregate statistics over stored leads."""

    total_leads: int = 0
    avg_score: Optional[float] = None
    high_quality_leads: int = 0
    leads_with_emails: int = 0
    leads_with_founders: int = 0
    industries_covered: int = 0
    last_import: Optional[datetime] = None
