"""SQLAlchemy database models and setup."""

import json
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    Text,
    Index,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from lead_enricher.config import settings

Base = declarative_base()


class DBLead(Base):
    """Stored lead with its latest enrichment."""

    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(String(36), unique=True, default=lambda: str(uuid.uuid4()))

    # Basic data
    company_name = Column(String(255), nullable=False)
    phone = Column(String(50))
    location = Column(String(100))
    industry = Column(String(100))

    # Enriched data
    emails = Column(Text, default="[]")  # JSON array
    founders = Column(Text, default="[]")  # JSON array
    website = Column(String(500))
    social_media = Column(Text, default="{}")  # JSON dict
    sources = Column(Text, default="[]")  # JSON array

    # Scoring
    lead_score = Column(Integer, default=0)
    confidence_score = Column(Float, default=0.0)

    # Workflow
    status = Column(String(50), default="new")
    stage = Column(String(50), default="prospecting")
    priority = Column(String(20), default="medium")
    assigned_to = Column(String(100))

    # Enrichment run
    enriched_at = Column(DateTime)
    processing_time_ms = Column(Integer, default=0)
    enrichment_error = Column(Text)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
    last_contact_at = Column(DateTime)
    next_follow_up = Column(DateTime)

    __table_args__ = (
        UniqueConstraint("company_name", "phone", name="uq_leads_company_phone"),
        Index("idx_leads_company_name", "company_name"),
        Index("idx_leads_lead_score", "lead_score"),
        Index("idx_leads_status", "status"),
        Index("idx_leads_created_at", "created_at"),
        Index("idx_leads_industry", "industry"),
    )

    def get_emails(self) -> list[dict]:
        return json.loads(self.emails) if self.emails else []

    def get_founders(self) -> list[dict]:
        return json.loads(self.founders) if self.founders else []

    def get_social_media(self) -> dict[str, str]:
        return json.loads(self.social_media) if self.social_media else {}

    def get_sources(self) -> list[str]:
        return json.loads(self.sources) if self.sources else []


class DBProfileCache(Base):
    """Enrichment profile cache keyed by company and location."""

    __tablename__ = "profile_cache"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(600), unique=True, nullable=False, index=True)
    payload = Column(Text, nullable=False)  # JSON profile
    stored_at = Column(DateTime, default=datetime.utcnow)
    expires_at = Column(DateTime, nullable=False)

    __table_args__ = (Index("idx_profile_cache_expires", "expires_at"),)


# Database initialization
def init_db(db_url: Optional[str] = None) -> sessionmaker:
    """Initialize database and return session maker."""
    url = db_url or settings.database_url
    if url in ("sqlite://", "sqlite:///:memory:"):
        # Share one connection so every session sees the same in-memory tables
        engine = create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
