"""Pydantic schemas for FastAPI request / response models."""

from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

RelationshipType = Literal["Partner", "Vendor", "Customer", "Competitor", "Investor"]


# ---------------------------------------------------------------------------
# Company
# ---------------------------------------------------------------------------

class CompanyFields(BaseModel):
    industry: Optional[str] = None
    website: Optional[str] = None
    headquarters_location: Optional[str] = None
    description: Optional[str] = None
    founded_date: Optional[dt.date] = None
    employee_count: Optional[int] = None
    is_public: Optional[bool] = None
    stock_ticker: Optional[str] = None
    business_model: Optional[str] = None
    sub_industry: Optional[str] = None
    markets: Optional[str] = None
    mosaic_overall: Optional[int] = None
    commercial_maturity: Optional[str] = None
    country: Optional[str] = None
    total_funding_m: Optional[float] = None
    latest_funding_amount_m: Optional[float] = None
    latest_funding_round: Optional[str] = None
    latest_funding_date: Optional[dt.date] = None
    company_status_csv: Optional[str] = None
    city_metaphor_style: Optional[str] = None


class CompanyCreate(CompanyFields):
    company_name: str = Field(min_length=1)
    is_public: bool = False


class CompanyUpdate(CompanyFields):
    company_name: Optional[str] = Field(default=None, min_length=1)


class CompanyOut(CompanyFields):
    company_id: int
    company_name: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class CompanyNameId(BaseModel):
    id: int
    name: str


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

class ProductCreate(BaseModel):
    company_id: int
    product_name: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    launch_date: Optional[dt.date] = None
    product_url: Optional[str] = None
    status: Optional[str] = None


class ProductUpdate(BaseModel):
    company_id: Optional[int] = None
    product_name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    launch_date: Optional[dt.date] = None
    product_url: Optional[str] = None
    status: Optional[str] = None


class ProductOut(ProductCreate):
    product_id: int
    company_name: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


# ---------------------------------------------------------------------------
# Relationship
# ---------------------------------------------------------------------------

class RelationshipCreate(BaseModel):
    company1_id: int
    company2_id: int
    relationship_type: RelationshipType
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    status: Optional[str] = None
    description: Optional[str] = None
    strength: Optional[float] = Field(default=None, ge=0, le=1)

    @model_validator(mode="after")
    def _distinct_companies(self):
        if self.company1_id == self.company2_id:
            raise ValueError("company1_id and company2_id cannot be the same")
        return self


class RelationshipUpdate(BaseModel):
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    status: Optional[str] = None
    description: Optional[str] = None
    strength: Optional[float] = Field(default=None, ge=0, le=1)


class RelationshipOut(BaseModel):
    relationship_id: int
    company1_id: int
    company2_id: int
    relationship_type: str
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    status: Optional[str] = None
    description: Optional[str] = None
    strength: Optional[float] = None
    company1_name: Optional[str] = None
    company2_name: Optional[str] = None

    class Config:
        from_attributes = True


class RelatedCompany(BaseModel):
    """The "other side" of a relationship of one type, seen from a subject company."""
    related_company_id: int
    related_company_name: str
    related_company_industry: Optional[str] = None
    subject_company_name: str
    relationship_id: int
    relationship_type: str
    start_date: Optional[dt.date] = None
    relationship_status: Optional[str] = None
    relationship_description: Optional[str] = None
    strength: Optional[float] = None


# ---------------------------------------------------------------------------
# News & events
# ---------------------------------------------------------------------------

class NewsEventCreate(BaseModel):
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)
    source_name: Optional[str] = None
    publication_date: Optional[dt.date] = None
    summary: Optional[str] = None
    sentiment: Optional[str] = None


class NewsEventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    url: Optional[str] = None
    source_name: Optional[str] = None
    publication_date: Optional[dt.date] = None
    summary: Optional[str] = None
    sentiment: Optional[str] = None


class NewsEventOut(BaseModel):
    news_event_id: int
    title: str
    url: Optional[str] = None
    source_name: Optional[str] = None
    publication_date: Optional[dt.date] = None
    summary: Optional[str] = None
    sentiment: Optional[str] = None
    role_in_event: Optional[str] = None  # set when listed for a company

    class Config:
        from_attributes = True


class CompanyInEvent(CompanyOut):
    role_in_event: Optional[str] = None


class CompanyNewsLinkCreate(BaseModel):
    company_id: int
    news_event_id: int
    role_in_event: Optional[str] = None


class CompanyNewsLinkUpdate(BaseModel):
    role_in_event: Optional[str] = None


# ---------------------------------------------------------------------------
# Graph (focus company + its neighbourhood)
# ---------------------------------------------------------------------------

class RelatedCompanyEntry(BaseModel):
    relationship_id: int
    company1_id: int
    company2_id: int
    relationship_type: str
    relationship_status: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[dt.date] = None
    strength: Optional[float] = None
    connected_company_id: int
    connected_company_details: Optional[CompanyOut] = None
    direction_from_focus: Literal["outgoing", "incoming"]
    relationship_with_focus: str
    related_company_details: Optional[CompanyOut] = None


class GraphResponse(BaseModel):
    focus_company: CompanyOut
    related_companies: list[RelatedCompanyEntry] = []


# ---------------------------------------------------------------------------
# Layout input contract ({focus, relations}) -- validated before the engine
# ---------------------------------------------------------------------------

class GraphEntity(BaseModel):
    id: int
    name: str = ""
    category: Optional[str] = None


class GraphRelation(BaseModel):
    other: Optional[GraphEntity] = None
    category: Optional[str] = None
    strength: Optional[float] = None

    @field_validator("strength", mode="before")
    @classmethod
    def _finite_number_or_none(cls, value):
        # only real finite numbers count; strings, bools, NaN and inf are "absent"
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.info("Dropping non-numeric strength %r", value)
            return None
        try:
            finite = math.isfinite(value)
        except OverflowError:
            finite = False
        if not finite:
            logger.info("Dropping non-finite strength %r", value)
            return None
        return value


class LayoutRequest(BaseModel):
    focus: GraphEntity
    relations: list[GraphRelation] = Field(default_factory=list)
    seed: Optional[int] = None
