"""
SQLAlchemy ORM models -- relationship-graph schema.

Tables
------
companies                 -- core company data (also imported from CSV)
products                  -- products offered by a company
relationships             -- typed, optionally weighted company <-> company links
news_events               -- news items / events
company_news_events_link  -- which companies appear in which news event, and how
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base

RELATIONSHIP_TYPES = ("Partner", "Vendor", "Customer", "Competitor", "Investor")

# Fields a PUT may touch, per table
COMPANY_UPDATABLE_FIELDS = (
    "company_name",
    "industry",
    "website",
    "headquarters_location",
    "description",
    "founded_date",
    "employee_count",
    "is_public",
    "stock_ticker",
    "business_model",
    "sub_industry",
    "markets",
    "mosaic_overall",
    "commercial_maturity",
    "country",
    "total_funding_m",
    "latest_funding_amount_m",
    "latest_funding_round",
    "latest_funding_date",
    "company_status_csv",
    "city_metaphor_style",
)
PRODUCT_UPDATABLE_FIELDS = (
    "product_name",
    "description",
    "category",
    "launch_date",
    "product_url",
    "status",
    "company_id",
)
# type and endpoints are part of the identity: delete and re-create instead
RELATIONSHIP_UPDATABLE_FIELDS = ("start_date", "end_date", "status", "description", "strength")
NEWS_EVENT_UPDATABLE_FIELDS = ("title", "url", "source_name", "publication_date", "summary", "sentiment")
COMPANY_NEWS_EVENT_LINK_UPDATABLE_FIELDS = ("role_in_event",)


# ---------------------------------------------------------------------------
# Companies & products
# ---------------------------------------------------------------------------

class Company(Base):
    __tablename__ = "companies"

    company_id = Column(Integer, primary_key=True, autoincrement=True)
    company_name = Column(String(512), nullable=False, unique=True, index=True)
    industry = Column(String(256), nullable=True)
    website = Column(String(512), nullable=True)
    headquarters_location = Column(String(512), nullable=True)
    description = Column(Text, nullable=True)
    founded_date = Column(Date, nullable=True)
    employee_count = Column(Integer, nullable=True)
    is_public = Column(Boolean, default=False)
    stock_ticker = Column(String(32), nullable=True)

    business_model = Column(String(256), nullable=True)
    sub_industry = Column(String(256), nullable=True)
    markets = Column(Text, nullable=True)  # free text or JSON list
    mosaic_overall = Column(Integer, nullable=True)
    commercial_maturity = Column(String(128), nullable=True)
    country = Column(String(128), nullable=True)
    total_funding_m = Column(Float, nullable=True)
    latest_funding_amount_m = Column(Float, nullable=True)
    latest_funding_round = Column(String(128), nullable=True)
    latest_funding_date = Column(Date, nullable=True)
    company_status_csv = Column(String(128), nullable=True)

    # Style hint for the city renderer (e.g. "alpha-tower")
    city_metaphor_style = Column(String(128), nullable=True)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    products = relationship("Product", back_populates="company", passive_deletes=True)


class Product(Base):
    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(
        Integer, ForeignKey("companies.company_id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_name = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(256), nullable=True, index=True)
    launch_date = Column(Date, nullable=True)
    product_url = Column(String(1024), nullable=True)
    status = Column(String(64), nullable=True)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="products")


# ---------------------------------------------------------------------------
# Relationships (the graph edges)
# ---------------------------------------------------------------------------

class Relationship(Base):
    __tablename__ = "relationships"

    relationship_id = Column(Integer, primary_key=True, autoincrement=True)
    company1_id = Column(
        Integer, ForeignKey("companies.company_id", ondelete="CASCADE"), nullable=False, index=True
    )
    company2_id = Column(
        Integer, ForeignKey("companies.company_id", ondelete="CASCADE"), nullable=False, index=True
    )
    relationship_type = Column(String(32), nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(String(64), nullable=True)
    description = Column(Text, nullable=True)
    strength = Column(Float, nullable=True)  # 0-1, higher = closer in the city view

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    company1 = relationship("Company", foreign_keys=[company1_id])
    company2 = relationship("Company", foreign_keys=[company2_id])

    __table_args__ = (
        CheckConstraint(
            "relationship_type IN ('Partner', 'Vendor', 'Customer', 'Competitor', 'Investor')",
            name="ck_relationship_type",
        ),
        CheckConstraint("company1_id != company2_id", name="ck_relationship_distinct"),
        CheckConstraint(
            "strength IS NULL OR (strength >= 0 AND strength <= 1)",
            name="ck_relationship_strength",
        ),
        UniqueConstraint(
            "company1_id", "company2_id", "relationship_type", name="uq_relationship_pair_type"
        ),
    )

    def other_id(self, company_id: int) -> int:
        """The company on the far side of this edge, seen from ``company_id``."""
        return self.company2_id if self.company1_id == company_id else self.company1_id


# ---------------------------------------------------------------------------
# News & events
# ---------------------------------------------------------------------------

class NewsEvent(Base):
    __tablename__ = "news_events"

    news_event_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    url = Column(String(2048), unique=True, nullable=True)
    source_name = Column(String(256), nullable=True)
    publication_date = Column(Date, nullable=True, index=True)
    summary = Column(Text, nullable=True)
    sentiment = Column(String(32), nullable=True)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())


class CompanyNewsEventLink(Base):
    __tablename__ = "company_news_events_link"

    company_news_event_id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(
        Integer, ForeignKey("companies.company_id", ondelete="CASCADE"), nullable=False, index=True
    )
    news_event_id = Column(
        Integer, ForeignKey("news_events.news_event_id", ondelete="CASCADE"), nullable=False, index=True
    )
    role_in_event = Column(String(128), nullable=True)  # Primary Subject, Mentioned, Investor, ...
    created_at = Column(DateTime, default=func.now())

    __table_args__ = (
        UniqueConstraint(
            "company_id", "news_event_id", "role_in_event", name="uq_company_news_role"
        ),
    )
