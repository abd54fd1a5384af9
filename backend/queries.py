"""Read queries shared by the routes and the graph provider."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from backend.models import (
    Company,
    CompanyNewsEventLink,
    NewsEvent,
    Product,
    Relationship,
)


async def get_company(session: AsyncSession, company_id: int) -> Optional[Company]:
    return await session.get(Company, company_id)


async def get_companies_by_ids(session: AsyncSession, ids) -> dict[int, Company]:
    ids = set(ids)
    if not ids:
        return {}
    rows = (await session.execute(select(Company).where(Company.company_id.in_(ids)))).scalars().all()
    return {c.company_id: c for c in rows}


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

def products_stmt():
    """Products joined with their company's name."""
    return select(Product, Company.company_name).join(
        Company, Product.company_id == Company.company_id
    )


def product_row_to_dict(product: Product, company_name: str) -> dict:
    return {
        "product_id": product.product_id,
        "company_id": product.company_id,
        "company_name": company_name,
        "product_name": product.product_name,
        "description": product.description,
        "category": product.category,
        "launch_date": product.launch_date,
        "product_url": product.product_url,
        "status": product.status,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

async def relationships_for_company(session: AsyncSession, company_id: int) -> list[Relationship]:
    """Raw relationship rows where the company is on either side, in id order."""
    stmt = (
        select(Relationship)
        .where(or_(Relationship.company1_id == company_id, Relationship.company2_id == company_id))
        .order_by(Relationship.relationship_id)
    )
    return list((await session.execute(stmt)).scalars().all())


async def relationships_with_names(session: AsyncSession, company_id: int) -> list[dict]:
    c1 = aliased(Company)
    c2 = aliased(Company)
    stmt = (
        select(Relationship, c1.company_name, c2.company_name)
        .join(c1, Relationship.company1_id == c1.company_id)
        .join(c2, Relationship.company2_id == c2.company_id)
        .where(or_(Relationship.company1_id == company_id, Relationship.company2_id == company_id))
        .order_by(Relationship.relationship_id)
    )
    rows = (await session.execute(stmt)).all()
    return [
        {
            **relationship_to_dict(rel),
            "company1_name": name1,
            "company2_name": name2,
        }
        for rel, name1, name2 in rows
    ]


def relationship_to_dict(rel: Relationship) -> dict:
    return {
        "relationship_id": rel.relationship_id,
        "company1_id": rel.company1_id,
        "company2_id": rel.company2_id,
        "relationship_type": rel.relationship_type,
        "start_date": rel.start_date,
        "end_date": rel.end_date,
        "status": rel.status,
        "description": rel.description,
        "strength": rel.strength,
    }


async def related_companies_by_type(
    session: AsyncSession,
    subject: Company,
    relationship_type: str,
) -> list[dict]:
    """
    Companies on the other side of ``relationship_type`` edges of ``subject``.

    For 'Investor' this yields investees when the subject is company1 and
    investors when it is company2.
    """
    rels = [
        r for r in await relationships_for_company(session, subject.company_id)
        if r.relationship_type == relationship_type
    ]
    others = await get_companies_by_ids(session, (r.other_id(subject.company_id) for r in rels))

    results = []
    for r in rels:
        other = others.get(r.other_id(subject.company_id))
        if other is None or other.company_id == subject.company_id:
            continue
        results.append({
            "related_company_id": other.company_id,
            "related_company_name": other.company_name,
            "related_company_industry": other.industry,
            "subject_company_name": subject.company_name,
            "relationship_id": r.relationship_id,
            "relationship_type": r.relationship_type,
            "start_date": r.start_date,
            "relationship_status": r.status,
            "relationship_description": r.description,
            "strength": r.strength,
        })
    return results


# ---------------------------------------------------------------------------
# News & events
# ---------------------------------------------------------------------------

async def news_events_for_company(session: AsyncSession, company_id: int) -> list[dict]:
    stmt = (
        select(NewsEvent, CompanyNewsEventLink.role_in_event)
        .join(CompanyNewsEventLink, NewsEvent.news_event_id == CompanyNewsEventLink.news_event_id)
        .where(CompanyNewsEventLink.company_id == company_id)
        .order_by(NewsEvent.publication_date.desc())
    )
    rows = (await session.execute(stmt)).all()
    return [{**news_event_to_dict(ev), "role_in_event": role} for ev, role in rows]


async def companies_for_news_event(session: AsyncSession, news_event_id: int) -> list[tuple[Company, Optional[str]]]:
    stmt = (
        select(Company, CompanyNewsEventLink.role_in_event)
        .join(CompanyNewsEventLink, Company.company_id == CompanyNewsEventLink.company_id)
        .where(CompanyNewsEventLink.news_event_id == news_event_id)
        .order_by(Company.company_name)
    )
    return [(c, role) for c, role in (await session.execute(stmt)).all()]


def news_event_to_dict(ev: NewsEvent) -> dict:
    return {
        "news_event_id": ev.news_event_id,
        "title": ev.title,
        "url": ev.url,
        "source_name": ev.source_name,
        "publication_date": ev.publication_date,
        "summary": ev.summary,
        "sentiment": ev.sentiment,
    }
