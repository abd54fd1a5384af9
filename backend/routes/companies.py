"""Company endpoints -- CRUD plus per-company products, relationships and news."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.database import get_session
from backend.errors import NoUpdatableFields, apply_update, raise_for_integrity
from backend.models import COMPANY_UPDATABLE_FIELDS, Company, Product
from backend.queries import (
    get_company,
    news_events_for_company,
    product_row_to_dict,
    products_stmt,
    related_companies_by_type,
    relationships_with_names,
)
from backend.schemas import (
    CompanyCreate,
    CompanyNameId,
    CompanyOut,
    CompanyUpdate,
    NewsEventOut,
    ProductOut,
    RelatedCompany,
    RelationshipOut,
    RelationshipType,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["companies"])


async def _company_or_404(session: AsyncSession, company_id: int) -> Company:
    company = await get_company(session, company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.get("/company/getCompanyNamesAndIds", response_model=list[CompanyNameId])
async def company_names_and_ids(session: AsyncSession = Depends(get_session)):
    """Lightweight list for pickers: only ids and names."""
    rows = (
        await session.execute(
            select(Company.company_id, Company.company_name).order_by(Company.company_name)
        )
    ).all()
    return [CompanyNameId(id=cid, name=name) for cid, name in rows]


@router.get("/companies", response_model=list[CompanyOut])
async def list_companies(session: AsyncSession = Depends(get_session)):
    return (await session.execute(select(Company).order_by(Company.company_name))).scalars().all()


@router.post("/companies", status_code=201)
async def add_company(req: CompanyCreate, session: AsyncSession = Depends(get_session)):
    company = Company(**req.model_dump())
    session.add(company)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, {409: "Company name already exists.", 400: "Invalid company data."})

    logger.info("Added company %s (%s)", company.company_id, company.company_name)
    return {"message": "Company added successfully", "companyId": company.company_id}


@router.get("/companies/{company_id}", response_model=CompanyOut)
async def get_company_by_id(company_id: int, session: AsyncSession = Depends(get_session)):
    return await _company_or_404(session, company_id)


@router.put("/companies/{company_id}")
async def update_company(
    company_id: int,
    req: CompanyUpdate,
    session: AsyncSession = Depends(get_session),
):
    company = await _company_or_404(session, company_id)
    try:
        updated = apply_update(company, req.model_dump(exclude_unset=True), COMPANY_UPDATABLE_FIELDS)
    except NoUpdatableFields as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, {409: "Company name already exists.", 400: "Invalid company data."})

    return {"message": "Company updated successfully", "changes": len(updated)}


# ---------------------------------------------------------------------------
# Per-company views
# ---------------------------------------------------------------------------

@router.get("/companies/{company_id}/products", response_model=list[ProductOut])
async def company_products(company_id: int, session: AsyncSession = Depends(get_session)):
    await _company_or_404(session, company_id)
    stmt = products_stmt().where(Product.company_id == company_id).order_by(Product.product_name)
    return [product_row_to_dict(p, name) for p, name in (await session.execute(stmt)).all()]


@router.get("/companies/{company_id}/relationships", response_model=list[RelationshipOut])
async def company_relationships(company_id: int, session: AsyncSession = Depends(get_session)):
    await _company_or_404(session, company_id)
    return await relationships_with_names(session, company_id)


@router.get("/companies/{company_id}/related", response_model=list[RelatedCompany])
async def company_related_by_type(
    company_id: int,
    type: RelationshipType = Query(..., description="Relationship type"),
    session: AsyncSession = Depends(get_session),
):
    subject = await _company_or_404(session, company_id)
    return await related_companies_by_type(session, subject, type)


@router.get("/companies/{company_id}/news_events", response_model=list[NewsEventOut])
async def company_news_events(company_id: int, session: AsyncSession = Depends(get_session)):
    await _company_or_404(session, company_id)
    return await news_events_for_company(session, company_id)
