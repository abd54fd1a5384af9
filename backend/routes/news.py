"""News/event endpoints and company <-> news links."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.database import get_session
from backend.errors import NoUpdatableFields, apply_update, raise_for_integrity
from backend.models import (
    COMPANY_NEWS_EVENT_LINK_UPDATABLE_FIELDS,
    NEWS_EVENT_UPDATABLE_FIELDS,
    CompanyNewsEventLink,
    NewsEvent,
)
from backend.queries import companies_for_news_event, news_event_to_dict
from backend.schemas import (
    CompanyInEvent,
    CompanyNewsLinkCreate,
    CompanyNewsLinkUpdate,
    CompanyOut,
    NewsEventCreate,
    NewsEventOut,
    NewsEventUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["news"])


# ---------------------------------------------------------------------------
# News events
# ---------------------------------------------------------------------------

@router.get("/news_events", response_model=list[NewsEventOut])
async def list_news_events(
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    """Newest first; ``limit``/``offset`` page through the list."""
    stmt = select(NewsEvent).order_by(
        NewsEvent.publication_date.desc(), NewsEvent.news_event_id.desc()
    )
    if limit is not None:
        stmt = stmt.limit(limit).offset(offset)
    return [news_event_to_dict(ev) for ev in (await session.execute(stmt)).scalars().all()]


@router.post("/news_events", status_code=201)
async def add_news_event(req: NewsEventCreate, session: AsyncSession = Depends(get_session)):
    ev = NewsEvent(**req.model_dump())
    session.add(ev)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, {409: "A news/event with this URL already exists."})

    logger.info("Added news event %s: %s", ev.news_event_id, ev.title)
    return {"message": "News/Event added successfully", "newsEventId": ev.news_event_id}


@router.get("/news_events/{news_event_id}", response_model=NewsEventOut)
async def get_news_event(news_event_id: int, session: AsyncSession = Depends(get_session)):
    ev = await session.get(NewsEvent, news_event_id)
    if ev is None:
        raise HTTPException(status_code=404, detail="News/Event not found")
    return news_event_to_dict(ev)


@router.put("/news_events/{news_event_id}")
async def update_news_event(
    news_event_id: int,
    req: NewsEventUpdate,
    session: AsyncSession = Depends(get_session),
):
    ev = await session.get(NewsEvent, news_event_id)
    if ev is None:
        raise HTTPException(status_code=404, detail="News/Event not found")
    try:
        updated = apply_update(ev, req.model_dump(exclude_unset=True), NEWS_EVENT_UPDATABLE_FIELDS)
    except NoUpdatableFields as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, {409: "A news/event with this URL already exists."})

    return {"message": "News/Event updated successfully", "changes": len(updated)}


@router.get("/news_events/{news_event_id}/companies", response_model=list[CompanyInEvent])
async def news_event_companies(news_event_id: int, session: AsyncSession = Depends(get_session)):
    if await session.get(NewsEvent, news_event_id) is None:
        raise HTTPException(status_code=404, detail="News/Event not found")
    rows = await companies_for_news_event(session, news_event_id)
    return [
        CompanyInEvent(**CompanyOut.model_validate(c).model_dump(), role_in_event=role)
        for c, role in rows
    ]


# ---------------------------------------------------------------------------
# Company <-> news links
# ---------------------------------------------------------------------------

@router.post("/company_news_links", status_code=201)
async def link_company_to_news_event(
    req: CompanyNewsLinkCreate,
    session: AsyncSession = Depends(get_session),
):
    link = CompanyNewsEventLink(**req.model_dump())
    session.add(link)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, {
            409: "This company is already linked to this news/event with the same role.",
            400: "Invalid Company ID or News/Event ID provided.",
        })

    return {"message": "Company linked to News/Event successfully", "linkId": link.company_news_event_id}


@router.put("/company_news_links/{link_id}")
async def update_company_news_link(
    link_id: int,
    req: CompanyNewsLinkUpdate,
    session: AsyncSession = Depends(get_session),
):
    link = await session.get(CompanyNewsEventLink, link_id)
    if link is None:
        raise HTTPException(status_code=404, detail="Link not found")
    try:
        updated = apply_update(
            link, req.model_dump(exclude_unset=True), COMPANY_NEWS_EVENT_LINK_UPDATABLE_FIELDS
        )
    except NoUpdatableFields as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, {409: "This company is already linked to this news/event with the same role."})

    return {"message": "Link updated successfully", "changes": len(updated)}
