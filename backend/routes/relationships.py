"""Relationship endpoints -- the typed edges of the company graph."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.database import get_session
from backend.errors import NoUpdatableFields, apply_update, raise_for_integrity
from backend.models import RELATIONSHIP_UPDATABLE_FIELDS, Relationship
from backend.queries import relationship_to_dict
from backend.schemas import RelationshipCreate, RelationshipOut, RelationshipUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/relationships", tags=["relationships"])


@router.post("", status_code=201)
async def add_relationship(req: RelationshipCreate, session: AsyncSession = Depends(get_session)):
    rel = Relationship(**req.model_dump())
    session.add(rel)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, {
            409: "This relationship already exists or company IDs are invalid.",
            400: "Invalid company ID(s) provided.",
        })

    logger.info(
        "Added %s relationship %s: %s -> %s",
        rel.relationship_type, rel.relationship_id, rel.company1_id, rel.company2_id,
    )
    return {"message": "Relationship added successfully", "relationshipId": rel.relationship_id}


@router.get("/{relationship_id}", response_model=RelationshipOut)
async def get_relationship(relationship_id: int, session: AsyncSession = Depends(get_session)):
    rel = await session.get(Relationship, relationship_id)
    if rel is None:
        raise HTTPException(status_code=404, detail="Relationship not found")
    return relationship_to_dict(rel)


@router.put("/{relationship_id}")
async def update_relationship(
    relationship_id: int,
    req: RelationshipUpdate,
    session: AsyncSession = Depends(get_session),
):
    rel = await session.get(Relationship, relationship_id)
    if rel is None:
        raise HTTPException(status_code=404, detail="Relationship not found")
    try:
        updated = apply_update(rel, req.model_dump(exclude_unset=True), RELATIONSHIP_UPDATABLE_FIELDS)
    except NoUpdatableFields as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, {400: "Invalid relationship data."})

    return {"message": "Relationship updated successfully", "changes": len(updated)}
