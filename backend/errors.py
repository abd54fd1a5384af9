"""Shared write helpers: allow-listed partial updates and constraint-error mapping."""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class NoUpdatableFields(ValueError):
    pass


def apply_update(obj, data: dict, allowed_fields: Iterable[str]) -> list[str]:
    """
    Copy the allowed keys of ``data`` onto ``obj``.

    Only keys actually present in ``data`` are touched (an explicit ``None``
    clears the column). Returns the list of updated field names.
    """
    updated = []
    for key in allowed_fields:
        if key in data:
            setattr(obj, key, data[key])
            updated.append(key)
    if not updated:
        raise NoUpdatableFields("No valid fields provided for update.")
    return updated


def integrity_status(exc: IntegrityError) -> int:
    """409 for duplicates, 400 for broken references / checks."""
    msg = str(exc.orig).lower()
    if "unique" in msg or "duplicate key" in msg:
        return 409
    return 400


def raise_for_integrity(exc: IntegrityError, messages: dict[int, str]) -> None:
    status = integrity_status(exc)
    logger.info("Constraint violation (%s): %s", status, exc.orig)
    raise HTTPException(status_code=status, detail=messages.get(status, "Constraint violation"))
