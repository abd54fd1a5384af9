"""Product endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.database import get_session
from backend.errors import NoUpdatableFields, apply_update, raise_for_integrity
from backend.models import PRODUCT_UPDATABLE_FIELDS, Product
from backend.queries import product_row_to_dict, products_stmt
from backend.schemas import ProductCreate, ProductOut, ProductUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])

_INTEGRITY_MESSAGES = {400: "Invalid Company ID provided for the product."}


@router.get("", response_model=list[ProductOut])
async def list_products(
    category: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
):
    stmt = products_stmt()
    if category:
        stmt = stmt.where(Product.category == category)
    stmt = stmt.order_by(Product.product_name)
    return [product_row_to_dict(p, name) for p, name in (await session.execute(stmt)).all()]


@router.post("", status_code=201)
async def add_product(req: ProductCreate, session: AsyncSession = Depends(get_session)):
    product = Product(**req.model_dump())
    session.add(product)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, _INTEGRITY_MESSAGES)

    logger.info("Added product %s for company %s", product.product_id, product.company_id)
    return {"message": "Product added successfully", "productId": product.product_id}


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: int, session: AsyncSession = Depends(get_session)):
    row = (await session.execute(products_stmt().where(Product.product_id == product_id))).first()
    if not row:
        raise HTTPException(status_code=404, detail="Product not found")
    product, company_name = row
    return product_row_to_dict(product, company_name)


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    req: ProductUpdate,
    session: AsyncSession = Depends(get_session),
):
    product = await session.get(Product, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    try:
        updated = apply_update(product, req.model_dump(exclude_unset=True), PRODUCT_UPDATABLE_FIELDS)
    except NoUpdatableFields as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise_for_integrity(e, _INTEGRITY_MESSAGES)

    return {"message": "Product updated successfully", "changes": len(updated)}
