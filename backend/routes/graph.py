"""
Graph endpoints -- focus company neighbourhood, district layout and scene.

    GET  /api/company/{id}/graph    -- raw related-company records
    GET  /api/company/{id}/layout   -- cityscape.SceneLayout as JSON
    GET  /api/company/{id}/scene    -- renderable objects for the layout
    POST /api/layout                -- layout for a caller-supplied graph
"""

from __future__ import annotations

import logging
import random
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from backend.database import get_session
from backend.provider import (
    CompanyGraph,
    graph_entries,
    graph_to_request,
    load_company_graph,
    to_layout_input,
)
from backend.schemas import CompanyOut, GraphResponse, LayoutRequest
from cityscape import LayoutConfig, SceneState, compute_layout, rebuild_scene

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["graph"])


@lru_cache(maxsize=1)
def get_layout_config() -> LayoutConfig:
    """Layout parameters from LAYOUT_* env vars; raises LayoutConfigError if invalid."""
    return LayoutConfig.from_env()


async def _graph_or_404(session: AsyncSession, company_id: int) -> CompanyGraph:
    graph = await load_company_graph(session, company_id)
    if graph is None:
        raise HTTPException(status_code=404, detail="Company not found")
    return graph


@router.get("/company/{company_id}/graph", response_model=GraphResponse)
async def company_graph(company_id: int, session: AsyncSession = Depends(get_session)):
    graph = await _graph_or_404(session, company_id)
    return GraphResponse(
        focus_company=CompanyOut.model_validate(graph.focus),
        related_companies=graph_entries(graph),
    )


@router.get("/company/{company_id}/layout")
async def company_layout(
    company_id: int,
    seed: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
    config: LayoutConfig = Depends(get_layout_config),
):
    graph = await _graph_or_404(session, company_id)
    focus, relations = to_layout_input(graph_to_request(graph, seed=seed))
    return compute_layout(focus, relations, config=config, seed=seed).to_dict()


@router.get("/company/{company_id}/scene")
async def company_scene(
    company_id: int,
    seed: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
    config: LayoutConfig = Depends(get_layout_config),
):
    """Layout + rebuilt scene; one random source drives both so a seed fixes everything."""
    graph = await _graph_or_404(session, company_id)
    focus, relations = to_layout_input(graph_to_request(graph, seed=seed))
    rng = random.Random(seed)
    layout = compute_layout(focus, relations, config=config, rng=rng)
    scene = rebuild_scene(SceneState(), layout, rng=rng, config=config)
    return {"layout": layout.to_dict(), "scene": scene.to_dict()}


@router.post("/layout")
async def layout_from_payload(
    req: LayoutRequest,
    config: LayoutConfig = Depends(get_layout_config),
):
    focus, relations = to_layout_input(req)
    return compute_layout(focus, relations, config=config, seed=req.seed).to_dict()
