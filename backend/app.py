"""
FastAPI application -- company relationship graph API.

Run locally:
    uvicorn backend.app:app --reload --port 3000

Or via start.py (imports CSV data first when configured).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

import config_env
from backend.database import init_db
from backend.routes import companies, graph, news, products, relationships

logging.basicConfig(
    level=getattr(logging, config_env.LOG_LEVEL, logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail fast on bad LAYOUT_* settings before serving anything
    layout_config = graph.get_layout_config()
    logger.info(
        "Layout config: distance %.1f-%.1f, cluster spread %.1f",
        layout_config.min_distance, layout_config.max_distance, layout_config.cluster_spread_radius,
    )

    await init_db()

    yield


app = FastAPI(
    title="Company City API",
    version="1.0.0",
    description="Companies, products, relationships and news -- with a city-district layout of the graph",
    lifespan=lifespan,
)

app.include_router(companies.router)
app.include_router(products.router)
app.include_router(relationships.router)
app.include_router(news.router)
app.include_router(graph.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
