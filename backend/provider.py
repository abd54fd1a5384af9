"""
Graph data provider -- focus company + related-company records.

Loads a company's relationships from the database, resolves the "other side"
of each edge, and converts the result into validated layout input
(cityscape.Entity / cityscape.RelationInput). Rows are validated through the
pydantic GraphEntity / GraphRelation schemas here, so the layout engine only
ever sees typed values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from backend.models import Company, Relationship
from backend.queries import get_companies_by_ids, get_company, relationships_for_company
from backend.schemas import (
    CompanyOut,
    GraphEntity,
    GraphRelation,
    LayoutRequest,
    RelatedCompanyEntry,
)
from cityscape import Entity, RelationInput

logger = logging.getLogger(__name__)


@dataclass
class CompanyGraph:
    focus: Company
    relationships: list[Relationship] = field(default_factory=list)
    others: dict[int, Company] = field(default_factory=dict)

    def other_of(self, rel: Relationship) -> Optional[Company]:
        return self.others.get(rel.other_id(self.focus.company_id))


async def load_company_graph(session: AsyncSession, company_id: int) -> Optional[CompanyGraph]:
    """None when the focus company does not exist."""
    focus = await get_company(session, company_id)
    if focus is None:
        return None

    rels = await relationships_for_company(session, company_id)
    others = await get_companies_by_ids(session, (r.other_id(company_id) for r in rels))
    missing = {r.other_id(company_id) for r in rels} - set(others)
    if missing:
        logger.warning(
            "Company %s has relationships to missing companies: %s", company_id, sorted(missing)
        )
    return CompanyGraph(focus=focus, relationships=rels, others=others)


def graph_entries(graph: CompanyGraph) -> list[RelatedCompanyEntry]:
    """Related-company records as served by GET /api/company/{id}/graph."""
    focus_id = graph.focus.company_id
    entries = []
    for r in graph.relationships:
        other = graph.other_of(r)
        details = CompanyOut.model_validate(other) if other is not None else None
        entries.append(
            RelatedCompanyEntry(
                relationship_id=r.relationship_id,
                company1_id=r.company1_id,
                company2_id=r.company2_id,
                relationship_type=r.relationship_type,
                relationship_status=r.status,
                description=r.description,
                start_date=r.start_date,
                strength=r.strength,
                connected_company_id=r.other_id(focus_id),
                connected_company_details=details,
                direction_from_focus="outgoing" if r.company1_id == focus_id else "incoming",
                relationship_with_focus=r.relationship_type,
                related_company_details=details,
            )
        )
    return entries


def company_entity(company: Company) -> GraphEntity:
    return GraphEntity(
        id=company.company_id,
        name=company.company_name,
        category=company.city_metaphor_style or company.industry,
    )


def graph_to_request(graph: CompanyGraph, seed: Optional[int] = None) -> LayoutRequest:
    relations = []
    for r in graph.relationships:
        other = graph.other_of(r)
        relations.append(
            GraphRelation(
                other=company_entity(other) if other is not None else None,
                category=r.relationship_type,
                strength=r.strength,
            )
        )
    return LayoutRequest(focus=company_entity(graph.focus), relations=relations, seed=seed)


def to_entity(entity: GraphEntity) -> Entity:
    return Entity(id=entity.id, name=entity.name, category=entity.category)


def to_layout_input(req: LayoutRequest) -> tuple[Entity, list[RelationInput]]:
    """Validated request -> engine input."""
    relations = [
        RelationInput(
            other=to_entity(rel.other) if rel.other is not None else None,
            category=rel.category,
            strength=rel.strength,
        )
        for rel in req.relations
    ]
    return to_entity(req.focus), relations
