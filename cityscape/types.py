"""
Value types shared by the layout engine and the scene model.

Inputs
------
Entity          -- a company as seen by the layout (id, name, style/category)
RelationInput   -- one relationship record viewed from the focus company

Outputs
-------
Position        -- plain (x, y, z) triple
MemberPlacement -- a related company placed inside its district
District        -- all relations sharing one category, with its placement
SceneLayout     -- focus placement + districts (+ skipped inputs)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional


class Position(NamedTuple):
    x: float
    y: float
    z: float

    def offset(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y, self.z + other.z)


ORIGIN = Position(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Entity:
    id: int
    name: str = ""
    category: Optional[str] = None


@dataclass(frozen=True)
class RelationInput:
    # other may be None for a dangling reference; strength is validated by the engine
    other: Optional[Entity]
    category: Optional[str] = None
    strength: Any = None


@dataclass(frozen=True)
class MemberPlacement:
    entity: Entity
    position: Position  # local to the district center


@dataclass
class District:
    category: str
    distance: float
    angle: float
    average_strength: float
    center: Position
    strengths: list[float] = field(default_factory=list)
    members: list[MemberPlacement] = field(default_factory=list)


@dataclass(frozen=True)
class SkippedRelation:
    index: int
    reason: str


@dataclass
class SceneLayout:
    focus: Entity
    focus_placement: Position = ORIGIN
    districts: list[District] = field(default_factory=list)
    skipped: list[SkippedRelation] = field(default_factory=list)

    def district(self, category: str) -> Optional[District]:
        for d in self.districts:
            if d.category == category:
                return d
        return None

    def to_dict(self) -> dict:
        """JSON-friendly representation (positions as 3-element lists)."""
        return {
            "focus": _entity_dict(self.focus),
            "focus_placement": list(self.focus_placement),
            "districts": [
                {
                    "category": d.category,
                    "distance": d.distance,
                    "angle": d.angle,
                    "average_strength": d.average_strength,
                    "strengths": list(d.strengths),
                    "center": list(d.center),
                    "members": [
                        {"entity": _entity_dict(m.entity), "position": list(m.position)}
                        for m in d.members
                    ],
                }
                for d in self.districts
            ],
            "skipped": [{"index": s.index, "reason": s.reason} for s in self.skipped],
        }


def _entity_dict(entity: Entity) -> dict:
    return {"id": entity.id, "name": entity.name, "category": entity.category}
