"""
Renderer-side scene model.

A SceneState is an immutable bag of renderable objects. The renderer owns
one, and replaces it on every focus change:

    state = clear_scene(state)
    state = rebuild_scene(state, layout)

Only geometry and colour hints are produced here; materials, textures and
lighting models belong to whatever draws the scene.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from cityscape.config import LayoutConfig
from cityscape.types import Position, SceneLayout

logger = logging.getLogger(__name__)

# Focus building
FOCUS_WIDTH = 2.0
FOCUS_HEIGHT = 3.5
FOCUS_DEPTH = 2.0
FOCUS_COLOR_ALPHA = 0xCC3333
FOCUS_COLOR_DEFAULT = 0xDAA520
FOCUS_LIGHT_INTENSITY = 0.8
FOCUS_LIGHT_DISTANCE = 15.0

# Member buildings
BUILDING_WIDTH = 1.2
BUILDING_DEPTH = 1.2
BUILDING_MIN_HEIGHT = 1.8
BUILDING_HEIGHT_JITTER = 1.2

ISLAND_MARGIN = 1.0
ISLAND_COLOR = 0x228B22


@dataclass(frozen=True)
class SceneObject:
    kind: str  # focus_building, focus_light, island, building
    position: Position
    size: tuple = ()
    color: Optional[int] = None
    entity_id: Optional[int] = None
    label: str = ""
    district: Optional[str] = None
    extra: dict = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "position": list(self.position),
            "size": list(self.size),
            "color": self.color,
            "entity_id": self.entity_id,
            "label": self.label,
            "district": self.district,
            **self.extra,
        }


@dataclass(frozen=True)
class SceneState:
    objects: tuple = ()
    focus_id: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.objects

    def of_kind(self, kind: str) -> list[SceneObject]:
        return [o for o in self.objects if o.kind == kind]

    def to_dict(self) -> dict:
        return {
            "focus_id": self.focus_id,
            "objects": [o.to_dict() for o in self.objects],
        }


def clear_scene(state: SceneState) -> SceneState:
    """Drop every dynamic object, including the focus light."""
    if state.objects:
        logger.debug("Clearing %d scene objects", len(state.objects))
    return SceneState()


def focus_color(style: Optional[str]) -> int:
    if style and "alpha" in style:
        return FOCUS_COLOR_ALPHA
    return FOCUS_COLOR_DEFAULT


def rebuild_scene(
    state: SceneState,
    layout: SceneLayout,
    rng: Optional[random.Random] = None,
    config: Optional[LayoutConfig] = None,
    seed: Optional[int] = None,
) -> SceneState:
    """Clear ``state`` and fill a new one from ``layout``."""
    config = config or LayoutConfig()
    if rng is None:
        rng = random.Random(seed)
    cleared = clear_scene(state)

    focus = layout.focus
    fp = layout.focus_placement
    objects: list[SceneObject] = [
        SceneObject(
            kind="focus_building",
            position=Position(fp.x, fp.y + FOCUS_HEIGHT / 2, fp.z),
            size=(FOCUS_WIDTH, FOCUS_HEIGHT, FOCUS_DEPTH),
            color=focus_color(focus.category),
            entity_id=focus.id,
            label=focus.name,
        ),
        SceneObject(
            kind="focus_light",
            position=Position(fp.x, fp.y + FOCUS_HEIGHT + 1, fp.z),
            color=0xFFFFFF,
            entity_id=focus.id,
            extra={"intensity": FOCUS_LIGHT_INTENSITY, "distance": FOCUS_LIGHT_DISTANCE},
        ),
    ]

    island_radius = config.cluster_spread_radius + ISLAND_MARGIN
    for district in layout.districts:
        objects.append(
            SceneObject(
                kind="island",
                position=district.center,
                size=(island_radius, config.island_height, island_radius),
                color=ISLAND_COLOR,
                label=district.category,
                district=district.category,
            )
        )
        for member in district.members:
            height = BUILDING_MIN_HEIGHT + rng.random() * BUILDING_HEIGHT_JITTER
            objects.append(
                SceneObject(
                    kind="building",
                    position=district.center.offset(member.position),
                    size=(BUILDING_WIDTH, height, BUILDING_DEPTH),
                    entity_id=member.entity.id,
                    label=member.entity.name,
                    district=district.category,
                    extra={"style": member.entity.category},
                )
            )

    logger.debug(
        "Rebuilt scene for company %s: %d objects", focus.id, len(objects)
    )
    return SceneState(objects=cleared.objects + tuple(objects), focus_id=focus.id)
