# cityscape -- turns a company relationship graph into a "city" layout
#
# Modules:
#   types   -- Entity / RelationInput inputs, Position / District / SceneLayout outputs
#   config  -- LayoutConfig (distances, cluster spread, elevations) + validation
#   engine  -- compute_layout(): grouping into districts, radial + member placement
#   scene   -- SceneState with clear_scene() / rebuild_scene() for the renderer

from cityscape.config import LayoutConfig, LayoutConfigError
from cityscape.engine import compute_layout
from cityscape.scene import SceneObject, SceneState, clear_scene, rebuild_scene
from cityscape.types import (
    District,
    Entity,
    MemberPlacement,
    Position,
    RelationInput,
    SceneLayout,
    SkippedRelation,
)

__all__ = [
    "District",
    "Entity",
    "LayoutConfig",
    "LayoutConfigError",
    "MemberPlacement",
    "Position",
    "RelationInput",
    "SceneLayout",
    "SceneObject",
    "SceneState",
    "SkippedRelation",
    "clear_scene",
    "compute_layout",
    "rebuild_scene",
]
