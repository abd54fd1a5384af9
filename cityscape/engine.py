"""
District layout for a focus company and its related companies.

The focus sits at the origin. Relations are grouped by category into
districts; districts are spread evenly around a circle (first-seen order)
at a distance that shrinks as the district's average strength grows.
Members are scattered around their district center with bounded jitter.

    compute_layout(focus, relations)                 -> SceneLayout
    compute_layout(focus, relations, seed=42)        -> reproducible member jitter
    compute_layout(focus, relations, rng=Random(1))  -> caller-owned random source
"""

from __future__ import annotations

import logging
import math
import random
from typing import Any, Iterable, Optional

from cityscape.config import LayoutConfig
from cityscape.types import (
    ORIGIN,
    District,
    Entity,
    MemberPlacement,
    Position,
    RelationInput,
    SceneLayout,
    SkippedRelation,
)

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "Unknown"
DEFAULT_STRENGTH = 0.5

# Member jitter: radius in [0.4, 1.0] * spread, angle +/- 0.35 rad
MEMBER_RADIUS_FLOOR = 0.4
MEMBER_RADIUS_RANGE = 0.6
MEMBER_ANGLE_JITTER = 0.7

TWO_PI = 2 * math.pi


def parse_strength(value: Any) -> Optional[float]:
    """Return value as a float if it is a finite number, else None."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    if not math.isfinite(value):
        return None
    return value


def category_key(category: Any) -> str:
    if category is None:
        return UNKNOWN_CATEGORY
    label = str(category).strip()
    return label or UNKNOWN_CATEGORY


def average_strength(strengths: list[float]) -> float:
    """Mean of the collected strengths clamped to [0, 1]; 0.5 when empty."""
    if not strengths:
        return DEFAULT_STRENGTH
    avg = sum(strengths) / len(strengths)
    return max(0.0, min(1.0, avg))


def district_distance(avg_strength: float, config: LayoutConfig) -> float:
    avg_strength = max(0.0, min(1.0, avg_strength))
    return config.max_distance - avg_strength * (config.max_distance - config.min_distance)


def district_angle(index: int, count: int) -> float:
    if count <= 0:
        return 0.0
    return index * (TWO_PI / count)


def member_position(
    member_index: int,
    member_count: int,
    config: LayoutConfig,
    rng: random.Random,
) -> Position:
    radius = config.cluster_spread_radius * (
        MEMBER_RADIUS_FLOOR + rng.random() * MEMBER_RADIUS_RANGE
    )
    angle = (member_index / max(1, member_count)) * TWO_PI + (rng.random() - 0.5) * MEMBER_ANGLE_JITTER
    return Position(
        radius * math.cos(angle),
        config.island_height,
        radius * math.sin(angle),
    )


def compute_layout(
    focus: Entity,
    relations: Iterable[RelationInput],
    config: Optional[LayoutConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> SceneLayout:
    """
    Place the focus company and its related companies.

    Steps:
        1. Group relations by category (missing -> "Unknown"), first-seen order
        2. Average the finite strengths per district (0.5 if none)
        3. Distance = max - avg * (max - min)
        4. Angle = index * 2pi / district_count
        5. Scatter members around the district center

    Relations without an "other" company are skipped; invalid strengths are
    dropped. Both are recorded in ``SceneLayout.skipped``.
    """
    config = config or LayoutConfig()
    if rng is None:
        rng = random.Random(seed)

    layout = SceneLayout(focus=focus, focus_placement=ORIGIN)

    # --- 1. Grouping (dict keeps first-seen order) ---
    groups: dict[str, dict] = {}
    for idx, rel in enumerate(relations):
        if rel.other is None:
            logger.warning(
                "Skipping relation #%d of company %s: no related company", idx, focus.id
            )
            layout.skipped.append(SkippedRelation(index=idx, reason="missing_other"))
            continue

        key = category_key(rel.category)
        group = groups.setdefault(key, {"members": [], "strengths": []})
        group["members"].append(rel.other)

        strength = parse_strength(rel.strength)
        if strength is not None:
            group["strengths"].append(strength)
        elif rel.strength is not None:
            logger.warning(
                "Ignoring invalid strength %r on relation #%d of company %s",
                rel.strength, idx, focus.id,
            )
            layout.skipped.append(SkippedRelation(index=idx, reason="invalid_strength"))

    # --- 2-5. District placement ---
    count = len(groups)
    for index, (category, group) in enumerate(groups.items()):
        avg = average_strength(group["strengths"])
        distance = district_distance(avg, config)
        angle = district_angle(index, count)
        center = Position(
            distance * math.cos(angle),
            config.base_elevation,
            distance * math.sin(angle),
        )

        members = group["members"]
        district = District(
            category=category,
            distance=distance,
            angle=angle,
            average_strength=avg,
            center=center,
            strengths=group["strengths"],
        )
        for member_index, entity in enumerate(members):
            district.members.append(
                MemberPlacement(
                    entity=entity,
                    position=member_position(member_index, len(members), config, rng),
                )
            )
        layout.districts.append(district)

    logger.debug(
        "Layout for company %s: %d districts, %d skipped",
        focus.id, len(layout.districts), len(layout.skipped),
    )
    return layout
