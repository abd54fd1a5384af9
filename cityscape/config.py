"""Layout parameters and their validation."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

DEFAULT_MIN_DISTANCE = 8.0
DEFAULT_MAX_DISTANCE = 20.0
DEFAULT_CLUSTER_SPREAD = 3.0
DEFAULT_BASE_ELEVATION = 0.1
DEFAULT_ISLAND_HEIGHT = 0.5


class LayoutConfigError(ValueError):
    """Raised when layout parameters cannot produce a valid placement."""


@dataclass(frozen=True)
class LayoutConfig:
    min_distance: float = DEFAULT_MIN_DISTANCE
    max_distance: float = DEFAULT_MAX_DISTANCE
    cluster_spread_radius: float = DEFAULT_CLUSTER_SPREAD
    base_elevation: float = DEFAULT_BASE_ELEVATION
    island_height: float = DEFAULT_ISLAND_HEIGHT

    def __post_init__(self):
        for name in (
            "min_distance",
            "max_distance",
            "cluster_spread_radius",
            "base_elevation",
            "island_height",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise LayoutConfigError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise LayoutConfigError(f"{name} must be a positive finite number, got {value!r}")
        if self.max_distance <= self.min_distance:
            raise LayoutConfigError(
                f"max_distance ({self.max_distance}) must be greater than "
                f"min_distance ({self.min_distance})"
            )

    @classmethod
    def from_env(cls, environ=None) -> "LayoutConfig":
        """Build a config from LAYOUT_* environment variables (defaults otherwise)."""
        env = os.environ if environ is None else environ
        return cls(
            min_distance=_env_float(env, "LAYOUT_MIN_DISTANCE", DEFAULT_MIN_DISTANCE),
            max_distance=_env_float(env, "LAYOUT_MAX_DISTANCE", DEFAULT_MAX_DISTANCE),
            cluster_spread_radius=_env_float(env, "LAYOUT_CLUSTER_SPREAD", DEFAULT_CLUSTER_SPREAD),
            base_elevation=_env_float(env, "LAYOUT_BASE_ELEVATION", DEFAULT_BASE_ELEVATION),
            island_height=_env_float(env, "LAYOUT_ISLAND_HEIGHT", DEFAULT_ISLAND_HEIGHT),
        )


def _env_float(env, key: str, default: float) -> float:
    raw = str(env.get(key, "")).strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise LayoutConfigError(f"{key} must be a number, got {raw!r}") from None
