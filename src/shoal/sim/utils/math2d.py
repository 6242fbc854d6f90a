from __future__ import annotations

import math

from pygame.math import Vector2

FALLBACK_DIRECTION = Vector2(1.0, 0.0)
_EPSILON_SQ = 1e-12


def _safe_normalize_xy(x: float, y: float) -> Vector2:
    magnitude_sq = x * x + y * y
    if not magnitude_sq > _EPSILON_SQ:
        return Vector2()
    inv = 1.0 / math.sqrt(magnitude_sq)
    return Vector2(x * inv, y * inv)


def _set_length_xy(x: float, y: float, length: float) -> tuple[float, float]:
    """Rescale (x, y) to ``length``; a zero or non-finite vector points along FALLBACK_DIRECTION."""
    magnitude = math.hypot(x, y)
    if magnitude == 0.0 or not math.isfinite(magnitude):
        return FALLBACK_DIRECTION.x * length, FALLBACK_DIRECTION.y * length
    inv = length / magnitude
    return x * inv, y * inv


def _heading_from_velocity(vector: Vector2) -> float:
    if vector.length_squared() < _EPSILON_SQ:
        return 0.0
    return math.atan2(vector.y, vector.x)


def _clamp_value(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))
