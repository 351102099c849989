from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(0, min(100, round_half_up(value)))


def percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return clamp_score(part / whole * 100)
