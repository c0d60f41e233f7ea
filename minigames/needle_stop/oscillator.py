# minigames/needle_stop/oscillator.py
"""
Pendulum-style needle motion.

The angle is always derived from absolute time, never integrated frame by
frame, so a swing never drifts no matter how irregular the frame rate is.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

SWING_MIN = 0.0
SWING_MAX = 180.0
PERFECT_ANGLE = 90.0
AMPLITUDE = (SWING_MAX - SWING_MIN) / 2.0


def angle_at(now: float, start_time: float, period: float) -> float:
    """Needle angle in degrees (0..180) at ``now`` for a swing begun at ``start_time``."""
    if period <= 0:
        raise ValueError(f"period must be positive, got {period!r}")
    elapsed = (now - start_time) % period
    t = elapsed / period * math.tau
    return PERFECT_ANGLE + AMPLITUDE * math.sin(t)


@dataclass(frozen=True)
class SwingClock:
    start_time: float
    period: float

    def angle(self, now: float) -> float:
        return angle_at(now, self.start_time, self.period)
