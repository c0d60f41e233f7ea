# minigames/needle_stop/scoring.py
"""Angle scoring plus the result strings shown under the gauge."""

from __future__ import annotations

from typing import Optional

from .oscillator import AMPLITUDE, PERFECT_ANGLE, SWING_MAX, SWING_MIN

MAX_SCORE = 100

PERFECT_TEXT = "Perfect!"
TIE_TEXT = "It's a Tie!"


def score_angle(angle: float) -> int:
    """Linear falloff from 100 at the perfect angle to 0 at either end of the arc.

    Out-of-range angles are clamped to the arc first.
    """
    angle = max(SWING_MIN, min(SWING_MAX, float(angle)))
    diff = abs(angle - PERFECT_ANGLE)
    return max(0, round(MAX_SCORE - diff / AMPLITUDE * MAX_SCORE))


def resolve_winner(p0: int, p1: int) -> Optional[int]:
    """Index of the higher-scoring player, or None for a tie."""
    if p0 > p1:
        return 0
    if p1 > p0:
        return 1
    return None


def is_perfect(score: Optional[int]) -> bool:
    return score == MAX_SCORE


def player_label(idx: int) -> str:
    return f"Player {idx + 1}"


def score_text(score: int, player: Optional[int] = None) -> str:
    if player is None:
        return f"Your Score: {score}"
    return f"{player_label(player)} Score: {score}"


def turn_text(player: int) -> str:
    return f"{player_label(player)}'s Turn"


def winner_text(winner: Optional[int]) -> str:
    if winner is None:
        return TIE_TEXT
    return f"{player_label(winner)} Wins!"
