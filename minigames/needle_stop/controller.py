# minigames/needle_stop/controller.py
"""
Turn / scoring state machine for Needle Stop.

NeedleController owns everything a round needs: phase, mode, active player,
per-player scores and the running swing. Every public transition returns a
RoundSnapshot; the scene draws snapshots and never touches controller
internals.

Times are milliseconds. The pause before player 2 swings goes through
TickScheduler and is tagged with the epoch it was scheduled under, so a call
that outlives a reset or mode switch is dropped instead of starting a swing.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .oscillator import PERFECT_ANGLE, SwingClock
from .scoring import (
    is_perfect,
    resolve_winner,
    score_angle,
    score_text,
    turn_text,
    winner_text,
    PERFECT_TEXT,
)

logger = logging.getLogger(__name__)

Scores = Tuple[Optional[int], Optional[int]]


class Phase(str, Enum):
    IDLE = "idle"
    SWINGING = "swinging"
    AWAITING_NEXT_PLAYER = "awaiting_next_player"
    ROUND_COMPLETE = "round_complete"


class Mode(str, Enum):
    SINGLE = "single"
    TWO_PLAYER = "two_player"


class StopAction(str, Enum):
    PLAYER_ONE = "player_one"  # Space
    PLAYER_TWO = "player_two"  # Enter
    BUTTON = "button"  # on-screen Stop, whoever is up


# Players each trigger may stop in two-player mode. Single mode takes any.
TWO_PLAYER_TRIGGERS = {
    StopAction.PLAYER_ONE: frozenset({0}),
    StopAction.PLAYER_TWO: frozenset({1}),
    StopAction.BUTTON: frozenset({0, 1}),
}


@dataclass(frozen=True)
class SwingConfig:
    period_ms: float = 1800.0
    advance_delay_ms: float = 1000.0

    def __post_init__(self):
        if self.period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {self.period_ms!r}")
        if self.advance_delay_ms < 0:
            raise ValueError(
                f"advance_delay_ms must not be negative, got {self.advance_delay_ms!r}"
            )


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


# =================
# Deferred calls
# =================
@dataclass
class DeferredCall:
    due: float
    epoch: int
    callback: Callable[[float], None]
    cancelled: bool = False

    def cancel(self):
        self.cancelled = True


class TickScheduler:
    """One-shot deferred calls, fired from the frame loop.

    Callbacks receive the time they were due, not the time they were run.

    ``epoch_source`` returns the owner's current epoch; a call scheduled under
    an older epoch is discarded when it comes due.
    """

    def __init__(self, epoch_source: Callable[[], int]):
        self._epoch_source = epoch_source
        self._pending: List[DeferredCall] = []

    def call_later(
        self, now: float, delay: float, callback: Callable[[float], None]
    ) -> DeferredCall:
        call = DeferredCall(
            due=now + max(0.0, delay), epoch=self._epoch_source(), callback=callback
        )
        self._pending.append(call)
        return call

    def run_due(self, now: float) -> int:
        """Fire every call due at ``now``; returns how many actually ran."""
        due = sorted((c for c in self._pending if c.due <= now), key=lambda c: c.due)
        if not due:
            return 0
        self._pending = [c for c in self._pending if c.due > now]
        fired = 0
        for call in due:
            if call.cancelled:
                continue
            # re-read each time: an earlier callback may have moved the epoch
            if call.epoch != self._epoch_source():
                logger.debug(
                    "Dropping stale deferred call (scheduled at epoch %s, now %s)",
                    call.epoch,
                    self._epoch_source(),
                )
                continue
            call.callback(call.due)
            fired += 1
        return fired

    def cancel_all(self):
        for call in self._pending:
            call.cancel()
        self._pending = []

    @property
    def pending(self) -> int:
        return sum(1 for c in self._pending if not c.cancelled)


# =================
# Observable state
# =================
@dataclass(frozen=True)
class RoundSnapshot:
    phase: Phase
    mode: Mode
    active_player: int
    scores: Scores
    angle: float
    current_score_text: str = ""
    turn_text: str = ""
    winner_text: str = ""
    winner: Optional[int] = None
    tie: bool = False
    perfect: bool = False
    epoch: int = field(default=0, compare=False)

    @property
    def two_player(self) -> bool:
        return self.mode is Mode.TWO_PLAYER

    @property
    def is_swinging(self) -> bool:
        return self.phase is Phase.SWINGING

    @property
    def stop_enabled(self) -> bool:
        return self.phase is Phase.SWINGING

    @property
    def start_enabled(self) -> bool:
        return self.phase in (Phase.IDLE, Phase.ROUND_COMPLETE)

    @property
    def restart_visible(self) -> bool:
        return self.phase is Phase.ROUND_COMPLETE

    @property
    def mode_label(self) -> str:
        return "Switch to 1-Player" if self.two_player else "Switch to 2-Player"


# =================
# Controller
# =================
class NeedleController:
    def __init__(
        self,
        config: Optional[SwingConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        mode: Mode = Mode.SINGLE,
    ):
        self.config = config or SwingConfig()
        self._clock = clock or monotonic_ms
        self.mode = Mode(mode)
        self.phase = Phase.IDLE
        self.active_player = 0
        self.scores: List[Optional[int]] = [None, None]
        self.angle = PERFECT_ANGLE
        self.epoch = 0
        self.scheduler = TickScheduler(lambda: self.epoch)
        self._swing: Optional[SwingClock] = None
        self._last_stopped: Optional[int] = None
        self._pending_advance: Optional[DeferredCall] = None
        self._listeners: List[Callable[[RoundSnapshot], None]] = []

    # ---- public API ----
    @property
    def two_player(self) -> bool:
        return self.mode is Mode.TWO_PLAYER

    def subscribe(self, listener: Callable[[RoundSnapshot], None]) -> Callable[[], None]:
        """Call ``listener`` with the new snapshot after every accepted transition."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def accepts(self, action: StopAction) -> bool:
        """Whether ``action`` may stop the player currently swinging.

        Single mode takes any trigger. In two-player mode Space and Enter are
        bound to Player 1 and Player 2; the on-screen Stop button is shared and
        stops whoever is up.
        """
        if not self.two_player:
            return True
        return self.active_player in TWO_PLAYER_TRIGGERS[StopAction(action)]

    def start(self, now: Optional[float] = None) -> RoundSnapshot:
        if self.phase not in (Phase.IDLE, Phase.ROUND_COMPLETE):
            logger.debug("start() ignored while %s", self.phase.value)
            return self.snapshot()
        self._cancel_pending()
        self._clear_round()
        self._begin_swing(0, self._now(now))
        return self._emit()

    def stop(
        self, action: StopAction = StopAction.BUTTON, now: Optional[float] = None
    ) -> RoundSnapshot:
        action = StopAction(action)
        t = self._now(now)
        # a due auto-advance must land before the phase check
        self.scheduler.run_due(t)
        if self.phase is not Phase.SWINGING or self._swing is None:
            logger.debug("stop(%s) ignored while %s", action.value, self.phase.value)
            return self.snapshot()
        if not self.accepts(action):
            logger.debug(
                "stop(%s) ignored: player %s is swinging",
                action.value,
                self.active_player + 1,
            )
            return self.snapshot()

        self.angle = self._swing.angle(t)
        self._swing = None
        self.epoch += 1

        player = self.active_player
        score = score_angle(self.angle)
        self.scores[player] = score
        self._last_stopped = player
        logger.debug(
            "Player %s stopped at %.2f deg for %s points", player + 1, self.angle, score
        )

        if self.two_player and player == 0:
            self.phase = Phase.AWAITING_NEXT_PLAYER
            self.active_player = 1
            self._pending_advance = self.scheduler.call_later(
                t, self.config.advance_delay_ms, self._advance_to_next_player
            )
        else:
            self.phase = Phase.ROUND_COMPLETE
            self._log_round()
        return self._emit()

    def toggle_mode(self) -> RoundSnapshot:
        self.mode = Mode.SINGLE if self.two_player else Mode.TWO_PLAYER
        logger.info("Mode switched to %s", self.mode.value)
        return self.reset()

    def reset(self) -> RoundSnapshot:
        if self.phase is Phase.SWINGING:
            logger.debug("Swing cancelled by reset")
        self._cancel_pending()
        self._clear_round()
        self.phase = Phase.IDLE
        self.angle = PERFECT_ANGLE
        self.epoch += 1
        return self._emit()

    restart = reset

    def tick(self, now: Optional[float] = None) -> RoundSnapshot:
        """Per-frame step: fire due deferred calls, then move the needle if swinging."""
        t = self._now(now)
        self.scheduler.run_due(t)
        if self.phase is Phase.SWINGING and self._swing is not None:
            self.angle = self._swing.angle(t)
        return self.snapshot()

    def angle_at(self, now: Optional[float] = None) -> float:
        """Angle to render at ``now``; frozen when no swing is running."""
        t = self._now(now)
        self.scheduler.run_due(t)
        if self._swing is None:
            return self.angle
        return self._swing.angle(t)

    def snapshot(self) -> RoundSnapshot:
        p0, p1 = self.scores
        score_line = ""
        turn_line = ""
        result_line = ""
        winner = None
        tie = False
        perfect = False

        if self.phase in (Phase.AWAITING_NEXT_PLAYER, Phase.ROUND_COMPLETE):
            last = self._last_stopped
            if last is not None and self.scores[last] is not None:
                score_line = score_text(
                    self.scores[last], last if self.two_player else None
                )

        if self.two_player:
            if self.phase is not Phase.ROUND_COMPLETE:
                turn_line = turn_text(self.active_player)
            elif p0 is not None and p1 is not None:
                winner = resolve_winner(p0, p1)
                tie = winner is None
                result_line = winner_text(winner)
        elif self.phase is Phase.ROUND_COMPLETE:
            perfect = is_perfect(p0)
            result_line = PERFECT_TEXT if perfect else ""

        return RoundSnapshot(
            phase=self.phase,
            mode=self.mode,
            active_player=self.active_player,
            scores=(p0, p1),
            angle=self.angle,
            current_score_text=score_line,
            turn_text=turn_line,
            winner_text=result_line,
            winner=winner,
            tie=tie,
            perfect=perfect,
            epoch=self.epoch,
        )

    # ---- internals ----
    def _now(self, now: Optional[float]) -> float:
        return float(self._clock() if now is None else now)

    def _begin_swing(self, player: int, t: float):
        self.epoch += 1
        self.active_player = player
        self._swing = SwingClock(start_time=t, period=self.config.period_ms)
        self.angle = self._swing.angle(t)
        self.phase = Phase.SWINGING
        logger.debug("Player %s swinging (epoch %s)", player + 1, self.epoch)

    def _advance_to_next_player(self, due: float):
        self._pending_advance = None
        if self.phase is not Phase.AWAITING_NEXT_PLAYER or not self.two_player:
            return
        self._begin_swing(1, due)
        self._emit()

    def _clear_round(self):
        self.scores = [None, None]
        self.active_player = 0
        self._swing = None
        self._last_stopped = None

    def _cancel_pending(self):
        if self._pending_advance is not None:
            self._pending_advance.cancel()
            self._pending_advance = None
        self.scheduler.cancel_all()

    def _emit(self) -> RoundSnapshot:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)
        return snap

    def _log_round(self):
        p0, p1 = self.scores
        if self.two_player:
            winner = resolve_winner(p0, p1)
            logger.info(
                "Round complete: P1=%s P2=%s -> %s", p0, p1, winner_text(winner)
            )
        else:
            logger.info("Round complete: score=%s", p0)
