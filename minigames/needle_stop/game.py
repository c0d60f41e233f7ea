# minigames/needle_stop/game.py
"""
Needle Stop: Minigame Module Format
- game.py (scene / input wiring) + graphics.py (pure renderer)
- Rules live in controller.py; this scene only translates input into
  controller calls and draws the snapshot it gets back.
- launch(manager, context, callback, **kwargs)

Controls:
  N: start a round
  Space: stop (Player 1, or the sole player)
  Enter: stop (Player 2, or the sole player)
  M: switch between 1-player and 2-player
  R: restart after a round
  Esc: leave
"""

import logging
from typing import Optional

import pygame
from scene_manager import Scene
from game_context import GameContext
from .controller import Mode, NeedleController, Phase, StopAction, SwingConfig
from .graphics import NeedleRenderer

TITLE = "Needle Stop"
MINIGAME_ID = "needle_stop"

logger = logging.getLogger(__name__)

# =========================
# CONFIG (tunable constants)
# =========================
CONFIG = {
    "PERIOD_MS": 1800.0,  # one full left-right-left swing
    "ADVANCE_DELAY_MS": 1000.0,  # pause before Player 2 swings
    "BG_COLOR": (18, 20, 29),
    "ARC_COLOR": (211, 161, 63),
    "NEEDLE_COLOR": (252, 74, 26),
    "GLOW_COLOR": (120, 40, 20),
    "TIP_COLOR": (247, 183, 51),
    # reference-gauge geometry (320x180 canvas)
    "ARC_RADIUS": 75,
    "NEEDLE_LENGTH": 70,
    "ARC_BASELINE": 20,
}

STOP_KEYS = {
    pygame.K_SPACE: StopAction.PLAYER_ONE,
    pygame.K_RETURN: StopAction.PLAYER_TWO,
    pygame.K_KP_ENTER: StopAction.PLAYER_TWO,
}


class NeedleStopScene(Scene):
    def __init__(
        self,
        manager,
        context=None,
        callback=None,
        two_player: Optional[bool] = None,
        period_ms: Optional[float] = None,
        advance_delay_ms: Optional[float] = None,
        clock=None,
        **kwargs,
    ):
        super().__init__(manager)
        self.manager = manager
        self.context = context or GameContext()
        self.callback = callback
        self.minigame_id = MINIGAME_ID
        flags = getattr(self.context, "flags", {}) or {}

        if two_player is None:
            two_player = bool(flags.get("two_player", False))
        config = SwingConfig(
            period_ms=float(
                period_ms
                if period_ms is not None
                else flags.get("period_ms", CONFIG["PERIOD_MS"])
            ),
            advance_delay_ms=float(
                advance_delay_ms
                if advance_delay_ms is not None
                else flags.get("advance_delay_ms", CONFIG["ADVANCE_DELAY_MS"])
            ),
        )
        self.clock = clock or pygame.time.get_ticks
        self.controller = NeedleController(
            config,
            clock=self.clock,
            mode=Mode.TWO_PLAYER if two_player else Mode.SINGLE,
        )
        self.controller.subscribe(self._on_transition)

        self.screen = manager.screen
        self.w, self.h = manager.size
        self.renderer = NeedleRenderer(self.screen, CONFIG)
        self.snap = self.controller.reset()
        self._completed = False

    # ---- engine hooks ----
    def handle_event(self, event):
        if event.type == pygame.KEYDOWN:
            if event.key in STOP_KEYS:
                self.controller.stop(STOP_KEYS[event.key])
            elif event.key == pygame.K_n:
                self.controller.start()
            elif event.key == pygame.K_m:
                self.controller.toggle_mode()
            elif event.key == pygame.K_r:
                if self.snap.restart_visible:
                    self.controller.restart()
            elif event.key == pygame.K_ESCAPE:
                self._finalize()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._press(self.renderer.button_at(event.pos, self.snap))

    def update(self, dt):
        # normalize dt (runner might pass ms)
        if dt > 1.0:
            dt = dt / 1000.0
        self.context.add_playtime(dt)
        self.snap = self.controller.tick()

    def draw(self):
        self.renderer.draw(self.snap)

    # ---- internals ----
    def _press(self, name: Optional[str]):
        if name == "start":
            self.controller.start()
        elif name == "stop":
            self.controller.stop(StopAction.BUTTON)
        elif name == "restart":
            self.controller.restart()
        elif name == "mode":
            self.controller.toggle_mode()

    def _on_transition(self, snap):
        self.snap = snap
        if snap.phase is not Phase.ROUND_COMPLETE:
            return
        if snap.two_player:
            outcome = "tie" if snap.tie else f"player{snap.winner + 1}"
        else:
            outcome = "perfect" if snap.perfect else "scored"
        self.context.last_result = {
            "minigame": self.minigame_id,
            "outcome": outcome,
            "details": {
                "mode": snap.mode.value,
                "scores": list(snap.scores),
                "angle": round(snap.angle, 2),
                "winner": snap.winner,
            },
        }
        self.context.apply_result()
        logger.info("Session so far: %r", self.context)

    def _finalize(self):
        if self._completed:
            return
        self._completed = True
        self.controller.reset()
        if not self.context.last_result:
            self.context.last_result = {
                "minigame": self.minigame_id,
                "outcome": "quit",
                "details": {},
            }
        if hasattr(self.manager, "pop"):
            try:
                self.manager.pop()
            except Exception as exc:
                print(f"[NeedleStop] Unable to pop scene: {exc}")
        if callable(self.callback):
            try:
                self.callback(self.context)
            except Exception as exc:
                print(f"[NeedleStop] Callback error: {exc}")


def launch(manager, context=None, callback=None, **kwargs):
    """Entry point used by boot.py."""
    return NeedleStopScene(manager, context, callback, **kwargs)
