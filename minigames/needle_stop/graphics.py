# minigames/needle_stop/graphics.py
"""
Pure renderer for Needle Stop: reference arc, needle, HUD lines and buttons.
No game rules here; everything drawn comes from a RoundSnapshot.

Geometry is authored against a 320x180 reference gauge and scaled to fit
the upper part of the window.

Public API:
    NeedleRenderer(screen, config)
    .draw(snapshot) -> None
    .button_rects(snapshot) -> Dict[str, pygame.Rect]
    .button_at(pos, snapshot) -> Optional[str]
"""

import math
from types import SimpleNamespace
from typing import Dict, Optional, Tuple

import pygame

REF_W, REF_H = 320, 180

BUTTONS = ("start", "stop", "restart", "mode")


def needle_tip(center: Tuple[float, float], length: float, angle: float) -> Tuple[float, float]:
    """Screen position of the needle tip; 0 deg points left, 90 up, 180 right."""
    rad = math.radians(angle)
    return (
        center[0] + length * math.cos(rad - math.pi),
        center[1] + length * math.sin(rad - math.pi),
    )


class NeedleRenderer:
    def __init__(self, screen, config):
        self.screen = screen
        self.cfg = config
        self.w, self.h = screen.get_size()

        self.COL = SimpleNamespace(
            bg=self.cfg.get("BG_COLOR", (18, 20, 29)),
            arc=self.cfg.get("ARC_COLOR", (211, 161, 63)),
            needle=self.cfg.get("NEEDLE_COLOR", (252, 74, 26)),
            glow=self.cfg.get("GLOW_COLOR", (120, 40, 20)),
            tip=self.cfg.get("TIP_COLOR", (247, 183, 51)),
            mark=(235, 235, 245),
            text=(235, 235, 240),
            accent=(255, 235, 140),
            dim=(150, 150, 165),
            button=(35, 42, 58),
            button_off=(26, 28, 36),
            rim=(100, 100, 120),
        )

        # gauge gets ~60% of the width and ~55% of the height
        self.scale = min(self.w * 0.6 / REF_W, self.h * 0.55 / REF_H)
        gauge_w = REF_W * self.scale
        gauge_x = (self.w - gauge_w) / 2
        gauge_y = self.h * 0.04
        self.center = (
            gauge_x + gauge_w / 2,
            gauge_y + (REF_H - self.cfg.get("ARC_BASELINE", 20)) * self.scale,
        )
        self.arc_radius = self.cfg.get("ARC_RADIUS", 75) * self.scale
        self.needle_length = self.cfg.get("NEEDLE_LENGTH", 70) * self.scale

        pygame.font.init()
        self.big = pygame.font.SysFont(None, max(24, int(self.h * 0.085)))
        self.font = pygame.font.SysFont(None, max(18, int(self.h * 0.06)))
        self.small = pygame.font.SysFont(None, max(14, int(self.h * 0.04)))

    # ---------------------
    # Public draw functions
    # ---------------------
    def draw(self, snap):
        self.screen.fill(self.COL.bg)
        self.draw_gauge()
        self.draw_needle(snap.angle)
        self.draw_hud(snap)
        self.draw_buttons(snap)
        self.draw_hint()

    def draw_gauge(self):
        cx, cy = self.center
        r = self.arc_radius
        rect = pygame.Rect(0, 0, int(r * 2), int(r * 2))
        rect.center = (int(cx), int(cy))
        pygame.draw.arc(self.screen, self.COL.arc, rect, 0, math.pi, max(2, int(5 * self.scale)))
        # target mark at 90 deg
        inner = needle_tip(self.center, r - 8 * self.scale, 90)
        outer = needle_tip(self.center, r + 8 * self.scale, 90)
        pygame.draw.line(self.screen, self.COL.mark, inner, outer, max(1, int(2 * self.scale)))

    def draw_needle(self, angle: float):
        tip = needle_tip(self.center, self.needle_length, angle)
        width = max(2, int(7 * self.scale))
        pygame.draw.line(self.screen, self.COL.glow, self.center, tip, width + max(2, int(6 * self.scale)))
        pygame.draw.line(self.screen, self.COL.needle, self.center, tip, width)
        pygame.draw.circle(self.screen, self.COL.tip, (int(tip[0]), int(tip[1])), max(3, int(10 * self.scale)))

    def draw_hud(self, snap):
        y = self.center[1] + 14 * self.scale
        lines = (
            (snap.current_score_text, self.font, self.COL.text),
            (snap.turn_text, self.font, self.COL.dim),
            (snap.winner_text, self.big, self.COL.accent),
        )
        for text, font, color in lines:
            if text:
                surf = font.render(text, True, color)
                self.screen.blit(surf, surf.get_rect(midtop=(self.w // 2, int(y))))
            y += font.get_linesize() + 4

    def draw_buttons(self, snap):
        for name, rect in self.button_rects(snap).items():
            enabled = self._enabled(name, snap)
            fill = self.COL.button if enabled else self.COL.button_off
            pygame.draw.rect(self.screen, fill, rect, border_radius=8)
            pygame.draw.rect(self.screen, self.COL.rim, rect, 2, border_radius=8)
            label = snap.mode_label if name == "mode" else name.capitalize()
            surf = self.small.render(label, True, self.COL.text if enabled else self.COL.dim)
            self.screen.blit(surf, surf.get_rect(center=rect.center))

    def draw_hint(self):
        hint = self.small.render(
            "N start • Space P1 stop • Enter P2 stop • M mode • R restart • Esc leave",
            True,
            self.COL.dim,
        )
        self.screen.blit(hint, hint.get_rect(center=(self.w // 2, self.h - 18)))

    # ---------------------
    # Buttons
    # ---------------------
    def button_rects(self, snap) -> Dict[str, pygame.Rect]:
        """Rects for the buttons currently on screen; Restart only once a round is over."""
        names = [n for n in BUTTONS if n != "restart" or snap.restart_visible]
        bw = max(90, int(self.w * 0.14))
        mode_w = int(bw * 1.6)
        bh = max(28, int(self.h * 0.07))
        gap = 12
        widths = [mode_w if n == "mode" else bw for n in names]
        total = sum(widths) + gap * (len(names) - 1)
        x = (self.w - total) // 2
        y = self.h - bh - 44
        rects = {}
        for name, width in zip(names, widths):
            rects[name] = pygame.Rect(x, y, width, bh)
            x += width + gap
        return rects

    def button_at(self, pos, snap) -> Optional[str]:
        for name, rect in self.button_rects(snap).items():
            if rect.collidepoint(pos) and self._enabled(name, snap):
                return name
        return None

    @staticmethod
    def _enabled(name, snap) -> bool:
        if name == "start":
            return snap.start_enabled
        if name == "stop":
            return snap.stop_enabled
        if name == "restart":
            return snap.restart_visible
        return True
