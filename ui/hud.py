#!/usr/bin/env python3
"""HUD panel, signal log, legend and pause banner (mixin)."""

from __future__ import annotations

import pygame

from sim.frame import Frame

from .helpers import render_text


class HudRenderer:
    """Mixin that draws every overlay / HUD element."""

    # ------------------------------------------------------------------ #
    #  Main HUD panel                                                      #
    # ------------------------------------------------------------------ #

    def draw_hud(self, surface: pygame.Surface, frame: Frame) -> None:
        if self.font_small is None or self.font_tiny is None:
            return

        lines = [
            (f"TICK {frame.tick}", self.HUD_TEXT_COLOR),
            (f"CONTROLLER {frame.controller.upper()}", self.HUD_DIM_COLOR),
            (f"ACTIVE {frame.active}", self.SIGNAL_COLORS["GREEN"]
             if frame.active != "NONE" else self.HUD_DIM_COLOR),
        ]
        for side, stopped in frame.stopped_counts.items():
            total = frame.vehicle_counts.get(side, 0)
            lines.append((f"{side:<6} stopped {stopped:>2} / {total:>2}", self.HUD_TEXT_COLOR))
        lines.append((f"SPAWNED {frame.spawned}  DROPPED {frame.dropped}", self.HUD_DIM_COLOR))
        lines.append((f"REMOVED {frame.removed}", self.HUD_DIM_COLOR))
        if self.signal_log:
            lines.append(("SIGNALS", self.HUD_DIM_COLOR))
            for notice in self.signal_log:
                color = self.SIGNAL_COLORS.get(notice.state, self.HUD_TEXT_COLOR)
                lines.append((f"  {notice.tick:>6} {notice.signal} {notice.state}", color))

        row_h = 16
        panel = pygame.Rect(10, 10, self.HUD_WIDTH, len(lines) * row_h + 12)
        pygame.draw.rect(surface, self.HUD_BG_COLOR, panel, border_radius=6)
        pygame.draw.rect(surface, self.HUD_BORDER_COLOR, panel, width=1, border_radius=6)

        y = panel.y + 6
        for text, color in lines:
            render_text(surface, self.font_tiny, text, (panel.x + 10, y), color)
            y += row_h

    # ------------------------------------------------------------------ #
    #  Legend                                                              #
    # ------------------------------------------------------------------ #

    def _draw_legend(self, surface: pygame.Surface) -> None:
        if self.font_tiny is None:
            return
        x = self.width - 120
        y = self.height - 16 - len(self.LEGEND_ITEMS) * 18 - 8
        box_w, box_h = 112, len(self.LEGEND_ITEMS) * 18 + 10
        pygame.draw.rect(
            surface, self.HUD_BG_COLOR, (x - 6, y - 4, box_w, box_h), border_radius=4
        )
        pygame.draw.rect(
            surface, self.HUD_BORDER_COLOR, (x - 6, y - 4, box_w, box_h), width=1, border_radius=4
        )
        for label, color in self.LEGEND_ITEMS:
            pygame.draw.circle(surface, color, (x + 4, y + 6), 4)
            text = self.font_tiny.render(label, True, (200, 200, 200))
            surface.blit(text, (x + 14, y))
            y += 18

    # ------------------------------------------------------------------ #
    #  Pause banner                                                        #
    # ------------------------------------------------------------------ #

    def _draw_pause_banner(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 100))
        surface.blit(overlay, (0, 0))
        if self.font_title:
            text = self.font_title.render("PAUSED", True, (220, 220, 220))
            surface.blit(text, text.get_rect(center=(self.width // 2, self.height // 2)))
