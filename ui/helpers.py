"""
ui/helpers.py
=============
Shared utilities for the UI mixins: font loading, text rendering,
alpha-surface drawing and world → screen rectangle conversion.
"""

from __future__ import annotations

from typing import Tuple

import pygame

from .errors import RenderInitError
from .types import RectTuple


class ViewHelpers:
    """Mixin with small drawing helpers; expects ``self.viewport``."""

    def _load_font(self, size: int, bold: bool = False) -> pygame.font.Font:
        """Load the UI font.

        Raises
        ------
        RenderInitError
            When the font subsystem is unavailable or the font cannot be
            created.
        """
        try:
            if not pygame.font.get_init():
                pygame.font.init()
            return pygame.font.SysFont(self.FONT_NAME, size, bold=bold)
        except (pygame.error, OSError) as exc:
            raise RenderInitError(f"could not load font {self.FONT_NAME!r}: {exc}") from exc

    def _screen_rect(self, rect: RectTuple) -> pygame.Rect:
        return pygame.Rect(self.viewport.rect_to_screen(rect))


# ── Alpha drawing helpers ────────────────────────────────────────────────────

def draw_alpha_rect(
    target: pygame.Surface,
    color: Tuple[int, ...],
    rect: pygame.Rect,
    border_radius: int = 0,
) -> None:
    """Draw a semi-transparent rectangle (colour tuple with 4 channels)."""
    tmp = pygame.Surface((rect.w, rect.h), pygame.SRCALPHA)
    pygame.draw.rect(tmp, color, (0, 0, rect.w, rect.h), border_radius=border_radius)
    target.blit(tmp, rect.topleft)


# ── Text helper ──────────────────────────────────────────────────────────────

def render_text(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: Tuple[int, int],
    color: Tuple[int, ...] = (230, 230, 235),
    anchor: str = "topleft",
) -> pygame.Rect:
    """Render text with flexible *anchor* ('topleft', 'center', 'midright' …)."""
    img = font.render(text, True, color)
    rect = img.get_rect(**{anchor: pos})
    surface.blit(img, rect)
    return rect
