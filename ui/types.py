"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]
RectTuple = Tuple[float, float, float, float]


@dataclass
class Viewport:
    """Uniform scale + offset mapping world coordinates to screen pixels.

    The world keeps its own origin (top-left, ``y`` down), so the mapping
    never flips an axis.
    """
    screen_w: int
    screen_h: int
    world_w: float = 800.0
    world_h: float = 600.0
    margin: int = 0

    @property
    def scale(self) -> float:
        if self.world_w <= 0 or self.world_h <= 0:
            return 1.0
        usable_w = max(1, self.screen_w - 2 * self.margin)
        usable_h = max(1, self.screen_h - 2 * self.margin)
        return min(usable_w / self.world_w, usable_h / self.world_h)

    @property
    def offset(self) -> Tuple[float, float]:
        s = self.scale
        return (
            (self.screen_w - self.world_w * s) / 2.0,
            (self.screen_h - self.world_h * s) / 2.0,
        )

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        ox, oy = self.offset
        s = self.scale
        return ox + wx * s, oy + wy * s

    def rect_to_screen(self, rect: RectTuple) -> Tuple[int, int, int, int]:
        left, top, width, height = rect
        sx, sy = self.world_to_screen(left, top)
        s = self.scale
        return int(round(sx)), int(round(sy)), max(1, int(round(width * s))), max(1, int(round(height * s)))


@dataclass
class SignalNotice:
    """One committed signal change shown in the HUD log."""
    tick: int
    signal: str
    state: str
