#!/usr/bin/env python3
"""
sim/geometry.py
===============
Axis-aligned float rectangles in screen coordinates (origin top-left,
``y`` grows downwards).

Vehicles advance in half-unit steps, so integer ``pygame.Rect`` cannot
hold their positions; the core uses this small value type instead and
the UI converts at draw time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Rect:
    """Immutable rectangle ``(left, top, width, height)``."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def is_horizontal(self) -> bool:
        """True when the rectangle is wider than it is tall."""
        return self.width > self.height

    def moved(self, dx: float, dy: float) -> "Rect":
        return Rect(self.left + dx, self.top + dy, self.width, self.height)

    def intersects(self, other: "Rect") -> bool:
        """True when the two rectangles share a region of non-zero area.

        Rectangles that only touch along an edge do not intersect.
        """
        return (
            max(self.left, other.left) < min(self.right, other.right)
            and max(self.top, other.top) < min(self.bottom, other.bottom)
        )

    def contains_point(self, x: float, y: float) -> bool:
        """Inclusive point test (edges count as inside)."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    def union(self, other: "Rect") -> "Rect":
        """Smallest rectangle covering both *self* and *other*."""
        left = min(self.left, other.left)
        top = min(self.top, other.top)
        return Rect(
            left,
            top,
            max(self.right, other.right) - left,
            max(self.bottom, other.bottom) - top,
        )

    def is_fully_outside(self, bounds: "Rect") -> bool:
        """True when no part of *self* lies within *bounds* (edges included)."""
        return (
            self.right < bounds.left
            or self.left > bounds.right
            or self.bottom < bounds.top
            or self.top > bounds.bottom
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.width, self.height)
