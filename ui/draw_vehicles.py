"""
ui/draw_vehicles.py
===================
Draws the vehicles of a :class:`~sim.frame.Frame` as filled rectangles in
their lane colour; stopped vehicles get a red outline.
"""

from __future__ import annotations

import pygame

from sim.frame import Frame


class VehicleRenderer:
    """Mixin that draws every vehicle."""

    def draw_vehicles(self, surface: pygame.Surface, frame: Frame) -> None:
        for vehicle in frame.vehicles:
            rect = self._screen_rect(vehicle.rect)
            pygame.draw.rect(surface, vehicle.color, rect)
            if vehicle.stopped:
                pygame.draw.rect(surface, self.STOPPED_OUTLINE_COLOR, rect, width=1)
