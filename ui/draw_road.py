"""
ui/draw_road.py
===============
Renders the static scene of a :class:`~sim.frame.Frame`: road surfaces
with their labels, lane rectangles, the junction outline and the
signal heads coloured by their committed state.

All methods are *pure renderers*: they read the frame and draw to a
surface.
"""

from __future__ import annotations

import pygame

from sim.frame import Frame

from .helpers import draw_alpha_rect, render_text


class RoadRenderer:
    """Mixin drawing roads, lanes, the junction box and signals."""

    def draw_roads(self, surface: pygame.Surface, frame: Frame) -> None:
        for road in frame.roads:
            rect = self._screen_rect(road.rect)
            pygame.draw.rect(surface, self.ROAD_COLOR, rect)
            if self.font_tiny is not None:
                render_text(surface, self.font_tiny, road.name, rect.center,
                            self.ROAD_LABEL_COLOR, anchor="center")

    def draw_lanes(self, surface: pygame.Surface, frame: Frame) -> None:
        for lane in frame.lanes:
            rect = self._screen_rect(lane.rect)
            draw_alpha_rect(surface, (*lane.color, self.LANE_ALPHA), rect)
            pygame.draw.rect(surface, self.LANE_EDGE_COLOR, rect, width=1)

    def draw_junction(self, surface: pygame.Surface, frame: Frame) -> None:
        rect = self._screen_rect(frame.junction)
        pygame.draw.rect(surface, self.JUNCTION_OUTLINE_COLOR, rect, width=1)

    def draw_signals(self, surface: pygame.Surface, frame: Frame) -> None:
        for signal in frame.signals:
            rect = self._screen_rect(signal.rect)
            color = self.SIGNAL_COLORS.get(signal.state, self.SIGNAL_COLORS["RED"])
            pygame.draw.rect(surface, color, rect)
            if self.font_tiny is not None:
                render_text(surface, self.font_tiny, signal.id, rect.center,
                            (0, 0, 0), anchor="center")
