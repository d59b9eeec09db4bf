#!/usr/bin/env python3
"""
Main view class: combines all UI mixins into one runnable Pygame window.

Module layout
─────────────
    ui/
    ├── types.py           – ColorRGB, Viewport, SignalNotice
    ├── errors.py          – RenderInitError
    ├── constants.py       – ViewConstants mixin (all class-level constants)
    ├── helpers.py         – ViewHelpers mixin  (fonts, rect conversion)
    ├── draw_road.py       – RoadRenderer mixin (roads, lanes, signals)
    ├── draw_vehicles.py   – VehicleRenderer mixin
    ├── hud.py             – HudRenderer mixin  (HUD, legend, pause banner)
    └── pygame_view.py     – PygameIntersectionView (this file – main loop)

The view never touches the simulation directly.  Each frame it reads the
latest immutable :class:`~sim.frame.Frame` from the bridge and draws it;
closing the window or pressing ``Q`` / ``Esc`` publishes a stop request.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Optional

import pygame

from .constants import ViewConstants
from .draw_road import RoadRenderer
from .draw_vehicles import VehicleRenderer
from .errors import RenderInitError
from .helpers import ViewHelpers
from .hud import HudRenderer
from .types import SignalNotice, Viewport


class PygameIntersectionView(
    ViewConstants,
    ViewHelpers,
    RoadRenderer,
    VehicleRenderer,
    HudRenderer,
):
    """Junction visualiser powered by Pygame.

    Inherits drawing logic from focused mixin modules so each file
    stays small and single-purpose.

    Parameters
    ----------
    bridge : SimBridge
        Anything exposing ``get_frame``, ``request_stop``,
        ``poll_signal_events``, ``set_paused`` and ``reset``.
    width, height : int
        Initial window size in pixels.
    fps : int
        Render frame-rate cap.
    title : str
        Window caption.
    """

    def __init__(
        self,
        bridge: Any,
        width: int = 800,
        height: int = 600,
        fps: int = 60,
        title: str = "Traffic Simulator",
    ):
        self.bridge = bridge
        self.width = width
        self.height = height
        self.fps = fps
        self.title = title

        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.font_small: Optional[pygame.font.Font] = None
        self.font_tiny: Optional[pygame.font.Font] = None
        self.font_title: Optional[pygame.font.Font] = None

        self.viewport = Viewport(width, height, margin=self.VIEW_MARGIN)
        self.signal_log: Deque[SignalNotice] = deque(maxlen=self.HUD_LOG_LINES)

        # UI state
        self.paused = False
        self.show_legend = True
        self.show_hud = True

    # ------------------------------------------------------------------ #
    #  Setup                                                               #
    # ------------------------------------------------------------------ #
    def _init_display(self) -> None:
        try:
            pygame.init()
            pygame.display.set_caption(self.title)
            self.screen = pygame.display.set_mode(
                (self.width, self.height), pygame.RESIZABLE
            )
        except pygame.error as exc:
            raise RenderInitError(f"could not open the window: {exc}") from exc
        self.clock = pygame.time.Clock()
        self.font_small = self._load_font(13, bold=False)
        self.font_tiny = self._load_font(11, bold=False)
        self.font_title = self._load_font(28, bold=True)

    def _handle_resize(self, new_w: int, new_h: int) -> None:
        self.width = max(400, new_w)
        self.height = max(300, new_h)
        self.viewport.screen_w = self.width
        self.viewport.screen_h = self.height
        self.screen = pygame.display.set_mode(
            (self.width, self.height), pygame.RESIZABLE
        )

    # ------------------------------------------------------------------ #
    #  Input                                                               #
    # ------------------------------------------------------------------ #
    def _handle_event(self, event: pygame.event.Event) -> bool:
        """Process one event; returns False once the view should close."""
        if event.type == pygame.QUIT:
            self.bridge.request_stop()
            return False
        if event.type == pygame.VIDEORESIZE:
            self._handle_resize(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_q, pygame.K_ESCAPE):
                self.bridge.request_stop()
                return False
            if event.key == pygame.K_SPACE:
                self.paused = not self.paused
                self.bridge.set_paused(self.paused)
            elif event.key == pygame.K_l:
                self.show_legend = not self.show_legend
            elif event.key == pygame.K_h:
                self.show_hud = not self.show_hud
            elif event.key == pygame.K_r:
                self.signal_log.clear()
                self.paused = False
                self.bridge.reset()
                self.bridge.set_paused(False)
        return True

    def _collect_signal_events(self) -> None:
        for event in self.bridge.poll_signal_events():
            payload = event.payload
            self.signal_log.append(SignalNotice(
                tick=int(payload.get("tick", 0)),
                signal=str(payload.get("signal", "?")),
                state=str(payload.get("state", "?")),
            ))

    # ------------------------------------------------------------------ #
    #  Main loop                                                           #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        self._init_display()

        running = True
        while running:
            self.clock.tick(self.fps)

            # ---- events ------------------------------------------------- #
            for event in pygame.event.get():
                if not self._handle_event(event):
                    running = False
                    break
            if not running:
                break

            # ---- read-only snapshot ------------------------------------- #
            frame = self.bridge.get_frame()
            self._collect_signal_events()
            self.viewport.world_w, self.viewport.world_h = frame.world_size

            # ---- render ------------------------------------------------- #
            self.screen.fill(self.BG_COLOR)
            self.draw_roads(self.screen, frame)
            self.draw_lanes(self.screen, frame)
            self.draw_junction(self.screen, frame)
            self.draw_signals(self.screen, frame)
            self.draw_vehicles(self.screen, frame)

            # HUD layers (drawn on top)
            if self.show_hud:
                self.draw_hud(self.screen, frame)
            if self.show_legend:
                self._draw_legend(self.screen)
            if self.paused:
                self._draw_pause_banner(self.screen)

            pygame.display.flip()

        pygame.quit()


# ---------------------------------------------------------------------- #
#  Convenience entry point                                                 #
# ---------------------------------------------------------------------- #
def run_pygame_view(
    bridge: Any,
    width: int = 800,
    height: int = 600,
    fps: int = 60,
    title: str = "Traffic Simulator",
) -> None:
    view = PygameIntersectionView(bridge=bridge, width=width, height=height, fps=fps, title=title)
    view.run()


if __name__ == "__main__":
    raise SystemExit(
        "pygame_view.py needs a bridge object. Run `python main.py` "
        "or call run_pygame_view(your_bridge)."
    )
