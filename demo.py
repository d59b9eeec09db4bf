#!/usr/bin/env python3
"""
Quick demo: one 30×50 car driving straight down a single free-flow lane
of an 800×800 world, past signal ``B`` cycling on the fixed timer.  The
car is removed once it has left the world.

Usage:
    python3 demo.py
"""

import logging
import sys

import config
from logging_setup import setup_logging
from sim.layout import single_vehicle_layout
from sim.sim_bridge import SimBridge
from sim.world import World

log = logging.getLogger("main")


def build_demo_world() -> World:
    """Single-vehicle world with its one car already placed."""
    world = World(
        intersection=single_vehicle_layout(),
        controller="fixed",
        tick_rate_hz=config.DEMO_TICK_RATE_HZ,
    )
    world.place("laneB")
    return world


def main() -> int:
    import pygame

    from ui import RenderInitError, run_pygame_view

    setup_logging(logging.INFO, arbiter_debug=False)
    bridge = SimBridge(world=build_demo_world(), tick_rate_hz=config.DEMO_TICK_RATE_HZ)

    print("Starting single-vehicle demo...")
    print("Controls: SPACE=pause  R=reset  L=legend  H=hud  Q/ESC=quit")
    bridge.start()
    try:
        run_pygame_view(
            bridge,
            width=config.DEMO_WINDOW_SIZE,
            height=config.DEMO_WINDOW_SIZE,
            fps=config.TARGET_FPS,
            title=config.WINDOW_TITLE,
        )
    except RenderInitError:
        log.exception("Render initialisation failed")
        pygame.quit()
        return 1
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down...")
        bridge.request_stop(sender="demo")
    finally:
        bridge.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
