#!/usr/bin/env python3
"""
main.py
=======
Entry point: four-way junction with demand-driven signal arbitration.

The simulation runs on a background :class:`~sim.sim_bridge.SimBridge`
thread; the pygame window reads its frames.  Environment overrides:

``JUNCTION_TICK_RATE_HZ``        simulation ticks per second
``JUNCTION_SEED``                spawner seed (integer)
``JUNCTION_CONTROLLER``          ``arbiter`` or ``fixed``
``JUNCTION_SPAWN_PROBABILITY``   per-tick spawn chance in [0, 1]
``JUNCTION_ROTATE_ACQUISITION``  round-robin starvation scan (bool)
``JUNCTION_HEADLESS_TICKS``      run N ticks without a window, then exit
``JUNCTION_LOG_LEVEL``           ``DEBUG``, ``INFO``, ...

Exit status: 0 on a normal stop, 1 when the window cannot be
initialised, 2 for an invalid configuration.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

import config
from logging_setup import setup_logging
from sim.sim_bridge import SimBridge
from sim.traffic_policy import JunctionPolicy
from sim.world import CONTROLLERS

log = logging.getLogger("main")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    tick_rate_hz: float = config.TICK_RATE_HZ
    seed: Optional[int] = config.DEFAULT_SEED
    controller: str = config.DEFAULT_CONTROLLER
    spawn_probability: float = JunctionPolicy.spawn_probability
    rotate_acquisition: bool = False
    headless_ticks: int = config.HEADLESS_TICKS
    log_level: int = logging.INFO


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name}={raw!r} is not a boolean")


def _parse_number(name: str, raw: str, kind):
    try:
        return kind(raw.strip())
    except ValueError:
        raise ValueError(f"{name}={raw!r} is not a valid {kind.__name__}") from None


def _settings_from_env(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read the ``JUNCTION_*`` overrides.

    Raises
    ------
    ValueError
        For unparseable values, a non-positive tick rate, a negative tick
        count, an out-of-range probability or an unknown controller.
    """
    env = os.environ if environ is None else environ
    defaults = Settings()

    tick_rate = defaults.tick_rate_hz
    if "JUNCTION_TICK_RATE_HZ" in env:
        tick_rate = _parse_number("JUNCTION_TICK_RATE_HZ", env["JUNCTION_TICK_RATE_HZ"], float)
    if tick_rate <= 0:
        raise ValueError(f"tick rate must be positive, got {tick_rate}")

    seed = defaults.seed
    if env.get("JUNCTION_SEED", "").strip():
        seed = _parse_number("JUNCTION_SEED", env["JUNCTION_SEED"], int)

    controller = env.get("JUNCTION_CONTROLLER", defaults.controller).strip().lower()
    if controller not in CONTROLLERS:
        raise ValueError(f"JUNCTION_CONTROLLER must be one of {CONTROLLERS}, got {controller!r}")

    spawn_probability = defaults.spawn_probability
    if "JUNCTION_SPAWN_PROBABILITY" in env:
        spawn_probability = _parse_number(
            "JUNCTION_SPAWN_PROBABILITY", env["JUNCTION_SPAWN_PROBABILITY"], float
        )
    if not 0.0 <= spawn_probability <= 1.0:
        raise ValueError(f"spawn probability must lie in [0, 1], got {spawn_probability}")

    rotate = defaults.rotate_acquisition
    if "JUNCTION_ROTATE_ACQUISITION" in env:
        rotate = _parse_bool("JUNCTION_ROTATE_ACQUISITION", env["JUNCTION_ROTATE_ACQUISITION"])

    headless_ticks = defaults.headless_ticks
    if "JUNCTION_HEADLESS_TICKS" in env:
        headless_ticks = _parse_number("JUNCTION_HEADLESS_TICKS", env["JUNCTION_HEADLESS_TICKS"], int)
    if headless_ticks < 0:
        raise ValueError(f"headless tick count must not be negative, got {headless_ticks}")

    level_name = env.get("JUNCTION_LOG_LEVEL", config.LOG_LEVEL).strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {level_name!r}")

    return Settings(
        tick_rate_hz=tick_rate,
        seed=seed,
        controller=controller,
        spawn_probability=spawn_probability,
        rotate_acquisition=rotate,
        headless_ticks=headless_ticks,
        log_level=level,
    )


def _build_bridge(settings: Settings) -> SimBridge:
    policy = JunctionPolicy(
        world_width=float(config.WORLD_WIDTH),
        world_height=float(config.WORLD_HEIGHT),
        spawn_probability=settings.spawn_probability,
        rotate_acquisition=settings.rotate_acquisition,
    )
    return SimBridge(
        tick_rate_hz=settings.tick_rate_hz,
        random_seed=settings.seed,
        controller=settings.controller,
        policy=policy,
    )


def _run_headless(bridge: SimBridge, ticks: int) -> int:
    frame = bridge.run_ticks(ticks)
    log.info(
        "headless run finished: tick=%d active=%s spawned=%d dropped=%d removed=%d on_road=%d",
        frame.tick, frame.active, frame.spawned, frame.dropped, frame.removed,
        len(frame.vehicles),
    )
    return 0


def _run_windowed(bridge: SimBridge) -> int:
    import pygame

    from ui import RenderInitError, run_pygame_view

    bridge.start()
    try:
        run_pygame_view(
            bridge,
            width=config.WINDOW_WIDTH,
            height=config.WINDOW_HEIGHT,
            fps=config.TARGET_FPS,
            title=config.WINDOW_TITLE,
        )
    except RenderInitError:
        log.exception("Render initialisation failed")
        pygame.quit()
        return 1
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down...")
        bridge.request_stop(sender="main")
    finally:
        bridge.stop()
    return 0


def main(environ: Optional[Mapping[str, str]] = None) -> int:
    try:
        settings = _settings_from_env(environ)
    except ValueError as exc:
        setup_logging(logging.INFO, arbiter_debug=False)
        log.error("Invalid configuration: %s", exc)
        return 2

    setup_logging(settings.log_level)
    log.info(
        "Starting junction simulation (controller=%s, %.1f Hz, seed=%s)",
        settings.controller, settings.tick_rate_hz, settings.seed,
    )

    try:
        bridge = _build_bridge(settings)
    except ValueError as exc:
        log.error("Invalid configuration: %s", exc)
        return 2

    if settings.headless_ticks > 0:
        return _run_headless(bridge, settings.headless_ticks)
    return _run_windowed(bridge)


if __name__ == "__main__":
    sys.exit(main())
