#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf: it never imports from
other project packages.
"""

# ── Simulation defaults ──────────────────────────────────────────────────────
WORLD_WIDTH: int = 800
WORLD_HEIGHT: int = 600
TICK_RATE_HZ: float = 300.0
DEFAULT_CONTROLLER: str = "arbiter"
DEFAULT_SEED = None
HEADLESS_TICKS: int = 0

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 800
WINDOW_HEIGHT: int = 600
TARGET_FPS: int = 60
WINDOW_TITLE: str = "Traffic Simulator"

# ── Single-vehicle demo ──────────────────────────────────────────────────────
DEMO_WINDOW_SIZE: int = 800
DEMO_TICK_RATE_HZ: float = 60.0

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL: str = "INFO"
LOG_FILE: str = "junction.log"
ARBITER_DEBUG_LOG: str = "arbiter_debug.log"
