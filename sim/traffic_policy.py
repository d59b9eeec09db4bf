#!/usr/bin/env python3
"""
sim/traffic_policy.py
=====================
Tunable geometry, kinematics and arbitration parameters for the junction
simulation.  Every constant lives in the frozen :class:`JunctionPolicy`
dataclass so that experiments can swap policies without touching code.

Also provides two stateless helpers:

* :func:`ticks_for` — convert a wall-clock duration to a tick count.
* :func:`stop_line_gap` — distance from a vehicle to its stop line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sim.geometry import Rect


@dataclass(frozen=True)
class JunctionPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: world geometry, lane kinematics, arbitration watermarks,
    spawning, fixed-cycle timing.
    """

    # ── World geometry ────────────────────────────────────────────────────
    world_width: float = 800.0
    world_height: float = 600.0
    """A vehicle fully outside ``(0, 0, world_width, world_height)`` is removed."""

    junction_interior: Rect = Rect(350.0, 250.0, 100.0, 100.0)
    """Box past the stop lines.  Vehicles positioned here are never gated."""

    # ── Lane kinematics ───────────────────────────────────────────────────
    stop_threshold: float = 10.0
    """A red signal halts a vehicle whose gap to the stop line is below this."""

    collision_buffer: float = 8.0
    """Minimum gap kept to the vehicle ahead when both travel the same way."""

    yellow_halts: bool = True
    """Treat YELLOW like RED at the stop line (fixed-cycle controller only)."""

    # ── Arbitration ───────────────────────────────────────────────────────
    high_water_mark: int = 10
    """A group with more stopped vehicles than this may claim the junction."""

    low_water_mark: int = 5
    """The active group releases once its stopped count drops below this."""

    rotate_acquisition: bool = False
    """Start the starvation scan after the last granted side (round-robin).

    ``False`` keeps the fixed LEFT, RIGHT, TOP, BOTTOM order.
    """

    # ── Spawning ──────────────────────────────────────────────────────────
    spawn_probability: float = 0.02
    """Chance per tick that the spawner attempts one new vehicle."""

    vehicle_width: float = 20.0
    vehicle_height: float = 20.0
    vehicle_speed: float = 0.5
    """Displacement per tick along the travel axis."""

    # ── Fixed-cycle controller ────────────────────────────────────────────
    cycle_green_s: float = 5.0
    """Green time per approach when the timer controller is selected."""

    cycle_yellow_s: float = 1.0
    """Yellow time that closes each green phase."""

    def __post_init__(self) -> None:
        if self.world_width <= 0 or self.world_height <= 0:
            raise ValueError("world size must be positive")
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ValueError(f"spawn_probability must lie in [0, 1], got {self.spawn_probability}")
        if self.low_water_mark > self.high_water_mark:
            raise ValueError("low_water_mark must not exceed high_water_mark")
        if self.vehicle_speed <= 0:
            raise ValueError("vehicle_speed must be positive")

    @property
    def world_rect(self) -> Rect:
        return Rect(0.0, 0.0, self.world_width, self.world_height)


def ticks_for(seconds: float, tick_rate_hz: float) -> int:
    """Number of whole ticks covering *seconds* (at least one)."""
    return max(1, int(round(seconds * tick_rate_hz)))


def stop_line_gap(
    vehicle_rect: Rect,
    vx: float,
    vy: float,
    signal_rect: Rect,
    horizontal_lane: bool,
) -> Optional[float]:
    """Distance from the vehicle's leading edge to the signal footprint.

    The orientation comes from the lane (``horizontal_lane``) and the
    sign of the matching velocity component.  Returns ``None`` when the
    vehicle does not move along the lane's axis, i.e. it cannot be
    approaching this stop line.
    """
    if horizontal_lane:
        if vx > 0:
            return signal_rect.left - vehicle_rect.right
        if vx < 0:
            return vehicle_rect.left - signal_rect.right
    else:
        if vy > 0:
            return signal_rect.top - vehicle_rect.bottom
        if vy < 0:
            return vehicle_rect.top - signal_rect.bottom
    return None
