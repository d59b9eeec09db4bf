#!/usr/bin/env python3
"""
sim/zones.py
============
Declarative trigger zones that re-point vehicles through the junction.

Each :class:`TriggerZone` row says: *a vehicle whose position at the
start of the tick lies in ``rect``, heading ``heading`` and intending
``maneuver`` turns to ``new_heading`` and enters ``new_phase``*.  Rows
with ``marks_turn`` set fire at most once per vehicle
(``Vehicle.turned``).  Every row is gated on the current heading, so
re-pointing the vehicle disarms the row.

:data:`STANDARD_ZONES` holds the rows for the default 800×600 layout;
the four corners carry the signal-free lanes around their bend, the
other four rows execute right turns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from sim.geometry import Rect
from sim.vehicle import Heading, Maneuver, PathPhase, Vehicle

_IN_JUNCTION = (PathPhase.STRAIGHT, PathPhase.TURN_LEFT, PathPhase.TURN_RIGHT)


@dataclass(frozen=True)
class TriggerZone:
    name: str
    rect: Rect
    heading: Heading
    new_heading: Heading
    new_phase: PathPhase
    maneuver: Optional[Maneuver] = None
    """``None`` matches every maneuver."""
    marks_turn: bool = False

    def matches(self, vehicle: Vehicle, x: float, y: float) -> bool:
        """True when *vehicle*, positioned at ``(x, y)`` this tick, triggers the row."""
        if vehicle.heading is not self.heading:
            return False
        if self.maneuver is not None and vehicle.maneuver is not self.maneuver:
            return False
        if self.marks_turn and vehicle.turned:
            return False
        return self.rect.contains_point(x, y)


STANDARD_ZONES: Tuple[TriggerZone, ...] = (
    # ── Corners (lane bends of the signal-free lanes) ────────────────────
    TriggerZone("corner_nw", Rect(360, 260, 20, 20),
                Heading.EAST, Heading.NORTH, PathPhase.TURN_LEFT),
    TriggerZone("corner_ne", Rect(420, 260, 20, 20),
                Heading.SOUTH, Heading.EAST, PathPhase.TURN_LEFT),
    TriggerZone("corner_se", Rect(441, 320, 0, 20),
                Heading.WEST, Heading.SOUTH, PathPhase.TURN_LEFT),
    TriggerZone("corner_sw", Rect(360, 341, 20, 0),
                Heading.NORTH, Heading.WEST, PathPhase.TURN_LEFT),
    # ── Right turns ──────────────────────────────────────────────────────
    TriggerZone("right_from_top", Rect(410, 310, 20, 20),
                Heading.SOUTH, Heading.WEST, PathPhase.TURN_RIGHT,
                maneuver=Maneuver.RIGHT, marks_turn=True),
    TriggerZone("right_from_bottom", Rect(390, 291, 20, 0),
                Heading.NORTH, Heading.EAST, PathPhase.TURN_RIGHT,
                maneuver=Maneuver.RIGHT, marks_turn=True),
    TriggerZone("right_from_left", Rect(410, 290, 0, 20),
                Heading.EAST, Heading.SOUTH, PathPhase.TURN_RIGHT,
                maneuver=Maneuver.RIGHT, marks_turn=True),
    TriggerZone("right_from_right", Rect(391, 310, 0, 20),
                Heading.WEST, Heading.NORTH, PathPhase.TURN_RIGHT,
                maneuver=Maneuver.RIGHT, marks_turn=True),
)


def apply_trigger_zones(
    vehicle: Vehicle,
    zones: Sequence[TriggerZone],
    position: Tuple[float, float],
) -> Optional[TriggerZone]:
    """Fire the first matching zone for *vehicle*; returns it, or None.

    *position* is where the vehicle stood before this tick's move, so a
    zone boundary reached by the move fires on the following tick.
    """
    x, y = position
    for zone in zones:
        if zone.matches(vehicle, x, y):
            vehicle.reorient(zone.new_heading)
            vehicle.phase = zone.new_phase
            if zone.marks_turn:
                vehicle.turned = True
            return zone
    return None


def advance_phase(vehicle: Vehicle, junction: Rect) -> None:
    """APPROACH → STRAIGHT on entering the junction, then DEPART on leaving."""
    inside = junction.contains_point(vehicle.x, vehicle.y)
    if inside and vehicle.phase is PathPhase.APPROACH:
        vehicle.phase = PathPhase.STRAIGHT
    elif not inside and vehicle.phase in _IN_JUNCTION:
        vehicle.phase = PathPhase.DEPART
