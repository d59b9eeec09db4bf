#!/usr/bin/env python3
"""
sim/vehicle.py
==============
Minimal kinematic vehicle: a rectangle moving by a constant velocity
step each tick, plus the discrete path phase used by the trigger zones.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from sim.geometry import Rect


class Heading(Enum):
    """Screen-space travel direction (NORTH is up, ``vy < 0``)."""

    EAST = "EAST"
    WEST = "WEST"
    NORTH = "NORTH"
    SOUTH = "SOUTH"


_HEADING_VECTORS: Dict[Heading, Tuple[float, float]] = {
    Heading.EAST: (1.0, 0.0),
    Heading.WEST: (-1.0, 0.0),
    Heading.NORTH: (0.0, -1.0),
    Heading.SOUTH: (0.0, 1.0),
}


class Maneuver(Enum):
    """What the vehicle intends to do at the junction.

    ``LEFT`` vehicles use the signal-free lanes and follow the lane's
    bend through the junction corner.
    """

    STRAIGHT = "STRAIGHT"
    RIGHT = "RIGHT"
    LEFT = "LEFT"


class PathPhase(Enum):
    APPROACH = "APPROACH"
    TURN_LEFT = "TURN_LEFT"
    TURN_RIGHT = "TURN_RIGHT"
    STRAIGHT = "STRAIGHT"
    DEPART = "DEPART"


def heading_of(vx: float, vy: float) -> Optional[Heading]:
    if vx > 0:
        return Heading.EAST
    if vx < 0:
        return Heading.WEST
    if vy < 0:
        return Heading.NORTH
    if vy > 0:
        return Heading.SOUTH
    return None


@dataclass
class Vehicle:
    """A single car owned by exactly one :class:`~sim.lane.Lane`.

    Attributes
    ----------
    id : str
        Unique identifier (e.g. ``VEH_00042``).
    x, y : float
        Top-left corner of the bounding box.
    width, height : float
        Bounding-box extent.
    vx, vy : float
        Displacement applied per tick when the vehicle moves.
    maneuver : Maneuver
        Intended move, fixed at spawn.
    phase : PathPhase
        Current position along the path through the junction.
    turned : bool
        Set once a right turn has been executed; never cleared.
    stopped : bool
        True when the last update suppressed the move.
    """

    id: str
    x: float
    y: float
    width: float
    height: float
    vx: float
    vy: float
    maneuver: Maneuver = Maneuver.STRAIGHT
    phase: PathPhase = PathPhase.APPROACH
    turned: bool = False
    stopped: bool = field(default=False, repr=False)

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def candidate_rect(self) -> Rect:
        """Bounding box after one velocity step."""
        return self.rect.moved(self.vx, self.vy)

    @property
    def heading(self) -> Optional[Heading]:
        return heading_of(self.vx, self.vy)

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def move(self) -> None:
        self.x += self.vx
        self.y += self.vy

    def reorient(self, heading: Heading) -> None:
        """Point the velocity along *heading*, keeping its magnitude."""
        speed = self.speed
        ux, uy = _HEADING_VECTORS[heading]
        self.vx = ux * speed
        self.vy = uy * speed

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "vx": self.vx,
            "vy": self.vy,
            "maneuver": self.maneuver.value,
            "phase": self.phase.value,
            "turned": self.turned,
            "stopped": self.stopped,
        }
