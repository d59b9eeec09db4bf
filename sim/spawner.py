#!/usr/bin/env python3
"""
sim/spawner.py
==============
Stochastic vehicle source feeding the lanes of an :class:`Intersection`.

Every tick the spawner draws once against ``spawn_probability``.  On a
hit it picks a side uniformly, then one of that side's entry lanes, then
the maneuver the entry allows.  The new vehicle goes through
:meth:`Lane.add_vehicle`; if the entry is occupied it is dropped.

All randomness comes from the injected :class:`random.Random`, so a
fixed seed replays the same traffic.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from sim.layout import SIDE_ORDER, EntryPoint, Intersection
from sim.vehicle import Maneuver, Vehicle

log = logging.getLogger("spawner")


class Spawner:
    """Random arrivals on the entry points of one intersection.

    Parameters
    ----------
    intersection : Intersection
        Target lanes and entry table.
    rng : random.Random or None
        Source of randomness; a fresh unseeded generator when omitted.
    """

    def __init__(
        self,
        intersection: Intersection,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.intersection = intersection
        self.policy = intersection.policy
        self.rng = rng or random.Random()
        self.spawned = 0
        self.dropped = 0
        self._next_id = 1

    def tick(self) -> Optional[Vehicle]:
        """Maybe add one vehicle; returns it when it was inserted."""
        if self.rng.random() >= self.policy.spawn_probability:
            return None
        sides = [side for side in SIDE_ORDER if self.intersection.entries.get(side)]
        if not sides:
            return None
        side = self.rng.choice(sides)
        entry = self.rng.choice(self.intersection.entries[side])
        maneuver = self.rng.choice(entry.maneuvers)
        return self.spawn(entry, maneuver)

    def spawn(self, entry: EntryPoint, maneuver: Maneuver = Maneuver.STRAIGHT) -> Optional[Vehicle]:
        """Insert a vehicle at *entry* unconditionally (no probability draw).

        Returns ``None`` when the entry is occupied and the vehicle was
        dropped.
        """
        vehicle = Vehicle(
            id=f"VEH_{self._next_id:05d}",
            x=entry.x,
            y=entry.y,
            width=self.policy.vehicle_width,
            height=self.policy.vehicle_height,
            vx=entry.vx,
            vy=entry.vy,
            maneuver=maneuver,
        )
        self._next_id += 1
        lane = self.intersection.lane(entry.lane_id)
        if not lane.add_vehicle(vehicle):
            self.dropped += 1
            return None
        self.spawned += 1
        log.debug("spawn %s on %s (%s)", vehicle.id, lane.id, maneuver.value)
        return vehicle

    def reset(self) -> None:
        self.spawned = 0
        self.dropped = 0
        self._next_id = 1
