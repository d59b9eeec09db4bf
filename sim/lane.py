#!/usr/bin/env python3
"""
sim/lane.py
===========
One path segment holding an ordered list of vehicles.

The lane owns the per-tick kinematics of its vehicles: same-lane
collision avoidance, following distance, stop-line gating against its
signal, trigger-zone reorientation and removal once a vehicle has left
the world.  Lanes never look at each other.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from sim.geometry import Rect
from sim.signal import Signal, SignalState
from sim.traffic_policy import JunctionPolicy, stop_line_gap
from sim.vehicle import Vehicle
from sim.zones import TriggerZone, advance_phase, apply_trigger_zones

log = logging.getLogger("lane")

ColorRGB = Tuple[int, int, int]


class Lane:
    """Vehicles travelling along one rectangle, gated by one signal.

    Parameters
    ----------
    lane_id : str
        Identifier, unique within a layout (e.g. ``"lane2"``).
    rect : Rect
        Lane geometry.  Wider than tall means a horizontal lane.
    signal : Signal
        Shared signal of the lane's approach.  Not owned by the lane.
    ignores_signal : bool
        Free-flow lane that never stops at the stop line.
    zones : sequence of TriggerZone
        Reorientation table evaluated for every vehicle after it moves.
    policy : JunctionPolicy
        Thresholds and world bounds.
    color, vehicle_color : ColorRGB
        Fill colours exported to the renderer.
    """

    def __init__(
        self,
        lane_id: str,
        rect: Rect,
        signal: Signal,
        ignores_signal: bool = False,
        zones: Sequence[TriggerZone] = (),
        policy: Optional[JunctionPolicy] = None,
        color: ColorRGB = (255, 255, 255),
        vehicle_color: ColorRGB = (0, 0, 255),
    ) -> None:
        self.id = lane_id
        self.rect = rect
        self.signal = signal
        self.ignores_signal = ignores_signal
        self.zones = tuple(zones)
        self.policy = policy or JunctionPolicy()
        self.color = color
        self.vehicle_color = vehicle_color
        self.vehicles: List[Vehicle] = []

    def __len__(self) -> int:
        return len(self.vehicles)

    def __repr__(self) -> str:
        return f"Lane({self.id!r}, vehicles={len(self.vehicles)})"

    # ── queries ───────────────────────────────────────────────────────────

    def stopped_count(self) -> int:
        return sum(1 for v in self.vehicles if v.stopped)

    def any_vehicle_in(self, region: Rect) -> bool:
        return any(v.rect.intersects(region) for v in self.vehicles)

    # ── mutation ──────────────────────────────────────────────────────────

    def add_vehicle(self, vehicle: Vehicle) -> bool:
        """Append *vehicle* unless it would overlap one already here.

        A rejected vehicle is dropped, not queued.
        """
        rect = vehicle.rect
        for other in self.vehicles:
            if rect.intersects(other.rect):
                log.debug("%s: spawn of %s dropped, entry occupied by %s",
                          self.id, vehicle.id, other.id)
                return False
        self.vehicles.append(vehicle)
        return True

    def update(self) -> List[Vehicle]:
        """Advance every vehicle by at most one velocity step.

        Returns the vehicles removed because they left the world.
        """
        world = self.policy.world_rect
        junction = self.policy.junction_interior
        removed: List[Vehicle] = []
        survivors: List[Vehicle] = []

        for vehicle in self.vehicles:
            start = (vehicle.x, vehicle.y)
            should_move = not self._blocked_by_traffic(vehicle)
            if should_move and self._held_at_stop_line(vehicle, junction):
                should_move = False

            if should_move:
                vehicle.move()
                vehicle.stopped = False
            else:
                vehicle.stopped = True

            zone = apply_trigger_zones(vehicle, self.zones, start)
            if zone is not None:
                log.debug("%s: %s entered %s, now heading %s",
                          self.id, vehicle.id, zone.name, vehicle.heading)
            advance_phase(vehicle, junction)

            if vehicle.rect.is_fully_outside(world):
                removed.append(vehicle)
            else:
                survivors.append(vehicle)

        self.vehicles = survivors
        return removed

    # ── rules ─────────────────────────────────────────────────────────────

    def _blocked_by_traffic(self, vehicle: Vehicle) -> bool:
        """Collision and following-distance checks against the same lane."""
        candidate = vehicle.candidate_rect()
        current = vehicle.rect
        buffer = self.policy.collision_buffer
        for other in self.vehicles:
            if other is vehicle:
                continue
            if candidate.intersects(other.rect):
                return True
            gap = _following_gap(vehicle, current, other)
            if gap is not None and 0.0 < gap < buffer:
                return True
        return False

    def _held_at_stop_line(self, vehicle: Vehicle, junction: Rect) -> bool:
        if self.ignores_signal:
            return False
        if junction.contains_point(vehicle.x, vehicle.y):
            return False
        state = self.signal.state
        if state is SignalState.GREEN:
            return False
        if state is SignalState.YELLOW and not self.policy.yellow_halts:
            return False
        gap = stop_line_gap(
            vehicle.rect, vehicle.vx, vehicle.vy,
            self.signal.rect, self.rect.is_horizontal,
        )
        return gap is not None and 0.0 < gap < self.policy.stop_threshold


def _following_gap(vehicle: Vehicle, rect: Rect, other: Vehicle) -> Optional[float]:
    """Gap from *vehicle*'s leading edge to *other*'s trailing edge.

    ``None`` unless both travel along the same axis with the same sign
    and *other* is ahead.
    """
    o = other.rect
    if vehicle.vx * other.vx > 0:
        if vehicle.vx > 0 and o.left > rect.left:
            return o.left - rect.right
        if vehicle.vx < 0 and o.left < rect.left:
            return rect.left - o.right
    elif vehicle.vy * other.vy > 0:
        if vehicle.vy > 0 and o.top > rect.top:
            return o.top - rect.bottom
        if vehicle.vy < 0 and o.top < rect.top:
            return rect.top - o.bottom
    return None
