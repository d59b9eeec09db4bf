#!/usr/bin/env python3
"""
sim/world.py
============
Single-junction world.

:class:`World` owns one :class:`~sim.layout.Intersection`, its
:class:`~sim.spawner.Spawner` and exactly one junction controller
(demand arbiter or fixed-cycle timer).  A tick is split in two so the
scheduler can guard the signal write:

* :meth:`World.step` — spawn, update every lane, let the controller
  decide.  Signals are only read.
* :meth:`World.commit` — write the decision to the signals.

:meth:`World.advance` runs both back to back.  :meth:`World.snapshot`
exports an immutable :class:`~sim.frame.Frame` and never mutates state.
"""

from __future__ import annotations

import logging
import random
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple, Union

from sim.arbiter import DemandArbiter, FixedCycleController, stopped_counts
from sim.frame import Frame, LaneView, RoadView, SignalView, VehicleView
from sim.layout import EntryPoint, Intersection, Side, standard_layout
from sim.signal import Signal, SignalState
from sim.spawner import Spawner
from sim.traffic_policy import JunctionPolicy, ticks_for
from sim.vehicle import Maneuver, Vehicle

log = logging.getLogger("world")

Controller = Union[DemandArbiter, FixedCycleController]

CONTROLLERS = ("arbiter", "fixed")


def make_controller(name: str, policy: JunctionPolicy, tick_rate_hz: float) -> Controller:
    """Build the controller called *name* (``"arbiter"`` or ``"fixed"``).

    Raises
    ------
    ValueError
        For an unknown controller name.
    """
    if name == "arbiter":
        return DemandArbiter()
    if name == "fixed":
        yellow = ticks_for(policy.cycle_yellow_s, tick_rate_hz) if policy.cycle_yellow_s > 0 else 0
        return FixedCycleController(
            green_ticks=ticks_for(policy.cycle_green_s, tick_rate_hz),
            yellow_ticks=yellow,
        )
    raise ValueError(f"unknown controller {name!r}; expected one of {CONTROLLERS}")


class World:
    """Vehicles, lanes, signals and the controller of one junction.

    Parameters
    ----------
    intersection : Intersection or None
        Junction to simulate.  Uses :func:`standard_layout` when *None*.
    seed : int or None
        Seed for the spawner's random generator.
    controller : str
        ``"arbiter"`` (demand-driven) or ``"fixed"`` (timer).
    tick_rate_hz : float
        Used to convert the fixed-cycle timings to ticks.
    policy : JunctionPolicy or None
        Only consulted when *intersection* is *None*; otherwise the
        intersection's own policy wins.
    """

    def __init__(
        self,
        intersection: Optional[Intersection] = None,
        seed: Optional[int] = None,
        controller: str = "arbiter",
        tick_rate_hz: float = 300.0,
        policy: Optional[JunctionPolicy] = None,
    ) -> None:
        self.intersection = intersection or standard_layout(policy)
        self.policy = self.intersection.policy
        self.controller = make_controller(controller, self.policy, tick_rate_hz)
        self._seed = seed
        self._rng = random.Random(seed)
        self.spawner = Spawner(self.intersection, self._rng)
        self.tick_count = 0
        self.removed = 0
        self._placements: List[Tuple[str, Maneuver]] = []

    # ── queries ───────────────────────────────────────────────────────────

    @property
    def controller_name(self) -> str:
        return self.controller.name

    @property
    def active(self) -> Side:
        return self.controller.active

    def all_vehicles(self) -> List[Vehicle]:
        return self.intersection.all_vehicles()

    def vehicle_count(self) -> int:
        return sum(len(lane) for lane in self.intersection.lanes)

    def is_empty(self) -> bool:
        return self.vehicle_count() == 0

    def signal(self, signal_id: str) -> Signal:
        return self.intersection.signals[signal_id]

    # ── tick ──────────────────────────────────────────────────────────────

    def step(self) -> None:
        """Spawn, move every lane, then decide (signals untouched)."""
        self.spawner.tick()
        for lane in self.intersection.lanes:
            for vehicle in lane.update():
                self.removed += 1
                log.debug("remove %s from %s (left the world)", vehicle.id, lane.id)
        self.controller.decide(self.intersection)
        self.tick_count += 1

    def commit(self) -> List[Signal]:
        """Write the controller's decision to the signals.

        Returns the signals whose state changed.
        """
        changed = self.controller.commit(self.intersection)
        for signal in changed:
            log.debug("tick %d: %s -> %s", self.tick_count, signal.id, signal.state.value)
        return changed

    def advance(self) -> List[Signal]:
        self.step()
        return self.commit()

    # ── placement ─────────────────────────────────────────────────────────

    def entry_for(self, lane_id: str) -> EntryPoint:
        for entries in self.intersection.entries.values():
            for entry in entries:
                if entry.lane_id == lane_id:
                    return entry
        raise KeyError(lane_id)

    def place(self, lane_id: str, maneuver: Maneuver = Maneuver.STRAIGHT) -> Optional[Vehicle]:
        """Put one vehicle on the entry point of *lane_id* right now.

        Placements made before the first tick are replayed by :meth:`reset`.
        """
        if self.tick_count == 0:
            self._placements.append((lane_id, maneuver))
        return self.spawner.spawn(self.entry_for(lane_id), maneuver)

    # ── export ────────────────────────────────────────────────────────────

    def snapshot(self) -> Frame:
        """Immutable drawable view of the current state."""
        inter = self.intersection
        side_by_lane: Dict[str, str] = {}
        signal_views = []
        for side, group in inter.groups.items():
            for lane in group.lanes:
                side_by_lane[lane.id] = side.value
            signal_views.append(SignalView(
                id=group.signal.id,
                side=side.value,
                rect=group.signal.rect.as_tuple(),
                state=group.signal.state.value,
            ))

        vehicle_views = []
        for lane in inter.lanes:
            for v in lane.vehicles:
                vehicle_views.append(VehicleView(
                    id=v.id,
                    rect=v.rect.as_tuple(),
                    color=lane.vehicle_color,
                    phase=v.phase.value,
                    maneuver=v.maneuver.value,
                    stopped=v.stopped,
                ))

        return Frame(
            tick=self.tick_count,
            world_size=(self.policy.world_width, self.policy.world_height),
            junction=self.policy.junction_interior.as_tuple(),
            roads=tuple(RoadView(road.name, road.rect.as_tuple()) for road in inter.roads),
            lanes=tuple(
                LaneView(lane.id, side_by_lane[lane.id], lane.rect.as_tuple(),
                         lane.color, lane.ignores_signal)
                for lane in inter.lanes
            ),
            signals=tuple(signal_views),
            vehicles=tuple(vehicle_views),
            active=self.controller.active.value,
            controller=self.controller.name,
            stopped_counts=MappingProxyType(
                {s.value: c for s, c in stopped_counts(inter.groups).items()}
            ),
            vehicle_counts=MappingProxyType(
                {s.value: g.vehicle_count() for s, g in inter.groups.items()}
            ),
            spawned=self.spawner.spawned,
            dropped=self.spawner.dropped,
            removed=self.removed,
        )

    # ── reset ─────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Empty every lane, turn every signal RED and replay the seed.

        Vehicles placed before the first tick are put back.
        """
        for lane in self.intersection.lanes:
            lane.vehicles = []
        for signal in self.intersection.signals.values():
            signal._apply(SignalState.RED)
        self.controller.reset()
        self._rng.seed(self._seed)
        self.spawner.reset()
        self.tick_count = 0
        self.removed = 0
        placements, self._placements = self._placements, []
        for lane_id, maneuver in placements:
            self.place(lane_id, maneuver)
        log.info("world reset (seed=%s)", self._seed)
