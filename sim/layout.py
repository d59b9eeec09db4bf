#!/usr/bin/env python3
"""
sim/layout.py
=============
Static geometry of the junction: roads, signals, lanes, approach groups
and spawn entry points.

Everything is described by plain tables and assembled by
:func:`build_intersection`, so a different junction only needs new
tables.  Two layouts ship with the package:

* :func:`standard_layout` — four approaches, three lanes each (800×600).
* :func:`single_vehicle_layout` — one lane and one 30×50 car (800×800).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from sim.geometry import Rect
from sim.lane import ColorRGB, Lane
from sim.signal import Signal
from sim.traffic_policy import JunctionPolicy
from sim.vehicle import Maneuver
from sim.zones import STANDARD_ZONES, TriggerZone


class Side(Enum):
    """Cardinal side an approach group enters from."""

    NONE = "NONE"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    TOP = "TOP"
    BOTTOM = "BOTTOM"


#: Fixed scan order used by the starvation check and the fixed-cycle timer.
SIDE_ORDER: Tuple[Side, ...] = (Side.LEFT, Side.RIGHT, Side.TOP, Side.BOTTOM)


# ── Table rows ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Road:
    name: str
    rect: Rect


@dataclass(frozen=True)
class LaneSpec:
    lane_id: str
    rect: Rect
    side: Side
    ignores_signal: bool = False


@dataclass(frozen=True)
class EntryPoint:
    """Where the spawner places a new vehicle for one lane.

    ``maneuvers`` lists the intentions drawn uniformly at spawn time.
    """

    lane_id: str
    x: float
    y: float
    vx: float
    vy: float
    maneuvers: Tuple[Maneuver, ...] = (Maneuver.STRAIGHT,)


# ── Assembled junction ────────────────────────────────────────────────────────

@dataclass
class ApproachGroup:
    """Lanes of one side sharing one signal."""

    side: Side
    signal: Signal
    lanes: List[Lane] = field(default_factory=list)

    def stopped_count(self) -> int:
        return sum(lane.stopped_count() for lane in self.lanes)

    def vehicle_count(self) -> int:
        return sum(len(lane) for lane in self.lanes)

    def any_vehicle_in(self, region: Rect) -> bool:
        return any(lane.any_vehicle_in(region) for lane in self.lanes)


@dataclass
class Intersection:
    """Everything the world needs to run one junction."""

    policy: JunctionPolicy
    roads: List[Road]
    signals: Dict[str, Signal]
    lanes: List[Lane]
    groups: Dict[Side, ApproachGroup]
    entries: Dict[Side, List[EntryPoint]]

    def lane(self, lane_id: str) -> Lane:
        for lane in self.lanes:
            if lane.id == lane_id:
                return lane
        raise KeyError(lane_id)

    def side_of(self, lane_id: str) -> Side:
        for side, group in self.groups.items():
            if any(lane.id == lane_id for lane in group.lanes):
                return side
        raise KeyError(lane_id)

    def all_vehicles(self) -> list:
        return [v for lane in self.lanes for v in lane.vehicles]


def build_intersection(
    policy: JunctionPolicy,
    roads: Sequence[Road],
    signals: Sequence[Tuple[str, Side, Rect]],
    lanes: Sequence[LaneSpec],
    entries: Sequence[Tuple[Side, EntryPoint]],
    zones: Sequence[TriggerZone] = STANDARD_ZONES,
    vehicle_colors: Optional[Dict[Side, ColorRGB]] = None,
    lane_color: ColorRGB = (255, 255, 255),
) -> Intersection:
    """Assemble an :class:`Intersection` from layout tables.

    Raises
    ------
    ValueError
        When a side has no signal, two signals claim the same side, or an
        entry point names an unknown lane.
    """
    vehicle_colors = vehicle_colors or {}
    signal_by_side: Dict[Side, Signal] = {}
    signal_table: Dict[str, Signal] = {}
    for signal_id, side, rect in signals:
        if side in signal_by_side:
            raise ValueError(f"side {side.value} has more than one signal")
        signal = Signal(signal_id, rect)
        signal_by_side[side] = signal
        signal_table[signal_id] = signal

    groups: Dict[Side, ApproachGroup] = {}
    built: List[Lane] = []
    for spec in lanes:
        signal = signal_by_side.get(spec.side)
        if signal is None:
            raise ValueError(f"lane {spec.lane_id} has no signal on side {spec.side.value}")
        lane = Lane(
            spec.lane_id,
            spec.rect,
            signal,
            ignores_signal=spec.ignores_signal,
            zones=zones,
            policy=policy,
            color=lane_color,
            vehicle_color=vehicle_colors.get(spec.side, (0, 0, 255)),
        )
        built.append(lane)
        groups.setdefault(spec.side, ApproachGroup(spec.side, signal)).lanes.append(lane)

    # Keep groups in scan order regardless of the lane table order.
    ordered = {side: groups[side] for side in SIDE_ORDER if side in groups}

    lane_ids = {lane.id for lane in built}
    entry_table: Dict[Side, List[EntryPoint]] = {}
    for side, entry in entries:
        if entry.lane_id not in lane_ids:
            raise ValueError(f"entry point names unknown lane {entry.lane_id}")
        entry_table.setdefault(side, []).append(entry)

    return Intersection(
        policy=policy,
        roads=list(roads),
        signals=signal_table,
        lanes=built,
        groups=ordered,
        entries=entry_table,
    )


# ── Standard four-way junction ────────────────────────────────────────────────

_STANDARD_ROADS: Tuple[Road, ...] = (
    Road("Road A", Rect(200, 250, 400, 20)),
    Road("Road B", Rect(200, 280, 400, 20)),
    Road("Road C", Rect(350, 100, 20, 400)),
    Road("Road D", Rect(380, 100, 20, 400)),
)

_STANDARD_SIGNALS: Tuple[Tuple[str, Side, Rect], ...] = (
    ("TL1", Side.RIGHT, Rect(470, 250, 25, 120)),
    ("TL2", Side.LEFT, Rect(325, 250, 25, 120)),
    ("TL3", Side.TOP, Rect(350, 225, 120, 25)),
    ("TL4", Side.BOTTOM, Rect(350, 370, 120, 25)),
)

# Numeric order matters: the greedy fallback breaks ties by table position.
_STANDARD_LANES: Tuple[LaneSpec, ...] = (
    LaneSpec("lane1", Rect(100, 260, 250, 20), Side.LEFT, ignores_signal=True),
    LaneSpec("lane2", Rect(100, 290, 250, 40), Side.LEFT),
    LaneSpec("lane3", Rect(100, 340, 250, 20), Side.LEFT),
    LaneSpec("lane4", Rect(360, 0, 20, 250), Side.TOP),
    LaneSpec("lane5", Rect(390, 0, 40, 250), Side.TOP),
    LaneSpec("lane6", Rect(440, 0, 20, 250), Side.TOP, ignores_signal=True),
    LaneSpec("lane7", Rect(470, 260, 250, 20), Side.RIGHT),
    LaneSpec("lane8", Rect(470, 290, 250, 40), Side.RIGHT),
    LaneSpec("lane9", Rect(470, 340, 250, 20), Side.RIGHT, ignores_signal=True),
    LaneSpec("lane10", Rect(440, 370, 20, 250), Side.BOTTOM),
    LaneSpec("lane11", Rect(390, 370, 40, 250), Side.BOTTOM),
    LaneSpec("lane12", Rect(360, 370, 20, 250), Side.BOTTOM, ignores_signal=True),
)

_SHARED = (Maneuver.STRAIGHT, Maneuver.RIGHT)
_FREE = (Maneuver.LEFT,)


def _standard_entries(speed: float) -> Tuple[Tuple[Side, EntryPoint], ...]:
    return (
        (Side.LEFT, EntryPoint("lane1", 100, 260, speed, 0.0, _FREE)),
        (Side.LEFT, EntryPoint("lane2", 100, 290, speed, 0.0, _SHARED)),
        (Side.RIGHT, EntryPoint("lane8", 700, 310, -speed, 0.0, _SHARED)),
        (Side.RIGHT, EntryPoint("lane9", 700, 340, -speed, 0.0, _FREE)),
        (Side.TOP, EntryPoint("lane5", 410, 0, 0.0, speed, _SHARED)),
        (Side.TOP, EntryPoint("lane6", 440, 0, 0.0, speed, _FREE)),
        (Side.BOTTOM, EntryPoint("lane11", 390, 600, 0.0, -speed, _SHARED)),
        (Side.BOTTOM, EntryPoint("lane12", 360, 600, 0.0, -speed, _FREE)),
    )


_STANDARD_VEHICLE_COLORS: Dict[Side, ColorRGB] = {
    Side.LEFT: (125, 5, 82),
    Side.RIGHT: (210, 145, 188),
    Side.TOP: (0, 0, 255),
    Side.BOTTOM: (0, 0, 0),
}


def standard_layout(policy: Optional[JunctionPolicy] = None) -> Intersection:
    """Four approaches of three lanes; the outer lane of each is signal-free."""
    policy = policy or JunctionPolicy()
    return build_intersection(
        policy,
        _STANDARD_ROADS,
        _STANDARD_SIGNALS,
        _STANDARD_LANES,
        _standard_entries(policy.vehicle_speed),
        zones=STANDARD_ZONES,
        vehicle_colors=_STANDARD_VEHICLE_COLORS,
    )


# ── Single-vehicle demo ───────────────────────────────────────────────────────

SINGLE_VEHICLE_POLICY = JunctionPolicy(
    world_width=800.0,
    world_height=800.0,
    junction_interior=Rect(325.0, 325.0, 150.0, 150.0),
    vehicle_width=30.0,
    vehicle_height=50.0,
    vehicle_speed=5.0,
    spawn_probability=0.0,
)


def single_vehicle_layout(policy: Optional[JunctionPolicy] = None) -> Intersection:
    """One free-flow lane carrying a single car straight down the screen.

    The car is placed by the caller (see :func:`sim.world.World.place`);
    nothing spawns on its own.
    """
    policy = policy or SINGLE_VEHICLE_POLICY
    return build_intersection(
        policy,
        roads=(
            Road("Road A", Rect(0, 325, 800, 150)),
            Road("Road B", Rect(40, 0, 150, 800)),
        ),
        signals=(("B", Side.TOP, Rect(400, 300, 50, 30)),),
        lanes=(LaneSpec("laneB", Rect(90, 0, 50, 800), Side.TOP, ignores_signal=True),),
        entries=((Side.TOP, EntryPoint("laneB", 100, 100, 0.0, policy.vehicle_speed)),),
        zones=(),
        vehicle_colors={Side.TOP: (0, 0, 255)},
    )
