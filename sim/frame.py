#!/usr/bin/env python3
"""
sim/frame.py
============
Immutable drawable snapshot exported by :meth:`sim.world.World.snapshot`.

The renderer only ever sees a :class:`Frame`; it never touches lanes,
vehicles or signals directly.  Rectangles are plain
``(left, top, width, height)`` tuples so the UI can hand them to pygame
without importing the simulation core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

RectTuple = Tuple[float, float, float, float]
ColorRGB = Tuple[int, int, int]


@dataclass(frozen=True)
class RoadView:
    name: str
    rect: RectTuple


@dataclass(frozen=True)
class LaneView:
    id: str
    side: str
    rect: RectTuple
    color: ColorRGB
    ignores_signal: bool = False


@dataclass(frozen=True)
class SignalView:
    id: str
    side: str
    rect: RectTuple
    state: str


@dataclass(frozen=True)
class VehicleView:
    id: str
    rect: RectTuple
    color: ColorRGB
    phase: str
    maneuver: str
    stopped: bool


@dataclass(frozen=True)
class Frame:
    """Everything needed to draw one tick.

    Attributes
    ----------
    tick : int
        Number of completed ticks.
    world_size : tuple of float
        ``(width, height)`` of the world rectangle.
    junction : RectTuple
        Junction interior.
    active : str
        Side holding right-of-way (``"NONE"`` when all RED).
    controller : str
        ``"arbiter"`` or ``"fixed"``.
    stopped_counts, vehicle_counts : Mapping
        Per-side queue metrics, as read-only mappings.
    spawned, dropped, removed : int
        Lifetime totals.
    """

    tick: int
    world_size: Tuple[float, float]
    junction: RectTuple
    roads: Tuple[RoadView, ...] = ()
    lanes: Tuple[LaneView, ...] = ()
    signals: Tuple[SignalView, ...] = ()
    vehicles: Tuple[VehicleView, ...] = ()
    active: str = "NONE"
    controller: str = "arbiter"
    stopped_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    vehicle_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    spawned: int = 0
    dropped: int = 0
    removed: int = 0

    def signal(self, signal_id: str) -> SignalView:
        for view in self.signals:
            if view.id == signal_id:
                return view
        raise KeyError(signal_id)

    def green_signals(self) -> Tuple[SignalView, ...]:
        return tuple(view for view in self.signals if view.state == "GREEN")


EMPTY_FRAME = Frame(tick=0, world_size=(0.0, 0.0), junction=(0.0, 0.0, 0.0, 0.0))
