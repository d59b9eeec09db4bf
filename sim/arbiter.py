#!/usr/bin/env python3
"""
sim/arbiter.py
==============
Junction controllers: who gets the green light this tick.

Demand-driven arbitration (:class:`DemandArbiter`)
--------------------------------------------------
Each tick, after every lane has updated:

1. **Release** — the active group gives the junction back once fewer
   than ``low_water_mark`` of its vehicles are stopped *and* none of
   them overlaps the junction interior extended by its signal.
2. **Starvation** — with no active group, the first group (scan order
   LEFT, RIGHT, TOP, BOTTOM) holding more than ``high_water_mark``
   stopped vehicles takes the junction.
3. **Greedy fallback** — otherwise the busiest lane wins; it stays
   "sticky" across ticks while it still holds vehicles.
4. **Commit** — the active group's signal turns GREEN, every other RED.

The arbitration state is an immutable :class:`ArbiterState` passed into
and returned from :func:`arbitrate`; nothing is kept in module globals.

Fixed-cycle timing (:class:`FixedCycleController`)
--------------------------------------------------
Alternative controller that ignores demand and rotates the green through
the sides on a tick-counted timer (GREEN, then YELLOW, then the next
side).  A world runs exactly one controller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from sim.geometry import Rect
from sim.lane import Lane
from sim.layout import SIDE_ORDER, ApproachGroup, Intersection, Side
from sim.signal import Signal, SignalState

log = logging.getLogger("arbiter")


@dataclass(frozen=True)
class ArbiterState:
    """Snapshot of the demand arbiter between ticks.

    Attributes
    ----------
    active : Side
        Group currently holding right-of-way, or ``Side.NONE``.
    sticky_lane : str or None
        Lane id chosen by the greedy fallback.  Kept while non-empty.
    last_granted : Side
        Most recent side that acquired the junction (used by the
        rotating starvation scan).
    """

    active: Side = Side.NONE
    sticky_lane: Optional[str] = None
    last_granted: Side = Side.NONE


# ── Metrics ───────────────────────────────────────────────────────────────────

def occupancy_matrix(groups: Mapping[Side, ApproachGroup]) -> np.ndarray:
    """Stopped vehicles per lane; one row per group in *groups* order."""
    if not groups:
        return np.zeros((0, 0), dtype=int)
    width = max(len(group.lanes) for group in groups.values())
    matrix = np.zeros((len(groups), width), dtype=int)
    for row, group in enumerate(groups.values()):
        for col, lane in enumerate(group.lanes):
            matrix[row, col] = lane.stopped_count()
    return matrix


def stopped_counts(groups: Mapping[Side, ApproachGroup]) -> Dict[Side, int]:
    totals = occupancy_matrix(groups).sum(axis=1)
    return {side: int(total) for side, total in zip(groups.keys(), totals)}


def busiest_lane(lanes: Sequence[Lane]) -> Optional[Lane]:
    """Lane holding the most vehicles; the first one wins ties.

    ``None`` when every lane is empty.
    """
    if not lanes:
        return None
    counts = np.array([len(lane) for lane in lanes], dtype=int)
    idx = int(np.argmax(counts))
    return lanes[idx] if counts[idx] > 0 else None


def extended_region(junction: Rect, signal: Signal) -> Rect:
    return junction.union(signal.rect)


# ── Arbitration steps ─────────────────────────────────────────────────────────

def release(
    state: ArbiterState,
    intersection: Intersection,
    counts: Mapping[Side, int],
) -> ArbiterState:
    """Drop the active group once it has drained and cleared the junction."""
    if state.active is Side.NONE:
        return state
    group = intersection.groups.get(state.active)
    if group is None:
        return replace(state, active=Side.NONE)
    policy = intersection.policy
    region = extended_region(policy.junction_interior, group.signal)
    if counts[state.active] < policy.low_water_mark and not group.any_vehicle_in(region):
        log.debug("release %s (stopped=%d)", state.active.value, counts[state.active])
        return replace(state, active=Side.NONE)
    return state


def scan_order(
    groups: Mapping[Side, ApproachGroup],
    last_granted: Side = Side.NONE,
    rotate: bool = False,
) -> Tuple[Side, ...]:
    order = tuple(side for side in SIDE_ORDER if side in groups)
    if rotate and last_granted in order:
        start = order.index(last_granted) + 1
        order = order[start:] + order[:start]
    return order


def acquire_starved(
    state: ArbiterState,
    intersection: Intersection,
    counts: Mapping[Side, int],
) -> ArbiterState:
    """Grant the first group over the high-water mark."""
    if state.active is not Side.NONE:
        return state
    policy = intersection.policy
    for side in scan_order(intersection.groups, state.last_granted,
                           policy.rotate_acquisition):
        if counts[side] > policy.high_water_mark:
            log.debug("acquire %s by starvation (stopped=%d)", side.value, counts[side])
            return replace(state, active=side, last_granted=side)
    return state


def acquire_greedy(state: ArbiterState, intersection: Intersection) -> ArbiterState:
    """Grant the group of the busiest (sticky) lane."""
    if state.active is not Side.NONE:
        return state
    sticky = state.sticky_lane
    if sticky is None or len(intersection.lane(sticky)) == 0:
        lane = busiest_lane(intersection.lanes)
        sticky = lane.id if lane is not None else None
    if sticky is None:
        return replace(state, sticky_lane=None)
    side = intersection.side_of(sticky)
    log.debug("acquire %s via busiest lane %s", side.value, sticky)
    return ArbiterState(active=side, sticky_lane=sticky, last_granted=side)


def arbitrate(state: ArbiterState, intersection: Intersection) -> ArbiterState:
    """One arbitration decision from already-settled lane metrics.

    Logs at INFO only when the side holding the junction changes.
    """
    counts = stopped_counts(intersection.groups)
    log.debug("stopped counts %s", {s.value: c for s, c in counts.items()})
    released = release(state, intersection, counts)
    starved = acquire_starved(released, intersection, counts)
    decided = acquire_greedy(starved, intersection)

    if decided.active is not state.active:
        if decided.active is Side.NONE:
            log.info("release %s (stopped=%d)", state.active.value, counts.get(state.active, 0))
        elif starved.active is not Side.NONE:
            log.info("grant %s by starvation (stopped=%d)",
                     decided.active.value, counts[decided.active])
        else:
            log.info("grant %s via busiest lane %s", decided.active.value, decided.sticky_lane)
    return decided


def commit(
    active: Side,
    intersection: Intersection,
    active_state: SignalState = SignalState.GREEN,
) -> List[Signal]:
    """Single write point for every signal.

    The active group's signal gets *active_state*; all others go RED
    (all RED when *active* is ``Side.NONE``).  Returns the signals whose
    state changed.
    """
    changed: List[Signal] = []
    for side, group in intersection.groups.items():
        target = active_state if side is active else SignalState.RED
        if group.signal._apply(target):
            changed.append(group.signal)
    return changed


# ── Controllers ───────────────────────────────────────────────────────────────

class DemandArbiter:
    """Watermark arbitration driven by queue lengths."""

    name = "arbiter"

    def __init__(self, state: Optional[ArbiterState] = None) -> None:
        self.state = state or ArbiterState()

    @property
    def active(self) -> Side:
        return self.state.active

    def decide(self, intersection: Intersection) -> None:
        self.state = arbitrate(self.state, intersection)

    def commit(self, intersection: Intersection) -> List[Signal]:
        return commit(self.state.active, intersection)

    def reset(self) -> None:
        self.state = ArbiterState()


class FixedCycleController:
    """Rotate the green through the sides on a tick-counted timer.

    Parameters
    ----------
    green_ticks : int
        Ticks each side stays GREEN.
    yellow_ticks : int
        Ticks of YELLOW closing each green phase (0 skips yellow).
    """

    name = "fixed"

    def __init__(self, green_ticks: int, yellow_ticks: int = 0) -> None:
        if green_ticks <= 0:
            raise ValueError("green_ticks must be positive")
        if yellow_ticks < 0:
            raise ValueError("yellow_ticks must not be negative")
        self.green_ticks = green_ticks
        self.yellow_ticks = yellow_ticks
        self.reset()

    def reset(self) -> None:
        self._index = 0
        self._phase = SignalState.GREEN
        self._remaining = self.green_ticks
        self._sides: Tuple[Side, ...] = ()

    @property
    def active(self) -> Side:
        if not self._sides:
            return Side.NONE
        return self._sides[self._index]

    @property
    def phase(self) -> SignalState:
        return self._phase

    def decide(self, intersection: Intersection) -> None:
        if not self._sides:
            # First tick opens the first green phase.
            self._sides = scan_order(intersection.groups)
            return
        self._remaining -= 1
        if self._remaining > 0:
            return
        if self._phase is SignalState.GREEN and self.yellow_ticks > 0:
            self._phase = SignalState.YELLOW
            self._remaining = self.yellow_ticks
        else:
            self._index = (self._index + 1) % len(self._sides)
            self._phase = SignalState.GREEN
            self._remaining = self.green_ticks
            log.info("cycle to %s", self.active.value)

    def commit(self, intersection: Intersection) -> List[Signal]:
        return commit(self.active, intersection, self._phase)
