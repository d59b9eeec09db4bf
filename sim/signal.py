#!/usr/bin/env python3
"""
sim/signal.py
=============
Traffic signal shared by every lane of one approach.

A :class:`Signal` is a plain state holder.  Lanes only read it; the
junction controller (:mod:`sim.arbiter`) is the single writer, through
:func:`sim.arbiter.commit` or :meth:`FixedCycleController.commit`.
"""

from __future__ import annotations

from enum import Enum

from sim.geometry import Rect


class SignalState(Enum):
    RED = "RED"
    YELLOW = "YELLOW"
    GREEN = "GREEN"


class Signal:
    """Signal head with a stop-line footprint.

    Parameters
    ----------
    signal_id : str
        Identifier shown by the UI (e.g. ``"TL2"``).
    rect : Rect
        Footprint of the signal.  Its edges act as the stop line for the
        lanes bound to it.
    """

    def __init__(self, signal_id: str, rect: Rect) -> None:
        self.id = signal_id
        self.rect = rect
        self._state = SignalState.RED

    @property
    def state(self) -> SignalState:
        return self._state

    def is_red(self) -> bool:
        return self._state is SignalState.RED

    def is_green(self) -> bool:
        return self._state is SignalState.GREEN

    def _apply(self, state: SignalState) -> bool:
        """Set the state; returns True when it changed.

        Reserved for controller commits.
        """
        changed = state is not self._state
        self._state = state
        return changed

    def __repr__(self) -> str:
        return f"Signal({self.id!r}, {self._state.value})"
