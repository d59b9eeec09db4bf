"""
sim/sim_bridge.py
=================
Background-thread scheduler tying :class:`sim.world.World` and the
:class:`events.EventBus` together.  The UI polls the bridge for the
latest :class:`~sim.frame.Frame` without blocking the simulation.

Public API consumed by :mod:`ui.pygame_view`
--------------------------------------------
* ``get_frame()``              → ``Frame``
* ``request_stop()``           → ``None``
* ``poll_signal_events()``     → ``List[Event]``
* ``is_running()``             → ``bool``
* ``reset()``                  → ``None``
* ``set_paused(bool)``         → ``None``
"""

from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional

from events import REQUEST_STOP, TOPIC_CONTROL, TOPIC_SIGNAL, Event, EventBus
from sim.frame import Frame
from sim.signal import Signal
from sim.traffic_policy import JunctionPolicy
from sim.world import World

log = logging.getLogger("sim_bridge")

_SENDER = "sim_bridge"


class SimBridge:
    """Simulation scheduler running in a background thread.

    The thread calls :meth:`_tick` at ``tick_rate_hz``.  Each tick runs
    :meth:`World.step`, the signal commit and the frame export while
    holding one lock; the UI reads the frame under the same lock, so it
    never observes a half-committed set of signals.

    Stop requests travel over the event bus and are honoured between
    ticks.

    Parameters
    ----------
    world : World or None
        Pre-built world.  When *None* one is built from the remaining
        arguments.
    tick_rate_hz : float
        Simulation ticks per second.
    bus : EventBus or None
        Shared event bus; a private one is created when *None*.
    random_seed : int or None
        Seed for reproducibility.
    controller : str
        ``"arbiter"`` or ``"fixed"``.
    policy : JunctionPolicy or None
        Tunable constants.
    max_pending_events : int or None
        Per-topic cap of the private event bus.  Oldest signal events are
        discarded once nobody polls them (headless runs).  Ignored when
        *bus* is given.
    """

    def __init__(
        self,
        world: Optional[World] = None,
        tick_rate_hz: float = 300.0,
        bus: Optional[EventBus] = None,
        random_seed: Optional[int] = None,
        controller: str = "arbiter",
        policy: Optional[JunctionPolicy] = None,
        max_pending_events: Optional[int] = 1000,
    ) -> None:
        if tick_rate_hz <= 0:
            raise ValueError("tick_rate_hz must be positive")
        self._tick_rate_hz = tick_rate_hz
        self._world = world or World(
            seed=random_seed,
            controller=controller,
            tick_rate_hz=tick_rate_hz,
            policy=policy,
        )
        self._bus = bus or EventBus(max_queue=max_pending_events)

        self._lock = threading.Lock()

        # Cached state: written by the sim thread, read by the UI thread
        self._frame: Frame = self._world.snapshot()

        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._paused = False
        self._stop_requested = False

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    @property
    def world(self) -> World:
        return self._world

    @property
    def bus(self) -> EventBus:
        return self._bus

    def start(self) -> None:
        """Spawn the background simulation thread."""
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(
            target=self._loop, daemon=True, name="SimBridge"
        )
        self._thread.start()
        log.info("SimBridge started at %.1f Hz (%s controller)",
                 self._tick_rate_hz, self._world.controller_name)

    def stop(self) -> None:
        """Signal the thread to stop and wait for it to join."""
        self._running = False
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=2.0)
        log.info("SimBridge stopped after %d ticks", self._world.tick_count)

    def is_running(self) -> bool:
        return self._running

    # ── UI adapter API ────────────────────────────────────────────────────────

    def get_frame(self) -> Frame:
        with self._lock:
            return self._frame

    def request_stop(self, sender: str = "view") -> None:
        """Ask the simulation loop to terminate after the current tick."""
        self._bus.publish(TOPIC_CONTROL, sender, {"command": REQUEST_STOP})

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    def poll_signal_events(self) -> List[Event]:
        """Signal changes committed since the previous call."""
        return self._bus.poll(TOPIC_SIGNAL)

    def reset(self) -> None:
        """Re-initialise the world so the scenario replays."""
        with self._lock:
            self._world.reset()
            self._frame = self._world.snapshot()
        log.info("SimBridge reset")

    def set_paused(self, paused: bool) -> None:
        """Pause / unpause the simulation tick."""
        self._paused = paused

    # ── Synchronous driving ───────────────────────────────────────────────────

    def run_ticks(self, n: int) -> Frame:
        """Advance *n* ticks on the calling thread (headless mode).

        Stops early when a stop request arrives.  Returns the last frame.
        """
        for _ in range(n):
            if self._poll_control():
                break
            self._tick()
        return self.get_frame()

    # ── Background loop ───────────────────────────────────────────────────────

    def _loop(self) -> None:
        dt = 1.0 / self._tick_rate_hz
        while self._running:
            t0 = time.perf_counter()
            if self._poll_control():
                self._running = False
                break
            if not self._paused:
                try:
                    self._tick()
                except Exception:
                    log.exception("SimBridge tick error")
            time.sleep(max(0.0, dt - (time.perf_counter() - t0)))

    def _poll_control(self) -> bool:
        for event in self._bus.poll(TOPIC_CONTROL):
            if event.payload.get("command") == REQUEST_STOP:
                if not self._stop_requested:
                    log.info("stop requested by %s", event.sender)
                self._stop_requested = True
        return self._stop_requested

    # ── tick ──────────────────────────────────────────────────────────────────

    def _tick(self) -> None:
        with self._lock:
            self._world.step()
            changed = self._world.commit()
            # Atomic swap: the UI thread reads this via get_frame().
            self._frame = self._world.snapshot()
        self._publish_changes(changed)

    def _publish_changes(self, changed: List[Signal]) -> None:
        for signal in changed:
            self._bus.publish(
                TOPIC_SIGNAL,
                _SENDER,
                {
                    "signal": signal.id,
                    "state": signal.state.value,
                    "tick": self._world.tick_count,
                    "active": self._world.active.value,
                },
            )
