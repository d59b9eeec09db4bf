#!/usr/bin/env python3
"""
Scheduler tests: synchronous ticking, stop requests over the event bus,
signal-change events and reset.
"""

from __future__ import annotations

import unittest

from events import REQUEST_STOP, TOPIC_CONTROL, EventBus
from sim.sim_bridge import SimBridge
from sim.traffic_policy import JunctionPolicy
from sim.world import World


def _quiet_world() -> World:
    return World(seed=0, policy=JunctionPolicy(spawn_probability=0.0))


class SimBridgeTests(unittest.TestCase):
    def test_run_ticks_advances_the_frame(self) -> None:
        bridge = SimBridge(random_seed=4, policy=JunctionPolicy(spawn_probability=0.1))
        self.assertEqual(bridge.get_frame().tick, 0)
        frame = bridge.run_ticks(50)
        self.assertEqual(frame.tick, 50)
        self.assertIs(frame, bridge.get_frame())
        self.assertLessEqual(len(frame.green_signals()), 1)

    def test_stop_request_is_honoured_between_ticks(self) -> None:
        bridge = SimBridge(world=_quiet_world())
        bridge.request_stop(sender="test")
        frame = bridge.run_ticks(10)
        self.assertEqual(frame.tick, 0)
        self.assertTrue(bridge.stop_requested)

    def test_stop_request_travels_on_the_control_topic(self) -> None:
        bus = EventBus()
        bridge = SimBridge(world=_quiet_world(), bus=bus)
        bridge.request_stop()
        pending = bus.peek(TOPIC_CONTROL)
        self.assertEqual(len(pending), 1)
        self.assertEqual(pending[0].sender, "view")
        self.assertEqual(pending[0].payload, {"command": REQUEST_STOP})

    def test_background_thread_stops_on_request(self) -> None:
        bridge = SimBridge(world=_quiet_world(), tick_rate_hz=500.0)
        bridge.start()
        self.assertTrue(bridge.is_running())
        bridge.request_stop()
        bridge._thread.join(timeout=2.0)
        self.assertFalse(bridge._thread.is_alive())
        self.assertFalse(bridge.is_running())
        bridge.stop()

    def test_signal_change_is_published(self) -> None:
        world = _quiet_world()
        world.place("lane2")
        bridge = SimBridge(world=world)
        bridge.run_ticks(1)
        events = bridge.poll_signal_events()
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].payload, {
            "signal": "TL2",
            "state": "GREEN",
            "tick": 1,
            "active": "LEFT",
        })
        self.assertEqual(bridge.get_frame().signal("TL2").state, "GREEN")
        # Unchanged signals are not republished.
        bridge.run_ticks(1)
        self.assertEqual(bridge.poll_signal_events(), [])

    def test_unpolled_signal_events_are_capped(self) -> None:
        bridge = SimBridge(
            controller="fixed",
            tick_rate_hz=1.0,
            policy=JunctionPolicy(spawn_probability=0.0),
            max_pending_events=3,
        )
        bridge.run_ticks(60)
        self.assertGreater(bridge.bus.metrics.published, 3)
        events = bridge.poll_signal_events()
        self.assertEqual(len(events), 3)
        ticks = [event.payload["tick"] for event in events]
        self.assertEqual(ticks, sorted(ticks))
        self.assertGreater(ticks[0], 50)

    def test_shared_bus_is_left_uncapped(self) -> None:
        bus = EventBus()
        bridge = SimBridge(world=_quiet_world(), bus=bus, max_pending_events=3)
        self.assertIs(bridge.bus, bus)
        self.assertIsNone(bus.max_queue)

    def test_reset_rewinds_the_frame(self) -> None:
        bridge = SimBridge(random_seed=8, policy=JunctionPolicy(spawn_probability=0.2))
        bridge.run_ticks(30)
        bridge.reset()
        frame = bridge.get_frame()
        self.assertEqual(frame.tick, 0)
        self.assertEqual(frame.vehicles, ())
        self.assertEqual(frame.active, "NONE")

    def test_rejects_non_positive_tick_rate(self) -> None:
        with self.assertRaises(ValueError):
            SimBridge(tick_rate_hz=0.0)


if __name__ == "__main__":
    unittest.main()
