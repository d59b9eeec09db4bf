#!/usr/bin/env python3
"""
World tests: tick ordering, frame export, bounded lifetime, reset and
the single-vehicle layout.
"""

from __future__ import annotations

import unittest

from sim.frame import Frame
from sim.geometry import Rect
from sim.layout import Side, single_vehicle_layout
from sim.signal import SignalState
from sim.traffic_policy import JunctionPolicy
from sim.vehicle import Maneuver
from sim.world import World, make_controller


class WorldTickTests(unittest.TestCase):
    def test_empty_world_keeps_every_signal_red(self) -> None:
        world = World(seed=1, policy=JunctionPolicy(spawn_probability=0.0))
        for _ in range(20):
            self.assertEqual(world.advance(), [])
        self.assertIs(world.active, Side.NONE)
        self.assertTrue(all(s.is_red() for s in world.intersection.signals.values()))

    def test_step_does_not_touch_signals(self) -> None:
        world = World(seed=1, policy=JunctionPolicy(spawn_probability=0.0))
        world.place("lane2", Maneuver.STRAIGHT)
        world.step()
        self.assertIs(world.active, Side.LEFT)
        self.assertTrue(world.signal("TL2").is_red())
        changed = world.commit()
        self.assertEqual([s.id for s in changed], ["TL2"])
        self.assertIs(world.signal("TL2").state, SignalState.GREEN)

    def test_vehicles_never_linger_outside_the_world(self) -> None:
        world = World(seed=9, policy=JunctionPolicy(spawn_probability=0.2))
        bounds = world.policy.world_rect
        for _ in range(3000):
            world.advance()
            for vehicle in world.all_vehicles():
                self.assertFalse(vehicle.rect.is_fully_outside(bounds), msg=vehicle.id)
        self.assertGreater(world.removed, 0)
        self.assertEqual(
            world.spawner.spawned,
            world.removed + world.vehicle_count(),
        )

    def test_unknown_controller_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            make_controller("roundabout", JunctionPolicy(), 60.0)
        with self.assertRaises(ValueError):
            World(controller="roundabout")


class SnapshotTests(unittest.TestCase):
    def setUp(self) -> None:
        self.world = World(seed=2, policy=JunctionPolicy(spawn_probability=0.3))
        for _ in range(200):
            self.world.advance()

    def test_snapshot_is_pure(self) -> None:
        first = self.world.snapshot()
        second = self.world.snapshot()
        self.assertEqual(first, second)
        self.assertEqual(self.world.tick_count, 200)
        self.assertEqual(first.tick, 200)

    def test_frame_contents(self) -> None:
        frame = self.world.snapshot()
        self.assertIsInstance(frame, Frame)
        self.assertEqual(frame.world_size, (800.0, 600.0))
        self.assertEqual(frame.junction, (350.0, 250.0, 100.0, 100.0))
        self.assertEqual(len(frame.roads), 4)
        self.assertEqual(len(frame.lanes), 12)
        self.assertEqual([s.id for s in frame.signals], ["TL2", "TL1", "TL3", "TL4"])
        self.assertEqual(len(frame.vehicles), self.world.vehicle_count())
        self.assertEqual(set(frame.stopped_counts), {"LEFT", "RIGHT", "TOP", "BOTTOM"})
        self.assertEqual(frame.controller, "arbiter")
        self.assertEqual(frame.active, self.world.active.value)
        self.assertEqual(frame.spawned, self.world.spawner.spawned)
        self.assertLessEqual(len(frame.green_signals()), 1)

    def test_frame_does_not_follow_later_ticks(self) -> None:
        frame = self.world.snapshot()
        self.world.advance()
        self.assertEqual(frame.tick, 200)
        self.assertEqual(self.world.snapshot().tick, 201)

    def test_frame_counts_are_read_only(self) -> None:
        frame = self.world.snapshot()
        with self.assertRaises(TypeError):
            frame.stopped_counts["LEFT"] = 99
        with self.assertRaises(TypeError):
            frame.vehicle_counts["TOP"] = 99

    def test_reset_replays_the_seed(self) -> None:
        before = self.world.snapshot()
        self.world.reset()
        self.assertEqual(self.world.tick_count, 0)
        self.assertEqual(self.world.vehicle_count(), 0)
        for _ in range(200):
            self.world.advance()
        self.assertEqual(self.world.snapshot(), before)


class SingleVehicleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.world = World(intersection=single_vehicle_layout(), controller="fixed",
                           tick_rate_hz=60.0)
        self.car = self.world.place("laneB")

    def test_layout(self) -> None:
        self.assertEqual(self.world.policy.world_rect, Rect(0.0, 0.0, 800.0, 800.0))
        self.assertEqual(list(self.world.intersection.signals), ["B"])
        self.assertEqual(self.world.signal("B").rect, Rect(400, 300, 50, 30))
        self.assertEqual((self.car.x, self.car.y), (100, 100))
        self.assertEqual((self.car.width, self.car.height), (30.0, 50.0))
        self.assertEqual((self.car.vx, self.car.vy), (0.0, 5.0))

    def test_car_drives_down_and_leaves(self) -> None:
        for _ in range(140):
            self.world.advance()
        self.assertEqual(self.car.y, 800.0)
        self.assertEqual(self.world.vehicle_count(), 1)
        self.world.advance()
        self.assertTrue(self.world.is_empty())
        self.assertEqual(self.world.removed, 1)

    def test_reset_places_the_car_again(self) -> None:
        for _ in range(200):
            self.world.advance()
        self.world.reset()
        vehicles = self.world.all_vehicles()
        self.assertEqual(len(vehicles), 1)
        self.assertEqual((vehicles[0].x, vehicles[0].y), (100, 100))
        self.assertEqual(vehicles[0].id, "VEH_00001")


if __name__ == "__main__":
    unittest.main()
