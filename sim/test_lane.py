#!/usr/bin/env python3
"""
Lane kinematics: stop-line gating, spacing, turns and removal.
"""

from __future__ import annotations

import unittest

from sim.layout import standard_layout
from sim.signal import SignalState
from sim.traffic_policy import JunctionPolicy
from sim.vehicle import Heading, Maneuver, PathPhase, Vehicle


def _car(vid: str, x: float, y: float, vx: float = 0.5, vy: float = 0.0,
         maneuver: Maneuver = Maneuver.STRAIGHT) -> Vehicle:
    return Vehicle(id=vid, x=x, y=y, width=20.0, height=20.0, vx=vx, vy=vy, maneuver=maneuver)


class StopLineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.junction = standard_layout()
        self.lane = self.junction.lane("lane2")
        self.signal = self.junction.signals["TL2"]

    def test_red_signal_halts_vehicle_inside_threshold(self) -> None:
        # Leading edge at 316, stop line at 325: gap 9.
        car = _car("A", 296.0, 290.0)
        self.lane.add_vehicle(car)
        self.lane.update()
        self.assertTrue(car.stopped)
        self.assertEqual(car.x, 296.0)

    def test_green_signal_lets_vehicle_advance(self) -> None:
        self.signal._apply(SignalState.GREEN)
        car = _car("A", 296.0, 290.0)
        self.lane.add_vehicle(car)
        self.lane.update()
        self.assertFalse(car.stopped)
        self.assertEqual(car.x, 296.5)

    def test_gap_equal_to_threshold_still_moves(self) -> None:
        car = _car("A", 295.0, 290.0)
        self.lane.add_vehicle(car)
        self.lane.update()
        self.assertFalse(car.stopped)
        self.assertEqual(car.x, 295.5)

    def test_vehicle_on_the_stop_line_is_not_held(self) -> None:
        car = _car("A", 305.0, 290.0)
        self.lane.add_vehicle(car)
        self.lane.update()
        self.assertFalse(car.stopped)

    def test_yellow_halts_by_default(self) -> None:
        self.signal._apply(SignalState.YELLOW)
        car = _car("A", 296.0, 290.0)
        self.lane.add_vehicle(car)
        self.lane.update()
        self.assertTrue(car.stopped)

    def test_yellow_passes_when_policy_allows(self) -> None:
        junction = standard_layout(JunctionPolicy(yellow_halts=False))
        junction.signals["TL2"]._apply(SignalState.YELLOW)
        lane = junction.lane("lane2")
        car = _car("A", 296.0, 290.0)
        lane.add_vehicle(car)
        lane.update()
        self.assertFalse(car.stopped)

    def test_signal_free_lane_ignores_red(self) -> None:
        lane = self.junction.lane("lane1")
        car = _car("A", 296.0, 260.0, maneuver=Maneuver.LEFT)
        lane.add_vehicle(car)
        lane.update()
        self.assertFalse(car.stopped)
        self.assertEqual(car.x, 296.5)

    def test_queue_builds_behind_red_without_overlap(self) -> None:
        for n in range(3000):
            self.lane.add_vehicle(_car(f"V{n}", 100.0, 290.0))
            self.lane.update()
            rects = [v.rect for v in self.lane.vehicles]
            for i, a in enumerate(rects):
                for b in rects[i + 1:]:
                    self.assertFalse(a.intersects(b), msg=f"overlap at tick {n}")
        # Queue of four, spaced by the following buffer, blocks the entry.
        self.assertEqual(len(self.lane), 4)
        self.assertEqual(self.lane.stopped_count(), 4)
        lead = max(self.lane.vehicles, key=lambda v: v.x)
        self.assertLess(lead.rect.right, self.signal.rect.left)


class SpacingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.lane = standard_layout().lane("lane2")

    def test_candidate_collision_blocks_follower(self) -> None:
        follower = _car("A", 100.0, 290.0)
        leader = _car("B", 120.3, 290.0)
        self.lane.vehicles = [follower, leader]
        self.lane.update()
        self.assertTrue(follower.stopped)
        self.assertEqual(follower.x, 100.0)
        self.assertFalse(leader.stopped)
        self.assertAlmostEqual(leader.x, 120.8)

    def test_following_gap_below_buffer_blocks(self) -> None:
        follower = _car("A", 100.0, 290.0)
        leader = _car("B", 125.0, 290.0)
        self.lane.vehicles = [follower, leader]
        self.lane.update()
        self.assertTrue(follower.stopped)

    def test_following_gap_at_buffer_moves(self) -> None:
        follower = _car("A", 100.0, 290.0)
        leader = _car("B", 128.0, 290.0)
        self.lane.vehicles = [follower, leader]
        self.lane.update()
        self.assertFalse(follower.stopped)
        self.assertEqual(follower.x, 100.5)

    def test_add_vehicle_rejects_overlap(self) -> None:
        self.assertTrue(self.lane.add_vehicle(_car("A", 100.0, 290.0)))
        self.assertFalse(self.lane.add_vehicle(_car("B", 110.0, 290.0)))
        self.assertEqual(len(self.lane), 1)

    def test_add_vehicle_accepts_edge_contact(self) -> None:
        self.assertTrue(self.lane.add_vehicle(_car("A", 100.0, 290.0)))
        self.assertTrue(self.lane.add_vehicle(_car("B", 120.0, 290.0)))
        self.assertEqual(len(self.lane), 2)


class TurnTests(unittest.TestCase):
    def setUp(self) -> None:
        self.junction = standard_layout()
        for signal in self.junction.signals.values():
            signal._apply(SignalState.GREEN)

    def _drive(self, lane_id: str, car: Vehicle, limit: int = 3000):
        lane = self.junction.lane(lane_id)
        lane.add_vehicle(car)
        headings = [car.heading]
        phases = [car.phase]
        for _ in range(limit):
            removed = lane.update()
            if car.heading is not headings[-1]:
                headings.append(car.heading)
            if car.phase is not phases[-1]:
                phases.append(car.phase)
            if removed:
                self.assertIn(car, removed)
                return headings, phases
        self.fail(f"{car.id} never left the world")

    def test_right_turn_from_left_fires_once(self) -> None:
        car = _car("R", 100.0, 290.0, maneuver=Maneuver.RIGHT)
        headings, phases = self._drive("lane2", car)
        self.assertEqual(headings, [Heading.EAST, Heading.SOUTH])
        self.assertTrue(car.turned)
        self.assertEqual(car.x, 410.5)
        self.assertIn(PathPhase.TURN_RIGHT, phases)
        self.assertEqual(phases[-1], PathPhase.DEPART)

    def test_straight_vehicle_keeps_heading(self) -> None:
        car = _car("S", 100.0, 290.0)
        headings, phases = self._drive("lane2", car)
        self.assertEqual(headings, [Heading.EAST])
        self.assertFalse(car.turned)
        self.assertEqual(phases, [PathPhase.APPROACH, PathPhase.STRAIGHT, PathPhase.DEPART])

    def test_right_turn_from_top(self) -> None:
        car = _car("R", 410.0, 0.0, vx=0.0, vy=0.5, maneuver=Maneuver.RIGHT)
        headings, _ = self._drive("lane5", car)
        self.assertEqual(headings, [Heading.SOUTH, Heading.WEST])
        self.assertEqual(car.y, 310.5)

    def test_right_turn_from_bottom(self) -> None:
        car = _car("R", 390.0, 600.0, vx=0.0, vy=-0.5, maneuver=Maneuver.RIGHT)
        headings, _ = self._drive("lane11", car)
        self.assertEqual(headings, [Heading.NORTH, Heading.EAST])
        self.assertEqual(car.y, 290.5)

    def test_right_turn_from_right(self) -> None:
        car = _car("R", 700.0, 310.0, vx=-0.5, vy=0.0, maneuver=Maneuver.RIGHT)
        headings, _ = self._drive("lane8", car)
        self.assertEqual(headings, [Heading.WEST, Heading.NORTH])
        self.assertEqual(car.x, 390.5)

    def test_free_lane_follows_corner(self) -> None:
        car = _car("L", 100.0, 260.0, maneuver=Maneuver.LEFT)
        headings, phases = self._drive("lane1", car)
        self.assertEqual(headings, [Heading.EAST, Heading.NORTH])
        self.assertFalse(car.turned)
        self.assertIn(PathPhase.TURN_LEFT, phases)
        self.assertEqual(phases[-1], PathPhase.DEPART)

    def test_free_lane_from_right_bends_south(self) -> None:
        car = _car("L", 700.0, 340.0, vx=-0.5, vy=0.0, maneuver=Maneuver.LEFT)
        headings, _ = self._drive("lane9", car)
        self.assertEqual(headings, [Heading.WEST, Heading.SOUTH])
        self.assertEqual(car.x, 440.5)

    def test_zone_fires_on_position_before_the_move(self) -> None:
        lane = self.junction.lane("lane2")
        car = _car("R", 410.0, 290.0, maneuver=Maneuver.RIGHT)
        lane.add_vehicle(car)
        lane.update()
        self.assertEqual(car.x, 410.5)
        self.assertIs(car.heading, Heading.SOUTH)
        self.assertIs(car.phase, PathPhase.TURN_RIGHT)
        self.assertTrue(car.turned)

    def test_zone_reached_by_the_move_fires_next_tick(self) -> None:
        lane = self.junction.lane("lane2")
        car = _car("R", 409.5, 290.0, maneuver=Maneuver.RIGHT)
        lane.add_vehicle(car)
        lane.update()
        self.assertEqual(car.x, 410.0)
        self.assertIs(car.heading, Heading.EAST)
        self.assertFalse(car.turned)
        lane.update()
        self.assertEqual(car.x, 410.5)
        self.assertIs(car.heading, Heading.SOUTH)

    def test_corner_fires_on_position_before_the_move(self) -> None:
        lane = self.junction.lane("lane1")
        car = _car("L", 359.5, 260.0, maneuver=Maneuver.LEFT)
        lane.add_vehicle(car)
        lane.update()
        self.assertEqual(car.x, 360.0)
        self.assertIs(car.heading, Heading.EAST)
        lane.update()
        self.assertEqual(car.x, 360.5)
        self.assertIs(car.heading, Heading.NORTH)


class RemovalTests(unittest.TestCase):
    def setUp(self) -> None:
        self.lane = standard_layout().lane("lane1")

    def test_vehicle_touching_world_edge_is_kept(self) -> None:
        car = _car("A", 799.5, 260.0)
        self.lane.add_vehicle(car)
        self.assertEqual(self.lane.update(), [])
        self.assertEqual(car.x, 800.0)
        self.assertEqual(len(self.lane), 1)

    def test_vehicle_fully_outside_is_removed(self) -> None:
        car = _car("A", 800.0, 260.0)
        self.lane.add_vehicle(car)
        self.assertEqual(self.lane.update(), [car])
        self.assertEqual(len(self.lane), 0)

    def test_bottom_entry_spawn_is_not_removed(self) -> None:
        lane = standard_layout().lane("lane12")
        car = _car("B", 360.0, 600.0, vx=0.0, vy=-0.5, maneuver=Maneuver.LEFT)
        lane.add_vehicle(car)
        self.assertEqual(lane.update(), [])
        self.assertEqual(car.y, 599.5)


if __name__ == "__main__":
    unittest.main()
