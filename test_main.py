#!/usr/bin/env python3
"""
test_main.py
============
Environment parsing and exit codes of the ``main`` entry point.

Usage::

    python -m unittest test_main
"""

import logging
import unittest
from unittest import mock

import demo
import main
from demo import build_demo_world
from ui import RenderInitError


class SettingsFromEnvTests(unittest.TestCase):
    def test_defaults(self):
        settings = main._settings_from_env({})
        self.assertEqual(settings, main.Settings())
        self.assertEqual(settings.controller, "arbiter")
        self.assertEqual(settings.headless_ticks, 0)

    def test_overrides(self):
        settings = main._settings_from_env({
            "JUNCTION_TICK_RATE_HZ": "120",
            "JUNCTION_SEED": "42",
            "JUNCTION_CONTROLLER": " Fixed ",
            "JUNCTION_SPAWN_PROBABILITY": "0.25",
            "JUNCTION_ROTATE_ACQUISITION": "yes",
            "JUNCTION_HEADLESS_TICKS": "500",
            "JUNCTION_LOG_LEVEL": "debug",
        })
        self.assertEqual(settings.tick_rate_hz, 120.0)
        self.assertEqual(settings.seed, 42)
        self.assertEqual(settings.controller, "fixed")
        self.assertEqual(settings.spawn_probability, 0.25)
        self.assertTrue(settings.rotate_acquisition)
        self.assertEqual(settings.headless_ticks, 500)
        self.assertEqual(settings.log_level, logging.DEBUG)

    def test_blank_seed_keeps_default(self):
        self.assertIsNone(main._settings_from_env({"JUNCTION_SEED": "  "}).seed)

    def test_invalid_values(self):
        bad = [
            {"JUNCTION_TICK_RATE_HZ": "fast"},
            {"JUNCTION_TICK_RATE_HZ": "0"},
            {"JUNCTION_SEED": "1.5"},
            {"JUNCTION_CONTROLLER": "roundabout"},
            {"JUNCTION_SPAWN_PROBABILITY": "1.5"},
            {"JUNCTION_ROTATE_ACQUISITION": "maybe"},
            {"JUNCTION_HEADLESS_TICKS": "-1"},
            {"JUNCTION_LOG_LEVEL": "chatty"},
        ]
        for env in bad:
            with self.subTest(env=env):
                with self.assertRaises(ValueError):
                    main._settings_from_env(env)


class MainTests(unittest.TestCase):
    @mock.patch("main.setup_logging")
    def test_invalid_configuration_exits_2(self, setup):
        self.assertEqual(main.main({"JUNCTION_TICK_RATE_HZ": "-5"}), 2)
        setup.assert_called_once()

    @mock.patch("main.setup_logging")
    def test_headless_run_exits_0(self, _setup):
        env = {"JUNCTION_HEADLESS_TICKS": "200", "JUNCTION_SEED": "3"}
        with mock.patch.object(main, "_run_windowed") as windowed:
            self.assertEqual(main.main(env), 0)
        windowed.assert_not_called()

    @mock.patch("main.setup_logging")
    def test_render_init_failure_exits_1(self, _setup):
        bridge = mock.Mock()
        with mock.patch.object(main, "_build_bridge", return_value=bridge), \
                mock.patch("ui.run_pygame_view",
                           side_effect=RenderInitError("no display")) as view, \
                mock.patch("pygame.quit") as quit_display:
            self.assertEqual(main.main({}), 1)
        view.assert_called_once()
        bridge.start.assert_called_once()
        bridge.stop.assert_called_once()
        quit_display.assert_called_once()

    @mock.patch("main.setup_logging")
    def test_interrupt_requests_stop_and_exits_0(self, _setup):
        bridge = mock.Mock()
        with mock.patch.object(main, "_build_bridge", return_value=bridge), \
                mock.patch("ui.run_pygame_view", side_effect=KeyboardInterrupt):
            self.assertEqual(main.main({}), 0)
        bridge.request_stop.assert_called_once_with(sender="main")
        bridge.stop.assert_called_once()


class DemoWorldTests(unittest.TestCase):
    def test_demo_world_has_one_car(self):
        world = build_demo_world()
        self.assertEqual(world.controller_name, "fixed")
        self.assertEqual(world.vehicle_count(), 1)
        self.assertEqual(world.snapshot().world_size, (800.0, 800.0))

    @mock.patch("demo.setup_logging")
    def test_demo_render_init_failure_exits_1(self, _setup):
        bridge = mock.Mock()
        with mock.patch.object(demo, "SimBridge", return_value=bridge), \
                mock.patch("ui.run_pygame_view",
                           side_effect=RenderInitError("no display")), \
                mock.patch("pygame.quit") as quit_display:
            self.assertEqual(demo.main(), 1)
        bridge.stop.assert_called_once()
        quit_display.assert_called_once()

    @mock.patch("demo.setup_logging")
    def test_demo_interrupt_requests_stop(self, _setup):
        bridge = mock.Mock()
        with mock.patch.object(demo, "SimBridge", return_value=bridge), \
                mock.patch("ui.run_pygame_view", side_effect=KeyboardInterrupt):
            self.assertEqual(demo.main(), 0)
        bridge.request_stop.assert_called_once_with(sender="demo")
        bridge.stop.assert_called_once()


if __name__ == "__main__":
    unittest.main()
