"""
sim — Simulation core
=====================

Pure Python, no graphics dependency.

Modules
-------
geometry
    Float :class:`Rect` used for every bounding box.
signal
    :class:`Signal` and :class:`SignalState`.
vehicle
    :class:`Vehicle` kinematics, headings, maneuvers and path phases.
zones
    Declarative trigger-zone table that turns vehicles through the junction.
lane
    :class:`Lane` per-tick update: spacing, stop-line gating, removal.
traffic_policy
    :class:`JunctionPolicy` tunable constants and stop-line helpers.
layout
    Road / lane / signal tables assembled into an :class:`Intersection`.
arbiter
    Demand-driven arbitration and the fixed-cycle timer.
spawner
    Seeded stochastic :class:`Spawner`.
world
    :class:`World` tick (``step`` / ``commit``) and frame export.
frame
    Immutable :class:`Frame` handed to the renderer.
sim_bridge
    :class:`SimBridge` background-thread scheduler.
"""
