#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (0, 128, 0)
    ROAD_COLOR: ColorRGB = (128, 128, 128)
    ROAD_LABEL_COLOR: ColorRGB = (255, 255, 255)
    LANE_EDGE_COLOR: ColorRGB = (90, 90, 90)
    JUNCTION_OUTLINE_COLOR: ColorRGB = (200, 200, 200)
    HUD_BG_COLOR: ColorRGB = (22, 22, 22)
    HUD_BORDER_COLOR: ColorRGB = (42, 42, 42)
    HUD_TEXT_COLOR: ColorRGB = (230, 230, 235)
    HUD_DIM_COLOR: ColorRGB = (150, 150, 150)
    STOPPED_OUTLINE_COLOR: ColorRGB = (255, 60, 60)

    SIGNAL_COLORS: Dict[str, ColorRGB] = {
        "RED": (255, 0, 0),
        "YELLOW": (255, 255, 0),
        "GREEN": (0, 255, 0),
    }

    LANE_ALPHA = 70
    VIEW_MARGIN = 8
    HUD_WIDTH = 210
    HUD_LOG_LINES = 6

    LEGEND_ITEMS: Sequence[Tuple[str, ColorRGB]] = (
        ("GREEN", (0, 255, 0)),
        ("YELLOW", (255, 255, 0)),
        ("RED", (255, 0, 0)),
        ("STOPPED", (255, 60, 60)),
    )

    FONT_NAME = "arial"
