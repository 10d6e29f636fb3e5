"""
Action Path Geometry - Polylines and styles for drawing play actions.

Renderers draw actions from these flat point lists
([x0, y0, x1, y1, ...]) so every surface (editor canvas, thumbnails,
playback) shows the same shapes:

- pass, cut, shot, handoff: straight arrow
- dribble: wavy arrow
- screen: straight line ending in a T-cap perpendicular to the path
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

import numpy as np

from .schema import ActionType, Point
from .timeline import round_half_up


# ============================================================
# STYLING
# ============================================================

ARROW = "arrow"
WAVY_ARROW = "wavy_arrow"
SCREEN = "screen"

INK = "#2f333c"
SHOT_RED = "#c81e1e"
HANDOFF_INK = "#3f4652"

SELECTED_STROKE_BONUS = 0.8
DEFAULT_SCREEN_CAP_LENGTH = 30


@dataclass(frozen=True)
class ActionVisualStyle:
    mode: str
    stroke: str
    fill: str
    stroke_width: float
    pointer_length: float
    pointer_width: float
    dash: Optional[Tuple[float, float]] = None


ACTION_STYLES: Dict[ActionType, ActionVisualStyle] = {
    ActionType.DRIBBLE: ActionVisualStyle(WAVY_ARROW, INK, INK, 4.2, 19, 19),
    ActionType.PASS: ActionVisualStyle(ARROW, INK, INK, 3.0, 16, 16, dash=(11, 8)),
    ActionType.CUT: ActionVisualStyle(ARROW, INK, INK, 3.6, 17, 17),
    ActionType.SCREEN: ActionVisualStyle(SCREEN, INK, INK, 4.2, 0, 0),
    ActionType.SHOT: ActionVisualStyle(ARROW, SHOT_RED, SHOT_RED, 4.6, 19, 19),
    ActionType.HANDOFF: ActionVisualStyle(ARROW, HANDOFF_INK, HANDOFF_INK, 3.4, 15, 15, dash=(7, 6)),
}


def get_action_visual_style(action_type, selected: bool = False) -> ActionVisualStyle:
    """Style for an action type; selected actions draw a slightly heavier stroke"""
    base = ACTION_STYLES[ActionType(action_type)]
    if not selected:
        return base
    return replace(base, stroke_width=base.stroke_width + SELECTED_STROKE_BONUS)


# ============================================================
# PATHS
# ============================================================

def build_straight_points(start: Point, end: Point) -> List[float]:
    return [start.x, start.y, end.x, end.y]


def build_wavy_arrow_points(start: Point, end: Point) -> List[float]:
    """
    Sinusoidal path from start to end.

    The wave is scaled by a sin^0.85 envelope so it fades in and out, and
    both endpoints sit exactly on the requested points.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    dist = float(np.hypot(dx, dy))

    if dist < 6:
        return build_straight_points(start, end)

    # Perpendicular direction
    perp_x = -dy / dist
    perp_y = dx / dist

    segments = max(18, round_half_up(dist / 8))
    wave_count = max(6, min(28, round_half_up(dist / 42)))
    amplitude = max(5.0, min(9.0, dist * 0.028))

    t = np.linspace(0.0, 1.0, segments + 1)
    envelope = np.power(np.sin(np.pi * t), 0.85)
    wave = np.sin(t * np.pi * wave_count * 2) * amplitude * envelope
    wave[0] = 0.0
    wave[-1] = 0.0

    x = start.x + dx * t + perp_x * wave
    y = start.y + dy * t + perp_y * wave

    points = np.column_stack((x, y)).ravel()
    points[0], points[1] = start.x, start.y
    points[-2], points[-1] = end.x, end.y
    return points.tolist()


def build_screen_cap_points(
    start: Point,
    end: Point,
    cap_length: float = DEFAULT_SCREEN_CAP_LENGTH,
) -> List[float]:
    """The T-cap segment drawn across the end of a screen"""
    dx = end.x - start.x
    dy = end.y - start.y
    dist = float(np.hypot(dx, dy))
    ux, uy = (dx / dist, dy / dist) if dist > 0 else (1.0, 0.0)
    perp_x, perp_y = -uy, ux
    half_cap = cap_length / 2

    return [
        end.x - perp_x * half_cap,
        end.y - perp_y * half_cap,
        end.x + perp_x * half_cap,
        end.y + perp_y * half_cap,
    ]


def build_action_path(action, selected: bool = False) -> dict:
    """
    Everything needed to draw one action.

    Returns:
        dict with "style", "points" and, for screens, "cap"
    """
    style = get_action_visual_style(action.type, selected)
    start, end = action.from_point, action.to_point

    if style.mode == WAVY_ARROW:
        return {"style": style, "points": build_wavy_arrow_points(start, end)}

    path = {"style": style, "points": build_straight_points(start, end)}
    if style.mode == SCREEN:
        path["cap"] = build_screen_cap_points(start, end)
    return path
