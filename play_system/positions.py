"""
Position Resolver - Where every object is at a given moment.

Only dribbles and cuts move geometry: the acting object (fromObjectId)
travels in a straight line from the action's `from` point to its `to` point
over the action's scheduled window. Passes, handoffs, screens and shots
change state, not positions.

Every function here returns a freshly built map; inputs are never mutated.
"""

from typing import Dict, List

from .schema import Point, PlayPhase
from .timeline import ScheduledAction


PositionMap = Dict[str, Point]


def clamp_progress(value: float) -> float:
    return max(0.0, min(1.0, value))


def _lerp(a: float, b: float, t: float) -> float:
    # Result stays within [a, b]
    value = a + (b - a) * t
    return min(max(value, min(a, b)), max(a, b))


def interpolate_point(start: Point, end: Point, progress: float) -> Point:
    t = clamp_progress(progress)
    if t == 0:
        return start
    if t == 1:
        return end
    return Point(x=_lerp(start.x, end.x, t), y=_lerp(start.y, end.y, t))


def phase_positions(phase: PlayPhase) -> PositionMap:
    """Authored position of every object in the phase, keyed by object id"""
    return {obj.id: obj.position for obj in phase.objects}


def apply_movement_actions_at_time(
    base_positions: PositionMap,
    scheduled_actions: List[ScheduledAction],
    elapsed_ms: float,
) -> PositionMap:
    """
    Positions after applying every movement action at `elapsed_ms`.

    Actions are applied in list order, so when two movement actions drive
    the same object at the same moment the later one wins.
    """
    positions = dict(base_positions)

    for scheduled in scheduled_actions:
        action = scheduled.action
        object_id = action.from_object_id
        if not action.is_movement or not object_id or object_id not in positions:
            continue

        if elapsed_ms < scheduled.start_ms:
            continue

        if elapsed_ms >= scheduled.end_ms:
            positions[object_id] = action.to_point
            continue

        window = max(1.0, scheduled.end_ms - scheduled.start_ms)
        progress = (elapsed_ms - scheduled.start_ms) / window
        positions[object_id] = interpolate_point(action.from_point, action.to_point, progress)

    return positions


def interpolate_position_maps(
    from_map: PositionMap,
    to_map: PositionMap,
    progress: float,
) -> PositionMap:
    """
    Blend two maps object by object.

    Ids present in only one map pass through unchanged.
    """
    result: PositionMap = {}
    for object_id in list(from_map) + [k for k in to_map if k not in from_map]:
        start = from_map.get(object_id)
        end = to_map.get(object_id)
        if start is not None and end is not None:
            result[object_id] = interpolate_point(start, end, progress)
        else:
            result[object_id] = end if end is not None else start
    return result
