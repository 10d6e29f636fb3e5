"""
Phase Timeline - Schedules the actions of one phase on a millisecond clock.

Actions run in authoring order. An "after_previous" action waits until
every action scheduled so far has finished; a "with_previous" action starts
together with the action right before it, so chains of them render as one
simultaneous group.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from .schema import PlayAction, PlayPhase, AnimationTrigger


DEFAULT_ACTION_DURATION_MS = 900
DEFAULT_SETTLE_DURATION_MS = 550
MIN_ACTION_DURATION_MS = 120
MAX_ACTION_DURATION_MS = 12000
MIN_SETTLE_DURATION_MS = 120


@dataclass(frozen=True)
class ScheduledAction:
    """An action placed on the phase clock"""
    index: int
    action: PlayAction
    trigger: AnimationTrigger
    duration_ms: float
    start_ms: float
    end_ms: float

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "actionId": self.action.id,
            "trigger": self.trigger.value,
            "durationMs": self.duration_ms,
            "startMs": self.start_ms,
            "endMs": self.end_ms,
        }


@dataclass(frozen=True)
class PhaseTimeline:
    scheduled_actions: List[ScheduledAction]
    action_duration_ms: float
    settle_duration_ms: float
    total_duration_ms: float

    def to_dict(self) -> dict:
        return {
            "scheduledActions": [s.to_dict() for s in self.scheduled_actions],
            "actionDurationMs": self.action_duration_ms,
            "settleDurationMs": self.settle_duration_ms,
            "totalDurationMs": self.total_duration_ms,
        }


def normalize_speed_multiplier(speed_multiplier) -> float:
    """Positive finite speeds pass through; anything else plays at 1x"""
    try:
        speed = float(speed_multiplier)
    except (TypeError, ValueError, OverflowError):
        return 1.0
    if math.isfinite(speed) and speed > 0:
        return speed
    return 1.0


def round_half_up(value: float) -> int:
    """Nearest integer, halves rounded toward +inf (900.5 -> 901)"""
    return math.floor(value + 0.5)


def normalize_duration(duration_ms: Optional[float]) -> int:
    """Authored duration rounded and clamped to the playable range"""
    if not duration_ms or not math.isfinite(duration_ms):
        return DEFAULT_ACTION_DURATION_MS
    return max(MIN_ACTION_DURATION_MS, min(MAX_ACTION_DURATION_MS, round_half_up(duration_ms)))


def _action_animation(action) -> tuple:
    if action.animation is None:
        return AnimationTrigger.AFTER_PREVIOUS, DEFAULT_ACTION_DURATION_MS
    return action.animation.trigger, normalize_duration(action.animation.duration_ms)


def compile_phase_timeline(
    phase: PlayPhase,
    speed_multiplier: float = 1,
    settle_duration_ms: float = DEFAULT_SETTLE_DURATION_MS,
) -> PhaseTimeline:
    """
    Schedule every action of a phase.

    Args:
        phase: The phase whose actions are scheduled
        speed_multiplier: Playback speed; 2 plays twice as fast
        settle_duration_ms: Unscaled length of the settle segment

    Returns:
        PhaseTimeline with per-action start/end times and segment lengths
    """
    speed = normalize_speed_multiplier(speed_multiplier)
    scheduled: List[ScheduledAction] = []
    timeline_end_ms = 0.0
    previous_start_ms = 0.0

    for index, action in enumerate(phase.actions):
        trigger, duration_ms = _action_animation(action)
        duration_ms = duration_ms / speed

        if index == 0:
            start_ms = 0.0
        elif trigger == AnimationTrigger.WITH_PREVIOUS:
            start_ms = previous_start_ms
        else:
            start_ms = timeline_end_ms
        end_ms = start_ms + duration_ms

        scheduled.append(ScheduledAction(
            index=index,
            action=action,
            trigger=trigger,
            duration_ms=duration_ms,
            start_ms=start_ms,
            end_ms=end_ms,
        ))

        previous_start_ms = start_ms
        timeline_end_ms = max(timeline_end_ms, end_ms)

    settle_ms = max(MIN_SETTLE_DURATION_MS, settle_duration_ms / speed)
    return PhaseTimeline(
        scheduled_actions=scheduled,
        action_duration_ms=timeline_end_ms,
        settle_duration_ms=settle_ms,
        total_duration_ms=timeline_end_ms + settle_ms,
    )
