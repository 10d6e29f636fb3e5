"""
Play Playback - Compiles a play into transitions and samples frames.

A play with N phases compiles into N-1 transitions. Each transition has two
segments:

    [0, actionDuration]                action segment: movement and
                                       possession logic run
    (actionDuration, totalDuration]    settle segment: every object glides
                                       from where the actions left it to
                                       the next phase's authored layout

The settle segment is what makes every phase boundary line up with the
layout the coach drew, even when the actions fall short of it or overshoot.

Usage:
    playback = compile_play_playback(document, speed_multiplier=1.5)
    frame = get_transition_frame(playback.transitions[0], elapsed_ms=420)
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .schema import PlayDocument
from .timeline import DEFAULT_SETTLE_DURATION_MS, PhaseTimeline, compile_phase_timeline
from .positions import (
    PositionMap,
    apply_movement_actions_at_time,
    clamp_progress,
    interpolate_position_maps,
    phase_positions,
)
from .possession import (
    ActionWarning,
    NOT_DECLARED,
    get_phase_action_warnings,
    get_phase_ball_owner_override,
    resolve_ball_owner_at_time,
    resolve_initial_ball_owner,
)


def _positions_to_dict(positions: PositionMap) -> dict:
    return {object_id: {"x": p.x, "y": p.y} for object_id, p in positions.items()}


# ============================================================
# COMPILED TYPES
# ============================================================

@dataclass(frozen=True)
class CompiledTransition:
    """The compiled bridge from phase `phase_index` to the phase after it"""
    phase_index: int
    from_phase_id: str
    to_phase_id: str
    start_owner_object_id: Optional[str]
    end_owner_object_id: Optional[str]
    timeline: PhaseTimeline
    base_positions: PositionMap
    post_action_positions: PositionMap
    target_positions: PositionMap
    warnings: List[ActionWarning] = field(default_factory=list)

    @property
    def total_duration_ms(self) -> float:
        return self.timeline.total_duration_ms

    def to_dict(self) -> dict:
        return {
            "phaseIndex": self.phase_index,
            "fromPhaseId": self.from_phase_id,
            "toPhaseId": self.to_phase_id,
            "startOwnerObjectId": self.start_owner_object_id,
            "endOwnerObjectId": self.end_owner_object_id,
            "timeline": self.timeline.to_dict(),
            "basePositions": _positions_to_dict(self.base_positions),
            "postActionPositions": _positions_to_dict(self.post_action_positions),
            "targetPositions": _positions_to_dict(self.target_positions),
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass(frozen=True)
class CompiledPlayback:
    transitions: List[CompiledTransition]
    phase_start_owners: List[Optional[str]]

    @property
    def total_duration_ms(self) -> float:
        return sum(t.total_duration_ms for t in self.transitions)

    @property
    def warnings(self) -> List[ActionWarning]:
        return [w for t in self.transitions for w in t.warnings]

    def locate(self, elapsed_ms: float) -> Tuple[int, float]:
        """
        Map a whole-play clock onto (transition index, local elapsed ms).

        Times past the end land on the end of the last transition.
        Raises ValueError for a playback without transitions.
        """
        if not self.transitions:
            raise ValueError("Playback has no transitions")

        remaining = max(0.0, elapsed_ms)
        for index, transition in enumerate(self.transitions):
            if remaining <= transition.total_duration_ms:
                return index, remaining
            remaining -= transition.total_duration_ms

        last = len(self.transitions) - 1
        return last, self.transitions[last].total_duration_ms

    def to_dict(self) -> dict:
        return {
            "transitions": [t.to_dict() for t in self.transitions],
            "phaseStartOwners": list(self.phase_start_owners),
        }


@dataclass(frozen=True)
class TransitionFrame:
    """Everything a renderer needs to draw one animation frame"""
    positions: PositionMap
    ball_owner_object_id: Optional[str]
    action_progress: float
    settle_progress: float
    is_settle_segment: bool

    def to_dict(self) -> dict:
        return {
            "positions": _positions_to_dict(self.positions),
            "ballOwnerObjectId": self.ball_owner_object_id,
            "actionProgress": self.action_progress,
            "settleProgress": self.settle_progress,
            "isSettleSegment": self.is_settle_segment,
        }


# ============================================================
# TRANSITION COMPILER
# ============================================================

def compile_play_playback(
    document: PlayDocument,
    speed_multiplier: float = 1,
    settle_duration_ms: float = DEFAULT_SETTLE_DURATION_MS,
) -> CompiledPlayback:
    """
    Compile every consecutive phase pair of a play.

    Possession carries forward: the owner at the end of one transition
    starts the next, unless the next phase declares its own owner, which
    always wins.

    Args:
        document: A validated play document
        speed_multiplier: Playback speed applied to every timeline
        settle_duration_ms: Unscaled settle length for every transition

    Returns:
        CompiledPlayback with len(phases) - 1 transitions
    """
    phases = document.phases
    transitions: List[CompiledTransition] = []
    if not phases:
        return CompiledPlayback(transitions=transitions, phase_start_owners=[])

    start_owners: List[Optional[str]] = [resolve_initial_ball_owner(phases[0])]

    for index, (phase, next_phase) in enumerate(zip(phases, phases[1:])):
        timeline = compile_phase_timeline(phase, speed_multiplier, settle_duration_ms)
        start_owner = start_owners[index]
        base_positions = phase_positions(phase)

        post_action_positions = apply_movement_actions_at_time(
            base_positions, timeline.scheduled_actions, timeline.action_duration_ms
        )
        end_owner = resolve_ball_owner_at_time(
            start_owner, timeline.scheduled_actions, timeline.action_duration_ms
        )

        transitions.append(CompiledTransition(
            phase_index=index,
            from_phase_id=phase.id,
            to_phase_id=next_phase.id,
            start_owner_object_id=start_owner,
            end_owner_object_id=end_owner,
            timeline=timeline,
            base_positions=base_positions,
            post_action_positions=post_action_positions,
            target_positions=phase_positions(next_phase),
            warnings=get_phase_action_warnings(phase),
        ))

        override = get_phase_ball_owner_override(next_phase)
        start_owners.append(end_owner if override is NOT_DECLARED else override)

    return CompiledPlayback(transitions=transitions, phase_start_owners=start_owners)


# ============================================================
# FRAME SAMPLER
# ============================================================

def get_transition_frame(transition: CompiledTransition, elapsed_ms: float) -> TransitionFrame:
    """
    Sample a transition at `elapsed_ms` (clamped to its duration).

    Pure and idempotent: safe to call every animation frame, to scrub in
    either direction, or from several renderers at once.
    """
    timeline = transition.timeline
    elapsed = max(0.0, min(timeline.total_duration_ms, elapsed_ms))

    if elapsed <= timeline.action_duration_ms:
        positions = apply_movement_actions_at_time(
            transition.base_positions, timeline.scheduled_actions, elapsed
        )
        owner = resolve_ball_owner_at_time(
            transition.start_owner_object_id, timeline.scheduled_actions, elapsed
        )
        if timeline.action_duration_ms > 0:
            action_progress = elapsed / timeline.action_duration_ms
        else:
            action_progress = 1.0

        return TransitionFrame(
            positions=positions,
            ball_owner_object_id=owner,
            action_progress=clamp_progress(action_progress),
            settle_progress=0.0,
            is_settle_segment=False,
        )

    settle_elapsed = elapsed - timeline.action_duration_ms
    if timeline.settle_duration_ms > 0:
        settle_progress = settle_elapsed / timeline.settle_duration_ms
    else:
        settle_progress = 1.0

    return TransitionFrame(
        positions=interpolate_position_maps(
            transition.post_action_positions, transition.target_positions, settle_progress
        ),
        ball_owner_object_id=transition.end_owner_object_id,
        action_progress=1.0,
        settle_progress=clamp_progress(settle_progress),
        is_settle_segment=True,
    )


def sample_playback(playback: CompiledPlayback, elapsed_ms: float) -> TransitionFrame:
    """Sample the whole play on a single clock spanning every transition"""
    index, local_elapsed = playback.locate(elapsed_ms)
    return get_transition_frame(playback.transitions[index], local_elapsed)
