"""
Possession Resolver - Tracks which player has the ball.

Initial owner of a phase, in order of precedence:
1. The phase's explicit ballOwnerObjectId (null means nobody)
2. The player nearest the legacy ball marker, for diagrams drawn before the
   explicit field existed
3. The first offensive player in authoring order
4. Nobody

Within a phase only passes and handoffs move the ball, and only once they
have finished and name a receiving object.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from .schema import PlayPhase, PlayObjectType
from .timeline import ScheduledAction


UNTARGETED_TRANSFER_MESSAGE = (
    "Pass/Handoff has no target player, so possession stays with current owner."
)

# Returned by get_phase_ball_owner_override when the phase leaves the owner
# to inference. Distinct from None, which is an explicit "nobody".
NOT_DECLARED = object()


@dataclass(frozen=True)
class ActionWarning:
    """A non-fatal authoring problem attached to one action"""
    action_id: str
    message: str

    def to_dict(self) -> dict:
        return {"actionId": self.action_id, "message": self.message}


def _distance(a, b) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def infer_owner_from_ball_marker(phase: PlayPhase) -> Optional[str]:
    """Nearest player to the first ball marker, or None"""
    players = phase.players
    if not players:
        return None

    ball = next((o for o in phase.objects if o.type == PlayObjectType.BALL), None)
    if ball is None:
        return None

    closest = min(players, key=lambda p: _distance(p.position, ball.position))
    return closest.id


def get_phase_ball_owner_override(phase: PlayPhase):
    """
    The owner the phase declares for itself.

    Returns a player id, None for an explicit "nobody", or NOT_DECLARED when
    the phase has no usable declaration (absent, or naming something that
    is not a player in this phase).
    """
    if not phase.declares_ball_owner:
        return NOT_DECLARED

    owner_id = phase.ball_owner_object_id
    if owner_id is None:
        return None

    owner = phase.get_object(owner_id)
    if owner is not None and owner.is_player:
        return owner_id
    return NOT_DECLARED


def resolve_initial_ball_owner(phase: Optional[PlayPhase]) -> Optional[str]:
    if phase is None:
        return None

    override = get_phase_ball_owner_override(phase)
    if override is not NOT_DECLARED:
        return override

    inferred = infer_owner_from_ball_marker(phase)
    if inferred:
        return inferred

    first_offense = next(
        (o for o in phase.objects if o.type == PlayObjectType.OFFENSE_PLAYER),
        None,
    )
    return first_offense.id if first_offense else None


def resolve_ball_owner_at_time(
    start_owner_id: Optional[str],
    scheduled_actions: List[ScheduledAction],
    elapsed_ms: float,
) -> Optional[str]:
    """Owner after every finished, targeted pass/handoff; the last one wins"""
    owner_id = start_owner_id

    for scheduled in scheduled_actions:
        action = scheduled.action
        if not action.is_possession_transfer:
            continue
        if elapsed_ms >= scheduled.end_ms and action.to_object_id:
            owner_id = action.to_object_id

    return owner_id


def get_phase_action_warnings(phase: PlayPhase) -> List[ActionWarning]:
    """One warning per pass/handoff that has no receiving object"""
    return [
        ActionWarning(action_id=action.id, message=UNTARGETED_TRANSFER_MESSAGE)
        for action in phase.actions
        if action.is_possession_transfer and not action.to_object_id
    ]
