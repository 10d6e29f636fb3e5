"""
Play Diagram Schema - Core data models using Pydantic.

This module defines the complete type system for basketball play diagrams.
Documents arrive as camelCase JSON from the play editor; every model accepts
both the wire keys (aliases) and the snake_case attribute names.

Coordinate system:
- x, y: 0..1000 on the court canvas, regardless of court template
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, List, Literal, Optional, Union
from enum import Enum
import json
import math


MIN_COORD = 0
MAX_COORD = 1000
SCHEMA_VERSION = 1


# ============================================================
# ENUMS
# ============================================================

class CourtTemplate(str, Enum):
    HALF_COURT = "half_court"
    FULL_COURT_VERTICAL = "full_court_vertical"
    FULL_COURT_HORIZONTAL = "full_court_horizontal"


class PlayObjectType(str, Enum):
    OFFENSE_PLAYER = "offense_player"
    DEFENSE_PLAYER = "defense_player"
    BALL = "ball"
    CONE = "cone"
    TEXT = "text"
    SHAPE_RECT = "shape_rect"
    SHAPE_CIRCLE = "shape_circle"


class ActionType(str, Enum):
    DRIBBLE = "dribble"
    PASS = "pass"
    CUT = "cut"
    SCREEN = "screen"
    SHOT = "shot"
    HANDOFF = "handoff"


class AnimationTrigger(str, Enum):
    AFTER_PREVIOUS = "after_previous"  # Sequential: waits for everything so far
    WITH_PREVIOUS = "with_previous"    # Simultaneous: shares the previous start


class PlayType(str, Enum):
    OFFENSE = "offense"
    DEFENSE = "defense"
    ATO = "ato"
    BASELINE = "baseline"
    SIDELINE = "sideline"
    SPECIAL = "special"


# Plain string values: the type tags on the models below are str literals
PLAYER_OBJECT_TYPES = frozenset({PlayObjectType.OFFENSE_PLAYER.value, PlayObjectType.DEFENSE_PLAYER.value})
MOVEMENT_ACTION_TYPES = frozenset({ActionType.DRIBBLE.value, ActionType.CUT.value})
POSSESSION_TRANSFER_ACTION_TYPES = frozenset({ActionType.PASS.value, ActionType.HANDOFF.value})


class DiagramModel(BaseModel):
    """Base for every diagram model: immutable, alias-aware."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ============================================================
# CORE TYPES
# ============================================================

class Point(DiagramModel):
    """
    Absolute position on the court canvas.

    - x: 0 = left edge, 1000 = right edge
    - y: 0 = top edge, 1000 = bottom edge
    """
    x: float = Field(ge=MIN_COORD, le=MAX_COORD)
    y: float = Field(ge=MIN_COORD, le=MAX_COORD)


# ============================================================
# OBJECTS
# ============================================================

class _PlayObjectBase(DiagramModel):
    id: str
    label: Optional[str] = None
    position: Point
    size: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: Optional[float] = None
    color: Optional[str] = None

    @property
    def is_player(self) -> bool:
        return self.type in PLAYER_OBJECT_TYPES


class OffensePlayer(_PlayObjectBase):
    type: Literal["offense_player"] = "offense_player"


class DefensePlayer(_PlayObjectBase):
    type: Literal["defense_player"] = "defense_player"


class BallMarker(_PlayObjectBase):
    """Legacy ball marker; possession is inferred from it when no owner is set"""
    type: Literal["ball"] = "ball"


class Cone(_PlayObjectBase):
    type: Literal["cone"] = "cone"


class TextLabel(_PlayObjectBase):
    type: Literal["text"] = "text"


class RectShape(_PlayObjectBase):
    type: Literal["shape_rect"] = "shape_rect"


class CircleShape(_PlayObjectBase):
    type: Literal["shape_circle"] = "shape_circle"


PlayObject = Annotated[
    Union[OffensePlayer, DefensePlayer, BallMarker, Cone, TextLabel, RectShape, CircleShape],
    Field(discriminator="type"),
]


# ============================================================
# ACTIONS
# ============================================================

class ActionAnimation(DiagramModel):
    """Scheduling descriptor for a single action"""
    trigger: AnimationTrigger = AnimationTrigger.AFTER_PREVIOUS
    duration_ms: float = Field(alias="durationMs", gt=0)

    @field_validator("duration_ms")
    @classmethod
    def finite_duration(cls, v):
        if not math.isfinite(v):
            raise ValueError("durationMs must be finite")
        return v


class _PlayActionBase(DiagramModel):
    id: str
    from_point: Point = Field(alias="from")
    to_point: Point = Field(alias="to")
    from_object_id: Optional[str] = Field(default=None, alias="fromObjectId")
    to_object_id: Optional[str] = Field(default=None, alias="toObjectId")
    animation: Optional[ActionAnimation] = None

    @property
    def is_movement(self) -> bool:
        """Dribbles and cuts carry their acting object along the path"""
        return self.type in MOVEMENT_ACTION_TYPES

    @property
    def is_possession_transfer(self) -> bool:
        return self.type in POSSESSION_TRANSFER_ACTION_TYPES


class DribbleAction(_PlayActionBase):
    type: Literal["dribble"] = "dribble"


class PassAction(_PlayActionBase):
    type: Literal["pass"] = "pass"


class CutAction(_PlayActionBase):
    type: Literal["cut"] = "cut"


class ScreenAction(_PlayActionBase):
    type: Literal["screen"] = "screen"


class ShotAction(_PlayActionBase):
    type: Literal["shot"] = "shot"


class HandoffAction(_PlayActionBase):
    type: Literal["handoff"] = "handoff"


PlayAction = Annotated[
    Union[DribbleAction, PassAction, CutAction, ScreenAction, ShotAction, HandoffAction],
    Field(discriminator="type"),
]


# ============================================================
# PHASES AND DOCUMENT
# ============================================================

class PlayPhase(DiagramModel):
    """
    One authored snapshot of the court plus the actions that carry the play
    toward the next snapshot.

    ball_owner_object_id has three states:
    - not provided: infer the owner
    - None: explicitly nobody has the ball
    - a player id: manual override
    """
    id: str
    name: str
    objects: List[PlayObject] = Field(default_factory=list)
    actions: List[PlayAction] = Field(default_factory=list)
    ball_owner_object_id: Optional[str] = Field(default=None, alias="ballOwnerObjectId")

    @property
    def declares_ball_owner(self) -> bool:
        """True when ballOwnerObjectId was given, even as an explicit null"""
        return "ball_owner_object_id" in self.model_fields_set

    @property
    def players(self) -> list:
        return [obj for obj in self.objects if obj.is_player]

    def get_object(self, object_id: str):
        return next((obj for obj in self.objects if obj.id == object_id), None)


class PlayDocument(DiagramModel):
    """
    Complete play diagram.

    This is the snapshot handed over by the editor. The compiler never
    mutates it; everything derived from it is recomputed on change.
    """
    schema_version: int = Field(default=SCHEMA_VERSION, alias="schemaVersion")
    court_template: CourtTemplate = Field(alias="courtTemplate")
    phases: List[PlayPhase] = Field(min_length=1)

    @field_validator("schema_version")
    @classmethod
    def supported_version(cls, v):
        if v != SCHEMA_VERSION:
            raise ValueError("Unsupported play diagram schema version")
        return v

    @classmethod
    def from_json(cls, text: str) -> "PlayDocument":
        return cls.model_validate_json(text)

    def to_dict(self) -> dict:
        """
        Wire representation (camelCase keys, unset optionals omitted).

        An explicit null owner is written back so that "nobody has the
        ball" survives a round trip instead of turning into "infer".
        """
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        for phase, phase_data in zip(self.phases, data["phases"]):
            if phase.declares_ball_owner and phase.ball_owner_object_id is None:
                phase_data["ballOwnerObjectId"] = None
        return data

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)
