"""
Basketball Play Animation System

Compiles authored, multi-phase basketball play diagrams into deterministic,
time-sampled animation: object movement, action scheduling and ball
possession across phases.

Quick Start:
    from play_system import validate_play_document, compile_play_playback, get_transition_frame

    result = validate_play_document(payload)
    if result.valid:
        playback = compile_play_playback(result.document, speed_multiplier=1.0)
        frame = get_transition_frame(playback.transitions[0], elapsed_ms=500)
        print(frame.positions, frame.ball_owner_object_id)

From a file:
    from play_system import PlayPipeline

    pipeline = PlayPipeline()
    result = pipeline.compile_from_json("play.json")
"""

from .schema import (
    # Enums
    CourtTemplate,
    PlayObjectType,
    ActionType,
    AnimationTrigger,
    PlayType,

    # Core types
    Point,

    # Objects
    OffensePlayer,
    DefensePlayer,
    BallMarker,
    Cone,
    TextLabel,
    RectShape,
    CircleShape,
    PlayObject,

    # Actions
    ActionAnimation,
    DribbleAction,
    PassAction,
    CutAction,
    ScreenAction,
    ShotAction,
    HandoffAction,
    PlayAction,

    # Document
    PlayPhase,
    PlayDocument,
)

from .validator import (
    validate_play_document,
    validate_basketball_play_document,
    parse_play_document,
    ValidationResult,
    InvalidPlayDocument,
)
from .timeline import (
    compile_phase_timeline,
    ScheduledAction,
    PhaseTimeline,
    DEFAULT_ACTION_DURATION_MS,
    DEFAULT_SETTLE_DURATION_MS,
)
from .positions import apply_movement_actions_at_time, phase_positions
from .possession import (
    resolve_initial_ball_owner,
    resolve_ball_owner_at_time,
    get_phase_action_warnings,
    ActionWarning,
)
from .playback import (
    compile_play_playback,
    get_transition_frame,
    sample_playback,
    CompiledTransition,
    CompiledPlayback,
    TransitionFrame,
)
from .geometry import build_action_path, get_action_visual_style
from .templates import CORE_PLAY_TEMPLATES, PlayTemplate, get_template_by_id
from .pipeline import PlayPipeline, PipelineResult

__all__ = [
    # Enums
    "CourtTemplate",
    "PlayObjectType",
    "ActionType",
    "AnimationTrigger",
    "PlayType",

    # Core types
    "Point",

    # Objects
    "OffensePlayer",
    "DefensePlayer",
    "BallMarker",
    "Cone",
    "TextLabel",
    "RectShape",
    "CircleShape",
    "PlayObject",

    # Actions
    "ActionAnimation",
    "DribbleAction",
    "PassAction",
    "CutAction",
    "ScreenAction",
    "ShotAction",
    "HandoffAction",
    "PlayAction",

    # Document
    "PlayPhase",
    "PlayDocument",

    # Functions
    "validate_play_document",
    "validate_basketball_play_document",
    "parse_play_document",
    "compile_phase_timeline",
    "apply_movement_actions_at_time",
    "phase_positions",
    "resolve_initial_ball_owner",
    "resolve_ball_owner_at_time",
    "get_phase_action_warnings",
    "compile_play_playback",
    "get_transition_frame",
    "sample_playback",
    "build_action_path",
    "get_action_visual_style",
    "get_template_by_id",

    # Classes
    "ValidationResult",
    "InvalidPlayDocument",
    "ScheduledAction",
    "PhaseTimeline",
    "ActionWarning",
    "CompiledTransition",
    "CompiledPlayback",
    "TransitionFrame",
    "PlayTemplate",
    "PlayPipeline",
    "PipelineResult",

    # Constants
    "CORE_PLAY_TEMPLATES",
    "DEFAULT_ACTION_DURATION_MS",
    "DEFAULT_SETTLE_DURATION_MS",
]

__version__ = "1.0.0"
