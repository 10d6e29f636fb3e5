"""
Play Diagram Validation - Structural checks on untrusted diagram payloads.

Documents reach the compiler from storage or from imported JSON, so every
payload is checked before it is accepted. Validation is fail-fast: the
first violated rule is reported and nothing after it is examined.

Checks, in order:
1. Schema version
2. Court template
3. Phase list is present and non-empty
4. Per phase: id/name, objects, actions, ball owner
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from .schema import (
    PlayDocument, CourtTemplate, PlayObjectType, ActionType, AnimationTrigger,
    PLAYER_OBJECT_TYPES, SCHEMA_VERSION, MIN_COORD, MAX_COORD,
)


VALID_COURT_TEMPLATES = frozenset(t.value for t in CourtTemplate)
VALID_OBJECT_TYPES = frozenset(t.value for t in PlayObjectType)
VALID_ACTION_TYPES = frozenset(t.value for t in ActionType)
VALID_ANIMATION_TRIGGERS = frozenset(t.value for t in AnimationTrigger)


# ============================================================
# UTILITIES
# ============================================================

def is_finite_number(value: Any) -> bool:
    """True for real ints/floats that are finite (bools excluded)"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond the float range
        return False


def is_enum_value(value: Any, options: frozenset) -> bool:
    return isinstance(value, str) and value in options


def is_optional_string(payload: dict, key: str) -> bool:
    """Absent or a string. An explicit null is rejected."""
    return key not in payload or isinstance(payload[key], str)


def is_valid_point(point: Any) -> bool:
    if not isinstance(point, dict):
        return False
    x, y = point.get("x"), point.get("y")
    return (
        is_finite_number(x) and is_finite_number(y)
        and MIN_COORD <= x <= MAX_COORD
        and MIN_COORD <= y <= MAX_COORD
    )


def is_valid_object(obj: Any) -> bool:
    if not isinstance(obj, dict):
        return False
    return (
        isinstance(obj.get("id"), str)
        and is_enum_value(obj.get("type"), VALID_OBJECT_TYPES)
        and is_optional_string(obj, "label")
        and is_valid_point(obj.get("position"))
    )


def is_valid_animation(animation: Any) -> bool:
    if not isinstance(animation, dict):
        return False
    duration = animation.get("durationMs")
    return (
        is_enum_value(animation.get("trigger"), VALID_ANIMATION_TRIGGERS)
        and is_finite_number(duration)
        and duration > 0
    )


def is_valid_action(action: Any) -> bool:
    if not isinstance(action, dict):
        return False
    return (
        isinstance(action.get("id"), str)
        and is_enum_value(action.get("type"), VALID_ACTION_TYPES)
        and is_valid_point(action.get("from"))
        and is_valid_point(action.get("to"))
        and is_optional_string(action, "fromObjectId")
        and is_optional_string(action, "toObjectId")
        and ("animation" not in action or is_valid_animation(action["animation"]))
    )


# ============================================================
# VALIDATION RESULT
# ============================================================

@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one payload.

    On success `document` holds the parsed PlayDocument; on failure `error`
    names the first violated rule.
    """
    valid: bool
    error: Optional[str] = None
    document: Optional[PlayDocument] = None

    @classmethod
    def ok(cls, document: PlayDocument) -> "ValidationResult":
        return cls(valid=True, document=document)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)

    def to_dict(self) -> dict:
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error}


class InvalidPlayDocument(ValueError):
    """Raised by parse_play_document when a payload fails validation"""

    def __init__(self, error: str):
        super().__init__(error)
        self.error = error


# ============================================================
# DOCUMENT VALIDATOR
# ============================================================

class DocumentValidator:
    """
    Validates the structure of a raw (JSON-decoded) play diagram.

    Each _check_* method returns an error message or None; validate()
    stops at the first message.
    """

    def __init__(self, payload: Any):
        self.payload = payload

    def validate(self) -> ValidationResult:
        if not isinstance(self.payload, dict):
            return ValidationResult.fail("Invalid diagram payload")

        checks = (
            self._check_schema_version,
            self._check_court_template,
            self._check_phases,
        )
        for check in checks:
            error = check()
            if error:
                return ValidationResult.fail(error)

        try:
            document = PlayDocument.model_validate(self.payload)
        except ValidationError as e:
            # Only reachable for inputs the checks above do not model,
            # e.g. non-numeric optional sizes on an object.
            return ValidationResult.fail(f"Invalid diagram payload: {e.errors()[0]['msg']}")

        return ValidationResult.ok(document)

    def _check_schema_version(self) -> Optional[str]:
        version = self.payload.get("schemaVersion")
        if not is_finite_number(version) or version != SCHEMA_VERSION:
            return "Unsupported play diagram schema version"
        return None

    def _check_court_template(self) -> Optional[str]:
        if not is_enum_value(self.payload.get("courtTemplate"), VALID_COURT_TEMPLATES):
            return "Unsupported court template"
        return None

    def _check_phases(self) -> Optional[str]:
        phases = self.payload.get("phases")
        if not isinstance(phases, list) or not phases:
            return "Play must include at least one phase"

        for phase in phases:
            error = self._check_phase(phase)
            if error:
                return error
        return None

    def _check_phase(self, phase: Any) -> Optional[str]:
        if not isinstance(phase, dict):
            return "Invalid phase object"

        if not isinstance(phase.get("id"), str) or not isinstance(phase.get("name"), str):
            return "Phase id and name are required"

        name = phase["name"]
        objects = phase.get("objects")
        if not isinstance(objects, list) or not all(is_valid_object(o) for o in objects):
            return f"Phase {name} has invalid objects"

        actions = phase.get("actions")
        if not isinstance(actions, list) or not all(is_valid_action(a) for a in actions):
            return f"Phase {name} has invalid actions"

        return self._check_ball_owner(phase, objects)

    def _check_ball_owner(self, phase: dict, objects: list) -> Optional[str]:
        """Absent and null are both fine; a string must name an in-phase player"""
        owner_id = phase.get("ballOwnerObjectId")
        if owner_id is None:
            return None

        if not isinstance(owner_id, str):
            return f"Phase {phase['name']} has invalid ball owner"

        is_player = any(
            o["id"] == owner_id and o["type"] in PLAYER_OBJECT_TYPES
            for o in objects
        )
        if not is_player:
            return f"Phase {phase['name']} has invalid ball owner"
        return None


# ============================================================
# ENTRY POINTS
# ============================================================

def validate_play_document(payload: Any) -> ValidationResult:
    """
    Validate a raw play diagram payload.

    Args:
        payload: JSON-decoded document (typically a dict)

    Returns:
        ValidationResult; never raises for malformed input
    """
    return DocumentValidator(payload).validate()


# Name used by the editor-facing API
validate_basketball_play_document = validate_play_document


def parse_play_document(payload: Any) -> PlayDocument:
    """Validate and return the typed document, raising InvalidPlayDocument on failure"""
    result = validate_play_document(payload)
    if not result.valid:
        raise InvalidPlayDocument(result.error)
    return result.document
