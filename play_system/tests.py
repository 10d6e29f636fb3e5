"""
Test Suite - Exercises the play system with predefined fixtures.

No editor or renderer needed; every test works from raw fixture payloads.

Usage:
    pytest play_system/tests.py
"""

import copy
import json
import math

import pytest

from .schema import PlayDocument, PlayPhase, Point
from .validator import (
    validate_play_document,
    validate_basketball_play_document,
    parse_play_document,
    InvalidPlayDocument,
)
from .timeline import compile_phase_timeline, normalize_duration, DEFAULT_ACTION_DURATION_MS
from .positions import apply_movement_actions_at_time, phase_positions, interpolate_point
from .possession import (
    resolve_initial_ball_owner,
    resolve_ball_owner_at_time,
    get_phase_action_warnings,
)
from .playback import compile_play_playback, get_transition_frame, sample_playback
from .geometry import (
    build_action_path,
    build_screen_cap_points,
    build_wavy_arrow_points,
    get_action_visual_style,
)
from .templates import CORE_PLAY_TEMPLATES, get_template_by_id
from .pipeline import PlayPipeline, main
from .fixtures import ALL_FIXTURES, SINGLE_CUT, SIMPLE_PASS, HORNS_PICK_AND_ROLL, UNTARGETED_HANDOFF


# ============================================================
# HELPERS
# ============================================================

def load(name: str) -> PlayDocument:
    return PlayDocument.model_validate(ALL_FIXTURES[name])


def player(object_id, x, y, kind="offense_player"):
    return {"id": object_id, "type": kind, "position": {"x": x, "y": y}}


def action(action_id, kind, start, end, from_id=None, to_id=None, trigger=None, duration=None):
    data = {
        "id": action_id,
        "type": kind,
        "from": {"x": start[0], "y": start[1]},
        "to": {"x": end[0], "y": end[1]},
    }
    if from_id:
        data["fromObjectId"] = from_id
    if to_id:
        data["toObjectId"] = to_id
    if trigger or duration:
        data["animation"] = {"trigger": trigger or "after_previous", "durationMs": duration or 900}
    return data


def make_phase(objects=(), actions=(), **extra) -> PlayPhase:
    data = {"id": "p", "name": "Phase", "objects": list(objects), "actions": list(actions)}
    data.update(extra)
    return PlayPhase.model_validate(data)


def make_document(*phases) -> PlayDocument:
    return PlayDocument.model_validate({
        "schemaVersion": 1,
        "courtTemplate": "half_court",
        "phases": list(phases),
    })


def broken(fixture: dict, mutate) -> dict:
    data = copy.deepcopy(fixture)
    mutate(data)
    return data


# ============================================================
# SCHEMA VALIDATION
# ============================================================

def test_all_fixtures_validate():
    for name, data in ALL_FIXTURES.items():
        result = validate_play_document(data)
        assert result.valid, f"{name}: {result.error}"
        assert result.error is None
        assert isinstance(result.document, PlayDocument)


def test_unsupported_schema_version():
    result = validate_play_document(broken(SIMPLE_PASS, lambda d: d.update(schemaVersion=2)))
    assert not result.valid
    assert "schema version" in result.error
    assert result.to_dict() == {"valid": False, "error": result.error}


def test_boolean_schema_version_is_rejected():
    result = validate_play_document(broken(SIMPLE_PASS, lambda d: d.update(schemaVersion=True)))
    assert not result.valid
    assert "schema version" in result.error


def test_non_mapping_payload():
    for payload in (None, [], "play", 42):
        result = validate_play_document(payload)
        assert not result.valid
        assert result.error == "Invalid diagram payload"


def test_checks_run_in_order():
    # Bad template and no phases: the template is reported first
    payload = {"schemaVersion": 1, "courtTemplate": "quarter_court", "phases": []}
    assert validate_play_document(payload).error == "Unsupported court template"

    payload["courtTemplate"] = "half_court"
    assert validate_play_document(payload).error == "Play must include at least one phase"


def test_phase_shape_errors():
    result = validate_play_document(broken(SIMPLE_PASS, lambda d: d["phases"].append("phase")))
    assert result.error == "Invalid phase object"

    result = validate_play_document(broken(SIMPLE_PASS, lambda d: d["phases"][0].pop("name")))
    assert result.error == "Phase id and name are required"


def test_object_out_of_bounds():
    def mutate(d):
        d["phases"][0]["objects"][0]["position"]["x"] = 1000.5

    result = validate_play_document(broken(SIMPLE_PASS, mutate))
    assert result.error == "Phase Entry has invalid objects"


def test_object_bad_type():
    def mutate(d):
        d["phases"][1]["objects"][0]["type"] = "referee"

    result = validate_play_document(broken(SIMPLE_PASS, mutate))
    assert result.error == "Phase Wing catch has invalid objects"


def test_action_errors():
    def bad_type(d):
        d["phases"][0]["actions"][0]["type"] = "alley_oop"

    def bad_point(d):
        d["phases"][0]["actions"][0]["to"] = {"x": 10, "y": float("nan")}

    def bad_animation(d):
        d["phases"][0]["actions"][0]["animation"] = {"trigger": "after_previous", "durationMs": 0}

    def bad_trigger(d):
        d["phases"][0]["actions"][0]["animation"]["trigger"] = "before_previous"

    for mutate in (bad_type, bad_point, bad_animation, bad_trigger):
        result = validate_play_document(broken(SIMPLE_PASS, mutate))
        assert result.error == "Phase Entry has invalid actions"


def test_numbers_beyond_float_range_are_rejected():
    # JSON integers have no size limit; 10**400 does not fit in a float
    huge = 10 ** 400

    result = validate_play_document(broken(SIMPLE_PASS, lambda d: d.update(schemaVersion=huge)))
    assert result.error == "Unsupported play diagram schema version"

    def huge_coordinate(d):
        d["phases"][0]["objects"][0]["position"]["x"] = huge

    result = validate_play_document(broken(SIMPLE_PASS, huge_coordinate))
    assert result.error == "Phase Entry has invalid objects"

    def huge_duration(d):
        d["phases"][0]["actions"][0]["animation"]["durationMs"] = huge

    result = validate_play_document(broken(SIMPLE_PASS, huge_duration))
    assert result.error == "Phase Entry has invalid actions"


def test_optional_fields_may_be_absent_but_not_null():
    def drop_optionals(d):
        d["phases"][0]["objects"][0].pop("label")
        d["phases"][0]["actions"][0].pop("toObjectId")
        d["phases"][0]["actions"][0].pop("animation")

    assert validate_play_document(broken(SIMPLE_PASS, drop_optionals)).valid

    def null_label(d):
        d["phases"][0]["objects"][0]["label"] = None

    result = validate_play_document(broken(SIMPLE_PASS, null_label))
    assert result.error == "Phase Entry has invalid objects"

    for key in ("fromObjectId", "toObjectId", "animation"):
        def null_field(d, key=key):
            d["phases"][0]["actions"][0][key] = None

        result = validate_play_document(broken(SIMPLE_PASS, null_field))
        assert result.error == "Phase Entry has invalid actions", key


def test_ball_owner_rules():
    def set_owner(value):
        return lambda d: d["phases"][0].update(ballOwnerObjectId=value)

    assert validate_play_document(broken(SIMPLE_PASS, set_owner(None))).valid
    assert validate_play_document(broken(SIMPLE_PASS, set_owner("P2"))).valid

    for value in (7, "nobody"):
        result = validate_play_document(broken(SIMPLE_PASS, set_owner(value)))
        assert result.error == "Phase Entry has invalid ball owner"

    # Owner must be a player, not any object
    def owner_is_cone(d):
        d["phases"][0]["objects"].append({"id": "c1", "type": "cone", "position": {"x": 1, "y": 1}})
        d["phases"][0]["ballOwnerObjectId"] = "c1"

    result = validate_play_document(broken(SIMPLE_PASS, owner_is_cone))
    assert result.error == "Phase Entry has invalid ball owner"


def test_parse_play_document_raises():
    assert parse_play_document(SIMPLE_PASS).phases[0].id == "phase-1"
    assert validate_basketball_play_document is validate_play_document

    with pytest.raises(InvalidPlayDocument) as excinfo:
        parse_play_document({"schemaVersion": 1, "courtTemplate": "half_court", "phases": []})
    assert excinfo.value.error == "Play must include at least one phase"


def test_explicit_null_owner_survives_round_trip():
    document = load("simple_pass")
    assert not document.phases[0].declares_ball_owner

    data = broken(SIMPLE_PASS, lambda d: d["phases"][0].update(ballOwnerObjectId=None))
    document = PlayDocument.model_validate(data)
    assert document.phases[0].declares_ball_owner

    dumped = json.loads(document.to_json())
    assert "ballOwnerObjectId" in dumped["phases"][0]
    assert dumped["phases"][0]["ballOwnerObjectId"] is None
    assert "ballOwnerObjectId" not in dumped["phases"][1]
    assert PlayDocument.from_json(document.to_json()).phases[0].declares_ball_owner


# ============================================================
# TIMELINE
# ============================================================

def test_default_durations_run_sequentially():
    phase = make_phase(
        [player("P1", 100, 100)],
        [action("a", "cut", (100, 100), (200, 100), "P1"), action("b", "cut", (200, 100), (300, 100), "P1")],
    )
    timeline = compile_phase_timeline(phase)

    assert [s.start_ms for s in timeline.scheduled_actions] == [0, 900]
    assert [s.end_ms for s in timeline.scheduled_actions] == [900, 1800]
    assert timeline.action_duration_ms == 1800
    assert timeline.settle_duration_ms == 550
    assert timeline.total_duration_ms == 2350


def test_with_previous_shares_start():
    phase = make_phase([], [
        action("a", "cut", (0, 0), (10, 0), trigger="after_previous", duration=1000),
        action("b", "cut", (0, 0), (10, 0), trigger="with_previous", duration=500),
        action("c", "cut", (0, 0), (10, 0), trigger="with_previous", duration=300),
        action("d", "cut", (0, 0), (10, 0), trigger="after_previous", duration=400),
        action("e", "cut", (0, 0), (10, 0), trigger="with_previous", duration=200),
    ])
    starts = [s.start_ms for s in compile_phase_timeline(phase).scheduled_actions]
    assert starts == [0, 0, 0, 1000, 1000]


def test_after_previous_waits_for_longest():
    phase = make_phase([], [
        action("a", "cut", (0, 0), (10, 0), duration=1000),
        action("b", "pass", (0, 0), (10, 0), trigger="with_previous", duration=2000),
        action("c", "cut", (0, 0), (10, 0), duration=500),
    ])
    timeline = compile_phase_timeline(phase)
    assert timeline.scheduled_actions[2].start_ms == 2000
    assert timeline.action_duration_ms == 2500


def test_first_action_always_starts_at_zero():
    phase = make_phase([], [action("a", "cut", (0, 0), (10, 0), trigger="with_previous", duration=700)])
    scheduled = compile_phase_timeline(phase).scheduled_actions[0]
    assert scheduled.start_ms == 0
    assert scheduled.end_ms == 700


def test_durations_are_clamped():
    assert normalize_duration(50) == 120
    assert normalize_duration(50000) == 12000
    assert normalize_duration(None) == DEFAULT_ACTION_DURATION_MS
    assert normalize_duration(float("inf")) == DEFAULT_ACTION_DURATION_MS
    assert normalize_duration(900.5) == 901
    assert normalize_duration(1000.5) == 1001
    assert normalize_duration(899.4) == 899

    phase = make_phase([], [action("a", "cut", (0, 0), (10, 0), duration=50)])
    assert compile_phase_timeline(phase).scheduled_actions[0].duration_ms == 120


def test_doubling_speed_halves_durations():
    phase = make_phase([], [
        action("a", "cut", (0, 0), (10, 0), duration=1000),
        action("b", "cut", (0, 0), (10, 0), duration=600),
        action("c", "pass", (0, 0), (10, 0), trigger="with_previous", duration=300),
    ])
    normal = compile_phase_timeline(phase, 1)
    fast = compile_phase_timeline(phase, 2)

    assert fast.action_duration_ms == normal.action_duration_ms / 2
    assert fast.settle_duration_ms == normal.settle_duration_ms / 2
    for slow_action, fast_action in zip(normal.scheduled_actions, fast.scheduled_actions):
        assert fast_action.start_ms == slow_action.start_ms / 2


def test_invalid_speed_falls_back_to_normal():
    phase = make_phase([], [action("a", "cut", (0, 0), (10, 0), duration=1000)])
    normal = compile_phase_timeline(phase)
    for speed in (0, -2, float("nan"), float("inf"), None, "fast", 10 ** 400):
        assert compile_phase_timeline(phase, speed) == normal


def test_settle_has_a_floor():
    timeline = compile_phase_timeline(make_phase(), speed_multiplier=10)
    assert timeline.action_duration_ms == 0
    assert timeline.settle_duration_ms == 120
    assert timeline.total_duration_ms == 120


# ============================================================
# POSITIONS
# ============================================================

def test_cut_interpolates_halfway():
    phase = load("single_cut").phases[0]
    timeline = compile_phase_timeline(phase)
    positions = apply_movement_actions_at_time(phase_positions(phase), timeline.scheduled_actions, 500)
    assert positions["P1"] == Point(x=200, y=100)


def test_movement_before_and_after_window():
    phase = make_phase([player("P1", 100, 100), player("P2", 500, 500)], [
        action("a", "cut", (500, 500), (600, 500), "P2", duration=400),
        action("b", "dribble", (100, 100), (100, 300), "P1", duration=1000),
    ])
    timeline = compile_phase_timeline(phase)
    base = phase_positions(phase)

    # P1's dribble starts at 400
    assert apply_movement_actions_at_time(base, timeline.scheduled_actions, 399)["P1"] == Point(x=100, y=100)
    assert apply_movement_actions_at_time(base, timeline.scheduled_actions, 900)["P1"] == Point(x=100, y=200)
    assert apply_movement_actions_at_time(base, timeline.scheduled_actions, 1400)["P1"] == Point(x=100, y=300)
    assert apply_movement_actions_at_time(base, timeline.scheduled_actions, 5000)["P2"] == Point(x=600, y=500)


def test_non_movement_actions_leave_geometry_alone():
    phase = make_phase([player("P1", 100, 100), player("P2", 400, 100)], [
        action("s", "screen", (100, 100), (150, 150), "P1"),
        action("p", "pass", (100, 100), (400, 100), "P1", "P2"),
        action("h", "handoff", (100, 100), (400, 100), "P1", "P2"),
        action("x", "shot", (400, 100), (500, 50), "P2"),
    ])
    timeline = compile_phase_timeline(phase)
    base = phase_positions(phase)
    assert apply_movement_actions_at_time(base, timeline.scheduled_actions, 10000) == base


def test_later_movement_wins_on_overlap():
    phase = make_phase([player("P1", 100, 100)], [
        action("a", "cut", (100, 100), (300, 100), "P1", duration=1000),
        action("b", "cut", (100, 100), (100, 500), "P1", trigger="with_previous", duration=1000),
    ])
    timeline = compile_phase_timeline(phase)
    base = phase_positions(phase)
    assert apply_movement_actions_at_time(base, timeline.scheduled_actions, 500)["P1"] == Point(x=100, y=300)
    assert apply_movement_actions_at_time(base, timeline.scheduled_actions, 1000)["P1"] == Point(x=100, y=500)


def test_unknown_actor_is_ignored_and_input_untouched():
    phase = make_phase([player("P1", 100, 100)], [
        action("a", "cut", (100, 100), (300, 100), "ghost", duration=1000),
        action("b", "dribble", (100, 100), (300, 100), duration=1000),
    ])
    timeline = compile_phase_timeline(phase)
    base = phase_positions(phase)
    snapshot = dict(base)

    positions = apply_movement_actions_at_time(base, timeline.scheduled_actions, 5000)
    assert positions == snapshot
    assert "ghost" not in positions
    assert positions is not base
    assert base == snapshot


def test_interpolate_point_clamps_progress():
    start, end = Point(x=0, y=0), Point(x=1000, y=1000)
    assert interpolate_point(start, end, -1) == start
    assert interpolate_point(start, end, 2) == end
    assert interpolate_point(start, end, 0.25) == Point(x=250, y=250)


# ============================================================
# POSSESSION
# ============================================================

def test_pass_transfers_on_completion():
    document = load("simple_pass")
    phase = document.phases[0]
    assert resolve_initial_ball_owner(phase) == "P1"

    scheduled = compile_phase_timeline(phase).scheduled_actions
    assert resolve_ball_owner_at_time("P1", scheduled, 799) == "P1"
    assert resolve_ball_owner_at_time("P1", scheduled, 800) == "P2"
    assert resolve_ball_owner_at_time("P1", scheduled, 5000) == "P2"


def test_last_finished_transfer_wins():
    phase = make_phase([player("A", 0, 0), player("B", 10, 0), player("C", 20, 0)], [
        action("p1", "pass", (0, 0), (10, 0), "A", "B", duration=500),
        action("p2", "handoff", (10, 0), (20, 0), "B", "C", duration=500),
    ])
    scheduled = compile_phase_timeline(phase).scheduled_actions
    assert resolve_ball_owner_at_time("A", scheduled, 499) == "A"
    assert resolve_ball_owner_at_time("A", scheduled, 500) == "B"
    assert resolve_ball_owner_at_time("A", scheduled, 1000) == "C"


def test_legacy_ball_marker_picks_nearest_player():
    phase = load("legacy_ball_marker").phases[0]
    assert resolve_initial_ball_owner(phase) == "o2"


def test_explicit_override_beats_inference():
    objects = [player("o1", 100, 100), player("o2", 900, 900), {"id": "b", "type": "ball", "position": {"x": 890, "y": 890}}]
    assert resolve_initial_ball_owner(make_phase(objects)) == "o2"
    assert resolve_initial_ball_owner(make_phase(objects, ballOwnerObjectId="o1")) == "o1"
    assert resolve_initial_ball_owner(make_phase(objects, ballOwnerObjectId=None)) is None


def test_unusable_override_falls_back_to_inference():
    objects = [
        player("o1", 100, 100),
        player("o2", 900, 900),
        {"id": "c", "type": "cone", "position": {"x": 5, "y": 5}},
    ]
    assert resolve_initial_ball_owner(make_phase(objects, ballOwnerObjectId="missing")) == "o1"
    assert resolve_initial_ball_owner(make_phase(objects, ballOwnerObjectId="c")) == "o1"


def test_first_offense_player_and_empty_phase():
    objects = [player("x1", 10, 10, "defense_player"), player("o7", 500, 500), player("o3", 20, 20)]
    assert resolve_initial_ball_owner(make_phase(objects)) == "o7"
    assert resolve_initial_ball_owner(make_phase([player("x1", 10, 10, "defense_player")])) is None
    assert resolve_initial_ball_owner(make_phase()) is None
    assert resolve_initial_ball_owner(None) is None


def test_untargeted_transfer_warns_once():
    phase = load("untargeted_handoff").phases[0]
    warnings = get_phase_action_warnings(phase)

    assert len(warnings) == 1
    assert warnings[0].action_id == "a-handoff"
    assert warnings[0].to_dict()["actionId"] == "a-handoff"

    scheduled = compile_phase_timeline(phase).scheduled_actions
    assert resolve_ball_owner_at_time("o1", scheduled, 10000) == "o1"


# ============================================================
# PLAYBACK
# ============================================================

def test_transition_count():
    for name in ALL_FIXTURES:
        document = load(name)
        playback = compile_play_playback(document)
        assert len(playback.transitions) == len(document.phases) - 1
        assert len(playback.phase_start_owners) == len(document.phases)


def test_possession_carries_across_phases():
    playback = compile_play_playback(load("horns_pick_and_roll"))
    first, second = playback.transitions

    assert first.start_owner_object_id == "o1"
    assert first.end_owner_object_id == "o5"
    assert second.start_owner_object_id == "o5"
    assert second.end_owner_object_id == "o5"
    # Phase 3 declares its own owner
    assert playback.phase_start_owners == ["o1", "o5", "o1"]


def test_explicit_null_on_next_phase_clears_owner():
    data = broken(SIMPLE_PASS, lambda d: d["phases"][1].update(ballOwnerObjectId=None))
    playback = compile_play_playback(PlayDocument.model_validate(data))
    assert playback.transitions[0].end_owner_object_id == "P2"
    assert playback.phase_start_owners == ["P1", None]


def test_horns_schedule_and_post_action_positions():
    transition = compile_play_playback(load("horns_pick_and_roll")).transitions[0]
    scheduled = transition.timeline.scheduled_actions

    assert [(s.start_ms, s.end_ms) for s in scheduled] == [(0, 700), (700, 1600), (700, 1800), (1800, 2400)]
    assert transition.timeline.action_duration_ms == 2400
    assert transition.post_action_positions["o1"] == Point(x=620, y=600)
    assert transition.post_action_positions["o5"] == Point(x=520, y=240)
    assert transition.post_action_positions["o4"] == Point(x=400, y=460)
    assert transition.warnings == []


def test_frames_match_authored_layouts_at_both_ends():
    document = load("horns_pick_and_roll")
    transition = compile_play_playback(document).transitions[0]

    assert get_transition_frame(transition, 0).positions == phase_positions(document.phases[0])
    end = get_transition_frame(transition, transition.timeline.total_duration_ms)
    assert end.positions == phase_positions(document.phases[1])
    assert end.ball_owner_object_id == "o5"


def test_progress_is_monotonic_and_bounded():
    transition = compile_play_playback(load("horns_pick_and_roll")).transitions[0]
    timeline = transition.timeline

    last_action, last_settle = -1.0, -1.0
    steps = 80
    for i in range(-5, steps + 6):
        elapsed = timeline.total_duration_ms * i / steps
        frame = get_transition_frame(transition, elapsed)

        assert 0 <= frame.action_progress <= 1
        assert 0 <= frame.settle_progress <= 1
        assert frame.action_progress >= last_action
        assert frame.settle_progress >= last_settle
        clamped = max(0, min(timeline.total_duration_ms, elapsed))
        assert frame.is_settle_segment == (clamped > timeline.action_duration_ms)
        last_action, last_settle = frame.action_progress, frame.settle_progress


def test_owner_changes_exactly_at_pass_end():
    transition = compile_play_playback(load("simple_pass")).transitions[0]
    assert get_transition_frame(transition, 799).ball_owner_object_id == "P1"
    assert get_transition_frame(transition, 800).ball_owner_object_id == "P2"
    assert get_transition_frame(transition, 1000).ball_owner_object_id == "P2"


def test_settle_segment_glides_to_next_layout():
    transition = compile_play_playback(load("untargeted_handoff")).transitions[0]
    timeline = transition.timeline
    assert timeline.action_duration_ms == 900
    assert [w.action_id for w in transition.warnings] == ["a-handoff"]

    frame = get_transition_frame(transition, 900 + timeline.settle_duration_ms / 2)
    assert frame.is_settle_segment
    assert frame.action_progress == 1
    assert frame.settle_progress == 0.5
    assert frame.positions["o1"] == Point(x=510, y=750)
    assert frame.ball_owner_object_id == "o1"


def test_objects_in_one_phase_only_pass_through():
    first = {
        "id": "a", "name": "A",
        "objects": [player("P1", 100, 100), {"id": "cone", "type": "cone", "position": {"x": 50, "y": 50}}],
        "actions": [],
    }
    second = {
        "id": "b", "name": "B",
        "objects": [player("P1", 300, 100), player("P9", 900, 900)],
        "actions": [],
    }
    transition = compile_play_playback(make_document(first, second)).transitions[0]
    frame = get_transition_frame(transition, transition.timeline.total_duration_ms / 2)

    assert frame.positions["cone"] == Point(x=50, y=50)
    assert frame.positions["P9"] == Point(x=900, y=900)


def test_transition_without_actions():
    first = {"id": "a", "name": "A", "objects": [player("P1", 100, 100)], "actions": []}
    second = {"id": "b", "name": "B", "objects": [player("P1", 200, 100)], "actions": []}
    transition = compile_play_playback(make_document(first, second)).transitions[0]

    start = get_transition_frame(transition, 0)
    assert start.action_progress == 1
    assert not start.is_settle_segment
    assert get_transition_frame(transition, 1).is_settle_segment


def test_single_phase_has_no_transitions():
    playback = compile_play_playback(load("legacy_ball_marker"))
    assert playback.transitions == []
    assert playback.phase_start_owners == ["o2"]
    with pytest.raises(ValueError):
        playback.locate(0)


def test_frames_are_idempotent_and_clamped():
    transition = compile_play_playback(load("single_cut")).transitions[0]
    total = transition.timeline.total_duration_ms

    assert get_transition_frame(transition, 500) == get_transition_frame(transition, 500)
    assert get_transition_frame(transition, -100) == get_transition_frame(transition, 0)
    assert get_transition_frame(transition, total + 1000) == get_transition_frame(transition, total)


def test_whole_play_clock():
    playback = compile_play_playback(load("horns_pick_and_roll"))
    first, second = playback.transitions

    assert playback.total_duration_ms == first.total_duration_ms + second.total_duration_ms
    assert playback.locate(0) == (0, 0)
    assert playback.locate(first.total_duration_ms + 10) == (1, 10)
    assert playback.locate(1e9) == (1, second.total_duration_ms)

    frame = sample_playback(playback, first.total_duration_ms + 10)
    assert frame == get_transition_frame(second, 10)


def test_playback_serializes_with_wire_keys():
    data = compile_play_playback(load("simple_pass")).to_dict()
    transition = data["transitions"][0]

    assert data["phaseStartOwners"] == ["P1", "P2"]
    assert transition["endOwnerObjectId"] == "P2"
    assert transition["timeline"]["scheduledActions"][0]["actionId"] == "a-pass"
    assert transition["basePositions"]["P1"] == {"x": 500, "y": 760}
    json.dumps(data)


# ============================================================
# GEOMETRY
# ============================================================

def test_wavy_path_endpoints_are_pinned():
    start, end = Point(x=100, y=100), Point(x=600, y=400)
    points = build_wavy_arrow_points(start, end)

    assert len(points) % 2 == 0
    assert points[:2] == [100, 100]
    assert points[-2:] == [600, 400]
    assert len(points) > 4


def test_short_wavy_path_is_straight():
    points = build_wavy_arrow_points(Point(x=100, y=100), Point(x=103, y=103))
    assert points == [100, 100, 103, 103]


def test_wave_segment_count_rounds_half_up():
    # 340 / 8 = 42.5 segments, so 44 points
    points = build_wavy_arrow_points(Point(x=100, y=100), Point(x=440, y=100))
    assert len(points) == 44 * 2


def test_screen_cap_is_perpendicular():
    cap = build_screen_cap_points(Point(x=100, y=100), Point(x=100, y=300))
    x1, y1, x2, y2 = cap
    assert math.isclose(math.hypot(x2 - x1, y2 - y1), 30)
    assert math.isclose(y1, 300) and math.isclose(y2, 300)


def test_action_styles():
    assert get_action_visual_style("dribble").mode == "wavy_arrow"
    assert get_action_visual_style("screen").mode == "screen"
    assert get_action_visual_style("pass").dash == (11, 8)
    assert math.isclose(
        get_action_visual_style("cut", selected=True).stroke_width,
        get_action_visual_style("cut").stroke_width + 0.8,
    )

    phase = load("horns_pick_and_roll").phases[0]
    screen_path = build_action_path(phase.actions[0])
    assert "cap" in screen_path
    assert screen_path["points"] == [600, 460, 540, 700]
    assert "cap" not in build_action_path(phase.actions[3])


# ============================================================
# TEMPLATES
# ============================================================

def test_templates_validate():
    for template in CORE_PLAY_TEMPLATES:
        result = validate_play_document(template.diagram.to_dict())
        assert result.valid, f"{template.id}: {result.error}"


def test_template_lookup():
    assert get_template_by_id().id == "empty"
    assert get_template_by_id("nope").id == "empty"
    assert get_template_by_id("horns").name == "Horns"


def test_template_ids_are_fresh():
    template = get_template_by_id("traditional_defended")
    first, second = template.diagram, template.diagram
    first_ids = {o.id for o in first.phases[0].objects}
    second_ids = {o.id for o in second.phases[0].objects}

    assert len(first_ids) == 10
    assert not first_ids & second_ids
    assert resolve_initial_ball_owner(first.phases[0]) == first.phases[0].objects[0].id


# ============================================================
# PIPELINE
# ============================================================

def test_pipeline_compiles_valid_play():
    result = PlayPipeline(speed_multiplier=1).compile(HORNS_PICK_AND_ROLL)
    assert result.is_valid
    assert result.errors == []
    assert len(result.playback.transitions) == 2


def test_pipeline_reports_invalid_play():
    result = PlayPipeline().compile({"schemaVersion": 3})
    assert not result.is_valid
    assert result.playback is None
    assert result.errors == ["Unsupported play diagram schema version"]
    assert result.warnings == []


def test_pipeline_reads_speed_from_environment(monkeypatch):
    monkeypatch.setenv("PLAY_SPEED_MULTIPLIER", "2")
    monkeypatch.setenv("PLAY_SETTLE_DURATION_MS", "1000")
    pipeline = PlayPipeline()
    assert pipeline.speed_multiplier == 2

    timeline = pipeline.compile(SINGLE_CUT).playback.transitions[0].timeline
    assert timeline.action_duration_ms == 500
    assert timeline.settle_duration_ms == 500


def test_pipeline_ignores_bad_environment(monkeypatch):
    monkeypatch.setenv("PLAY_SPEED_MULTIPLIER", "fast")
    assert PlayPipeline().speed_multiplier == 1


def test_pipeline_warnings_surface():
    result = PlayPipeline().compile(UNTARGETED_HANDOFF)
    assert [w.action_id for w in result.warnings] == ["a-handoff"]


def test_sample_frames_cover_each_transition():
    pipeline = PlayPipeline(speed_multiplier=1)
    result = pipeline.compile(SINGLE_CUT)
    frames = pipeline.sample_frames(result, step_ms=100)
    total = result.playback.transitions[0].timeline.total_duration_ms

    assert frames[0]["elapsedMs"] == 0
    assert frames[-1]["elapsedMs"] == total
    assert frames[-1]["positions"]["P1"] == {"x": 300, "y": 100}
    assert all(f["transitionIndex"] == 0 for f in frames)

    with pytest.raises(ValueError):
        pipeline.sample_frames(result, step_ms=0)


def test_cli_writes_outputs(tmp_path, capsys):
    play_path = tmp_path / "play.json"
    play_path.write_text(json.dumps(UNTARGETED_HANDOFF))
    frames_path = tmp_path / "frames.json"
    compiled_path = tmp_path / "compiled.json"

    code = main([str(play_path), "--speed", "2", "--frames", str(frames_path), "--json", str(compiled_path)])
    assert code == 0

    output = capsys.readouterr().out
    assert "a-handoff" in output
    assert json.loads(frames_path.read_text())
    assert json.loads(compiled_path.read_text())["phaseStartOwners"] == ["o1", "o1"]


def test_cli_rejects_invalid_play(tmp_path, capsys):
    play_path = tmp_path / "bad.json"
    play_path.write_text(json.dumps({"schemaVersion": 2}))
    assert main([str(play_path)]) == 1
    assert "schema version" in capsys.readouterr().out
