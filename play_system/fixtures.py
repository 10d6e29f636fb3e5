"""
Test Fixtures - Predefined play diagrams for testing.

These plays can be used to:
1. Exercise the compiler without an editor
2. Validate the schema
3. Serve as sample input for the play-compile CLI

All fixtures are raw wire-format dicts, exactly as the editor stores them.
"""

# ============================================================
# EXAMPLE PLAYS
# ============================================================

SINGLE_CUT = {
    "schemaVersion": 1,
    "courtTemplate": "half_court",
    "phases": [
        {
            "id": "phase-1",
            "name": "Cut",
            "objects": [
                {"id": "P1", "type": "offense_player", "label": "1", "position": {"x": 100, "y": 100}},
            ],
            "actions": [
                {
                    "id": "a-cut",
                    "type": "cut",
                    "from": {"x": 100, "y": 100},
                    "to": {"x": 300, "y": 100},
                    "fromObjectId": "P1",
                    "animation": {"trigger": "after_previous", "durationMs": 1000},
                },
            ],
        },
        {
            "id": "phase-2",
            "name": "Finish",
            "objects": [
                {"id": "P1", "type": "offense_player", "label": "1", "position": {"x": 300, "y": 100}},
            ],
            "actions": [],
        },
    ],
}


SIMPLE_PASS = {
    "schemaVersion": 1,
    "courtTemplate": "half_court",
    "phases": [
        {
            "id": "phase-1",
            "name": "Entry",
            "objects": [
                {"id": "P1", "type": "offense_player", "label": "1", "position": {"x": 500, "y": 760}},
                {"id": "P2", "type": "offense_player", "label": "2", "position": {"x": 820, "y": 220}},
            ],
            "actions": [
                {
                    "id": "a-pass",
                    "type": "pass",
                    "from": {"x": 500, "y": 760},
                    "to": {"x": 820, "y": 220},
                    "fromObjectId": "P1",
                    "toObjectId": "P2",
                    "animation": {"trigger": "after_previous", "durationMs": 800},
                },
            ],
        },
        {
            "id": "phase-2",
            "name": "Wing catch",
            "objects": [
                {"id": "P1", "type": "offense_player", "label": "1", "position": {"x": 500, "y": 760}},
                {"id": "P2", "type": "offense_player", "label": "2", "position": {"x": 820, "y": 220}},
            ],
            "actions": [],
        },
    ],
}


HORNS_PICK_AND_ROLL = {
    "schemaVersion": 1,
    "courtTemplate": "half_court",
    "phases": [
        {
            "id": "phase-1",
            "name": "Horns entry",
            "objects": [
                {"id": "o1", "type": "offense_player", "label": "1", "position": {"x": 500, "y": 760}},
                {"id": "o4", "type": "offense_player", "label": "4", "position": {"x": 400, "y": 460}},
                {"id": "o5", "type": "offense_player", "label": "5", "position": {"x": 600, "y": 460}},
                {"id": "x1", "type": "defense_player", "label": "X1", "position": {"x": 500, "y": 700}},
                {"id": "cone-1", "type": "cone", "position": {"x": 500, "y": 300}},
                {"id": "note", "type": "text", "label": "Read the hedge", "position": {"x": 120, "y": 60}},
            ],
            "actions": [
                {
                    "id": "a-screen",
                    "type": "screen",
                    "from": {"x": 600, "y": 460},
                    "to": {"x": 540, "y": 700},
                    "fromObjectId": "o5",
                    "animation": {"trigger": "after_previous", "durationMs": 700},
                },
                {
                    "id": "a-dribble",
                    "type": "dribble",
                    "from": {"x": 500, "y": 760},
                    "to": {"x": 620, "y": 600},
                    "fromObjectId": "o1",
                    "animation": {"trigger": "after_previous", "durationMs": 900},
                },
                {
                    "id": "a-roll",
                    "type": "cut",
                    "from": {"x": 600, "y": 460},
                    "to": {"x": 520, "y": 240},
                    "fromObjectId": "o5",
                    "animation": {"trigger": "with_previous", "durationMs": 1100},
                },
                {
                    "id": "a-pass",
                    "type": "pass",
                    "from": {"x": 620, "y": 600},
                    "to": {"x": 520, "y": 240},
                    "fromObjectId": "o1",
                    "toObjectId": "o5",
                    "animation": {"trigger": "after_previous", "durationMs": 600},
                },
            ],
        },
        {
            "id": "phase-2",
            "name": "Roll finish",
            "objects": [
                {"id": "o1", "type": "offense_player", "label": "1", "position": {"x": 620, "y": 600}},
                {"id": "o4", "type": "offense_player", "label": "4", "position": {"x": 300, "y": 420}},
                {"id": "o5", "type": "offense_player", "label": "5", "position": {"x": 520, "y": 240}},
                {"id": "x1", "type": "defense_player", "label": "X1", "position": {"x": 600, "y": 640}},
                {"id": "cone-1", "type": "cone", "position": {"x": 500, "y": 300}},
                {"id": "note", "type": "text", "label": "Read the hedge", "position": {"x": 120, "y": 60}},
            ],
            "actions": [
                {
                    "id": "a-shot",
                    "type": "shot",
                    "from": {"x": 520, "y": 240},
                    "to": {"x": 500, "y": 80},
                    "fromObjectId": "o5",
                },
            ],
        },
        {
            "id": "phase-3",
            "name": "Reset",
            "objects": [
                {"id": "o1", "type": "offense_player", "label": "1", "position": {"x": 500, "y": 760}},
                {"id": "o4", "type": "offense_player", "label": "4", "position": {"x": 400, "y": 460}},
                {"id": "o5", "type": "offense_player", "label": "5", "position": {"x": 520, "y": 240}},
                {"id": "x1", "type": "defense_player", "label": "X1", "position": {"x": 500, "y": 700}},
            ],
            "actions": [],
            "ballOwnerObjectId": "o1",
        },
    ],
}


LEGACY_BALL_MARKER = {
    "schemaVersion": 1,
    "courtTemplate": "full_court_vertical",
    "phases": [
        {
            "id": "phase-1",
            "name": "Inbound",
            "objects": [
                {"id": "o1", "type": "offense_player", "label": "1", "position": {"x": 500, "y": 850}},
                {"id": "o2", "type": "offense_player", "label": "2", "position": {"x": 840, "y": 740}},
                {"id": "x2", "type": "defense_player", "label": "X2", "position": {"x": 800, "y": 700}},
                {"id": "ball", "type": "ball", "position": {"x": 830, "y": 735}},
            ],
            "actions": [],
        },
    ],
}


UNTARGETED_HANDOFF = {
    "schemaVersion": 1,
    "courtTemplate": "half_court",
    "phases": [
        {
            "id": "phase-1",
            "name": "Handoff",
            "objects": [
                {"id": "o1", "type": "offense_player", "label": "1", "position": {"x": 500, "y": 760}},
                {"id": "o2", "type": "offense_player", "label": "2", "position": {"x": 700, "y": 700}},
            ],
            "actions": [
                {
                    "id": "a-handoff",
                    "type": "handoff",
                    "from": {"x": 500, "y": 760},
                    "to": {"x": 680, "y": 700},
                    "fromObjectId": "o1",
                },
            ],
        },
        {
            "id": "phase-2",
            "name": "After",
            "objects": [
                {"id": "o1", "type": "offense_player", "label": "1", "position": {"x": 520, "y": 740}},
                {"id": "o2", "type": "offense_player", "label": "2", "position": {"x": 700, "y": 700}},
            ],
            "actions": [],
        },
    ],
}


ALL_FIXTURES = {
    "single_cut": SINGLE_CUT,
    "simple_pass": SIMPLE_PASS,
    "horns_pick_and_roll": HORNS_PICK_AND_ROLL,
    "legacy_ball_marker": LEGACY_BALL_MARKER,
    "untargeted_handoff": UNTARGETED_HANDOFF,
}
