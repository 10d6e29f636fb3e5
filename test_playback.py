"""
Test script to verify the playback pipeline works end to end.
Run this directly: python test_playback.py
Or through pytest with the rest of the suite
"""

from play_system import PlayPipeline, sample_playback

# Test play with known-good data
TEST_PLAY = {
    "schemaVersion": 1,
    "courtTemplate": "half_court",
    "phases": [
        {
            "id": "phase-1",
            "name": "Give and go",
            "objects": [
                {"id": "o1", "type": "offense_player", "label": "1", "position": {"x": 500, "y": 760}},
                {"id": "o2", "type": "offense_player", "label": "2", "position": {"x": 820, "y": 500}},
                {"id": "x1", "type": "defense_player", "label": "X1", "position": {"x": 500, "y": 700}},
                {"id": "ball", "type": "ball", "position": {"x": 510, "y": 750}}
            ],
            "actions": [
                {"id": "pass-1", "type": "pass", "from": {"x": 500, "y": 760}, "to": {"x": 820, "y": 500},
                 "fromObjectId": "o1", "toObjectId": "o2",
                 "animation": {"trigger": "after_previous", "durationMs": 600}},
                {"id": "cut-1", "type": "cut", "from": {"x": 500, "y": 760}, "to": {"x": 520, "y": 260},
                 "fromObjectId": "o1",
                 "animation": {"trigger": "after_previous", "durationMs": 1000}},
                {"id": "pass-2", "type": "pass", "from": {"x": 820, "y": 500}, "to": {"x": 520, "y": 260},
                 "fromObjectId": "o2", "toObjectId": "o1",
                 "animation": {"trigger": "with_previous", "durationMs": 1000}}
            ]
        },
        {
            "id": "phase-2",
            "name": "Layup",
            "objects": [
                {"id": "o1", "type": "offense_player", "label": "1", "position": {"x": 520, "y": 240}},
                {"id": "o2", "type": "offense_player", "label": "2", "position": {"x": 820, "y": 500}},
                {"id": "x1", "type": "defense_player", "label": "X1", "position": {"x": 560, "y": 420}}
            ],
            "actions": []
        }
    ]
}


def test_give_and_go():
    pipeline = PlayPipeline(speed_multiplier=1, settle_duration_ms=550)
    result = pipeline.compile(TEST_PLAY)
    assert result.is_valid, result.errors

    playback = result.playback
    transition = playback.transitions[0]

    # Ball marker sits on o1, and o1 gets the return pass
    assert transition.start_owner_object_id == "o1"
    assert transition.end_owner_object_id == "o1"
    assert transition.timeline.action_duration_ms == 1600

    # Mid-cut: o2 has the ball, o1 is halfway to the rim
    frame = sample_playback(playback, 1100)
    assert frame.ball_owner_object_id == "o2"
    assert frame.positions["o1"].y == 510

    frames = pipeline.sample_frames(result, step_ms=100)
    assert frames[-1]["positions"]["x1"] == {"x": 560, "y": 420}


if __name__ == "__main__":
    print("Testing play compilation...")
    print(f"Phases in test play: {len(TEST_PLAY['phases'])}")

    pipeline = PlayPipeline()
    result = pipeline.compile(TEST_PLAY)
    print(f"Valid: {result.is_valid}")

    for transition in result.playback.transitions:
        print(f"  {transition.from_phase_id} -> {transition.to_phase_id}")
        for scheduled in transition.timeline.scheduled_actions:
            print(f"    {scheduled.action.id}: {scheduled.start_ms:.0f}-{scheduled.end_ms:.0f}ms")

    frames = pipeline.sample_frames(result, step_ms=100)
    print(f"\nFrames sampled: {len(frames)}")
    print(f"Ball owner at end: {frames[-1]['ballOwnerObjectId']}")

    test_give_and_go()
    print("\n✓ Test complete!")
