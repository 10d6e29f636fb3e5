"""
Play Pipeline - Complete end-to-end play compilation.

This is the main entry point for turning a stored play diagram into
animation data. It orchestrates:
1. Validation of the raw payload
2. Compilation into transitions
3. Frame sampling for export or preview

Usage:
    from play_system.pipeline import PlayPipeline

    pipeline = PlayPipeline(speed_multiplier=1.5)
    result = pipeline.compile_from_json("play.json")
    frames = pipeline.sample_frames(result, step_ms=50)
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional

from .schema import PlayDocument
from .timeline import DEFAULT_SETTLE_DURATION_MS, normalize_speed_multiplier
from .validator import ValidationResult, validate_play_document
from .playback import CompiledPlayback, compile_play_playback, get_transition_frame
from .possession import ActionWarning


logger = logging.getLogger(__name__)

SPEED_ENV_VAR = "PLAY_SPEED_MULTIPLIER"
SETTLE_ENV_VAR = "PLAY_SETTLE_DURATION_MS"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default


@dataclass
class PipelineResult:
    """Result of compiling one play"""
    validation: ValidationResult
    playback: Optional[CompiledPlayback] = None

    @property
    def is_valid(self) -> bool:
        return self.validation.valid

    @property
    def document(self) -> Optional[PlayDocument]:
        return self.validation.document

    @property
    def errors(self) -> List[str]:
        return [] if self.validation.valid else [self.validation.error]

    @property
    def warnings(self) -> List[ActionWarning]:
        return self.playback.warnings if self.playback else []


class PlayPipeline:
    """
    Validates and compiles play diagrams.

    Example:
        pipeline = PlayPipeline()
        result = pipeline.compile(payload)

        if not result.is_valid:
            print("Errors:", result.errors)
        else:
            for transition in result.playback.transitions:
                print(transition.from_phase_id, transition.timeline.total_duration_ms)

    Speed and settle duration default to the PLAY_SPEED_MULTIPLIER and
    PLAY_SETTLE_DURATION_MS environment variables, then to 1x and 550ms.
    """

    def __init__(
        self,
        speed_multiplier: Optional[float] = None,
        settle_duration_ms: Optional[float] = None,
    ):
        if speed_multiplier is None:
            speed_multiplier = _env_float(SPEED_ENV_VAR, 1.0)
        if settle_duration_ms is None:
            settle_duration_ms = _env_float(SETTLE_ENV_VAR, DEFAULT_SETTLE_DURATION_MS)

        self.speed_multiplier = normalize_speed_multiplier(speed_multiplier)
        self.settle_duration_ms = settle_duration_ms

    def compile(self, payload: Any) -> PipelineResult:
        """
        Validate a raw payload and compile it.

        Invalid payloads are not compiled; the result carries the error.
        """
        validation = validate_play_document(payload)
        if not validation.valid:
            logger.info("Rejected play diagram: %s", validation.error)
            return PipelineResult(validation=validation)

        playback = self._compile_document(validation.document)
        result = PipelineResult(validation=validation, playback=playback)

        logger.debug(
            "Compiled %d transitions (%.0fms at %.2fx)",
            len(playback.transitions), playback.total_duration_ms, self.speed_multiplier,
        )
        for warning in result.warnings:
            logger.warning("Action %s: %s", warning.action_id, warning.message)

        return result

    def compile_from_json(self, json_path: str) -> PipelineResult:
        """Load a play from a JSON file and compile it"""
        with open(json_path) as f:
            data = json.load(f)
        return self.compile(data)

    def sample_frames(self, result: PipelineResult, step_ms: float = 50) -> List[dict]:
        """
        Sample every transition at a fixed step, end points included.

        Returns:
            List of frame dicts tagged with transition index and local time
        """
        if step_ms <= 0:
            raise ValueError("step_ms must be positive")
        if result.playback is None:
            return []

        frames = []
        for index, transition in enumerate(result.playback.transitions):
            total = transition.total_duration_ms
            elapsed = 0.0
            while True:
                frame = get_transition_frame(transition, elapsed).to_dict()
                frame["transitionIndex"] = index
                frame["elapsedMs"] = elapsed
                frames.append(frame)
                if elapsed >= total:
                    break
                elapsed = min(total, elapsed + step_ms)
        return frames

    def _compile_document(self, document: PlayDocument) -> CompiledPlayback:
        return compile_play_playback(
            document,
            self.speed_multiplier,
            settle_duration_ms=self.settle_duration_ms,
        )


# ============================================================
# CLI
# ============================================================

def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(
        description="Validate and compile a basketball play diagram",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a play and print its timing summary
  play-compile play.json

  # Compile at double speed and export frames every 40ms
  play-compile play.json --speed 2 --frames frames.json --step 40

  # Export the compiled transitions
  play-compile play.json --json compiled.json
        """
    )

    parser.add_argument(
        "play",
        help="Path to a play diagram JSON file"
    )
    parser.add_argument(
        "-s", "--speed",
        type=float,
        help="Playback speed multiplier (default: $PLAY_SPEED_MULTIPLIER or 1)"
    )
    parser.add_argument(
        "--settle",
        type=float,
        help="Settle duration in ms before speed scaling (default: 550)"
    )
    parser.add_argument(
        "--json",
        type=str,
        help="Write the compiled playback to this path"
    )
    parser.add_argument(
        "--frames",
        type=str,
        help="Write sampled frames to this path"
    )
    parser.add_argument(
        "--step",
        type=float,
        default=50,
        help="Frame sampling step in ms (default: 50)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    pipeline = PlayPipeline(speed_multiplier=args.speed, settle_duration_ms=args.settle)

    try:
        result = pipeline.compile_from_json(args.play)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: could not read {args.play}: {e}")
        return 1

    if not result.is_valid:
        print("\n⚠ Validation Errors:")
        for error in result.errors:
            print(f"  ✗ {error}")
        return 1

    document = result.document
    playback = result.playback

    # Print summary
    print("\n" + "=" * 50)
    print(f"PLAY: {args.play}")
    print("=" * 50)
    print(f"\nCourt: {document.court_template.value}")
    print(f"Phases: {len(document.phases)}")
    print(f"Speed: {pipeline.speed_multiplier:g}x")

    print("\nTransitions:")
    for transition in playback.transitions:
        timeline = transition.timeline
        print(
            f"  • {transition.from_phase_id} -> {transition.to_phase_id}: "
            f"{len(timeline.scheduled_actions)} actions, "
            f"{timeline.action_duration_ms:.0f}ms + {timeline.settle_duration_ms:.0f}ms settle, "
            f"ball {transition.start_owner_object_id} -> {transition.end_owner_object_id}"
        )
    print(f"\nTotal: {playback.total_duration_ms:.0f}ms")

    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"  ⚡ {warning.action_id}: {warning.message}")

    # Output files
    if args.json or args.frames:
        print("\nGenerated Files:")
    if args.json:
        with open(args.json, "w") as f:
            json.dump(playback.to_dict(), f, indent=2)
        print(f"  JSON: {args.json}")
    if args.frames:
        frames = pipeline.sample_frames(result, step_ms=args.step)
        with open(args.frames, "w") as f:
            json.dump(frames, f)
        print(f"  Frames: {args.frames} ({len(frames)} frames)")

    return 0


if __name__ == "__main__":
    exit(main())
