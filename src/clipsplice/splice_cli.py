"""CLI for splicing — apply a splice manifest and print the resulting timeline.

Each splice is applied the way an interactive session does it: the
playhead moves to the cut, a bookmark is captured there, and the
replacement clip is spliced in at the bookmark (which clears bookmarks).

Usage:
    clipsplice splice --manifest splices.yaml
    clipsplice splice --manifest splices.yaml --fps 25 --skip-path-check
"""

import argparse
import math
from dataclasses import replace

from .common import format_time
from .frames import frame_to_time, time_to_frame
from .ids import CounterIdSource, IdSource
from .media import ClipMetadata, probe_clip, segment_from_file
from .segments import Segment, effective_duration
from .session import SessionState, apply_replacement, capture_bookmark, load_base_clip, seek
from .splice_manifest import load_splice_manifest, validate_splice_paths
from .timeline import compute_timeline


def _segment_for_clip(clip: dict, ids: IdSource) -> Segment:
    """Build a segment from a normalized manifest clip entry.

    Clips without an explicit duration are probed with moviepy.
    """
    if clip["duration"] is not None:
        metadata = ClipMetadata(duration=clip["duration"], width=0, height=0, fps=0.0)
    else:
        metadata = probe_clip(clip["path"])
    segment = segment_from_file(
        clip["path"], metadata=metadata, id_source=ids,
        label=clip["label"], segment_id=clip["id"],
    )
    out_point = clip["out"] if clip["out"] is not None else segment.out_point
    return replace(segment, in_point=clip["in"], out_point=out_point)


def splice_cut_time(splice: dict, fps: float) -> float:
    """Composite cut time of a manifest splice entry ('at' or 'frame')."""
    if "at" in splice:
        return splice["at"]
    return frame_to_time(splice["frame"], fps)


def apply_manifest(
    config: dict,
    id_source: IdSource | None = None,
    quiet: bool = False,
) -> SessionState:
    """Run every splice of a normalized manifest, in order.

    Returns the final session state.
    """
    ids = id_source or CounterIdSource()
    fps = config["video"]["fps"]

    state = SessionState(fps=fps)
    state = load_base_clip(state, _segment_for_clip(config["base"], ids))

    for splice in config["splices"]:
        cut = splice_cut_time(splice, fps)
        segment = _segment_for_clip(splice["clip"], ids)

        state = seek(state, cut)
        state, bookmark = capture_bookmark(state, id_source=ids)
        outcome = apply_replacement(state, bookmark.id, segment)
        state = outcome.state

        if not quiet:
            print(
                f"  SPLICE {format_time(bookmark.time):>10}  frame {bookmark.frame:<6}"
                f"  + {segment.label}  (dropped {len(outcome.removed)} clip(s))"
            )
    return state


def print_timeline(state: SessionState) -> None:
    timeline = compute_timeline(list(state.segments))
    print(f"Timeline: {len(timeline.ranges)} clip(s), total {format_time(timeline.total)}"
          f" ({time_to_frame(timeline.total, state.fps)} frames @ {state.fps:g} fps)")
    for i, rng in enumerate(timeline.ranges, start=1):
        seg = rng.segment
        out_point = seg.out_point if seg.out_point is not None else seg.duration
        print(
            f"  {i:>3}  {seg.id:<12} {format_time(rng.start):>10} - {format_time(rng.end):<10}"
            f"  in {format_time(seg.in_point)}  out {format_time(out_point)}"
            f"  ({format_time(effective_duration(seg))})  {seg.label}"
        )


def positive_fps(value: str) -> float:
    """argparse type for --fps: a positive finite number."""
    try:
        fps = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid fps: {value!r}")
    if not math.isfinite(fps) or fps <= 0:
        raise argparse.ArgumentTypeError(f"fps must be a positive finite number, got {value!r}")
    return fps


def load_config(parsed) -> dict:
    """Load the manifest named on the command line and apply CLI overrides."""
    config = load_splice_manifest(parsed.manifest)
    if parsed.fps is not None:
        config["video"]["fps"] = parsed.fps
    if not parsed.skip_path_check:
        validate_splice_paths(config)
    return config


def add_manifest_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--manifest", required=True,
        help="Path to splice YAML manifest",
    )
    parser.add_argument(
        "--fps", type=positive_fps, default=None,
        help="Override video.fps from the manifest",
    )
    parser.add_argument(
        "--skip-path-check", action="store_true",
        help="Don't require clip files to exist (all durations must be given)",
    )


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Apply a splice manifest and print the resulting timeline.",
    )
    add_manifest_args(parser)
    parsed = parser.parse_args(args)

    config = load_config(parsed)
    print(f"Splicing {len(config['splices'])} clip(s) into {config['base']['path']}")
    state = apply_manifest(config)
    print_timeline(state)


if __name__ == "__main__":
    main()
