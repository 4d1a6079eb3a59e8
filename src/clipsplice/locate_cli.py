"""CLI for locating a composite position on a spliced timeline.

Applies the manifest, then reports which clip and source time a
composite time (or frame) maps to.

Usage:
    clipsplice locate --manifest splices.yaml --time 5.0
    clipsplice locate --manifest splices.yaml --frame 150
"""

import argparse

from .common import format_time
from .frames import frame_to_time, time_to_frame
from .playback import seek_target
from .splice_cli import add_manifest_args, apply_manifest, load_config
from .timeline import find_segment_at_time


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Map a composite time or frame to a clip on the spliced timeline.",
    )
    add_manifest_args(parser)
    parser.add_argument(
        "--time", type=float, default=None,
        help="Composite time in seconds",
    )
    parser.add_argument(
        "--frame", type=int, default=None,
        help="Composite frame index",
    )
    parsed = parser.parse_args(args)

    if (parsed.time is None) == (parsed.frame is None):
        parser.error("Specify exactly one of --time or --frame")

    config = load_config(parsed)
    state = apply_manifest(config, quiet=True)
    segments = list(state.segments)

    if parsed.time is not None:
        time = parsed.time
    else:
        time = frame_to_time(parsed.frame, state.fps)

    location = find_segment_at_time(segments, time)
    if location.segment is None:
        print("Timeline is empty.")
        return

    target = seek_target(segments, time)
    print(
        f"Composite {format_time(location.time)} (frame {time_to_frame(location.time, state.fps)})"
        f" -> clip {location.index + 1} '{location.segment.id}'"
        f" at {format_time(location.local_time)}"
        f", source {format_time(target.source_time)} in {location.segment.source}"
    )


if __name__ == "__main__":
    main()
