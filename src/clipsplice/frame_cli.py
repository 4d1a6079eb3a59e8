"""CLI for grabbing a preview frame from a clip.

Saves the frame a bookmark at the given time would show. Without
--output the file is named after the frame index (bookmark-<frame>.png).

Usage:
    clipsplice frame source.mp4 --time 2.5 --output cut.png
    clipsplice frame source.mp4 --frame 75 --fps 30
"""

import argparse

from .bookmarks import bookmark_filename, create_bookmark
from .frames import frame_to_time, normalize_fps
from .media import grab_frame, save_frame


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Save a preview frame from a video clip as PNG.",
    )
    parser.add_argument("source", help="Path to the video clip")
    parser.add_argument(
        "--time", type=float, default=None,
        help="Time in seconds",
    )
    parser.add_argument(
        "--frame", type=int, default=None,
        help="Frame index",
    )
    parser.add_argument(
        "--fps", type=float, default=None,
        help="Frame rate for frame <-> time conversion (default 30)",
    )
    parser.add_argument(
        "--output", default=None,
        help="Output PNG path (default: bookmark-<frame>.png)",
    )
    parsed = parser.parse_args(args)

    if (parsed.time is None) == (parsed.frame is None):
        parser.error("Specify exactly one of --time or --frame")

    fps = normalize_fps(parsed.fps)
    time = parsed.time if parsed.time is not None else frame_to_time(parsed.frame, fps)
    bookmark = create_bookmark(time, fps)

    image = grab_frame(parsed.source, bookmark.time)
    out = save_frame(image, parsed.output or bookmark_filename(bookmark))
    print(f"Frame {bookmark.frame} ({bookmark.time:.3f}s) -> {out}")


if __name__ == "__main__":
    main()
