"""Subcommand dispatcher for clipsplice.

Usage:
    clipsplice splice  --manifest splices.yaml
    clipsplice locate  --manifest splices.yaml --time 5.0
    clipsplice frame   source.mp4 --time 2.5 --output cut.png
"""

import argparse
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="clipsplice",
        description="Splice clips into a composite timeline from YAML manifests.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("splice", help="Apply a splice manifest and print the timeline")
    subparsers.add_parser("locate", help="Map a composite time/frame to a clip")
    subparsers.add_parser("frame", help="Save a preview frame from a clip")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    if parsed.command == "splice":
        from .splice_cli import main as splice_main
        splice_main(remaining)
    elif parsed.command == "locate":
        from .locate_cli import main as locate_main
        locate_main(remaining)
    elif parsed.command == "frame":
        from .frame_cli import main as frame_main
        frame_main(remaining)


if __name__ == "__main__":
    main()
