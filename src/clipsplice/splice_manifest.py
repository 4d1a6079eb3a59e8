"""Splice manifest loader — a base clip plus an ordered list of splices.

Clip paths may use ${var} variables defined under `paths`.

Splice manifest schema:
  video:
    fps: 30                       # optional, falls back to 30
  paths:
    clips: "/data/clips"
  base:
    path: "${clips}/base.mp4"
    duration: 10.0                # optional, probed when absent
    in: 0                         # optional trim start
    out: 10.0                     # optional trim end
    label: "Base take"            # optional
    id: base                      # optional, generated when absent
  splices:
    - at: 4.0                     # composite seconds ...
      clip:
        path: "${clips}/retake.mp4"
        duration: 6.0
    - frame: 150                  # ... or composite frame index
      clip:
        path: "${clips}/ending.mp4"

Splices are applied in order, each against the timeline produced by the
previous one.
"""

import math
from pathlib import Path

import yaml

from .common import resolve_path_vars
from .frames import normalize_fps


CLIP_FIELDS = {"path", "duration", "in", "out", "label", "id"}


def _number(value, where: str, field: str, minimum: float = 0.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where}: {field} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{where}: {field} must be finite, got {value!r}")
    if value < minimum:
        raise ValueError(f"{where}: {field} must be >= {minimum:g}, got {value!r}")
    return float(value)


def _load_clip(raw, where: str, paths: dict) -> dict:
    """Validate one clip entry and apply defaults."""
    if not isinstance(raw, dict):
        raise ValueError(f"{where}: clip must be a mapping, got {raw!r}")
    unknown = set(raw) - CLIP_FIELDS
    if unknown:
        raise ValueError(f"{where}: unknown clip field(s) {sorted(unknown)}")
    if "path" not in raw:
        raise ValueError(f"{where}: missing required field 'path'")

    clip = {
        "path": resolve_path_vars(str(raw["path"]), paths),
        "duration": None,
        "in": 0.0,
        "out": None,
        "label": None,
        "id": None,
    }
    if raw.get("duration") is not None:
        clip["duration"] = _number(raw["duration"], where, "duration")
    if raw.get("in") is not None:
        clip["in"] = _number(raw["in"], where, "in")
    if raw.get("out") is not None:
        clip["out"] = _number(raw["out"], where, "out")
        if clip["out"] < clip["in"]:
            raise ValueError(f"{where}: in ({clip['in']}) must be <= out ({clip['out']})")
    if clip["duration"] is not None and clip["in"] > clip["duration"]:
        raise ValueError(
            f"{where}: in ({clip['in']}) must be <= duration ({clip['duration']})"
        )
    if raw.get("label") is not None:
        clip["label"] = str(raw["label"])
    if raw.get("id") is not None:
        clip["id"] = str(raw["id"])
    return clip


def load_splice_manifest(manifest_path: str | Path) -> dict:
    """Load, validate, and normalize a splice manifest.

    Processing pipeline:
      1. Parse YAML.
      2. Normalize video.fps.
      3. Resolve ${path} variables in clip paths.
      4. Validate the base clip and each splice (exactly one of at/frame).
      5. Check for duplicate clip ids.

    Args:
        manifest_path: Path to the YAML splice manifest.

    Returns:
        Normalized config dict: {"video": {"fps"}, "base": clip,
        "splices": [{"at" | "frame", "clip"}]}.

    Raises:
        ValueError: Missing/invalid fields.
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f) or {}

    if "base" not in raw:
        raise ValueError("Splice manifest: missing required 'base' field")

    video = raw.get("video") or {}
    fps = normalize_fps(video.get("fps"))
    paths = raw.get("paths") or {}

    base = _load_clip(raw["base"], "Base clip", paths)

    splices = []
    for i, entry in enumerate(raw.get("splices") or []):
        where = f"Splice {i}"
        if not isinstance(entry, dict):
            raise ValueError(f"{where}: must be a mapping, got {entry!r}")
        has_at = entry.get("at") is not None
        has_frame = entry.get("frame") is not None
        if has_at == has_frame:
            raise ValueError(f"{where}: specify exactly one of 'at' or 'frame'")
        if "clip" not in entry:
            raise ValueError(f"{where}: missing required field 'clip'")

        splice = {"clip": _load_clip(entry["clip"], where, paths)}
        if has_at:
            splice["at"] = _number(entry["at"], where, "at")
        else:
            frame = entry["frame"]
            if isinstance(frame, bool) or not isinstance(frame, int):
                raise ValueError(f"{where}: frame must be an integer, got {frame!r}")
            splice["frame"] = int(_number(frame, where, "frame"))
        splices.append(splice)

    seen_ids = set()
    for clip in [base] + [s["clip"] for s in splices]:
        cid = clip["id"]
        if cid is None:
            continue
        if cid in seen_ids:
            raise ValueError(f"Duplicate clip id: '{cid}'")
        seen_ids.add(cid)

    return {"video": {"fps": fps}, "base": base, "splices": splices}


def validate_splice_paths(config: dict) -> None:
    """Check that every clip path in the manifest exists on disk.

    Raises:
        FileNotFoundError: Lists all missing files.
    """
    clips = [config["base"]] + [s["clip"] for s in config["splices"]]
    missing = [c["path"] for c in clips if not Path(c["path"]).exists()]

    if missing:
        msg = f"Missing {len(missing)} clip file(s):\n"
        for p in missing:
            msg += f"  - {p}\n"
        raise FileNotFoundError(msg)
