"""clipsplice.common — shared helpers for the manifest and CLI layers.

Contains: path variable resolution and time formatting.
"""

import math
import re


# ── Path utilities ─────────────────────────────────────────────────

def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return str(paths[key])
    return re.sub(r"\$\{(\w+)\}", _replace, text)


# ── Formatting ─────────────────────────────────────────────────────

def format_time(seconds) -> str:
    """Render seconds as '1.500s'. Anything non-finite renders as 0."""
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return "0.000s"
    if not math.isfinite(seconds):
        return "0.000s"
    return f"{seconds:.3f}s"
