"""clipsplice — non-destructive splice editing over a composite clip timeline.

Trimmed clips are stitched into one virtual timeline. A splice keeps
everything before a cut point and replaces the rest with a new clip.
Splice plans are declared in YAML manifests.
"""
