"""Local, regex-based redaction of contract text before remote analysis.

Zero external dependencies - uses only Python stdlib.
"""

from contractguard.privacy.redactor import (
    CATEGORIES,
    PATTERN_CLASSES,
    PlaceholderMap,
    RedactionResult,
    Segment,
    highlight_segments,
    redact,
)

__all__ = [
    "CATEGORIES",
    "PATTERN_CLASSES",
    "PlaceholderMap",
    "RedactionResult",
    "Segment",
    "highlight_segments",
    "redact",
]
