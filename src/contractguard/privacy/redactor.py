"""Deterministic, reversible redaction of contract text.

Runs entirely locally. Three pattern classes are applied in a fixed order
(emails, then dates, then organizational entities) and every distinct match
is swapped for a numbered placeholder such as ``[EMAIL_1]``. The returned
mapping restores the original values after the redacted text has been
analyzed remotely.

This is a best-effort pass, not a PII detector. It does NOT catch:
- Phone numbers, postal addresses, SSNs or other identifiers
- Personal names without a legal suffix (``John Smith`` stays as-is)
- Non-English naming conventions

Generic phrases such as ``The Company`` are redacted as entities.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, NamedTuple

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

ENTITY_SUFFIXES = ("LLC", "Inc", "Corp", "Ltd", "LLP", "Company", "Organization")

# Unicode whitespace (non-breaking and other Zs spaces included). Digits and
# word boundaries stay ASCII via re.ASCII.
_SPACE = r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"

# Ordered (category, matcher) pairs. Order is significant: each pass runs on
# the text already rewritten by the passes before it.
PATTERN_CLASSES: tuple[tuple[str, re.Pattern], ...] = (
    ("EMAIL", re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")),
    (
        "DATE",
        re.compile(
            r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"
            r"|\b(?:" + "|".join(MONTH_NAMES) + r")"
            + _SPACE
            + r"+\d{1,2},?"
            + _SPACE
            + r"+\d{4}\b",
            re.IGNORECASE | re.ASCII,
        ),
    ),
    (
        "ENTITY",
        re.compile(
            r"\b[A-Z][a-z]+(?:"
            + _SPACE
            + r"+[A-Z][a-z]+)*"
            + _SPACE
            + r"+(?:"
            + "|".join(ENTITY_SUFFIXES)
            + r")\b",
            re.ASCII,
        ),
    ),
)

CATEGORIES = tuple(category for category, _ in PATTERN_CLASSES)

PLACEHOLDER_PATTERN = re.compile(
    r"\[(?:" + "|".join(CATEGORIES) + r")_[1-9]\d*\]", re.ASCII
)


@dataclass
class PlaceholderMap:
    """Placeholder table for a single redaction run.

    One counter is shared by every category, so numbering continues across
    passes: ``[EMAIL_1]``, ``[DATE_2]``, ``[ENTITY_3]``.
    """

    _placeholder_to_original: dict[str, str] = field(default_factory=dict)
    _counter: int = 0

    def add(self, original: str, category: str) -> str:
        """Assign the next placeholder to a value and return it."""
        self._counter += 1
        placeholder = f"[{category}_{self._counter}]"
        self._placeholder_to_original[placeholder] = original
        return placeholder

    def get_original(self, placeholder: str) -> str | None:
        return self._placeholder_to_original.get(placeholder)

    def as_dict(self) -> dict[str, str]:
        return dict(self._placeholder_to_original)

    def __len__(self) -> int:
        return len(self._placeholder_to_original)


class Segment(NamedTuple):
    """A run of redacted text, tagged with its category when it is a placeholder."""

    text: str
    category: str | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.category is not None


@dataclass(frozen=True)
class RedactionResult:
    """Outcome of one ``redact`` call.

    Only ``redacted_text`` may leave the local process. ``original_text`` and
    ``mapping`` are for local display and restoration.
    """

    original_text: str
    redacted_text: str
    mapping: dict[str, str] = field(default_factory=dict)

    @property
    def placeholders(self) -> list[str]:
        return list(self.mapping)

    def restore(self, text: str) -> str:
        """Replace every known placeholder in ``text`` with its original value."""
        if not self.mapping:
            return text
        return PLACEHOLDER_PATTERN.sub(
            lambda m: self.mapping.get(m.group(0), m.group(0)), text
        )

    def restore_data(self, data: Any) -> Any:
        """Recursively restore placeholders in strings, dicts and lists."""
        if isinstance(data, str):
            return self.restore(data)
        elif isinstance(data, dict):
            return {key: self.restore_data(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self.restore_data(item) for item in data]
        else:
            return data

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_text": self.original_text,
            "redacted_text": self.redacted_text,
            "mapping": dict(self.mapping),
        }

    def __len__(self) -> int:
        return len(self.mapping)

    def __bool__(self) -> bool:
        return bool(self.mapping)


def _unique_matches(pattern: re.Pattern, text: str) -> list[str]:
    """All matches of ``pattern`` in ``text``, deduplicated in first-seen order."""
    return list(dict.fromkeys(m.group(0) for m in pattern.finditer(text)))


def redact(text: str) -> RedactionResult:
    """Redact emails, dates and suffixed entity names from ``text``.

    Every literal occurrence of a matched value is replaced, so repeated
    values collapse to a single placeholder.

    Example:
        >>> result = redact("Mail john@acme.com. Acme Corp pays.")
        >>> result.redacted_text
        'Mail [EMAIL_1]. [ENTITY_2] pays.'
        >>> result.mapping
        {'[EMAIL_1]': 'john@acme.com', '[ENTITY_2]': 'Acme Corp'}
    """
    placeholder_map = PlaceholderMap()
    working = text

    for category, pattern in PATTERN_CLASSES:
        for value in _unique_matches(pattern, working):
            placeholder = placeholder_map.add(value, category)
            working = working.replace(value, placeholder)

    return RedactionResult(
        original_text=text,
        redacted_text=working,
        mapping=placeholder_map.as_dict(),
    )


def highlight_segments(result: RedactionResult) -> list[Segment]:
    """Split the redacted text into plain runs and mapped placeholder tokens.

    Bracketed text that is not in the mapping stays plain.
    """
    segments: list[Segment] = []
    position = 0
    text = result.redacted_text

    for match in PLACEHOLDER_PATTERN.finditer(text):
        token = match.group(0)
        if token not in result.mapping:
            continue
        if match.start() > position:
            segments.append(Segment(text[position : match.start()]))
        segments.append(Segment(token, token[1:].rsplit("_", 1)[0]))
        position = match.end()

    if position < len(text):
        segments.append(Segment(text[position:]))

    return segments
