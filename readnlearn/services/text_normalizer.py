"""
Text Normalizer - Whitespace and markup insensitive projections of a text

A projection is a canonical string plus a way back: every character of the
normalized string can be translated to the offset of the character it came
from in the original string. Matching happens in projection space and the
result is reported in original-string offsets.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property

_LINE_ENDINGS = re.compile(r"\r\n?")
_NEWLINE_RUNS = re.compile(r"\n+")
_WHITESPACE_RUNS = re.compile(r"\s+")

# Order matters: bold before italic so "**x**" is not read as two empty italics
_MARKUP_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"__(.*?)__"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"`(.*?)`"), r"\1"),
    (re.compile(r"^[ \t]*#{1,6}[ \t]+", re.MULTILINE), ""),
)
MARKUP_CHARS = frozenset("*_`#")


def normalize_whitespace(text: str) -> str:
    """Unify line endings, collapse newline and whitespace runs, trim."""
    text = _LINE_ENDINGS.sub("\n", text)
    text = _NEWLINE_RUNS.sub(" ", text)
    text = _WHITESPACE_RUNS.sub(" ", text)
    return text.strip()


def strip_markup(text: str) -> str:
    """Drop bold/italic/code delimiters and heading prefixes, keep their text."""
    text = _LINE_ENDINGS.sub("\n", text)
    for pattern, replacement in _MARKUP_RULES:
        text = pattern.sub(replacement, text)
    return text


def build_index_map(
    original: str,
    normalized: str,
    skippable: frozenset[str] = frozenset(),
) -> tuple[int, ...]:
    """
    Walk ``original`` and ``normalized`` in lockstep.

    Entry ``j`` of the result is the offset in ``original`` of the character
    that produced ``normalized[j]``. Whitespace that was collapsed or trimmed
    away, and characters in ``skippable`` that were stripped, advance only the
    original pointer. The original pointer advances on every iteration, so the
    walk ends after at most ``len(original)`` steps for any input.

    Normalized positions past the point where the original ran out get no
    entry; callers treat them as unmappable.
    """
    index_map: list[int] = []
    i = j = 0
    n, m = len(original), len(normalized)
    while i < n and j < m:
        o = original[i]
        c = normalized[j]
        if o == c or (c == " " and o.isspace()):
            index_map.append(i)
            j += 1
        elif o.isspace() or o in skippable:
            pass
        else:
            # Diverged on a character normalization does not explain; stay in step
            index_map.append(i)
            j += 1
        i += 1
    return tuple(index_map)


@dataclass(frozen=True)
class NormalizedText:
    original: str
    normalized: str
    skippable: frozenset[str] = field(default=frozenset(), repr=False)

    @cached_property
    def _index_map(self) -> tuple[int, ...]:
        return build_index_map(self.original, self.normalized, self.skippable)

    def map_to_original(self, normalized_index: int) -> int:
        """Translate a normalized offset to an original offset, or -1."""
        if normalized_index < 0 or normalized_index >= len(self._index_map):
            return -1
        return self._index_map[normalized_index]


def normalize(text: str) -> NormalizedText:
    return NormalizedText(text, normalize_whitespace(text))


def normalize_markup(text: str) -> NormalizedText:
    """Markup-stripped projection, for phrases selected from rendered output."""
    return NormalizedText(
        text, normalize_whitespace(strip_markup(text)), MARKUP_CHARS
    )


class TextNormalizer:
    """Per-document cache of projections; build one per text, discard after."""

    def __init__(self, text: str):
        self.text = text

    @cached_property
    def whitespace(self) -> NormalizedText:
        return normalize(self.text)

    @cached_property
    def markup(self) -> NormalizedText:
        return normalize_markup(self.text)
