"""
Ordering - Stable sort keys for phrases of one document

Two orders are in use and they are deliberately different:

* display order: live position ascending, for lists the user reads
* decoration order: ordering key descending, for splicing markup into the
  text right-to-left so earlier offsets stay valid
"""
from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence, TypeVar

# Lines longer than this many columns bleed into the next line's key range.
LINE_WEIGHT = 100_000


class HasCoordinates(Protocol):
    line_no: Optional[int]
    col_offset: Optional[int]


class HasPosition(Protocol):
    position: int
    ordering_key: int


P = TypeVar("P", bound=HasPosition)


def ordering_key(line_no: Optional[int], col_offset: Optional[int]) -> int:
    """``line * 100000 + column``; missing coordinates count as 0."""
    return (line_no or 0) * LINE_WEIGHT + (col_offset or 0)


def phrase_ordering_key(phrase: HasCoordinates) -> int:
    return ordering_key(phrase.line_no, phrase.col_offset)


def sort_for_display(resolved: Iterable[P]) -> list[P]:
    """Located phrases by ascending position; ties keep input order."""
    return sorted((p for p in resolved if p.position >= 0), key=lambda p: p.position)


def sort_for_decoration(resolved: Iterable[P]) -> list[P]:
    """
    Located phrases by descending ordering key; ties keep input order.

    The key does not depend on whether the phrase was found, so the order is
    the same whichever strategy produced each position.
    """
    # reverse=True would also reverse ties; negate the key to keep them stable
    return sorted(
        (p for p in resolved if p.position >= 0), key=lambda p: -p.ordering_key
    )


def sort_by_line_column(items: Sequence[dict]) -> list[dict]:
    """
    Dictionary-mode ordering of plain rows with ``line_no``/``col_offset``.

    Rows carrying both coordinates sort by ordering key. A row lacking them
    is ranked by its live ``position`` instead, missing positions last.
    Ties keep input order.
    """
    def has_coordinates(item: dict) -> bool:
        return isinstance(item.get("line_no"), int) and isinstance(item.get("col_offset"), int)

    if all(has_coordinates(item) for item in items):
        return sorted(items, key=lambda item: ordering_key(item["line_no"], item["col_offset"]))

    def by_position(item: dict) -> tuple[int, int]:
        position = item.get("position")
        if position is None or position < 0:
            return (1, 0)
        return (0, position)

    return sorted(items, key=by_position)
