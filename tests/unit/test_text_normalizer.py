"""
Unit tests for whitespace and markup projections
"""
from readnlearn.services.text_normalizer import (
    TextNormalizer,
    build_index_map,
    normalize,
    normalize_markup,
    normalize_whitespace,
    strip_markup,
)


def test_normalize_whitespace_steps():
    """Test that line endings are unified, runs collapsed and ends trimmed"""
    assert normalize_whitespace("  a\r\n\r\nb\t c  ") == "a b c"
    assert normalize_whitespace("x\ry") == "x y"
    assert normalize_whitespace("\n\n\n") == ""


def test_strip_markup_keeps_enclosed_text():
    """Test that markup delimiters are dropped and their text kept"""
    assert strip_markup("**bold** and __strong__") == "bold and strong"
    assert strip_markup("*em* with `code`") == "em with code"
    assert strip_markup("## Heading\nbody") == "Heading\nbody"


def test_map_to_original_across_collapsed_spaces():
    """Test that offsets after a collapsed run map past the whole run"""
    projection = normalize("Line 1: First   phrase")
    assert projection.normalized == "Line 1: First phrase"
    assert projection.map_to_original(14) == 16
    assert projection.map_to_original(0) == 0


def test_leading_whitespace_is_skipped():
    """Test that trimmed leading whitespace shifts the mapping"""
    projection = normalize("  hi")
    assert projection.normalized == "hi"
    assert projection.map_to_original(0) == 2


def test_newline_maps_to_its_own_offset():
    """Test that a CRLF pair maps to its first character"""
    projection = normalize("one\r\ntwo")
    assert projection.normalized == "one two"
    assert projection.map_to_original(3) == 3
    assert projection.map_to_original(4) == 5


def test_out_of_range_maps_to_not_found():
    """Test that offsets outside the normalized text map to -1"""
    projection = normalize("abc")
    assert projection.map_to_original(3) == -1
    assert projection.map_to_original(-1) == -1


def test_markup_projection_maps_past_delimiters():
    """Test that the markup projection maps back over stripped delimiters"""
    text = "# Title\nSome **bold** text"
    projection = normalize_markup(text)
    assert projection.normalized == "Title Some bold text"
    assert projection.map_to_original(0) == 2
    assert projection.map_to_original(11) == text.index("bold")


def test_walk_is_bounded_by_original_length():
    """Test that the lockstep walk stops when the original runs out"""
    assert build_index_map("abc", "xyzw") == (0, 1, 2)
    assert build_index_map("", "anything") == ()
    long_text = " \t" * 5000
    assert build_index_map(long_text, "x") == ()


def test_text_normalizer_caches_projections():
    """Test that each projection is built once per document"""
    document = TextNormalizer("a  b")
    assert document.whitespace is document.whitespace
    assert document.markup is document.markup
    assert document.whitespace.normalized == "a b"
