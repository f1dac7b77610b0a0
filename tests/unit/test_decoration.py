"""
Unit tests for splicing phrase anchors into document text
"""
from readnlearn.schemas.phrase import ResolvedPhrase
from readnlearn.services.decoration import anchor_markup, decorate_content


def resolved(id, text, position, key):
    return ResolvedPhrase(id=id, text=text, position=position, ordering_key=key)


def test_anchor_markup():
    """Test that anchor markup escapes the id and truncates the marker"""
    assert anchor_markup("abcdef1", "Hello") == (
        '<span class="phrase-anchor" data-phrase-id="abcdef1">Hello'
        '<sup class="phrase-marker">abcd</sup></span>'
    )
    assert 'data-phrase-id="&lt;x&gt;"' in anchor_markup("<x>", "y")
    assert '<sup class="phrase-marker">ab</sup>' in anchor_markup("abcdef", "y", marker_length=2)


def test_decorates_every_located_phrase():
    """Test that every located phrase is wrapped in anchor markup"""
    content = "Hello world foo"
    phrases = [
        resolved("abcdef1", "Hello", 0, 100000),
        resolved("xyz", "world", 6, 100006),
    ]
    html, count = decorate_content(content, phrases)
    assert count == 2
    assert html == (
        anchor_markup("abcdef1", "Hello") + " " + anchor_markup("xyz", "world") + " foo"
    )


def test_stale_ordering_keys_still_splice_correctly():
    """Test that stale ordering keys do not corrupt the spliced text"""
    # Keys disagree with live positions after the text was edited
    content = "Hello world foo"
    phrases = [
        resolved("right", "world", 6, 100000),
        resolved("left", "Hello", 0, 200000),
    ]
    html, count = decorate_content(content, phrases)
    assert count == 2
    assert html == (
        anchor_markup("left", "Hello") + " " + anchor_markup("right", "world") + " foo"
    )


def test_overlapping_phrase_is_skipped():
    """Test that a phrase overlapping one already decorated is skipped"""
    content = "Hello world"
    phrases = [
        resolved("outer", "Hello world", 0, 100000),
        resolved("inner", "lo wo", 3, 100003),
    ]
    html, count = decorate_content(content, phrases)
    assert count == 1
    assert html == anchor_markup("inner", "lo wo").join(["Hel", "rld"])


def test_original_text_is_kept_over_saved_text():
    """Test that the document's own text is wrapped instead of the saved text"""
    html, count = decorate_content("say HELLO", [resolved("p", "hello", 4, 4)])
    assert count == 1
    assert html == "say " + anchor_markup("p", "HELLO")


def test_unlocated_and_empty_inputs():
    """Test that unlocated phrases and empty input leave the text unchanged"""
    assert decorate_content("text", [resolved("p", "gone", -1, 0)]) == ("text", 0)
    assert decorate_content("", []) == ("", 0)


def test_matched_span_is_wrapped_when_spacing_differs():
    """Test that the matched span is wrapped when it is longer than the saved text"""
    content = "Line 1: First   phrase   here. More."
    phrase = ResolvedPhrase(
        id="p", text="First phrase here.", position=8, matched_length=22, ordering_key=0,
    )
    html, count = decorate_content(content, [phrase])
    assert count == 1
    assert html == "Line 1: " + anchor_markup("p", "First   phrase   here.") + " More."
