"""
Unit tests for the document content hash
"""
from readnlearn.services.content_hasher import ContentHasher, generate_content_hash


def test_empty_content_hashes_to_zero():
    """Test that empty content hashes to "0" """
    assert generate_content_hash("") == "0"


def test_known_values():
    """Test that hashes match values stored by earlier reader clients"""
    assert generate_content_hash("a") == "2p"
    assert generate_content_hash("ab") == "2e9"
    assert generate_content_hash("hello") == "1n1e4y"


def test_signed_overflow_uses_absolute_value():
    """Test that a hash rolling over to -2**31 renders its absolute value"""
    assert generate_content_hash("polygenelubricants") == "zik0zk"


def test_hash_runs_over_utf16_code_units():
    """Test that hashing walks UTF-16 code units, lone surrogates included"""
    assert generate_content_hash("\ud800") == "16o0"
    # A non-BMP character hashes as its surrogate pair
    assert generate_content_hash("\U0001F600") == generate_content_hash("😀")


def test_deterministic_and_distinguishing():
    """Test that equal inputs hash equally and small edits change the hash"""
    text = "Line 1: First phrase here.\nLine 2: Second phrase here."
    assert generate_content_hash(text) == generate_content_hash(text)
    assert generate_content_hash(text) != generate_content_hash(text + " ")
    assert generate_content_hash("ab") != generate_content_hash("ba")


def test_hasher_is_callable():
    """Test that ContentHasher can be called directly or through hash()"""
    hasher = ContentHasher()
    assert hasher("hello") == hasher.hash("hello") == "1n1e4y"


def test_no_collisions_on_small_corpus():
    """Test that a realistic corpus of similar lines has no collisions"""
    corpus = [f"Chapter {i}: the quick brown fox {i * 7}" for i in range(500)]
    assert len({generate_content_hash(text) for text in corpus}) == len(corpus)
