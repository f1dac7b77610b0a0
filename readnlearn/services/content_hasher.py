"""
Content Hasher - Cheap document fingerprint used as a phrase-to-document key
"""

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_MASK = 0xFFFFFFFF


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_DIGITS[rem])
    return "".join(reversed(digits))


def _utf16_code_units(content: str):
    # surrogatepass keeps lone surrogates hashable instead of raising
    data = content.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def generate_content_hash(content: str) -> str:
    """
    Hash a document body into a short base-36 identifier.

    Rolling ``h = h * 31 + unit`` over UTF-16 code units, kept as a signed
    32-bit integer, rendered as the base-36 absolute value. This reproduces
    the hashes stored by earlier reader clients, so saved phrases keep
    matching their documents. Not collision resistant.

    Args:
        content: Raw document text

    Returns:
        Base-36 hash string
    """
    h = 0
    for unit in _utf16_code_units(content):
        h = (h * 31 + unit) & _MASK
    if h & 0x80000000:
        h -= 1 << 32
    return _to_base36(abs(h))


class ContentHasher:
    """Callable wrapper so the hash function can be injected."""

    def hash(self, content: str) -> str:
        return generate_content_hash(content)

    __call__ = hash
