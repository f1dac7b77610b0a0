# Phrase anchoring services

from .content_hasher import ContentHasher, generate_content_hash
from .text_normalizer import (
    TextNormalizer,
    NormalizedText,
    normalize,
    normalize_markup,
    normalize_whitespace,
    strip_markup,
)
from .phrase_locator import PhraseLocator, locate_phrase, NOT_FOUND
from .ordering import (
    LINE_WEIGHT,
    ordering_key,
    phrase_ordering_key,
    sort_for_display,
    sort_for_decoration,
    sort_by_line_column,
)
from .phrase_store import PhraseStore, SqlPhraseStore
from .phrase_resolver import PhraseResolver
from .decoration import decorate_content
from .file_format import FileFormat, FileInfo, create_file_info, detect_file_format


__all__ = [
    'ContentHasher',
    'generate_content_hash',
    'TextNormalizer',
    'NormalizedText',
    'normalize',
    'normalize_markup',
    'normalize_whitespace',
    'strip_markup',
    'PhraseLocator',
    'locate_phrase',
    'NOT_FOUND',
    'LINE_WEIGHT',
    'ordering_key',
    'phrase_ordering_key',
    'sort_for_display',
    'sort_for_decoration',
    'sort_by_line_column',
    'PhraseStore',
    'SqlPhraseStore',
    'PhraseResolver',
    'decorate_content',
    'FileFormat',
    'FileInfo',
    'create_file_info',
    'detect_file_format',
]
