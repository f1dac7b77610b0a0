from .base import Envelope, Message
from .phrase import (
    PhraseCreate,
    Phrase,
    ResolvedPhrase,
    ResolveRequest,
    ContentResolution,
    DecoratedContent,
    FileInfoRequest,
    PhraseSearchResponse,
)

__all__ = [
    "Envelope",
    "Message",
    "PhraseCreate",
    "Phrase",
    "ResolvedPhrase",
    "ResolveRequest",
    "ContentResolution",
    "DecoratedContent",
    "FileInfoRequest",
    "PhraseSearchResponse",
]
