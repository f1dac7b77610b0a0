"""
Reader API endpoints - Phrase re-anchoring for an opened document
"""
from fastapi import APIRouter, Depends

from readnlearn.config import ResolverSettings
from readnlearn.core.dependencies import get_phrase_resolver, get_resolver_settings
from readnlearn.schemas.base import Envelope
from readnlearn.schemas.phrase import (
    ContentResolution,
    DecoratedContent,
    FileInfoRequest,
    ResolveRequest,
)
from readnlearn.services.decoration import decorate_content
from readnlearn.services.file_format import FileInfo, create_file_info
from readnlearn.services.phrase_resolver import PhraseResolver

router = APIRouter(prefix="/reader", tags=["reader"])


@router.post("/resolve", response_model=Envelope[ContentResolution])
async def resolve_phrases(
    request: ResolveRequest,
    resolver: PhraseResolver = Depends(get_phrase_resolver),
):
    """
    Locate the saved phrases of a document

    - **content**: Current document text
    - **source_file**: File name the document was opened from
    - **content_hash**: Precomputed content hash (computed when omitted)
    """
    resolution = await resolver.resolve(
        request.content, request.source_file, request.content_hash
    )
    return Envelope(status="ok", data=resolution)


@router.post("/decorate", response_model=Envelope[DecoratedContent])
async def decorate_phrases(
    request: ResolveRequest,
    resolver: PhraseResolver = Depends(get_phrase_resolver),
    settings: ResolverSettings = Depends(get_resolver_settings),
):
    """
    Return the document with every located phrase wrapped in anchor markup
    """
    resolution = await resolver.resolve(
        request.content, request.source_file, request.content_hash
    )
    html, decorated = decorate_content(
        request.content, resolution.decoration, settings.marker_length
    )
    return Envelope(
        status="ok",
        data=DecoratedContent(
            content_hash=resolution.content_hash,
            html=html,
            decorated=decorated,
        ),
    )


@router.post("/file-info", response_model=Envelope[FileInfo])
async def file_info(request: FileInfoRequest):
    """
    Detect the document format and compute its content hash
    """
    return Envelope(status="ok", data=create_file_info(request.filename, request.content))
