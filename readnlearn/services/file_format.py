"""
File Format - Plain text vs Markdown detection and document identity
"""
import re
from enum import Enum

from pydantic import BaseModel

from readnlearn.services.content_hasher import generate_content_hash


class FileFormat(str, Enum):
    TEXT = "text"
    MARKDOWN = "markdown"


class FileInfo(BaseModel):
    name: str
    format: FileFormat
    content_hash: str
    bytes: int


MARKDOWN_EXTENSIONS = frozenset(
    {"md", "markdown", "mdown", "mkdn", "mkd", "mdwn", "mdtxt", "mdtext"}
)
TEXT_EXTENSIONS = frozenset({"txt", "text", "log", "readme", "me", "nfo"})

_MARKDOWN_PATTERNS = [
    re.compile(r"^#{1,6}\s+", re.MULTILINE),            # headers
    re.compile(r"^\*\s+", re.MULTILINE),                # * item
    re.compile(r"^\d+\.\s+", re.MULTILINE),             # 1. item
    re.compile(r"^>\s+", re.MULTILINE),                 # blockquote
    re.compile(r"\[.*?\]\(.*?\)"),                      # link
    re.compile(r"!\[.*?\]\(.*?\)"),                     # image
    re.compile(r"`.*?`"),                               # inline code
    re.compile(r"```[\s\S]*?```"),                      # fenced code
    re.compile(r"^\s*[-*+]\s+", re.MULTILINE),          # list item
    re.compile(r"^\s*\|\s*.*\s*\|\s*$", re.MULTILINE),  # table row
    re.compile(r"^\s*---+\s*$", re.MULTILINE),          # rule
    re.compile(r"^\s*\*\*\*+\s*$", re.MULTILINE),       # rule
]


def is_markdown_content(content: str) -> bool:
    """Two or more distinct Markdown constructs make a document Markdown."""
    score = 0
    for pattern in _MARKDOWN_PATTERNS:
        if pattern.search(content):
            score += 1
            if score >= 2:
                return True
    return False


def detect_file_format(filename: str, content: str) -> FileFormat:
    # "README" has no dot; the whole name then acts as the extension
    extension = filename.lower().rsplit(".", 1)[-1]
    if extension in MARKDOWN_EXTENSIONS:
        return FileFormat.MARKDOWN
    if extension in TEXT_EXTENSIONS:
        return FileFormat.TEXT
    if is_markdown_content(content):
        return FileFormat.MARKDOWN
    return FileFormat.TEXT


def is_supported_format(value: str) -> bool:
    return value in {f.value for f in FileFormat}


def create_file_info(filename: str, content: str) -> FileInfo:
    return FileInfo(
        name=filename,
        format=detect_file_format(filename, content),
        content_hash=generate_content_hash(content),
        bytes=len(content.encode("utf-8", "surrogatepass")),
    )
