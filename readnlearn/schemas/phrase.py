from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PhraseCreate(BaseModel):
    lang: str = ""
    text: str = Field(min_length=1)
    translation: str = ""
    context: str = ""
    tags: list[str] = Field(default_factory=list)
    source_file: str | None = None
    content_hash: str | None = None
    line_no: int | None = Field(default=None, ge=1)
    col_offset: int | None = Field(default=None, ge=0)


class Phrase(BaseModel):
    """A saved phrase as read back from storage. Never mutated by the resolver."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    lang: str = ""
    text: str = ""
    translation: str = ""
    context: str = ""
    tags: list[str] = Field(default_factory=list)
    added_at: datetime | None = None
    source_file: str | None = None
    content_hash: str | None = None
    line_no: int | None = None
    col_offset: int | None = None

    @field_validator("lang", "text", "translation", "context", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def none_to_list(cls, v):
        return [] if v is None else v


class ResolvedPhrase(BaseModel):
    id: str
    text: str
    position: int  # -1 when the phrase is not in the current text
    # Characters of the current text that matched; differs from len(text)
    # for whitespace, markup and fuzzy matches
    matched_length: int = 0
    ordering_key: int
    translation: str = ""
    tags: list[str] = Field(default_factory=list)
    source_file: str | None = None
    content_hash: str | None = None

    @property
    def located(self) -> bool:
        return self.position >= 0


class ResolveRequest(BaseModel):
    content: str
    source_file: str | None = None
    content_hash: str | None = None


class ContentResolution(BaseModel):
    content_hash: str
    display: list[ResolvedPhrase]
    decoration: list[ResolvedPhrase]
    unlocated: list[ResolvedPhrase]


class DecoratedContent(BaseModel):
    content_hash: str
    html: str
    decorated: int


class FileInfoRequest(BaseModel):
    filename: str
    content: str


class PhraseSearchResponse(BaseModel):
    query: str
    results: list[Phrase]
