"""Core domain models for citations and their creators."""

import re
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CitationKind(str, Enum):
    """Closed set of record kinds; the kind decides which fields are required."""

    BOOK = "book"
    BOOK_SECTION = "book-section"
    JOURNAL_ARTICLE = "journal-article"
    CONFERENCE_PAPER = "conference-paper"
    THESIS = "thesis"
    WEBPAGE = "webpage"
    MANUSCRIPT = "manuscript"
    REPORT = "report"
    PATENT = "patent"


class CreatorRole(str, Enum):
    """Role a creator played in producing the work."""

    AUTHOR = "author"
    EDITOR = "editor"
    TRANSLATOR = "translator"
    CONTRIBUTOR = "contributor"
    SERIES_EDITOR = "series-editor"
    REVIEWED_AUTHOR = "reviewed-author"
    INVENTOR = "inventor"


def _kebab(value: object) -> object:
    """Accept ``journalArticle`` / ``journal_article`` spellings of enum values."""
    if not isinstance(value, str):
        return value
    value = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", value.strip())
    return value.replace("_", "-").lower()


class Creator(BaseModel):
    """Person or body credited on a citation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    role: CreatorRole = CreatorRole.AUTHOR
    given_name: Optional[str] = None
    family_name: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, v: object) -> object:
        return _kebab(v)

    @field_validator("given_name", mode="before")
    @classmethod
    def _blank_given_name(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("family_name", mode="before")
    @classmethod
    def _missing_family_name(cls, v: Optional[str]) -> str:
        # Blank names are reported by the consistency checker, not rejected here.
        return "" if v is None else v


class Citation(BaseModel):
    """
    One bibliographic record under validation.

    Records are frozen: the engine reads them and never writes to them.
    Changing the kind means building a new record with ``model_copy`` and
    validating it again. Optional text fields store ``None`` for absence;
    blank strings are turned into ``None`` on construction.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    citation_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("citation_id", "citationId", "id", "key"),
        description="Opaque identity, unique within a batch",
    )
    kind: CitationKind = Field(
        ...,
        validation_alias=AliasChoices("kind", "itemType", "item_type", "type"),
    )

    # Bibliographic metadata
    title: str = ""
    creators: Tuple[Creator, ...] = Field(default_factory=tuple)
    date: Optional[str] = None
    venue: Optional[str] = None
    publisher: Optional[str] = None
    place: Optional[str] = None

    # Persistent identifiers
    doi: Optional[str] = None
    isbn: Optional[str] = None
    issn: Optional[str] = None
    url: Optional[str] = None

    # Locators
    pages: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    edition: Optional[str] = None

    # Free-form content
    abstract: Optional[str] = None
    tags: FrozenSet[str] = Field(default_factory=frozenset)
    extra: Optional[str] = None

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, v: object) -> object:
        return _kebab(v)

    @field_validator("title", mode="before")
    @classmethod
    def _title_none_is_blank(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @field_validator(
        "date",
        "venue",
        "publisher",
        "place",
        "doi",
        "isbn",
        "issn",
        "url",
        "pages",
        "volume",
        "issue",
        "edition",
        "abstract",
        "extra",
        mode="before",
    )
    @classmethod
    def _blank_is_absent(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v
