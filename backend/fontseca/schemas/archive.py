"""
fontseca.dev Backend — Archive Transfer Records
================================================

What:  Records for drafting and revising articles, filtering the archive, and
       managing the tags and topics attached to articles.
Who:   Bound by the articles, drafts, patches, tags, topics and web routes.
"""

from uuid import UUID
from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from fontseca.schemas.base import Record, Required


# ══════════════════════════════════════════════════════════════════════════
# Articles
# ══════════════════════════════════════════════════════════════════════════

class ArticleCreation(Record):
    """Data required to start a new draft."""

    title: Annotated[str, Required, Field(max_length=256)] = ""
    summary: Annotated[str, Field(max_length=512)] = ""
    content: Annotated[str, Field(max_length=3145728)] = ""


class ArticleRevision(Record):
    """Data used to revise a draft or an article patch; empty members are left untouched."""

    title: Annotated[str, Field(max_length=256)] = ""
    topic: str = Field(default="", alias="topic_id")
    slug: Annotated[str, Field(max_length=512)] = ""
    summary: Annotated[str, Field(max_length=512)] = ""
    content: Annotated[str, Field(max_length=3145728)] = ""


class TopicRef(BaseModel):
    id: str
    name: str
    url: str


class ArticleEntry(BaseModel):
    """Shallow article entry returned by archive listings."""

    uuid: UUID
    title: str
    topic: Optional[TopicRef] = None
    url: str = ""
    is_pinned: bool = False
    published_at: Optional[datetime] = None


# ══════════════════════════════════════════════════════════════════════════
# Filtering
# ══════════════════════════════════════════════════════════════════════════

class Publication(BaseModel):
    """The month and year an article was published."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)


class ArticleFilter(BaseModel):
    """
    Normalized query parameters for listing articles.

    Built fresh for every request by `fontseca.filters.get_article_filter`.
    """

    model_config = ConfigDict(frozen=True)

    search: str = ""
    topic: str = ""
    tag: str = ""
    publication: Optional[Publication] = None
    page: int = Field(default=1, ge=1)
    results_per_page: int = Field(default=20, ge=1)


class ArticleRequest(BaseModel):
    """Identifies one published article from the parts of its canonical URL."""

    model_config = ConfigDict(frozen=True)

    topic: str
    publication: Optional[Publication] = None
    slug: str


# ══════════════════════════════════════════════════════════════════════════
# Tags & Topics
# ══════════════════════════════════════════════════════════════════════════

class TagCreation(Record):
    name: Annotated[str, Required, Field(max_length=32)] = ""


class TagUpdate(Record):
    name: Annotated[str, Required, Field(max_length=32)] = ""


class TopicCreation(Record):
    name: Annotated[str, Required, Field(max_length=32)] = ""


class TopicUpdate(Record):
    name: Annotated[str, Required, Field(max_length=32)] = ""
