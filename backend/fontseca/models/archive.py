"""
fontseca.dev Backend — Archive Records
========================================

What:  Articles, pending article patches, and the topics and tags that
       classify them.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class Article(BaseModel):
    """A piece of writing about a particular subject in the archive."""

    id: UUID
    title: str
    author: str = ""
    slug: str = ""
    summary: str = ""
    cover_url: str = ""
    read_time: int = 0
    views: int = 0
    content: str = ""
    topic: Optional["Topic"] = None
    tags: List["Tag"] = []
    drafted_at: datetime
    pinned_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ArticlePatch(BaseModel):
    """Pending changes to a published article, applied when released."""

    article_uuid: UUID
    title: str = ""
    slug: str = ""
    summary: str = ""
    content: str = ""


class Topic(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Tag(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


Article.model_rebuild()
