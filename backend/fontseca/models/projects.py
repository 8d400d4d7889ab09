"""
fontseca.dev Backend — Project Records
========================================

What:  Portfolio projects and the technology tags that describe them.
"""

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel


class TechnologyTag(BaseModel):
    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime


class Project(BaseModel):
    """A project developed by the site owner."""

    id: UUID
    name: str
    slug: str = ""
    homepage: str = ""
    language: str = ""
    summary: str = ""
    content: str = ""
    estimated_time: int = 0
    first_image_url: str = ""
    second_image_url: str = ""
    github_url: str = ""
    collection_url: str = ""
    playground_url: str = ""
    playable: bool = False
    archived: bool = False
    finished: bool = False
    technologies: List[TechnologyTag] = []
    created_at: datetime
    updated_at: datetime
