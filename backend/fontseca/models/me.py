"""
fontseca.dev Backend — Profile Records
========================================

What:  The site owner's profile and work experience entries.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class Me(BaseModel):
    """Profile information, contact links and other metadata."""

    username: str
    first_name: str
    last_name: str
    summary: str = ""
    job_title: str = ""
    email: str = ""
    photo_url: str = ""
    resume_url: str = ""
    coding_since: int = 0
    company: str = ""
    location: str = ""
    hireable: bool = False
    github_url: str = ""
    linkedin_url: str = ""
    youtube_url: str = ""
    twitter_url: str = ""
    instagram_url: str = ""
    created_at: datetime
    updated_at: datetime


class Experience(BaseModel):
    uuid: UUID
    starts: int
    ends: Optional[int] = None
    job_title: str
    company: str
    company_homepage: Optional[str] = None
    country: str
    summary: str
    active: bool = False
    hidden: bool = False
    created_at: datetime
    updated_at: datetime
