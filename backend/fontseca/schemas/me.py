"""
fontseca.dev Backend — Profile Transfer Records
=================================================

What:  Records for updating the profile and managing experience entries.
Who:   Bound by the me and experience routes.
"""

from typing import Annotated

from pydantic import Field

from fontseca.schemas.base import Record, Required

_URL_MAX = 2048


class MeUpdate(Record):
    """
    Profile members that can be changed.

    `photo_url`, `resume_url` and `hireable` are set through their own routes,
    so a zero value means "leave unchanged" for every member.
    """

    summary: Annotated[str, Field(max_length=1024)] = ""
    job_title: Annotated[str, Field(max_length=64)] = ""
    email: Annotated[str, Field(max_length=254)] = ""
    photo_url: Annotated[str, Field(max_length=_URL_MAX)] = ""
    resume_url: Annotated[str, Field(max_length=_URL_MAX)] = ""
    company: Annotated[str, Field(max_length=64)] = ""
    location: Annotated[str, Field(max_length=64)] = ""
    hireable: bool = False
    github_url: Annotated[str, Field(max_length=_URL_MAX)] = ""
    linkedin_url: Annotated[str, Field(max_length=_URL_MAX)] = ""
    youtube_url: Annotated[str, Field(max_length=_URL_MAX)] = ""
    twitter_url: Annotated[str, Field(max_length=_URL_MAX)] = ""
    instagram_url: Annotated[str, Field(max_length=_URL_MAX)] = ""


class ExperienceCreation(Record):
    starts: Annotated[int, Required, Field(gt=2017)] = 0
    ends: int = 0
    job_title: Annotated[str, Required, Field(max_length=64)] = ""
    company: Annotated[str, Required, Field(max_length=64)] = ""
    company_homepage: Annotated[str, Field(max_length=_URL_MAX)] = ""
    country: Annotated[str, Required, Field(max_length=64)] = ""
    summary: Annotated[str, Required] = ""


class ExperienceUpdate(Record):
    starts: int = 0
    ends: int = 0
    job_title: Annotated[str, Field(max_length=64)] = ""
    company: Annotated[str, Field(max_length=64)] = ""
    company_homepage: Annotated[str, Field(max_length=_URL_MAX)] = ""
    country: Annotated[str, Field(max_length=64)] = ""
    summary: str = ""
    active: bool = False
    hidden: bool = False
