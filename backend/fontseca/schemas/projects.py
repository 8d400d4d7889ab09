"""
fontseca.dev Backend — Project Transfer Records
=================================================

What:  Records for creating and updating portfolio projects and the technology
       tags attached to them.
Who:   Bound by the projects and technologies routes.
"""

from typing import Annotated

from pydantic import Field

from fontseca.schemas.base import Record, Required


class ProjectCreation(Record):
    name: Annotated[str, Required, Field(max_length=64)] = ""
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


class ProjectUpdate(Record):
    """Zero-valued members are left unchanged by the service."""

    name: Annotated[str, Field(max_length=64)] = ""
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


class TechnologyTagCreation(Record):
    name: Annotated[str, Required] = ""


class TechnologyTagUpdate(Record):
    name: Annotated[str, Required] = ""
