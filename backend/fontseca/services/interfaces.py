"""
fontseca.dev Backend — Service Interfaces
===========================================

What:  Abstract base classes describing the business services the routes
       depend on, plus the page renderer used by the web routes.
How:   Concrete implementations (persistence, caching, templating) live outside
       this package and are bundled in a `Services` instance handed to
       create_app(). Routes only ever see these interfaces.
Who:   Implemented by the service layer; mocked with `AsyncMock(spec=...)` in tests.

Error Contract:
    Methods raise `fontseca.exceptions.Problem` for expected failures (not
    found, conflicts, expired links). The routes let those propagate unchanged.
    Any other exception is treated as an internal error.

Boolean Results:
    Methods returning `bool` report whether a change was actually applied.
    `False` means "nothing changed", which routes translate to 303 See Other
    or 409 Conflict depending on the endpoint.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from fontseca.models.archive import Article, ArticlePatch, Tag, Topic
from fontseca.models.me import Experience, Me
from fontseca.models.projects import Project, TechnologyTag
from fontseca.schemas.archive import (
    ArticleCreation,
    ArticleEntry,
    ArticleFilter,
    ArticleRequest,
    ArticleRevision,
    Publication,
    TagCreation,
    TagUpdate,
    TopicCreation,
    TopicUpdate,
)
from fontseca.schemas.me import ExperienceCreation, ExperienceUpdate, MeUpdate
from fontseca.schemas.projects import (
    ProjectCreation,
    ProjectUpdate,
    TechnologyTagCreation,
    TechnologyTagUpdate,
)


# ══════════════════════════════════════════════════════════════════════════
# Archive
# ══════════════════════════════════════════════════════════════════════════

class ArticlesService(ABC):
    """
    Published articles of the archive.

    Contract:
        - list() and list_hidden() honour every member of the ArticleFilter
        - get() resolves an article from its canonical URL parts and counts
          the visit of `visitor` (the reader's IP address)
        - State changes on unknown IDs raise a 404 Problem
    """

    @abstractmethod
    async def list(self, filter: ArticleFilter) -> List[ArticleEntry]:
        ...

    @abstractmethod
    async def list_hidden(self, filter: ArticleFilter) -> List[ArticleEntry]:
        ...

    @abstractmethod
    async def publications(self) -> List[Publication]:
        """Distinct publication months, most recent first."""
        ...

    @abstractmethod
    async def get(self, request: ArticleRequest, visitor: str = "") -> Article:
        ...

    @abstractmethod
    async def get_by_id(self, article_uuid: str) -> Article:
        ...

    @abstractmethod
    async def hide(self, article_uuid: str) -> None:
        ...

    @abstractmethod
    async def show(self, article_uuid: str) -> None:
        ...

    @abstractmethod
    async def amend(self, article_uuid: str) -> None:
        """Open a patch for the article so it can be revised without unpublishing."""
        ...

    @abstractmethod
    async def set_slug(self, article_uuid: str, slug: str) -> None:
        ...

    @abstractmethod
    async def remove(self, article_uuid: str) -> None:
        ...

    @abstractmethod
    async def pin(self, article_uuid: str) -> None:
        ...

    @abstractmethod
    async def unpin(self, article_uuid: str) -> None:
        ...

    @abstractmethod
    async def add_tag(self, article_uuid: str, tag_id: str) -> None:
        ...

    @abstractmethod
    async def remove_tag(self, article_uuid: str, tag_id: str) -> None:
        ...


class DraftsService(ABC):
    """Articles that have not been published yet."""

    @abstractmethod
    async def draft(self, creation: ArticleCreation) -> UUID:
        ...

    @abstractmethod
    async def publish(self, draft_uuid: str) -> None:
        ...

    @abstractmethod
    async def get(self, filter: ArticleFilter) -> List[ArticleEntry]:
        ...

    @abstractmethod
    async def get_by_link(self, link: str) -> Article:
        """
        Resolve a draft from its shareable link path.

        Raises:
            Problem: 404 when the link is unknown or blocked, 410 when it expired
        """
        ...

    @abstractmethod
    async def get_by_id(self, draft_uuid: str) -> Article:
        ...

    @abstractmethod
    async def add_tag(self, draft_uuid: str, tag_id: str) -> None:
        ...

    @abstractmethod
    async def remove_tag(self, draft_uuid: str, tag_id: str) -> None:
        ...

    @abstractmethod
    async def share(self, draft_uuid: str) -> str:
        """Create (or reuse) a temporary shareable link and return it."""
        ...

    @abstractmethod
    async def discard(self, draft_uuid: str) -> None:
        ...

    @abstractmethod
    async def revise(self, draft_uuid: str, revision: ArticleRevision) -> None:
        ...


class PatchesService(ABC):
    """Pending revisions of published articles."""

    @abstractmethod
    async def get(self) -> List[ArticlePatch]:
        ...

    @abstractmethod
    async def revise(self, patch_uuid: str, revision: ArticleRevision) -> None:
        ...

    @abstractmethod
    async def share(self, patch_uuid: str) -> str:
        ...

    @abstractmethod
    async def discard(self, patch_uuid: str) -> None:
        ...

    @abstractmethod
    async def release(self, patch_uuid: str) -> None:
        """Apply the patch to its article and delete the patch."""
        ...


class TagsService(ABC):
    @abstractmethod
    async def add(self, creation: TagCreation) -> None:
        ...

    @abstractmethod
    async def get(self) -> List[Tag]:
        ...

    @abstractmethod
    async def update(self, tag_id: str, update: TagUpdate) -> None:
        ...

    @abstractmethod
    async def remove(self, tag_id: str) -> None:
        ...


class TopicsService(ABC):
    @abstractmethod
    async def add(self, creation: TopicCreation) -> None:
        ...

    @abstractmethod
    async def get(self) -> List[Topic]:
        ...

    @abstractmethod
    async def update(self, topic_id: str, update: TopicUpdate) -> None:
        ...

    @abstractmethod
    async def remove(self, topic_id: str) -> None:
        ...


# ══════════════════════════════════════════════════════════════════════════
# Profile & Portfolio
# ══════════════════════════════════════════════════════════════════════════

class MeService(ABC):
    @abstractmethod
    async def get(self) -> Me:
        ...

    @abstractmethod
    async def update(self, update: MeUpdate) -> bool:
        ...


class ExperienceService(ABC):
    @abstractmethod
    async def get(self, hidden: bool = False) -> List[Experience]:
        """Visible entries, or the hidden ones when `hidden` is set."""
        ...

    @abstractmethod
    async def get_by_id(self, experience_uuid: str) -> Experience:
        ...

    @abstractmethod
    async def save(self, creation: ExperienceCreation) -> bool:
        ...

    @abstractmethod
    async def update(self, experience_uuid: str, update: ExperienceUpdate) -> bool:
        ...

    @abstractmethod
    async def remove(self, experience_uuid: str) -> None:
        ...


class ProjectsService(ABC):
    @abstractmethod
    async def list(self, archived: bool = False) -> List[Project]:
        ...

    @abstractmethod
    async def get(self, project_uuid: str) -> Project:
        ...

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Project:
        ...

    @abstractmethod
    async def create(self, creation: ProjectCreation) -> str:
        """Returns the ID of the inserted project."""
        ...

    @abstractmethod
    async def update(self, project_uuid: str, update: ProjectUpdate) -> bool:
        ...

    @abstractmethod
    async def unarchive(self, project_uuid: str) -> bool:
        ...

    @abstractmethod
    async def remove(self, project_uuid: str) -> None:
        ...

    @abstractmethod
    async def add_tag(self, project_uuid: str, technology_id: str) -> bool:
        ...

    @abstractmethod
    async def remove_tag(self, project_uuid: str, technology_id: str) -> bool:
        ...


class TechnologiesService(ABC):
    @abstractmethod
    async def get(self) -> List[TechnologyTag]:
        ...

    @abstractmethod
    async def add(self, creation: TechnologyTagCreation) -> str:
        """Returns the ID of the inserted technology tag."""
        ...

    @abstractmethod
    async def update(self, technology_id: str, update: TechnologyTagUpdate) -> bool:
        ...

    @abstractmethod
    async def remove(self, technology_id: str) -> None:
        ...


# ══════════════════════════════════════════════════════════════════════════
# Page Rendering
# ══════════════════════════════════════════════════════════════════════════

class PageRenderer(ABC):
    """
    Renders full HTML pages (or HTML fragments) for the public website.

    Contract:
        - Every method returns the complete HTML text; the web routes only set
          the status code and content type.
        - Rendering is synchronous and must not perform I/O.
    """

    @abstractmethod
    def me(self, me: Me) -> str:
        ...

    @abstractmethod
    def experience(self, entries: List[Experience]) -> str:
        ...

    @abstractmethod
    def projects(self, projects: List[Project]) -> str:
        ...

    @abstractmethod
    def project_details(self, project: Optional[Project]) -> str:
        """`None` renders the "project not found" page."""
        ...

    @abstractmethod
    def archive(
        self,
        articles: List[ArticleEntry],
        publications: List[Publication],
        topics: List[Topic],
        tags: List[Tag],
        search: str,
        publication: Optional[Publication],
        selected_topic: Topic,
        selected_tag: Optional[Tag],
    ) -> str:
        ...

    @abstractmethod
    def search_results(self, articles: List[ArticleEntry]) -> str:
        """Fragment swapped into the archive page by HTMX searches."""
        ...

    @abstractmethod
    def article(self, article: Article) -> str:
        ...
