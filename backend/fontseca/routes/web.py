"""
fontseca.dev Backend — Website Page Routes
============================================

What:  Server-rendered HTML pages of the public website.
How:   Each route fetches what the page needs from the services and hands it
       to the PageRenderer. Failures render plain-text error pages
       ("500 Internal Server Error" / "404 Not Found") instead of problem JSON,
       since the caller is a browser.

Pages:
    GET /                                        → profile
    GET /experience                              → experience entries
    GET /work, /work/{project_slug}              → projects / project details
    GET /archive                                 → archive (with filters)
    GET /archive/{year}/{month}                  → archive for one month
    GET /archive/topic/{topic}, /archive/tag/{tag}
    GET /archive/{topic}/{year}/{month}/{slug}   → published article
    GET /archive/sharing/{hash}                  → draft behind a shareable link

HTMX:
    Archive requests sent with `HX-Request: true` that search, or filter by
    topic or tag, receive only the search results fragment.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from fontseca.binding import is_truthy
from fontseca.exceptions import Problem
from fontseca.models.archive import Topic
from fontseca.schemas.archive import ArticleFilter, ArticleRequest, Publication
from fontseca.services import provide
from fontseca.services.interfaces import (
    ArticlesService,
    DraftsService,
    ExperienceService,
    MeService,
    PageRenderer,
    ProjectsService,
    TagsService,
    TopicsService,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Web"], include_in_schema=False)

Pages = Depends(provide("pages"))

ANY_TOPIC = "any"
ARCHIVE_RESULTS_PER_PAGE = 10000


def internal_error() -> Response:
    return PlainTextResponse("500 Internal Server Error", status_code=500)


def not_found() -> Response:
    return PlainTextResponse("404 Not Found", status_code=404)


# ══════════════════════════════════════════════════════════════════════════
# Profile & Portfolio
# ══════════════════════════════════════════════════════════════════════════

@router.get("/", response_class=HTMLResponse)
async def render_me(me: MeService = Depends(provide("me")), pages: PageRenderer = Pages):
    try:
        profile = await me.get()
    except Exception:
        logger.error("Unable to load the profile page", exc_info=True)
        return internal_error()
    return HTMLResponse(pages.me(profile))


@router.get("/experience", response_class=HTMLResponse)
async def render_experience(
    experience: ExperienceService = Depends(provide("experience")),
    pages: PageRenderer = Pages,
):
    try:
        entries = await experience.get()
    except Exception:
        logger.error("Unable to load the experience page", exc_info=True)
        return internal_error()
    return HTMLResponse(pages.experience(entries))


@router.get("/work", response_class=HTMLResponse)
async def render_projects(
    projects: ProjectsService = Depends(provide("projects")),
    pages: PageRenderer = Pages,
):
    try:
        listed = await projects.list()
    except Exception:
        logger.error("Unable to load the projects page", exc_info=True)
        return internal_error()
    return HTMLResponse(pages.projects(listed))


@router.get("/work/{project_slug}", response_class=HTMLResponse)
async def render_project_details(
    project_slug: str,
    projects: ProjectsService = Depends(provide("projects")),
    pages: PageRenderer = Pages,
):
    try:
        project = await projects.get_by_slug(project_slug)
    except Exception as exc:
        logger.info("Project %r not rendered: %s", project_slug, exc)
        return HTMLResponse(pages.project_details(None), status_code=404)
    return HTMLResponse(pages.project_details(project))


# ══════════════════════════════════════════════════════════════════════════
# Archive
# ══════════════════════════════════════════════════════════════════════════

async def _render_archive(
    request: Request,
    topic: str = "",
    tag: str = "",
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> Response:
    articles: ArticlesService = provide("articles")(request)
    topics_service: TopicsService = provide("topics")(request)
    tags_service: TagsService = provide("tags")(request)
    pages: PageRenderer = provide("pages")(request)

    query = request.query_params
    searching = "search" in query
    topic = topic.strip()
    tag = tag.strip()

    publication = None
    if year is not None and month is not None:
        if not 1 <= month <= 12:
            return not_found()
        publication = Publication(year=year, month=month)

    filter = ArticleFilter(
        search=query.get("search", "").strip(),
        topic="" if topic == ANY_TOPIC else topic,
        tag=tag,
        publication=publication,
        page=1,
        results_per_page=ARCHIVE_RESULTS_PER_PAGE,
    )

    # Every call runs to completion before the page is composed or rejected
    results = await asyncio.gather(
        articles.list(filter),
        articles.publications(),
        topics_service.get(),
        tags_service.get(),
        return_exceptions=True,
    )
    failure = next((r for r in results if isinstance(r, BaseException)), None)
    if failure is not None:
        logger.error("Unable to load the archive page", exc_info=failure)
        return internal_error()
    listed, publications, topics, tags = results

    if is_truthy(request.headers.get("HX-Request", "")) and (searching or topic or tag):
        return HTMLResponse(pages.search_results(listed))

    selected_topic = next((t for t in topics if t.id == topic), None)
    if selected_topic is None:
        selected_topic = Topic(id=ANY_TOPIC, name="?" if topic else "Any topic")

    selected_tag = next((t for t in tags if t.id == tag), None)

    return HTMLResponse(
        pages.archive(
            listed,
            publications,
            topics,
            tags,
            filter.search,
            filter.publication,
            selected_topic,
            selected_tag,
        )
    )


@router.get("/archive", response_class=HTMLResponse)
async def render_archive(request: Request):
    return await _render_archive(request)


@router.get("/archive/topic/{topic}", response_class=HTMLResponse)
async def render_archive_topic(request: Request, topic: str):
    return await _render_archive(request, topic=topic)


@router.get("/archive/tag/{tag}", response_class=HTMLResponse)
async def render_archive_tag(request: Request, tag: str):
    return await _render_archive(request, tag=tag)


@router.get("/archive/sharing/{hash}", response_class=HTMLResponse)
async def render_shared_draft(
    request: Request,
    hash: str,
    drafts: DraftsService = Depends(provide("drafts")),
    pages: PageRenderer = Pages,
):
    link = request.url.path
    if not link.startswith("/"):
        link = "/" + link

    try:
        draft = await drafts.get_by_link(link)
    except Problem as p:
        if p.status in (404, 410):
            return not_found()
        logger.error("Unable to load shared draft %r: %s", hash, p)
        return internal_error()
    except Exception:
        logger.error("Unable to load shared draft %r", hash, exc_info=True)
        return internal_error()
    return HTMLResponse(pages.article(draft))


@router.get("/archive/{year:int}/{month:int}", response_class=HTMLResponse)
async def render_archive_month(request: Request, year: int, month: int):
    return await _render_archive(request, year=year, month=month)


@router.get("/archive/{topic}/{year:int}/{month:int}/{slug}", response_class=HTMLResponse)
async def render_article(
    request: Request,
    topic: str,
    year: int,
    month: int,
    slug: str,
    articles: ArticlesService = Depends(provide("articles")),
    pages: PageRenderer = Pages,
):
    if not 1 <= month <= 12:
        return not_found()

    article_request = ArticleRequest(
        topic=topic,
        publication=Publication(year=year, month=month),
        slug=slug,
    )
    visitor = request.client.host if request.client else ""

    try:
        article = await articles.get(article_request, visitor=visitor)
    except Problem as p:
        if p.status == 404:
            return not_found()
        logger.error("Unable to load article %r: %s", slug, p)
        return internal_error()
    except Exception:
        logger.error("Unable to load article %r", slug, exc_info=True)
        return internal_error()
    return HTMLResponse(pages.article(article))
