"""
fontseca.dev Backend — Article Routes
=======================================

What:  Listing, inspecting and changing the state of published articles.
How:   Thin handlers: read identifiers from the query string (GET) or the
       URL-encoded form (POST), call ArticlesService, return 200 JSON or 204.
       Problems raised by the service propagate to the global handlers.

Endpoints:
    GET  /archive.articles.list            → filtered published articles
    GET  /archive.articles.hidden.list     → filtered hidden articles
    GET  /archive.articles.info            → one article by `article_uuid`
    GET  /archive.articles.publications    → publication months
    POST /archive.articles.{hide,show,amend,remove,pin,unpin}
    POST /archive.articles.setSlug         → `article_uuid`, `slug`
    POST /archive.articles.tags.{add,remove} → `article_uuid`, `tag_id`
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response

from fontseca.binding import require_form
from fontseca.filters import article_filter
from fontseca.models.archive import Article
from fontseca.schemas.archive import ArticleEntry, ArticleFilter, Publication
from fontseca.services import provide
from fontseca.services.interfaces import ArticlesService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Articles"])

Articles = Depends(provide("articles"))


# ── Reads ─────────────────────────────────────────────────────────────────

@router.get("/archive.articles.list", response_model=List[ArticleEntry])
async def list_articles(
    filter: ArticleFilter = Depends(article_filter),
    articles: ArticlesService = Articles,
):
    return await articles.list(filter)


@router.get("/archive.articles.hidden.list", response_model=List[ArticleEntry])
async def list_hidden_articles(
    filter: ArticleFilter = Depends(article_filter),
    articles: ArticlesService = Articles,
):
    return await articles.list_hidden(filter)


@router.get("/archive.articles.info", response_model=Article)
async def get_article(article_uuid: str = "", articles: ArticlesService = Articles):
    return await articles.get_by_id(article_uuid)


@router.get("/archive.articles.publications", response_model=List[Publication])
async def list_publications(articles: ArticlesService = Articles):
    return await articles.publications()


# ── State changes ─────────────────────────────────────────────────────────

@router.post("/archive.articles.hide", status_code=204)
async def hide_article(request: Request, articles: ArticlesService = Articles) -> Response:
    form = await request.form()
    await articles.hide(require_form(form, "article_uuid"))
    return Response(status_code=204)


@router.post("/archive.articles.show", status_code=204)
async def show_article(request: Request, articles: ArticlesService = Articles) -> Response:
    form = await request.form()
    await articles.show(require_form(form, "article_uuid"))
    return Response(status_code=204)


@router.post("/archive.articles.amend", status_code=204)
async def amend_article(request: Request, articles: ArticlesService = Articles) -> Response:
    form = await request.form()
    await articles.amend(require_form(form, "article_uuid"))
    return Response(status_code=204)


@router.post("/archive.articles.setSlug", status_code=204)
async def set_article_slug(request: Request, articles: ArticlesService = Articles) -> Response:
    form = await request.form()
    article_uuid = require_form(form, "article_uuid")
    slug = require_form(form, "slug")
    await articles.set_slug(article_uuid, slug)
    return Response(status_code=204)


@router.post("/archive.articles.remove", status_code=204)
async def remove_article(request: Request, articles: ArticlesService = Articles) -> Response:
    form = await request.form()
    await articles.remove(require_form(form, "article_uuid"))
    return Response(status_code=204)


@router.post("/archive.articles.pin", status_code=204)
async def pin_article(request: Request, articles: ArticlesService = Articles) -> Response:
    form = await request.form()
    await articles.pin(require_form(form, "article_uuid"))
    return Response(status_code=204)


@router.post("/archive.articles.unpin", status_code=204)
async def unpin_article(request: Request, articles: ArticlesService = Articles) -> Response:
    form = await request.form()
    await articles.unpin(require_form(form, "article_uuid"))
    return Response(status_code=204)


# ── Tags ──────────────────────────────────────────────────────────────────

@router.post("/archive.articles.tags.add", status_code=204)
async def add_article_tag(request: Request, articles: ArticlesService = Articles) -> Response:
    form = await request.form()
    article_uuid = require_form(form, "article_uuid")
    tag_id = require_form(form, "tag_id")
    await articles.add_tag(article_uuid, tag_id)
    return Response(status_code=204)


@router.post("/archive.articles.tags.remove", status_code=204)
async def remove_article_tag(request: Request, articles: ArticlesService = Articles) -> Response:
    form = await request.form()
    article_uuid = require_form(form, "article_uuid")
    tag_id = require_form(form, "tag_id")
    await articles.remove_tag(article_uuid, tag_id)
    return Response(status_code=204)
