"""
fontseca.dev Backend — Draft Routes
=====================================

What:  Writing workflow for unpublished articles: start, revise, tag, share,
       publish or discard a draft.
How:   Drafts are started and revised from URL-encoded forms bound onto
       ArticleCreation / ArticleRevision and validated before reaching
       DraftsService.

Endpoints:
    POST /archive.drafts.start           → 201 {"draft_uuid"}
    POST /archive.drafts.publish         → 204
    GET  /archive.drafts.list            → filtered drafts
    GET  /archive.drafts.info            → one draft by `draft_uuid`
    POST /archive.drafts.tags.{add,remove}
    POST /archive.drafts.share           → 200 {"shareable_link"}
    POST /archive.drafts.discard         → 204
    POST /archive.drafts.revise          → 204
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response

from fontseca.binding import StructValidator, bind_post_form, get_validator, require_form
from fontseca.filters import article_filter
from fontseca.models.archive import Article
from fontseca.schemas.archive import ArticleCreation, ArticleEntry, ArticleFilter, ArticleRevision
from fontseca.services import provide
from fontseca.services.interfaces import DraftsService

router = APIRouter(tags=["Drafts"])

Drafts = Depends(provide("drafts"))


@router.post("/archive.drafts.start", status_code=201)
async def start_draft(
    request: Request,
    drafts: DraftsService = Drafts,
    validator: StructValidator = Depends(get_validator),
):
    creation = ArticleCreation.model_construct()
    bind_post_form(await request.form(), creation)
    validator.validate(creation)

    draft_uuid = await drafts.draft(creation)
    return {"draft_uuid": str(draft_uuid)}


@router.post("/archive.drafts.publish", status_code=204)
async def publish_draft(request: Request, drafts: DraftsService = Drafts) -> Response:
    form = await request.form()
    await drafts.publish(require_form(form, "draft_uuid"))
    return Response(status_code=204)


@router.get("/archive.drafts.list", response_model=List[ArticleEntry])
async def list_drafts(
    filter: ArticleFilter = Depends(article_filter),
    drafts: DraftsService = Drafts,
):
    return await drafts.get(filter)


@router.get("/archive.drafts.info", response_model=Article)
async def get_draft(draft_uuid: str = "", drafts: DraftsService = Drafts):
    return await drafts.get_by_id(draft_uuid)


@router.post("/archive.drafts.tags.add", status_code=204)
async def add_draft_tag(request: Request, drafts: DraftsService = Drafts) -> Response:
    form = await request.form()
    draft_uuid = require_form(form, "draft_uuid")
    tag_id = require_form(form, "tag_id")
    await drafts.add_tag(draft_uuid, tag_id)
    return Response(status_code=204)


@router.post("/archive.drafts.tags.remove", status_code=204)
async def remove_draft_tag(request: Request, drafts: DraftsService = Drafts) -> Response:
    form = await request.form()
    draft_uuid = require_form(form, "draft_uuid")
    tag_id = require_form(form, "tag_id")
    await drafts.remove_tag(draft_uuid, tag_id)
    return Response(status_code=204)


@router.post("/archive.drafts.share")
async def share_draft(request: Request, drafts: DraftsService = Drafts):
    form = await request.form()
    link = await drafts.share(require_form(form, "draft_uuid"))
    return {"shareable_link": link}


@router.post("/archive.drafts.discard", status_code=204)
async def discard_draft(request: Request, drafts: DraftsService = Drafts) -> Response:
    form = await request.form()
    await drafts.discard(require_form(form, "draft_uuid"))
    return Response(status_code=204)


@router.post("/archive.drafts.revise", status_code=204)
async def revise_draft(
    request: Request,
    drafts: DraftsService = Drafts,
    validator: StructValidator = Depends(get_validator),
) -> Response:
    form = await request.form()
    draft_uuid = require_form(form, "draft_uuid")

    revision = ArticleRevision.model_construct()
    bind_post_form(form, revision)
    validator.validate(revision)

    await drafts.revise(draft_uuid, revision)
    return Response(status_code=204)
