"""
fontseca.dev Backend — Article Patch Routes
=============================================

What:  Pending revisions of published articles (opened by
       /archive.articles.amend): list, revise, share, discard, release.

Note:  Patch revisions are bound but not validated here; an empty revision
       member means "unchanged" and PatchesService applies its own checks.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response

from fontseca.binding import bind_post_form, require_form
from fontseca.models.archive import ArticlePatch
from fontseca.schemas.archive import ArticleRevision
from fontseca.services import provide
from fontseca.services.interfaces import PatchesService

router = APIRouter(tags=["Patches"])

Patches = Depends(provide("patches"))


@router.get("/archive.articles.patches.list", response_model=List[ArticlePatch])
async def list_patches(patches: PatchesService = Patches):
    return await patches.get()


@router.post("/archive.articles.patches.revise", status_code=204)
async def revise_patch(request: Request, patches: PatchesService = Patches) -> Response:
    form = await request.form()
    patch_uuid = require_form(form, "patch_uuid")

    revision = ArticleRevision.model_construct()
    bind_post_form(form, revision)

    await patches.revise(patch_uuid, revision)
    return Response(status_code=204)


@router.post("/archive.articles.patches.share")
async def share_patch(request: Request, patches: PatchesService = Patches):
    form = await request.form()
    link = await patches.share(require_form(form, "patch_uuid"))
    return {"shareable_link": link}


@router.post("/archive.articles.patches.discard", status_code=204)
async def discard_patch(request: Request, patches: PatchesService = Patches) -> Response:
    form = await request.form()
    await patches.discard(require_form(form, "patch_uuid"))
    return Response(status_code=204)


@router.post("/archive.articles.patches.release", status_code=204)
async def release_patch(request: Request, patches: PatchesService = Patches) -> Response:
    form = await request.form()
    await patches.release(require_form(form, "patch_uuid"))
    return Response(status_code=204)
