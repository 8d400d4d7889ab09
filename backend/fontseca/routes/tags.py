"""
fontseca.dev Backend — Tag Routes
===================================

What:  Manage the tags that can be attached to articles and drafts.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response

from fontseca.binding import StructValidator, bind_post_form, get_validator, require_form
from fontseca.models.archive import Tag
from fontseca.schemas.archive import TagCreation, TagUpdate
from fontseca.services import provide
from fontseca.services.interfaces import TagsService

router = APIRouter(tags=["Tags"])

Tags = Depends(provide("tags"))


@router.post("/archive.tags.add", status_code=201)
async def add_tag(
    request: Request,
    tags: TagsService = Tags,
    validator: StructValidator = Depends(get_validator),
) -> Response:
    creation = TagCreation.model_construct()
    bind_post_form(await request.form(), creation)
    validator.validate(creation)

    await tags.add(creation)
    return Response(status_code=201)


@router.get("/archive.tags.list", response_model=List[Tag])
async def list_tags(tags: TagsService = Tags):
    return await tags.get()


@router.post("/archive.tags.set", status_code=204)
async def set_tag(
    request: Request,
    tags: TagsService = Tags,
    validator: StructValidator = Depends(get_validator),
) -> Response:
    form = await request.form()
    tag_id = require_form(form, "tag_id")

    update = TagUpdate.model_construct()
    bind_post_form(form, update)
    validator.validate(update)

    await tags.update(tag_id, update)
    return Response(status_code=204)


@router.post("/archive.tags.remove", status_code=204)
async def remove_tag(request: Request, tags: TagsService = Tags) -> Response:
    form = await request.form()
    await tags.remove(require_form(form, "tag_id"))
    return Response(status_code=204)
