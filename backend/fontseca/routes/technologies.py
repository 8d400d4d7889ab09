"""
fontseca.dev Backend — Technology Tag Routes
==============================================

What:  Manage the technology tags used to describe projects.
How:   Forms keyed by `id`; an update that changes nothing answers 409 Conflict.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response

from fontseca.binding import StructValidator, bind_post_form, get_validator, require_form
from fontseca.models.projects import TechnologyTag
from fontseca.schemas.projects import TechnologyTagCreation, TechnologyTagUpdate
from fontseca.services import provide
from fontseca.services.interfaces import TechnologiesService

router = APIRouter(tags=["Technologies"])

Technologies = Depends(provide("technologies"))


@router.get("/technologies.list", response_model=List[TechnologyTag])
async def list_technologies(technologies: TechnologiesService = Technologies):
    return await technologies.get()


@router.post("/technologies.add", status_code=201)
async def add_technology(
    request: Request,
    technologies: TechnologiesService = Technologies,
    validator: StructValidator = Depends(get_validator),
):
    creation = TechnologyTagCreation.model_construct()
    bind_post_form(await request.form(), creation)
    validator.validate(creation)

    inserted_id = await technologies.add(creation)
    return {"inserted_id": str(inserted_id)}


@router.post("/technologies.set")
async def set_technology(
    request: Request,
    technologies: TechnologiesService = Technologies,
    validator: StructValidator = Depends(get_validator),
) -> Response:
    form = await request.form()
    technology_id = require_form(form, "id")

    update = TechnologyTagUpdate.model_construct()
    bind_post_form(form, update)
    validator.validate(update)

    updated = await technologies.update(technology_id, update)
    return Response(status_code=204 if updated else 409)


@router.post("/technologies.remove", status_code=204)
async def remove_technology(request: Request, technologies: TechnologiesService = Technologies) -> Response:
    form = await request.form()
    await technologies.remove(require_form(form, "id"))
    return Response(status_code=204)
