"""
fontseca.dev Backend — Experience Routes
==========================================

What:  Work experience entries shown on the profile.
How:   Same conventions as the project routes: forms keyed by
       `experience_uuid`; an update that changes nothing answers
       303 See Other pointing at the entry.
"""

import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from fontseca.binding import StructValidator, bind_post_form, get_validator, require_form
from fontseca.exceptions import new_internal
from fontseca.models.me import Experience
from fontseca.schemas.me import ExperienceCreation, ExperienceUpdate
from fontseca.services import provide
from fontseca.services.interfaces import ExperienceService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Experience"])

Entries = Depends(provide("experience"))


def _changed(updated: bool, experience_uuid: str) -> Response:
    if updated:
        return Response(status_code=204)
    return RedirectResponse(
        f"/me.experience.info?experience_uuid={experience_uuid}", status_code=303
    )


@router.get("/me.experience.list", response_model=List[Experience])
async def list_experience(experience: ExperienceService = Entries):
    return await experience.get()


@router.get("/me.experience.hidden.list", response_model=List[Experience])
async def list_hidden_experience(experience: ExperienceService = Entries):
    return await experience.get(hidden=True)


@router.get("/me.experience.info", response_model=Experience)
async def get_experience(experience_uuid: str = "", experience: ExperienceService = Entries):
    return await experience.get_by_id(experience_uuid)


@router.post("/me.experience.add", status_code=201)
async def add_experience(
    request: Request,
    experience: ExperienceService = Entries,
    validator: StructValidator = Depends(get_validator),
) -> Response:
    creation = ExperienceCreation.model_construct()
    bind_post_form(await request.form(), creation)
    validator.validate(creation)

    if not await experience.save(creation):
        logger.error("Experience entry %r was not saved", creation.job_title)
        raise new_internal()
    return Response(status_code=201)


@router.post("/me.experience.set")
async def set_experience(
    request: Request,
    experience: ExperienceService = Entries,
    validator: StructValidator = Depends(get_validator),
) -> Response:
    form = await request.form()
    experience_uuid = require_form(form, "experience_uuid")

    update = ExperienceUpdate.model_construct()
    bind_post_form(form, update)
    validator.validate(update)

    return _changed(await experience.update(experience_uuid, update), experience_uuid)


@router.post("/me.experience.hide")
async def hide_experience(request: Request, experience: ExperienceService = Entries) -> Response:
    form = await request.form()
    experience_uuid = require_form(form, "experience_uuid")
    updated = await experience.update(experience_uuid, ExperienceUpdate(hidden=True))
    return _changed(updated, experience_uuid)


@router.post("/me.experience.show")
async def show_experience(request: Request, experience: ExperienceService = Entries) -> Response:
    form = await request.form()
    experience_uuid = require_form(form, "experience_uuid")
    updated = await experience.update(experience_uuid, ExperienceUpdate(hidden=False))
    return _changed(updated, experience_uuid)


@router.post("/me.experience.quit")
async def quit_experience(request: Request, experience: ExperienceService = Entries) -> Response:
    form = await request.form()
    experience_uuid = require_form(form, "experience_uuid")
    update = ExperienceUpdate(active=False, ends=datetime.now().year)
    return _changed(await experience.update(experience_uuid, update), experience_uuid)


@router.post("/me.experience.remove", status_code=204)
async def remove_experience(request: Request, experience: ExperienceService = Entries) -> Response:
    form = await request.form()
    await experience.remove(require_form(form, "experience_uuid"))
    return Response(status_code=204)
