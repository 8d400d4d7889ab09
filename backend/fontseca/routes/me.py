"""
fontseca.dev Backend — Profile Routes
=======================================

What:  Read and update the site owner's profile.
How:   Single-member setters take URL-encoded forms; /me.set takes a JSON
       MeUpdate body. An update that changes nothing answers 303 See Other
       pointing at /me.info.
"""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from fontseca.binding import bind_json_body, parse_bool
from fontseca.config import settings
from fontseca.exceptions import Problem
from fontseca.models.me import Me
from fontseca.schemas.me import MeUpdate
from fontseca.services import provide
from fontseca.services.interfaces import MeService

router = APIRouter(tags=["Me"])

Profile = Depends(provide("me"))


def _changed(updated: bool) -> Response:
    if updated:
        return Response(status_code=204)
    return RedirectResponse("/me.info", status_code=303)


@router.get("/me.info", response_model=Me)
async def get_me(me: MeService = Profile):
    return await me.get()


@router.post("/me.setPhoto")
async def set_photo(request: Request, me: MeService = Profile) -> Response:
    form = await request.form()
    photo_url = str(form.get("photo_url", ""))
    return _changed(await me.update(MeUpdate(photo_url=photo_url)))


@router.post("/me.setResume")
async def set_resume(request: Request, me: MeService = Profile) -> Response:
    form = await request.form()
    resume_url = str(form.get("resume_url", ""))
    return _changed(await me.update(MeUpdate(resume_url=resume_url)))


@router.post("/me.setHireable")
async def set_hireable(request: Request, me: MeService = Profile) -> Response:
    form = await request.form()
    raw = str(form.get("hireable", "false")).strip()
    try:
        hireable = parse_bool(raw, "hireable")
    except Problem:
        p = Problem(
            status=422,
            title="Failure when parsing boolean value.",
            detail=(
                "Failed to parse the provided value as a boolean. Please ensure the "
                "value is either 'true' or 'false'."
            ),
        )
        p.add_extension("value", raw)
        raise p from None

    return _changed(await me.update(MeUpdate(hireable=hireable)))


@router.post("/me.set")
async def set_me(request: Request, me: MeService = Profile) -> Response:
    update = await bind_json_body(request, MeUpdate, settings.max_body_size)
    return _changed(await me.update(update))
