"""
fontseca.dev Backend — Project Routes
=======================================

What:  Portfolio project management.
How:   Mutations are URL-encoded forms keyed by `project_uuid`. ProjectsService
       reports whether anything changed; when it did not, the route answers
       303 See Other (pointing at the project) or, for the URL setters and
       technology tags, 409 Conflict.

Endpoints:
    GET  /me.projects.list, /me.projects.archived.list, /me.projects.info
    POST /me.projects.add                          → 201 {"inserted_id"}
    POST /me.projects.set                          → 204 / 303
    POST /me.projects.{archive,unarchive,finish,unfinish,remove}
    POST /me.projects.set{Playground,FirstImage,SecondImage,GitHub,Collection}URL
                                                   → 204 / 409
    POST /me.projects.technologies.{add,remove}    → 204 / 409
"""

from typing import List, Tuple

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from fontseca.binding import StructValidator, bind_post_form, get_validator, require_form
from fontseca.models.projects import Project
from fontseca.schemas.projects import ProjectCreation, ProjectUpdate
from fontseca.services import provide
from fontseca.services.interfaces import ProjectsService

router = APIRouter(tags=["Projects"])

Projects = Depends(provide("projects"))


def _changed(updated: bool, project_uuid: str) -> Response:
    if updated:
        return Response(status_code=204)
    return RedirectResponse(f"/me.projects.info?project_uuid={project_uuid}", status_code=303)


def _conflict_unless(changed: bool) -> Response:
    return Response(status_code=204 if changed else 409)


# ── Reads ─────────────────────────────────────────────────────────────────

@router.get("/me.projects.list", response_model=List[Project])
async def list_projects(projects: ProjectsService = Projects):
    return await projects.list()


@router.get("/me.projects.archived.list", response_model=List[Project])
async def list_archived_projects(projects: ProjectsService = Projects):
    return await projects.list(archived=True)


@router.get("/me.projects.info", response_model=Project)
async def get_project(project_uuid: str = "", projects: ProjectsService = Projects):
    return await projects.get(project_uuid)


# ── Create & update ───────────────────────────────────────────────────────

@router.post("/me.projects.add", status_code=201)
async def add_project(
    request: Request,
    projects: ProjectsService = Projects,
    validator: StructValidator = Depends(get_validator),
):
    creation = ProjectCreation.model_construct()
    bind_post_form(await request.form(), creation)
    validator.validate(creation)

    inserted_id = await projects.create(creation)
    return {"inserted_id": str(inserted_id)}


@router.post("/me.projects.set")
async def set_project(
    request: Request,
    projects: ProjectsService = Projects,
    validator: StructValidator = Depends(get_validator),
) -> Response:
    form = await request.form()
    project_uuid = require_form(form, "project_uuid")

    update = ProjectUpdate.model_construct()
    bind_post_form(form, update)
    validator.validate(update)

    return _changed(await projects.update(project_uuid, update), project_uuid)


@router.post("/me.projects.archive", status_code=204)
async def archive_project(request: Request, projects: ProjectsService = Projects) -> Response:
    form = await request.form()
    await projects.update(require_form(form, "project_uuid"), ProjectUpdate(archived=True))
    return Response(status_code=204)


@router.post("/me.projects.unarchive")
async def unarchive_project(request: Request, projects: ProjectsService = Projects) -> Response:
    form = await request.form()
    project_uuid = require_form(form, "project_uuid")
    return _changed(await projects.unarchive(project_uuid), project_uuid)


@router.post("/me.projects.finish")
async def finish_project(request: Request, projects: ProjectsService = Projects) -> Response:
    form = await request.form()
    project_uuid = require_form(form, "project_uuid")
    return _changed(await projects.update(project_uuid, ProjectUpdate(finished=True)), project_uuid)


@router.post("/me.projects.unfinish")
async def unfinish_project(request: Request, projects: ProjectsService = Projects) -> Response:
    form = await request.form()
    project_uuid = require_form(form, "project_uuid")
    return _changed(await projects.update(project_uuid, ProjectUpdate(finished=False)), project_uuid)


@router.post("/me.projects.remove", status_code=204)
async def remove_project(request: Request, projects: ProjectsService = Projects) -> Response:
    form = await request.form()
    await projects.remove(require_form(form, "project_uuid"))
    return Response(status_code=204)


# ── URL setters ───────────────────────────────────────────────────────────

async def _id_and_url(request: Request) -> Tuple[str, str]:
    form = await request.form()
    return require_form(form, "project_uuid"), require_form(form, "url")


@router.post("/me.projects.setPlaygroundURL")
async def set_playground_url(request: Request, projects: ProjectsService = Projects) -> Response:
    project_uuid, url = await _id_and_url(request)
    return _conflict_unless(await projects.update(project_uuid, ProjectUpdate(playground_url=url)))


@router.post("/me.projects.setFirstImageURL")
async def set_first_image_url(request: Request, projects: ProjectsService = Projects) -> Response:
    project_uuid, url = await _id_and_url(request)
    return _conflict_unless(await projects.update(project_uuid, ProjectUpdate(first_image_url=url)))


@router.post("/me.projects.setSecondImageURL")
async def set_second_image_url(request: Request, projects: ProjectsService = Projects) -> Response:
    project_uuid, url = await _id_and_url(request)
    return _conflict_unless(await projects.update(project_uuid, ProjectUpdate(second_image_url=url)))


@router.post("/me.projects.setGitHubURL")
async def set_github_url(request: Request, projects: ProjectsService = Projects) -> Response:
    project_uuid, url = await _id_and_url(request)
    return _conflict_unless(await projects.update(project_uuid, ProjectUpdate(github_url=url)))


@router.post("/me.projects.setCollectionURL")
async def set_collection_url(request: Request, projects: ProjectsService = Projects) -> Response:
    project_uuid, url = await _id_and_url(request)
    return _conflict_unless(await projects.update(project_uuid, ProjectUpdate(collection_url=url)))


# ── Technologies ──────────────────────────────────────────────────────────

@router.post("/me.projects.technologies.add")
async def add_project_technology(request: Request, projects: ProjectsService = Projects) -> Response:
    form = await request.form()
    project_uuid = require_form(form, "project_uuid")
    technology_id = require_form(form, "technology_id")
    return _conflict_unless(await projects.add_tag(project_uuid, technology_id))


@router.post("/me.projects.technologies.remove")
async def remove_project_technology(request: Request, projects: ProjectsService = Projects) -> Response:
    form = await request.form()
    project_uuid = require_form(form, "project_uuid")
    technology_id = require_form(form, "technology_id")
    return _conflict_unless(await projects.remove_tag(project_uuid, technology_id))
