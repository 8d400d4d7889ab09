"""
fontseca.dev Backend — Topic Routes
=====================================

What:  Manage the topics articles are filed under.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response

from fontseca.binding import StructValidator, bind_post_form, get_validator, require_form
from fontseca.models.archive import Topic
from fontseca.schemas.archive import TopicCreation, TopicUpdate
from fontseca.services import provide
from fontseca.services.interfaces import TopicsService

router = APIRouter(tags=["Topics"])

Topics = Depends(provide("topics"))


@router.post("/archive.topics.add", status_code=201)
async def add_topic(
    request: Request,
    topics: TopicsService = Topics,
    validator: StructValidator = Depends(get_validator),
) -> Response:
    creation = TopicCreation.model_construct()
    bind_post_form(await request.form(), creation)
    validator.validate(creation)

    await topics.add(creation)
    return Response(status_code=201)


@router.get("/archive.topics.list", response_model=List[Topic])
async def list_topics(topics: TopicsService = Topics):
    return await topics.get()


@router.post("/archive.topics.set", status_code=204)
async def set_topic(
    request: Request,
    topics: TopicsService = Topics,
    validator: StructValidator = Depends(get_validator),
) -> Response:
    form = await request.form()
    topic_id = require_form(form, "topic_id")

    update = TopicUpdate.model_construct()
    bind_post_form(form, update)
    validator.validate(update)

    await topics.update(topic_id, update)
    return Response(status_code=204)


@router.post("/archive.topics.remove", status_code=204)
async def remove_topic(request: Request, topics: TopicsService = Topics) -> Response:
    form = await request.form()
    await topics.remove(require_form(form, "topic_id"))
    return Response(status_code=204)
