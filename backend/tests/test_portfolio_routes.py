"""
fontseca.dev Backend — Profile & Portfolio Route Tests
========================================================

What:  HTTP-level tests for the me, experience, projects and technologies
       routes, with every service mocked.

What we test:
    ✅ Updates that change nothing answer 303 See Other or 409 Conflict
    ✅ The JSON profile update maps every body failure to its problem
    ✅ Boolean form values are parsed strictly
"""

from datetime import datetime
from uuid import UUID

import pytest

from fontseca.models.me import Experience
from fontseca.models.projects import Project, TechnologyTag
from fontseca.schemas.me import ExperienceCreation, ExperienceUpdate, MeUpdate
from fontseca.schemas.projects import ProjectUpdate

JSON = {"Content-Type": "application/json"}


class TestMe:
    @pytest.mark.asyncio
    async def test_info(self, client, services, sample_me):
        services.me.get.return_value = sample_me

        response = await client.get("/me.info")

        assert response.status_code == 200
        assert response.json()["username"] == "fontseca"

    @pytest.mark.asyncio
    async def test_set_photo(self, client, services):
        services.me.update.return_value = True

        response = await client.post("/me.setPhoto", data={"photo_url": "https://img.example/me.png"})

        assert response.status_code == 204
        services.me.update.assert_awaited_once_with(MeUpdate(photo_url="https://img.example/me.png"))

    @pytest.mark.asyncio
    async def test_unchanged_profile_redirects(self, client, services):
        services.me.update.return_value = False

        response = await client.post("/me.setResume", data={"resume_url": "https://cv.example"})

        assert response.status_code == 303
        assert response.headers["location"] == "/me.info"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value,expected", [("true", True), ("F", False), ("1", True)])
    async def test_set_hireable(self, client, services, value, expected):
        services.me.update.return_value = True

        response = await client.post("/me.setHireable", data={"hireable": value})

        assert response.status_code == 204
        services.me.update.assert_awaited_once_with(MeUpdate(hireable=expected))

    @pytest.mark.asyncio
    async def test_set_hireable_defaults_to_false(self, client, services):
        services.me.update.return_value = True

        response = await client.post("/me.setHireable")

        assert response.status_code == 204
        services.me.update.assert_awaited_once_with(MeUpdate(hireable=False))

    @pytest.mark.asyncio
    async def test_set_hireable_with_bad_value(self, client, services):
        response = await client.post("/me.setHireable", data={"hireable": "yes"})

        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Failure when parsing boolean value."
        assert body["value"] == "yes"
        services.me.update.assert_not_awaited()


class TestMeJSONUpdate:
    """POST /me.set with a JSON MeUpdate body."""

    @pytest.mark.asyncio
    async def test_updates_profile(self, client, services):
        services.me.update.return_value = True

        response = await client.post("/me.set", json={"summary": "Hi", "hireable": True})

        assert response.status_code == 204
        services.me.update.assert_awaited_once_with(MeUpdate(summary="Hi", hireable=True))

    @pytest.mark.asyncio
    async def test_unchanged_redirects(self, client, services):
        services.me.update.return_value = False
        response = await client.post("/me.set", json={"summary": "Hi"})
        assert response.status_code == 303

    @pytest.mark.asyncio
    async def test_null_body_binds_zero_update(self, client, services):
        services.me.update.return_value = True

        response = await client.post("/me.set", content=b"null", headers=JSON)

        assert response.status_code == 204
        services.me.update.assert_awaited_once_with(MeUpdate())

    @pytest.mark.asyncio
    async def test_empty_body(self, client, services):
        response = await client.post("/me.set", content=b"", headers=JSON)

        assert response.status_code == 400
        assert response.json()["title"] == "Empty request body."

    @pytest.mark.asyncio
    async def test_truncated_json(self, client, services):
        response = await client.post("/me.set", content=b'{"summary": "x"', headers=JSON)

        assert response.status_code == 400
        assert response.json()["title"] == "Ill-formed JSON in request body."

    @pytest.mark.asyncio
    async def test_malformed_json(self, client, services):
        response = await client.post("/me.set", content=b'{"summary": x}', headers=JSON)

        assert response.status_code == 400
        body = response.json()
        assert body["title"] == "Malformed JSON in request body."
        assert body["position"] == 12
        assert body["error"] == "Expecting value"

    @pytest.mark.asyncio
    async def test_unexpected_field(self, client, services):
        response = await client.post("/me.set", json={"nickname": "fon"})

        assert response.status_code == 400
        body = response.json()
        assert body["title"] == "Unexpected field in request body."
        assert body["unexpected"] == "nickname"

    @pytest.mark.asyncio
    async def test_wrong_value_type(self, client, services):
        response = await client.post("/me.set", json={"hireable": "yes"})

        assert response.status_code == 400
        body = response.json()
        assert body["title"] == "Invalid value type in request body."
        assert body["property"] == "hireable"
        assert body["has_type"] == "string"
        assert body["wants_type"] == "bool"

    @pytest.mark.asyncio
    async def test_rule_violation(self, client, services):
        response = await client.post("/me.set", json={"job_title": "x" * 65})

        assert response.status_code == 422
        body = response.json()
        assert body["title"] == "Invalid HTTP request body."
        assert body["errors"] == [{"field": "job_title", "criterion": "max", "parameter": "64"}]
        services.me.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_body_too_large(self, client, services):
        content = b'{"summary": "' + b"x" * (1 << 20) + b'"}'

        response = await client.post("/me.set", content=content, headers=JSON)

        assert response.status_code == 413
        assert response.json()["title"] == "Request body too large."


@pytest.fixture
def sample_experience(now):
    return Experience(
        uuid=UUID(int=7),
        starts=2020,
        job_title="Backend Developer",
        company="Acme",
        country="Nicaragua",
        summary="APIs.",
        active=True,
        created_at=now,
        updated_at=now,
    )


class TestExperience:
    @pytest.mark.asyncio
    async def test_list(self, client, services, sample_experience):
        services.experience.get.return_value = [sample_experience]

        response = await client.get("/me.experience.list")

        assert response.status_code == 200
        assert response.json()[0]["company"] == "Acme"
        services.experience.get.assert_awaited_once_with()

    @pytest.mark.asyncio
    async def test_hidden_list(self, client, services):
        services.experience.get.return_value = []
        await client.get("/me.experience.hidden.list")
        services.experience.get.assert_awaited_once_with(hidden=True)

    @pytest.mark.asyncio
    async def test_info(self, client, services, sample_experience):
        services.experience.get_by_id.return_value = sample_experience
        response = await client.get("/me.experience.info", params={"experience_uuid": "e1"})
        assert response.status_code == 200
        services.experience.get_by_id.assert_awaited_once_with("e1")

    @pytest.mark.asyncio
    async def test_add(self, client, services):
        services.experience.save.return_value = True
        form = {
            "starts": "2020",
            "job_title": "Backend Developer",
            "company": "Acme",
            "country": "Nicaragua",
            "summary": "APIs.",
        }

        response = await client.post("/me.experience.add", data=form)

        assert response.status_code == 201
        (creation,), _ = services.experience.save.await_args
        assert isinstance(creation, ExperienceCreation)
        assert creation.starts == 2020

    @pytest.mark.asyncio
    async def test_add_too_early(self, client, services):
        form = {"starts": "2017", "job_title": "x", "company": "x", "country": "x", "summary": "x"}

        response = await client.post("/me.experience.add", data=form)

        assert response.status_code == 422
        assert response.json()["errors"] == [
            {"field": "starts", "criterion": "gt", "parameter": "2017"}
        ]

    @pytest.mark.asyncio
    async def test_add_not_saved(self, client, services):
        services.experience.save.return_value = False
        form = {"starts": "2020", "job_title": "x", "company": "x", "country": "x", "summary": "x"}

        response = await client.post("/me.experience.add", data=form)

        assert response.status_code == 500
        assert response.json()["title"] == "Internal Server Error."

    @pytest.mark.asyncio
    async def test_add_with_unparsable_year(self, client, services):
        response = await client.post("/me.experience.add", data={"starts": "twenty"})

        assert response.status_code == 400
        body = response.json()
        assert body["field"] == "starts"
        assert body["target_type"] == "int"

    @pytest.mark.asyncio
    async def test_set(self, client, services):
        services.experience.update.return_value = True

        response = await client.post(
            "/me.experience.set", data={"experience_uuid": "e1", "company": "Initech"}
        )

        assert response.status_code == 204
        services.experience.update.assert_awaited_once_with(
            "e1", ExperienceUpdate(company="Initech")
        )

    @pytest.mark.asyncio
    async def test_unchanged_redirects_to_entry(self, client, services):
        services.experience.update.return_value = False

        response = await client.post("/me.experience.hide", data={"experience_uuid": "e1"})

        assert response.status_code == 303
        assert response.headers["location"] == "/me.experience.info?experience_uuid=e1"

    @pytest.mark.asyncio
    async def test_show(self, client, services):
        services.experience.update.return_value = True
        response = await client.post("/me.experience.show", data={"experience_uuid": "e1"})
        assert response.status_code == 204
        services.experience.update.assert_awaited_once_with("e1", ExperienceUpdate(hidden=False))

    @pytest.mark.asyncio
    async def test_quit_ends_this_year(self, client, services):
        services.experience.update.return_value = True

        response = await client.post("/me.experience.quit", data={"experience_uuid": "e1"})

        assert response.status_code == 204
        _, update = services.experience.update.await_args.args
        assert update.active is False
        assert update.ends == datetime.now().year

    @pytest.mark.asyncio
    async def test_remove(self, client, services):
        response = await client.post("/me.experience.remove", data={"experience_uuid": "e1"})
        assert response.status_code == 204
        services.experience.remove.assert_awaited_once_with("e1")


@pytest.fixture
def sample_project(now):
    return Project(id=UUID(int=3), name="problem", slug="problem", created_at=now, updated_at=now)


class TestProjects:
    @pytest.mark.asyncio
    async def test_lists(self, client, services, sample_project):
        services.projects.list.return_value = [sample_project]

        assert (await client.get("/me.projects.list")).json()[0]["name"] == "problem"
        await client.get("/me.projects.archived.list")

        assert services.projects.list.await_args_list[0].kwargs == {}
        assert services.projects.list.await_args_list[1].kwargs == {"archived": True}

    @pytest.mark.asyncio
    async def test_info(self, client, services, sample_project):
        services.projects.get.return_value = sample_project
        response = await client.get("/me.projects.info", params={"project_uuid": "p1"})
        assert response.json()["slug"] == "problem"

    @pytest.mark.asyncio
    async def test_add(self, client, services):
        services.projects.create.return_value = "a3c6a6c1"

        response = await client.post(
            "/me.projects.add", data={"name": "problem", "estimated_time": "12", "playable": "t"}
        )

        assert response.status_code == 201
        assert response.json() == {"inserted_id": "a3c6a6c1"}
        (creation,), _ = services.projects.create.await_args
        assert creation.estimated_time == 12
        assert creation.playable is True

    @pytest.mark.asyncio
    async def test_add_without_name(self, client, services):
        response = await client.post("/me.projects.add", data={"language": "Go"})

        assert response.status_code == 422
        assert response.json()["errors"] == [{"field": "name", "criterion": "required"}]

    @pytest.mark.asyncio
    async def test_set_unchanged_redirects(self, client, services):
        services.projects.update.return_value = False

        response = await client.post("/me.projects.set", data={"project_uuid": "p1", "name": "x"})

        assert response.status_code == 303
        assert response.headers["location"] == "/me.projects.info?project_uuid=p1"

    @pytest.mark.asyncio
    async def test_archive_always_succeeds(self, client, services):
        services.projects.update.return_value = False

        response = await client.post("/me.projects.archive", data={"project_uuid": "p1"})

        assert response.status_code == 204
        services.projects.update.assert_awaited_once_with("p1", ProjectUpdate(archived=True))

    @pytest.mark.asyncio
    async def test_unarchive(self, client, services):
        services.projects.unarchive.return_value = True
        response = await client.post("/me.projects.unarchive", data={"project_uuid": "p1"})
        assert response.status_code == 204

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action,finished", [("finish", True), ("unfinish", False)])
    async def test_finish(self, client, services, action, finished):
        services.projects.update.return_value = True

        response = await client.post(f"/me.projects.{action}", data={"project_uuid": "p1"})

        assert response.status_code == 204
        services.projects.update.assert_awaited_once_with("p1", ProjectUpdate(finished=finished))

    @pytest.mark.asyncio
    async def test_remove(self, client, services):
        response = await client.post("/me.projects.remove", data={"project_uuid": "p1"})
        assert response.status_code == 204

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "endpoint,member",
        [
            ("setPlaygroundURL", "playground_url"),
            ("setFirstImageURL", "first_image_url"),
            ("setSecondImageURL", "second_image_url"),
            ("setGitHubURL", "github_url"),
            ("setCollectionURL", "collection_url"),
        ],
    )
    async def test_url_setters(self, client, services, endpoint, member):
        services.projects.update.return_value = True
        form = {"project_uuid": "p1", "url": "https://example.com"}

        response = await client.post(f"/me.projects.{endpoint}", data=form)

        assert response.status_code == 204
        services.projects.update.assert_awaited_once_with(
            "p1", ProjectUpdate(**{member: "https://example.com"})
        )

    @pytest.mark.asyncio
    async def test_url_setter_conflict(self, client, services):
        services.projects.update.return_value = False

        response = await client.post(
            "/me.projects.setGitHubURL", data={"project_uuid": "p1", "url": "https://github.com"}
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_url_setter_requires_url(self, client, services):
        response = await client.post("/me.projects.setGitHubURL", data={"project_uuid": "p1"})
        assert response.status_code == 400
        assert response.json()["parameter"] == "url"

    @pytest.mark.asyncio
    async def test_technologies(self, client, services):
        services.projects.add_tag.return_value = True
        services.projects.remove_tag.return_value = False
        form = {"project_uuid": "p1", "technology_id": "t1"}

        assert (await client.post("/me.projects.technologies.add", data=form)).status_code == 204
        assert (await client.post("/me.projects.technologies.remove", data=form)).status_code == 409


class TestTechnologies:
    @pytest.mark.asyncio
    async def test_list(self, client, services, now):
        services.technologies.get.return_value = [
            TechnologyTag(id=UUID(int=9), name="Go", created_at=now, updated_at=now)
        ]
        response = await client.get("/technologies.list")
        assert response.json()[0]["name"] == "Go"

    @pytest.mark.asyncio
    async def test_add(self, client, services):
        services.technologies.add.return_value = "t1"

        response = await client.post("/technologies.add", data={"name": "Go"})

        assert response.status_code == 201
        assert response.json() == {"inserted_id": "t1"}

    @pytest.mark.asyncio
    async def test_add_without_name(self, client, services):
        response = await client.post("/technologies.add", data={"name": "  "})
        assert response.status_code == 422

    @pytest.mark.asyncio
    @pytest.mark.parametrize("updated,status", [(True, 204), (False, 409)])
    async def test_set(self, client, services, updated, status):
        services.technologies.update.return_value = updated
        response = await client.post("/technologies.set", data={"id": "t1", "name": "Golang"})
        assert response.status_code == status

    @pytest.mark.asyncio
    async def test_remove_requires_id(self, client, services):
        response = await client.post("/technologies.remove")
        assert response.status_code == 400
        assert response.json()["parameter"] == "id"
