"""Creator dashboard: project CRUD gated by ownership and collaboration."""

import uuid

import pytest


@pytest.mark.asyncio
async def test_create_and_list_own_projects(client, make_creator, creator_headers):
    creator = await make_creator()
    headers = creator_headers(creator)

    created = await client.post(
        "/creator/projects",
        json={"title": "Pixel Garden", "tech_stack": ["python", "fastapi"]},
        headers=headers,
    )
    listing = await client.get("/creator/projects", headers=headers)

    assert created.status_code == 201
    assert created.json()["creator_id"] == str(creator.id)
    assert [p["title"] for p in listing.json()] == ["Pixel Garden"]


@pytest.mark.asyncio
async def test_creator_id_cannot_be_supplied(client, make_creator, creator_headers):
    creator = await make_creator()

    response = await client.post(
        "/creator/projects",
        json={"title": "x", "creator_id": str(uuid.uuid4())},
        headers=creator_headers(creator),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unauthenticated_mutation_is_401(client, make_creator, make_project):
    owner = await make_creator()
    project = await make_project(owner)

    response = await client.put(f"/creator/projects/{project.id}", json={"title": "x"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_missing_project_is_404(client, make_creator, creator_headers):
    creator = await make_creator()

    response = await client.put(
        f"/creator/projects/{uuid.uuid4()}", json={"title": "x"}, headers=creator_headers(creator),
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_stranger_is_forbidden(client, make_creator, make_project, creator_headers):
    owner = await make_creator()
    stranger = await make_creator()
    project = await make_project(owner)

    response = await client.put(
        f"/creator/projects/{project.id}", json={"title": "x"}, headers=creator_headers(stranger),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_collaborator_lifecycle(
    client, make_creator, make_project, add_collaborator, creator_headers,
):
    owner = await make_creator("A")
    collaborator = await make_creator("B")
    project = await make_project(owner)
    await add_collaborator(project, collaborator)
    as_b = creator_headers(collaborator)

    updated = await client.put(f"/creator/projects/{project.id}", json={"title": "x"}, headers=as_b)
    assert updated.status_code == 200
    assert updated.json()["title"] == "x"
    assert updated.json()["creator_id"] == str(owner.id)

    deleted = await client.delete(f"/creator/projects/{project.id}", headers=as_b)
    assert deleted.status_code == 403

    removed = await client.delete(
        f"/creator/projects/{project.id}/collaborators/{collaborator.id}",
        headers=creator_headers(owner),
    )
    assert removed.status_code == 200

    again = await client.put(f"/creator/projects/{project.id}", json={"title": "y"}, headers=as_b)
    assert again.status_code == 403


@pytest.mark.asyncio
async def test_collaborator_sees_shared_project(
    client, make_creator, make_project, add_collaborator, creator_headers,
):
    owner = await make_creator()
    collaborator = await make_creator()
    project = await make_project(owner, "Shared")
    await add_collaborator(project, collaborator)

    listing = await client.get("/creator/projects", headers=creator_headers(collaborator))
    single = await client.get(f"/creator/projects/{project.id}", headers=creator_headers(collaborator))

    assert [p["title"] for p in listing.json()] == ["Shared"]
    assert single.status_code == 200


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(client, make_creator, make_project, creator_headers):
    owner = await make_creator()
    project = await make_project(owner, "Keep", description="original", category="web")

    response = await client.put(
        f"/creator/projects/{project.id}",
        json={"description": "changed"},
        headers=creator_headers(owner),
    )

    body = response.json()
    assert body["title"] == "Keep"
    assert body["category"] == "web"
    assert body["description"] == "changed"


@pytest.mark.asyncio
async def test_owner_deletes_project(client, make_creator, make_project, add_collaborator, creator_headers):
    owner = await make_creator()
    collaborator = await make_creator()
    project = await make_project(owner)
    await add_collaborator(project, collaborator)

    deleted = await client.delete(f"/creator/projects/{project.id}", headers=creator_headers(owner))
    lookup = await client.get(f"/projects/{project.id}")

    assert deleted.status_code == 200
    assert lookup.status_code == 404


@pytest.mark.asyncio
async def test_accept_terms_is_owner_only(
    client, make_creator, make_project, add_collaborator, creator_headers,
):
    owner = await make_creator()
    collaborator = await make_creator()
    project = await make_project(owner)
    await add_collaborator(project, collaborator)

    denied = await client.post(
        f"/creator/projects/{project.id}/accept-terms", headers=creator_headers(collaborator),
    )
    accepted = await client.post(
        f"/creator/projects/{project.id}/accept-terms", headers=creator_headers(owner),
    )

    assert denied.status_code == 403
    assert accepted.status_code == 200
    assert accepted.json()["terms_accepted_at"] is not None


class TestCollaboratorManagement:
    @pytest.mark.asyncio
    async def test_owner_lists_collaborators(
        self, client, make_creator, make_project, add_collaborator, creator_headers,
    ):
        owner = await make_creator()
        collaborator = await make_creator("Bea")
        project = await make_project(owner)
        await add_collaborator(project, collaborator)

        response = await client.get(
            f"/creator/projects/{project.id}/collaborators", headers=creator_headers(owner),
        )

        assert response.status_code == 200
        assert [(c["creator_id"], c["name"]) for c in response.json()] == [
            (str(collaborator.id), "Bea")
        ]

    @pytest.mark.asyncio
    async def test_collaborator_cannot_manage_list(
        self, client, make_creator, make_project, add_collaborator, creator_headers,
    ):
        owner = await make_creator()
        collaborator = await make_creator()
        project = await make_project(owner)
        await add_collaborator(project, collaborator)

        response = await client.get(
            f"/creator/projects/{project.id}/collaborators", headers=creator_headers(collaborator),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_primary_owner_cannot_be_removed(
        self, client, make_creator, make_project, creator_headers,
    ):
        owner = await make_creator()
        project = await make_project(owner)

        response = await client.delete(
            f"/creator/projects/{project.id}/collaborators/{owner.id}",
            headers=creator_headers(owner),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_removing_unknown_collaborator_is_404(
        self, client, make_creator, make_project, creator_headers,
    ):
        owner = await make_creator()
        project = await make_project(owner)

        response = await client.delete(
            f"/creator/projects/{project.id}/collaborators/{uuid.uuid4()}",
            headers=creator_headers(owner),
        )

        assert response.status_code == 404


class TestInvites:
    @pytest.mark.asyncio
    async def test_invite_accept_grants_edit(self, client, make_creator, make_project, creator_headers):
        owner = await make_creator()
        invitee = await make_creator(email="bea@example.com")
        project = await make_project(owner, "Invite me")

        sent = await client.post(
            f"/creator/projects/{project.id}/invite",
            json={"email": "bea@example.com"},
            headers=creator_headers(owner),
        )
        assert sent.status_code == 201

        pending = await client.get("/creator/invites", headers=creator_headers(invitee))
        assert [i["project_title"] for i in pending.json()] == ["Invite me"]

        invite_id = sent.json()["id"]
        accepted = await client.post(
            f"/creator/invites/{invite_id}/respond",
            json={"action": "accept"},
            headers=creator_headers(invitee),
        )
        assert accepted.status_code == 200
        assert accepted.json()["status"] == "accepted"

        updated = await client.put(
            f"/creator/projects/{project.id}", json={"title": "x"}, headers=creator_headers(invitee),
        )
        assert updated.status_code == 200

    @pytest.mark.asyncio
    async def test_reject_does_not_grant_access(self, client, make_creator, make_project, creator_headers):
        owner = await make_creator()
        invitee = await make_creator(email="cai@example.com")
        project = await make_project(owner)

        sent = await client.post(
            f"/creator/projects/{project.id}/invite",
            json={"email": "cai@example.com"},
            headers=creator_headers(owner),
        )
        await client.post(
            f"/creator/invites/{sent.json()['id']}/respond",
            json={"action": "reject"},
            headers=creator_headers(invitee),
        )
        response = await client.put(
            f"/creator/projects/{project.id}", json={"title": "x"}, headers=creator_headers(invitee),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_cannot_invite_owner(self, client, make_creator, make_project, creator_headers):
        owner = await make_creator(email="own@example.com")
        project = await make_project(owner)

        response = await client.post(
            f"/creator/projects/{project.id}/invite",
            json={"email": "own@example.com"},
            headers=creator_headers(owner),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_duplicate_pending_invite_is_400(self, client, make_creator, make_project, creator_headers):
        owner = await make_creator()
        await make_creator(email="dee@example.com")
        project = await make_project(owner)
        url = f"/creator/projects/{project.id}/invite"

        first = await client.post(url, json={"email": "dee@example.com"}, headers=creator_headers(owner))
        second = await client.post(url, json={"email": "dee@example.com"}, headers=creator_headers(owner))

        assert first.status_code == 201
        assert second.status_code == 400

    @pytest.mark.asyncio
    async def test_only_receiver_can_respond(self, client, make_creator, make_project, creator_headers):
        owner = await make_creator()
        await make_creator(email="eve@example.com")
        project = await make_project(owner)

        sent = await client.post(
            f"/creator/projects/{project.id}/invite",
            json={"email": "eve@example.com"},
            headers=creator_headers(owner),
        )
        response = await client.post(
            f"/creator/invites/{sent.json()['id']}/respond",
            json={"action": "accept"},
            headers=creator_headers(owner),
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_collaborator_cannot_invite(
        self, client, make_creator, make_project, add_collaborator, creator_headers,
    ):
        owner = await make_creator()
        collaborator = await make_creator()
        await make_creator(email="fay@example.com")
        project = await make_project(owner)
        await add_collaborator(project, collaborator)

        response = await client.post(
            f"/creator/projects/{project.id}/invite",
            json={"email": "fay@example.com"},
            headers=creator_headers(collaborator),
        )

        assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["title", "description", "tech_stack"])
async def test_null_for_required_field_is_400(
    client, make_creator, make_project, add_collaborator, creator_headers, field,
):
    owner = await make_creator()
    collaborator = await make_creator()
    project = await make_project(owner, "Intact", tech_stack=["python"])
    await add_collaborator(project, collaborator)

    response = await client.put(
        f"/creator/projects/{project.id}",
        json={field: None},
        headers=creator_headers(collaborator),
    )
    listing = await client.get("/projects")

    assert response.status_code == 400
    assert listing.status_code == 200
    assert listing.json()[0]["title"] == "Intact"
    assert listing.json()[0]["tech_stack"] == ["python"]


@pytest.mark.asyncio
async def test_nullable_fields_can_be_cleared(client, make_creator, make_project, creator_headers):
    owner = await make_creator()
    project = await make_project(owner, category="web", external_link="https://example.com")

    response = await client.put(
        f"/creator/projects/{project.id}",
        json={"category": None, "external_link": None},
        headers=creator_headers(owner),
    )

    assert response.status_code == 200
    assert response.json()["category"] is None
    assert response.json()["external_link"] is None
