"""End-to-end tests through the FastAPI application."""

from uuid import uuid4

from src.shared.schemas.common import ErrorResponse


async def _create_story(client, headers, title="Billing rewrite"):
    response = await client.post(
        "/stories", json={"template_type": "project", "title": title}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert (await client.get("/ready")).status_code == 200


async def test_protected_routes_require_a_session(client):
    response = await client.get("/profiles")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


async def test_error_shape_is_documented(client, app):
    schema = app.openapi()
    ref = "#/components/schemas/ErrorResponse"

    assert "ErrorResponse" in schema["components"]["schemas"]
    public = schema["paths"]["/p/{token}"]["get"]["responses"]["404"]
    assert public["content"]["application/json"]["schema"]["$ref"] == ref
    profiles = schema["paths"]["/profiles"]["get"]["responses"]
    assert profiles["401"]["content"]["application/json"]["schema"]["$ref"] == ref

    miss = await client.get("/p/ABCDEFGHJKLMNPQR")
    assert ErrorResponse.model_validate(miss.json()).error.code == "NOT_FOUND"


async def test_sign_in_and_me(client, sign_in):
    session = await sign_in(name="Grace Hopper")

    me = await client.get("/auth/me", headers=session["headers"])
    updated = await client.patch("/auth/me", json={"headline": "Rear Admiral"}, headers=session["headers"])

    assert me.json()["name"] == "Grace Hopper"
    assert updated.json()["headline"] == "Rear Admiral"


async def test_sign_out_ends_session(client, sign_in):
    session = await sign_in()

    assert (await client.post("/auth/sign-out", headers=session["headers"])).status_code == 200
    assert (await client.get("/auth/me", headers=session["headers"])).status_code == 401


async def test_templates(client):
    response = await client.get("/templates")

    assert response.status_code == 200
    assert {template["type"] for template in response.json()} == {
        "project",
        "role_highlight",
        "lessons_learned",
    }


async def test_profile_share_flow(client, sign_in):
    owner = await sign_in(name="Ada Lovelace")
    first = await _create_story(client, owner["headers"], "First")
    second = await _create_story(client, owner["headers"], "Second")

    created = await client.post(
        "/profiles",
        json={"name": "Backend work", "story_ids": [second["id"], first["id"]]},
        headers=owner["headers"],
    )
    assert created.status_code == 201, created.text
    profile = created.json()
    assert profile["story_ids"] == [second["id"], first["id"]]

    public = await client.get(f"/p/{profile['share_token']}")
    assert public.status_code == 200
    assert public.headers["cache-control"] == "no-store"
    body = public.json()
    assert body["title"] == "Backend work"
    assert [story["title"] for story in body["stories"]] == ["Second", "First"]
    assert owner["user"]["id"] not in public.text

    toggled = await client.post(
        f"/profiles/{profile['id']}/toggle", json={"is_active": False}, headers=owner["headers"]
    )
    assert toggled.json()["is_active"] is False
    hidden = await client.get(f"/p/{profile['share_token']}")
    assert hidden.status_code == 404
    assert hidden.headers["cache-control"] == "no-store"

    regenerated = await client.post(
        f"/profiles/{profile['id']}/regenerate-token", headers=owner["headers"]
    )
    new_token = regenerated.json()["share_token"]
    assert new_token != profile["share_token"]
    assert (await client.get(f"/p/{profile['share_token']}")).status_code == 404
    assert (await client.get(f"/p/{new_token}")).status_code == 200


async def test_not_found_bodies_are_identical(client, sign_in):
    owner = await sign_in()
    profile = (await client.post("/profiles", json={"name": "Backend"}, headers=owner["headers"])).json()
    await client.post(
        f"/profiles/{profile['id']}/toggle", json={"is_active": False}, headers=owner["headers"]
    )

    bodies = [
        (await client.get(f"/p/{token}")).json()
        for token in ["bad", "ABCDEFGHJKLMNPQR", profile["share_token"]]
    ]

    assert bodies[0] == bodies[1] == bodies[2]


async def test_cross_owner_mutations_are_forbidden(client, sign_in):
    owner = await sign_in(name="Owner")
    attacker = await sign_in(name="Attacker")
    story = await _create_story(client, owner["headers"])
    profile = (
        await client.post(
            "/profiles", json={"name": "Mine", "story_ids": [story["id"]]}, headers=owner["headers"]
        )
    ).json()

    forbidden = await client.put(
        f"/profiles/{profile['id']}/stories", json={"story_ids": []}, headers=attacker["headers"]
    )
    missing = await client.put(
        f"/profiles/{uuid4()}/stories", json={"story_ids": []}, headers=attacker["headers"]
    )
    steal = await client.post(
        "/profiles",
        json={"name": "Stolen", "story_ids": [story["id"]]},
        headers=attacker["headers"],
    )
    impersonate = await client.post(
        "/profiles",
        json={"name": "Fake", "user_id": owner["user"]["id"]},
        headers=attacker["headers"],
    )

    assert forbidden.status_code == 403
    assert forbidden.json() == missing.json()
    assert steal.status_code == 403
    assert impersonate.status_code == 403
    unchanged = await client.get(f"/profiles/{profile['id']}", headers=owner["headers"])
    assert unchanged.json()["story_ids"] == [story["id"]]
    assert (await client.get(f"/profiles/{profile['id']}", headers=attacker["headers"])).status_code == 404


async def test_validation_errors_are_400(client, sign_in):
    owner = await sign_in()

    too_long = await client.post(
        "/stories", json={"template_type": "project", "title": "t" * 201}, headers=owner["headers"]
    )
    missing_field = await client.post("/stories", json={"title": "x"}, headers=owner["headers"])

    assert too_long.status_code == 400
    assert too_long.json()["error"]["details"]["field"] == "title"
    assert missing_field.status_code == 400
    assert missing_field.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_share_link_flow(client, sign_in):
    owner = await sign_in()
    await _create_story(client, owner["headers"], "Only story")

    assert (await client.get("/share-link", headers=owner["headers"])).json() == {"share_link": None}
    created = await client.post("/share-link", json={}, headers=owner["headers"])
    assert created.status_code == 201
    assert (await client.post("/share-link", json={}, headers=owner["headers"])).status_code == 409

    public = await client.get(f"/p/{created.json()['token']}")
    assert [story["title"] for story in public.json()["stories"]] == ["Only story"]


async def test_asset_upload_and_story_delete(client, sign_in, blob_store):
    owner = await sign_in()
    story = await _create_story(client, owner["headers"])

    uploaded = await client.post(
        f"/stories/{story['id']}/assets",
        files={"file": ("diagram.png", b"\x89PNG-data", "image/png")},
        headers=owner["headers"],
    )
    assert uploaded.status_code == 201, uploaded.text
    path = uploaded.json()["path"]
    assert (blob_store.root / path).exists()

    deleted = await client.delete(f"/stories/{story['id']}", headers=owner["headers"])
    assert deleted.status_code == 200
    assert not (blob_store.root / path).exists()
    assert (await client.get(f"/stories/{story['id']}", headers=owner["headers"])).status_code == 404


async def test_public_views_are_counted(client, sign_in, app):
    owner = await sign_in()
    profile = (await client.post("/profiles", json={"name": "Backend"}, headers=owner["headers"])).json()

    await client.get(f"/p/{profile['share_token']}")
    await client.get(f"/p/{profile['share_token']}")
    await app.state.view_counter.drain()

    refreshed = await client.get(f"/profiles/{profile['id']}", headers=owner["headers"])
    assert refreshed.json()["view_count"] == 2
