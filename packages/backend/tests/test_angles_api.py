"""Angles API tests — auth, ownership isolation, server stamping."""

import pytest

from conftest import signup_and_login


@pytest.mark.asyncio
async def test_angles_require_auth(client):
    assert (await client.get("/angles")).status_code == 401
    assert (await client.post("/angles", json={"angle": 1})).status_code == 401

    bad = {"Authorization": "Bearer nope"}
    assert (await client.get("/angles", headers=bad)).status_code == 403


@pytest.mark.asyncio
async def test_submit_and_list(client, auth_headers):
    r = await client.get("/angles", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == []

    r = await client.post(
        "/angles", json={"angle": 172.5, "side": "left"}, headers=auth_headers
    )
    assert r.status_code == 201
    assert r.json()["message"] == "Data saved successfully."
    record = r.json()["record"]
    assert record["angle"] == 172.5
    assert record["side"] == "left"
    assert "timestamp" in record

    await client.post("/angles", json={"angle": 175}, headers=auth_headers)
    r = await client.get("/angles", headers=auth_headers)
    assert [rec["angle"] for rec in r.json()] == [172.5, 175]


@pytest.mark.asyncio
async def test_users_only_see_their_own_angles(client):
    a_email, a = await signup_and_login(client, email="a@x.com")
    b_email, b = await signup_and_login(client, email="b@x.com")

    await client.post("/angles", json={"angle": 100}, headers=a)
    await client.post("/angles", json={"angle": 200}, headers=b)

    a_list = (await client.get("/angles", headers=a)).json()
    b_list = (await client.get("/angles", headers=b)).json()
    assert [r["angle"] for r in a_list] == [100]
    assert [r["angle"] for r in b_list] == [200]
    assert {r["owner_email"] for r in a_list} == {a_email}
    assert {r["owner_email"] for r in b_list} == {b_email}


@pytest.mark.asyncio
async def test_forged_owner_and_timestamp_are_overwritten(client):
    a_email, a = await signup_and_login(client, email="a@x.com")
    _, b = await signup_and_login(client, email="b@x.com")

    r = await client.post(
        "/angles",
        json={"angle": 1, "owner_email": "b@x.com", "timestamp": "1970-01-01T00:00:00Z"},
        headers=a,
    )
    record = r.json()["record"]
    assert record["owner_email"] == a_email
    assert record["timestamp"] != "1970-01-01T00:00:00Z"
    assert (await client.get("/angles", headers=b)).json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [[1, 2, 3], "text", 5])
async def test_submit_non_object(client, auth_headers, body):
    r = await client.post("/angles", json=body, headers=auth_headers)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_corrupt_store_is_generic_500(client, auth_headers, settings):
    settings.angles_path.parent.mkdir(parents=True, exist_ok=True)
    settings.angles_path.write_text("{{ definitely not json")

    r = await client.get("/angles", headers=auth_headers)
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error", "code": "storage_error"}
