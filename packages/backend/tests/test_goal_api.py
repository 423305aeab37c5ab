"""Goal API tests."""

import pytest

from conftest import signup_and_login


@pytest.mark.asyncio
async def test_goal_requires_auth(client):
    assert (await client.get("/goal")).status_code == 401
    assert (await client.put("/goal", json={"goal": 180})).status_code == 401


@pytest.mark.asyncio
async def test_default_goal(client, auth_headers):
    r = await client.get("/goal", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"goal": 170}


@pytest.mark.asyncio
async def test_signup_login_set_get_goal(client):
    """signup a@x.com/p1 → login → set 180 → read 180."""
    _, headers = await signup_and_login(client, email="a@x.com", password="p1")

    r = await client.put("/goal", json={"goal": 180}, headers=headers)
    assert r.status_code == 200
    assert r.json() == {"goal": 180}

    r = await client.get("/goal", headers=headers)
    assert r.json() == {"goal": 180}


@pytest.mark.asyncio
async def test_goal_post_alias(client, auth_headers):
    r = await client.post("/goal", json={"goal": 165.5}, headers=auth_headers)
    assert r.status_code == 200
    assert (await client.get("/goal", headers=auth_headers)).json() == {"goal": 165.5}


@pytest.mark.asyncio
async def test_goals_are_per_user(client):
    _, a = await signup_and_login(client, email="a@x.com")
    _, b = await signup_and_login(client, email="b@x.com")
    await client.put("/goal", json={"goal": 150}, headers=a)
    assert (await client.get("/goal", headers=b)).json() == {"goal": 170}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"goal": "abc"}, {"goal": "180"}, {"goal": True}, {"goal": None}, {}])
async def test_goal_rejects_non_numeric(client, auth_headers, body):
    r = await client.put("/goal", json=body, headers=auth_headers)
    assert r.status_code == 422
    assert r.json()["code"] == "validation_error"
    assert (await client.get("/goal", headers=auth_headers)).json() == {"goal": 170}


@pytest.mark.asyncio
async def test_goal_keeps_json_number_type(client, auth_headers):
    """Integers come back as integers, floats as floats."""
    r = await client.get("/goal", headers=auth_headers)
    assert r.text == '{"goal":170}'

    r = await client.put("/goal", json={"goal": 180}, headers=auth_headers)
    assert r.text == '{"goal":180}'
    assert r.text == (await client.get("/goal", headers=auth_headers)).text

    r = await client.put("/goal", json={"goal": 172.5}, headers=auth_headers)
    assert r.text == '{"goal":172.5}'

    r = await client.get("/auth/me", headers=auth_headers)
    assert isinstance(r.json()["goal"], float)
