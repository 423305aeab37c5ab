"""Upload API tests."""

import pytest


@pytest.mark.asyncio
async def test_upload_and_fetch(client, auth_headers):
    r = await client.post(
        "/upload",
        files={"image": ("front.jpg", b"\xff\xd8\xff fake jpeg", "image/jpeg")},
        headers=auth_headers,
    )
    assert r.status_code == 200
    url = r.json()["imageUrl"]
    assert url.startswith("/uploads/")
    assert url.endswith("-front.jpg")

    r = await client.get(url)
    assert r.status_code == 200
    assert r.content == b"\xff\xd8\xff fake jpeg"


@pytest.mark.asyncio
async def test_upload_requires_auth(client, settings):
    r = await client.post(
        "/upload",
        files={"image": ("front.jpg", b"data", "image/jpeg")},
    )
    assert r.status_code == 401
    assert list(settings.upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_upload_disallowed_type(client, auth_headers, settings):
    r = await client.post(
        "/upload",
        files={"image": ("run.sh", b"#!/bin/sh", "text/x-shellscript")},
        headers=auth_headers,
    )
    assert r.status_code == 422
    assert "not allowed" in r.json()["detail"]
    assert list(settings.upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_upload_missing_file(client, auth_headers):
    r = await client.post("/upload", data={"other": "x"}, headers=auth_headers)
    assert r.status_code == 422
    assert r.json()["detail"] == "No file uploaded."
