"""Tests for the health route and static UI serving."""

import pytest

from secretvault.config import DEFAULT_FRONTEND_DIR


@pytest.mark.asyncio
async def test_health_ok(test_client, credential_payload):
    await test_client.post("/api/secrets", json=credential_payload)
    r = await test_client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "secrets": 1}


@pytest.mark.asyncio
async def test_root_serves_index(test_client):
    r = await test_client.get("/")
    assert r.status_code == 200
    assert "vault ui" in r.text
    assert r.headers["content-type"].startswith("text/html")


@pytest.mark.asyncio
async def test_static_asset(test_client):
    r = await test_client.get("/main.js")
    assert r.status_code == 200
    assert "console.log" in r.text
    assert "javascript" in r.headers["content-type"]


@pytest.mark.asyncio
async def test_unknown_path_falls_back_to_index(test_client):
    r = await test_client.get("/secrets/some-client-route")
    assert r.status_code == 200
    assert "vault ui" in r.text


@pytest.mark.asyncio
async def test_traversal_forbidden(test_client):
    r = await test_client.get("/%2E%2E/data/vault.json")
    assert r.status_code == 403
    assert r.text == "Forbidden"


@pytest.mark.asyncio
async def test_missing_frontend_dir(test_client, frontend_dir):
    for child in frontend_dir.iterdir():
        child.unlink()
    r = await test_client.get("/")
    assert r.status_code == 404


def test_packaged_frontend_present():
    assert (DEFAULT_FRONTEND_DIR / "index.html").is_file()
    assert (DEFAULT_FRONTEND_DIR / "main.js").is_file()
