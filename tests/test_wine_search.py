# tests/test_wine_search.py
import httpx
import pytest
from httpx import AsyncClient

from app.core.security import create_local_token

pytestmark = pytest.mark.asyncio

URL = "/searchWineImage"


async def test_returns_first_image(client: AsyncClient, settings, auth_headers, fake_search):
    r = await client.post(URL, json={"query": "Barolo Riserva", "type": "red"}, headers=auth_headers)
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True, "imageUrl": "https://img.example.com/bottle.jpg"}
    (search_query, _), _ = fake_search.calls[0]
    assert search_query == "Barolo Riserva red wine bottle"


@pytest.mark.parametrize(
    "wine_type, suffix",
    [
        ("rosé", "rosé wine bottle"),
        ("sparkling", "sparkling wine champagne bottle"),
        ("dessert", "dessert wine bottle"),
        ("orange", "orange wine bottle"),
        ("", "Sancerre wine bottle"),
        (None, "Sancerre wine bottle"),
    ],
)
async def test_query_uses_type_keyword(client: AsyncClient, settings, auth_headers, fake_search, wine_type, suffix):
    body = {"query": "Sancerre"}
    if wine_type is not None:
        body["type"] = wine_type
    r = await client.post(URL, json=body, headers=auth_headers)
    assert r.status_code == 200
    (search_query, _), _ = fake_search.calls[0]
    assert search_query.endswith(suffix)


async def test_no_results_is_soft_null(client: AsyncClient, settings, auth_headers, fake_search):
    fake_search.result = None
    r = await client.post(URL, json={"query": "Unknown Cuvée"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "imageUrl": None, "message": "No images found"}


@pytest.mark.parametrize("missing", ["GOOGLE_API_KEY", "GOOGLE_CX"])
async def test_not_configured_soft_degrades_without_network(client: AsyncClient, use_settings, fake_search, missing):
    s = use_settings(**{missing: ""})
    headers = {"Authorization": f"Bearer {create_local_token(s, 'user-1')}"}
    r = await client.post(URL, json={"query": "Barolo"}, headers=headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "imageUrl": None, "message": "Google Image Search not configured"}
    assert fake_search.calls == []


@pytest.mark.parametrize("body", [{}, {"query": ""}, {"type": "red"}, None])
async def test_missing_query_is_400(client: AsyncClient, settings, auth_headers, fake_search, body):
    if body is None:
        r = await client.post(URL, headers=auth_headers)
    else:
        r = await client.post(URL, json=body, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "No search query provided"}
    assert fake_search.calls == []


async def test_upstream_failure_is_500_with_message(client: AsyncClient, settings, auth_headers, fake_search):
    fake_search.exc = httpx.ConnectError("connection refused")
    r = await client.post(URL, json={"query": "Barolo"}, headers=auth_headers)
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to search images", "message": "connection refused"}
