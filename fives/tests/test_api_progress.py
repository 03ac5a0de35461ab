"""
API tests for the catalog, progress state, onboarding gate and transitions.

Tests the full stack: HTTP request → session header → tagged state →
SQLite persistence → HTTP response, through httpx's ASGITransport.
"""
import pytest
from httpx import AsyncClient

from conftest import SESSION_A, SESSION_B, TODAY, session_headers


# ---------------------------------------------------------------------------
# Catalog and health
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["database"] == "ok"


@pytest.mark.asyncio
async def test_areas_listed_in_sort_order_without_session(client: AsyncClient) -> None:
    response = await client.get("/api/areas")
    assert response.status_code == 200
    areas = response.json()
    assert len(areas) == 6
    assert [a["sort_order"] for a in areas] == sorted(a["sort_order"] for a in areas)
    assert {"id", "name", "display_name", "emoji", "description", "sort_order"} <= set(areas[0])


# ---------------------------------------------------------------------------
# Session header
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_progress_requires_session_header(client: AsyncClient) -> None:
    response = await client.get("/api/progress")
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_new_session_needs_onboarding(client: AsyncClient) -> None:
    response = await client.get("/api/progress", headers=session_headers())
    assert response.status_code == 200
    body = response.json()
    assert body["session_id"] == SESSION_A
    assert body["state"] == "onboarding"
    assert body["needs_onboarding"] is True
    assert body["area"] is None


# ---------------------------------------------------------------------------
# Onboarding gate: every protected endpoint answers 409
# ---------------------------------------------------------------------------

PROTECTED_CALLS = [
    ("GET", "/api/dashboard", None),
    ("GET", "/api/daily", None),
    ("PATCH", "/api/daily/some-id", {"status": "done"}),
    ("GET", "/api/review", None),
    ("PUT", "/api/review", {"what_clearer": "x"}),
    ("GET", "/api/areas/work/s1", None),
    ("POST", "/api/areas/work/s2", {"item_text": "desk"}),
    ("PATCH", "/api/areas/work/s3/some-id", {"action_taken": "x"}),
    ("DELETE", "/api/areas/work/s5/some-id", None),
    ("POST", "/api/progress/advance", None),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("method, path, body", PROTECTED_CALLS)
async def test_protected_endpoints_require_onboarding(
    client: AsyncClient, method: str, path: str, body
) -> None:
    response = await client.request(method, path, json=body, headers=session_headers())
    assert response.status_code == 409, f"{method} {path}: {response.text}"
    error = response.json()["error"]
    assert error["code"] == "ONBOARDING_REQUIRED"
    assert error["details"] == [{"field": "redirect", "issue": "/onboarding"}]


@pytest.mark.asyncio
async def test_area_switch_requires_onboarding(client: AsyncClient, areas) -> None:
    response = await client.patch(
        "/api/progress/area",
        json={"area_id": areas["home"]["id"]},
        headers=session_headers(),
    )
    assert response.status_code == 409


# ---------------------------------------------------------------------------
# Onboarding
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_onboarding_activates_session(client: AsyncClient, areas, onboarded) -> None:
    assert onboarded["state"] == "active"
    assert onboarded["needs_onboarding"] is False
    assert onboarded["current_step"] == "s1"
    assert onboarded["area"]["name"] == "work"

    response = await client.get("/api/progress", headers=session_headers())
    assert response.json() == onboarded


@pytest.mark.asyncio
async def test_onboarding_generates_todays_actions(client: AsyncClient, onboarded) -> None:
    response = await client.get(
        "/api/daily", params={"on": TODAY.isoformat()}, headers=session_headers()
    )
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert all(a["status"] == "pending" for a in body["actions"])


@pytest.mark.asyncio
async def test_onboarding_unknown_area_is_404(client: AsyncClient) -> None:
    response = await client.post(
        "/api/onboarding", json={"area_id": "no-such-area"}, headers=session_headers()
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"

    progress = await client.get("/api/progress", headers=session_headers())
    assert progress.json()["needs_onboarding"] is True


@pytest.mark.asyncio
async def test_onboarding_rejects_unknown_fields(client: AsyncClient, areas) -> None:
    response = await client.post(
        "/api/onboarding",
        json={"area_id": areas["work"]["id"], "step": "s4"},
        headers=session_headers(),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_sessions_are_isolated(client: AsyncClient, onboarded) -> None:
    response = await client.get("/api/progress", headers=session_headers(SESSION_B))
    assert response.json()["needs_onboarding"] is True


# ---------------------------------------------------------------------------
# Area switch and step advance
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_switch_area_keeps_step(client: AsyncClient, areas, onboarded) -> None:
    await client.post("/api/progress/advance", headers=session_headers())

    response = await client.patch(
        "/api/progress/area",
        json={"area_id": areas["home"]["id"]},
        headers=session_headers(),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["area"]["name"] == "home"
    assert body["current_step"] == "s2"


@pytest.mark.asyncio
async def test_switch_to_unknown_area_is_404(client: AsyncClient, onboarded) -> None:
    response = await client.patch(
        "/api/progress/area", json={"area_id": "no-such-area"}, headers=session_headers()
    )
    assert response.status_code == 404
    progress = await client.get("/api/progress", headers=session_headers())
    assert progress.json()["area"]["name"] == "work"


@pytest.mark.asyncio
async def test_advance_to_s5_and_stay(client: AsyncClient, onboarded) -> None:
    steps = []
    for _ in range(6):
        response = await client.post("/api/progress/advance", headers=session_headers())
        assert response.status_code == 200
        steps.append(response.json()["current_step"])
    assert steps == ["s2", "s3", "s4", "s5", "s5", "s5"]


@pytest.mark.asyncio
async def test_re_onboarding_restarts_at_s1(client: AsyncClient, areas, onboarded) -> None:
    await client.post("/api/progress/advance", headers=session_headers())
    response = await client.post(
        "/api/onboarding",
        json={"area_id": areas["mind"]["id"], "on": TODAY.isoformat()},
        headers=session_headers(),
    )
    body = response.json()
    assert body["current_step"] == "s1"
    assert body["area"]["name"] == "mind"
