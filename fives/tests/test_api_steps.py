"""
API tests for the five step pages: /api/areas/{area}/{stage}[/{item_id}].

All tests start from an onboarded session (fixture `onboarded`).
"""
import pytest
from httpx import AsyncClient

from conftest import SESSION_B, TODAY, session_headers

H = session_headers()


async def _create(client: AsyncClient, stage: str, body: dict, area: str = "work") -> dict:
    response = await client.post(f"/api/areas/{area}/{stage}", json=body, headers=H)
    assert response.status_code == 201, response.text
    return response.json()


async def _list(client: AsyncClient, stage: str, area: str = "work", headers=H) -> dict:
    response = await client.get(f"/api/areas/{area}/{stage}", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


# ---------------------------------------------------------------------------
# S1 — Filter
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_filter_partitions_keep_and_remove(client: AsyncClient, onboarded) -> None:
    items = [await _create(client, "s1", {"item_text": text}) for text in ("email", "tv", "gym")]
    assert all(item["should_keep"] is True for item in items)

    response = await client.patch(
        f"/api/areas/work/s1/{items[1]['id']}", json={"should_keep": False}, headers=H
    )
    assert response.status_code == 200
    assert response.json()["should_keep"] is False

    body = await _list(client, "s1")
    keep_ids = {i["id"] for i in body["groups"]["keep"]}
    remove_ids = {i["id"] for i in body["groups"]["remove"]}
    assert remove_ids == {items[1]["id"]}
    assert keep_ids == {items[0]["id"], items[2]["id"]}
    assert keep_ids.isdisjoint(remove_ids)
    assert len(body["items"]) == 3


@pytest.mark.asyncio
async def test_filter_text_is_trimmed(client: AsyncClient, onboarded) -> None:
    item = await _create(client, "s1", {"item_text": "  news feed  "})
    assert item["item_text"] == "news feed"


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
async def test_blank_text_is_rejected(client: AsyncClient, onboarded, text: str) -> None:
    response = await client.post("/api/areas/work/s1", json={"item_text": text}, headers=H)
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert (await _list(client, "s1"))["items"] == []


# ---------------------------------------------------------------------------
# S2 — Organize
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_organize_buckets_by_priority(client: AsyncClient, onboarded) -> None:
    high = await _create(client, "s2", {"item_text": "taxes", "priority_level": "high"})
    default = await _create(client, "s2", {"item_text": "drawer"})
    assert default["priority_level"] == "medium"
    assert default["fixed_position"] == ""

    await client.patch(
        f"/api/areas/work/s2/{default['id']}",
        json={"priority_level": "low", "fixed_position": "top shelf"},
        headers=H,
    )

    groups = (await _list(client, "s2"))["groups"]
    assert [i["id"] for i in groups["high"]] == [high["id"]]
    assert groups["medium"] == []
    assert [i["fixed_position"] for i in groups["low"]] == ["top shelf"]


@pytest.mark.asyncio
async def test_organize_rejects_unknown_priority(client: AsyncClient, onboarded) -> None:
    response = await client.post(
        "/api/areas/work/s2", json={"item_text": "x", "priority_level": "urgent"}, headers=H
    )
    assert response.status_code == 422


# ---------------------------------------------------------------------------
# S3 — Clean
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_clean_orders_by_reflection_date(client: AsyncClient, onboarded) -> None:
    for day in ("2024-01-05", "2024-01-09", "2024-01-07"):
        await _create(client, "s3", {"reflection_text": f"on {day}", "reflection_date": day})

    items = (await _list(client, "s3"))["items"]
    assert [i["reflection_date"] for i in items] == ["2024-01-09", "2024-01-07", "2024-01-05"]


@pytest.mark.asyncio
async def test_clean_action_taken_update(client: AsyncClient, onboarded) -> None:
    item = await _create(client, "s3", {"reflection_text": "inbox heavy"})
    assert item["action_taken"] == ""

    response = await client.patch(
        f"/api/areas/work/s3/{item['id']}", json={"action_taken": "unsubscribed"}, headers=H
    )
    assert response.json()["action_taken"] == "unsubscribed"
    assert response.json()["reflection_text"] == "inbox heavy"


# ---------------------------------------------------------------------------
# S4 — Standardize / S5 — Sustain
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_standard_needs_trigger_and_action(client: AsyncClient, onboarded) -> None:
    response = await client.post("/api/areas/work/s4", json={"trigger": "Monday 9am"}, headers=H)
    assert response.status_code == 422

    rule = await _create(client, "s4", {"trigger": "Monday 9am", "action": "plan the week"})
    assert (rule["trigger"], rule["action"]) == ("Monday 9am", "plan the week")


@pytest.mark.asyncio
async def test_sustain_create_and_delete(client: AsyncClient, onboarded) -> None:
    reminder = await _create(client, "s5", {"why_text": "calm mornings"})

    response = await client.delete(f"/api/areas/work/s5/{reminder['id']}", headers=H)
    assert response.status_code == 204
    assert (await _list(client, "s5"))["items"] == []

    again = await client.delete(f"/api/areas/work/s5/{reminder['id']}", headers=H)
    assert again.status_code == 404


# ---------------------------------------------------------------------------
# Shared behavior
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_with_no_fields_is_400(client: AsyncClient, onboarded) -> None:
    item = await _create(client, "s1", {"item_text": "desk"})
    response = await client.patch(f"/api/areas/work/s1/{item['id']}", json={}, headers=H)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_update_rejects_immutable_field(client: AsyncClient, onboarded) -> None:
    item = await _create(client, "s1", {"item_text": "desk"})
    response = await client.patch(
        f"/api/areas/work/s1/{item['id']}", json={"item_text": "chair"}, headers=H
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_unknown_item_is_404(client: AsyncClient, onboarded) -> None:
    response = await client.patch(
        "/api/areas/work/s2/missing", json={"priority_level": "high"}, headers=H
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_stage_is_422(client: AsyncClient, onboarded) -> None:
    response = await client.get("/api/areas/work/s9", headers=H)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_area_lists_empty_and_rejects_writes(client: AsyncClient, onboarded) -> None:
    body = await _list(client, "s1", area="garden")
    assert body["area"] is None
    assert body["items"] == []

    response = await client.post("/api/areas/garden/s1", json={"item_text": "x"}, headers=H)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_items_only_writable_through_their_own_area(client: AsyncClient, onboarded) -> None:
    item = await _create(client, "s1", {"item_text": "desk"})

    unknown = await client.patch(
        f"/api/areas/garden/s1/{item['id']}", json={"should_keep": False}, headers=H
    )
    assert unknown.status_code == 404

    other_area = await client.patch(
        f"/api/areas/home/s1/{item['id']}", json={"should_keep": False}, headers=H
    )
    assert other_area.status_code == 404

    assert (await client.delete(f"/api/areas/garden/s1/{item['id']}", headers=H)).status_code == 404
    assert (await client.delete(f"/api/areas/home/s1/{item['id']}", headers=H)).status_code == 404

    items = (await _list(client, "s1"))["items"]
    assert [(i["id"], i["should_keep"]) for i in items] == [(item["id"], True)]


@pytest.mark.asyncio
async def test_items_are_scoped_to_area(client: AsyncClient, onboarded) -> None:
    await _create(client, "s1", {"item_text": "work thing"})
    await _create(client, "s1", {"item_text": "home thing"}, area="home")

    assert [i["item_text"] for i in (await _list(client, "s1"))["items"]] == ["work thing"]
    assert [i["item_text"] for i in (await _list(client, "s1", area="home"))["items"]] == ["home thing"]


@pytest.mark.asyncio
async def test_items_are_scoped_to_session(client: AsyncClient, areas, onboarded) -> None:
    item = await _create(client, "s1", {"item_text": "private"})

    other = session_headers(SESSION_B)
    await client.post(
        "/api/onboarding",
        json={"area_id": areas["work"]["id"], "on": TODAY.isoformat()},
        headers=other,
    )
    assert (await _list(client, "s1", headers=other))["items"] == []

    response = await client.delete(f"/api/areas/work/s1/{item['id']}", headers=other)
    assert response.status_code == 404
    assert len((await _list(client, "s1"))["items"]) == 1
