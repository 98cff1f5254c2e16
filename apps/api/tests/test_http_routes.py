"""HTTP-level tests: routing, status codes and the JSON error envelope."""
from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError

from anvaya.main import app
from anvaya.models.lead import LeadStatus
from anvaya.repositories import agents as agents_repo
from anvaya.repositories import comments as comments_repo
from anvaya.repositories import leads as leads_repo
from anvaya.repositories import tags as tags_repo
from conftest import AGENT_ID, CREATED_AT, LEAD_ID, make_agent, make_lead


def client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.asyncio
async def test_list_leads_by_closed_status(monkeypatch, api_session) -> None:
    list_mock = AsyncMock(return_value=[make_lead(status=LeadStatus.CLOSED, closed_at=CREATED_AT)])
    monkeypatch.setattr(leads_repo, "list_leads", list_mock)

    async with client() as http:
        response = await http.get("/leads", params={"status": "Closed"})

    assert response.status_code == 200
    body = response.json()
    assert [lead["status"] for lead in body] == ["Closed"]
    assert body[0]["salesAgent"] == {"id": AGENT_ID, "name": "Priya Sharma"}
    assert "timeToClose" in body[0]
    assert "closedAt" not in body[0]
    assert list_mock.await_args.kwargs["filters"].status is LeadStatus.CLOSED


@pytest.mark.asyncio
async def test_list_leads_accepts_repeated_tags(monkeypatch, api_session) -> None:
    list_mock = AsyncMock(return_value=[])
    monkeypatch.setattr(leads_repo, "list_leads", list_mock)

    async with client() as http:
        response = await http.get("/leads?tags=Urgent&tags=Enterprise")

    assert response.status_code == 200
    assert list_mock.await_args.kwargs["filters"].tags == ["Urgent", "Enterprise"]


@pytest.mark.asyncio
async def test_list_leads_invalid_status_is_400(api_session) -> None:
    async with client() as http:
        response = await http.get("/leads", params={"status": "closed"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid input: 'status' must be one of")


@pytest.mark.asyncio
async def test_get_lead_invalid_id(api_session) -> None:
    async with client() as http:
        response = await http.get("/leads/123")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid lead ID."}


@pytest.mark.asyncio
async def test_get_lead_id_with_trailing_newline_skips_lookup(monkeypatch, api_session) -> None:
    lookup = AsyncMock(return_value=None)
    monkeypatch.setattr(leads_repo, "get_by_id", lookup)

    async with client() as http:
        response = await http.get(f"/leads/{LEAD_ID}%0A")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid lead ID."}
    lookup.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_lead_not_found(monkeypatch, api_session) -> None:
    monkeypatch.setattr(leads_repo, "get_by_id", AsyncMock(return_value=None))

    async with client() as http:
        response = await http.get(f"/leads/{LEAD_ID}")

    assert response.status_code == 404
    assert response.json() == {"error": f"Lead with ID '{LEAD_ID}' not found."}


@pytest.mark.asyncio
async def test_create_lead_returns_201(monkeypatch, api_session) -> None:
    monkeypatch.setattr(agents_repo, "get_by_id", AsyncMock(return_value=make_agent()))
    monkeypatch.setattr(leads_repo, "create_lead", AsyncMock(return_value=make_lead()))

    payload = {"name": "Acme Corp", "source": "Website", "salesAgent": AGENT_ID, "timeToClose": 30}
    async with client() as http:
        response = await http.post("/leads", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "New"
    assert body["priority"] == "Medium"
    assert body["tags"] == []


@pytest.mark.asyncio
async def test_create_lead_unknown_agent_is_404(monkeypatch, api_session) -> None:
    monkeypatch.setattr(agents_repo, "get_by_id", AsyncMock(return_value=None))

    payload = {"name": "Acme Corp", "source": "Website", "salesAgent": AGENT_ID, "timeToClose": 30}
    async with client() as http:
        response = await http.post("/leads", json=payload)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unparseable_body_field_is_400(api_session) -> None:
    payload = {"name": "Acme Corp", "source": "Website", "salesAgent": AGENT_ID, "timeToClose": "soon"}
    async with client() as http:
        response = await http.post("/leads", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["violations"][0]["field"] == "timeToClose"
    assert body["error"].startswith("Invalid input: 'timeToClose'")


@pytest.mark.asyncio
async def test_boolean_time_to_close_is_400(monkeypatch, api_session) -> None:
    create_mock = AsyncMock(return_value=make_lead())
    monkeypatch.setattr(leads_repo, "create_lead", create_mock)

    payload = {"name": "Acme Corp", "source": "Website", "salesAgent": AGENT_ID, "timeToClose": True}
    async with client() as http:
        response = await http.post("/leads", json=payload)

    assert response.status_code == 400
    assert response.json()["violations"][0]["field"] == "timeToClose"
    create_mock.assert_not_awaited()


@pytest.mark.asyncio
async def test_partial_put_is_400(api_session) -> None:
    async with client() as http:
        response = await http.put(f"/leads/{LEAD_ID}", json={"name": "Acme Corp"})

    assert response.status_code == 400
    assert response.json()["error"] == "All fields are required when updating a lead."


@pytest.mark.asyncio
async def test_delete_lead(monkeypatch, api_session) -> None:
    monkeypatch.setattr(leads_repo, "exists", AsyncMock(return_value=True))
    monkeypatch.setattr(leads_repo, "delete_lead", AsyncMock(return_value=True))
    monkeypatch.setattr(comments_repo, "delete_for_lead", AsyncMock(return_value=0))

    async with client() as http:
        response = await http.delete(f"/leads/{LEAD_ID}")

    assert response.status_code == 200
    assert response.json() == {"message": "Lead deleted successfully."}


@pytest.mark.asyncio
async def test_duplicate_tag_is_409(monkeypatch, api_session) -> None:
    monkeypatch.setattr(
        tags_repo,
        "create_tag",
        AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("duplicate key value"))),
    )

    async with client() as http:
        response = await http.post("/tags", json={"name": "Urgent"})

    assert response.status_code == 409
    assert response.json() == {"error": "Tag with name 'Urgent' already exists."}


@pytest.mark.asyncio
async def test_create_tag_returns_201(monkeypatch, api_session) -> None:
    tag = SimpleNamespace(id="65a1f0c2e4b0a1b2c3d4e801", name="Urgent", created_at=CREATED_AT)
    monkeypatch.setattr(tags_repo, "create_tag", AsyncMock(return_value=tag))

    async with client() as http:
        response = await http.post("/tags", json={"name": "Urgent"})

    assert response.status_code == 201
    assert response.json()["name"] == "Urgent"
    assert "createdAt" in response.json()


@pytest.mark.asyncio
async def test_pipeline_report(monkeypatch, api_session) -> None:
    statuses = [LeadStatus.NEW, LeadStatus.NEW, LeadStatus.CONTACTED]
    monkeypatch.setattr(leads_repo, "list_statuses", AsyncMock(return_value=statuses))

    async with client() as http:
        response = await http.get("/report/pipeline")

    assert response.status_code == 200
    assert response.json() == {"totalLeadsInPipeline": 3, "byStatus": {"New": 2, "Contacted": 1}}


@pytest.mark.asyncio
async def test_create_agent_missing_fields(api_session) -> None:
    async with client() as http:
        response = await http.post("/agents", json={})

    assert response.status_code == 400
    assert [item["field"] for item in response.json()["violations"]] == ["name", "email"]
