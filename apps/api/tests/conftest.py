"""Shared fixtures for service and HTTP tests."""
from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from anvaya.db.session import get_session
from anvaya.main import app
from anvaya.models.lead import LeadPriority, LeadSource, LeadStatus

AGENT_ID = "65a1f0c2e4b0a1b2c3d4e5f1"
OTHER_AGENT_ID = "65a1f0c2e4b0a1b2c3d4e5f2"
LEAD_ID = "65a1f0c2e4b0a1b2c3d4e601"
CREATED_AT = datetime(2025, 10, 10, 12, 0, tzinfo=timezone.utc)


class FakeResult:
    """Stand-in for a SQLAlchemy ``Result`` holding scalar rows."""

    def __init__(self, rows: tuple[object, ...] = (), rowcount: int = 0) -> None:
        self._rows = list(rows)
        self.rowcount = rowcount

    def scalars(self) -> FakeResult:
        return self

    def all(self) -> list[object]:
        return list(self._rows)

    def scalar_one_or_none(self) -> object | None:
        return self._rows[0] if self._rows else None


class DummySession:
    """Minimal session stub supporting async transaction context.

    Statements passed to ``execute`` are recorded; results are served from
    ``results`` in order, then empty.
    """

    def __init__(self) -> None:
        self.added: list[object] = []
        self.begin_called = False
        self.statements: list[object] = []
        self.results: list[FakeResult] = []

    def add(self, obj: object) -> None:
        self.added.append(obj)

    async def execute(self, statement):
        self.statements.append(statement)
        return self.results.pop(0) if self.results else FakeResult()

    def begin(self):  # noqa: D401 - mimic SQLAlchemy's async begin
        session = self

        class _Tx:
            async def __aenter__(self_inner):
                session.begin_called = True
                return session

            async def __aexit__(self_inner, exc_type, exc, tb):
                return False

        return _Tx()


def make_agent(agent_id: str = AGENT_ID, name: str = "Priya Sharma") -> SimpleNamespace:
    return SimpleNamespace(id=agent_id, name=name, email="priya@anvaya.example", created_at=CREATED_AT)


def make_lead(**overrides: object) -> SimpleNamespace:
    values: dict[str, object] = {
        "id": LEAD_ID,
        "name": "Acme Corp",
        "source": LeadSource.WEBSITE,
        "sales_agent_id": AGENT_ID,
        "sales_agent": make_agent(),
        "status": LeadStatus.NEW,
        "tags": [],
        "time_to_close": 30,
        "priority": LeadPriority.MEDIUM,
        "created_at": CREATED_AT,
        "updated_at": CREATED_AT,
        "closed_at": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def session() -> DummySession:
    return DummySession()


@pytest.fixture
def api_session():
    """Route the app's session dependency to a stub for the test duration."""

    stub = DummySession()

    async def _override():
        yield stub

    app.dependency_overrides[get_session] = _override
    yield stub
    app.dependency_overrides.pop(get_session, None)
