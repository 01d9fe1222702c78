from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from post_studio.exceptions import (
    ApprovalError,
    FlowMismatchError,
    NoActiveFlowError,
    NothingToApproveError,
    SubmissionError,
)
from post_studio.main import app
from post_studio.models.schemas import DraftOut, SuggestionOut
from post_studio.routes.deps import get_draft_session, get_draft_store
from post_studio.services.draft_store import DraftStore
from post_studio.session import DraftSession

SNAPSHOT = DraftOut(state="awaiting_text", flow_id="flow-1", topic="Sustainability", audience="Event planners", progress=30, is_loading=True)


@pytest.fixture
def stub_session() -> MagicMock:
    session = MagicMock(spec=DraftSession)
    session.start = AsyncMock(return_value="flow-1")
    session.approve = AsyncMock()
    session.reset = AsyncMock()
    session.snapshot.return_value = SNAPSHOT
    return session


@pytest.fixture
def stub_store() -> MagicMock:
    store = MagicMock(spec=DraftStore)
    store.list_suggestions = AsyncMock(
        return_value=[SuggestionOut(id=1, topic="Sustainability", audience="Event planners", used=False)]
    )
    return store


@pytest.fixture
def client(stub_session, stub_store):
    """Client without lifespan: no database, Realtime or scheduler is started."""
    app.dependency_overrides[get_draft_session] = lambda: stub_session
    app.dependency_overrides[get_draft_store] = lambda: stub_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_dashboard_is_served(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "LinkedIn Post Studio" in resp.text


def test_start_draft(client, stub_session):
    resp = client.post("/drafts", json={"topic": "Sustainability", "audience": "Event planners"})
    assert resp.status_code == 201
    assert resp.json()["flow_id"] == "flow-1"
    stub_session.start.assert_awaited_once_with("Sustainability", "Event planners")


def test_start_draft_requires_fields(client, stub_session):
    assert client.post("/drafts", json={"topic": "", "audience": "x"}).status_code == 422
    assert client.post("/drafts", json={"topic": "x"}).status_code == 422
    stub_session.start.assert_not_awaited()


def test_start_draft_blank_after_strip(client, stub_session):
    stub_session.start.side_effect = ValueError("Topic and audience are required")
    resp = client.post("/drafts", json={"topic": "   ", "audience": "x"})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Topic and audience are required"


def test_start_draft_submission_error(client, stub_session):
    stub_session.start.side_effect = SubmissionError("Could not start generating the post")
    resp = client.post("/drafts", json={"topic": "t", "audience": "a"})
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Could not start generating the post"


def test_get_current(client):
    resp = client.get("/drafts/current")
    assert resp.status_code == 200
    assert resp.json()["state"] == "awaiting_text"
    assert resp.json()["progress"] == 30


def test_toggle_edit(client, stub_session):
    assert client.post("/drafts/current/edit").status_code == 200
    stub_session.toggle_editing.assert_called_once_with()
    stub_session.toggle_editing.side_effect = NoActiveFlowError("There is no post being generated")
    assert client.post("/drafts/current/edit").status_code == 404


def test_update_edited_text(client, stub_session):
    resp = client.patch("/drafts/current", json={"edited_text": "Better"})
    assert resp.status_code == 200
    stub_session.set_edited_text.assert_called_once_with("Better")


def test_approve(client, stub_session):
    resp = client.post("/drafts/current/approve", json={"flow_id": "flow-1"})
    assert resp.status_code == 200
    stub_session.approve.assert_awaited_once_with("flow-1", None)


def test_approve_with_text(client, stub_session):
    client.post("/drafts/current/approve", json={"flow_id": "flow-1", "text": "Final"})
    stub_session.approve.assert_awaited_once_with("flow-1", "Final")


@pytest.mark.parametrize(
    "error, status",
    [
        (NoActiveFlowError("There is no post to approve"), 404),
        (FlowMismatchError("Flow flow-2 is not the current flow"), 409),
        (NothingToApproveError("There is no text to approve yet"), 409),
        (ApprovalError("Could not approve the post"), 502),
    ],
)
def test_approve_errors(client, stub_session, error, status):
    stub_session.approve.side_effect = error
    resp = client.post("/drafts/current/approve", json={"flow_id": "flow-2"})
    assert resp.status_code == status
    assert resp.json()["detail"] == str(error)


def test_reset(client, stub_session):
    assert client.delete("/drafts/current").status_code == 200
    stub_session.reset.assert_awaited_once_with()


def test_suggestions(client):
    resp = client.get("/suggestions")
    assert resp.status_code == 200
    assert resp.json() == [{"id": 1, "topic": "Sustainability", "audience": "Event planners", "used": False}]


def test_suggestions_store_failure(client, stub_store):
    stub_store.list_suggestions.side_effect = ConnectionError("db down")
    resp = client.get("/suggestions")
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Could not load suggestions. Try again later."


def test_session_missing_before_startup():
    app.dependency_overrides.clear()
    resp = TestClient(app).get("/drafts/current")
    assert resp.status_code == 503
