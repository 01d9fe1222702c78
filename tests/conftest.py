"""Shared test fixtures: paused scheduler, fakes, and DraftSession factory."""
from unittest.mock import MagicMock

import httpx
import pytest
import pytest_asyncio
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from post_studio.services.webhook_service import WebhookService
from post_studio.session import DraftSession
from tests.fakes import FakeStore, WebhookRecorder, make_realtime_client


@pytest_asyncio.fixture
async def scheduler():
    """Paused scheduler: jobs are registered but never fire on their own."""
    sched = AsyncIOScheduler()
    sched.start(paused=True)
    yield sched
    sched.shutdown(wait=False)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def webhooks() -> WebhookRecorder:
    return WebhookRecorder()


@pytest.fixture
def realtime() -> MagicMock:
    return make_realtime_client()


@pytest_asyncio.fixture
async def http_client(webhooks):
    async with httpx.AsyncClient(transport=httpx.MockTransport(webhooks)) as client:
        yield client


@pytest_asyncio.fixture
async def make_session(scheduler, store, http_client, realtime):
    """Build DraftSessions sharing the fakes; all are closed after the test."""
    created: list[DraftSession] = []

    def factory(**kwargs) -> DraftSession:
        kwargs.setdefault("poll_interval_seconds", 3)
        kwargs.setdefault("progress_tick_seconds", 1)
        kwargs.setdefault("generation_timeout_seconds", 0)
        session = DraftSession(WebhookService(http_client), store, scheduler, realtime, **kwargs)
        created.append(session)
        return session

    yield factory
    for session in created:
        await session.close()


@pytest_asyncio.fixture
async def session(make_session) -> DraftSession:
    return make_session()
