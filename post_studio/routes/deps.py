"""Request dependencies: objects created in the app lifespan."""
from fastapi import HTTPException, Request

from post_studio.services.draft_store import DraftStore
from post_studio.session import DraftSession


def get_draft_session(request: Request) -> DraftSession:
    session = getattr(request.app.state, "draft_session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Draft session is not running")
    return session


def get_draft_store(request: Request) -> DraftStore:
    store = getattr(request.app.state, "draft_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Record store is not configured")
    return store
