"""Pydantic schemas for the API and the watched draft."""
from typing import Any

from pydantic import BaseModel, Field

from post_studio.utils.helpers import first_present


# ----- Channel payload -----
class DraftPayload(BaseModel):
    """What either channel delivers for a flow: any subset of text and image_url."""

    text: str | None = None
    image_url: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any] | None) -> "DraftPayload":
        """Build from a linkedin_drafts row (poll) or a change-feed record (push)."""
        if not record:
            return cls()
        return cls(
            text=first_present(record, "text"),
            image_url=first_present(record, "image_url", "imageUrl"),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.text or self.image_url)


# ----- API Request/Response -----
class StartRequest(BaseModel):
    """Request body for POST /drafts."""

    topic: str = Field(min_length=1, description="What the post should be about")
    audience: str = Field(min_length=1, description="Who the post is written for")


class ApproveRequest(BaseModel):
    """Request body for POST /drafts/current/approve."""

    flow_id: str = Field(description="Flow being approved; must be the current one")
    text: str | None = Field(default=None, description="Final text; null = the text currently displayed")


class EditTextRequest(BaseModel):
    """Request body for PATCH /drafts/current (edit mode)."""

    edited_text: str


class DraftOut(BaseModel):
    """Snapshot of the current draft for the dashboard."""

    state: str = Field(description="idle | submitting | awaiting_text | awaiting_image | ready | timed_out")
    flow_id: str | None = None
    topic: str = ""
    audience: str = ""
    text: str = ""
    image_url: str = ""
    progress: int = 0
    is_loading: bool = False
    is_editing: bool = False
    edited_text: str = ""
    error: str | None = None
    success: str | None = None
    push_connected: bool = False
    last_push_event: str | None = None


class SuggestionOut(BaseModel):
    """Suggested topic for the form dropdown."""

    id: int
    topic: str
    audience: str
    used: bool = False

    class Config:
        from_attributes = True
