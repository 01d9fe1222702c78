"""Draft state for one generation flow and the flow state derived from it."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Progress checkpoints
PROGRESS_SUBMITTED = 10
PROGRESS_ACCEPTED = 30
PROGRESS_TEXT = 70
PROGRESS_DONE = 100
# The cosmetic ticker never goes past this on its own
PROGRESS_TICK_CEILING = 90
PROGRESS_TICK_STEP = 5


class FlowState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    AWAITING_TEXT = "awaiting_text"
    AWAITING_IMAGE = "awaiting_image"
    READY = "ready"
    TIMED_OUT = "timed_out"


class Draft(BaseModel):
    """In-progress draft. Immutable: every change produces a new instance."""

    model_config = ConfigDict(frozen=True)

    flow_id: str
    topic: str = ""
    audience: str = ""
    text: str = ""
    image_url: str = ""
    progress: int = Field(default=0, ge=0, le=100)
    is_loading: bool = False
    is_submitting: bool = False
    is_editing: bool = False
    edited_text: str = ""
    timed_out: bool = False

    @classmethod
    def new(cls, flow_id: str, topic: str, audience: str) -> "Draft":
        """Empty draft for a fresh submission."""
        return cls(
            flow_id=flow_id,
            topic=topic,
            audience=audience,
            progress=PROGRESS_SUBMITTED,
            is_loading=True,
            is_submitting=True,
        )

    @property
    def display_text(self) -> str:
        """Text the user is looking at: the edited copy while editing."""
        return self.edited_text if self.is_editing else self.text


def flow_state(draft: Draft | None) -> FlowState:
    """Derive the explicit flow state from the draft fields."""
    if draft is None:
        return FlowState.IDLE
    if draft.is_submitting:
        return FlowState.SUBMITTING
    if draft.timed_out:
        return FlowState.TIMED_OUT
    if not draft.text:
        return FlowState.AWAITING_TEXT
    if not draft.image_url:
        return FlowState.AWAITING_IMAGE
    return FlowState.READY


def advance_progress(draft: Draft, value: int) -> int:
    """Progress only moves forward while a flow is live."""
    return min(PROGRESS_DONE, max(draft.progress, value))


def tick_progress(draft: Draft) -> Draft:
    """One step of the cosmetic loading animation."""
    if not draft.is_loading or draft.progress >= PROGRESS_TICK_CEILING:
        return draft
    progress = min(draft.progress + PROGRESS_TICK_STEP, PROGRESS_TICK_CEILING)
    return draft.model_copy(update={"progress": progress})
