"""SQLAlchemy and Pydantic models."""
from post_studio.models.db_models import (
    LinkedInDraftRecord,
    SuggestedTopic,
    init_db,
)
from post_studio.models.schemas import (
    ApproveRequest,
    DraftOut,
    DraftPayload,
    EditTextRequest,
    StartRequest,
    SuggestionOut,
)

__all__ = [
    "LinkedInDraftRecord",
    "SuggestedTopic",
    "init_db",
    "ApproveRequest",
    "DraftOut",
    "DraftPayload",
    "EditTextRequest",
    "StartRequest",
    "SuggestionOut",
]
