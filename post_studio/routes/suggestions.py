"""GET /suggestions."""
from fastapi import APIRouter, Depends, HTTPException

from post_studio.models.schemas import SuggestionOut
from post_studio.routes.deps import get_draft_store
from post_studio.services.draft_store import DraftStore
from post_studio.utils.logging import get_logger

router = APIRouter(prefix="/suggestions", tags=["suggestions"])
logger = get_logger(__name__)


@router.get("", response_model=list[SuggestionOut])
async def list_suggestions(store: DraftStore = Depends(get_draft_store)):
    """Suggested topic/audience pairs to prefill the form."""
    try:
        return await store.list_suggestions()
    except Exception as e:
        logger.exception("list_suggestions_failed", error=str(e))
        raise HTTPException(
            status_code=503,
            detail="Could not load suggestions. Try again later.",
        ) from e
