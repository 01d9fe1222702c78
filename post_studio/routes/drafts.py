"""Current draft: POST start, GET snapshot, edit, approve, DELETE reset."""
from fastapi import APIRouter, Depends, HTTPException

from post_studio.exceptions import (
    ApprovalError,
    FlowMismatchError,
    NoActiveFlowError,
    NothingToApproveError,
    SubmissionError,
)
from post_studio.models.schemas import ApproveRequest, DraftOut, EditTextRequest, StartRequest
from post_studio.routes.deps import get_draft_session
from post_studio.session import DraftSession
from post_studio.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/drafts", tags=["drafts"])


@router.post("", response_model=DraftOut, status_code=201)
async def start_draft(
    body: StartRequest,
    session: DraftSession = Depends(get_draft_session),
):
    """Start generating a post. Returns as soon as the workflow accepted the job."""
    try:
        await session.start(body.topic, body.audience)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except SubmissionError as e:
        logger.warning("start_draft_failed", error=str(e))
        raise HTTPException(status_code=502, detail=str(e)) from e
    return session.snapshot()


@router.get("/current", response_model=DraftOut)
async def get_current_draft(session: DraftSession = Depends(get_draft_session)):
    """What the dashboard shows: state, text, image, progress and messages."""
    return session.snapshot()


@router.post("/current/edit", response_model=DraftOut)
async def toggle_edit(session: DraftSession = Depends(get_draft_session)):
    """Switch between preview and edit mode."""
    try:
        session.toggle_editing()
    except NoActiveFlowError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return session.snapshot()


@router.patch("/current", response_model=DraftOut)
async def update_edited_text(
    body: EditTextRequest,
    session: DraftSession = Depends(get_draft_session),
):
    """Replace the edited copy of the text before approval."""
    try:
        session.set_edited_text(body.edited_text)
    except NoActiveFlowError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return session.snapshot()


@router.post("/current/approve", response_model=DraftOut)
async def approve_draft(
    body: ApproveRequest,
    session: DraftSession = Depends(get_draft_session),
):
    """Approve the displayed text (or body.text). The draft survives a failed approval."""
    try:
        await session.approve(body.flow_id, body.text)
    except NoActiveFlowError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except (FlowMismatchError, NothingToApproveError) as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except ApprovalError as e:
        logger.warning("approve_draft_failed", flow_id=body.flow_id, error=str(e))
        raise HTTPException(status_code=502, detail=str(e)) from e
    return session.snapshot()


@router.delete("/current", response_model=DraftOut)
async def reset_draft(session: DraftSession = Depends(get_draft_session)):
    """Discard the draft and stop watching for updates."""
    await session.reset()
    return session.snapshot()
