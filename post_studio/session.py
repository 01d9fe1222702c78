"""Request lifecycle for the draft being generated: start, watch, approve, reset."""
import contextlib
from datetime import datetime, timedelta, timezone

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from supabase import AsyncClient

from post_studio.channels.poll_loop import PollLoop
from post_studio.channels.push_listener import PushListener
from post_studio.config import settings
from post_studio.exceptions import (
    ApprovalError,
    FlowMismatchError,
    NoActiveFlowError,
    NothingToApproveError,
    SubmissionError,
)
from post_studio.models.schemas import DraftOut, DraftPayload
from post_studio.services.draft_store import DraftStore
from post_studio.services.webhook_service import WebhookService
from post_studio.utils.helpers import new_flow_id, preview
from post_studio.utils.logging import get_logger
from post_studio.workflow.reconciler import completes_generation, reconcile
from post_studio.workflow.state import (
    PROGRESS_ACCEPTED,
    Draft,
    FlowState,
    advance_progress,
    flow_state,
    tick_progress,
)

logger = get_logger(__name__)

APPROVED_MESSAGE = "The post is approved and ready to publish!"
TIMED_OUT_MESSAGE = "Generation is taking longer than expected. Start over to try again."


class DraftSession:
    """Owns the single in-progress Draft and both channels watching it.

    Everything runs on one event loop: webhook calls, scheduler jobs and
    Realtime callbacks all land here, so the draft is only ever replaced
    between awaits and needs no locking. Both channels call :meth:`apply`.
    """

    def __init__(
        self,
        webhooks: WebhookService,
        store: DraftStore,
        scheduler: BaseScheduler,
        realtime: AsyncClient | None = None,
        poll_interval_seconds: float | None = None,
        progress_tick_seconds: float | None = None,
        generation_timeout_seconds: float | None = None,
    ):
        self.webhooks = webhooks
        self.store = store
        self.scheduler = scheduler
        self.poller = PollLoop(store, scheduler, self.apply, poll_interval_seconds)
        self.listener = PushListener(realtime, self.apply)
        self.progress_tick_seconds = progress_tick_seconds or settings.progress_tick_seconds
        self.generation_timeout_seconds = (
            settings.generation_timeout_seconds if generation_timeout_seconds is None else generation_timeout_seconds
        )
        self.draft: Draft | None = None
        self.error: str | None = None
        self.success: str | None = None
        self._attached_flow_id: str | None = None

    @property
    def flow_id(self) -> str | None:
        return self.draft.flow_id if self.draft else None

    @property
    def state(self) -> FlowState:
        return flow_state(self.draft)

    # ----- lifecycle -----

    async def start(self, topic: str, audience: str) -> str:
        """Begin a new flow and return its id once the workflow has accepted the job.

        Raises SubmissionError if the job-start call fails; the job's own
        outcome is only ever observed through the channels.
        """
        topic, audience = (topic or "").strip(), (audience or "").strip()
        if not topic or not audience:
            raise ValueError("Topic and audience are required")

        await self._detach()
        flow_id = new_flow_id()
        self.error = None
        self.success = None
        self.draft = Draft.new(flow_id, topic, audience)
        await self._attach(flow_id)
        logger.info("draft_flow_started", flow_id=flow_id, topic=topic, audience=audience)

        try:
            await self.webhooks.start_generation(topic, audience, flow_id)
        except SubmissionError as e:
            if self.flow_id == flow_id:
                await self._detach()
                self.draft = None
                self.error = str(e)
            raise

        # Reset or a newer start may have run while the request was in flight
        if self.flow_id == flow_id:
            self.draft = self.draft.model_copy(
                update={"is_submitting": False, "progress": advance_progress(self.draft, PROGRESS_ACCEPTED)}
            )
        return flow_id

    async def approve(self, flow_id: str | None = None, final_text: str | None = None) -> None:
        """Send the displayed (or given) text for publishing, then clear the flow.

        On ApprovalError the draft stays as it is so the user can retry.
        """
        draft = self.draft
        if draft is None:
            raise NoActiveFlowError("There is no post to approve")
        if flow_id is not None and flow_id != draft.flow_id:
            raise FlowMismatchError(f"Flow {flow_id} is not the current flow")
        text = final_text if final_text is not None else draft.display_text
        if not text.strip():
            raise NothingToApproveError("There is no text to approve yet")

        self.error = None
        try:
            await self.webhooks.approve(draft.flow_id, text)
        except ApprovalError as e:
            if self.flow_id == draft.flow_id:
                self.error = str(e)
            raise
        logger.info("draft_approved", flow_id=draft.flow_id, edited=text != draft.text)
        # Reset or a newer start may have run while the request was in flight
        if self.flow_id == draft.flow_id:
            await self.reset()
            self.success = APPROVED_MESSAGE

    async def reset(self) -> None:
        """Discard the draft and stop every channel, whatever state the flow is in."""
        flow_id = self.flow_id
        await self._detach()
        self.draft = None
        self.error = None
        self.success = None
        if flow_id:
            logger.info("draft_flow_reset", flow_id=flow_id)

    async def close(self) -> None:
        """Teardown when the app shuts down."""
        await self._detach()
        self.draft = None

    # ----- editing -----

    def toggle_editing(self) -> Draft:
        draft = self._require_draft()
        if draft.is_editing:
            self.draft = draft.model_copy(update={"is_editing": False})
        else:
            self.draft = draft.model_copy(update={"is_editing": True, "edited_text": draft.text})
        return self.draft

    def set_edited_text(self, text: str) -> Draft:
        draft = self._require_draft()
        self.draft = draft.model_copy(update={"is_editing": True, "edited_text": text})
        return self.draft

    # ----- channel gate -----

    def apply(self, flow_id: str, payload: DraftPayload, source: str) -> bool:
        """Merge a channel payload into the draft. Returns True when the draft changed."""
        draft = self.draft
        if draft is None or draft.flow_id != flow_id or draft.timed_out:
            logger.debug("draft_payload_ignored_stale", flow_id=flow_id, source=source)
            return False
        updated = reconcile(draft, payload)
        if updated is draft:
            return False
        self.draft = updated

        if not draft.text and updated.text:
            logger.info("draft_text_adopted", flow_id=flow_id, source=source, text=preview(updated.text))
        if completes_generation(draft, updated):
            logger.info("draft_generation_complete", flow_id=flow_id, source=source, image_url=updated.image_url)
            self._remove_job(self._tick_job_id(flow_id))
            self._remove_job(self._timeout_job_id(flow_id))
        return True

    # ----- snapshot -----

    def snapshot(self) -> DraftOut:
        draft = self.draft
        out = DraftOut(
            state=self.state.value,
            error=self.error,
            success=self.success,
            push_connected=self.listener.is_connected,
            last_push_event=self.listener.last_event,
        )
        if draft is None:
            return out
        return out.model_copy(
            update={
                "flow_id": draft.flow_id,
                "topic": draft.topic,
                "audience": draft.audience,
                "text": draft.text,
                "image_url": draft.image_url,
                "progress": draft.progress,
                "is_loading": draft.is_loading,
                "is_editing": draft.is_editing,
                "edited_text": draft.edited_text,
            }
        )

    # ----- channel wiring -----

    @staticmethod
    def _tick_job_id(flow_id: str) -> str:
        return f"progress_{flow_id}"

    @staticmethod
    def _timeout_job_id(flow_id: str) -> str:
        return f"timeout_{flow_id}"

    async def _attach(self, flow_id: str) -> None:
        self._attached_flow_id = flow_id
        self.poller.start(flow_id)
        await self.listener.subscribe(flow_id)
        self.scheduler.add_job(
            self._tick,
            "interval",
            seconds=self.progress_tick_seconds,
            args=[flow_id],
            id=self._tick_job_id(flow_id),
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        if self.generation_timeout_seconds > 0:
            self.scheduler.add_job(
                self._on_timeout,
                "date",
                run_date=datetime.now(timezone.utc) + timedelta(seconds=self.generation_timeout_seconds),
                args=[flow_id],
                id=self._timeout_job_id(flow_id),
                replace_existing=True,
            )

    async def _detach(self) -> None:
        flow_id, self._attached_flow_id = self._attached_flow_id, None
        self.poller.stop()
        await self.listener.unsubscribe()
        if flow_id:
            self._remove_job(self._tick_job_id(flow_id))
            self._remove_job(self._timeout_job_id(flow_id))

    def _remove_job(self, job_id: str) -> None:
        with contextlib.suppress(JobLookupError):
            self.scheduler.remove_job(job_id)

    def _require_draft(self) -> Draft:
        if self.draft is None:
            raise NoActiveFlowError("There is no post being generated")
        return self.draft

    # ----- scheduled jobs (coroutines so they run on the event loop) -----

    async def _tick(self, flow_id: str) -> None:
        draft = self.draft
        if draft is None or draft.flow_id != flow_id:
            return
        self.draft = tick_progress(draft)
        if not self.draft.is_loading:
            self._remove_job(self._tick_job_id(flow_id))

    async def _on_timeout(self, flow_id: str) -> None:
        draft = self.draft
        if draft is None or draft.flow_id != flow_id or draft.image_url:
            return
        logger.warning("draft_generation_timed_out", flow_id=flow_id, seconds=self.generation_timeout_seconds, has_text=bool(draft.text))
        await self._detach()
        self.draft = draft.model_copy(update={"timed_out": True, "is_loading": False})
        self.error = TIMED_OUT_MESSAGE
