"""Poll fallback: periodic point lookup of the draft row on the app scheduler."""
from datetime import datetime, timezone
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler

from post_studio.config import settings
from post_studio.models.schemas import DraftPayload
from post_studio.services.draft_store import DraftStore
from post_studio.utils.helpers import preview
from post_studio.utils.logging import get_logger

logger = get_logger(__name__)

PayloadHandler = Callable[[str, DraftPayload, str], None]


class PollLoop:
    """One interval job per watched flow. Failed or empty lookups never reach the caller."""

    source = "poll"

    def __init__(
        self,
        store: DraftStore,
        scheduler: BaseScheduler,
        on_payload: PayloadHandler,
        interval_seconds: float | None = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.on_payload = on_payload
        self.interval_seconds = interval_seconds or settings.poll_interval_seconds
        self._flow_id: str | None = None

    @staticmethod
    def job_id(flow_id: str) -> str:
        return f"poll_{flow_id}"

    @property
    def flow_id(self) -> str | None:
        return self._flow_id

    def start(self, flow_id: str) -> None:
        """Watch flow_id, replacing any previous job. First lookup runs right away."""
        self.stop()
        self._flow_id = flow_id
        self.scheduler.add_job(
            self.poll_once,
            "interval",
            seconds=self.interval_seconds,
            args=[flow_id],
            id=self.job_id(flow_id),
            next_run_time=datetime.now(timezone.utc),
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.debug("draft_poll_started", flow_id=flow_id, interval=self.interval_seconds)

    def stop(self) -> None:
        flow_id, self._flow_id = self._flow_id, None
        if flow_id is None:
            return
        try:
            self.scheduler.remove_job(self.job_id(flow_id))
        except JobLookupError:
            pass
        logger.debug("draft_poll_stopped", flow_id=flow_id)

    async def poll_once(self, flow_id: str) -> bool:
        """Look up the row once. Returns True when a row with text or image was found and handed on."""
        try:
            payload = await self.store.fetch_draft(flow_id)
        except Exception as e:
            logger.warning("draft_poll_failed", flow_id=flow_id, error=str(e))
            return False
        if payload is None or payload.is_empty:
            logger.debug("draft_poll_no_content", flow_id=flow_id, row_found=payload is not None)
            return False
        if flow_id != self._flow_id:
            # Stopped while the lookup was in flight
            return False
        logger.debug("draft_poll_row", flow_id=flow_id, text=preview(payload.text), image_url=payload.image_url)
        self.on_payload(flow_id, payload, self.source)
        return True
