"""Supabase Realtime subscription to the draft row of the current flow."""
import asyncio
import contextlib
from functools import partial
from typing import Any, Callable

from supabase import AsyncClient

from post_studio.config import settings
from post_studio.models.schemas import DraftPayload
from post_studio.utils.helpers import first_present, preview, random_suffix
from post_studio.utils.logging import get_logger

logger = get_logger(__name__)

PayloadHandler = Callable[[str, DraftPayload, str], None]


def parse_change(payload: dict[str, Any]) -> tuple[str | None, dict[str, Any] | None]:
    """Return (event type, new record) from a postgres_changes payload.

    Accepts the realtime-py shape ``{"data": {"type", "record", ...}}`` and the
    flat ``{"eventType", "new"}`` shape. Deletes have no new record.
    """
    data = payload.get("data") if isinstance(payload.get("data"), dict) else payload
    event_type = first_present(data, "type", "eventType")
    record = first_present(data, "record", "new")
    return event_type, (record or None)


class PushListener:
    """Feeds change events for one flow_id to a handler. Inert without a Realtime client."""

    source = "push"

    def __init__(self, client: AsyncClient | None, on_payload: PayloadHandler, table: str | None = None):
        self.client = client
        self.on_payload = on_payload
        self.table = table or settings.drafts_table
        self.is_connected = False
        self.last_event: str | None = None
        self._flow_id: str | None = None
        self._channel = None
        self._join_task: asyncio.Task | None = None

    @property
    def flow_id(self) -> str | None:
        return self._flow_id

    def channel_name(self, flow_id: str) -> str:
        return f"{self.table}_{flow_id}_{random_suffix()}"

    async def subscribe(self, flow_id: str) -> None:
        """Drop any current subscription and listen for flow_id. Joining runs in the background."""
        await self.unsubscribe()
        if self.client is None:
            logger.warning("realtime_not_configured", flow_id=flow_id, hint="Set SUPABASE_URL and SUPABASE_KEY; polling only")
            return
        name = self.channel_name(flow_id)
        channel = self.client.channel(name)
        channel.on_postgres_changes(
            "*",
            schema="public",
            table=self.table,
            filter=f"flow_id=eq.{flow_id}",
            callback=partial(self._on_change, flow_id),
        )
        self._flow_id = flow_id
        self._channel = channel
        self._join_task = asyncio.create_task(self._join(channel, name))
        logger.info("realtime_subscribing", flow_id=flow_id, channel=name)

    async def _join(self, channel, name: str) -> None:
        try:
            await channel.subscribe(partial(self._on_status, name))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            # Polling keeps the flow going without the change feed
            logger.warning("realtime_subscribe_failed", channel=name, error=str(e))

    def _on_status(self, name: str, status: Any, err: Exception | None = None) -> None:
        value = getattr(status, "value", status)
        self.is_connected = value == "SUBSCRIBED"
        if err is not None:
            logger.warning("realtime_channel_error", channel=name, status=str(value), error=str(err))
        else:
            logger.info("realtime_channel_status", channel=name, status=str(value))

    def _on_change(self, flow_id: str, payload: dict[str, Any]) -> None:
        if flow_id != self._flow_id:
            return
        event_type, record = parse_change(payload)
        self.last_event = event_type
        draft_payload = DraftPayload.from_record(record)
        if draft_payload.is_empty:
            logger.debug("realtime_event_without_content", flow_id=flow_id, event_type=event_type)
            return
        logger.debug("realtime_event", flow_id=flow_id, event_type=event_type, text=preview(draft_payload.text), image_url=draft_payload.image_url)
        self.on_payload(flow_id, draft_payload, self.source)

    async def unsubscribe(self) -> None:
        channel, self._channel = self._channel, None
        task, self._join_task = self._join_task, None
        flow_id, self._flow_id = self._flow_id, None
        self.is_connected = False
        self.last_event = None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if channel is None:
            return
        try:
            await self.client.remove_channel(channel)
        except Exception as e:
            logger.warning("realtime_unsubscribe_failed", flow_id=flow_id, error=str(e))
        else:
            logger.info("realtime_unsubscribed", flow_id=flow_id)
