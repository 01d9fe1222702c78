"""External service access: workflow webhooks and record-store reads."""
from post_studio.services.draft_store import DraftStore
from post_studio.services.webhook_service import WebhookService

__all__ = ["DraftStore", "WebhookService"]
