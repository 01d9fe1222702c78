"""Workflow webhooks: start a generation job and approve its result."""
import httpx

from post_studio.exceptions import ApprovalError, SubmissionError
from post_studio.utils.logging import get_logger

logger = get_logger(__name__)

START_WEBHOOK_URL = "https://basemen.app.n8n.cloud/webhook/linkedin-start"
APPROVE_WEBHOOK_URL = "https://basemen.app.n8n.cloud/webhook/linkedin-approve"


class WebhookService:
    """Fire-and-forget calls to the workflow engine. Generated content never comes back here."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        start_url: str = START_WEBHOOK_URL,
        approve_url: str = APPROVE_WEBHOOK_URL,
    ):
        self.client = client
        self.start_url = start_url
        self.approve_url = approve_url

    async def start_generation(self, topic: str, audience: str, flow_id: str) -> None:
        """Ask the workflow to generate a post. Raises SubmissionError unless it answers 2xx."""
        body = {"topic": topic, "audience": audience, "flowId": flow_id}
        try:
            resp = await self.client.post(self.start_url, json=body)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("start_webhook_rejected", flow_id=flow_id, status=e.response.status_code, body=e.response.text[:500])
            raise SubmissionError("Could not start generating the post") from e
        except httpx.HTTPError as e:
            logger.warning("start_webhook_failed", flow_id=flow_id, error=str(e))
            raise SubmissionError("Could not start generating the post") from e
        logger.info("start_webhook_sent", flow_id=flow_id, status=resp.status_code)

    async def approve(self, flow_id: str, text: str) -> None:
        """Send the final text for publishing. Raises ApprovalError unless it answers 2xx."""
        body = {"flowId": flow_id, "text": text}
        try:
            resp = await self.client.post(self.approve_url, json=body)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("approve_webhook_rejected", flow_id=flow_id, status=e.response.status_code, body=e.response.text[:500])
            raise ApprovalError("Could not approve the post") from e
        except httpx.HTTPError as e:
            logger.warning("approve_webhook_failed", flow_id=flow_id, error=str(e))
            raise ApprovalError("Could not approve the post") from e
        logger.info("approve_webhook_sent", flow_id=flow_id, status=resp.status_code)
