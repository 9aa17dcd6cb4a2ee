import json

import httpx
from loguru import logger

from oracle_slow_query_alert.exceptions import DeliveryError, SerializationError


class SlackWebhookOutput:
    """Posts the alert message to a Slack incoming webhook.

    The request body is a JSON object with a single "text" field. Failures
    raise SerializationError or DeliveryError and are never retried.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0) -> None:
        self._webhook_url = webhook_url
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "slack"

    async def send(self, message: str) -> None:
        body = self._serialize(message)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._webhook_url,
                    content=body,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise DeliveryError(
                f"Slack webhook returned status {status_code}", status_code=status_code
            ) from exc
        except httpx.HTTPError as exc:
            raise DeliveryError(f"Slack webhook request failed: {exc}") from exc

        logger.info("Slack notification sent")

    @staticmethod
    def _serialize(message: str) -> bytes:
        try:
            return json.dumps({"text": message}, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Could not encode alert payload: {exc}") from exc
