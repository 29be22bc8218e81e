"""Webhook handler: validate, stamp and forward one Alertmanager notification."""

import asyncio
import time
from datetime import datetime
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse
from loguru import logger
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError
from starlette.requests import ClientDisconnect

from alertmanager2es.elasticsearch import ElasticsearchWriter
from alertmanager2es.errors import InvalidRequest, TransientError, WebhookError
from alertmanager2es.metrics import NotificationMetrics
from alertmanager2es.models import SUPPORTED_WEBHOOK_VERSION, Notification


def now() -> datetime:
    """Current local time with its UTC offset."""
    return datetime.now().astimezone()


def rfc3339(moment: datetime) -> str:
    """Format an aware datetime as RFC3339 with a numeric offset."""
    return moment.isoformat(timespec="seconds")


class NotificationHandler:
    """Turns webhook requests into Elasticsearch documents.

    One instance serves every request of the application; it holds no
    per-request state.
    """

    def __init__(
        self,
        writer: ElasticsearchWriter,
        metrics: NotificationMetrics,
        read_timeout: float,
        clock: Callable[[], datetime] = now,
    ):
        self.writer = writer
        self.metrics = metrics
        self.read_timeout = read_timeout
        self.clock = clock

    async def handle(self, request: Request) -> Response:
        """Process one webhook call and build the response for the caller.

        Args:
            request: Incoming webhook request

        Returns:
            200 with an empty body when the document was stored, otherwise the
            error message with 400 (invalid input) or 500 (retryable failure)
        """
        started = time.perf_counter()
        self.metrics.received.inc()

        try:
            await self.process(request)
            response = Response(status_code=200)
        except InvalidRequest as e:
            self.metrics.invalid.inc()
            logger.warning(f"Rejected notification: {e}")
            response = self.error_response(e)
        except TransientError as e:
            self.metrics.errored.inc()
            logger.error(f"Error processing notification: {e}")
            response = self.error_response(e)

        self.metrics.observe_request(
            "webhook", request.method, response.status_code, time.perf_counter() - started
        )
        return response

    @staticmethod
    def error_response(error: WebhookError) -> Response:
        return PlainTextResponse(f"{error}\n", status_code=error.status_code)

    async def process(self, request: Request) -> None:
        """Run the notification pipeline, raising on the first failing step.

        Raises:
            InvalidRequest: Empty body, malformed payload or unsupported version
            TransientError: Body read, encoding or Elasticsearch write failed
        """
        if request.headers.get("content-length") == "0":
            raise InvalidRequest("got empty request body")

        try:
            body = await asyncio.wait_for(request.body(), timeout=self.read_timeout)
        except ClientDisconnect as e:
            raise TransientError("client disconnected while reading request body") from e
        except asyncio.TimeoutError as e:
            raise TransientError(
                f"timed out after {self.read_timeout}s reading request body"
            ) from e

        if not body:
            raise InvalidRequest("got empty request body")

        try:
            notification = Notification.model_validate_json(body)
        except ValidationError as e:
            raise InvalidRequest(str(e)) from e

        if notification.version != SUPPORTED_WEBHOOK_VERSION:
            raise InvalidRequest(
                f'Do not understand webhook version "{notification.version}", '
                f'only version "{SUPPORTED_WEBHOOK_VERSION}" is supported.'
            )

        received_at = self.clock()
        notification.timestamp = rfc3339(received_at)

        try:
            document = notification.to_document()
        except PydanticSerializationError as e:
            raise TransientError(str(e)) from e

        logger.info(
            f"Forwarding notification {notification.group_key} "
            f"({notification.status}, {len(notification.alerts or [])} alerts)"
        )
        await self.writer.write(document, received_at)
