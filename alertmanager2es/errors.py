"""Errors raised while handling a webhook notification."""


class WebhookError(Exception):
    """Base class for failures reported back to the webhook caller."""

    status_code = 500


class InvalidRequest(WebhookError):
    """The caller sent a payload we cannot accept. Not retryable as-is."""

    status_code = 400


class TransientError(WebhookError):
    """Reading, encoding or storing the notification failed. The caller should retry."""

    status_code = 500
