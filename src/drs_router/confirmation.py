"""Subscription confirmation for SNS ``SubscriptionConfirmation`` envelopes."""
from __future__ import annotations

import logging
from typing import Any

import requests

from domain.models.envelope import Envelope
from exceptions import ErrorCode, ErrorRecord

from .handlers import HandlerSet

logger = logging.getLogger(__name__)


def confirm_subscription(
    envelope: Envelope,
    handlers: HandlerSet,
    http: requests.Session,
    timeout: float | None = None,
) -> Any:
    """GET the envelope's ``SubscribeURL`` once.

    Returns ``None`` on success; every failure goes to ``handlers.on_error``.
    """

    url = envelope.subscribe_url or ""
    if url == "":
        logger.warning(
            "Subscription confirmation without a SubscribeURL",
            extra={"messageId": envelope.message_id, "topicArn": envelope.topic_arn},
        )
        return handlers.on_error(
            ErrorRecord.build(ErrorCode.INVALID_SUBSCRIPTION_REQUEST, envelope)
        )

    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("Subscription confirmation request failed: %s", exc, exc_info=True)
        return handlers.on_error(
            ErrorRecord.build(
                ErrorCode.INVALID_SUBSCRIPTION_REQUEST_RESPONSE,
                {"err": exc, "resp": None, "body": None},
            )
        )

    if response.status_code != 200:
        logger.warning(
            "Subscription confirmation rejected with status %s",
            response.status_code,
            extra={"topicArn": envelope.topic_arn},
        )
        return handlers.on_error(
            ErrorRecord.build(
                ErrorCode.INVALID_SUBSCRIPTION_REQUEST_RESPONSE,
                {"err": None, "resp": response, "body": response.text},
            )
        )

    logger.info("Subscription confirmed", extra={"topicArn": envelope.topic_arn})
    return None
