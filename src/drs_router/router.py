"""Dispatch pipeline turning a signed SNS envelope into one handler call."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, NamedTuple, Optional

import requests

from adapters.clients import http_session
from domain.models.notification import NotificationType
from domain.services.classification import (
    build_order_info,
    extract_notification,
    subscription_status,
)
from domain.services.unwrapping import parse_message, unwrap_message
from exceptions import (
    ErrorCode,
    ErrorRecord,
    MalformedNotification,
    UnknownNotificationType,
    VerificationError,
)

from .config import EnvConfig
from .confirmation import confirm_subscription
from .handlers import HandlerSet
from .verification import EnvelopeVerifier, default_verifier

logger = logging.getLogger(__name__)


class _Route(NamedTuple):
    handler: str
    extra: Optional[Callable[[Dict[str, Any], NotificationType], Any]]


_ROUTES: Dict[NotificationType, _Route] = {
    NotificationType.DEVICE_DEREGISTERED: _Route("on_device_deregistered", None),
    NotificationType.DEVICE_REGISTERED: _Route("on_device_registered", None),
    NotificationType.ITEM_SHIPPED: _Route("on_item_shipped", build_order_info),
    NotificationType.ORDER_CANCELLED: _Route("on_order_cancelled", build_order_info),
    NotificationType.ORDER_PLACED: _Route("on_order_placed", build_order_info),
    NotificationType.SUBSCRIPTION_CHANGED: _Route(
        "on_subscription_changed", lambda payload, _: subscription_status(payload)
    ),
}

_unrouted = set(NotificationType) - set(_ROUTES)
if _unrouted:
    raise RuntimeError(f"notification types without a route: {sorted(t.value for t in _unrouted)}")


def _report(handlers: HandlerSet, code: ErrorCode, raw: Any) -> Any:
    logger.warning("Reporting %s", code.value, extra={"errorCode": code.value})
    return handlers.on_error(ErrorRecord.build(code, raw))


def dispatch_payload(payload: Dict[str, Any], handlers: HandlerSet) -> Any:
    """Classify an unwrapped payload and invoke the matching handler."""

    try:
        notification = extract_notification(payload)
    except UnknownNotificationType as exc:
        return _report(handlers, ErrorCode.UNKNOWN_MESSAGE, {"message": exc.notification_type})
    except MalformedNotification as exc:
        return _report(handlers, ErrorCode.MALFORMED_NOTIFICATION, {"field": exc.field, "message": payload})

    route = _ROUTES[notification.notification_type]
    handler = getattr(handlers, route.handler)
    if handler is None:
        return _report(handlers, ErrorCode.MISSING_HANDLER, {"handler": route.handler})

    args = [notification.customer_id, notification.model_id, notification.serial_number]
    if route.extra is not None:
        try:
            args.append(route.extra(notification.payload, notification.notification_type))
        except MalformedNotification as exc:
            return _report(
                handlers, ErrorCode.MALFORMED_NOTIFICATION, {"field": exc.field, "message": payload}
            )

    logger.info(
        "Dispatching %s",
        notification.notification_type.value,
        extra={"handler": route.handler, "serialNumber": notification.serial_number},
    )
    return handler(*args, notification.payload)


def receive_request(
    body: Mapping[str, Any],
    handlers: HandlerSet,
    *,
    verifier: EnvelopeVerifier | None = None,
    http: requests.Session | None = None,
    config: EnvConfig | None = None,
) -> Any:
    """Verify ``body`` and route it to exactly one callback in ``handlers``.

    Returns whatever the invoked callback returns, or ``None`` after a
    successful subscription confirmation. Failures are never raised; they are
    delivered to ``handlers.on_error``.
    """

    verifier = verifier or default_verifier()
    try:
        envelope = verifier.verify(body)
    except VerificationError as exc:
        return _report(handlers, ErrorCode.INVALID_SIGNATURE, exc)

    logger.info(
        "Verified %s envelope",
        envelope.type.value,
        extra={"messageId": envelope.message_id, "topicArn": envelope.topic_arn},
    )

    if envelope.is_confirmation:
        config = config or EnvConfig.load()
        return confirm_subscription(
            envelope,
            handlers,
            http or http_session(),
            timeout=config.confirm_timeout_seconds,
        )

    try:
        message = parse_message(envelope)
    except (TypeError, ValueError) as exc:
        return _report(handlers, ErrorCode.INVALID_JSON, exc)

    payload = unwrap_message(message)
    if payload is None:
        if handlers.on_non_drs_message is not None:
            return handlers.on_non_drs_message(envelope)
        return _report(handlers, ErrorCode.NOT_DRS, envelope)

    return dispatch_payload(payload, handlers)
