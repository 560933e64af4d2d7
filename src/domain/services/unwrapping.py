"""Locate the DRS payload inside an SNS message."""
from __future__ import annotations

import json
from typing import Any, Dict

from domain.models.envelope import Envelope

# Delivery protocols SNS may nest the real message under, in priority order.
TRANSPORT_KEYS = ("default", "email", "http", "https")


def parse_message(envelope: Envelope) -> Any:
    """Decode the envelope's ``Message`` string.

    ``ValueError``/``TypeError`` from the decoder propagate unchanged.
    """

    return json.loads(envelope.message)


def unwrap_message(payload: Any) -> Dict[str, Any] | None:
    """Return the DRS notification carried by ``payload``, or ``None``.

    A payload nested under a transport key wins when it carries ``deviceInfo``;
    otherwise the top level is used when it carries a notification type.
    """

    if not isinstance(payload, dict):
        return None

    for key in TRANSPORT_KEYS:
        nested = payload.get(key)
        if isinstance(nested, dict) and nested.get("deviceInfo"):
            return nested

    notification_info = payload.get("notificationInfo")
    if isinstance(notification_info, dict) and notification_info.get("notificationType"):
        return payload

    return None
