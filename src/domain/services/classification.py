"""Classification and field extraction for unwrapped DRS payloads."""
from __future__ import annotations

from typing import Any, Dict, Tuple

from domain.models.notification import Notification, NotificationType, OrderInfo
from exceptions import MalformedNotification, UnknownNotificationType

_SERIAL_NUMBER = ("deviceInfo", "deviceIdentifier", "serialNumber")
_MODEL_ID = ("deviceInfo", "productIdentifier", "modelId")
_CUSTOMER_ID = ("customerInfo", "directedCustomerId")


def _require(payload: Dict[str, Any], path: Tuple[str, ...]) -> Any:
    value: Any = payload
    for key in path:
        if not isinstance(value, dict) or value.get(key) is None:
            raise MalformedNotification(".".join(path))
        value = value[key]
    return value


def classify(payload: Dict[str, Any]) -> NotificationType:
    notification_info = payload.get("notificationInfo")
    if not isinstance(notification_info, dict) or not notification_info.get("notificationType"):
        raise MalformedNotification("notificationInfo.notificationType")

    raw_type = notification_info["notificationType"]
    try:
        return NotificationType(raw_type)
    except ValueError:
        raise UnknownNotificationType(raw_type) from None


def extract_notification(payload: Dict[str, Any]) -> Notification:
    """Classify ``payload`` and pull out the identifiers every notification carries."""

    notification_type = classify(payload)
    return Notification(
        notification_type=notification_type,
        customer_id=_require(payload, _CUSTOMER_ID),
        model_id=_require(payload, _MODEL_ID),
        serial_number=_require(payload, _SERIAL_NUMBER),
        payload=payload,
    )


def build_order_info(payload: Dict[str, Any], notification_type: NotificationType) -> OrderInfo:
    order_info = payload.get("orderInfo")
    if not isinstance(order_info, dict):
        raise MalformedNotification("orderInfo")

    # Cancellations never carry product info.
    if notification_type is NotificationType.ORDER_CANCELLED:
        product_info = []
    else:
        product_info = order_info.get("productInfo")

    return OrderInfo(
        instance_id=order_info.get("instanceId") or "",
        slot_id=order_info.get("slotId") or "",
        product_info=product_info,
    )


def subscription_status(payload: Dict[str, Any]) -> Any:
    subscription_info = payload.get("subscriptionInfo")
    if not isinstance(subscription_info, dict):
        subscription_info = {}
    return subscription_info.get("slotsSubscriptionStatus")
