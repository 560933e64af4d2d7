"""Domain logic for DRS notifications."""
from domain.models.envelope import Envelope, EnvelopeType
from domain.models.notification import Notification, NotificationType, OrderInfo, ProductInfo
from domain.services.classification import (
    build_order_info,
    classify,
    extract_notification,
    subscription_status,
)
from domain.services.unwrapping import parse_message, unwrap_message

__all__ = [
    "Envelope",
    "EnvelopeType",
    "Notification",
    "NotificationType",
    "OrderInfo",
    "ProductInfo",
    "build_order_info",
    "classify",
    "extract_notification",
    "parse_message",
    "subscription_status",
    "unwrap_message",
]
