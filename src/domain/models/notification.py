"""Domain models for classified DRS notifications."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class NotificationType(str, Enum):
    DEVICE_DEREGISTERED = "DeviceDeregisteredNotification"
    DEVICE_REGISTERED = "DeviceRegisteredNotification"
    ITEM_SHIPPED = "ItemShippedNotification"
    ORDER_CANCELLED = "OrderCancelledNotification"
    ORDER_PLACED = "OrderPlacedNotification"
    SUBSCRIPTION_CHANGED = "SubscriptionChangedNotification"


@dataclass(frozen=True)
class ProductInfo:
    asin: str
    quantity: str | None = None
    unit: str | None = None
    estimated_delivery_date: str | None = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductInfo":
        return cls(
            asin=data.get("asin", ""),
            quantity=data.get("quantity"),
            unit=data.get("unit"),
            estimated_delivery_date=data.get("estimatedDeliveryDate"),
        )


@dataclass(frozen=True)
class OrderInfo:
    """Order details handed to the order notification handlers.

    ``product_info`` is passed through exactly as it arrived; use
    :meth:`products` for typed entries.
    """

    instance_id: str
    slot_id: str
    product_info: List[Any] = field(default_factory=list)

    def products(self) -> List[ProductInfo]:
        return [ProductInfo.from_dict(entry) for entry in self.product_info or [] if isinstance(entry, dict)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "instanceId": self.instance_id,
            "slotId": self.slot_id,
            "productInfo": self.product_info,
        }


@dataclass(frozen=True)
class Notification:
    """A payload confirmed to carry a known DRS notification type."""

    notification_type: NotificationType
    customer_id: str
    model_id: str
    serial_number: str
    payload: Dict[str, Any] = field(compare=False, repr=False)
