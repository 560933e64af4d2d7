"""Caller-supplied callbacks for each outcome of a dispatch."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from domain.models.envelope import Envelope
from domain.models.notification import OrderInfo
from exceptions import ErrorRecord

ErrorHandler = Callable[[ErrorRecord], Any]
EnvelopeHandler = Callable[[Envelope], Any]
DeviceHandler = Callable[[str, str, str, Dict[str, Any]], Any]
OrderHandler = Callable[[str, str, str, OrderInfo, Dict[str, Any]], Any]
SubscriptionHandler = Callable[[str, str, str, Any, Dict[str, Any]], Any]


@dataclass
class HandlerSet:
    """Callbacks for one dispatch call.

    ``on_error`` is mandatory. Domain handlers receive
    ``(customer_id, model_id, serial_number, [extra], raw_message)`` where
    ``raw_message`` is the unwrapped notification payload.

    A ``missing_handler`` error names the absent callback by its attribute
    name here, e.g. ``{"handler": "on_order_placed"}``.
    """

    on_error: ErrorHandler
    # Only used by the validate-only entry point.
    on_only_validate_message: Optional[EnvelopeHandler] = None
    on_non_drs_message: Optional[EnvelopeHandler] = None
    on_device_deregistered: Optional[DeviceHandler] = None
    on_device_registered: Optional[DeviceHandler] = None
    on_item_shipped: Optional[OrderHandler] = None
    on_order_cancelled: Optional[OrderHandler] = None
    on_order_placed: Optional[OrderHandler] = None
    on_subscription_changed: Optional[SubscriptionHandler] = None

    def __post_init__(self) -> None:
        if not callable(self.on_error):
            raise TypeError("on_error handler is required")
