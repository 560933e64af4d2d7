"""AWS Lambda handler for DRS notifications delivered by SNS."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

from domain.models.envelope import Envelope
from domain.models.notification import OrderInfo
from exceptions import ErrorCode, ErrorRecord

from .handlers import HandlerSet
from .router import receive_request

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

_ERROR_STATUS = {
    ErrorCode.INVALID_SIGNATURE: 403,
    ErrorCode.INVALID_SUBSCRIPTION_REQUEST_RESPONSE: 502,
}

# Direct SNS -> Lambda records spell these keys differently from HTTP deliveries.
_RECORD_KEY_ALIASES = {
    "SigningCertUrl": "SigningCertURL",
    "UnsubscribeUrl": "UnsubscribeURL",
    "SubscribeUrl": "SubscribeURL",
}


def _parse_event(event: Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(event, dict) and "body" in event:
        body = event.get("body")
        if isinstance(body, str):
            return json.loads(body or "{}")
        if isinstance(body, dict):
            return body
    if isinstance(event, dict) and isinstance(event.get("Records"), list) and event["Records"]:
        record = event["Records"][0].get("Sns") or {}
        return {_RECORD_KEY_ALIASES.get(key, key): value for key, value in record.items()}
    return event if isinstance(event, dict) else {}


def _build_response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _on_error(error: ErrorRecord) -> Dict[str, Any]:
    status_code = _ERROR_STATUS.get(error.code, 400)
    logger.warning("Notification rejected: %s", error.reason, extra={"errorCode": error.code.value})
    return _build_response(status_code, {"error": error.code.value, "reason": error.reason})


def _on_non_drs_message(envelope: Envelope) -> Dict[str, Any]:
    logger.info("Ignoring non-DRS message", extra={"messageId": envelope.message_id})
    return _build_response(200, {"message": "Ignored non-DRS message", "messageId": envelope.message_id})


def _device_response(event_name: str):
    def handle(customer_id: str, model_id: str, serial_number: str, raw: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(
            "Device %s",
            event_name,
            extra={"customerId": customer_id, "modelId": model_id, "serialNumber": serial_number},
        )
        return _build_response(
            200,
            {"message": f"Device {event_name}", "serialNumber": serial_number, "modelId": model_id},
        )

    return handle


def _order_response(event_name: str):
    def handle(
        customer_id: str, model_id: str, serial_number: str, order_info: OrderInfo, raw: Dict[str, Any]
    ) -> Dict[str, Any]:
        logger.info(
            "Order %s",
            event_name,
            extra={
                "customerId": customer_id,
                "serialNumber": serial_number,
                "instanceId": order_info.instance_id,
                "slotId": order_info.slot_id,
            },
        )
        return _build_response(
            200,
            {"message": f"Order {event_name}", "serialNumber": serial_number, "orderInfo": order_info.to_dict()},
        )

    return handle


def _on_subscription_changed(
    customer_id: str, model_id: str, serial_number: str, status: Any, raw: Dict[str, Any]
) -> Dict[str, Any]:
    logger.info("Subscription changed", extra={"customerId": customer_id, "serialNumber": serial_number})
    return _build_response(
        200,
        {"message": "Subscription changed", "serialNumber": serial_number, "slotsSubscriptionStatus": status},
    )


def build_handlers() -> HandlerSet:
    return HandlerSet(
        on_error=_on_error,
        on_non_drs_message=_on_non_drs_message,
        on_device_deregistered=_device_response("deregistered"),
        on_device_registered=_device_response("registered"),
        on_item_shipped=_order_response("shipped"),
        on_order_cancelled=_order_response("cancelled"),
        on_order_placed=_order_response("placed"),
        on_subscription_changed=_on_subscription_changed,
    )


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    logger.info("Received event: %s", event)
    try:
        body = _parse_event(event)
        result = receive_request(body, build_handlers())
    except json.JSONDecodeError as exc:
        # An envelope that is not JSON cannot be verified.
        return _on_error(ErrorRecord.build(ErrorCode.INVALID_SIGNATURE, exc))
    except Exception as exc:
        logger.exception("Unexpected error while routing notification")
        return _build_response(500, {"error": str(exc)})

    # A successful subscription confirmation produces no callback.
    if result is None:
        return _build_response(200, {"message": "Subscription confirmed"})
    return result
