"""Shared error types for the DRS notification router."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    INVALID_JSON = "invalid_json"
    INVALID_SIGNATURE = "invalid_signature"
    MISSING_HANDLER = "missing_handler"
    NOT_DRS = "not_drs"
    UNKNOWN_MESSAGE = "unknown_message"
    INVALID_SUBSCRIPTION_REQUEST = "invalid_subscription_request"
    INVALID_SUBSCRIPTION_REQUEST_RESPONSE = "invalid_subscription_request_response"
    MALFORMED_NOTIFICATION = "malformed_notification"


# Public contract: codes are never renumbered or removed, only added.
ERROR_REASONS: Dict[ErrorCode, str] = {
    ErrorCode.INVALID_JSON: "we could not parse the json of the message",
    ErrorCode.INVALID_SIGNATURE: "invalid signature for the incoming message",
    ErrorCode.MISSING_HANDLER: "missing the handler to handle that notification",
    ErrorCode.NOT_DRS: "this is not a DRS message, we placed it back into the raw property",
    ErrorCode.UNKNOWN_MESSAGE: "unknown message type received",
    ErrorCode.INVALID_SUBSCRIPTION_REQUEST: (
        "could not confirm subscription due to malformed object or missing url"
    ),
    ErrorCode.INVALID_SUBSCRIPTION_REQUEST_RESPONSE: (
        "could not confirm the subscription due to a remote error"
    ),
    ErrorCode.MALFORMED_NOTIFICATION: "the notification is missing a required field",
}


@dataclass(frozen=True)
class ErrorRecord:
    """An error reported to the caller's error callback."""

    code: ErrorCode
    reason: str
    raw: Any

    @classmethod
    def build(cls, code: ErrorCode, raw: Any = None) -> "ErrorRecord":
        return cls(code=code, reason=ERROR_REASONS[code], raw=raw)


class VerificationError(Exception):
    """Raised when an envelope cannot be authenticated."""


class UnknownNotificationType(Exception):
    """Raised when the notification type discriminator is not a known DRS type."""

    def __init__(self, notification_type: Any) -> None:
        super().__init__(f"unknown notification type: {notification_type!r}")
        self.notification_type = notification_type


class MalformedNotification(Exception):
    """Raised when a classified notification lacks a required field."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is required")
        self.field = field


class MessageRejected(Exception):
    """Raised by the validate-only entry point when verification fails."""

    def __init__(self, error: ErrorRecord) -> None:
        super().__init__(error.reason)
        self.error = error
