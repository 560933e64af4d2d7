"""Exception definitions for the DRS notification router."""
from .errors import (
    ERROR_REASONS,
    ErrorCode,
    ErrorRecord,
    MalformedNotification,
    MessageRejected,
    UnknownNotificationType,
    VerificationError,
)

__all__ = [
    "ERROR_REASONS",
    "ErrorCode",
    "ErrorRecord",
    "MalformedNotification",
    "MessageRejected",
    "UnknownNotificationType",
    "VerificationError",
]
