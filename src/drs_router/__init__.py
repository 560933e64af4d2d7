"""Route SNS-delivered DRS notifications to typed callbacks."""
from .handlers import HandlerSet
from .router import dispatch_payload, receive_request
from .validation import validate_message, validate_with_callbacks

__all__ = [
    "HandlerSet",
    "dispatch_payload",
    "receive_request",
    "validate_message",
    "validate_with_callbacks",
]
