"""Validate-only entry points: envelope verification without dispatch."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from domain.models.envelope import Envelope
from exceptions import ErrorCode, ErrorRecord, MessageRejected, VerificationError

from .handlers import HandlerSet
from .verification import EnvelopeVerifier, default_verifier

logger = logging.getLogger(__name__)

ValidationCallback = Callable[[Optional[ErrorRecord], Any], Any]


def validate_message(body: Mapping[str, Any], *, verifier: EnvelopeVerifier | None = None) -> Envelope:
    """Return the verified envelope or raise :class:`MessageRejected`."""

    verifier = verifier or default_verifier()
    try:
        return verifier.verify(body)
    except VerificationError as exc:
        logger.warning("Envelope failed verification: %s", exc)
        raise MessageRejected(ErrorRecord.build(ErrorCode.INVALID_SIGNATURE, exc)) from exc


def validate_with_callbacks(
    body: Mapping[str, Any],
    handlers: HandlerSet | None = None,
    callback: ValidationCallback | None = None,
    *,
    verifier: EnvelopeVerifier | None = None,
) -> Any:
    """Verify ``body`` and report the outcome through callbacks.

    Failures go to ``handlers.on_error`` when a handler set is given, else to
    ``callback(error, body)``. Success goes to
    ``handlers.on_only_validate_message`` when defined, else to
    ``callback(None, envelope)``. A success with neither sink is logged and
    ``None`` is returned.
    """

    try:
        envelope = validate_message(body, verifier=verifier)
    except MessageRejected as exc:
        if handlers is not None:
            return handlers.on_error(exc.error)
        if callback is not None:
            return callback(exc.error, body)
        logger.warning("No error handler for rejected envelope")
        return None

    if handlers is not None and handlers.on_only_validate_message is not None:
        return handlers.on_only_validate_message(envelope)
    if callback is not None:
        return callback(None, envelope)
    logger.info("Envelope verified with no success handler", extra={"messageId": envelope.message_id})
    return None
