"""Domain model for signed SNS envelopes."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping

from exceptions import VerificationError


class EnvelopeType(str, Enum):
    NOTIFICATION = "Notification"
    SUBSCRIPTION_CONFIRMATION = "SubscriptionConfirmation"
    UNSUBSCRIBE_CONFIRMATION = "UnsubscribeConfirmation"


_COMMON_KEYS = (
    "Type",
    "MessageId",
    "TopicArn",
    "Message",
    "Timestamp",
    "SignatureVersion",
    "Signature",
    "SigningCertURL",
)

# SubscribeURL is checked by the confirmer so a missing URL is not a signature failure.
_CONFIRMATION_KEYS = _COMMON_KEYS + ("Token",)


@dataclass(frozen=True)
class Envelope:
    """An SNS envelope whose structure has been checked."""

    type: EnvelopeType
    message_id: str
    topic_arn: str
    message: str
    timestamp: str
    signature_version: str
    signature: str
    signing_cert_url: str
    subject: str | None = None
    unsubscribe_url: str | None = None
    subscribe_url: str | None = None
    token: str | None = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_confirmation(self) -> bool:
        return self.type is EnvelopeType.SUBSCRIPTION_CONFIRMATION

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> "Envelope":
        if not isinstance(body, Mapping):
            raise VerificationError("envelope must be a JSON object")

        try:
            envelope_type = EnvelopeType(body.get("Type"))
        except ValueError:
            raise VerificationError(f"unsupported envelope type: {body.get('Type')!r}") from None

        required = _COMMON_KEYS if envelope_type is EnvelopeType.NOTIFICATION else _CONFIRMATION_KEYS
        missing = [key for key in required if not isinstance(body.get(key), str)]
        if missing:
            raise VerificationError(f"envelope is missing required keys: {', '.join(missing)}")

        return cls(
            type=envelope_type,
            message_id=body["MessageId"],
            topic_arn=body["TopicArn"],
            message=body["Message"],
            timestamp=body["Timestamp"],
            signature_version=body["SignatureVersion"],
            signature=body["Signature"],
            signing_cert_url=body["SigningCertURL"],
            subject=body.get("Subject"),
            unsubscribe_url=body.get("UnsubscribeURL"),
            subscribe_url=body.get("SubscribeURL"),
            token=body.get("Token"),
            raw=dict(body),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)
