"""Signature verification for SNS envelopes."""
from __future__ import annotations

import base64
import binascii
import logging
import re
from functools import lru_cache
from typing import Any, Dict, Mapping, Protocol
from urllib.parse import urlparse

import requests
from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from adapters.clients import http_session
from domain.models.envelope import Envelope, EnvelopeType
from exceptions import VerificationError

from .config import DEFAULT_CERT_HOST_PATTERN, EnvConfig

logger = logging.getLogger(__name__)

_NOTIFICATION_SIGNED_KEYS = ("Message", "MessageId", "Subject", "Timestamp", "TopicArn", "Type")
_CONFIRMATION_SIGNED_KEYS = ("Message", "MessageId", "SubscribeURL", "Timestamp", "Token", "TopicArn", "Type")

_HASHES = {
    "1": hashes.SHA1,
    "2": hashes.SHA256,
}


class EnvelopeVerifier(Protocol):
    def verify(self, body: Mapping[str, Any]) -> Envelope:
        ...


def string_to_sign(envelope: Envelope) -> bytes:
    keys = (
        _NOTIFICATION_SIGNED_KEYS
        if envelope.type is EnvelopeType.NOTIFICATION
        else _CONFIRMATION_SIGNED_KEYS
    )
    raw = envelope.raw
    parts = []
    for key in keys:
        # Subject is only signed when the publisher set one.
        if raw.get(key) is None:
            continue
        parts.append(f"{key}\n{raw[key]}\n")
    return "".join(parts).encode("utf-8")


class SnsMessageVerifier:
    """Checks an SNS envelope against the certificate it points at."""

    def __init__(
        self,
        session: requests.Session | None = None,
        cert_host_pattern: str = DEFAULT_CERT_HOST_PATTERN,
        timeout: float = 10.0,
    ) -> None:
        self._session = session or requests.Session()
        self._host_pattern = re.compile(cert_host_pattern)
        self._timeout = timeout
        self._certificates: Dict[str, x509.Certificate] = {}

    def verify(self, body: Mapping[str, Any]) -> Envelope:
        envelope = Envelope.from_dict(body)

        hash_type = _HASHES.get(envelope.signature_version)
        if hash_type is None:
            raise VerificationError(f"unsupported signature version: {envelope.signature_version!r}")

        try:
            signature = base64.b64decode(envelope.signature, validate=True)
        except (binascii.Error, ValueError):
            raise VerificationError("signature is not valid base64") from None

        certificate = self._certificate(envelope.signing_cert_url)
        try:
            certificate.public_key().verify(
                signature,
                string_to_sign(envelope),
                padding.PKCS1v15(),
                hash_type(),
            )
        except InvalidSignature:
            raise VerificationError("signature does not match the envelope") from None

        return envelope

    def _check_cert_url(self, url: str) -> None:
        parsed = urlparse(url)
        if parsed.scheme != "https" or not self._host_pattern.match(parsed.hostname or ""):
            raise VerificationError(f"untrusted signing certificate url: {url}")

    def _certificate(self, url: str) -> x509.Certificate:
        cached = self._certificates.get(url)
        if cached is not None:
            return cached

        self._check_cert_url(url)
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Could not download signing certificate: %s", exc, exc_info=True)
            raise VerificationError(f"could not download signing certificate: {exc}") from exc

        try:
            certificate = x509.load_pem_x509_certificate(response.content)
        except ValueError:
            raise VerificationError("signing certificate is not a PEM certificate") from None

        self._certificates[url] = certificate
        return certificate


@lru_cache(maxsize=1)
def default_verifier() -> SnsMessageVerifier:
    config = EnvConfig.load()
    return SnsMessageVerifier(
        session=http_session(),
        cert_host_pattern=config.cert_host_pattern,
        timeout=config.cert_timeout_seconds,
    )
