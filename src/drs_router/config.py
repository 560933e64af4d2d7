"""Configuration helpers for the DRS notification router."""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CERT_HOST_PATTERN = r"^sns\.[a-zA-Z0-9\-]{3,}\.amazonaws\.com(\.cn)?$"


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise EnvironmentError(f"{name} must be a number, got {value!r}") from None


@dataclass
class EnvConfig:
    confirm_timeout_seconds: float = 10.0
    cert_timeout_seconds: float = 10.0
    cert_host_pattern: str = DEFAULT_CERT_HOST_PATTERN

    @classmethod
    def load(cls) -> "EnvConfig":
        return cls(
            confirm_timeout_seconds=_float_env("CONFIRM_TIMEOUT_SECONDS", cls.confirm_timeout_seconds),
            cert_timeout_seconds=_float_env("SIGNING_CERT_TIMEOUT_SECONDS", cls.cert_timeout_seconds),
            cert_host_pattern=os.getenv("SNS_CERT_HOST_PATTERN") or DEFAULT_CERT_HOST_PATTERN,
        )
