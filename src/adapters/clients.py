"""Client factories for the outbound HTTP calls made by the router."""
from __future__ import annotations

import requests


def http_session() -> requests.Session:
    return requests.Session()
