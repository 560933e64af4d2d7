from unittest.mock import MagicMock

import pytest

from domain.models.envelope import Envelope


@pytest.fixture
def verifier():
    """A verifier that accepts any structurally valid envelope."""
    fake = MagicMock()
    fake.verify.side_effect = Envelope.from_dict
    return fake


@pytest.fixture
def http():
    session = MagicMock()
    session.get.return_value = MagicMock(status_code=200, text="<ConfirmSubscriptionResponse/>")
    return session
