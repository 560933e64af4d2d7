import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from helpers import CERT_URL, ORDER_PLACED_MESSAGE, drs_message, sns_body
from drs_router import handler as lambda_handler
from drs_router.config import DEFAULT_CERT_HOST_PATTERN, EnvConfig
from drs_router.verification import default_verifier
from exceptions import VerificationError


def _invoke(event, verifier, http=None):
    with patch("drs_router.router.default_verifier", return_value=verifier), patch(
        "drs_router.router.http_session", return_value=http or MagicMock()
    ):
        return lambda_handler.handler(event, None)


def test_order_placed_returns_200(verifier):
    response = _invoke({"body": json.dumps(sns_body(ORDER_PLACED_MESSAGE))}, verifier)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["serialNumber"] == "S1"
    assert body["orderInfo"] == {"instanceId": "I1", "slotId": "SL1", "productInfo": [{"asin": "A1"}]}


def test_dict_body_is_accepted(verifier):
    message = drs_message("SubscriptionChangedNotification", subscriptionInfo={"slotsSubscriptionStatus": {"a": True}})

    response = _invoke({"body": sns_body(message)}, verifier)

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["slotsSubscriptionStatus"] == {"a": True}


def test_invalid_signature_returns_403(verifier):
    verifier.verify.side_effect = VerificationError("bad signature")

    response = _invoke({"body": json.dumps(sns_body(ORDER_PLACED_MESSAGE))}, verifier)

    assert response["statusCode"] == 403
    assert json.loads(response["body"])["error"] == "invalid_signature"


def test_body_that_is_not_json_returns_403(verifier):
    response = _invoke({"body": "<html>"}, verifier)

    assert response["statusCode"] == 403
    verifier.verify.assert_not_called()


def test_unknown_message_returns_400(verifier):
    response = _invoke({"body": json.dumps(sns_body(drs_message("FooBar")))}, verifier)

    assert response["statusCode"] == 400
    assert json.loads(response["body"])["error"] == "unknown_message"


def test_non_drs_message_is_acknowledged(verifier):
    response = _invoke({"body": json.dumps(sns_body({"alarm": "cpu"}))}, verifier)

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["message"] == "Ignored non-DRS message"


def test_subscription_confirmation_returns_200(verifier):
    http = MagicMock()
    http.get.return_value = MagicMock(status_code=200, text="ok")

    response = _invoke({"body": json.dumps(sns_body("confirm", "SubscriptionConfirmation"))}, verifier, http)

    assert response["statusCode"] == 200
    http.get.assert_called_once()


def test_subscription_confirmation_failure_returns_502(verifier):
    http = MagicMock()
    http.get.side_effect = requests.Timeout("slow")

    response = _invoke({"body": json.dumps(sns_body("confirm", "SubscriptionConfirmation"))}, verifier, http)

    assert response["statusCode"] == 502


def test_direct_sns_record_keys_are_normalised(verifier):
    record = sns_body(ORDER_PLACED_MESSAGE)
    record["SigningCertUrl"] = record.pop("SigningCertURL")
    record["UnsubscribeUrl"] = record.pop("UnsubscribeURL")

    response = _invoke({"Records": [{"EventSource": "aws:sns", "Sns": record}]}, verifier)

    assert response["statusCode"] == 200
    verified_body = verifier.verify.call_args.args[0]
    assert verified_body["SigningCertURL"] == CERT_URL


def test_env_config_defaults(monkeypatch):
    for name in ("CONFIRM_TIMEOUT_SECONDS", "SIGNING_CERT_TIMEOUT_SECONDS", "SNS_CERT_HOST_PATTERN"):
        monkeypatch.delenv(name, raising=False)

    config = EnvConfig.load()

    assert config.confirm_timeout_seconds == 10.0
    assert config.cert_timeout_seconds == 10.0
    assert config.cert_host_pattern == DEFAULT_CERT_HOST_PATTERN


def test_env_config_rejects_bad_timeout(monkeypatch):
    monkeypatch.setenv("SIGNING_CERT_TIMEOUT_SECONDS", "soon")

    with pytest.raises(EnvironmentError):
        EnvConfig.load()


def test_default_verifier_uses_environment(monkeypatch):
    monkeypatch.setenv("SNS_CERT_HOST_PATTERN", r"^localhost$")
    monkeypatch.setenv("SIGNING_CERT_TIMEOUT_SECONDS", "2")
    default_verifier.cache_clear()
    try:
        verifier = default_verifier()
        assert verifier is default_verifier()
        assert verifier._host_pattern.pattern == r"^localhost$"
        assert verifier._timeout == 2.0
    finally:
        default_verifier.cache_clear()


def test_malformed_event_returns_500(verifier):
    response = _invoke({"Records": ["not-a-record"]}, verifier)

    assert response["statusCode"] == 500
    verifier.verify.assert_not_called()


def test_failing_callback_returns_500(verifier):
    with patch("drs_router.handler._on_subscription_changed", side_effect=RuntimeError("boom")):
        response = _invoke(
            {"body": json.dumps(sns_body(drs_message("SubscriptionChangedNotification")))}, verifier
        )

    assert response["statusCode"] == 500
    assert json.loads(response["body"])["error"] == "boom"
