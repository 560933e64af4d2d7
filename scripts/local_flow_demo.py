import base64
import json
import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.x509.oid import NameOID

from domain.models.envelope import Envelope
from drs_router import handler as lambda_handler
from drs_router.verification import SnsMessageVerifier, string_to_sign


MESSAGE = {
    "default": {
        "notificationInfo": {"notificationType": "OrderPlacedNotification"},
        "deviceInfo": {
            "deviceIdentifier": {"serialNumber": "G030QC0400000001"},
            "productIdentifier": {"modelId": "demo-model"},
        },
        "customerInfo": {"directedCustomerId": "amzn1.account.DEMO"},
        "orderInfo": {
            "instanceId": "amzn1.dash.v2.o.demo",
            "slotId": "demo-slot",
            "productInfo": [{"asin": "B000000000", "quantity": "1", "unit": "count"}],
        },
    }
}

ENVELOPE = {
    "Type": "Notification",
    "MessageId": "00000000-0000-0000-0000-000000000000",
    "TopicArn": "arn:aws:sns:us-east-1:123456789012:drs-demo",
    "Subject": "DRS demo",
    "Message": json.dumps(MESSAGE),
    "Timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z"),
    "SignatureVersion": "2",
    "SigningCertURL": "https://sns.us-east-1.amazonaws.com/SimpleNotificationService-demo.pem",
    "UnsubscribeURL": "https://sns.us-east-1.amazonaws.com/?Action=Unsubscribe",
}


def _self_signed_certificate():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "sns.amazonaws.com")])
    now = datetime.now(timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    return key, certificate.public_bytes(serialization.Encoding.PEM)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    key, pem = _self_signed_certificate()

    # Sign the envelope the way SNS would
    body = dict(ENVELOPE, Signature="")
    signature = key.sign(string_to_sign(Envelope.from_dict(body)), padding.PKCS1v15(), hashes.SHA256())
    body["Signature"] = base64.b64encode(signature).decode("ascii")

    # Serve the demo certificate instead of downloading it from SNS
    session = MagicMock()
    session.get.return_value = MagicMock(content=pem, status_code=200)
    verifier = SnsMessageVerifier(session=session)

    # Invoke the handler just like API Gateway would
    with patch("drs_router.router.default_verifier", return_value=verifier):
        response = lambda_handler.handler({"body": json.dumps(body)}, None)
    print("Lambda response:\n", json.dumps(response, indent=2))

    # Tamper with the message and show the rejection
    tampered = dict(body, Message=body["Message"].replace("demo-slot", "other-slot"))
    with patch("drs_router.router.default_verifier", return_value=verifier):
        response = lambda_handler.handler({"body": json.dumps(tampered)}, None)
    print("\nTampered envelope response:\n", json.dumps(response, indent=2))


if __name__ == "__main__":
    main()
