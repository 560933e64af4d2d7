import json

TOPIC_ARN = "arn:aws:sns:us-east-1:123456789012:drs-notifications"
CERT_URL = "https://sns.us-east-1.amazonaws.com/SimpleNotificationService-0000000000000000000000.pem"
SUBSCRIBE_URL = "https://sns.us-east-1.amazonaws.com/?Action=ConfirmSubscription&TopicArn=drs&Token=abc"

ORDER_PLACED_MESSAGE = {
    "notificationInfo": {"notificationType": "OrderPlacedNotification"},
    "deviceInfo": {
        "deviceIdentifier": {"serialNumber": "S1"},
        "productIdentifier": {"modelId": "M1"},
    },
    "customerInfo": {"directedCustomerId": "C1"},
    "orderInfo": {"instanceId": "I1", "slotId": "SL1", "productInfo": [{"asin": "A1"}]},
}


def drs_message(notification_type: str, **extra) -> dict:
    message = json.loads(json.dumps(ORDER_PLACED_MESSAGE))
    message["notificationInfo"]["notificationType"] = notification_type
    message.update(extra)
    return message


def sns_body(message, envelope_type: str = "Notification", **extra) -> dict:
    body = {
        "Type": envelope_type,
        "MessageId": "22b80b92-fdea-4c2c-8f9d-bdfb0c7bf324",
        "TopicArn": TOPIC_ARN,
        "Subject": "DRS notification",
        "Message": message if isinstance(message, str) else json.dumps(message),
        "Timestamp": "2024-01-01T12:00:00.000Z",
        "SignatureVersion": "1",
        "Signature": "c2lnbmF0dXJl",
        "SigningCertURL": CERT_URL,
        "UnsubscribeURL": "https://sns.us-east-1.amazonaws.com/?Action=Unsubscribe",
    }
    if envelope_type != "Notification":
        body.pop("Subject")
        body["Token"] = "2336412f37fb687f5d51e6e241d09c805a5a57b30d712f794cc5f6a988666d92768dd60a747ba6f3"
        body["SubscribeURL"] = SUBSCRIBE_URL
    body.update(extra)
    return body
