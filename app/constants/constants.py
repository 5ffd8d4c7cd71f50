"""Constants for rejection reasons, response messages and well-known SMTP services."""

from enum import Enum


class ReasonCode(str, Enum):
    """Enumeration of reasons a contact form submission can be rejected."""

    MISSING_INPUT = "MISSING_INPUT"
    MISSING_NAME = "MISSING_NAME"
    MISSING_EMAIL = "MISSING_EMAIL"
    MISSING_MESSAGE = "MISSING_MESSAGE"


class MailTransportName(str, Enum):
    """Enumeration of the supported mail transports."""

    smtp = "smtp"
    graph = "graph"


REJECTION_MESSAGES = {
    ReasonCode.MISSING_INPUT: "No data was sent",
    ReasonCode.MISSING_NAME: 'The "Name" field is empty',
    ReasonCode.MISSING_EMAIL: 'The "E-Mail" field is empty',
    ReasonCode.MISSING_MESSAGE: "No message was sent",
}

# Wire keys of the contact form, in the order they are checked
FIELD_USER_NAME = "user_name"
FIELD_USER_EMAIL = "user_email"
FIELD_MESSAGE = "message"

INVALID_INPUT_MESSAGE = "Invalid input"
SENT_SUCCESSFULLY_MESSAGE = "E-Mail sent successfully"
TIMEOUT_MESSAGE = "E-Mail transmission timed out after {seconds:g} seconds"

REJECTION_REASON_HEADER = "X-Rejection-Reason"

# Host, port and TLS mode of providers that can be selected with SMTP_SERVICE
SMTP_SERVICES = {
    "gmail": {"host": "smtp.gmail.com", "port": 465, "secure": True},
    "outlook": {"host": "smtp-mail.outlook.com", "port": 587, "secure": False},
    "hotmail": {"host": "smtp-mail.outlook.com", "port": 587, "secure": False},
    "yahoo": {"host": "smtp.mail.yahoo.com", "port": 465, "secure": True},
    "icloud": {"host": "smtp.mail.me.com", "port": 587, "secure": False},
}
