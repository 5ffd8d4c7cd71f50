"""Interface shared by the mail transports."""

from abc import ABC, abstractmethod

from app.schemas.emailSchema import MailMessage


class TransmissionError(Exception):
    """Raised by a transport when the message could not be delivered."""

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description


class MailConfigurationError(Exception):
    """Raised at start-up when the mail transport cannot be built from the settings."""


def describe_error(error: BaseException) -> str:
    """Human readable description of an exception, falling back to its class name."""
    return str(error) or error.__class__.__name__


class MailTransport(ABC):
    """
    Delivers a MailMessage to its recipient.

    Implementations are built once at start-up and shared across requests,
    so send() must not keep per-request state on the instance.
    """

    name = "base"

    @abstractmethod
    async def send(self, message: MailMessage) -> None:
        """Deliver the message, raising TransmissionError on failure."""
        pass
