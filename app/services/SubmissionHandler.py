"""Turns a contact form submission into an e-mail and a SubmissionResponse."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, Optional

from app.constants.constants import (
    FIELD_MESSAGE,
    FIELD_USER_EMAIL,
    FIELD_USER_NAME,
    INVALID_INPUT_MESSAGE,
    SENT_SUCCESSFULLY_MESSAGE,
    TIMEOUT_MESSAGE,
)
from app.schemas.emailSchema import MailMessage, SubmissionInput, SubmissionResponse, SubmissionResult
from app.services.MailTransport import MailTransport, TransmissionError, describe_error
from app.services.SubmissionValidator import validate_submission

logger = logging.getLogger(__name__)


class SubmissionHandler:
    """
    Validate a submission, forward the message through the mail transport and
    normalize the outcome into exactly one SubmissionResponse.

    Sender, recipient and subject are fixed at construction; only the message
    body comes from the submitted form.

    send_timeout only stops waiting for the transport. Work the transport
    started in a thread (SMTP) keeps running, so a message can still arrive
    after a "timed out" response; transports bound their own I/O below
    send_timeout to keep that window small.
    """

    def __init__(
        self,
        transport: MailTransport,
        sender: str,
        recipient: str,
        subject: str,
        send_timeout: float = 30.0,
        reply_to_submitter: bool = False
    ):
        self.transport = transport
        self.sender = sender
        self.recipient = recipient
        self.subject = subject
        self.send_timeout = send_timeout
        self.reply_to_submitter = reply_to_submitter

    @classmethod
    def from_settings(cls, settings, transport: MailTransport) -> "SubmissionHandler":
        return cls(
            transport=transport,
            sender=settings.MAIL_FROM,
            recipient=settings.MAIL_TO,
            subject=settings.MAIL_SUBJECT,
            send_timeout=settings.MAIL_SEND_TIMEOUT,
            reply_to_submitter=settings.MAIL_REPLY_TO_SUBMITTER
        )

    def build_message(self, submission: SubmissionInput) -> MailMessage:
        return MailMessage(
            to=self.recipient,
            sender=self.sender,
            subject=self.subject,
            body=submission.message,
            reply_to=submission.email if self.reply_to_submitter else None
        )

    async def process(self, form_data: Optional[Mapping[str, Any]]) -> SubmissionResult:
        """Handle a submission and keep the rejection reason next to the public response."""
        outcome = validate_submission(form_data)

        if not outcome.accepted:
            # The public response is deliberately generic, the reason only goes to the log
            logger.info(f"🚫 Submission rejected: {outcome.reason_code.value} ({outcome.human_message})")
            return SubmissionResult(
                response=SubmissionResponse(status=400, message=INVALID_INPUT_MESSAGE, success=False),
                reason_code=outcome.reason_code
            )

        submission = SubmissionInput(
            user_name=str(form_data[FIELD_USER_NAME]),
            user_email=str(form_data[FIELD_USER_EMAIL]),
            message=str(form_data[FIELD_MESSAGE])
        )
        return SubmissionResult(response=await self._transmit(self.build_message(submission)))

    async def _transmit(self, message: MailMessage) -> SubmissionResponse:
        try:
            await asyncio.wait_for(self.transport.send(message), timeout=self.send_timeout)
        except TransmissionError as e:
            logger.error(f"❌ Mail transport reported an error: {e.description}")
            return SubmissionResponse(status=500, message=e.description, success=False)
        except asyncio.TimeoutError:
            logger.error(f"⏱️ Mail transport did not answer within {self.send_timeout}s")
            return SubmissionResponse(
                status=500,
                message=TIMEOUT_MESSAGE.format(seconds=self.send_timeout),
                success=False
            )
        except Exception as e:
            logger.exception(f"🔥 Unexpected error while sending the email: {e}")
            return SubmissionResponse(status=500, message=describe_error(e), success=False)

        return SubmissionResponse(status=200, message=SENT_SUCCESSFULLY_MESSAGE, success=True)

    async def handle(self, form_data: Optional[Mapping[str, Any]]) -> SubmissionResponse:
        """
        Handle one contact form submission.

        Args:
            form_data: Mapping with user_name, user_email and message, or None

        Returns:
            SubmissionResponse: 400 for invalid input, 500 when the transport
            fails, 200 once the e-mail is sent. Never raises.
        """
        result = await self.process(form_data)
        return result.response
