from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.constants.constants import REJECTION_MESSAGES, ReasonCode


class SubmissionInput(BaseModel):
    """Contact form fields, populated from the wire keys of the form."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="user_name")
    email: str = Field(alias="user_email")
    message: str


class ValidationOutcome(BaseModel):
    """Result of validating a submission: accepted, or rejected with a reason code."""
    model_config = ConfigDict(frozen=True)

    accepted: bool
    reason_code: Optional[ReasonCode] = None
    human_message: Optional[str] = None

    @classmethod
    def accept(cls) -> "ValidationOutcome":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason_code: ReasonCode) -> "ValidationOutcome":
        return cls(
            accepted=False,
            reason_code=reason_code,
            human_message=REJECTION_MESSAGES[reason_code]
        )

    @model_validator(mode="after")
    def check_reason(self) -> "ValidationOutcome":
        if self.accepted and self.reason_code is not None:
            raise ValueError("An accepted outcome cannot carry a reason code")
        if not self.accepted and self.reason_code is None:
            raise ValueError("A rejected outcome needs a reason code")
        return self


class SubmissionResponse(BaseModel):
    """Response schema for contact form submission."""
    model_config = ConfigDict(frozen=True)

    status: int
    message: str
    success: bool

    @model_validator(mode="after")
    def check_success_matches_status(self) -> "SubmissionResponse":
        if self.success != (self.status == 200):
            raise ValueError("success must be true exactly when status is 200")
        return self


class SubmissionResult(BaseModel):
    """Public response plus the rejection reason, which never leaves the server unless asked for."""
    model_config = ConfigDict(frozen=True)

    response: SubmissionResponse
    reason_code: Optional[ReasonCode] = None


class MailMessage(BaseModel):
    """Transmission request handed to a mail transport."""
    model_config = ConfigDict(frozen=True)

    to: str
    sender: str
    subject: str
    body: str
    reply_to: Optional[str] = None
