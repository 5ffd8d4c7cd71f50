"""Presence checks for contact form submissions."""

from collections.abc import Mapping
from typing import Any, Optional

from app.constants.constants import FIELD_MESSAGE, FIELD_USER_EMAIL, FIELD_USER_NAME, ReasonCode
from app.schemas.emailSchema import ValidationOutcome


# Checked in this order, the first missing field wins
REQUIRED_FIELDS = (
    (FIELD_USER_NAME, ReasonCode.MISSING_NAME),
    (FIELD_USER_EMAIL, ReasonCode.MISSING_EMAIL),
    (FIELD_MESSAGE, ReasonCode.MISSING_MESSAGE),
)


def validate_submission(form_data: Optional[Mapping[str, Any]]) -> ValidationOutcome:
    """
    Check that a submission carries a name, an e-mail and a message.

    Only presence is checked: no e-mail syntax or length rules. Whitespace
    counts as content.

    Args:
        form_data: Mapping of the submitted form fields, or None when nothing was sent

    Returns:
        ValidationOutcome, rejected with the reason code of the first missing field
    """
    if not form_data or not isinstance(form_data, Mapping):
        return ValidationOutcome.reject(ReasonCode.MISSING_INPUT)

    for field, reason_code in REQUIRED_FIELDS:
        if not form_data.get(field):
            return ValidationOutcome.reject(reason_code)

    return ValidationOutcome.accept()
