"""API endpoint receiving the contact form and forwarding it by e-mail."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.constants.constants import REJECTION_REASON_HEADER
from app.core.config import Settings, get_settings
from app.schemas.emailSchema import SubmissionResponse
from app.services.SubmissionHandler import SubmissionHandler
from app.utils.read_form_data import read_form_data

router = APIRouter(
    prefix="/email",
    tags=["E-Mail"]
)


def get_submission_handler(request: Request) -> SubmissionHandler:
    """Return the submission handler built at application start-up."""
    return request.app.state.submission_handler


@router.post("/send", response_model=SubmissionResponse)
async def send_email(
    request: Request,
    handler: SubmissionHandler = Depends(get_submission_handler),
    settings: Settings = Depends(get_settings)
):
    """
    Send the contact form message to the configured mailbox.

    The HTTP status is always 200; the outcome is carried by the `status`,
    `message` and `success` fields of the body.
    """
    form_data = await read_form_data(request)
    result = await handler.process(form_data)

    response = JSONResponse(content=result.response.model_dump())
    if settings.EXPOSE_REJECTION_REASON and result.reason_code:
        response.headers[REJECTION_REASON_HEADER] = result.reason_code.value
    return response
