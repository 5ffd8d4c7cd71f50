import pytest
from pydantic import ValidationError

from app.constants.constants import ReasonCode
from app.schemas.emailSchema import SubmissionResponse
from app.services.MailTransport import TransmissionError

from fakes import FakeTransport, make_handler


INVALID_INPUT = SubmissionResponse(status=400, message="Invalid input", success=False)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "form_data",
    [
        None,
        {},
        {"user_name": "", "user_email": "a@b.com", "message": "hi"},
        {"user_name": "Kolja", "user_email": "", "message": "hi"},
        {"user_name": "Kolja", "user_email": "a@b.com", "message": ""},
    ],
)
async def test_rejected_input_collapses_to_invalid_input(handler, fake_transport, form_data):
    response = await handler.handle(form_data)
    assert response == INVALID_INPUT
    assert fake_transport.sent == []


@pytest.mark.asyncio
async def test_rejection_reason_is_kept_internally(handler):
    result = await handler.process({"user_name": "Kolja", "message": "hi"})
    assert result.response == INVALID_INPUT
    assert result.reason_code == ReasonCode.MISSING_EMAIL


@pytest.mark.asyncio
async def test_successful_transmission(handler, fake_transport, valid_form):
    response = await handler.handle(valid_form)

    assert response == SubmissionResponse(status=200, message="E-Mail sent successfully", success=True)
    assert len(fake_transport.sent) == 1
    message = fake_transport.sent[0]
    assert message.to == "user@website.com"
    assert message.sender == "peter.pan@disney.com"
    assert message.subject == "Test E-Mail"
    assert message.body == "Hello there!"
    assert message.reply_to is None


@pytest.mark.asyncio
async def test_reply_to_submitter(valid_form):
    transport = FakeTransport()
    handler = make_handler(transport, reply_to_submitter=True)

    await handler.handle(valid_form)

    assert transport.sent[0].reply_to == "kolja@example.com"


@pytest.mark.asyncio
async def test_transmission_error_message_is_passed_through(valid_form):
    handler = make_handler(FakeTransport(error=TransmissionError("Connection refused")))

    response = await handler.handle(valid_form)

    assert response == SubmissionResponse(status=500, message="Connection refused", success=False)


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_failure_response(valid_form):
    handler = make_handler(FakeTransport(error=RuntimeError("transport exploded")))

    response = await handler.handle(valid_form)

    assert response.status == 500
    assert response.success is False
    assert response.message == "transport exploded"


@pytest.mark.asyncio
async def test_unexpected_exception_without_text_uses_class_name(valid_form):
    handler = make_handler(FakeTransport(error=KeyError()))

    response = await handler.handle(valid_form)

    assert response.status == 500
    assert response.message == "KeyError"


@pytest.mark.asyncio
async def test_slow_transport_times_out(valid_form):
    transport = FakeTransport(delay=1)
    handler = make_handler(transport, send_timeout=0.05)

    response = await handler.handle(valid_form)

    assert response.status == 500
    assert response.success is False
    assert response.message == "E-Mail transmission timed out after 0.05 seconds"
    assert transport.sent == []


def test_response_rejects_inconsistent_success():
    with pytest.raises(ValidationError):
        SubmissionResponse(status=500, message="Oops", success=True)
    with pytest.raises(ValidationError):
        SubmissionResponse(status=200, message="Oops", success=False)
