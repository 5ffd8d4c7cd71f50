from app.constants.constants import MailTransportName
from app.services.MailTransport import MailConfigurationError, MailTransport
from app.services.MicrosoftGraphMailTransport import MicrosoftGraphMailTransport
from app.services.SmtpMailTransport import SmtpMailTransport


TRANSPORTS = {
    MailTransportName.smtp: SmtpMailTransport,
    MailTransportName.graph: MicrosoftGraphMailTransport,
}


def create_mail_transport(settings) -> MailTransport:
    """Build the transport named by MAIL_TRANSPORT."""
    try:
        name = MailTransportName(settings.MAIL_TRANSPORT.lower())
    except ValueError:
        supported = ", ".join(t.value for t in MailTransportName)
        raise MailConfigurationError(
            f"Unknown MAIL_TRANSPORT '{settings.MAIL_TRANSPORT}', expected one of: {supported}"
        )

    return TRANSPORTS[name].from_settings(settings)
