"""Microsoft Graph mail transport."""

import logging
import httpx
from datetime import datetime, timedelta

from app.schemas.emailSchema import MailMessage
from app.services.MailTransport import MailConfigurationError, MailTransport, TransmissionError, describe_error

logger = logging.getLogger(__name__)


class MicrosoftGraphMailTransport(MailTransport):
    """
    Send mail through the Microsoft Graph API.

    The app authenticates with the client-credentials flow and sends as the
    sender mailbox, which must exist in the M365 tenant and the app must hold
    the 'Mail.Send' application permission.
    """

    name = "graph"

    BASE_URL = "https://graph.microsoft.com/v1.0"
    TOKEN_URL = "https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token"

    def __init__(
        self,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        timeout: float = 30.0,
        http_transport: httpx.AsyncBaseTransport = None
    ):
        if not (tenant_id and client_id and client_secret):
            raise MailConfigurationError(
                "MICROSOFT_TENANT_ID, MICROSOFT_CLIENT_ID and MICROSOFT_CLIENT_SECRET "
                "are required for the graph mail transport"
            )
        self.tenant_id = tenant_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self.http_transport = http_transport
        self._access_token = None
        self._token_expiry = None

    @classmethod
    def from_settings(cls, settings) -> "MicrosoftGraphMailTransport":
        return cls(
            tenant_id=settings.MICROSOFT_TENANT_ID,
            client_id=settings.MICROSOFT_CLIENT_ID,
            client_secret=settings.MICROSOFT_CLIENT_SECRET,
            timeout=settings.MAIL_SEND_TIMEOUT
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.http_transport)

    async def _get_access_token(self, force_refresh: bool = False) -> str:
        """Get access token for application (not user-delegated)."""
        if not force_refresh and self._access_token and self._token_expiry:
            if datetime.utcnow() < self._token_expiry - timedelta(minutes=5):
                return self._access_token

        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "scope": "https://graph.microsoft.com/.default",
            "grant_type": "client_credentials"
        }

        async with self._client() as client:
            response = await client.post(self.TOKEN_URL.format(tenant_id=self.tenant_id), data=data)

        if response.status_code != 200:
            raise TransmissionError(f"Failed to get access token: {response.text}")

        token_data = response.json()
        self._access_token = token_data["access_token"]
        expires_in = token_data.get("expires_in", 3600)
        self._token_expiry = datetime.utcnow() + timedelta(seconds=expires_in)

        logger.info(f"✅ [Graph] New access token obtained, expires in {expires_in}s")
        return self._access_token

    def clear_token_cache(self):
        """Force clear the token cache to get fresh permissions."""
        self._access_token = None
        self._token_expiry = None
        logger.info("🔄 [Graph] Token cache cleared")

    def build_payload(self, message: MailMessage) -> dict:
        payload = {
            "message": {
                "subject": message.subject,
                "body": {
                    "contentType": "Text",
                    "content": message.body
                },
                "toRecipients": [
                    {"emailAddress": {"address": message.to}}
                ]
            },
            "saveToSentItems": "true"
        }

        if message.reply_to:
            payload["message"]["replyTo"] = [
                {"emailAddress": {"address": message.reply_to}}
            ]

        return payload

    async def send(self, message: MailMessage, retry_with_refresh: bool = True) -> None:
        """
        Send the message as the sender mailbox.

        Args:
            message: Message to deliver
            retry_with_refresh: If True, retry once with a fresh token on 403

        Raises:
            TransmissionError: when Graph refuses the message or cannot be reached
        """
        url = f"{self.BASE_URL}/users/{message.sender}/sendMail"

        try:
            token = await self._get_access_token()
            headers = {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json"
            }
            async with self._client() as client:
                response = await client.post(url, headers=headers, json=self.build_payload(message))
        except httpx.HTTPError as e:
            logger.error(f"❌ [Graph] Request failed: {e}")
            raise TransmissionError(describe_error(e)) from e

        if response.status_code == 403 and retry_with_refresh:
            logger.warning("⚠️ [Graph] Email send got 403, refreshing token and retrying...")
            self.clear_token_cache()
            return await self.send(message, retry_with_refresh=False)

        if response.status_code not in [200, 202]:
            error_detail = response.text
            logger.error(f"❌ [Graph] Failed to send email: {response.status_code} - {error_detail}")

            if response.status_code == 403:
                raise TransmissionError(
                    "Access denied when sending email. Please ensure: "
                    "1) The app has 'Mail.Send' application permission with admin consent. "
                    f"2) The sender mailbox '{message.sender}' exists in your M365 tenant."
                )
            raise TransmissionError(f"Failed to send email: {error_detail}")

        logger.info(f"✅ [Graph] Email sent to {message.to} (reply-to: {message.reply_to or 'none'})")
