"""Send one message through the configured mail transport to check the credentials."""

import sys
import os
import asyncio

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from app.core.config import settings
from app.services.MailTransportFactory import create_mail_transport
from app.services.SubmissionHandler import SubmissionHandler


async def send_test_email(message: str):
    """Run a submission through the same handler the API uses."""
    transport = create_mail_transport(settings)
    handler = SubmissionHandler.from_settings(settings, transport)

    print(f"📮 Transport: {transport.name}")
    print(f"📨 From {settings.MAIL_FROM} to {settings.MAIL_TO}: {settings.MAIL_SUBJECT}")

    return await handler.handle({
        "user_name": "Test",
        "user_email": settings.MAIL_FROM,
        "message": message
    })


if __name__ == "__main__":
    text = " ".join(sys.argv[1:]) or "This is a test message from the contact mail API."

    try:
        response = asyncio.run(send_test_email(text))
        print(f"{'✅' if response.success else '❌'} {response.status}: {response.message}")
        sys.exit(0 if response.success else 1)
    except KeyboardInterrupt:
        print("\n\n⚠️ Process interrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ Unexpected error: {str(e)}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
