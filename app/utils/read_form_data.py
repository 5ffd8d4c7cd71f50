import json
import logging
from typing import Any, Optional

from fastapi import Request

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_form_data(request: Request) -> Optional[Any]:
    """
    Read the submitted form from a JSON or form-encoded request body.

    Returns None when the body is empty or cannot be parsed, which the
    validator treats as "no data was sent".
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except Exception as e:
            logger.warning(f"⚠️ Could not parse form body: {e}")
            return None
        return dict(form.items())

    body = await request.body()
    if not body:
        return None

    try:
        return json.loads(body)
    except ValueError as e:
        logger.warning(f"⚠️ Could not parse JSON body: {e}")
        return None
