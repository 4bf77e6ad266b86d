import logging
import sys

import requests

from .config import Settings
from .errors import ConfigError, ServiceError
from .query import build_chat_payload

logger = logging.getLogger(__name__)


def _reply_text(payload: object) -> str:
    try:
        content = payload["choices"][0]["message"]["content"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError) as exc:
        raise ServiceError("Completion response has no choices") from exc
    return content or ""


def request_completion(query: str, settings: Settings) -> str:
    """Send ``query`` as the user turn and return the assistant's reply.

    A non-200 status is reported and yields an empty reply; transport errors
    and malformed bodies raise ServiceError.
    """
    if not settings.token:
        raise ConfigError("No API token configured")
    try:
        response = requests.post(
            settings.endpoint,
            json=build_chat_payload(query, settings.model),
            headers={"Authorization": f"Bearer {settings.token}"},
            timeout=settings.timeout,
        )
    except requests.RequestException as exc:
        raise ServiceError(f"Request to {settings.endpoint} failed: {exc}") from exc

    if response.status_code != 200:
        logger.debug("Completion service returned %s: %s", response.status_code, response.text)
        print(f"Error: {response.status_code}", file=sys.stderr)
        print(f"Error: {response.text}", file=sys.stderr)
        return ""

    try:
        payload = response.json()
    except ValueError as exc:
        raise ServiceError("Completion response is not valid JSON", status=response.status_code) from exc
    return _reply_text(payload)
