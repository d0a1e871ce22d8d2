# =============================================================================
# omi/response_mapper.py  —  Response Mapper
# =============================================================================
#
# Translates an httpx.Response into a tool result, or raises.
#
#   2xx GET   →  {"conversations": [...]} / {"memories": [...]}
#                (a missing or null array becomes [], never an error)
#   2xx POST  →  {}   (the body is not read)
#   non-2xx   →  RemoteError with status code, status text and body text
#   bad JSON  →  InternalError
# =============================================================================

import json
import logging
from typing import Any

import httpx

from omi.errors import InternalError, RemoteError

logger = logging.getLogger(__name__)


def _body_text(response: httpx.Response) -> str:
    """Best-effort read of an error body; unreadable bodies become ''."""
    try:
        return response.text
    except (httpx.HTTPError, httpx.ResponseNotRead, UnicodeDecodeError) as exc:
        logger.warning("Could not read Omi error body: %s", exc)
        return ""


def raise_for_status(response: httpx.Response, action: str) -> None:
    """Raise RemoteError unless the response has a 2xx status."""
    if response.is_success:
        return
    raise RemoteError(
        action=action,
        status_code=response.status_code,
        status_text=response.reason_phrase,
        body=_body_text(response),
    )


def map_list_response(response: httpx.Response, key: str, action: str) -> dict[str, list[Any]]:
    """Extract the ``key`` array from a successful GET response.

    Remote ordering is preserved and the records are passed through
    untouched.
    """
    raise_for_status(response, action)
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InternalError(f"{action}: Omi API returned malformed JSON ({exc})") from exc

    if not isinstance(data, dict):
        raise InternalError(
            f"{action}: expected a JSON object from Omi API, got {type(data).__name__}"
        )

    items = data.get(key)
    if items is None:
        return {key: []}
    if not isinstance(items, list):
        raise InternalError(
            f"{action}: expected '{key}' to be a list, got {type(items).__name__}"
        )
    return {key: items}


def map_create_response(response: httpx.Response, action: str) -> dict[str, Any]:
    raise_for_status(response, action)
    return {}
