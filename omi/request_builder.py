# =============================================================================
# omi/request_builder.py  —  Request Builder
# =============================================================================
#
# Turns a VALIDATED parameter model into exactly one OmiRequest.  No I/O
# happens here, so every URL and body can be asserted on directly in tests.
#
# RULES:
#   - user_id always travels as the query key "uid", first in the query.
#   - Optional parameters the caller did not supply never appear: no
#     "offset=" query keys and no "null" JSON values.
#   - Booleans go on the wire as lowercase "true"/"false".
# =============================================================================

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from omi.models import (
    CreateConversationParams,
    CreateMemoriesParams,
    ReadConversationsParams,
    ReadMemoriesParams,
)

API_VERSION = "v2"


@dataclass(frozen=True)
class OmiRequest:
    """One outbound call to the Omi integrations API."""

    method: str                        # "GET" or "POST"
    path: str                          # "/v2/integrations/<app>/memories"
    query: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] | None = None # JSON body, POST only


def _integration_path(app_id: str, resource: str) -> str:
    return f"/{API_VERSION}/integrations/{quote(app_id, safe='')}/{resource}"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _query(user_id: str, **optional: Any) -> dict[str, str]:
    query = {"uid": user_id}
    for key, value in optional.items():
        if value is None or value == "":
            continue
        query[key] = _query_value(value)
    return query


# -----------------------------------------------------------------------------
# GET builders
# -----------------------------------------------------------------------------
def build_read_conversations(app_id: str, params: ReadConversationsParams) -> OmiRequest:
    return OmiRequest(
        method="GET",
        path=_integration_path(app_id, "conversations"),
        query=_query(
            params.user_id,
            limit=params.limit,
            offset=params.offset,
            include_discarded=params.include_discarded,
            statuses=params.statuses,
        ),
    )


def build_read_memories(app_id: str, params: ReadMemoriesParams) -> OmiRequest:
    return OmiRequest(
        method="GET",
        path=_integration_path(app_id, "memories"),
        query=_query(params.user_id, limit=params.limit, offset=params.offset),
    )


# -----------------------------------------------------------------------------
# POST builders
# -----------------------------------------------------------------------------
def build_create_conversation(app_id: str, params: CreateConversationParams) -> OmiRequest:
    """Build the create-conversation call.

    ``language`` is always in the body because the model defaults it to
    ``"en"``; every other optional field is present only when supplied.
    """
    return OmiRequest(
        method="POST",
        path=_integration_path(app_id, "user/conversations"),
        query={"uid": params.user_id},
        body=params.model_dump(mode="json", exclude={"user_id"}, exclude_none=True),
    )


def build_create_memories(app_id: str, params: CreateMemoriesParams) -> OmiRequest:
    return OmiRequest(
        method="POST",
        path=_integration_path(app_id, "user/memories"),
        query={"uid": params.user_id},
        body=params.model_dump(mode="json", exclude={"user_id"}, exclude_none=True),
    )
