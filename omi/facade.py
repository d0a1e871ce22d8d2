# =============================================================================
# omi/facade.py  —  The Tool Façade (the four Omi operations)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Exposes the four operations callers can invoke.  Each one is the same
#   linear pipeline, with no branch back and no retry state:
#
#     Received → Validated → RequestBuilt → AwaitingResponse → Success | Failed
#
#     1. validate_params()      (omi/models.py)          → ValidationError
#     2. build_*()              (omi/request_builder.py)
#     3. OmiClient.send()       (omi/client.py)          → InternalError
#     4. map_*_response()       (omi/response_mapper.py) → RemoteError / InternalError
#
# OPERATION NAMING:
#   read_*   → GET, safe to repeat
#   create_* → POST, NOT idempotent.  Calling create_memories twice with the
#              same input creates two sets of memories on the Omi side.
# =============================================================================

import logging
from collections.abc import Mapping
from typing import Any

from omi.client import OmiClient
from omi.config import OmiConfig
from omi.models import (
    CreateConversationParams,
    CreateMemoriesParams,
    ReadConversationsParams,
    ReadMemoriesParams,
    validate_params,
)
from omi.request_builder import (
    build_create_conversation,
    build_create_memories,
    build_read_conversations,
    build_read_memories,
)
from omi.response_mapper import map_create_response, map_list_response

logger = logging.getLogger(__name__)

Params = Mapping[str, Any] | None


class OmiFacade:
    """Validates tool parameters, calls Omi, and maps the outcome.

    Holds only read-only configuration, so one instance can serve any
    number of concurrent invocations.
    """

    def __init__(self, config: OmiConfig, client: OmiClient | None = None) -> None:
        self._config = config
        self._client = client or OmiClient(config)

    async def read_conversations(self, params: Params) -> dict[str, list[Any]]:
        """Return ``{"conversations": [...]}`` for a user, in remote order."""
        validated = validate_params(ReadConversationsParams, params)
        request = build_read_conversations(self._config.app_id, validated)
        response = await self._client.send(request)
        result = map_list_response(response, "conversations", "Failed to read conversations")
        logger.debug("Read %d conversations", len(result["conversations"]))
        return result

    async def read_memories(self, params: Params) -> dict[str, list[Any]]:
        """Return ``{"memories": [...]}`` for a user, in remote order."""
        validated = validate_params(ReadMemoriesParams, params)
        request = build_read_memories(self._config.app_id, validated)
        response = await self._client.send(request)
        result = map_list_response(response, "memories", "Failed to read memories")
        logger.debug("Read %d memories", len(result["memories"]))
        return result

    async def create_conversation(self, params: Params) -> dict[str, Any]:
        """Create one conversation.  Not idempotent."""
        validated = validate_params(CreateConversationParams, params)
        request = build_create_conversation(self._config.app_id, validated)
        response = await self._client.send(request)
        return map_create_response(response, "Failed to create conversation")

    async def create_memories(self, params: Params) -> dict[str, Any]:
        """Create memories from ``text`` or an explicit ``memories`` list.

        Not idempotent.
        """
        validated = validate_params(CreateMemoriesParams, params)
        request = build_create_memories(self._config.app_id, validated)
        response = await self._client.send(request)
        return map_create_response(response, "Failed to create memories")
