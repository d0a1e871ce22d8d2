# =============================================================================
# omi_server/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers the four Omi tools on a FastMCP server.  Each tool is a thin
#   wrapper around an OmiFacade method: it logs the call, forwards the
#   supplied parameters, and turns façade errors into MCP tool errors.
#
# HOW IT WORKS (the flow):
#   1. An MCP client (Claude Desktop, an agent, main.py) calls a tool by
#      name over stdio, e.g. "read_omi_memories"
#   2. FastMCP routes the call to the decorated function below
#   3. The function hands the parameters to OmiFacade (omi/facade.py),
#      which validates them, calls the Omi API and maps the response
#   4. The dict result (or a ToolError) goes back to the client
#
# TOOL NAMING CONVENTIONS:
#   - read_omi_*   → GET, read-only, safe to call again
#   - create_omi_* → POST, creates records.  NOT idempotent: calling twice
#                    creates two records.  Nothing here retries.
#
# RUNNING THIS SERVER:
#     a) python -m omi_server.mcp_server
#     b) omi-mcp                      (console script from pyproject.toml)
#     c) spawned over stdio by main.py or any MCP client
# =============================================================================

import json
import logging
import os
import sys
from typing import Annotated, Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field

from omi.client import OmiClient
from omi.config import OmiConfig
from omi.errors import ConfigError, OmiError
from omi.facade import OmiFacade
from omi.models import ConversationTextSource, Geolocation, MemoryCreateSpec, MemoryTextSource

# =============================================================================
# Logging Setup
# =============================================================================
# Everything goes to STDERR.  STDOUT is the MCP transport; a stray log line
# there would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status messages
#     - RED for errors returned to the caller
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Errors
_RESET = "\033[0m"     # Reset to default terminal color

SERVER_NAME = "omi-mcp"


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to stderr at the given level name."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, params: dict[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    payload = json.dumps(result, separators=(",", ":"), default=str)
    logging.info(f"{_GREEN}  ← {tool_name} response: {payload}{_RESET}")
    return result


def _log_error(tool_name: str, error: Exception) -> None:
    logging.error(f"{_RED}  ✗ {tool_name} failed ({type(error).__name__}): {error}{_RESET}")


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _supplied(**params: Any) -> dict[str, Any]:
    """Keep only the parameters the caller actually passed, as plain JSON values.

    Typed arguments (Geolocation, MemoryCreateSpec) arrive as model instances;
    the façade validates the raw mapping again, so they are dumped back.
    """
    return {key: _plain(value) for key, value in params.items() if value is not None}


# =============================================================================
# Server factory
# =============================================================================
# Configuration is passed in rather than read from module globals, so tests
# can build a server around a fake config and an httpx.MockTransport.
# =============================================================================
def build_server(config: OmiConfig, client: OmiClient | None = None) -> FastMCP:
    """Create a FastMCP server exposing the four Omi tools."""
    facade = OmiFacade(config, client=client)
    mcp = FastMCP(SERVER_NAME)

    async def _invoke(tool_name: str, operation, params: dict[str, Any]) -> dict:
        _log_request(tool_name, params)
        try:
            result = await operation(params)
        except OmiError as exc:
            _log_error(tool_name, exc)
            raise ToolError(str(exc)) from exc
        return _log_response(tool_name, result)

    # =========================================================================
    # TOOL 1: read_omi_conversations
    # =========================================================================
    @mcp.tool()
    async def read_omi_conversations(
        user_id: Annotated[str, Field(description="The Omi user ID to fetch conversations for.")],
        limit: Annotated[
            int | None,
            Field(description="Maximum number of conversations to return (Omi caps this at 1000)."),
        ] = None,
        offset: Annotated[
            int | None, Field(description="Number of conversations to skip, for pagination.")
        ] = None,
        include_discarded: Annotated[
            bool | None, Field(description="Whether to include discarded conversations.")
        ] = None,
        statuses: Annotated[
            str | None,
            Field(description="Comma-separated list of statuses to filter conversations by."),
        ] = None,
    ) -> dict:
        """Retrieve conversations from Omi for a specific user.

        Supports pagination (limit/offset) and filtering by status or
        discarded state.  Conversations are returned in Omi's order.

        Returns:
            {"conversations": [...]} where each conversation has:
              - id, created_at, started_at, finished_at
              - text: full conversation text
              - structured: {title, overview}
              - transcript_segments: [{text, start_time, end_time}]
              - geolocation: {latitude, longitude}
        """
        params = _supplied(
            user_id=user_id,
            limit=limit,
            offset=offset,
            include_discarded=include_discarded,
            statuses=statuses,
        )
        return await _invoke("read_omi_conversations", facade.read_conversations, params)

    # =========================================================================
    # TOOL 2: read_omi_memories
    # =========================================================================
    @mcp.tool()
    async def read_omi_memories(
        user_id: Annotated[str, Field(description="The Omi user ID to fetch memories for.")],
        limit: Annotated[
            int | None,
            Field(description="Maximum number of memories to return (Omi caps this at 1000)."),
        ] = None,
        offset: Annotated[
            int | None, Field(description="Number of memories to skip, for pagination.")
        ] = None,
    ) -> dict:
        """Retrieve memories (durable facts about the user) from Omi.

        Returns:
            {"memories": [...]} where each memory has:
              - id, content, created_at
              - tags: list of strings
        """
        params = _supplied(user_id=user_id, limit=limit, offset=offset)
        return await _invoke("read_omi_memories", facade.read_memories, params)

    # =========================================================================
    # TOOL 3: create_omi_conversation
    # =========================================================================
    # Creates a record on the Omi side.  Calling it twice with the same text
    # creates two conversations.
    # =========================================================================
    @mcp.tool()
    async def create_omi_conversation(
        text: Annotated[str, Field(description="The full text content of the conversation.")],
        user_id: Annotated[str, Field(description="The Omi user ID to create the conversation for.")],
        text_source: Annotated[
            ConversationTextSource,
            Field(description="Source of the text: 'audio_transcript', 'message' or 'other_text'."),
        ],
        started_at: Annotated[
            str | None, Field(description="When the conversation started (ISO 8601).")
        ] = None,
        finished_at: Annotated[
            str | None, Field(description="When the conversation finished (ISO 8601).")
        ] = None,
        language: Annotated[
            str | None, Field(description="Language code of the text. Defaults to 'en'.")
        ] = None,
        geolocation: Annotated[
            Geolocation | None,
            Field(description="Where it happened: {latitude, longitude}. Both are required."),
        ] = None,
        text_source_spec: Annotated[
            str | None, Field(description="Additional detail about the text source.")
        ] = None,
    ) -> dict:
        """Create a new conversation in Omi for a specific user.

        Omi processes the text into a structured conversation (title,
        overview, extracted memories).  This call is NOT idempotent.

        Returns:
            An empty object on success.
        """
        params = _supplied(
            text=text,
            user_id=user_id,
            text_source=text_source,
            started_at=started_at,
            finished_at=finished_at,
            language=language,
            geolocation=geolocation,
            text_source_spec=text_source_spec,
        )
        return await _invoke("create_omi_conversation", facade.create_conversation, params)

    # =========================================================================
    # TOOL 4: create_omi_memories
    # =========================================================================
    # Exactly one of `text` (Omi extracts memories from it) or `memories`
    # (created as given) must be supplied.  Both or neither is an error.
    # =========================================================================
    @mcp.tool()
    async def create_omi_memories(
        user_id: Annotated[str, Field(description="The Omi user ID to create memories for.")],
        text: Annotated[
            str | None,
            Field(description="Text to extract memories from. Do not combine with 'memories'."),
        ] = None,
        memories: Annotated[
            list[MemoryCreateSpec] | None,
            Field(
                description=(
                    "Memories to create directly: [{content, tags?}]. "
                    "Do not combine with 'text'."
                )
            ),
        ] = None,
        text_source: Annotated[
            MemoryTextSource | None,
            Field(description="Source of the text: 'email', 'social_post' or 'other'."),
        ] = None,
        text_source_spec: Annotated[
            str | None, Field(description="Additional detail about the text source.")
        ] = None,
    ) -> dict:
        """Create memories in Omi for a specific user.

        Either pass free `text` for Omi to extract memories from, or an
        explicit `memories` list.  This call is NOT idempotent.

        Returns:
            An empty object on success.
        """
        params = _supplied(
            user_id=user_id,
            text=text,
            memories=memories,
            text_source=text_source,
            text_source_spec=text_source_spec,
        )
        return await _invoke("create_omi_memories", facade.create_memories, params)

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    """Load configuration, then serve the Omi tools over stdio.

    Exits with status 1 before serving if the API key or app id is missing.
    """
    load_dotenv()
    configure_logging(os.environ.get("OMI_LOG_LEVEL", "INFO"))

    try:
        config = OmiConfig.from_env()
    except ConfigError as exc:
        logging.error(f"{_RED}{exc}{_RESET}")
        sys.exit(1)

    _log_status(f"Starting {SERVER_NAME} for app {config.app_id} against {config.base_url}")
    build_server(config).run()


if __name__ == "__main__":
    main()
