# =============================================================================
# main.py  —  Interactive smoke-test client for the Omi MCP server
# =============================================================================
#
# HOW TO RUN:
#   python main.py [user_id]
#
# WHAT HAPPENS:
#   1. Spawns the MCP server (python -m omi_server.mcp_server) as a
#      subprocess and connects to it over stdio, exactly as an MCP host would
#   2. Lists the tools the server advertises
#   3. Shows a menu of example requests and sends the one you pick
#   4. Prints the tool result (or the tool error) as JSON
#
#   OMI_API_KEY / OMI_APP_ID (or a .env file) must be set; the server
#   subprocess inherits this process's environment.
#
# WARNING:
#   The "create" examples really create records in the Omi account.
# =============================================================================

import asyncio
import json
import os
import sys

from dotenv import load_dotenv
from fastmcp import Client
from fastmcp.client.transports import StdioTransport
from fastmcp.exceptions import ToolError

load_dotenv()

DEFAULT_TEST_USER_ID = "test-user-123"


def example_requests(user_id: str) -> dict[str, tuple[str, dict]]:
    """Menu label → (tool name, arguments)."""
    return {
        "conversations": ("read_omi_conversations", {"user_id": user_id, "limit": 5}),
        "memories": ("read_omi_memories", {"user_id": user_id, "limit": 5}),
        "create-conversation": (
            "create_omi_conversation",
            {
                "user_id": user_id,
                "text": "This is a test conversation",
                "text_source": "message",
            },
        ),
        "create-memories": (
            "create_omi_memories",
            {
                "user_id": user_id,
                "memories": [{"content": "This is a test memory", "tags": ["test"]}],
            },
        ),
    }


async def run_client(user_id: str) -> None:
    transport = StdioTransport(
        command=sys.executable,
        args=["-m", "omi_server.mcp_server"],
        env=dict(os.environ),
    )
    requests = example_requests(user_id)
    labels = list(requests)

    print("=" * 70)
    print("  OMI MCP TEST CLIENT")
    print(f"  User: {user_id}")
    print("=" * 70)

    async with Client(transport) as client:
        tools = await client.list_tools()
        print(f"\nServer tools: {', '.join(tool.name for tool in tools)}")

        while True:
            print("\nChoose a request:")
            for i, label in enumerate(labels, start=1):
                print(f"  {i}. {label}")
            print("  q. quit")

            try:
                choice = input("\n> ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print("\nGoodbye!")
                break

            if choice in ("q", "quit", "exit"):
                print("Goodbye!")
                break
            if not choice.isdigit() or not 1 <= int(choice) <= len(labels):
                print("Invalid choice.")
                continue

            tool_name, arguments = requests[labels[int(choice) - 1]]
            print(f"\nCalling {tool_name} with {json.dumps(arguments)}")
            try:
                result = await client.call_tool(tool_name, arguments)
            except ToolError as exc:
                print(f"\nTool error: {exc}")
                continue
            print("\nServer response:")
            print(json.dumps(result.structured_content or {}, indent=2))


if __name__ == "__main__":
    asyncio.run(run_client(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_TEST_USER_ID))
