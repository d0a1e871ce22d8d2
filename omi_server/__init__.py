# =============================================================================
# omi_server/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   omi_server/ is the translation layer between MCP and the omi/ package.
#   It:
#     1. Registers each OmiFacade operation as a named MCP tool
#     2. Declares typed, described parameters so MCP clients know WHAT to pass
#     3. Logs every call and result to stderr
#     4. Turns OmiError into an MCP ToolError the caller can read
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate parameters (omi/models.py does)
#   - They do NOT build URLs or talk HTTP (omi/request_builder.py, omi/client.py)
# =============================================================================
