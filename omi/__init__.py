# =============================================================================
# omi/__init__.py
# =============================================================================
# This package contains ALL of the Omi bridging logic: configuration, the
# error taxonomy, parameter validation, request construction, the HTTP call
# and response mapping.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The MCP tool layer lives in
#   omi_server/ and depends on this package, never the other way round.
#   Every operation here can be driven from a plain asyncio REPL with a
#   fake httpx transport.
# =============================================================================

from omi.config import OmiConfig
from omi.errors import ConfigError, InternalError, OmiError, RemoteError, ValidationError
from omi.facade import OmiFacade

__all__ = [
    "ConfigError",
    "InternalError",
    "OmiConfig",
    "OmiError",
    "OmiFacade",
    "RemoteError",
    "ValidationError",
]
