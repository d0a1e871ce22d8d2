# =============================================================================
# omi/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure an invocation can end in is one of three kinds:
#
#   ValidationError  →  the caller's parameters are malformed or contradictory.
#                       Raised before any network I/O.
#   RemoteError      →  the Omi API answered with a non-2xx status.
#   InternalError    →  transport fault, malformed JSON, or (as ConfigError)
#                       missing startup configuration.
#
# All three share OmiError so the tool layer can catch one type and turn it
# into an MCP tool error.  str(error) is always the caller-facing message.
# =============================================================================


class OmiError(Exception):
    """Base class for every error raised by the Omi façade."""


class ValidationError(OmiError):
    """Raised when caller-supplied parameters fail validation.

    ``fields`` lists the offending parameter names (dotted for nested
    values, e.g. ``geolocation.longitude``).
    """

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class RemoteError(OmiError):
    """Raised when the Omi API returns a non-success status."""

    def __init__(self, action: str, status_code: int, status_text: str, body: str) -> None:
        self.action = action
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"{action}: {status_code} {status_text} - {body}")


class InternalError(OmiError):
    """Raised for transport faults and malformed responses."""


class ConfigError(InternalError):
    """Raised at startup when required configuration is missing or invalid."""
