# =============================================================================
# omi/models.py  —  Parameter Models (the "contracts" of each operation)
# =============================================================================
#
# Each Omi operation has ONE pydantic model describing exactly which
# parameters it accepts: required vs optional, type, and allowed values.
# Validation happens once, in validate_params(), before any request is
# built.  Nothing downstream re-checks types.
#
# STRICTNESS:
#   limit/offset must be real integers, include_discarded a real boolean and
#   geolocation coordinates real numbers ("5", 1 for a bool and true for a
#   coordinate are all rejected).  Unknown parameter names are rejected
#   (extra="forbid").  A value of None is treated as "not supplied".
#
# NO CLIENT-SIDE LIMITS:
#   limit is documented by Omi as "max 1000" but is NOT clamped here, and
#   coordinates are not range-checked.  The remote API is the authority on
#   its own bounds.
#
# REMOTE RECORDS:
#   Conversations and memories returned by Omi are relayed as plain dicts
#   and are never reshaped.  Their documented shapes:
#
#     conversation: id, created_at, started_at, finished_at, text,
#                   structured{title, overview},
#                   transcript_segments[{text, start_time, end_time}],
#                   geolocation{latitude, longitude}
#     memory:       id, content, created_at, tags[]
# =============================================================================

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic_core import PydanticCustomError

from omi.errors import ValidationError

ConversationTextSource = Literal["audio_transcript", "message", "other_text"]
MemoryTextSource = Literal["email", "social_post", "other"]

DEFAULT_LANGUAGE = "en"


class OmiParams(BaseModel):
    """Base class for operation parameter models."""

    model_config = ConfigDict(extra="forbid")


# -----------------------------------------------------------------------------
# Nested value objects
# -----------------------------------------------------------------------------
class Geolocation(OmiParams):
    """Where a conversation took place.  Both coordinates are required."""

    latitude: StrictFloat
    longitude: StrictFloat


class MemoryCreateSpec(OmiParams):
    """One memory to create directly, without extraction."""

    content: StrictStr = Field(min_length=1)
    tags: list[StrictStr] | None = None


# -----------------------------------------------------------------------------
# Read operations
# -----------------------------------------------------------------------------
class ReadConversationsParams(OmiParams):
    user_id: StrictStr = Field(min_length=1)
    limit: StrictInt | None = None
    offset: StrictInt | None = None
    include_discarded: StrictBool | None = None
    # Comma-separated status tokens, forwarded verbatim.
    statuses: StrictStr | None = None


class ReadMemoriesParams(OmiParams):
    user_id: StrictStr = Field(min_length=1)
    limit: StrictInt | None = None
    offset: StrictInt | None = None


# -----------------------------------------------------------------------------
# Create operations
# -----------------------------------------------------------------------------
class CreateConversationParams(OmiParams):
    text: StrictStr = Field(min_length=1)
    user_id: StrictStr = Field(min_length=1)
    text_source: ConversationTextSource
    started_at: StrictStr | None = None
    finished_at: StrictStr | None = None
    language: StrictStr = Field(default=DEFAULT_LANGUAGE, min_length=1)
    geolocation: Geolocation | None = None
    text_source_spec: StrictStr | None = None

    @pydantic.field_validator("started_at", "finished_at")
    @classmethod
    def _check_iso_8601(cls, value: str | None) -> str | None:
        # Only checked for parseability; the caller's string is sent as-is.
        if value is not None:
            try:
                datetime.fromisoformat(value)
            except ValueError:
                raise ValueError(f"must be an ISO-8601 timestamp, got {value!r}") from None
        return value


class CreateMemoriesParams(OmiParams):
    user_id: StrictStr = Field(min_length=1)
    text: StrictStr | None = Field(default=None, min_length=1)
    memories: list[MemoryCreateSpec] | None = Field(default=None, min_length=1)
    text_source: MemoryTextSource | None = None
    text_source_spec: StrictStr | None = None

    @pydantic.model_validator(mode="after")
    def _exactly_one_source(self) -> "CreateMemoriesParams":
        if (self.text is None) == (self.memories is None):
            raise PydanticCustomError(
                "exactly_one_source", "exactly one of 'text' or 'memories' must be provided"
            )
        return self


# -----------------------------------------------------------------------------
# Validation entry point
# -----------------------------------------------------------------------------
ParamsT = TypeVar("ParamsT", bound=OmiParams)

# Model-level rules carry no location; these are the fields each one is about.
_RULE_FIELDS: dict[str, list[str]] = {
    "exactly_one_source": ["text", "memories"],
}


def _error_location(error: Mapping[str, Any]) -> str:
    return ".".join(str(part) for part in error["loc"])


def validate_params(model: type[ParamsT], params: Mapping[str, Any] | None) -> ParamsT:
    """Validate a raw parameter mapping against an operation's model.

    Keys whose value is ``None`` are dropped first, so an explicit ``None``
    behaves exactly like an omitted parameter.

    Raises:
        ValidationError: Naming every offending field and what was wrong.
    """
    supplied = {key: value for key, value in (params or {}).items() if value is not None}
    try:
        return model.model_validate(supplied)
    except pydantic.ValidationError as exc:
        fields: list[str] = []
        problems: list[str] = []
        for error in exc.errors():
            location = _error_location(error)
            message = error["msg"].removeprefix("Value error, ")
            if location:
                fields.append(location)
                problems.append(f"{location}: {message}")
            else:
                fields.extend(_RULE_FIELDS.get(error["type"], []))
                problems.append(message)
        raise ValidationError(
            f"Invalid parameters: {'; '.join(problems)}", fields=fields
        ) from None
