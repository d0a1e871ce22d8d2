"""Tests for parameter validation."""

import pytest

from omi.errors import ValidationError
from omi.models import (
    CreateConversationParams,
    CreateMemoriesParams,
    ReadConversationsParams,
    ReadMemoriesParams,
    validate_params,
)


class TestReadConversations:
    def test_minimal(self):
        params = validate_params(ReadConversationsParams, {"user_id": "u1"})
        assert params.user_id == "u1"
        assert params.limit is None
        assert params.statuses is None

    def test_missing_user_id(self):
        with pytest.raises(ValidationError, match="user_id") as exc_info:
            validate_params(ReadConversationsParams, {})
        assert exc_info.value.fields == ["user_id"]

    def test_empty_user_id(self):
        with pytest.raises(ValidationError, match="user_id"):
            validate_params(ReadConversationsParams, {"user_id": ""})

    def test_none_params_mapping(self):
        with pytest.raises(ValidationError, match="user_id"):
            validate_params(ReadConversationsParams, None)

    def test_limit_is_not_clamped(self):
        params = validate_params(ReadConversationsParams, {"user_id": "u1", "limit": 5000})
        assert params.limit == 5000

    def test_string_limit_rejected(self):
        with pytest.raises(ValidationError, match="limit"):
            validate_params(ReadConversationsParams, {"user_id": "u1", "limit": "5"})

    def test_integer_include_discarded_rejected(self):
        with pytest.raises(ValidationError, match="include_discarded"):
            validate_params(ReadConversationsParams, {"user_id": "u1", "include_discarded": 1})

    def test_statuses_kept_verbatim(self):
        params = validate_params(
            ReadConversationsParams, {"user_id": "u1", "statuses": "completed, processing"}
        )
        assert params.statuses == "completed, processing"

    def test_unknown_parameter_rejected(self):
        with pytest.raises(ValidationError, match="page"):
            validate_params(ReadConversationsParams, {"user_id": "u1", "page": 2})

    def test_explicit_none_is_absent(self):
        params = validate_params(ReadConversationsParams, {"user_id": "u1", "offset": None})
        assert params.offset is None


class TestReadMemories:
    def test_limit_and_offset(self):
        params = validate_params(ReadMemoriesParams, {"user_id": "u1", "limit": 5, "offset": 0})
        assert params.limit == 5
        assert params.offset == 0

    def test_rejects_conversation_only_filters(self):
        with pytest.raises(ValidationError, match="statuses"):
            validate_params(ReadMemoriesParams, {"user_id": "u1", "statuses": "completed"})


class TestCreateConversation:
    BASE = {"text": "Hello there", "user_id": "u1", "text_source": "message"}

    def test_language_defaults_to_en(self):
        params = validate_params(CreateConversationParams, self.BASE)
        assert params.language == "en"

    def test_explicit_language(self):
        params = validate_params(CreateConversationParams, {**self.BASE, "language": "fr"})
        assert params.language == "fr"

    def test_missing_text(self):
        with pytest.raises(ValidationError, match="text"):
            validate_params(CreateConversationParams, {"user_id": "u1", "text_source": "message"})

    def test_empty_text(self):
        with pytest.raises(ValidationError, match="text"):
            validate_params(CreateConversationParams, {**self.BASE, "text": ""})

    def test_invalid_text_source(self):
        with pytest.raises(ValidationError, match="text_source") as exc_info:
            validate_params(CreateConversationParams, {**self.BASE, "text_source": "email"})
        assert exc_info.value.fields == ["text_source"]

    @pytest.mark.parametrize("source", ["audio_transcript", "message", "other_text"])
    def test_valid_text_sources(self, source):
        params = validate_params(CreateConversationParams, {**self.BASE, "text_source": source})
        assert params.text_source == source

    def test_partial_geolocation_rejected(self):
        with pytest.raises(ValidationError, match="geolocation.longitude") as exc_info:
            validate_params(
                CreateConversationParams, {**self.BASE, "geolocation": {"latitude": 37.7}}
            )
        assert exc_info.value.fields == ["geolocation.longitude"]

    def test_full_geolocation(self):
        params = validate_params(
            CreateConversationParams,
            {**self.BASE, "geolocation": {"latitude": 37.7749, "longitude": -122.4194}},
        )
        assert params.geolocation.latitude == 37.7749
        assert params.geolocation.longitude == -122.4194

    def test_out_of_range_latitude_left_to_omi(self):
        params = validate_params(
            CreateConversationParams,
            {**self.BASE, "geolocation": {"latitude": 137.0, "longitude": 0.0}},
        )
        assert params.geolocation.latitude == 137.0

    def test_boolean_coordinates_rejected(self):
        with pytest.raises(ValidationError, match="geolocation.latitude") as exc_info:
            validate_params(
                CreateConversationParams,
                {**self.BASE, "geolocation": {"latitude": True, "longitude": False}},
            )
        assert exc_info.value.fields == ["geolocation.latitude", "geolocation.longitude"]

    def test_integer_coordinates_accepted(self):
        params = validate_params(
            CreateConversationParams, {**self.BASE, "geolocation": {"latitude": 37, "longitude": -122}}
        )
        assert params.geolocation.latitude == 37
        assert params.geolocation.longitude == -122

    def test_iso_timestamps_kept_verbatim(self):
        params = validate_params(
            CreateConversationParams,
            {**self.BASE, "started_at": "2024-03-15T12:00:00Z", "finished_at": "2024-03-15T12:05:00+00:00"},
        )
        assert params.started_at == "2024-03-15T12:00:00Z"
        assert params.finished_at == "2024-03-15T12:05:00+00:00"

    def test_bad_timestamp_rejected(self):
        with pytest.raises(ValidationError, match="started_at"):
            validate_params(CreateConversationParams, {**self.BASE, "started_at": "yesterday"})


class TestCreateMemories:
    def test_both_text_and_memories_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_params(
                CreateMemoriesParams,
                {"user_id": "u1", "text": "x", "memories": [{"content": "y"}]},
            )
        message = str(exc_info.value)
        assert "text" in message
        assert "memories" in message
        assert exc_info.value.fields == ["text", "memories"]

    def test_neither_text_nor_memories_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_params(CreateMemoriesParams, {"user_id": "u1"})
        assert exc_info.value.fields == ["text", "memories"]
        assert str(exc_info.value) == (
            "Invalid parameters: exactly one of 'text' or 'memories' must be provided"
        )

    def test_source_rule_not_reported_alongside_field_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_params(
                CreateMemoriesParams,
                {"user_id": "", "text": "x", "memories": [{"content": "y"}]},
            )
        assert exc_info.value.fields == ["user_id"]

    def test_only_text(self):
        params = validate_params(CreateMemoriesParams, {"user_id": "u1", "text": "x"})
        assert params.text == "x"
        assert params.memories is None

    def test_only_memories(self):
        params = validate_params(
            CreateMemoriesParams,
            {"user_id": "u1", "memories": [{"content": "y", "tags": ["a", "b"]}]},
        )
        assert params.text is None
        assert params.memories[0].content == "y"
        assert params.memories[0].tags == ["a", "b"]

    def test_empty_memories_list_rejected(self):
        with pytest.raises(ValidationError, match="memories"):
            validate_params(CreateMemoriesParams, {"user_id": "u1", "memories": []})

    def test_memory_without_content_rejected(self):
        with pytest.raises(ValidationError, match=r"memories\.0\.content"):
            validate_params(CreateMemoriesParams, {"user_id": "u1", "memories": [{"tags": ["a"]}]})

    def test_invalid_text_source(self):
        with pytest.raises(ValidationError, match="text_source"):
            validate_params(
                CreateMemoriesParams, {"user_id": "u1", "text": "x", "text_source": "message"}
            )

    def test_missing_user_id(self):
        with pytest.raises(ValidationError, match="user_id"):
            validate_params(CreateMemoriesParams, {"text": "x"})
