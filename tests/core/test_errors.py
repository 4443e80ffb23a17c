"""Tests for error types and codes."""

import pytest

from codevector.core.errors import (
    CodeVectorError,
    ConfigError,
    EmbeddingError,
    ErrorCode,
    InternalError,
    OperationCancelledError,
    VectorStoreError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.EMBEDDING_BAD_STATUS, 3000),
            (ErrorCode.STORE_BOOTSTRAP_FAILED, 3000),
            (ErrorCode.OPERATION_CANCELLED, 3000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestCodeVectorError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = CodeVectorError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = CodeVectorError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        # When
        result = str(error)

        # Then
        assert result == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_subclass_when_raised_then_caught_as_base(self) -> None:
        """All error families share the base class."""
        with pytest.raises(CodeVectorError):
            raise EmbeddingError.empty("m")


class TestConfigError:
    """ConfigError factory method tests."""

    def test_parse_error(self) -> None:
        error = ConfigError.parse_error("/etc/x.yaml", "bad indent")

        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/etc/x.yaml" in error.message
        assert error.details == {"path": "/etc/x.yaml", "reason": "bad indent"}

    def test_invalid_value(self) -> None:
        error = ConfigError.invalid_value("vector_store.port", "abc", "not an int")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "vector_store.port" in error.message
        assert error.details["value"] == "abc"


class TestEmbeddingError:
    """EmbeddingError factory method tests."""

    def test_bad_status_message(self) -> None:
        error = EmbeddingError.bad_status("http://x", 404)

        assert error.message == "Embedding service returned status: 404"
        assert not error.retryable

    def test_server_errors_are_retryable(self) -> None:
        assert EmbeddingError.bad_status("http://x", 503).retryable
        assert EmbeddingError.request_failed("http://x", "refused").retryable

    def test_empty(self) -> None:
        error = EmbeddingError.empty("qwen")

        assert error.code == ErrorCode.EMBEDDING_EMPTY
        assert error.details == {"model": "qwen"}


class TestVectorStoreError:
    """VectorStoreError factory method tests."""

    def test_bootstrap_failed_not_retryable(self) -> None:
        error = VectorStoreError.bootstrap_failed("codebase_index", "refused")

        assert error.code == ErrorCode.STORE_BOOTSTRAP_FAILED
        assert not error.retryable
        assert "codebase_index" in error.message

    def test_upsert_failed_carries_point(self) -> None:
        error = VectorStoreError.upsert_failed("c", "abc-123", "timeout")

        assert error.details["point_id"] == "abc-123"

    def test_query_failed(self) -> None:
        assert VectorStoreError.query_failed("c", "x").code == ErrorCode.STORE_QUERY_FAILED


class TestOtherErrors:
    def test_cancelled_message(self) -> None:
        error = OperationCancelledError.cancelled("search", "timed out")

        assert error.message == "search timed out"
        assert error.details == {"operation": "search", "reason": "timed out"}

    def test_internal_unexpected(self) -> None:
        error = InternalError.unexpected("boom", where="pipeline")

        assert error.message == "Internal error: boom"
        assert error.details == {"where": "pipeline"}
