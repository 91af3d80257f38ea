"""Tests for the Result type and the store error taxonomy."""

import pytest

from healthstore.services.results import (
    InvalidTransitionError,
    MalformedStateError,
    NotFoundError,
    Result,
    StoreError,
)


class TestResult:
    def test_ok_result(self) -> None:
        result: Result[str, Exception] = Result.ok("value")
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == "value"
        assert result.unwrap_or("default") == "value"

    def test_err_result_degrades_with_unwrap_or(self) -> None:
        result: Result[list, NotFoundError] = Result.err(NotFoundError("missing"))
        assert result.is_err()
        assert result.unwrap_or([]) == []
        assert str(result.unwrap_err()) == "missing"

    def test_unwrap_raises_the_stored_error(self) -> None:
        result: Result[str, NotFoundError] = Result.err(NotFoundError("gone"))
        with pytest.raises(NotFoundError, match="gone"):
            result.unwrap()

    def test_unwrap_err_on_ok_raises(self) -> None:
        with pytest.raises(ValueError):
            Result.ok(1).unwrap_err()

    def test_falsy_values_are_still_ok(self) -> None:
        assert Result.ok([]).is_ok()
        assert Result.ok(0).unwrap() == 0

    def test_cannot_hold_both_or_neither(self) -> None:
        with pytest.raises(ValueError):
            Result(value=1, error=NotFoundError("x"))
        with pytest.raises(ValueError):
            Result()


class TestStoreErrors:
    def test_errors_render_as_error_payload(self) -> None:
        assert NotFoundError("Endpoint not found").to_payload() == {"error": "Endpoint not found"}

    def test_malformed_state_error_keeps_key_and_reason(self) -> None:
        error = MalformedStateError("medications", "invalid JSON")
        assert error.key == "medications"
        assert error.reason == "invalid JSON"
        assert "medications" in str(error)

    @pytest.mark.parametrize("error_type", [NotFoundError, MalformedStateError, InvalidTransitionError])
    def test_every_error_is_a_store_error(self, error_type: type) -> None:
        assert issubclass(error_type, StoreError)
