"""Tests for cs_common.errors."""

from src.cs_common.errors import (
    AppError,
    DeleteNotConfirmedError,
    EmptyQuestionError,
    InvalidMarketInputError,
    StorageError,
)


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9001, message="Storage failure")
        assert err.code == 9001
        assert err.message == "Storage failure"

    def test_is_exception(self) -> None:
        err = AppError(code=3001, message="test")
        assert isinstance(err, Exception)
        assert str(err) == "test"


class TestSpecificErrors:
    def test_empty_question(self) -> None:
        err = EmptyQuestionError()
        assert err.code == 3001
        assert isinstance(err, AppError)

    def test_invalid_market_input(self) -> None:
        err = InvalidMarketInputError("question must not be blank")
        assert err.code == 3002
        assert "question must not be blank" in err.message

    def test_delete_not_confirmed(self) -> None:
        err = DeleteNotConfirmedError()
        assert err.code == 3003
        assert err.message == 'Type "delete" to confirm'

    def test_delete_not_confirmed_custom_word(self) -> None:
        err = DeleteNotConfirmedError("remove")
        assert '"remove"' in err.message

    def test_storage_error(self) -> None:
        err = StorageError("quota exceeded")
        assert err.code == 9001
        assert "quota exceeded" in err.message
