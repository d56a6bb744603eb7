"""Unified error codes and custom exceptions.

Error code ranges:
  3xxx: Market
  9xxx: System / storage
"""


class AppError(Exception):
    """Base application error."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 3xxx: Market ---

class EmptyQuestionError(AppError):
    def __init__(self) -> None:
        super().__init__(3001, "Question must not be empty")


class InvalidMarketInputError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(3002, f"Invalid market input: {detail}")


class DeleteNotConfirmedError(AppError):
    def __init__(self, confirm_text: str = "delete") -> None:
        super().__init__(3003, f'Type "{confirm_text}" to confirm')


# --- 9xxx: System ---

class StorageError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9001, f"Storage failure: {detail}")
