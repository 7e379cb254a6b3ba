# backend/culturastock/core/exceptions.py
from fastapi import status


class LendingError(Exception):
    """Base class for every failure the lending services report to callers"""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(LendingError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class DuplicateSerialNumber(LendingError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, serial_number: str):
        super().__init__(f"An item with serial number '{serial_number}' already exists")
        self.serial_number = serial_number


class NotFound(LendingError):
    status_code = status.HTTP_404_NOT_FOUND


class ItemNotAvailable(LendingError):
    status_code = status.HTTP_409_CONFLICT


class AlreadyReturned(LendingError):
    status_code = status.HTTP_409_CONFLICT


class StoreUnavailable(LendingError):
    """The document store call failed; never retried here"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
