"""
Tagged API errors.

Handlers raise these instead of building responses by hand; ``main`` maps
``kind`` straight to a status code and a plain-text body.
"""
from typing import Literal

ErrorKind = Literal["invalid_argument", "not_found", "internal"]


class ApiError(Exception):
    kind: ErrorKind = "internal"
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def body(self) -> str:
        return self.message


class InvalidArgument(ApiError):
    kind = "invalid_argument"
    status_code = 400


class NotFound(ApiError):
    kind = "not_found"
    status_code = 404


class Internal(ApiError):
    kind = "internal"
    status_code = 500

    @property
    def body(self) -> str:
        return internal_error_body(self.message)


def internal_error_body(message: str) -> str:
    return "Internal Server Error:" + message


def missing(param: str) -> InvalidArgument:
    return InvalidArgument(f"Missing {param} parameter")
