"""Domain errors raised by services and translated to HTTP responses in main."""

from typing import Optional


class DomainError(Exception):
    status_code = 400
    error_code = "DomainError"

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if error_code:
            self.error_code = error_code


class NotFoundError(DomainError):
    status_code = 404
    error_code = "NotFound"


class ConflictError(DomainError):
    status_code = 409
    error_code = "Conflict"


class InvalidInputError(DomainError):
    status_code = 400
    error_code = "InvalidInput"
