# domain/errors.py

from enum import Enum


class SubmissionErrorKind(str, Enum):
    TIMEOUT = "timeout"
    SERVICE = "service"
    UNEXPECTED = "unexpected"


class SubmissionError(Exception):
    """
    Raised when an order could not be turned into a document.
    `kind` tells the caller whether retrying or editing the form makes sense.
    """
    def __init__(
        self,
        message: str,
        *,
        kind: SubmissionErrorKind,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code

    @property
    def is_timeout(self) -> bool:
        return self.kind is SubmissionErrorKind.TIMEOUT
