"""Error kinds raised by the JWT executors."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of failure kinds for resolution, verification and signing."""
    MISSING_OR_MALFORMED_TOKEN = "missing_or_malformed_token"
    NO_SECRET_CONFIGURED = "no_secret_configured"
    SECRET_FILE_UNREADABLE = "secret_file_unreadable"
    VERIFICATION_FAILED = "verification_failed"
    SIGNING_FAILED = "signing_failed"


_DEFAULT_MESSAGES = {
    ErrorKind.MISSING_OR_MALFORMED_TOKEN: "Missing or malformed bearer token.",
    ErrorKind.NO_SECRET_CONFIGURED: "No jwt secret or cert provided.",
    ErrorKind.SECRET_FILE_UNREADABLE: "Jwt cert file could not be read.",
    ErrorKind.VERIFICATION_FAILED: "Jwt verification failed.",
    ErrorKind.SIGNING_FAILED: "Jwt signing failed.",
}


class JwtError(Exception):
    """
    A tagged JWT failure.

    Callers branch on ``kind`` rather than on exception subclasses. The
    underlying library or OS error, if any, is kept as ``cause``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None
    ):
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        self.cause = cause
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"JwtError(kind={self.kind.value!r}, message={self.message!r})"


class Unauthorized(Exception):
    """
    Single rejection outcome seen by the request pipeline.

    The precise ``JwtError`` is kept as ``cause`` for diagnostics.
    """

    status_code = 401

    def __init__(self, cause: JwtError, message: str = "Jwt authorization fail."):
        self.cause = cause
        self.message = message
        super().__init__(message)
        self.__cause__ = cause

    @property
    def kind(self) -> ErrorKind:
        return self.cause.kind
