"""Error taxonomy shared by the service layer and the HTTP exception handlers."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kind of failure; decides the HTTP status and the public error label."""

    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}

_LABELS = {
    ErrorKind.VALIDATION: "Validation failed",
    ErrorKind.UNAUTHORIZED: "Unauthorized",
    ErrorKind.FORBIDDEN: "Forbidden",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.CONFLICT: "Conflict",
    ErrorKind.INTERNAL: "Internal server error",
}


class AccountsError(Exception):
    """Base for every expected failure. Subclasses pin the kind."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_payload(self) -> dict[str, Any]:
        """Public response body. Internal failures expose only the label."""
        if self.kind is ErrorKind.INTERNAL:
            return {"error": self.kind.label}
        return {"error": self.kind.label, "message": self.message}


class ValidationFailed(AccountsError):
    """Request input rejected; details lists field-level problems."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        details: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or []

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["details"] = self.details
        return payload


class Unauthorized(AccountsError):
    kind = ErrorKind.UNAUTHORIZED


class InvalidCredentials(Unauthorized):
    """Unknown email or wrong password; the two cases are indistinguishable."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class InvalidToken(AccountsError):
    """Token failed verification (signature, structure, claims or expiry)."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Invalid or expired token", cause: Exception | None = None) -> None:
        super().__init__(message, cause)


class Forbidden(AccountsError):
    kind = ErrorKind.FORBIDDEN


class NotFound(AccountsError):
    kind = ErrorKind.NOT_FOUND


class Conflict(AccountsError):
    kind = ErrorKind.CONFLICT


class DuplicateEmail(Conflict):
    def __init__(self, message: str = "Email already exists") -> None:
        super().__init__(message)


class CryptoFailure(AccountsError):
    """Hashing or verification failed inside the crypto library."""

    kind = ErrorKind.INTERNAL
