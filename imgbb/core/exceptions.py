from enum import Enum

from pydantic import ValidationError


class ErrorKind(str, Enum):
    MISSING_FIELD = "missing_field"
    VALIDATION = "validation"
    IO = "io"
    TRANSPORT = "transport"
    INVALID_API_KEY = "invalid_api_key"
    INVALID_BASE64 = "invalid_base64"
    INVALID_PARAMETERS = "invalid_parameters"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    API_ERROR = "api_error"


PROVIDER_CODES: dict[int, ErrorKind] = {
    100: ErrorKind.INVALID_API_KEY,
    120: ErrorKind.INVALID_BASE64,
    400: ErrorKind.INVALID_PARAMETERS,
    429: ErrorKind.RATE_LIMIT_EXCEEDED,
}

_DEFAULT_MESSAGES = {
    ErrorKind.INVALID_API_KEY: "Invalid API key",
    ErrorKind.INVALID_BASE64: "Invalid base64 image data",
    ErrorKind.RATE_LIMIT_EXCEEDED: "Rate limit exceeded",
}


class ImgBBError(Exception):
    def __init__(
        self,
        kind: ErrorKind,
        message: str | None = None,
        *,
        status: int | None = None,
        code: int | None = None,
        field: str | None = None,
    ) -> None:
        if message is None:
            if kind is ErrorKind.MISSING_FIELD:
                message = f"missing required field: {field}"
            else:
                message = _DEFAULT_MESSAGES.get(kind, kind.value)
        self.kind = kind
        self.message = message
        self.status = status
        self.code = code
        self.field = field
        super().__init__(message)

    @classmethod
    def from_provider(cls, message: str, status: int | None, code: int) -> "ImgBBError":
        return cls(PROVIDER_CODES.get(code, ErrorKind.API_ERROR), message, status=status, code=code)

    def __repr__(self) -> str:
        return f"ImgBBError(kind={self.kind.value!r}, message={self.message!r}, status={self.status!r}, code={self.code!r})"


def invalid_fields(error: ValidationError) -> str:
    return ", ".join(".".join(str(loc) for loc in err["loc"]) for err in error.errors())
