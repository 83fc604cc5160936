from enum import Enum
from typing import Literal, TypeAlias

DiagnosticSeverity: TypeAlias = Literal["error"]
DiagnosticValue: TypeAlias = str | int | bool


class ErrorCode(str, Enum):
    """Canonical layout diagnostic codes."""

    INVALID_ARGUMENT = "invalid_argument"
    LAYOUT_UNSUPPORTED = "layout_unsupported"
    ALIASING_VIOLATION = "aliasing_violation"
    ALLOCATION_FAILURE = "allocation_failure"
    SIZE_OVERFLOW = "size_overflow"


class LayoutError(ValueError):
    """Structured base error for layout diagnostics."""

    channel = "error"
    severity: DiagnosticSeverity
    code: str
    external_code: str
    help: str | None
    related: tuple[str, ...]
    data: dict[str, DiagnosticValue]
    message: str

    @staticmethod
    def _normalize_code(code: str | ErrorCode) -> str:
        """Normalize code to canonical `snake_case` form."""
        if isinstance(code, ErrorCode):
            return code.value

        if not isinstance(code, str):
            raise TypeError("diagnostic code must be a string or ErrorCode")
        if not code:
            raise ValueError("diagnostic code cannot be empty")
        if any(char.isspace() for char in code):
            raise ValueError("diagnostic code cannot contain whitespace")

        if code[0].isalpha() and all(
            char.isalnum() or char == "_" for char in code
        ):
            if code.isupper() or code.islower():
                return code.lower()

        raise ValueError(
            "diagnostic code must be snake_case (or UPPER_SNAKE for compatibility)"
        )

    @staticmethod
    def _normalize_data(data: dict[str, DiagnosticValue]) -> dict[str, DiagnosticValue]:
        """Validate and copy diagnostic payload data."""
        normalized_data: dict[str, DiagnosticValue] = {}
        for key, value in data.items():
            if not isinstance(key, str):
                raise TypeError("diagnostic data keys must be strings")
            if not isinstance(value, str | int | bool):
                raise TypeError(
                    "diagnostic data values must be str, int, or bool entries"
                )
            normalized_data[key] = value
        return normalized_data

    def __init__(
        self,
        *,
        code: str | ErrorCode,
        message: str,
        help: str | None = None,
        related: tuple[str, ...] = (),
        data: dict[str, DiagnosticValue] | None = None,
    ) -> None:
        """Build one structured layout error."""
        normalized_code = self._normalize_code(code)
        if not isinstance(message, str) or not message.strip():
            raise ValueError("diagnostic message must be a non-empty string")
        if help is not None and not isinstance(help, str):
            raise TypeError("diagnostic help must be a string or None")
        for note in related:
            if not isinstance(note, str) or not note.strip():
                raise ValueError("related diagnostic notes must be non-empty strings")

        self.code = normalized_code
        self.external_code = normalized_code.upper()
        self.severity = "error"
        self.help = help
        self.related = tuple(related)
        self.data = self._normalize_data({} if data is None else data)
        self.message = message
        super().__init__(message)


class ValidationError(LayoutError):
    """Argument or precondition failure detected before any mutation."""

    channel = "validation_error"


class ExecutionError(LayoutError):
    """Failure raised while carrying out a validated operation."""

    channel = "execution_error"


def invalid_argument(
    message: str,
    *,
    operation: str,
    help: str | None = None,
    **data: DiagnosticValue,
) -> ValidationError:
    """Build an `invalid_argument` validation error for one operation."""
    return ValidationError(
        code=ErrorCode.INVALID_ARGUMENT,
        message=message,
        help=help,
        related=(f"{operation} arguments",),
        data={"operation": operation, **data},
    )


__all__ = [
    "ErrorCode",
    "ExecutionError",
    "LayoutError",
    "ValidationError",
    "invalid_argument",
]
