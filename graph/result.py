from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")

# Caller-facing message for every internal/upstream failure
PROCESSING_FAILED = "Error al procesar el registro"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful step outcome carrying the value for the next step."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed step outcome; already shaped as the HTTP answer."""
    status_code: int
    message: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[Any], Err]


def client_error(message: str) -> Err:
    """400 rejection; no internal detail is exposed."""
    return Err(status_code=400, message=message)


def internal_error(detail: str) -> Err:
    """500 failure with the underlying reason attached as `error`."""
    return Err(status_code=500, message=PROCESSING_FAILED, error=detail)
