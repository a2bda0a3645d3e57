"""Tagged outcomes returned by every registry client operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, NoReturn, TypeVar

from contract_registry.errors import (
    ClientError,
    DecodeError,
    NetworkError,
    RegistryError,
    ServerError,
)

T = TypeVar("T")


class FailureKind(StrEnum):
    NETWORK = "network"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    DECODE = "decode"


_EXCEPTION_FOR_KIND: dict[FailureKind, type[RegistryError]] = {
    FailureKind.NETWORK: NetworkError,
    FailureKind.CLIENT_ERROR: ClientError,
    FailureKind.SERVER_ERROR: ServerError,
    FailureKind.DECODE: DecodeError,
}


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful call and its parsed value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    """A call that did not produce a value.

    ``message`` is fixed per operation (e.g. "Failed to fetch contracts").
    ``detail`` carries the transport error text, the decode problem, or a
    short excerpt of the response body.
    """

    kind: FailureKind
    message: str
    status_code: int | None = None
    detail: str = ""
    cause: BaseException | None = field(default=None, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the exception matching this failure's kind."""
        exc_type = _EXCEPTION_FOR_KIND[self.kind]
        raise exc_type(self.message, status_code=self.status_code) from self.cause

    def to_dict(self) -> dict[str, object]:
        return {
            "success": False,
            "error": self.message,
            "kind": str(self.kind),
            "status_code": self.status_code,
            "detail": self.detail,
        }


Result = Ok[T] | Failure


def kind_for_status(status_code: int) -> FailureKind:
    """Classify an unsuccessful HTTP status."""
    if 400 <= status_code < 500:
        return FailureKind.CLIENT_ERROR
    return FailureKind.SERVER_ERROR
