"""Tagged result type returned from aggregation and pipeline entry points.

Callers branch on ``result.ok`` instead of catching exceptions, and decide
themselves whether to log, abort or retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import WakaSourceError

__all__ = ["Err", "Ok", "Result", "err_from_exception"]

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome.

    Attributes
    ----------
    kind : str
        Error kind ("InvalidConfiguration", "UpstreamError", "TransportFailure", ...)
    message : str
        Human-readable message surfaced to the caller
    """

    kind: str
    message: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise WakaSourceError(f"{self.kind}: {self.message}")


Result = Union[Ok[T], Err]


def err_from_exception(exc: Exception) -> Err:
    """Build an ``Err`` from an exception, using its ``kind`` when it has one."""
    kind = getattr(exc, "kind", None) or type(exc).__name__
    return Err(kind=kind, message=str(exc))
