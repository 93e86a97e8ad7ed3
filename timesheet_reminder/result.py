"""Two-variant outcome of a message send."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

S = TypeVar("S")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class PostMessageResult(Generic[S, F]):
    """Holds either a success value or a failure value, never both.

    Build instances with ``of_success`` or ``of_failure``. Observers registered
    with ``on_success`` and ``on_failure`` run synchronously, once, and only for
    the variant that occurred. Both return the result so calls can be chained::

        result.on_success(lambda _: LOGGER.info("sent")).on_failure(report)
    """

    succeeded: bool
    value: S | None = None
    error: F | None = None

    def __post_init__(self) -> None:
        if self.succeeded and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.succeeded and self.value is not None:
            raise ValueError("A failed result cannot carry a success value")

    @classmethod
    def of_success(cls, value: S) -> PostMessageResult[S, F]:
        return cls(succeeded=True, value=value)

    @classmethod
    def of_failure(cls, error: F) -> PostMessageResult[S, F]:
        return cls(succeeded=False, error=error)

    @property
    def is_success(self) -> bool:
        return self.succeeded

    def on_success(self, callback: Callable[[S], object]) -> PostMessageResult[S, F]:
        if self.succeeded:
            callback(self.value)  # type: ignore[arg-type]
        return self

    def on_failure(self, callback: Callable[[F], object]) -> PostMessageResult[S, F]:
        if not self.succeeded:
            callback(self.error)  # type: ignore[arg-type]
        return self
