"""
Tagged results returned by the engine.

Failures are values, not exceptions: callers check `is_ok()` before using the payload.
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from src.core.exceptions import GameError
from src.core.shared_types import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    code: ErrorCode
    message: str = ""

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise GameError(self.message or self.code.name, code=self.code)


Result = Union[Ok[T], Err]
