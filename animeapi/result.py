from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from animeapi.errors import ExtractionError

T = TypeVar("T")

# Serialized as JSON ``false``. It stands for "no usable result" and does not
# tell an empty source apart from one that is down.
FAILURE = False


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap_or_sentinel(self) -> T:
        return self.value


@dataclass(slots=True, frozen=True)
class Err:
    error: ExtractionError

    @property
    def ok(self) -> bool:
        return False

    def unwrap_or_sentinel(self) -> bool:
        return FAILURE


Result = Union[Ok[T], Err]
