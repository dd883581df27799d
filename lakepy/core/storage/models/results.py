"""
Result types for operations whose outcome callers must inspect.

LoadState is a tagged union (NotLoaded | Loaded | LoadFailed); consume it
with ``isinstance`` checks or ``LoadState.match``.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from ...exceptions import LakeException

T = TypeVar('T')
R = TypeVar('R')


@dataclass(frozen=True)
class DeleteResult:
    """
    Outcome of a delete call.

    Attributes:
        path: Path that was targeted
        error: Failure, or None when the delete succeeded
    """
    path: str
    error: Optional[LakeException] = None

    @property
    def deleted(self) -> bool:
        return self.error is None

    def raise_for_error(self):
        """Re-raise the stored failure, if any."""
        if self.error is not None:
            raise self.error


class LoadState(Generic[T]):
    """Base of the NotLoaded / Loaded / LoadFailed family."""

    def match(
        self,
        not_loaded: Callable[[], R],
        loaded: Callable[[T], R],
        failed: Callable[[BaseException], R]
    ) -> R:
        """Dispatch on the concrete state; every branch is required."""
        if isinstance(self, Loaded):
            return loaded(self.data)
        if isinstance(self, LoadFailed):
            return failed(self.error)
        if isinstance(self, NotLoaded):
            return not_loaded()
        raise TypeError(f"Unknown load state: {type(self).__name__}")


@dataclass(frozen=True)
class NotLoaded(LoadState[Any]):
    """Nothing fetched yet."""


@dataclass(frozen=True)
class Loaded(LoadState[T]):
    data: T


@dataclass(frozen=True)
class LoadFailed(LoadState[Any]):
    error: BaseException
