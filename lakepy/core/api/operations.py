"""
Bounded long-running operation poller.

Polls a caller supplied state getter until the operation reaches a
terminal status, failing with TimeoutExceeded instead of hanging.
"""
import time
import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

from ..exceptions import TimeoutExceeded, OperationFailedError
from ..logging import get_logger

TERMINAL_STATUSES = ('Succeeded', 'Failed')


@dataclass(frozen=True)
class OperationState:
    """
    Snapshot of a long-running operation.

    Attributes:
        operation_id: Operation identifier
        status: NotStarted, Running, Succeeded or Failed
        percent_complete: Progress if reported
        error: Raw error payload for failed operations
    """
    operation_id: str
    status: str
    percent_complete: Optional[int] = None
    error: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def error_message(self) -> str:
        return self.error.get('error', {}).get('message') or 'Operation failed'

    @classmethod
    def from_dict(cls, operation_id: str, data: Dict[str, Any]) -> 'OperationState':
        return cls(
            operation_id=operation_id,
            status=data.get('status', 'NotStarted'),
            percent_complete=data.get('percentComplete'),
            error=data.get('error') or {}
        )


class OperationPoller:
    """Polls operation state with a fixed interval and a hard timeout."""

    def __init__(self, interval: float = 2.0, timeout: float = 300.0):
        """
        Args:
            interval: Seconds between polls
            timeout: Seconds before giving up
        """
        if interval <= 0 or timeout <= 0:
            raise ValueError("interval and timeout must be positive")
        self.interval = interval
        self.timeout = timeout
        self._logger = get_logger('lakepy.operations')

    async def poll_until_complete(
        self,
        operation_id: str,
        get_state: Callable[[str], Awaitable[OperationState]]
    ) -> OperationState:
        """
        Poll until Succeeded or Failed.

        Raises:
            TimeoutExceeded: If no terminal status was seen within the timeout
        """
        deadline = time.monotonic() + self.timeout

        while time.monotonic() < deadline:
            state = await get_state(operation_id)
            self._logger.debug(f"Operation {operation_id}: {state.status}")
            if state.is_terminal:
                return state
            await asyncio.sleep(self.interval)

        raise TimeoutExceeded(
            f"Operation {operation_id} timed out after {self.timeout}s",
            self.timeout
        )

    async def wait_for_success(
        self,
        operation_id: str,
        get_state: Callable[[str], Awaitable[OperationState]]
    ) -> OperationState:
        """Poll and raise OperationFailedError if the operation failed."""
        state = await self.poll_until_complete(operation_id, get_state)
        if state.status == 'Failed':
            raise OperationFailedError(operation_id, state.error_message)
        return state
