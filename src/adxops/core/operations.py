"""Long-running operation handles and the wait loop that drives them.

Mutating management calls return an operation handle instead of the
finished resource. This module defines that handle as a small protocol
(`Operation.poll()`) and provides `wait_for_operation`, which blocks until
the operation reaches a terminal state. Polling is synchronous and
explicit. The sleep function and the clock are injectable so the loop can
be exercised with a fake clock and a scripted operation.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol

from adxops.core.errors import (
    OperationFailedError,
    OperationTimeoutError,
    PollTransportError,
)


class PollState(str, Enum):
    """
    Observed state of a long-running operation.

    Values:
        PENDING: The operation has not finished yet.
        SUCCEEDED: The operation finished successfully.
        FAILED: The operation finished with an error.
    """

    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class PollResult:
    """Result of a single poll of an operation."""

    state: PollState
    value: Any = None
    error: Exception | None = None

    @classmethod
    def pending(cls) -> PollResult:
        return cls(PollState.PENDING)

    @classmethod
    def succeeded(cls, value: Any = None) -> PollResult:
        return cls(PollState.SUCCEEDED, value=value)

    @classmethod
    def failed(cls, error: Exception) -> PollResult:
        return cls(PollState.FAILED, error=error)

    @property
    def done(self) -> bool:
        return self.state != PollState.PENDING


class Operation(Protocol):
    """Handle for a remote long-running operation."""

    def poll(self) -> PollResult:
        """
        Observe the operation once.

        Raises:
            PollTransportError: If the transport failed while observing.
        """
        ...


@dataclass(frozen=True)
class RetryPolicy:
    """
    Opt-in retry for transport errors raised while polling.

    Attributes:
        max_attempts: Consecutive transport errors tolerated before giving up.
        initial_backoff: Delay in seconds before the first retry.
        multiplier: Factor applied to the delay after each retry.
        max_backoff: Upper bound for a single delay.
    """

    max_attempts: int = 3
    initial_backoff: float = 2.0
    multiplier: float = 2.0
    max_backoff: float = 30.0

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be >= 0")
        if self.initial_backoff < 0 or self.max_backoff < 0:
            raise ValueError("backoff must be >= 0")
        if self.multiplier < 1:
            raise ValueError("multiplier must be >= 1")

    def backoff(self, attempt: int) -> float:
        """Return the delay before retry number `attempt` (1-based)."""
        delay = self.initial_backoff * self.multiplier ** (attempt - 1)
        return min(delay, self.max_backoff)


@dataclass(frozen=True)
class PollSettings:
    """Polling behaviour shared by every wait in a lifecycle run."""

    poll_interval: float = 5.0
    retry: RetryPolicy | None = None
    timeout: float | None = None


def wait_for_operation(
    operation: Operation,
    *,
    poll_interval: float = 5.0,
    retry: RetryPolicy | None = None,
    timeout: float | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Any:
    """
    Block until an operation reaches a terminal state.

    Args:
        operation: Operation handle to poll.
        poll_interval: Seconds to wait between polls of a pending operation.
        retry: Optional retry policy for transport errors. Without one, the
            first transport error propagates.
        timeout: Optional number of seconds after which waiting is abandoned.
        sleep: Function used to wait between polls.
        clock: Monotonic clock used for the timeout.

    Returns:
        The value carried by the succeeded poll result.

    Raises:
        OperationFailedError: If the operation reaches a failed state.
        OperationTimeoutError: If the timeout elapses first.
        PollTransportError: If transport errors exceed the retry policy.
    """
    deadline = clock() + timeout if timeout is not None else None
    failures = 0

    while True:
        try:
            result = operation.poll()
        except PollTransportError:
            if retry is None or failures >= retry.max_attempts:
                raise
            failures += 1
            sleep(retry.backoff(failures))
            continue

        failures = 0

        if result.done:
            if result.state == PollState.FAILED:
                raise OperationFailedError(str(result.error)) from result.error
            return result.value

        if deadline is not None and clock() >= deadline:
            raise OperationTimeoutError(
                f"operation did not finish within {timeout:g} seconds"
            )

        sleep(poll_interval)
