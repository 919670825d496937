"""Error taxonomy for adxops.

Adapters translate Azure SDK exceptions into these types so that the
lifecycle orchestrator and the CLI never depend on SDK exception classes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adxops.core.lifecycle import Step


class AdxOpsError(RuntimeError):
    """Base class for all adxops errors."""


class ConfigError(AdxOpsError):
    """Raised when required configuration is missing or invalid."""


class RequestError(AdxOpsError):
    """Raised when the management API rejects a request synchronously."""


class OperationFailedError(AdxOpsError):
    """Raised when a long-running operation reaches a failed terminal state."""


class PollTransportError(AdxOpsError):
    """Raised when the transport fails while observing a long-running operation."""


class OperationTimeoutError(AdxOpsError):
    """Raised when a long-running operation does not finish within the timeout."""


class StepError(AdxOpsError):
    """
    Raised when a lifecycle step fails.

    Attributes:
        step: The step that failed.
        cause: The underlying error.
    """

    def __init__(self, step: Step, cause: Exception):
        super().__init__(f"{step.value} failed: {cause}")
        self.step = step
        self.cause = cause
