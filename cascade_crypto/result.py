"""
Explicit results for fallible cascade operations
================================================
Layers raise; callers that prefer to branch on a value instead of
catching exceptions wrap the call with attempt() and inspect the Outcome.

Only taxonomy errors (see errors.py) are captured. Anything else is a bug
and propagates.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import TAXONOMY


@dataclass(frozen=True)
class Outcome:
    """Either a value or a tagged taxonomy error, never both."""

    value: Any = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value) -> "Outcome":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[str]:
        return None if self.error is None else self.error.kind

    @property
    def layer(self) -> Optional[str]:
        return None if self.error is None else self.error.layer

    @property
    def client_error(self) -> bool:
        return self.error is not None and self.error.client_error

    def unwrap(self):
        """Return the value, or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value


def attempt(fn: Callable, *args, layer: Optional[str] = None, **kwargs) -> Outcome:
    """Call fn and fold a taxonomy error into an Outcome."""
    try:
        return Outcome.success(fn(*args, **kwargs))
    except TAXONOMY as exc:
        if layer and exc.layer is None:
            exc.layer = layer
        return Outcome.failure(exc)
