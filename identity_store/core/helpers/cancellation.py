from typing import Optional

from identity_store.core.models.exceptions import OperationCancelledError


class CancellationToken:
    """Signal shared between a caller and the store operations it starts."""

    def __init__(self):
        self._cancelled = False

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    def cancel(self):
        self._cancelled = True

    def throw_if_cancellation_requested(self):
        if self._cancelled:
            raise OperationCancelledError("The operation was cancelled.")


def throw_if_cancelled(token: Optional[CancellationToken]):
    """Raise OperationCancelledError when ``token`` is set; a missing token never cancels."""
    if token is not None:
        token.throw_if_cancellation_requested()
