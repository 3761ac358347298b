import logging
from contextlib import contextmanager

from identity_store.core.models.exceptions import DatabaseError, ItemNotFoundError

logger = logging.getLogger(__name__)


class ErrorPolicy:
    """
    Classifies container errors at a store boundary.

    "Not found" is always turned into an empty result. Any other DatabaseError
    is logged and discarded when ``suppress_errors`` is set, and re-raised
    otherwise. Exceptions that are not DatabaseErrors always propagate.
    """

    def __init__(self, suppress_errors: bool = True):
        self.suppress_errors = suppress_errors

    @contextmanager
    def guard(self, action: str):
        try:
            yield
        except ItemNotFoundError as e:
            logger.debug("%s: nothing found (%s)", action, e.message)
        except DatabaseError as e:
            if not self.suppress_errors:
                raise
            logger.warning("%s failed with status %s: %s", action, e.status_code, e.message)
