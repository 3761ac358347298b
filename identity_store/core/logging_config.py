import logging
from typing import Optional

from identity_store.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[str] = None):
    """Configure root logging from settings unless an explicit level is given."""
    if level is None:
        level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT
    )
