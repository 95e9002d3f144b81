"""Process-wide logging setup."""

import logging

from src.config.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger from settings.

    Safe to call more than once; existing handlers are replaced.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
        force=True,
    )
    # SQLAlchemy engine echo is controlled by DATABASE_ECHO instead
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
