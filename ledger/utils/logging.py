"""Root logger setup shared by the API and the CLI."""

import logging

from ledger.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    level_name = (level or settings.log_level).upper()
    # No-op for handlers when the host (uvicorn, pytest) already installed some
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level_name)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger(__name__).debug(f"Logging configured at {level_name}")
