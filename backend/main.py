"""Backend entrypoint: configures logging and exposes the ASGI app.

Serve with any ASGI server, e.g. ``uvicorn backend.main:app``.
"""

import logging

from backend.api import app
from shared import config


def configure_logging() -> None:
    """Configure root logging from LEDGER_LOG_LEVEL."""
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


configure_logging()

__all__ = ["app", "configure_logging"]
