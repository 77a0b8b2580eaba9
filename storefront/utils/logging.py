# storefront/utils/logging.py
import logging
import sys

from storefront.utils.settings import LOG_LEVEL

_configured = False


def setup_logging():
    global _configured
    if _configured:
        return

    level = getattr(logging, LOG_LEVEL, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # uvicorn / pytest may have installed their own handlers already
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        root.addHandler(handler)

    _configured = True


def get_logger(name: str | None = None) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
