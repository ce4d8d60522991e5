"""loguru configuration.

Every record carries the id of the request it was emitted under (or "-"
outside a request), so log lines from the store, the service and the
access middleware can be correlated.
"""

import sys

from loguru import logger

from core.config import Settings
from core.context import get_request_id

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def _inject_request_id(record) -> None:
    record["extra"].setdefault("request_id", get_request_id())


def configure_logging(settings: Settings) -> None:
    """Reset loguru sinks and install the stderr sink for this process."""
    logger.remove()
    logger.configure(patcher=_inject_request_id)

    logger.add(
        sys.stderr,
        level=settings.log_level,
        format=LOG_FORMAT,
        colorize=True,
        backtrace=settings.is_development,
        diagnose=settings.is_development,
    )
