import logging
from typing import Optional, Union

from .config import DEFAULT_LOG_LEVEL, get_log_level_from_env

LOGGER_NAME = "pay402"

logger = logging.getLogger(LOGGER_NAME)


def setup_logger(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Args:
        level: Logging level; defaults to PAY402_LOG_LEVEL, then INFO.

    Returns:
        The package logger.
    """
    level = level or get_log_level_from_env() or DEFAULT_LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not any(getattr(h, "_pay402", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s")
        )
        handler._pay402 = True
        logger.addHandler(handler)

    return logger


def mask_token(token: str, visible: int = 6) -> str:
    """Shorten a proof-of-payment token for log output."""
    if len(token) <= visible * 2:
        return "***"
    return f"{token[:visible]}...{token[-visible:]}"
