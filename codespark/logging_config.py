from __future__ import annotations

import logging

LOGGER_NAME = "codespark"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stream handler to the project logger once and set its level."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
