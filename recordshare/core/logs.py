"""
Logging setup and the logger dependency.

Components get their logger handed to them: the token service at
construction, service functions through the `logger` keyword.
"""

from __future__ import annotations

import logging

from fastapi import Request

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger("recordshare")


def get_logger(request: Request) -> logging.Logger:
    return request.app.state.logger
