"""
Core logging module.

This module configures the application logging with Loguru.
"""

import logging
import os
import sys

from loguru import logger

from scanlink.core.config import settings


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging and redirect to loguru.
    
    Services and repositories log through the standard library;
    this handler forwards those records into loguru's sinks.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Try to get corresponding Loguru level or use level number
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def register_request_level() -> None:
    """Register the custom REQUEST level used by the request middleware."""
    try:
        logger.level("REQUEST")
    except ValueError:
        logger.level("REQUEST", no=25, color="<green>")


def setup_logging():
    """
    Configure application logging using Loguru.
    
    This sets up Loguru with proper formatting, log levels, and handlers,
    and also intercepts standard library logging.
    """
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    
    # Remove default handlers
    logger.remove()
    
    level = settings.LOG_LEVEL.upper()
    
    if settings.DEBUG:
        logger.add(
            sys.stderr,
            level=level,
            format=settings.LOG_FORMAT,
            backtrace=True,
            diagnose=True,
        )
    
    log_file_path = os.path.join(settings.LOG_DIR, settings.LOG_FILENAME)
    
    if settings.LOG_JSON:
        logger.add(
            log_file_path,
            level=level,
            serialize=True,
            rotation=settings.LOG_ROTATION,
            retention=settings.LOG_RETENTION,
            compression="gz",
            filter=lambda record: record["extra"].get("event_type") != "scan_access",
        )
    else:
        logger.add(
            log_file_path,
            level=level,
            format=settings.LOG_FORMAT,
            rotation=settings.LOG_ROTATION,
            retention=settings.LOG_RETENTION,
            compression="gz",
            filter=lambda record: record["extra"].get("event_type") != "scan_access",
        )
    
    register_request_level()
    
    # Intercept standard library logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    
    for name in logging.root.manager.loggerDict.keys():
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
    
    for log_name in ["uvicorn", "uvicorn.access", "uvicorn.error", "fastapi"]:
        logging_logger = logging.getLogger(log_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False
    
    return logger
