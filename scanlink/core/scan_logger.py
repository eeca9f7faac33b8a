"""Scan access logging using Loguru's built-in async features."""

import os
from datetime import datetime
from typing import Optional

from loguru import logger

from scanlink.core.config import settings

scan_access_logger = None
_sink_ids = []


def setup_scan_logging():
    """Configure the scan access sinks with enqueued (non-blocking) writes."""
    global scan_access_logger
    
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    
    scan_access_logger = logger.bind(event_type="scan_access")
    
    while _sink_ids:
        sink_id = _sink_ids.pop()
        try:
            logger.remove(sink_id)
        except ValueError:
            # already removed by setup_logging()
            pass
    
    _sink_ids.append(logger.add(
        f"{settings.LOG_DIR}/scan_access.log",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | IP:{extra[ip]} | Id:{extra[short_id]} | {message}",
        rotation=settings.LOG_ROTATION,
        retention=settings.LOG_RETENTION,
        enqueue=True,
        level="INFO",
        backtrace=False,
        diagnose=False,
        filter=lambda record: record["extra"].get("event_type") == "scan_access"
    ))
    
    if settings.LOG_JSON:
        _sink_ids.append(logger.add(
            f"{settings.LOG_DIR}/scan_access.json",
            serialize=True,
            enqueue=True,
            level="INFO",
            filter=lambda record: record["extra"].get("event_type") == "scan_access"
        ))
    
    return scan_access_logger


def log_scan_access(short_id: str, ip: Optional[str], user_agent: Optional[str] = None):
    """
    Log a scan access event.
    
    Args:
        short_id: The short identifier that was resolved
        ip: The scanner's network address, if known
        user_agent: The scanner's user agent string
    """
    if not settings.SCAN_LOG_ENABLED:
        return
    
    if scan_access_logger is None:
        setup_scan_logging()
    
    scan_access_logger.bind(
        ip=ip or "unknown",
        short_id=short_id,
        user_agent=user_agent or "",
        timestamp=datetime.utcnow().isoformat()
    ).info(f"Scan recorded: {short_id}")
