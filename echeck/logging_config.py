"""
Structured Logging Configuration Module

Provides JSON-formatted structured logging for check issuance and verification.
Security PINs are never passed to the logger.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module if hasattr(record, 'module') else record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, 'correlation_id', None),
            "action": getattr(record, 'action', None),
            "check_number": getattr(record, 'check_number', None),
            "outcome": getattr(record, 'outcome', None),
            "extra": getattr(record, 'extra', None)
        }

        # Remove None values
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json", logger_name: str = "echeck",
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Setup logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: "json" for structured output, "text" for plain lines
        logger_name: Name of the logger
        log_file: Optional file path; logs go to stderr when omitted

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()

    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(name)-20s] %(levelname)-7s %(message)s"
        ))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, check_number: Optional[str] = None,
               outcome: Optional[str] = None, correlation_id: Optional[str] = None,
               extra: Optional[dict] = None):
    """
    Log an action with structured data.

    Args:
        logger: Logger instance
        level: Log level (info, warning, error, etc.)
        message: Log message
        action: Action being performed (issue, verify, decode)
        check_number: Check the action applies to
        outcome: Result classification of the action
        correlation_id: Correlation ID for request tracing
        extra: Additional structured data
    """
    fields = {}
    if action:
        fields['action'] = action
    if check_number:
        fields['check_number'] = check_number
    if outcome:
        fields['outcome'] = outcome
    if correlation_id:
        fields['correlation_id'] = correlation_id
    if extra:
        fields['extra'] = extra

    logger.log(getattr(logging, level.upper()), message, extra=fields)
