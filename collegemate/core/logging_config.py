"""
CollegeMate - Centralized Logging Configuration
Supports both development (plain text) and production (JSON structured) logging
"""

import logging
import sys
import json
import traceback
from datetime import datetime
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional
from contextvars import ContextVar

from collegemate.core.config import settings


# Context variable for the signed-in user, attached to every record
user_email_var: ContextVar[str] = ContextVar('user_email', default='')


def get_user_email() -> str:
    """Get current user email from context"""
    return user_email_var.get() or ''


def set_user_email(email: Optional[str]) -> None:
    """Set current user email in context"""
    user_email_var.set(email or '')


_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
    'message', 'taskName', 'user_email'
}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging in production
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        user_email = get_user_email()
        if user_email:
            log_data["user_email"] = user_email

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info) if record.exc_info[0] else None
            }

        # Add extra fields from record
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ContextualFormatter(logging.Formatter):
    """
    Formatter that includes the signed-in user, used for development output
    """

    def format(self, record: logging.LogRecord) -> str:
        record.user_email = get_user_email() or '-'
        return super().format(record)


class CollegeMateLogger(logging.Logger):
    """
    Custom logger with convenience methods for structured logging
    """

    def log_auth_event(self, event: str, success: bool, user_email: str = None,
                       reason: str = None, **kwargs) -> None:
        """Log authentication events"""
        level = logging.INFO if success else logging.WARNING
        self.log(
            level,
            f"Auth {event}: {'success' if success else 'failed'}" +
            (f" - {user_email}" if user_email else "") +
            (f" - {reason}" if reason else ""),
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "auth_email": user_email,
                "failure_reason": reason,
                **kwargs
            }
        )

    def log_poll_event(self, event: str, option: str = None,
                       poll_date: str = None, **kwargs) -> None:
        """Log poll votes and rollovers"""
        self.info(
            f"Poll {event}" +
            (f": {option}" if option else "") +
            (f" ({poll_date})" if poll_date else ""),
            extra={
                "event_type": "poll",
                "poll_event": event,
                "poll_option": option,
                "poll_date": poll_date,
                **kwargs
            }
        )

    def log_error_with_context(self, error: Exception, context: str = None,
                               **kwargs) -> None:
        """Log error with full context"""
        self.error(
            f"Error in {context}: {type(error).__name__}: {str(error)}",
            exc_info=True,
            extra={
                "event_type": "error",
                "error_type": type(error).__name__,
                "error_message": str(error),
                "error_context": context,
                **kwargs
            }
        )


def setup_logging(level: Optional[str] = None) -> CollegeMateLogger:
    """Setup logging configuration based on environment"""

    logging.setLoggerClass(CollegeMateLogger)

    logger = logging.getLogger("collegemate")
    logger.__class__ = CollegeMateLogger  # Ensure it's our custom class
    default_level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL
    log_level = getattr(logging, (level or default_level).upper(), logging.WARNING)
    logger.setLevel(log_level)
    logger.propagate = False

    logger.handlers.clear()

    if settings.is_production:
        formatter = JSONFormatter()
        file_formatter = formatter
    else:
        detailed_format = (
            "%(asctime)s | %(levelname)-8s | "
            "[%(user_email)s] | "
            "%(funcName)s:%(lineno)d | %(message)s"
        )
        simple_format = "%(levelname)-8s | %(message)s"
        formatter = ContextualFormatter(simple_format)
        file_formatter = ContextualFormatter(detailed_format)

    # Console goes to stderr so it never mixes with CLI output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_file = Path(settings.LOG_FILE).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=1048576,  # 1MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    logging.getLogger("redis").setLevel(logging.WARNING)

    logger.debug(
        "Logging initialized",
        extra={
            "environment": settings.ENVIRONMENT,
            "log_level": logging.getLevelName(log_level),
            "json_logging": settings.is_production
        }
    )

    return logger


# Create logger instance
logger: CollegeMateLogger = setup_logging()


__all__ = [
    'logger',
    'setup_logging',
    'get_user_email',
    'set_user_email',
    'CollegeMateLogger',
]
