"""
Logging utilities for the project.
Includes the performance decorator and structured logging helpers.
"""
import time
import logging
import functools
from typing import Any, Callable
from django.conf import settings

# Specialised loggers
performance_logger = logging.getLogger('core.performance')
security_logger = logging.getLogger('core.security')


def log_performance(threshold_ms: float | None = None):
    """
    Decorator that logs the execution time of a function.
    Without an explicit threshold, SURVEY_API_SLOW_MS is used.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            limit = threshold_ms if threshold_ms is not None else getattr(settings, 'SURVEY_API_SLOW_MS', 1000.0)
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed_time = (time.time() - start_time) * 1000
                if elapsed_time > limit:
                    performance_logger.warning(
                        f"Slow operation: {func.__module__}.{func.__name__} "
                        f"took {elapsed_time:.2f}ms (threshold: {limit}ms)"
                    )
                elif settings.DEBUG:
                    performance_logger.debug(
                        f"{func.__module__}.{func.__name__} took {elapsed_time:.2f}ms"
                    )
        return wrapper
    return decorator


def log_user_action(action: str, success: bool = True, **extra_data):
    logger = logging.getLogger('core.security')
    log_message = f"Admin action: {action} - {'SUCCESS' if success else 'FAILED'}"
    if extra_data:
        details = ', '.join(f"{k}={v}" for k, v in extra_data.items())
        log_message += f" | {details}"

    if success:
        logger.info(log_message)
    else:
        logger.warning(log_message)


def log_security_event(event_type: str, severity: str = 'WARNING', **details):
    log_message = f"Security event: {event_type}"
    if details:
        details_str = ', '.join(f"{k}={v}" for k, v in details.items())
        log_message += f" | {details_str}"

    severity_map = {
        'DEBUG': security_logger.debug,
        'INFO': security_logger.info,
        'WARNING': security_logger.warning,
        'ERROR': security_logger.error,
        'CRITICAL': security_logger.critical,
    }
    log_func = severity_map.get(severity.upper(), security_logger.warning)
    log_func(log_message)


class StructuredLogger:
    """
    Helper for structured logging with context.
    Accepts the standard logging kwargs (exc_info, extra, stack_info);
    every other kwarg is appended to the message as key=value.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _format_message(self, message: str, **context) -> str:
        if context:
            context_str = ' | '.join(f"{k}={v}" for k, v in context.items())
            return f"{message} | {context_str}"
        return message

    def _log(self, level_func, message, args, kwargs):
        # Reserved kwargs go to the native logger untouched
        exc_info = kwargs.pop('exc_info', None)
        stack_info = kwargs.pop('stack_info', False)
        extra = kwargs.pop('extra', None)

        formatted_msg = self._format_message(str(message), **kwargs)
        level_func(formatted_msg, *args, exc_info=exc_info, stack_info=stack_info, extra=extra)

    def debug(self, message: str, *args, **context):
        self._log(self.logger.debug, message, args, context)

    def info(self, message: str, *args, **context):
        self._log(self.logger.info, message, args, context)

    def warning(self, message: str, *args, **context):
        self._log(self.logger.warning, message, args, context)

    def error(self, message: str, *args, **context):
        self._log(self.logger.error, message, args, context)

    def exception(self, message: str, *args, **context):
        # exception() adds exc_info=True on the native logger
        context.setdefault('exc_info', True)
        self._log(self.logger.error, message, args, context)

    def critical(self, message: str, *args, **context):
        self._log(self.logger.critical, message, args, context)
