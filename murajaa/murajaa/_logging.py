"""
Structured logging utilities for Murajaa library.

Provides a configured logger and helper functions for consistent logging.
"""

import logging
import sys
from typing import Optional


# Default format for Murajaa logs
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "murajaa") -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (default: "murajaa")

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure logging for the Murajaa library.

    Args:
        level: Logging level (default: INFO)
        format_string: Log format string (default: DEFAULT_FORMAT)
        date_format: Date format string (default: DEFAULT_DATE_FORMAT)
        stream: Output stream (default: sys.stderr)

    Returns:
        Configured root logger for murajaa
    """
    logger = logging.getLogger("murajaa")
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger


def enable_debug_logging() -> None:
    """Enable debug-level logging for the Murajaa library."""
    configure_logging(level=logging.DEBUG)


def disable_logging() -> None:
    """Disable all Murajaa logging."""
    logger = logging.getLogger("murajaa")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())


_logger = get_logger()


def log_verification_complete(
    score: int,
    error_count: int,
    strictness: int,
    refined: bool,
) -> None:
    """Log the outcome of a verification call."""
    source = "refined" if refined else "aligned"
    _logger.info(
        f"Verification complete: score={score} errors={error_count} "
        f"strictness={strictness} ({source})"
    )


def log_refinement_fallback(reason: str, kind: str) -> None:
    """Log that semantic refinement was skipped and the raw score kept."""
    _logger.warning(f"Refinement {kind}, using raw alignment: {reason}")


def log_refinement_usage(model: str, prompt_tokens: int, completion_tokens: int, cost: float) -> None:
    """Log token usage of a refinement request."""
    _logger.debug(
        f"Refinement usage: model={model} prompt={prompt_tokens} "
        f"completion={completion_tokens} cost=${cost:.6f}"
    )


def log_stage_advanced(
    from_page: int,
    from_stage: str,
    to_page: int,
    to_stage: str,
    to_line: int,
) -> None:
    """Log a learner stage transition."""
    _logger.info(
        f"Advanced: page {from_page} {from_stage} -> page {to_page} {to_stage} line {to_line}"
    )


def log_stale_completion(reason: str, **context) -> None:
    """Log a completion signal that was rejected."""
    log_warning(f"Rejected completion: {reason}", **context)


def log_warning(message: str, **context) -> None:
    """Log a warning with optional context."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.warning(f"{message} ({ctx_str})")
    else:
        _logger.warning(message)


def log_error(message: str, exc_info: bool = False, **context) -> None:
    """Log an error with optional context and exception info."""
    if context:
        ctx_str = ", ".join(f"{k}={v}" for k, v in context.items())
        _logger.error(f"{message} ({ctx_str})", exc_info=exc_info)
    else:
        _logger.error(message, exc_info=exc_info)
