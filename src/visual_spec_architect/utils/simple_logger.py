"""Progress logging helpers for cleaner output."""

import logging


def _log_progress(logger: logging.Logger, message: str, progress_type: str):
    if not logger.isEnabledFor(logging.INFO):
        return
    record = logger.makeRecord(
        logger.name, logging.INFO, "", 0, message, (), None
    )
    record.progress_type = progress_type
    logger.handle(record)


def log_start(logger: logging.Logger, message: str):
    """Log the start of a task."""
    _log_progress(logger, f"🚀 {message}", 'start')


def log_update(logger: logging.Logger, message: str):
    """Log a progress update."""
    _log_progress(logger, f"   ▶ {message}", 'update')


def log_complete(logger: logging.Logger, message: str):
    """Log task completion."""
    _log_progress(logger, f"✅ {message}", 'complete')
