"""
Viewport Error Handler Module

This module provides a centralized error reporting pattern for code that
runs from the Qt event loop, where exceptions must not propagate:
1. Logs errors with their stack trace
2. Returns a short description the caller can surface
"""

import logging

logger = logging.getLogger("viewport.error_handler")

class ErrorHandler:
    """Centralized error handling for the zoomable viewport."""

    @staticmethod
    def log_exception(e: Exception, context: str = "") -> str:
        """Log an exception with its stack trace."""
        error_type = type(e).__name__
        error_msg = str(e)

        if context:
            logger.error("%s: %s: %s", context, error_type, error_msg, exc_info=e)
        else:
            logger.error("%s: %s", error_type, error_msg, exc_info=e)

        return f"{error_type}: {error_msg}"
