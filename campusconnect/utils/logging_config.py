"""Logging configuration for the application."""

import logging
import os
import sys

_configured = False


def setup_logging():
    """Configure logging for the application.

    Safe to call more than once; the console handler is only attached the
    first time. LOG_LEVEL overrides the default INFO level.
    """
    global _configured
    if _configured:
        return

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO').upper())
    root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)

    _configured = True
