"""
Core infrastructure for FilmLab: logging and exceptions.
"""

from filmlab.core.exceptions import (
    FilmLabError,
    InvalidInputError,
    ReferenceDataError,
)
from filmlab.core.logging import get_logger, log_operation, setup_logging

__all__ = [
    # Exceptions
    "FilmLabError",
    "InvalidInputError",
    "ReferenceDataError",
    # Logging
    "get_logger",
    "log_operation",
    "setup_logging",
]
