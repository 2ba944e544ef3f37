"""
Temperature adjusted development time calculation.
"""

from filmlab.development.calculator import (
    DevelopmentResult,
    DevelopmentTimeCalculator,
    format_seconds,
)

__all__ = [
    "DevelopmentResult",
    "DevelopmentTimeCalculator",
    "format_seconds",
]
