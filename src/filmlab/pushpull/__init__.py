"""
Push/pull processing time ladders.
"""

from filmlab.pushpull.calculator import (
    BASE_LABEL,
    PushPullCalculator,
    PushPullInput,
    PushPullStep,
    round_half_up,
    step_label,
)

__all__ = [
    "BASE_LABEL",
    "PushPullCalculator",
    "PushPullInput",
    "PushPullStep",
    "round_half_up",
    "step_label",
]
