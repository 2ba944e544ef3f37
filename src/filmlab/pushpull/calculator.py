"""
Push/pull development time ladders.

Each stop of push multiplies the development time by a fixed coefficient,
each stop of pull divides by it:

    time_i = round(base_seconds * coefficient ** (+i | -i)),  i = 0..steps

Rounding is to the nearest second with halves rounded up. With the common
coefficient of 1.33 an 8:00 base time gives 8:00, 10:38, 14:09 for +0..+2.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from filmlab.core.exceptions import InvalidInputError
from filmlab.core.logging import get_logger

logger = get_logger(__name__)

BASE_LABEL = "Base"


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves up."""
    return int(math.floor(value + 0.5))


def step_label(step: int, is_push_mode: bool) -> str:
    """Label for a ladder entry: 'Base', '+1', '+2'... or '-1', '-2'..."""
    if step == 0:
        return BASE_LABEL
    return f"+{step}" if is_push_mode else f"-{step}"


@dataclass(frozen=True)
class PushPullStep:
    """One entry of a push/pull ladder."""

    label: str
    minutes: int
    seconds: int

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    def format_time(self) -> str:
        """Format as M:SS."""
        return f"{self.minutes}:{self.seconds:02d}"

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "total_seconds": self.total_seconds,
            "formatted": self.format_time(),
        }


@dataclass(frozen=True)
class PushPullInput:
    """Validated push/pull calculator input."""

    minutes: int
    seconds: int
    coefficient: float
    is_push_mode: bool = True
    steps: int = 5

    @property
    def base_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    @classmethod
    def parse(
        cls,
        minutes: Union[str, int],
        seconds: Union[str, int],
        coefficient: Union[str, float],
        is_push_mode: Optional[bool] = None,
        steps: Optional[int] = None,
        max_steps: Optional[int] = None,
        max_coefficient: Optional[float] = None,
    ) -> "PushPullInput":
        """Validate raw form input.

        Args:
            minutes: Whole minutes, >= 0 (string or int).
            seconds: Whole seconds, 0-59 (string or int).
            coefficient: Per-stop multiplier, > 0 (string or float).
            is_push_mode: Push (True) or pull (False). Defaults to settings.
            steps: Number of stops, >= 0. Defaults to settings.
            max_steps: Optional upper bound for steps. Defaults to settings.
            max_coefficient: Optional upper bound for the coefficient; its
                reciprocal is the lower bound. Defaults to settings.

        Returns:
            PushPullInput ready for PushPullCalculator.

        Raises:
            InvalidInputError: For the first field that fails validation.
        """
        from filmlab.config import get_settings

        calc_settings = get_settings().calculator
        if is_push_mode is None:
            is_push_mode = calc_settings.default_push_mode
        if steps is None:
            steps = calc_settings.default_steps
        if max_steps is None:
            max_steps = calc_settings.max_steps
        if max_coefficient is None:
            max_coefficient = calc_settings.max_coefficient

        parsed_minutes = _parse_int("minutes", minutes)
        if parsed_minutes < 0:
            raise InvalidInputError("minutes must be >= 0", field="minutes", value=minutes)

        parsed_seconds = _parse_int("seconds", seconds)
        if not 0 <= parsed_seconds < 60:
            raise InvalidInputError(
                "seconds must be between 0 and 59", field="seconds", value=seconds
            )

        parsed_coefficient = _parse_float("coefficient", coefficient)
        if not math.isfinite(parsed_coefficient) or parsed_coefficient <= 0:
            raise InvalidInputError(
                "coefficient must be a positive number", field="coefficient", value=coefficient
            )
        if not 1 / max_coefficient <= parsed_coefficient <= max_coefficient:
            raise InvalidInputError(
                f"coefficient must be between {1 / max_coefficient:g} and {max_coefficient:g}",
                field="coefficient",
                value=coefficient,
            )

        if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
            raise InvalidInputError("steps must be an integer >= 0", field="steps", value=steps)
        if steps > max_steps:
            raise InvalidInputError(
                f"steps must be <= {max_steps}", field="steps", value=steps
            )

        return cls(
            minutes=parsed_minutes,
            seconds=parsed_seconds,
            coefficient=parsed_coefficient,
            is_push_mode=bool(is_push_mode),
            steps=steps,
        )


def _parse_int(field: str, value: Union[str, int]) -> int:
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a whole number", field=field, value=value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidInputError(f"{field} must be a whole number", field=field, value=value)


def _parse_float(field: str, value: Union[str, float]) -> float:
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number", field=field, value=value)
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        raise InvalidInputError(f"{field} must be a number", field=field, value=value)


class PushPullCalculator:
    """Generate push or pull development time ladders.

    Stateless. Input is expected to be validated by the caller (see
    PushPullInput.parse); out of range values still fail fast with
    InvalidInputError instead of producing a nonsensical ladder.
    """

    def calculate_results(
        self,
        minutes: int,
        seconds: int,
        coefficient: float,
        is_push_mode: bool,
        steps: int,
    ) -> list[PushPullStep]:
        """Build the ladder, base time first, then increasing stop offsets.

        Args:
            minutes: Base time minutes.
            seconds: Base time seconds (0-59).
            coefficient: Per-stop time multiplier.
            is_push_mode: True to lengthen per stop, False to shorten.
            steps: Number of stops after the base entry.

        Returns:
            steps + 1 PushPullStep entries.

        Raises:
            InvalidInputError: If an input is out of range or a step time is
                too large to represent.
        """
        if minutes < 0:
            raise InvalidInputError("minutes must be >= 0", field="minutes", value=minutes)
        if not 0 <= seconds < 60:
            raise InvalidInputError("seconds must be between 0 and 59", field="seconds", value=seconds)
        if not math.isfinite(coefficient) or coefficient <= 0:
            raise InvalidInputError(
                "coefficient must be a positive number", field="coefficient", value=coefficient
            )
        if steps < 0:
            raise InvalidInputError("steps must be an integer >= 0", field="steps", value=steps)

        base = minutes * 60 + seconds
        try:
            base_value = float(base)
        except OverflowError:
            raise InvalidInputError("minutes is too large", field="minutes", value=minutes)
        sign = 1 if is_push_mode else -1

        results = []
        for step in range(steps + 1):
            try:
                total = round_half_up(base_value * coefficient ** (sign * step))
            except OverflowError:
                raise InvalidInputError(
                    f"step {step_label(step, is_push_mode)} is too large to calculate",
                    field="coefficient",
                    value=coefficient,
                )
            step_minutes, step_seconds = divmod(total, 60)
            results.append(
                PushPullStep(
                    label=step_label(step, is_push_mode),
                    minutes=step_minutes,
                    seconds=step_seconds,
                )
            )

        logger.debug(
            f"Push/pull ladder: base={base}s coefficient={coefficient} "
            f"mode={'push' if is_push_mode else 'pull'} steps={steps}"
        )
        return results

    def calculate(self, params: PushPullInput) -> list[PushPullStep]:
        """Build the ladder from validated input."""
        return self.calculate_results(
            params.minutes,
            params.seconds,
            params.coefficient,
            params.is_push_mode,
            params.steps,
        )
