"""
Development time calculator.

Combines a base time from the reference table with the temperature
multiplier for the working temperature:

    final_time = int(base_time * multiplier)

The product is truncated, not rounded. When no base time exists for the
requested combination the result is None, whatever the temperature. A
non-finite temperature is rejected with InvalidInputError.
"""

from dataclasses import dataclass
from typing import Optional

from filmlab.core.logging import get_logger
from filmlab.reference.models import DevelopmentParameters
from filmlab.reference.resolver import ReferenceResolver, normalize_temperature

logger = get_logger(__name__)


def format_seconds(total_seconds: int) -> str:
    """Format a duration as M:SS."""
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


@dataclass(frozen=True)
class DevelopmentResult:
    """Result of a development time calculation."""

    base_time: int
    multiplier: float
    time: int

    # Input values for reference
    film_id: str
    developer_id: str
    dilution: str
    iso: int
    temperature: float

    @property
    def minutes(self) -> int:
        return self.time // 60

    @property
    def seconds(self) -> int:
        return self.time % 60

    def format_time(self) -> str:
        """Format development time as M:SS."""
        return format_seconds(self.time)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "time": self.time,
            "formatted": self.format_time(),
            "minutes": self.minutes,
            "seconds": self.seconds,
            "base_time": self.base_time,
            "multiplier": self.multiplier,
            "inputs": {
                "film_id": self.film_id,
                "developer_id": self.developer_id,
                "dilution": self.dilution,
                "iso": self.iso,
                "temperature": self.temperature,
            },
        }


class DevelopmentTimeCalculator:
    """Calculate temperature adjusted development times."""

    def __init__(self, resolver: ReferenceResolver):
        """Initialize calculator.

        Args:
            resolver: Lookup interface over the reference data.
        """
        self.resolver = resolver

    def calculate(
        self,
        film_id: str,
        developer_id: str,
        dilution: str,
        iso: int,
        temperature_celsius: float,
    ) -> Optional[int]:
        """Adjusted development time in seconds, or None if no base time exists."""
        result = self.calculate_detailed(film_id, developer_id, dilution, iso, temperature_celsius)
        return result.time if result is not None else None

    def calculate_detailed(
        self,
        film_id: str,
        developer_id: str,
        dilution: str,
        iso: int,
        temperature_celsius: float,
    ) -> Optional[DevelopmentResult]:
        """Like calculate, but keeps the base time and multiplier used.

        Returns:
            DevelopmentResult, or None if the combination has no base time.

        Raises:
            InvalidInputError: If the temperature is infinite or NaN.
        """
        temperature_key = normalize_temperature(temperature_celsius)
        base_time = self.resolver.lookup_base_time(film_id, developer_id, dilution, iso)
        if base_time is None:
            return None

        multiplier = self.resolver.lookup_temperature_multiplier(temperature_key)
        final_time = int(base_time * multiplier)

        logger.debug(
            f"Development time: base={base_time} multiplier={multiplier} final={final_time}"
        )

        return DevelopmentResult(
            base_time=base_time,
            multiplier=multiplier,
            time=final_time,
            film_id=film_id,
            developer_id=developer_id,
            dilution=dilution,
            iso=iso,
            temperature=temperature_celsius,
        )

    def calculate_for(self, parameters: DevelopmentParameters) -> Optional[DevelopmentResult]:
        """Calculate from a parameter bundle collected by the caller."""
        return self.calculate_detailed(
            parameters.film.id,
            parameters.developer.id,
            parameters.dilution,
            parameters.iso,
            parameters.temperature,
        )

    def available_dilutions(self, film_id: str, developer_id: str) -> list[str]:
        """Dilutions a caller may offer for the film/developer pair."""
        return self.resolver.available_dilutions(film_id, developer_id)

    def available_isos(self, film_id: str, developer_id: str, dilution: str) -> list[int]:
        """ISOs a caller may offer for the film/developer/dilution."""
        return self.resolver.available_isos(film_id, developer_id, dilution)
