"""
Reference lookups: base development times and temperature multipliers.

All lookups are exact-match. There is no nearest-ISO or interpolated
temperature logic, and a missing base time is reported as None rather than
as zero or as an exception.
"""

import math
from typing import Optional

from filmlab.core.exceptions import InvalidInputError
from filmlab.core.logging import get_logger
from filmlab.reference.models import (
    Developer,
    Film,
    ReferenceDataset,
    TemperatureMultiplier,
)

logger = get_logger(__name__)

# Multiplier used for any temperature missing from the table (no adjustment)
IDENTITY_MULTIPLIER_DEFAULT = 1.0


def normalize_temperature(temperature: float) -> int:
    """Whole-degree table key for a temperature.

    Truncates toward zero, so 24.9 -> 24 and -2.7 -> -2.

    Raises:
        InvalidInputError: If the temperature is infinite or NaN.
    """
    if not math.isfinite(temperature):
        raise InvalidInputError(
            "temperature must be a finite number", field="temperature", value=temperature
        )
    return int(temperature)


class ReferenceResolver:
    """Read-only query interface over a ReferenceDataset.

    Holds no state besides the dataset, so a single instance can be shared
    between any number of callers.
    """

    def __init__(self, dataset: ReferenceDataset):
        """Initialize resolver.

        Args:
            dataset: Fully imported reference data.
        """
        self.dataset = dataset

    def lookup_base_time(
        self,
        film_id: str,
        developer_id: str,
        dilution: str,
        iso: int,
    ) -> Optional[int]:
        """Base development time in seconds, or None when there is no entry."""
        time = self.dataset.get_time(film_id, developer_id, dilution, iso)
        if time is None:
            logger.debug(
                f"No development time for film={film_id} developer={developer_id} "
                f"dilution={dilution} iso={iso}"
            )
        else:
            logger.debug(
                f"Development time for film={film_id} developer={developer_id} "
                f"dilution={dilution} iso={iso}: {time}"
            )
        return time

    def lookup_temperature_multiplier(self, temperature: float) -> float:
        """Multiplier for a temperature, IDENTITY_MULTIPLIER_DEFAULT if not listed."""
        multiplier = self.dataset.get_multiplier(normalize_temperature(temperature))
        if multiplier is None:
            return IDENTITY_MULTIPLIER_DEFAULT
        return multiplier

    def available_dilutions(self, film_id: str, developer_id: str) -> list[str]:
        """Distinct dilutions with data for a film/developer pair, sorted."""
        return sorted(
            {
                dilution
                for f_id, d_id, dilution, _ in self.dataset.time_keys()
                if f_id == film_id and d_id == developer_id
            }
        )

    def available_isos(self, film_id: str, developer_id: str, dilution: str) -> list[int]:
        """Distinct ISOs with data for a film/developer/dilution, ascending."""
        return sorted(
            {
                iso
                for f_id, d_id, dil, iso in self.dataset.time_keys()
                if f_id == film_id and d_id == developer_id and dil == dilution
            }
        )

    # Catalogue queries

    def films(self) -> list[Film]:
        """All films sorted by name."""
        return sorted(self.dataset.films, key=lambda f: f.name)

    def developers(self) -> list[Developer]:
        """All developers sorted by name."""
        return sorted(self.dataset.developers, key=lambda d: d.name)

    def temperature_multipliers(self) -> list[TemperatureMultiplier]:
        """Multiplier table sorted by temperature."""
        return sorted(self.dataset.temperature_multipliers, key=lambda t: t.temperature)

    def get_film(self, film_id: str) -> Optional[Film]:
        return self.dataset.get_film(film_id)

    def get_developer(self, developer_id: str) -> Optional[Developer]:
        return self.dataset.get_developer(developer_id)
