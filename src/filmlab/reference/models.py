"""
Reference data models for FilmLab.

Films, developers, development times and temperature multipliers are
imported once and never mutated afterwards, so every model here is frozen.
"""

from collections.abc import Iterable
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from filmlab.core.exceptions import ReferenceDataError


class Film(BaseModel):
    """A film stock."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Stable film key, e.g. 'ilford-hp5'")
    name: str = Field(..., min_length=1)
    manufacturer: str = Field(default="")
    type: str = Field(default="", description="Film type: bw, color, slide...")
    default_iso: int = Field(..., gt=0, alias="defaultISO", description="Box speed")


class Developer(BaseModel):
    """A developer chemical."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    manufacturer: str = Field(default="")
    type: str = Field(default="")
    default_dilution: str = Field(..., min_length=1, alias="defaultDilution")


class DevelopmentTimeEntry(BaseModel):
    """Base development time for one (film, developer, dilution, iso) combination."""

    model_config = ConfigDict(frozen=True)

    film_id: str
    developer_id: str
    dilution: str
    iso: int = Field(..., gt=0)
    time: int = Field(..., ge=0, description="Base time in seconds")

    @property
    def key(self) -> tuple[str, str, str, int]:
        return (self.film_id, self.developer_id, self.dilution, self.iso)


class TemperatureMultiplier(BaseModel):
    """Development time multiplier for a whole-degree temperature."""

    model_config = ConfigDict(frozen=True)

    temperature: int
    multiplier: float = Field(..., gt=0.0)


class DevelopmentParameters(BaseModel):
    """Everything a caller collects before asking for a development time."""

    model_config = ConfigDict(frozen=True)

    film: Film
    developer: Developer
    dilution: str
    iso: int = Field(..., gt=0)
    temperature: float = Field(default=20.0, allow_inf_nan=False)


class ReferenceDataset:
    """Immutable, indexed collection of reference data.

    Indices are built once at construction. Duplicate development time keys
    or duplicate temperatures are rejected, so every lookup has at most one
    match. Every development time must reference a film and a developer in
    the dataset.
    """

    def __init__(
        self,
        films: Iterable[Film] = (),
        developers: Iterable[Developer] = (),
        development_times: Iterable[DevelopmentTimeEntry] = (),
        temperature_multipliers: Iterable[TemperatureMultiplier] = (),
    ):
        self._films = {film.id: film for film in films}
        self._developers = {developer.id: developer for developer in developers}

        times: dict[tuple[str, str, str, int], int] = {}
        for entry in development_times:
            if entry.film_id not in self._films or entry.developer_id not in self._developers:
                raise ReferenceDataError(
                    "Development time references an unknown film or developer",
                    source="development-times",
                    details={"key": entry.key},
                )
            if entry.key in times:
                raise ReferenceDataError(
                    "Duplicate development time entry",
                    source="development-times",
                    details={"key": entry.key},
                )
            times[entry.key] = entry.time
        self._times = times

        multipliers: dict[int, float] = {}
        for item in temperature_multipliers:
            if item.temperature in multipliers:
                raise ReferenceDataError(
                    "Duplicate temperature multiplier",
                    source="temperature-multipliers",
                    details={"temperature": item.temperature},
                )
            multipliers[item.temperature] = item.multiplier
        self._multipliers = multipliers

    @property
    def films(self) -> tuple[Film, ...]:
        return tuple(self._films.values())

    @property
    def developers(self) -> tuple[Developer, ...]:
        return tuple(self._developers.values())

    @property
    def development_times(self) -> tuple[DevelopmentTimeEntry, ...]:
        return tuple(
            DevelopmentTimeEntry(
                film_id=film_id, developer_id=developer_id, dilution=dilution, iso=iso, time=time
            )
            for (film_id, developer_id, dilution, iso), time in self._times.items()
        )

    @property
    def temperature_multipliers(self) -> tuple[TemperatureMultiplier, ...]:
        return tuple(
            TemperatureMultiplier(temperature=t, multiplier=m) for t, m in self._multipliers.items()
        )

    def get_film(self, film_id: str) -> Optional[Film]:
        return self._films.get(film_id)

    def get_developer(self, developer_id: str) -> Optional[Developer]:
        return self._developers.get(developer_id)

    def get_time(self, film_id: str, developer_id: str, dilution: str, iso: int) -> Optional[int]:
        return self._times.get((film_id, developer_id, dilution, iso))

    def get_multiplier(self, temperature: int) -> Optional[float]:
        return self._multipliers.get(temperature)

    def time_keys(self) -> Iterable[tuple[str, str, str, int]]:
        return self._times.keys()

    def __len__(self) -> int:
        return len(self._times)

    def __repr__(self) -> str:
        return (
            f"ReferenceDataset(films={len(self._films)}, developers={len(self._developers)}, "
            f"development_times={len(self._times)}, multipliers={len(self._multipliers)})"
        )
