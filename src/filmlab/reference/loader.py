"""
Reference data import.

Reads the bundled (or user supplied) JSON tables and turns them into a
validated ReferenceDataset:

    films.json                    {film_id: {name, manufacturer, type, defaultISO}}
    developers.json               {developer_id: {name, manufacturer, type, defaultDilution}}
    development-times.json        {film_id: {developer_id: {dilution: {iso: seconds}}}}
    temperature-multipliers.json  {temperature: multiplier}

Individual records that fail validation are skipped with a warning so one bad
row does not block the rest of the import. A file that is not valid JSON, or
whose top level is not an object, aborts the import.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from filmlab.core.exceptions import ReferenceDataError
from filmlab.core.logging import get_logger, log_operation
from filmlab.reference.models import (
    Developer,
    DevelopmentTimeEntry,
    Film,
    ReferenceDataset,
    TemperatureMultiplier,
)

logger = get_logger(__name__)

BUNDLED_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

FILMS_FILE = "films.json"
DEVELOPERS_FILE = "developers.json"
DEVELOPMENT_TIMES_FILE = "development-times.json"
TEMPERATURE_MULTIPLIERS_FILE = "temperature-multipliers.json"


def _read_json_object(path: Path) -> dict[str, Any]:
    """Read a JSON file whose top level must be an object.

    A missing file is treated as an empty table.
    """
    if not path.exists():
        logger.warning(f"Reference file not found, using empty table: {path}")
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ReferenceDataError(
            f"Invalid JSON in {path.name}: {e.msg}",
            source=str(path),
            details={"line": e.lineno, "column": e.colno},
        ) from e

    if not isinstance(data, dict):
        raise ReferenceDataError(
            f"Expected a JSON object at the top level of {path.name}",
            source=str(path),
            details={"found": type(data).__name__},
        )
    return data


def _parse_int_key(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_films(raw: Mapping[str, Any]) -> list[Film]:
    films = []
    for film_id, data in raw.items():
        if not isinstance(data, Mapping):
            logger.warning(f"Skipping film {film_id!r}: expected an object")
            continue
        try:
            films.append(Film.model_validate({**data, "id": film_id}))
        except ValidationError as e:
            logger.warning(f"Skipping film {film_id!r}: {e.error_count()} validation error(s)")
    return films


def parse_developers(raw: Mapping[str, Any]) -> list[Developer]:
    developers = []
    for developer_id, data in raw.items():
        if not isinstance(data, Mapping):
            logger.warning(f"Skipping developer {developer_id!r}: expected an object")
            continue
        try:
            developers.append(Developer.model_validate({**data, "id": developer_id}))
        except ValidationError as e:
            logger.warning(
                f"Skipping developer {developer_id!r}: {e.error_count()} validation error(s)"
            )
    return developers


def parse_development_times(
    raw: Mapping[str, Any],
    film_ids: set[str],
    developer_ids: set[str],
) -> list[DevelopmentTimeEntry]:
    """Flatten the nested development time table.

    Entries that reference an unknown film or developer, or whose ISO key is
    not an integer, are dropped.
    """
    entries = []
    skipped = 0

    for film_id, developers in raw.items():
        if film_id not in film_ids or not isinstance(developers, Mapping):
            logger.warning(f"Skipping development times for unknown film {film_id!r}")
            continue

        for developer_id, dilutions in developers.items():
            if developer_id not in developer_ids or not isinstance(dilutions, Mapping):
                logger.warning(
                    f"Skipping development times for {film_id!r} with unknown developer {developer_id!r}"
                )
                continue

            for dilution, iso_times in dilutions.items():
                if not isinstance(iso_times, Mapping):
                    skipped += 1
                    continue

                for iso_key, time in iso_times.items():
                    iso = _parse_int_key(iso_key)
                    if iso is None or isinstance(time, bool) or not isinstance(time, int):
                        skipped += 1
                        continue
                    try:
                        entries.append(
                            DevelopmentTimeEntry(
                                film_id=film_id,
                                developer_id=developer_id,
                                dilution=dilution,
                                iso=iso,
                                time=time,
                            )
                        )
                    except ValidationError:
                        skipped += 1

    if skipped:
        logger.warning(f"Skipped {skipped} malformed development time entries")
    return entries


def parse_temperature_multipliers(raw: Mapping[str, Any]) -> list[TemperatureMultiplier]:
    multipliers = []
    for temp_key, value in raw.items():
        temperature = _parse_int_key(temp_key)
        if temperature is None or isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning(f"Skipping temperature multiplier {temp_key!r}: {value!r}")
            continue
        try:
            multipliers.append(TemperatureMultiplier(temperature=temperature, multiplier=value))
        except ValidationError:
            logger.warning(f"Skipping non-positive temperature multiplier {temp_key!r}: {value!r}")
    return multipliers


def dataset_from_mapping(
    films: Mapping[str, Any],
    developers: Mapping[str, Any],
    development_times: Mapping[str, Any],
    temperature_multipliers: Mapping[str, Any],
) -> ReferenceDataset:
    """Build a dataset from already decoded JSON tables.

    Args:
        films: Film table keyed by film id.
        developers: Developer table keyed by developer id.
        development_times: Nested film -> developer -> dilution -> iso -> seconds.
        temperature_multipliers: Multipliers keyed by temperature string.

    Returns:
        Validated ReferenceDataset.
    """
    parsed_films = parse_films(films)
    parsed_developers = parse_developers(developers)
    entries = parse_development_times(
        development_times,
        film_ids={f.id for f in parsed_films},
        developer_ids={d.id for d in parsed_developers},
    )
    multipliers = parse_temperature_multipliers(temperature_multipliers)

    return ReferenceDataset(
        films=parsed_films,
        developers=parsed_developers,
        development_times=entries,
        temperature_multipliers=multipliers,
    )


def load_reference_dataset(data_dir: Optional[Path] = None) -> ReferenceDataset:
    """Import the reference tables from a directory.

    Args:
        data_dir: Directory containing the four JSON files.
            Defaults to the configured directory, then to the bundled data.

    Returns:
        Validated ReferenceDataset.

    Raises:
        ReferenceDataError: If a file is not valid JSON or has the wrong shape.
    """
    if data_dir is None:
        from filmlab.config import get_settings

        data_dir = get_settings().reference_data_dir or BUNDLED_DATA_DIR
    data_dir = Path(data_dir)

    with log_operation(logger, f"reference import from {data_dir}"):
        dataset = dataset_from_mapping(
            films=_read_json_object(data_dir / FILMS_FILE),
            developers=_read_json_object(data_dir / DEVELOPERS_FILE),
            development_times=_read_json_object(data_dir / DEVELOPMENT_TIMES_FILE),
            temperature_multipliers=_read_json_object(data_dir / TEMPERATURE_MULTIPLIERS_FILE),
        )

    logger.info(f"Loaded {dataset!r}")
    return dataset
