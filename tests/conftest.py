"""
Shared fixtures for FilmLab tests.
"""

import pytest

from filmlab.development import DevelopmentTimeCalculator
from filmlab.journal import CalculationJournal
from filmlab.reference import ReferenceResolver, dataset_from_mapping


@pytest.fixture
def reference_tables():
    """Small reference dataset in the on-disk JSON shape."""
    return {
        "films": {
            "hp5": {"name": "HP5 Plus", "manufacturer": "Ilford", "type": "bw", "defaultISO": 400},
            "fp4": {"name": "FP4 Plus", "manufacturer": "Ilford", "type": "bw", "defaultISO": 125},
            "portra": {"name": "Portra 400", "manufacturer": "Kodak", "type": "color", "defaultISO": 400},
        },
        "developers": {
            "d76": {"name": "D-76", "manufacturer": "Kodak", "type": "powder", "defaultDilution": "stock"},
            "rodinal": {"name": "Rodinal", "manufacturer": "Adox", "type": "liquid", "defaultDilution": "1+25"},
        },
        "development_times": {
            "hp5": {
                "d76": {
                    "stock": {"400": 480, "800": 600, "200": 360},
                    "1+1": {"400": 780},
                },
                "rodinal": {
                    "1+50": {"400": 660},
                    "1+25": {"400": 360, "1600": 900},
                },
            },
            "fp4": {
                "d76": {"stock": {"125": 510}},
            },
        },
        "temperature_multipliers": {
            "18": 1.2,
            "22": 0.85,
            "24": 0.7,
            "-2": 3.0,
        },
    }


@pytest.fixture
def dataset(reference_tables):
    """Validated dataset built from the fixture tables."""
    return dataset_from_mapping(
        films=reference_tables["films"],
        developers=reference_tables["developers"],
        development_times=reference_tables["development_times"],
        temperature_multipliers=reference_tables["temperature_multipliers"],
    )


@pytest.fixture
def resolver(dataset):
    return ReferenceResolver(dataset)


@pytest.fixture
def development_calculator(resolver):
    return DevelopmentTimeCalculator(resolver)


@pytest.fixture
def journal(tmp_path):
    """Journal backed by a temporary SQLite file."""
    journal = CalculationJournal(tmp_path / "journal.db")
    yield journal
    journal.close()
