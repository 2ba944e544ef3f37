"""
Reference data: films, developers, development times and temperature multipliers.
"""

from filmlab.reference.loader import (
    BUNDLED_DATA_DIR,
    dataset_from_mapping,
    load_reference_dataset,
)
from filmlab.reference.models import (
    Developer,
    DevelopmentParameters,
    DevelopmentTimeEntry,
    Film,
    ReferenceDataset,
    TemperatureMultiplier,
)
from filmlab.reference.resolver import (
    IDENTITY_MULTIPLIER_DEFAULT,
    ReferenceResolver,
    normalize_temperature,
)

__all__ = [
    # Models
    "Developer",
    "DevelopmentParameters",
    "DevelopmentTimeEntry",
    "Film",
    "ReferenceDataset",
    "TemperatureMultiplier",
    # Import
    "BUNDLED_DATA_DIR",
    "dataset_from_mapping",
    "load_reference_dataset",
    # Lookups
    "IDENTITY_MULTIPLIER_DEFAULT",
    "ReferenceResolver",
    "normalize_temperature",
]
