"""
FilmLab - darkroom film development time calculator.

This package provides:

- Reference data import (films, developers, development times,
  temperature multipliers)
- Temperature adjusted development time lookups
- Push/pull development ladders
- A personal journal of saved calculations
- An optional HTTP API
"""

__version__ = "1.0.0"

# Configuration
from filmlab.config import Settings, configure, get_settings

# Exceptions
from filmlab.core.exceptions import FilmLabError, InvalidInputError, ReferenceDataError

# Reference data
from filmlab.reference import (
    IDENTITY_MULTIPLIER_DEFAULT,
    Developer,
    DevelopmentParameters,
    Film,
    ReferenceDataset,
    ReferenceResolver,
    dataset_from_mapping,
    load_reference_dataset,
)

# Calculators
from filmlab.development import DevelopmentResult, DevelopmentTimeCalculator
from filmlab.pushpull import PushPullCalculator, PushPullInput, PushPullStep

# Journal
from filmlab.journal import CalculationJournal, CalculationRecord

__all__ = [
    "__version__",
    # Configuration
    "Settings",
    "configure",
    "get_settings",
    # Exceptions
    "FilmLabError",
    "InvalidInputError",
    "ReferenceDataError",
    # Reference data
    "IDENTITY_MULTIPLIER_DEFAULT",
    "Developer",
    "DevelopmentParameters",
    "Film",
    "ReferenceDataset",
    "ReferenceResolver",
    "dataset_from_mapping",
    "load_reference_dataset",
    # Calculators
    "DevelopmentResult",
    "DevelopmentTimeCalculator",
    "PushPullCalculator",
    "PushPullInput",
    "PushPullStep",
    # Journal
    "CalculationJournal",
    "CalculationRecord",
]
