"""
Personal journal of saved calculations.
"""

from filmlab.journal.store import (
    CalculationJournal,
    CalculationRecord,
    record_from_development,
    record_from_push_pull,
)

__all__ = [
    "CalculationJournal",
    "CalculationRecord",
    "record_from_development",
    "record_from_push_pull",
]
