"""
modules/validation package: sanity checks on a normalised trip snapshot.
"""
from modules.validation.ingestion_validator import (
    ValidationResult,
    validate_trip_header,
    validate_day_numbers,
    validate_activity,
    validate_trip,
)

__all__ = [
    "ValidationResult",
    "validate_trip_header",
    "validate_day_numbers",
    "validate_activity",
    "validate_trip",
]
