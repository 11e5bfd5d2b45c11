"""
Enums for domain models.
Enums provide type safety and clarity. Validation for categorical fields.
"""

import enum


class BookingStatus(str, enum.Enum):
    """Booking lifecycle states."""

    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
