"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from agenda.core.domain.entities import Entity
from agenda.core.domain.value_objects import ValueObject
from agenda.core.domain.exceptions import (
    AppointmentConflictException,
    DomainException,
    EntityNotFoundException,
    InvalidBookingRequestException,
    SideEffectFailure,
    ValidationException,
)

__all__ = [
    # Entities
    "Entity",
    # Value Objects
    "ValueObject",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "InvalidBookingRequestException",
    "AppointmentConflictException",
    "SideEffectFailure",
]
