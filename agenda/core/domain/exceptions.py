"""
Domain Exceptions for Domain-Driven Design

These exceptions represent business rule violations and domain-specific errors.
They should be caught and translated to appropriate HTTP responses in the API layer.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "APPOINTMENT_CONFLICT")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when domain validation fails.

    Use for invalid entity states, value object creation failures, etc.
    """

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class EntityNotFoundException(DomainException):
    """
    Raised when an entity is not found.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        message: str | None = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} with ID {entity_id} not found"
        super().__init__(
            msg,
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class InvalidBookingRequestException(DomainException):
    """
    Raised when a booking request breaks a booking rule.

    Always raised before anything is written, so the caller can fix the
    input and retry.
    """

    SELF_BOOKING = "self_booking"
    NOT_A_PROVIDER = "not_a_provider"
    PAST_DATE = "past_date"

    def __init__(self, reason: str, message: str, details: dict[str, Any] | None = None):
        self.reason = reason
        details = details or {}
        details["reason"] = reason
        super().__init__(message, "INVALID_BOOKING_REQUEST", details)


class AppointmentConflictException(DomainException):
    """Raised when there's a scheduling conflict."""

    def __init__(
        self,
        provider_id: int | None = None,
        time_slot: str | None = None,
        message: str | None = None,
    ):
        self.provider_id = provider_id
        self.time_slot = time_slot
        msg = message or "Appointment date is not available"
        details: dict[str, Any] = {}
        if provider_id:
            details["provider_id"] = provider_id
        if time_slot:
            details["time_slot"] = time_slot
        super().__init__(msg, "APPOINTMENT_CONFLICT", details)


class SideEffectFailure(DomainException):
    """
    Raised when a post-booking side effect fails.

    The appointment is already committed when this happens; callers log it
    instead of propagating it.
    """

    NOTIFICATION = "notification"
    CACHE_INVALIDATION = "cache_invalidation"

    def __init__(self, effect: str, message: str, original_error: Exception | None = None):
        self.effect = effect
        self.original_error = original_error
        details: dict[str, Any] = {"effect": effect}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(message, "SIDE_EFFECT_FAILURE", details)
