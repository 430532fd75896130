"""
Scheduling API Schemas

Pydantic schemas for API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from agenda.domains.scheduling.domain.entities import Appointment


class AppointmentRequest(BaseModel):
    """Appointment request schema."""

    user_id: int = Field(..., gt=0, description="Client booking the appointment")
    provider_id: int = Field(..., gt=0, description="Provider being booked")
    date: datetime = Field(..., description="Requested moment; booked as the hour it falls in")


class AppointmentResponse(BaseModel):
    """Appointment response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    provider_id: int
    date: datetime
    canceled_at: datetime | None = None

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id or 0,
            user_id=appointment.user_id,
            provider_id=appointment.provider_id,
            date=appointment.date,
            canceled_at=appointment.canceled_at,
        )
