"""
Scheduling API Routes

FastAPI router for appointment endpoints. Domain exceptions raised by the use
case are turned into responses by the application's exception handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from agenda.domains.scheduling.api.dependencies import get_book_appointment_use_case
from agenda.domains.scheduling.api.schemas import AppointmentRequest, AppointmentResponse
from agenda.domains.scheduling.application.use_cases import (
    BookAppointmentRequest,
    BookAppointmentUseCase,
)

router = APIRouter(prefix="/appointments", tags=["Appointments"])

BookAppointmentUseCaseDep = Annotated[BookAppointmentUseCase, Depends(get_book_appointment_use_case)]


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    request: AppointmentRequest,
    use_case: BookAppointmentUseCaseDep,
):
    """Book the hour slot containing ``date`` with a provider."""
    appointment = await use_case.execute(
        BookAppointmentRequest(
            user_id=request.user_id,
            provider_id=request.provider_id,
            date=request.date,
        )
    )
    return AppointmentResponse.from_entity(appointment)
