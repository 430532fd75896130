"""
Book Appointment Use Case

Use case for booking an hour slot with a provider.
Follows Clean Architecture and SOLID principles.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo

import sentry_sdk

from agenda.core.domain import (
    AppointmentConflictException,
    EntityNotFoundException,
    InvalidBookingRequestException,
    SideEffectFailure,
)
from agenda.domains.scheduling.application.ports import (
    IAppointmentRepository,
    ICacheStore,
    IDateFormatter,
    INotificationSink,
    IUserRepository,
)
from agenda.domains.scheduling.domain.entities import Appointment
from agenda.domains.scheduling.domain.value_objects import Slot, appointments_cache_prefix, to_zone

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_TEMPLATE = "Novo agendamento de {name} para dia {date}"


@dataclass
class BookAppointmentRequest:
    """Request for booking an appointment."""

    user_id: int
    provider_id: int
    date: datetime


class BookAppointmentUseCase:
    """
    Use case for booking appointments.

    Validation runs first and never writes. Once the appointment is stored,
    the provider notification and the requester's cache invalidation run
    concurrently; their failures are logged and reported but never undo or
    fail the booking.

    Single Responsibility: Only handles appointment booking logic
    Dependency Inversion: Depends on interfaces, not implementations
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        appointment_repository: IAppointmentRepository,
        notification_sink: INotificationSink,
        cache_store: ICacheStore,
        date_formatter: IDateFormatter,
        notification_template: str = DEFAULT_NOTIFICATION_TEMPLATE,
        clock: Callable[[], datetime] | None = None,
        zone: tzinfo = UTC,
    ):
        """
        Initialize use case with dependencies.

        Args:
            user_repository: Repository for user lookups
            appointment_repository: Repository for appointment data access
            notification_sink: Destination of the provider notification
            cache_store: Cache holding per-user appointment lists
            date_formatter: Localized date rendering for the notification
            notification_template: Message with ``{name}`` and ``{date}`` fields
            clock: Returns an aware "now"; defaults to the wall clock
            zone: Zone slots are cut in; naive request dates are read in it
        """
        self.user_repo = user_repository
        self.appointment_repo = appointment_repository
        self.notification_sink = notification_sink
        self.cache_store = cache_store
        self.date_formatter = date_formatter
        self.notification_template = notification_template
        self._clock = clock
        self.zone = zone

    async def execute(self, request: BookAppointmentRequest) -> Appointment:
        """
        Execute appointment booking use case.

        Args:
            request: Booking request parameters

        Returns:
            The created appointment, with the date exactly as requested

        Raises:
            InvalidBookingRequestException: Self-booking, non-provider target or past date
            AppointmentConflictException: The provider already has an active
                appointment in that hour
        """
        # 1. Nobody books themselves
        if request.user_id == request.provider_id:
            logger.warning(f"Rejected self-booking for user {request.user_id}")
            raise InvalidBookingRequestException(
                InvalidBookingRequestException.SELF_BOOKING,
                "You cannot create an appointment with yourself as a provider",
            )

        # 2. Target must be a provider
        provider = await self.user_repo.find_provider(request.provider_id)
        if provider is None or not provider.can_receive_bookings():
            logger.warning(f"Rejected booking: user {request.provider_id} is not a provider")
            raise InvalidBookingRequestException(
                InvalidBookingRequestException.NOT_A_PROVIDER,
                "You can only create appointments with providers",
                {"provider_id": request.provider_id},
            )

        # 3. Slot is the hour the requested date falls in, cut in the canonical zone
        requested = to_zone(request.date, self.zone)
        slot = Slot.from_datetime(requested, self.zone)

        # 4. No past slots
        if slot.is_before(self._now()):
            logger.warning(f"Rejected booking in the past: slot {slot}")
            raise InvalidBookingRequestException(
                InvalidBookingRequestException.PAST_DATE,
                "Past dates are not permitted",
                {"slot": str(slot)},
            )

        # 5. Slot must be free
        existing = await self.appointment_repo.find_active_by_provider_and_date(
            provider_id=request.provider_id,
            slot=slot.start,
        )
        if existing is not None:
            logger.warning(f"Slot {slot} already taken for provider {request.provider_id}")
            raise AppointmentConflictException(provider_id=request.provider_id, time_slot=str(slot))

        # 6. Persist; the repository's unique index settles concurrent inserts
        try:
            appointment = await self.appointment_repo.insert(
                user_id=request.user_id,
                provider_id=request.provider_id,
                date=requested,
            )
        except AppointmentConflictException:
            logger.warning(f"Slot {slot} taken concurrently for provider {request.provider_id}")
            raise

        logger.info(
            f"Appointment booked: {appointment.id} for user {request.user_id} "
            f"with provider {request.provider_id} at {request.date.isoformat()}",
            extra={"appointment_id": appointment.id, "provider_id": request.provider_id, "slot": str(slot)},
        )

        # 7 & 8. Best-effort side effects
        await self._run_side_effects(appointment, slot)

        return appointment

    def _now(self) -> datetime:
        if self._clock is not None:
            return to_zone(self._clock(), self.zone)
        return datetime.now(self.zone)

    async def _run_side_effects(self, appointment: Appointment, slot: Slot) -> None:
        results = await asyncio.gather(
            self._notify_provider(appointment, slot),
            self._invalidate_user_cache(appointment.user_id),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, SideEffectFailure):
                self._report_side_effect_failure(appointment, result)
            elif isinstance(result, BaseException):
                raise result

    async def _notify_provider(self, appointment: Appointment, slot: Slot) -> None:
        try:
            user = await self.user_repo.find_by_id(appointment.user_id)
            if user is None:
                raise EntityNotFoundException(entity_type="User", entity_id=appointment.user_id)

            content = self.notification_template.format(
                name=user.name,
                date=self.date_formatter.format_slot(slot.start),
            )
            await self.notification_sink.create(content=content, recipient_user_id=appointment.provider_id)
        except Exception as e:
            raise SideEffectFailure(
                SideEffectFailure.NOTIFICATION,
                f"Could not notify provider {appointment.provider_id} of appointment {appointment.id}",
                original_error=e,
            ) from e

    async def _invalidate_user_cache(self, user_id: int) -> None:
        prefix = appointments_cache_prefix(user_id)
        try:
            deleted = await self.cache_store.invalidate_prefix(prefix)
            logger.debug(f"Invalidated {deleted} cache keys under {prefix}")
        except Exception as e:
            raise SideEffectFailure(
                SideEffectFailure.CACHE_INVALIDATION,
                f"Could not invalidate cache prefix {prefix}",
                original_error=e,
            ) from e

    def _report_side_effect_failure(self, appointment: Appointment, failure: SideEffectFailure) -> None:
        logger.error(
            f"Side effect '{failure.effect}' failed after booking appointment {appointment.id}: {failure.message}",
            exc_info=(type(failure), failure, failure.__traceback__),
            extra={"appointment_id": appointment.id, "effect": failure.effect},
        )
        sentry_sdk.capture_exception(failure)
