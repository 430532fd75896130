"""
Unit tests for BookAppointmentUseCase.

Tests:
- Booking rules (self-booking, provider role, past dates, conflicts)
- Hour-slot normalization
- Concurrent bookings of the same slot
- Best-effort side effects (notification and cache invalidation)
"""

import asyncio
import logging
from datetime import UTC, datetime, timedelta, timezone
from itertools import count
from unittest.mock import AsyncMock, patch

import pytest

from agenda.core.domain import (
    AppointmentConflictException,
    InvalidBookingRequestException,
    SideEffectFailure,
)
from agenda.domains.scheduling.application.use_cases import (
    BookAppointmentRequest,
    BookAppointmentUseCase,
)
from agenda.domains.scheduling.domain.entities import Appointment
from agenda.domains.scheduling.infrastructure.formatting import LocalizedSlotFormatter

USE_CASE_MODULE = "agenda.domains.scheduling.application.use_cases.book_appointment"


# ============================================================================
# FIXTURES
# ============================================================================


class InMemoryAppointmentRepository:
    """
    Appointment store whose insert enforces one active appointment per
    provider and slot, like the database unique index.

    ``find_active_by_provider_and_date`` waits until ``checkers`` callers have
    looked, so concurrent bookings all pass the pre-check.
    """

    def __init__(self, checkers: int = 1):
        self.rows: list[Appointment] = []
        self._ids = count(1)
        self._checkers = checkers
        self._checked = 0
        self._all_checked = asyncio.Event()

    async def find_active_by_provider_and_date(self, provider_id, slot):
        found = self._find(provider_id, slot)
        self._checked += 1
        if self._checked >= self._checkers:
            self._all_checked.set()
        await self._all_checked.wait()
        return found

    async def insert(self, user_id, provider_id, date):
        appointment = Appointment(id=next(self._ids), user_id=user_id, provider_id=provider_id, date=date)
        if self._find(provider_id, appointment.slot.start) is not None:
            raise AppointmentConflictException(provider_id=provider_id, time_slot=str(appointment.slot))
        self.rows.append(appointment)
        return appointment

    def _find(self, provider_id, slot):
        for row in self.rows:
            if row.provider_id == provider_id and row.slot.start == slot and row.is_active:
                return row
        return None


@pytest.fixture
def mock_user_repository(client_user, provider_user):
    repository = AsyncMock()
    repository.find_provider.return_value = provider_user
    repository.find_by_id.return_value = client_user
    return repository


@pytest.fixture
def mock_appointment_repository():
    repository = AsyncMock()
    repository.find_active_by_provider_and_date.return_value = None

    async def insert(user_id, provider_id, date):
        return Appointment(id=10, user_id=user_id, provider_id=provider_id, date=date)

    repository.insert.side_effect = insert
    return repository


@pytest.fixture
def mock_notification_sink():
    return AsyncMock()


@pytest.fixture
def mock_cache_store():
    store = AsyncMock()
    store.invalidate_prefix.return_value = 2
    return store


@pytest.fixture
def use_case(
    mock_user_repository,
    mock_appointment_repository,
    mock_notification_sink,
    mock_cache_store,
    fixed_now,
):
    return BookAppointmentUseCase(
        user_repository=mock_user_repository,
        appointment_repository=mock_appointment_repository,
        notification_sink=mock_notification_sink,
        cache_store=mock_cache_store,
        date_formatter=LocalizedSlotFormatter("pt"),
        clock=lambda: fixed_now,
    )


def booking(date: datetime, user_id: int = 1, provider_id: int = 2) -> BookAppointmentRequest:
    return BookAppointmentRequest(user_id=user_id, provider_id=provider_id, date=date)


# ============================================================================
# Successful bookings
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_success(use_case, mock_appointment_repository):
    """Test booking a free future slot."""
    # Act
    appointment = await use_case.execute(booking(datetime(2024, 6, 10, 10, 15, tzinfo=UTC)))

    # Assert
    assert appointment.id == 10
    assert appointment.user_id == 1
    assert appointment.provider_id == 2
    assert appointment.is_active
    mock_appointment_repository.find_active_by_provider_and_date.assert_called_once_with(
        provider_id=2,
        slot=datetime(2024, 6, 10, 10, 0, tzinfo=UTC),
    )


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_stores_original_date(use_case, mock_appointment_repository):
    """The stored date is the requested one, not the truncated slot."""
    requested = datetime(2024, 6, 10, 10, 45, 30, tzinfo=UTC)

    appointment = await use_case.execute(booking(requested))

    assert appointment.date == requested
    mock_appointment_repository.insert.assert_called_once_with(user_id=1, provider_id=2, date=requested)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_notifies_provider_once(use_case, mock_notification_sink):
    """Test provider notification content and recipient."""
    await use_case.execute(booking(datetime(2024, 6, 10, 10, 15, tzinfo=UTC)))

    mock_notification_sink.create.assert_called_once_with(
        content="Novo agendamento de Maria Silva para dia 10 de junho, às 10:00h",
        recipient_user_id=2,
    )


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_invalidates_requester_cache_once(use_case, mock_cache_store):
    """Test the requester's appointment cache prefix is invalidated."""
    await use_case.execute(booking(datetime(2024, 6, 10, 10, 15, tzinfo=UTC)))

    mock_cache_store.invalidate_prefix.assert_called_once_with("user:1:appointments")


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_in_current_hour_later_minute(use_case, fixed_now):
    """A date later in an hour that already started is in the past (slot start < now)."""
    with pytest.raises(InvalidBookingRequestException) as exc_info:
        await use_case.execute(booking(fixed_now.replace(minute=50)))

    assert exc_info.value.reason == InvalidBookingRequestException.PAST_DATE


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_book_appointment_uses_custom_template(
    mock_user_repository,
    mock_appointment_repository,
    mock_notification_sink,
    mock_cache_store,
    fixed_now,
):
    """Test a localized template and formatter."""
    formatter = LocalizedSlotFormatter("es")
    use_case = BookAppointmentUseCase(
        user_repository=mock_user_repository,
        appointment_repository=mock_appointment_repository,
        notification_sink=mock_notification_sink,
        cache_store=mock_cache_store,
        date_formatter=formatter,
        notification_template=formatter.notification_template,
        clock=lambda: fixed_now,
    )

    await use_case.execute(booking(datetime(2024, 6, 10, 14, 5, tzinfo=UTC)))

    mock_notification_sink.create.assert_called_once_with(
        content="Nuevo turno de Maria Silva para el día 10 de junio, a las 14:00h",
        recipient_user_id=2,
    )


# ============================================================================
# Rejected bookings
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_self_booking_rejected_without_calls(
    use_case,
    mock_user_repository,
    mock_appointment_repository,
    mock_notification_sink,
    mock_cache_store,
):
    """Self-booking fails before any collaborator is called."""
    with pytest.raises(InvalidBookingRequestException) as exc_info:
        await use_case.execute(booking(datetime(2024, 6, 10, 10, 0, tzinfo=UTC), user_id=2, provider_id=2))

    assert exc_info.value.reason == InvalidBookingRequestException.SELF_BOOKING
    assert exc_info.value.message == "You cannot create an appointment with yourself as a provider"
    assert mock_user_repository.mock_calls == []
    assert mock_appointment_repository.mock_calls == []
    assert mock_notification_sink.mock_calls == []
    assert mock_cache_store.mock_calls == []


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_non_provider_rejected(use_case, mock_user_repository, mock_appointment_repository):
    """Booking a user who is not a provider fails."""
    mock_user_repository.find_provider.return_value = None

    with pytest.raises(InvalidBookingRequestException) as exc_info:
        await use_case.execute(booking(datetime(2024, 6, 10, 10, 0, tzinfo=UTC), provider_id=3))

    assert exc_info.value.reason == InvalidBookingRequestException.NOT_A_PROVIDER
    assert exc_info.value.message == "You can only create appointments with providers"
    mock_user_repository.find_provider.assert_called_once_with(3)
    mock_appointment_repository.insert.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_past_date_rejected(use_case, mock_appointment_repository, mock_notification_sink):
    """Slots before now are rejected and nothing is written."""
    with pytest.raises(InvalidBookingRequestException) as exc_info:
        await use_case.execute(booking(datetime(2024, 6, 9, 15, 0, tzinfo=UTC)))

    assert exc_info.value.reason == InvalidBookingRequestException.PAST_DATE
    assert exc_info.value.message == "Past dates are not permitted"
    mock_appointment_repository.find_active_by_provider_and_date.assert_not_called()
    mock_appointment_repository.insert.assert_not_called()
    mock_notification_sink.create.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_taken_slot_rejected(use_case, mock_appointment_repository, mock_cache_store):
    """A provider's occupied slot cannot be booked again."""
    mock_appointment_repository.find_active_by_provider_and_date.return_value = Appointment(
        id=5, user_id=9, provider_id=2, date=datetime(2024, 6, 10, 10, 15, tzinfo=UTC)
    )

    with pytest.raises(AppointmentConflictException) as exc_info:
        await use_case.execute(booking(datetime(2024, 6, 10, 10, 45, tzinfo=UTC)))

    assert exc_info.value.message == "Appointment date is not available"
    assert exc_info.value.code == "APPOINTMENT_CONFLICT"
    mock_appointment_repository.insert.assert_not_called()
    mock_cache_store.invalidate_prefix.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_same_hour_different_minutes_conflict(
    mock_user_repository,
    mock_notification_sink,
    mock_cache_store,
    fixed_now,
):
    """10:15 and 10:45 fall in the same slot; the second booking conflicts."""
    repository = InMemoryAppointmentRepository()
    use_case = BookAppointmentUseCase(
        user_repository=mock_user_repository,
        appointment_repository=repository,
        notification_sink=mock_notification_sink,
        cache_store=mock_cache_store,
        date_formatter=LocalizedSlotFormatter("pt"),
        clock=lambda: fixed_now,
    )

    first = await use_case.execute(booking(datetime(2024, 6, 10, 10, 15, tzinfo=UTC)))
    with pytest.raises(AppointmentConflictException):
        await use_case.execute(booking(datetime(2024, 6, 10, 10, 45, tzinfo=UTC), user_id=3))

    assert repository.rows == [first]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_canceled_appointment_frees_slot(
    mock_user_repository,
    mock_notification_sink,
    mock_cache_store,
    fixed_now,
):
    """A canceled appointment does not block its slot."""
    repository = InMemoryAppointmentRepository()
    repository.rows.append(
        Appointment(
            id=99,
            user_id=3,
            provider_id=2,
            date=datetime(2024, 6, 10, 10, 0, tzinfo=UTC),
            canceled_at=datetime(2024, 6, 9, 12, 0, tzinfo=UTC),
        )
    )
    use_case = BookAppointmentUseCase(
        user_repository=mock_user_repository,
        appointment_repository=repository,
        notification_sink=mock_notification_sink,
        cache_store=mock_cache_store,
        date_formatter=LocalizedSlotFormatter("pt"),
        clock=lambda: fixed_now,
    )

    appointment = await use_case.execute(booking(datetime(2024, 6, 10, 10, 30, tzinfo=UTC)))

    assert appointment.is_active
    assert len(repository.rows) == 2


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_same_instant_at_another_offset_conflicts(
    mock_user_repository,
    mock_notification_sink,
    mock_cache_store,
    fixed_now,
):
    """15:50+05:30 is 10:20Z, so it lands in the slot already taken at 10:15Z."""
    repository = InMemoryAppointmentRepository()
    use_case = BookAppointmentUseCase(
        user_repository=mock_user_repository,
        appointment_repository=repository,
        notification_sink=mock_notification_sink,
        cache_store=mock_cache_store,
        date_formatter=LocalizedSlotFormatter("pt"),
        clock=lambda: fixed_now,
    )
    ist = timezone(timedelta(hours=5, minutes=30))

    first = await use_case.execute(booking(datetime(2030, 6, 10, 10, 15, tzinfo=UTC)))
    with pytest.raises(AppointmentConflictException) as exc_info:
        await use_case.execute(booking(datetime(2030, 6, 10, 15, 50, tzinfo=ist), user_id=3))

    assert exc_info.value.details["time_slot"] == "2030-06-10T10:00:00+00:00"
    assert repository.rows == [first]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_naive_dates_are_read_in_configured_zone(
    mock_user_repository,
    mock_appointment_repository,
    mock_notification_sink,
    mock_cache_store,
    fixed_now,
):
    """With a -03:00 zone, a naive 10:15 is booked as 10:00-03:00 (13:00Z)."""
    brt = timezone(timedelta(hours=-3))
    use_case = BookAppointmentUseCase(
        user_repository=mock_user_repository,
        appointment_repository=mock_appointment_repository,
        notification_sink=mock_notification_sink,
        cache_store=mock_cache_store,
        date_formatter=LocalizedSlotFormatter("pt"),
        clock=lambda: fixed_now,
        zone=brt,
    )

    appointment = await use_case.execute(booking(datetime(2024, 6, 10, 10, 15)))

    assert appointment.date == datetime(2024, 6, 10, 13, 15, tzinfo=UTC)
    assert appointment.date.utcoffset() == timedelta(hours=-3)
    slot = mock_appointment_repository.find_active_by_provider_and_date.call_args.kwargs["slot"]
    assert slot == datetime(2024, 6, 10, 13, 0, tzinfo=UTC)
    mock_notification_sink.create.assert_called_once_with(
        content="Novo agendamento de Maria Silva para dia 10 de junho, às 10:00h",
        recipient_user_id=2,
    )


# ============================================================================
# Concurrency
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_concurrent_bookings_same_slot_only_one_succeeds(
    mock_user_repository,
    mock_notification_sink,
    mock_cache_store,
    fixed_now,
):
    """Both requests pass the pre-check; the store accepts only one."""
    repository = InMemoryAppointmentRepository(checkers=2)
    use_case = BookAppointmentUseCase(
        user_repository=mock_user_repository,
        appointment_repository=repository,
        notification_sink=mock_notification_sink,
        cache_store=mock_cache_store,
        date_formatter=LocalizedSlotFormatter("pt"),
        clock=lambda: fixed_now,
    )

    results = await asyncio.gather(
        use_case.execute(booking(datetime(2024, 6, 10, 10, 10, tzinfo=UTC), user_id=1)),
        use_case.execute(booking(datetime(2024, 6, 10, 10, 50, tzinfo=UTC), user_id=3)),
        return_exceptions=True,
    )

    booked = [r for r in results if isinstance(r, Appointment)]
    conflicts = [r for r in results if isinstance(r, AppointmentConflictException)]
    assert len(booked) == 1
    assert len(conflicts) == 1
    assert repository.rows == booked
    mock_notification_sink.create.assert_called_once()
    mock_cache_store.invalidate_prefix.assert_called_once_with(f"user:{booked[0].user_id}:appointments")


# ============================================================================
# Side effects
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_notification_failure_does_not_fail_booking(
    use_case,
    mock_notification_sink,
    mock_cache_store,
    caplog,
):
    """A failing notification is logged and reported; the booking stands."""
    mock_notification_sink.create.side_effect = RuntimeError("notifications table locked")

    with patch(f"{USE_CASE_MODULE}.sentry_sdk.capture_exception") as capture, caplog.at_level(logging.ERROR):
        appointment = await use_case.execute(booking(datetime(2024, 6, 10, 10, 15, tzinfo=UTC)))

    assert appointment.id == 10
    mock_cache_store.invalidate_prefix.assert_called_once_with("user:1:appointments")
    capture.assert_called_once()
    failure = capture.call_args.args[0]
    assert isinstance(failure, SideEffectFailure)
    assert failure.effect == SideEffectFailure.NOTIFICATION
    assert isinstance(failure.original_error, RuntimeError)
    assert any("notification" in record.getMessage() for record in caplog.records)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_cache_failure_does_not_fail_booking(use_case, mock_notification_sink, mock_cache_store):
    """A failing cache invalidation is reported; the notification still goes out."""
    mock_cache_store.invalidate_prefix.side_effect = ConnectionError("redis down")

    with patch(f"{USE_CASE_MODULE}.sentry_sdk.capture_exception") as capture:
        appointment = await use_case.execute(booking(datetime(2024, 6, 10, 10, 15, tzinfo=UTC)))

    assert appointment.id == 10
    mock_notification_sink.create.assert_called_once()
    failure = capture.call_args.args[0]
    assert failure.effect == SideEffectFailure.CACHE_INVALIDATION


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_both_side_effects_fail(use_case, mock_notification_sink, mock_cache_store):
    """Each failing side effect is reported once."""
    mock_notification_sink.create.side_effect = RuntimeError("boom")
    mock_cache_store.invalidate_prefix.side_effect = TimeoutError("slow")

    with patch(f"{USE_CASE_MODULE}.sentry_sdk.capture_exception") as capture:
        appointment = await use_case.execute(booking(datetime(2024, 6, 10, 10, 15, tzinfo=UTC)))

    assert appointment is not None
    effects = sorted(call.args[0].effect for call in capture.call_args_list)
    assert effects == [SideEffectFailure.CACHE_INVALIDATION, SideEffectFailure.NOTIFICATION]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_missing_requester_is_a_notification_failure(use_case, mock_user_repository, mock_notification_sink):
    """If the requester vanished, no notification is sent and the booking stands."""
    mock_user_repository.find_by_id.return_value = None

    with patch(f"{USE_CASE_MODULE}.sentry_sdk.capture_exception") as capture:
        appointment = await use_case.execute(booking(datetime(2024, 6, 10, 10, 15, tzinfo=UTC)))

    assert appointment.id == 10
    mock_notification_sink.create.assert_not_called()
    assert capture.call_args.args[0].effect == SideEffectFailure.NOTIFICATION


# ============================================================================
# Default clock
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_default_clock_accepts_future_and_rejects_past(
    mock_user_repository,
    mock_appointment_repository,
    mock_notification_sink,
    mock_cache_store,
):
    """Without a clock, aware and naive dates compare against the wall clock."""
    use_case = BookAppointmentUseCase(
        user_repository=mock_user_repository,
        appointment_repository=mock_appointment_repository,
        notification_sink=mock_notification_sink,
        cache_store=mock_cache_store,
        date_formatter=LocalizedSlotFormatter("pt"),
    )

    appointment = await use_case.execute(booking(datetime(2999, 1, 1, 9, 0, tzinfo=UTC)))
    assert appointment.date.year == 2999

    with pytest.raises(InvalidBookingRequestException):
        await use_case.execute(booking(datetime(2000, 1, 1, 9, 0)))
