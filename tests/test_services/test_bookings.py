"""Tests for BookingLifecycle."""

import asyncio
from datetime import date, datetime, timezone

import pytest

from basecamp.exceptions.custom import (
    ConflictError,
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
)
from basecamp.schemas.booking import Booking, BookingCreate, BookingStatus
from basecamp.services.bookings import ALLOWED_TRANSITIONS, BookingLifecycle, can_transition
from basecamp.storage.record_store import RecordStore

NOW = datetime(2025, 4, 10, 9, 30, tzinfo=timezone.utc)


def _request(**overrides):
    data = {
        "hotelId": 1712345678901,
        "hotelName": "Mountain Lodge",
        "guestName": "Pema Sherpa",
        "email": "pema@example.com",
        "phone": "+977 1 555 0100",
        "numberOfGuests": 2,
        "checkIn": date(2025, 5, 1),
        "checkOut": date(2025, 5, 4),
        "totalAmount": 150.0,
    }
    data.update(overrides)
    return BookingCreate(**data)


@pytest.fixture
def store(tmp_path):
    return RecordStore(tmp_path / "bookings.json", Booking, kind="Booking")


@pytest.fixture
def lifecycle(store):
    return BookingLifecycle(store, clock=lambda: NOW)


# --- create ---


async def test_create_booking_is_pending(lifecycle):
    created = await lifecycle.create(_request())

    booking = created.booking
    assert booking.status == BookingStatus.pending
    assert booking.createdAt == NOW
    assert booking.paidAt is None
    assert booking.updatedAt is None
    assert booking.paymentId
    assert created.paymentUrl == f"/process-payment?bookingId={booking.id}&amount=150"


async def test_create_persists(lifecycle, store):
    created = await lifecycle.create(_request())
    stored = await store.get(created.booking.id)
    assert stored == created.booking


async def test_create_keeps_request_fields(lifecycle):
    request = _request()
    created = await lifecycle.create(request)
    for field, value in request.model_dump().items():
        assert getattr(created.booking, field) == value


async def test_concurrent_creates_unique_ids(lifecycle):
    results = await asyncio.gather(*(lifecycle.create(_request()) for _ in range(20)))
    assert len({r.booking.id for r in results}) == 20
    assert len(await lifecycle.list_all()) == 20


async def test_create_runs_hotel_check(store):
    async def _missing(hotel_id):
        raise NotFoundError("Hotel", hotel_id)

    lifecycle = BookingLifecycle(store, hotel_check=_missing)
    with pytest.raises(NotFoundError):
        await lifecycle.create(_request())
    assert await store.list_all() == []


def test_checkout_must_follow_checkin():
    with pytest.raises(ValueError):
        _request(checkIn=date(2025, 5, 4), checkOut=date(2025, 5, 4))


# --- confirm_payment ---


async def test_confirm_payment(lifecycle):
    created = await lifecycle.create(_request())
    placeholder = created.booking.paymentId

    booking = await lifecycle.confirm_payment(created.booking.id)

    assert booking.status == BookingStatus.confirmed
    assert booking.paymentId != placeholder
    assert booking.paymentId.startswith("PAY-")
    assert booking.paidAt == NOW
    assert (await lifecycle.get(booking.id)).status == BookingStatus.confirmed


async def test_confirm_payment_missing(lifecycle):
    with pytest.raises(NotFoundError):
        await lifecycle.confirm_payment("404")


async def test_confirm_payment_twice_restamps(lifecycle):
    created = await lifecycle.create(_request())
    first = await lifecycle.confirm_payment(created.booking.id)
    second = await lifecycle.confirm_payment(created.booking.id)

    assert second.status == BookingStatus.confirmed
    assert second.paymentId != first.paymentId


async def test_confirm_payment_after_cancel_rejected(lifecycle):
    created = await lifecycle.create(_request())
    await lifecycle.set_status(created.booking.id, "cancelled")

    with pytest.raises(InvalidTransitionError):
        await lifecycle.confirm_payment(created.booking.id)
    assert (await lifecycle.get(created.booking.id)).status == BookingStatus.cancelled


# --- set_status ---


async def test_full_lifecycle_to_checked_in(lifecycle):
    created = await lifecycle.create(_request())
    await lifecycle.confirm_payment(created.booking.id)

    booking = await lifecycle.set_status(created.booking.id, "checked-in")

    assert booking.updatedAt == NOW
    assert (await lifecycle.get(created.booking.id)).status == "checked-in"


async def test_set_status_unknown_value(lifecycle):
    created = await lifecycle.create(_request())
    with pytest.raises(InvalidInputError):
        await lifecycle.set_status(created.booking.id, "teleported")


async def test_set_status_outside_table(lifecycle):
    created = await lifecycle.create(_request())
    with pytest.raises(ConflictError):
        await lifecycle.set_status(created.booking.id, "checked-in")
    assert (await lifecycle.get(created.booking.id)).status == BookingStatus.pending


async def test_set_status_missing(lifecycle):
    with pytest.raises(NotFoundError):
        await lifecycle.set_status("404", "cancelled")


async def test_set_status_accepts_enum(lifecycle):
    created = await lifecycle.create(_request())
    booking = await lifecycle.set_status(created.booking.id, BookingStatus.cancelled)
    assert booking.status == BookingStatus.cancelled


# --- transition table ---


def test_terminal_states_have_no_exits():
    assert ALLOWED_TRANSITIONS[BookingStatus.cancelled] == frozenset()
    assert ALLOWED_TRANSITIONS[BookingStatus.checked_out] == frozenset()


def test_every_status_in_table():
    assert set(ALLOWED_TRANSITIONS) == set(BookingStatus)


@pytest.mark.parametrize(
    "current,target,allowed",
    [
        (BookingStatus.pending, BookingStatus.confirmed, True),
        (BookingStatus.pending, BookingStatus.cancelled, True),
        (BookingStatus.confirmed, BookingStatus.checked_in, True),
        (BookingStatus.checked_in, BookingStatus.checked_out, True),
        (BookingStatus.pending, BookingStatus.checked_out, False),
        (BookingStatus.checked_out, BookingStatus.pending, False),
        (BookingStatus.confirmed, BookingStatus.pending, False),
    ],
)
def test_can_transition(current, target, allowed):
    assert can_transition(current, target) is allowed
