import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from basecamp.exceptions.custom import InvalidInputError, InvalidTransitionError
from basecamp.mappers.payment import build_payment_url, new_payment_id, new_payment_reference
from basecamp.schemas.booking import Booking, BookingCreate, BookingCreated, BookingStatus
from basecamp.storage.record_store import RecordStore

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.pending: frozenset({BookingStatus.confirmed, BookingStatus.cancelled}),
    BookingStatus.confirmed: frozenset({BookingStatus.cancelled, BookingStatus.checked_in}),
    BookingStatus.checked_in: frozenset({BookingStatus.checked_out}),
    BookingStatus.cancelled: frozenset(),
    BookingStatus.checked_out: frozenset(),
}

# Payment confirmation may repeat on an already confirmed booking; it
# re-stamps paymentId/paidAt.
_PAYABLE = frozenset({BookingStatus.pending, BookingStatus.confirmed})

HotelCheck = Callable[[int | str], Awaitable[None]]


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def parse_status(value: str | BookingStatus) -> BookingStatus:
    try:
        return BookingStatus(value)
    except ValueError as exc:
        allowed = ", ".join(s.value for s in BookingStatus)
        raise InvalidInputError(f"Unknown booking status '{value}' (expected one of: {allowed})") from exc


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookingLifecycle:
    def __init__(
        self,
        store: RecordStore[Booking],
        hotel_check: HotelCheck | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._hotel_check = hotel_check
        self._clock = clock

    async def list_all(self) -> list[Booking]:
        return await self._store.list_all()

    async def get(self, booking_id: str) -> Booking:
        return await self._store.get(booking_id)

    async def create(self, request: BookingCreate) -> BookingCreated:
        if self._hotel_check is not None:
            await self._hotel_check(request.hotelId)

        booking = await self._store.insert({
            **request.model_dump(),
            "status": BookingStatus.pending,
            "paymentId": new_payment_reference(),
            "createdAt": self._clock(),
        })
        logger.info("Booking %s created for hotel %s", booking.id, booking.hotelId)
        return BookingCreated(
            booking=booking,
            paymentUrl=build_payment_url(booking.id, booking.totalAmount),
        )

    async def confirm_payment(self, booking_id: str) -> Booking:
        def _confirm(booking: Booking) -> None:
            if booking.status not in _PAYABLE:
                raise InvalidTransitionError(booking.id, booking.status, BookingStatus.confirmed)
            if booking.status == BookingStatus.confirmed:
                logger.warning(
                    "Booking %s already confirmed (paymentId=%s); re-stamping payment",
                    booking.id, booking.paymentId,
                )
            booking.status = BookingStatus.confirmed
            booking.paymentId = new_payment_id()
            booking.paidAt = self._clock()

        booking = await self._store.update(booking_id, _confirm)
        logger.info("Payment confirmed for booking %s (%s)", booking.id, booking.paymentId)
        return booking

    async def set_status(self, booking_id: str, new_status: str | BookingStatus) -> Booking:
        target = parse_status(new_status)

        def _apply(booking: Booking) -> None:
            if not can_transition(booking.status, target):
                logger.warning(
                    "Rejected status change for booking %s: %s -> %s",
                    booking.id, booking.status, target,
                )
                raise InvalidTransitionError(booking.id, booking.status, target)
            booking.status = target
            booking.updatedAt = self._clock()

        booking = await self._store.update(booking_id, _apply)
        logger.info("Booking %s status set to %s", booking.id, booking.status)
        return booking
