from fastapi import APIRouter

from basecamp.dependencies import BookingDep
from basecamp.schemas.booking import (
    Booking,
    BookingCreate,
    BookingCreated,
    PaymentRequest,
    PaymentResult,
    StatusUpdateRequest,
    StatusUpdateResult,
)

router = APIRouter(prefix="/api/booking", tags=["bookings"])


@router.get("/bookings", response_model=list[Booking])
async def list_bookings(lifecycle: BookingDep) -> list[Booking]:
    return await lifecycle.list_all()


@router.post("/create", response_model=BookingCreated)
async def create_booking(request: BookingCreate, lifecycle: BookingDep) -> BookingCreated:
    return await lifecycle.create(request)


@router.post("/process-payment", response_model=PaymentResult)
async def process_payment(request: PaymentRequest, lifecycle: BookingDep) -> PaymentResult:
    booking = await lifecycle.confirm_payment(request.bookingId)
    return PaymentResult(
        success=True,
        message="Payment processed successfully",
        booking=booking,
    )


@router.put("/status/{booking_id}", response_model=StatusUpdateResult)
async def update_status(
    booking_id: str,
    request: StatusUpdateRequest,
    lifecycle: BookingDep,
) -> StatusUpdateResult:
    booking = await lifecycle.set_status(booking_id, request.status)
    return StatusUpdateResult(success=True, booking=booking)
