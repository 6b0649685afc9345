from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator


class BookingStatus(StrEnum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    checked_in = "checked-in"
    checked_out = "checked-out"


class BookingCreate(BaseModel):
    hotelId: int | str
    hotelName: str
    guestName: str
    email: str
    phone: str
    numberOfGuests: int = Field(ge=1)
    checkIn: date
    checkOut: date
    totalAmount: float = Field(ge=0)

    @model_validator(mode="after")
    def _check_dates(self) -> BookingCreate:
        if self.checkOut <= self.checkIn:
            raise ValueError("checkOut must be after checkIn")
        return self


class Booking(BookingCreate):
    id: str
    status: BookingStatus = BookingStatus.pending
    paymentId: str
    createdAt: datetime
    updatedAt: datetime | None = None
    paidAt: datetime | None = None


class BookingCreated(BaseModel):
    booking: Booking
    paymentUrl: str


class PaymentRequest(BaseModel):
    bookingId: str


class PaymentResult(BaseModel):
    success: bool
    message: str
    booking: Booking


class StatusUpdateRequest(BaseModel):
    status: str


class StatusUpdateResult(BaseModel):
    success: bool
    booking: Booking
