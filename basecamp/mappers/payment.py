import uuid
from urllib.parse import urlencode


def new_payment_reference() -> str:
    """Placeholder payment id assigned when a booking is created."""
    return uuid.uuid4().hex[:12]


def new_payment_id() -> str:
    """Payment id stamped when a payment is confirmed."""
    return f"PAY-{uuid.uuid4().hex[:12].upper()}"


def build_payment_url(booking_id: str, amount: float) -> str:
    return "/process-payment?" + urlencode({"bookingId": booking_id, "amount": _format_amount(amount)})


def _format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}"
