"""
Best-effort fan-out after a booking has been stored.

Runs as a background task once the response is on its way. Each of the
four messages is tried exactly once; a failure is logged and the rest
still go out.
"""
from starlette.concurrency import run_in_threadpool

from tutoring_backend.errors import NotificationError
from tutoring_backend.logger import logger
from tutoring_backend.schemas import BookingDetails
from tutoring_backend.services import email_service, sms_service


async def _attempt(label: str, booking_id: int, send) -> bool:
    try:
        result = await send()
    except NotificationError as e:
        logger.error(f"{label} for booking {booking_id} failed: {e}")
        return False
    except Exception as e:
        logger.opt(exception=e).error(f"{label} for booking {booking_id} failed unexpectedly: {e}")
        return False

    if result:
        logger.info(f"{label} for booking {booking_id} sent (sid {result})")
    else:
        logger.info(f"{label} for booking {booking_id} sent")
    return True


async def send_booking_notifications(booking: BookingDetails) -> int:
    """Returns how many of the four notifications went out."""
    results = [
        await _attempt("Tutor email", booking.id, lambda: email_service.send_tutor_email(booking)),
        await _attempt("Student email", booking.id, lambda: email_service.send_student_email(booking)),
        # Twilio's client is blocking
        await _attempt("Tutor SMS", booking.id, lambda: run_in_threadpool(sms_service.send_tutor_sms, booking)),
        await _attempt("Student SMS", booking.id, lambda: run_in_threadpool(sms_service.send_student_sms, booking)),
    ]
    sent = sum(results)
    if sent < len(results):
        logger.warning(f"Booking {booking.id}: {sent}/{len(results)} notifications sent")
    return sent
