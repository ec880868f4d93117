from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from tutoring_backend.config import settings
from tutoring_backend.errors import NotificationError
from tutoring_backend.schemas import BookingDetails, or_not_specified

client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)


def tutor_sms_body(booking: BookingDetails) -> str:
    return (
        f"New booking: {booking.name} {booking.surname} for {booking.subject} "
        f"({booking.topic}) on {booking.datetime}. "
        f"Payment: {or_not_specified(booking.payment_method)}. Join: {booking.meet_link}"
    )


def student_sms_body(booking: BookingDetails) -> str:
    return (
        f"{settings.BUSINESS_NAME}: Your session for {booking.subject} ({booking.topic}) "
        f"is confirmed for {booking.datetime}. "
        f"Payment Method: {or_not_specified(booking.payment_method)}. Join: {booking.meet_link}"
    )


def send_sms(to: str, body: str) -> str:
    """Send one SMS from the configured Twilio number and return the message sid."""
    try:
        message = client.messages.create(
            body=body,
            from_=settings.TWILIO_PHONE_NUMBER,
            to=to
        )
    except TwilioException as e:
        raise NotificationError("sms", to, str(e)) from e
    return message.sid


def send_tutor_sms(booking: BookingDetails) -> str:
    return send_sms(settings.TUTOR_PHONE, tutor_sms_body(booking))


def send_student_sms(booking: BookingDetails) -> str:
    return send_sms(booking.phone, student_sms_body(booking))
