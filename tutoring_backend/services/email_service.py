from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from fastapi_mail.errors import ConnectionErrors

from tutoring_backend.config import settings
from tutoring_backend.errors import NotificationError
from tutoring_backend.schemas import BookingDetails
from tutoring_backend.templating import render

# ================== EMAIL CONFIG ==================
conf = ConnectionConfig(
    MAIL_USERNAME=settings.GMAIL_USER,
    MAIL_PASSWORD=settings.GMAIL_PASS,
    MAIL_FROM=settings.GMAIL_USER,
    MAIL_FROM_NAME=settings.BUSINESS_NAME,
    MAIL_PORT=settings.MAIL_PORT,
    MAIL_SERVER=settings.MAIL_SERVER,
    MAIL_STARTTLS=True,
    MAIL_SSL_TLS=False,
    USE_CREDENTIALS=True,
)

fm = FastMail(conf)


def render_tutor_email(booking: BookingDetails) -> str:
    return render(
        "emails/tutor_booking.html",
        booking=booking,
        tutor_name=settings.TUTOR_NAME,
    )


def render_student_email(booking: BookingDetails) -> str:
    return render("emails/student_booking.html", booking=booking)


async def send_email(to: str, subject: str, html_body: str) -> None:
    message = MessageSchema(
        subject=subject,
        recipients=[to],
        body=html_body,
        subtype=MessageType.html
    )
    try:
        await fm.send_message(message)
    except ConnectionErrors as e:
        raise NotificationError("email", to, str(e)) from e


async def send_tutor_email(booking: BookingDetails) -> None:
    await send_email(settings.tutor_mailbox, "New Booking Confirmation", render_tutor_email(booking))


async def send_student_email(booking: BookingDetails) -> None:
    await send_email(booking.email, "Booking Confirmation", render_student_email(booking))
