import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, BackgroundTasks, Depends, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutoring_backend.config import settings
from tutoring_backend.database import get_db, init_db
from tutoring_backend.errors import InputValidationError, StorageError, register_error_handlers
from tutoring_backend.logger import logger, setup_logging
from tutoring_backend.models import Booking, Testimonial
from tutoring_backend.schemas import Ack, BookingDetails, TestimonialList, TestimonialOut
from tutoring_backend.security import require_sessions_password
from tutoring_backend.services.notifications import send_booking_notifications
from tutoring_backend.templating import templates
from tutoring_backend.uploads import save_upload

setup_logging()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

REQUIRED_BOOKING_FIELDS = (
    "name", "surname", "age", "gender", "city", "province",
    "phone", "email", "subject", "topic", "datetime",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Starting {settings.BUSINESS_NAME} booking backend")
    yield
    logger.info("Shutting down booking backend")


# ================== APP ==================
app = FastAPI(title="Tutoring Booking Backend", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.mount("/static", StaticFiles(directory=os.path.join(BASE_DIR, "frontend", "static")), name="static")
register_error_handlers(app)


def _coerce_age(age: str):
    # Stored in an INTEGER column; anything that isn't a whole number is kept as typed
    stripped = age.strip()
    return int(stripped) if stripped.isdigit() else age


def parse_rating(rating: Optional[str]) -> int:
    try:
        value = int(rating.strip())
    except (AttributeError, ValueError):
        raise InputValidationError("Rating must be between 1 and 5")
    if value < 1 or value > 5:
        raise InputValidationError("Rating must be between 1 and 5")
    return value


def average_rating(ratings):
    if not ratings:
        return 0
    average = sum(ratings) / len(ratings)
    return int(average) if average.is_integer() else average


# ================== PAGES ==================
@app.get("/", response_class=HTMLResponse)
def index():
    with open(os.path.join(BASE_DIR, "frontend", "index.html"), encoding="utf-8") as f:
        return f.read()


# ================== BOOKING ==================
@app.post("/book", response_model=Ack, response_model_exclude_none=True)
def book(
    background_tasks: BackgroundTasks,
    name: Optional[str] = Form(None),
    surname: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    township: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    postal_code: Optional[str] = Form(None, alias="postalCode"),
    province: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    school: Optional[str] = Form(None),
    grade: Optional[str] = Form(None),
    subject: Optional[str] = Form(None),
    topic: Optional[str] = Form(None),
    comments: Optional[str] = Form(None),
    datetime: Optional[str] = Form(None),
    payment_method: Optional[str] = Form(None, alias="paymentMethod"),
    questions: Optional[UploadFile] = File(None),
    proof_of_payment: Optional[UploadFile] = File(None, alias="proofOfPayment"),
    db: Session = Depends(get_db),
):
    fields = {
        "name": name, "surname": surname, "age": age, "gender": gender,
        "township": township, "city": city, "postal_code": postal_code,
        "province": province, "phone": phone, "email": email,
        "school": school, "grade": grade, "subject": subject, "topic": topic,
        "comments": comments, "datetime": datetime, "payment_method": payment_method,
    }
    missing = [field for field in REQUIRED_BOOKING_FIELDS if not fields[field]]
    if missing:
        logger.warning(f"Booking rejected, missing: {', '.join(missing)}")
        raise InputValidationError("Missing required fields")

    fields["age"] = _coerce_age(age)
    fields["questions_path"] = save_upload(questions)
    fields["proof_of_payment_path"] = save_upload(proof_of_payment)
    fields["meet_link"] = settings.MEET_LINK
    booking = Booking(**fields)

    try:
        db.add(booking)
        db.commit()
        db.refresh(booking)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while storing booking: {e}")
        raise StorageError("Database error") from e

    logger.info(f"Booking {booking.id} stored for {name} {surname} ({subject}, {datetime})")

    # The row is stored, so the answer is success whatever happens below.
    # Notifications work from the submitted values, not from what SQLite coerced them into.
    try:
        details = BookingDetails(id=booking.id, **fields)
    except ValidationError as e:
        logger.opt(exception=e).error(f"Booking {booking.id}: notifications skipped, cannot build details")
    else:
        background_tasks.add_task(send_booking_notifications, details)
    return {"success": True}


# ================== TESTIMONIALS ==================
@app.post("/testimonials", response_model=Ack, response_model_exclude_none=True)
def create_testimonial(
    rating: Optional[str] = Form(None),
    comment: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    testimonial = Testimonial(rating=parse_rating(rating), comment=comment or None)
    try:
        db.add(testimonial)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while storing testimonial: {e}")
        raise StorageError("Database error") from e

    logger.info(f"Testimonial stored with rating {testimonial.rating}")
    return {"success": True}


@app.get("/testimonials", response_model=TestimonialList)
def list_testimonials(db: Session = Depends(get_db)):
    try:
        rows = (
            db.query(Testimonial)
            .order_by(Testimonial.created_at.desc(), Testimonial.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Database error while reading testimonials: {e}")
        raise StorageError("Error retrieving testimonials") from e

    return TestimonialList(
        testimonials=[TestimonialOut.model_validate(row) for row in rows],
        averageRating=average_rating([row.rating for row in rows]),
    )


# ================== SESSIONS ==================
@app.get("/sessions", response_class=HTMLResponse, dependencies=[Depends(require_sessions_password)])
def sessions(request: Request, db: Session = Depends(get_db)):
    try:
        bookings = db.query(Booking).order_by(Booking.datetime.asc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Database error while reading sessions: {e}")
        raise StorageError("Error retrieving sessions", plain_text=True) from e

    return templates.TemplateResponse(request, "sessions.html", {"bookings": bookings})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tutoring_backend.main:app", host="0.0.0.0", port=settings.PORT)
