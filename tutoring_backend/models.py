from sqlalchemy import Column, Integer, String, Text, DateTime, func

from tutoring_backend.database import Base


class Booking(Base):
    __tablename__ = "bookings"

    # Column names and order are shared with existing bookings.db files
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text)
    surname = Column(Text)
    age = Column(Integer)
    gender = Column(Text)
    township = Column(Text)
    city = Column(Text)
    postal_code = Column("postalCode", Text)
    province = Column(Text)
    phone = Column(Text)
    email = Column(Text)
    school = Column(Text)
    grade = Column(Text)
    subject = Column(Text)
    topic = Column(Text)
    questions_path = Column("questionsPath", Text)
    comments = Column(Text)
    datetime = Column(Text)
    meet_link = Column("meetLink", Text)
    payment_method = Column("paymentMethod", Text)
    proof_of_payment_path = Column("proofOfPaymentPath", Text)


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    rating = Column(Integer)   # 1..5
    comment = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.current_timestamp())
