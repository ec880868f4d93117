from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from tutoring_backend.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    # models must be imported so their tables are registered on Base
    from tutoring_backend import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
