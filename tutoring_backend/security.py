from typing import Optional

from fastapi import Query
from passlib.context import CryptContext

from tutoring_backend.config import settings
from tutoring_backend.errors import AuthorizationError
from tutoring_backend.logger import logger

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def check_password(password: Optional[str]) -> bool:
    if not password:
        return False
    try:
        return bool(pwd_context.verify(password, settings.SESSIONS_PASSWORD_HASH))
    except ValueError as e:
        logger.error(f"SESSIONS_PASSWORD_HASH is not a usable bcrypt hash: {e}")
        return False


def require_sessions_password(password: Optional[str] = Query(None)) -> None:
    """Gate for the admin listing. The password arrives in the query string."""
    if not check_password(password):
        raise AuthorizationError()
