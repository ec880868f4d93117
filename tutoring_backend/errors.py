from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from tutoring_backend.logger import logger
from tutoring_backend.templating import templates


class TutoringError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InputValidationError(TutoringError):
    """Missing booking fields or a rating outside 1..5. Nothing is stored."""
    status_code = 400
    message = "Invalid input"


class StorageError(TutoringError):
    status_code = 500
    message = "Database error"

    def __init__(self, message=None, plain_text=False):
        super().__init__(message)
        self.plain_text = plain_text


class AuthorizationError(TutoringError):
    status_code = 401
    message = "Unauthorized"


class NotificationError(Exception):
    """A mail or SMS transport refused a message. Logged, never returned to the client."""

    def __init__(self, channel: str, recipient: str, reason: str = ""):
        self.channel = channel
        self.recipient = recipient
        self.reason = reason
        super().__init__(f"{channel} to {recipient} failed: {reason}")


def _ack(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InputValidationError)
    async def validation_error_handler(request: Request, exc: InputValidationError):
        return _ack(exc.status_code, exc.message)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        if exc.plain_text:
            return PlainTextResponse(exc.message, status_code=exc.status_code)
        return _ack(exc.status_code, exc.message)

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(request: Request, exc: AuthorizationError):
        logger.warning(f"Rejected {request.url.path} from {request.client.host if request.client else 'unknown'}")
        return templates.TemplateResponse(request, "login.html", {}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Malformed request to {request.url.path}: {exc.errors()}")
        return _ack(400, "Invalid request")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Unhandled error on {request.url.path}: {exc}")
        return _ack(500, "Server error")
