import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(AppException):
    def __init__(self, message: str = "Usuario no encontrado"):
        super().__init__(message, status_code=404)


class UserValidationError(AppException):
    """A required field is missing or has the wrong type."""

    def __init__(self, message: str):
        super().__init__(message, status_code=422)


class DuplicateUserError(AppException):
    def __init__(self, message: str = "El usuario ya existe"):
        super().__init__(message, status_code=409)


class PersistenceError(AppException):
    """The database operation itself failed."""

    def __init__(self, message: str = "Error al acceder a la base de datos"):
        super().__init__(message, status_code=500)


class HashingError(AppException):
    """Hashing failed; the write that needed the digest is aborted."""

    def __init__(self, message: str = "Error al cifrar la contraseña"):
        super().__init__(message, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> PlainTextResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
        return PlainTextResponse("Datos de solicitud inválidos", status_code=422)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return PlainTextResponse("Error interno del servidor", status_code=500)
