from typing import Any, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.user import PasswordUpdate, UserCredentials
from app.services.hasher import hasher
from app.services.user_store import UserStore
from app.utils.exceptions import UserValidationError

T = TypeVar("T", bound=BaseModel)


async def get_user_store(db: AsyncSession = Depends(get_db)) -> UserStore:
    return UserStore(db, hasher)


async def read_body(request: Request) -> dict[str, Any]:
    """Return the request body as a dict, whether it was sent as JSON or as a form."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError as exc:
            raise UserValidationError("Cuerpo JSON inválido") from exc
        return data if isinstance(data, dict) else {}
    form = await request.form()
    return dict(form)


def parse_payload(schema: type[T], data: dict[str, Any]) -> T:
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise UserValidationError("Campos obligatorios faltantes: " + ", ".join(fields)) from exc


async def credentials_body(request: Request) -> UserCredentials:
    return parse_payload(UserCredentials, await read_body(request))


async def password_body(request: Request) -> PasswordUpdate:
    return parse_payload(PasswordUpdate, await read_body(request))
