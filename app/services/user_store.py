import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.hasher import CredentialHasher, hasher as default_hasher
from app.utils.exceptions import (
    DuplicateUserError,
    NotFoundError,
    PersistenceError,
    UserValidationError,
)

logger = logging.getLogger(__name__)


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise UserValidationError("Campos obligatorios faltantes: " + ", ".join(missing))


class UserStore:
    """Create, read, update and delete users on the ``users`` table.

    Passwords are hashed here, right before each write, so a row never holds
    plaintext. Nothing is cached: every lookup goes to the database.
    """

    def __init__(self, session: AsyncSession, hasher: CredentialHasher | None = None):
        self._session = session
        self._hasher = hasher or default_hasher

    async def _commit(self) -> None:
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateUserError() from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Commit failed: %s", exc)
            raise PersistenceError() from exc

    async def _first(self, stmt) -> User | None:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error("Query failed: %s", exc)
            raise PersistenceError() from exc
        return result.scalars().first()

    async def create(self, usuario: str, password: str) -> User:
        _require(usuario=usuario, password=password)
        user = User(id=str(uuid.uuid4()), usuario=usuario, password=await self._hasher.hash(password))
        self._session.add(user)
        await self._commit()
        return user

    async def find_all(self) -> list[User]:
        try:
            result = await self._session.execute(select(User))
        except SQLAlchemyError as exc:
            logger.error("Query failed: %s", exc)
            raise PersistenceError() from exc
        return list(result.scalars().all())

    async def find_by_id(self, user_id: str) -> User:
        user = await self._first(select(User).where(User.id == user_id))
        if user is None:
            raise NotFoundError()
        return user

    async def find_by_username(self, usuario: str) -> User:
        user = await self._first(select(User).where(User.usuario == usuario))
        if user is None:
            raise NotFoundError()
        return user

    async def update_by_id(self, user_id: str, usuario: str, password: str) -> User:
        _require(usuario=usuario, password=password)
        user = await self.find_by_id(user_id)
        # always rehash, even when the new password equals the old one
        digest = await self._hasher.hash(password)
        user.usuario = usuario
        user.password = digest
        await self._commit()
        return user

    async def update_by_username(self, usuario: str, password: str) -> User:
        _require(password=password)
        user = await self.find_by_username(usuario)
        user.password = await self._hasher.hash(password)
        await self._commit()
        return user

    async def delete_by_id(self, user_id: str) -> User:
        user = await self.find_by_id(user_id)
        await self._session.delete(user)
        await self._commit()
        return user

    async def delete_by_username(self, usuario: str) -> User:
        user = await self.find_by_username(usuario)
        await self._session.delete(user)
        await self._commit()
        return user
