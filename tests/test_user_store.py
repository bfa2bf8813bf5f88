import pytest
import pytest_asyncio
from unittest.mock import AsyncMock
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from app.database import Base
from app.models.user import User
from app.services.hasher import CredentialHasher
from app.services.user_store import UserStore
from app.utils.exceptions import (
    DuplicateUserError,
    HashingError,
    NotFoundError,
    UserValidationError,
)


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def store(db_session):
    return UserStore(db_session, CredentialHasher(rounds=4))


@pytest.mark.asyncio
async def test_create_hashes_password(store):
    user = await store.create("ana", "secret1")

    found = await store.find_by_username("ana")
    assert found.id == user.id
    assert found.usuario == "ana"
    assert found.password != "secret1"
    assert found.password.startswith("$2b$")


@pytest.mark.asyncio
async def test_create_assigns_distinct_ids(store):
    ana = await store.create("ana", "x")
    beto = await store.create("beto", "x")

    assert ana.id and beto.id
    assert ana.id != beto.id


@pytest.mark.asyncio
async def test_create_requires_fields(store):
    with pytest.raises(UserValidationError):
        await store.create("", "secret1")
    with pytest.raises(UserValidationError):
        await store.create("ana", "")


@pytest.mark.asyncio
async def test_create_duplicate_username(store):
    await store.create("ana", "secret1")

    with pytest.raises(DuplicateUserError):
        await store.create("ana", "otra")


@pytest.mark.asyncio
async def test_create_aborts_when_hashing_fails(db_session):
    failing = CredentialHasher(rounds=4)
    failing.hash = AsyncMock(side_effect=HashingError())
    store = UserStore(db_session, failing)

    with pytest.raises(HashingError):
        await store.create("ana", "secret1")

    assert await store.find_all() == []


@pytest.mark.asyncio
async def test_find_all(store):
    await store.create("ana", "a")
    await store.create("beto", "b")

    users = await store.find_all()

    assert sorted(u.usuario for u in users) == ["ana", "beto"]


@pytest.mark.asyncio
async def test_find_by_id_not_found(store):
    with pytest.raises(NotFoundError):
        await store.find_by_id("missing")


@pytest.mark.asyncio
async def test_find_by_username_not_found(store):
    with pytest.raises(NotFoundError):
        await store.find_by_username("nadie")


@pytest.mark.asyncio
async def test_update_by_id_always_rehashes(store):
    user = await store.create("ana", "secret1")
    old_digest = user.password

    updated = await store.update_by_id(user.id, "ana", "secret1")

    assert updated.id == user.id
    assert updated.password != old_digest
    assert updated.password != "secret1"


@pytest.mark.asyncio
async def test_update_by_id_not_found(store):
    with pytest.raises(NotFoundError):
        await store.update_by_id("missing", "ana", "x")


@pytest.mark.asyncio
async def test_update_by_username_keeps_username(store):
    user = await store.create("ana", "secret1")
    old_digest = user.password

    updated = await store.update_by_username("ana", "secret1")

    assert updated.usuario == "ana"
    assert updated.password != old_digest


@pytest.mark.asyncio
async def test_update_by_username_not_found(store):
    with pytest.raises(NotFoundError):
        await store.update_by_username("nadie", "x")


@pytest.mark.asyncio
async def test_delete_by_id(store, db_session):
    user = await store.create("ana", "x")

    deleted = await store.delete_by_id(user.id)

    assert deleted.usuario == "ana"
    assert await db_session.get(User, user.id) is None
    with pytest.raises(NotFoundError):
        await store.delete_by_id(user.id)


@pytest.mark.asyncio
async def test_delete_by_username(store):
    await store.create("ana", "x")

    await store.delete_by_username("ana")

    with pytest.raises(NotFoundError):
        await store.delete_by_username("ana")
