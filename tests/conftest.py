import os
import tempfile

import pytest
import pytest_asyncio

_tmp_dir = tempfile.mkdtemp(prefix="pasteleria-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp_dir}/test.sqlite3"
os.environ["DATA_DIR"] = _tmp_dir


@pytest.fixture(autouse=True, scope="session")
def setup_test_db():
    import asyncio

    from app.database import create_tables, engine

    async def _setup():
        await create_tables()
        await engine.dispose()

    asyncio.run(_setup())


@pytest_asyncio.fixture
async def client():
    from httpx import ASGITransport, AsyncClient
    from sqlalchemy import delete

    from app.database import async_session, engine
    from app.main import app
    from app.models.user import User

    async with async_session() as session:
        await session.execute(delete(User))
        await session.commit()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    await engine.dispose()
