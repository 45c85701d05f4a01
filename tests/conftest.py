import os
import sys
import tempfile
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'kakeibo_test.db'}",
)

# Settings are read at import time; these must be set before importing the app.
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("JWT_SECRET", "test-secret-key")

from kakeibo.db.session import get_db  # noqa: E402
from kakeibo.main import app  # noqa: E402

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

SAMPLE_CSV = "\n".join(
    [
        "カード名称,JCBカード",
        "お支払日,2025/02/10",
        '"ご利用者","カテゴリ","ご利用日","ご利用先など","ご利用金額","支払区分",'
        '"今回回数","訂正サイン","お支払い金額","国内／海外","摘要","備考"',
        '"本人","食料品","2025/01/05","スーパーマルエツ","3,210","1回払い","","","3,210","国内","",""',
        '"本人","交通","2025/01/07","JR東日本","1,000","1回払い","","","1,000","国内","",""',
        '"家族","外食","2025/01/12","ラーメン ""一番""","","1回払い","","","980","国内","",""',
        "合計,,,,5190",
    ]
)


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse, so pure unit tests (parsers, aggregator) don't touch the database.
    """
    from kakeibo.models.base import Base

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Signed-up user with a profile and shared household membership."""
    from kakeibo.services.auth import AuthService

    return await AuthService(db_session).signup(
        email="papa@example.com",
        password="password123",
        role="papa",
        display_name="Papa",
    )


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    from kakeibo.core.security import create_access_token

    token = create_access_token(user_id=test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def uploaded_statement(client: AsyncClient, auth_headers: dict, sample_csv: str) -> dict:
    """Upload the sample statement as January 2025."""
    response = await client.post(
        "/api/v1/statements/upload",
        content=sample_csv.encode("utf-8"),
        params={"year": 2025, "month": 1},
        headers={**auth_headers, "Content-Type": "text/csv", "X-Filename": "202501.csv"},
    )
    assert response.status_code == 201, response.text
    return response.json()
