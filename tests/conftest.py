"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh in-memory database (aiosqlite + StaticPool). pysqlite's
own transaction handling is switched off and BEGIN is emitted by SQLAlchemy,
so SAVEPOINTs used by the toggle engine behave as they do on PostgreSQL.
"""

import os

# 앱 임포트 전에 테스트 설정 적용 — Test settings must be in place before the app is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret")
os.environ.setdefault("AXIOM_API_TOKEN", "")
os.environ.setdefault("AXIOM_DATASET", "")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from videotube.database import Base, get_db  # noqa: E402
from videotube.main import app  # noqa: E402
from videotube.models import *  # noqa: F401,F403,E402 — register all models with metadata
from videotube.models.user import User  # noqa: E402
from videotube.models.video import Video  # noqa: E402
from videotube.utils.jwt import token_service  # noqa: E402
from videotube.utils.password import hash_password  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 테스트마다 새 인메모리 DB와 스키마."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(eng.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # pysqlite의 암묵적 트랜잭션 비활성화 + 외래 키 활성화
        # Disable pysqlite's implicit transactions and enforce foreign keys
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(eng.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_user(
    db: AsyncSession,
    username: str,
    password: str = "secret123",
    full_name: str | None = None,
) -> User:
    """테스트 사용자를 생성합니다."""
    user = User(
        username=username,
        email=f"{username}@example.com",
        full_name=full_name or username.capitalize(),
        password_hash=hash_password(password),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def create_video(
    db: AsyncSession,
    owner: User,
    title: str = "Test Video",
    is_published: bool = True,
    views: int = 0,
    duration: float = 60.0,
) -> Video:
    """테스트 동영상을 생성합니다."""
    video = Video(
        owner_id=owner.id,
        title=title,
        description=f"{title} description",
        video_file=f"https://media.example.com/{title}.mp4",
        thumbnail=f"https://media.example.com/{title}.jpg",
        duration=duration,
        views=views,
        is_published=is_published,
    )
    db.add(video)
    await db.commit()
    await db.refresh(video)
    return video


@pytest_asyncio.fixture
async def ada(db: AsyncSession) -> User:
    """사용자 ada (비밀번호 secret123)."""
    return await create_user(db, "ada", full_name="Ada Lovelace")


@pytest_asyncio.fixture
async def bob(db: AsyncSession) -> User:
    """사용자 bob (비밀번호 secret123)."""
    return await create_user(db, "bob", full_name="Bob Builder")


@pytest_asyncio.fixture
async def video(db: AsyncSession, bob: User) -> Video:
    """bob이 업로드한 공개 동영상."""
    return await create_video(db, bob, title="Intro")


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return token_service.issue_access_token(user)


@pytest.fixture
def ada_token(ada: User) -> str:
    return make_token(ada)


@pytest.fixture
def bob_token(bob: User) -> str:
    return make_token(bob)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
