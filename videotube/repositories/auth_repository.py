"""인증 레포지토리 — 자격 증명 조회 및 리프레시 토큰 저장.

Auth Repository — Credential lookups and refresh token persistence.
The live refresh token is stored on the user row itself; every write to it
is a single UPDATE statement so the database provides the atomicity.
"""

from uuid import UUID

from sqlalchemy import Select, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.user import User


class AuthRepository:
    """인증 관련 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling authentication-related database queries.
    Manages refresh token lifecycle and user credential lookups.
    """

    async def get_user_by_login(
        self,
        db: AsyncSession,
        username: str | None = None,
        email: str | None = None,
    ) -> User | None:
        """사용자명 또는 이메일로 사용자를 조회합니다.

        Retrieve a user whose username or email matches. Both inputs are
        compared case-folded since they are stored lower-cased.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 조회할 사용자명 (Username to look up, optional)
            email: 조회할 이메일 (Email to look up, optional)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        conditions = []
        if username:
            conditions.append(User.username == username.strip().lower())
        if email:
            conditions.append(User.email == email.strip().lower())
        if not conditions:
            return None

        query: Select = select(User).where(or_(*conditions)).limit(1)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_user_by_id(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> User | None:
        """ID로 사용자를 조회합니다 (Retrieve a user by id, always re-reading the row)."""
        result = await db.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def store_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        token: str | None,
    ) -> None:
        """사용자의 리프레시 토큰을 덮어씁니다.

        Overwrite the user's stored refresh token unconditionally.
        ``None`` revokes the session (logout).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)
            token: 새 리프레시 토큰 또는 None (New refresh token, or None to revoke)
        """
        stmt = update(User).where(User.id == user_id).values(refresh_token=token)
        await db.execute(stmt)
        await db.flush()

    async def rotate_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        presented: str,
        replacement: str,
    ) -> bool:
        """저장된 토큰이 제시된 토큰과 같을 때만 교체합니다.

        Compare-and-swap the stored refresh token in one UPDATE. Of two
        concurrent rotations presenting the same token only one matches.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 대상 사용자 ID (Target user UUID)
            presented: 클라이언트가 제시한 토큰 (Token presented by the client)
            replacement: 새로 발급한 토큰 (Newly issued token)

        Returns:
            bool: 교체 성공 여부 (True if exactly one row was updated)
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == presented)
            .values(refresh_token=replacement)
            .execution_options(synchronize_session="fetch")
        )
        result = await db.execute(stmt)
        await db.flush()
        return result.rowcount == 1


# 싱글턴 인스턴스 — Singleton instance
auth_repository: AuthRepository = AuthRepository()
