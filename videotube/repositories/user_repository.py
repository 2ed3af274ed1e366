"""사용자 레포지토리 — 사용자 CRUD, 채널 프로필 집계, 시청 기록 쿼리.

User Repository — CRUD, channel profile aggregation and watch history queries.
Extends BaseRepository with User-specific database operations.
"""

from uuid import UUID

from sqlalchemy import Select, and_, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from videotube.models.toggle import ToggleKind, ToggleRelation
from videotube.models.user import User, WatchHistory
from videotube.models.video import Video
from videotube.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        """UserRepository를 초기화합니다.

        Initialize the UserRepository with the User model.
        """
        super().__init__(User)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> User | None:
        """사용자명으로 사용자를 조회합니다 (Retrieve a user by case-folded username)."""
        result = await db.execute(
            select(User).where(User.username == username.strip().lower())
        )
        return result.scalar_one_or_none()

    async def username_or_email_taken(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        exclude_user_id: UUID | None = None,
    ) -> bool:
        """사용자명 또는 이메일이 이미 사용 중인지 확인합니다.

        Check whether another user already holds the username or email.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 소문자 사용자명 (Lower-cased username)
            email: 소문자 이메일 (Lower-cased email)
            exclude_user_id: 검사에서 제외할 사용자 (User to ignore, e.g. self on update)

        Returns:
            bool: 사용 중이면 True (True if taken)
        """
        query: Select = select(func.count()).select_from(User).where(
            or_(User.username == username, User.email == email)
        )
        if exclude_user_id is not None:
            query = query.where(User.id != exclude_user_id)
        count: int = (await db.execute(query)).scalar() or 0
        return count > 0

    async def get_channel_profile(
        self,
        db: AsyncSession,
        username: str,
        viewer_id: UUID,
    ) -> tuple[User, int, int, bool] | None:
        """채널 프로필과 구독 집계를 한 번의 쿼리로 조회합니다.

        Load a channel with its subscriber count, the number of channels it
        subscribes to, and whether the viewer is one of its subscribers.
        All three are scalar subqueries over ``toggle_relations``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 채널 사용자명 (Channel username)
            viewer_id: 조회하는 사용자 ID (Caller's user id)

        Returns:
            (User, subscribers_count, channels_subscribed_to_count, is_subscribed)
            또는 None (or None if the username is unknown)
        """
        channel_kind: str = ToggleKind.CHANNEL.value

        subscribers_count = (
            select(func.count(ToggleRelation.id))
            .where(
                ToggleRelation.target_id == User.id,
                ToggleRelation.target_kind == channel_kind,
            )
            .correlate(User)
            .scalar_subquery()
        )
        subscribed_to_count = (
            select(func.count(ToggleRelation.id))
            .where(
                ToggleRelation.actor_id == User.id,
                ToggleRelation.target_kind == channel_kind,
            )
            .correlate(User)
            .scalar_subquery()
        )
        is_subscribed = exists().where(
            and_(
                ToggleRelation.target_id == User.id,
                ToggleRelation.actor_id == viewer_id,
                ToggleRelation.target_kind == channel_kind,
            )
        ).correlate(User)

        query: Select = select(
            User,
            subscribers_count.label("subscribers_count"),
            subscribed_to_count.label("channels_subscribed_to_count"),
            is_subscribed.label("is_subscribed"),
        ).where(User.username == username.strip().lower())

        row = (await db.execute(query)).one_or_none()
        if row is None:
            return None
        user, subscribers, subscribed_to, subscribed = row
        return user, int(subscribers or 0), int(subscribed_to or 0), bool(subscribed)

    async def add_watch_history(
        self,
        db: AsyncSession,
        user_id: UUID,
        video_id: UUID,
    ) -> WatchHistory:
        """시청 기록에 동영상을 추가합니다 (Append a video to the user's watch history)."""
        entry: WatchHistory = WatchHistory(user_id=user_id, video_id=video_id)
        db.add(entry)
        await db.flush()
        return entry

    async def get_watch_history(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[WatchHistory]:
        """시청 기록을 동영상과 소유자 정보와 함께 조회합니다.

        Retrieve watch history entries in append order with each video and
        its owner eagerly loaded (one level of join).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID (User UUID)

        Returns:
            list[WatchHistory]: 시청 기록 목록 (Watch history entries)
        """
        query: Select = (
            select(WatchHistory)
            .options(selectinload(WatchHistory.video).selectinload(Video.owner))
            .where(WatchHistory.user_id == user_id)
            .order_by(WatchHistory.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
