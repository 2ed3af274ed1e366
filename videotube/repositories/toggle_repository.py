"""토글 관계 레포지토리 — 좋아요/구독 관계 조회, 생성, 삭제.

Toggle Relation Repository — Lookup, insert and delete of like/subscribe rows.
Consistency comes from the (actor, target, kind) unique constraint: inserts
run inside a SAVEPOINT so a constraint violation can be reported without
aborting the caller's transaction.
"""

from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.toggle import ToggleKind, ToggleRelation
from videotube.models.user import User
from videotube.models.video import Video
from videotube.utils.exceptions import DuplicateRelationError


class ToggleRepository:
    """토글 관계 테이블에 대한 쿼리를 담당하는 레포지토리.

    Repository handling queries for the toggle_relations table.
    """

    async def find(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_id: UUID,
        kind: ToggleKind,
    ) -> ToggleRelation | None:
        """(actor, target, kind) 관계를 조회합니다.

        Retrieve the relation for the given triple.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            actor_id: 행위자 사용자 ID (Actor user UUID)
            target_id: 대상 ID (Target UUID)
            kind: 대상 유형 (Target kind)

        Returns:
            ToggleRelation | None: 관계 또는 None (Relation or None)
        """
        query: Select = select(ToggleRelation).where(
            ToggleRelation.actor_id == actor_id,
            ToggleRelation.target_id == target_id,
            ToggleRelation.target_kind == kind.value,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def insert(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_id: UUID,
        kind: ToggleKind,
    ) -> ToggleRelation:
        """새 관계를 생성합니다.

        Insert a relation inside a SAVEPOINT.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            actor_id: 행위자 사용자 ID (Actor user UUID)
            target_id: 대상 ID (Target UUID)
            kind: 대상 유형 (Target kind)

        Returns:
            ToggleRelation: 생성된 관계 (Created relation)

        Raises:
            DuplicateRelationError: 같은 관계가 이미 존재할 때
                                    (Unique constraint rejected the insert)
        """
        relation: ToggleRelation = ToggleRelation(
            actor_id=actor_id,
            target_id=target_id,
            target_kind=kind.value,
        )
        try:
            async with db.begin_nested():
                db.add(relation)
        except IntegrityError as exc:
            raise DuplicateRelationError() from exc
        return relation

    async def remove(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_id: UUID,
        kind: ToggleKind,
    ) -> bool:
        """관계를 삭제합니다.

        Delete the relation with a single conditional DELETE.

        Returns:
            bool: 행이 삭제되었는지 여부 (False if a concurrent toggle removed it first)
        """
        stmt = (
            delete(ToggleRelation)
            .where(
                ToggleRelation.actor_id == actor_id,
                ToggleRelation.target_id == target_id,
                ToggleRelation.target_kind == kind.value,
            )
            .execution_options(synchronize_session="fetch")
        )
        result = await db.execute(stmt)
        await db.flush()
        return result.rowcount > 0

    async def remove_for_targets(
        self,
        db: AsyncSession,
        target_ids: list[UUID],
        kind: ToggleKind,
    ) -> int:
        """대상들을 가리키는 모든 관계를 삭제합니다.

        Delete every relation pointing at the given targets. target_id has no
        foreign key, so deleting a video, comment or tweet calls this in the
        same transaction.

        Returns:
            int: 삭제된 행 수 (Number of deleted rows)
        """
        if not target_ids:
            return 0
        stmt = (
            delete(ToggleRelation)
            .where(
                ToggleRelation.target_id.in_(target_ids),
                ToggleRelation.target_kind == kind.value,
            )
            .execution_options(synchronize_session="fetch")
        )
        result = await db.execute(stmt)
        await db.flush()
        return result.rowcount

    async def count(
        self,
        db: AsyncSession,
        target_id: UUID,
        kind: ToggleKind,
    ) -> int:
        """대상의 관계 수를 셉니다 (Count relations pointing at a target)."""
        query: Select = select(func.count(ToggleRelation.id)).where(
            ToggleRelation.target_id == target_id,
            ToggleRelation.target_kind == kind.value,
        )
        return (await db.execute(query)).scalar() or 0

    async def get_liked_videos(
        self,
        db: AsyncSession,
        actor_id: UUID,
    ) -> list[Video]:
        """사용자가 좋아요한 동영상을 최근 순으로 조회합니다.

        Retrieve videos liked by the actor, most recently liked first.
        Likes whose video no longer exists drop out through the inner join.
        """
        query: Select = (
            select(Video)
            .join(ToggleRelation, ToggleRelation.target_id == Video.id)
            .where(
                ToggleRelation.actor_id == actor_id,
                ToggleRelation.target_kind == ToggleKind.VIDEO.value,
            )
            .order_by(ToggleRelation.created_at.desc(), ToggleRelation.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_subscribers(
        self,
        db: AsyncSession,
        channel_id: UUID,
    ) -> list[tuple[ToggleRelation, User]]:
        """채널의 구독자 목록을 조회합니다.

        Retrieve subscriptions to a channel joined with the subscribing user.
        """
        query: Select = (
            select(ToggleRelation, User)
            .join(User, User.id == ToggleRelation.actor_id)
            .where(
                ToggleRelation.target_id == channel_id,
                ToggleRelation.target_kind == ToggleKind.CHANNEL.value,
            )
            .order_by(ToggleRelation.created_at)
        )
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def get_subscribed_channels(
        self,
        db: AsyncSession,
        subscriber_id: UUID,
    ) -> list[tuple[ToggleRelation, User]]:
        """사용자가 구독한 채널 목록을 조회합니다.

        Retrieve subscriptions made by a user joined with the channel user.
        """
        query: Select = (
            select(ToggleRelation, User)
            .join(User, User.id == ToggleRelation.target_id)
            .where(
                ToggleRelation.actor_id == subscriber_id,
                ToggleRelation.target_kind == ToggleKind.CHANNEL.value,
            )
            .order_by(ToggleRelation.created_at)
        )
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]


# 싱글턴 인스턴스 — Singleton instance
toggle_repository: ToggleRepository = ToggleRepository()
