"""토글 서비스 — 좋아요/구독 관계의 멱등 on/off 전환.

Toggle Service — Idempotent on/off switching of like and subscription edges.

A toggle looks at the current state and moves it to the opposite one. Two
requests that both observe "off" race to insert; the unique constraint lets
exactly one win and the loser reports the winner's state (on, not created),
so N concurrent toggles from "off" leave exactly one row.
"""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.toggle import ToggleKind
from videotube.models.tweet import Tweet
from videotube.models.user import User
from videotube.models.video import Comment, Video
from videotube.repositories.base import BaseRepository
from videotube.repositories.toggle_repository import toggle_repository
from videotube.utils.exceptions import DuplicateRelationError, TargetNotFoundError

# 대상 유형별 존재 확인용 모델 — Model holding each kind of target
_TARGET_MODELS: dict[ToggleKind, type] = {
    ToggleKind.VIDEO: Video,
    ToggleKind.COMMENT: Comment,
    ToggleKind.TWEET: Tweet,
    ToggleKind.CHANNEL: User,
}


@dataclass(frozen=True)
class ToggleResult:
    """토글 결과.

    Attributes:
        is_on: 토글 후 상태 (State after the toggle)
        created: 이 호출이 행을 새로 만들었는지 (Whether this call inserted the row)
    """

    is_on: bool
    created: bool


class ToggleService:
    """좋아요/구독 토글 비즈니스 로직을 처리하는 서비스.

    Service implementing the generic toggle over any ToggleKind.
    """

    async def target_exists(
        self,
        db: AsyncSession,
        target_id: UUID,
        kind: ToggleKind,
    ) -> bool:
        """토글 대상이 존재하는지 확인합니다 (Check the target row exists)."""
        repository: BaseRepository = BaseRepository(_TARGET_MODELS[kind])
        return await repository.exists(db, {"id": target_id})

    async def toggle(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_id: UUID,
        kind: ToggleKind,
    ) -> ToggleResult:
        """관계를 반대 상태로 전환합니다.

        Flip the (actor, target, kind) relation.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            actor_id: 행위자 사용자 ID (Actor user UUID)
            target_id: 대상 ID (Target UUID)
            kind: 대상 유형 (Target kind)

        Returns:
            ToggleResult: 토글 후 상태 (State after the toggle)

        Raises:
            TargetNotFoundError: 대상이 존재하지 않을 때 (Target does not exist)
        """
        if not await self.target_exists(db, target_id, kind):
            raise TargetNotFoundError(f"{kind.value.capitalize()} not found")

        existing = await toggle_repository.find(db, actor_id, target_id, kind)
        if existing is not None:
            # 동시 삭제로 이미 사라졌어도 결과는 off — Either way the edge is now gone
            await toggle_repository.remove(db, actor_id, target_id, kind)
            return ToggleResult(is_on=False, created=False)

        try:
            await toggle_repository.insert(db, actor_id, target_id, kind)
        except DuplicateRelationError:
            # 경합에서 패배 — 승자의 상태로 수렴 (Lost the race, converge to the winner)
            return ToggleResult(is_on=True, created=False)
        return ToggleResult(is_on=True, created=True)

    async def is_on(
        self,
        db: AsyncSession,
        actor_id: UUID,
        target_id: UUID,
        kind: ToggleKind,
    ) -> bool:
        """현재 관계가 켜져 있는지 확인합니다 (Whether the relation currently exists)."""
        return await toggle_repository.find(db, actor_id, target_id, kind) is not None


# 싱글턴 인스턴스 — Singleton instance
toggle_service: ToggleService = ToggleService()
