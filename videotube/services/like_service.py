"""좋아요 서비스 — 동영상/댓글/트윗 좋아요 토글 및 좋아요한 동영상 조회.

Like Service — Like toggles on videos, comments and tweets, and the list of
liked videos.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.toggle import ToggleKind
from videotube.models.user import User
from videotube.models.video import Video
from videotube.repositories.toggle_repository import toggle_repository
from videotube.schemas.engagement import LikeToggleResponse
from videotube.schemas.video import VideoResponse
from videotube.services.toggle_service import ToggleResult, toggle_service


class LikeService:
    """좋아요 관련 비즈니스 로직을 처리하는 서비스.

    Service handling like business logic on top of the toggle engine.
    """

    async def toggle_like(
        self,
        db: AsyncSession,
        user: User,
        target_id: UUID,
        kind: ToggleKind,
    ) -> LikeToggleResponse:
        """좋아요를 토글합니다.

        Toggle the caller's like on a video, comment or tweet.

        Raises:
            TargetNotFoundError: 대상이 없을 때 (Target not found)
        """
        result: ToggleResult = await toggle_service.toggle(db, user.id, target_id, kind)
        return LikeToggleResponse(liked=result.is_on)

    async def get_liked_videos(
        self,
        db: AsyncSession,
        user: User,
    ) -> list[VideoResponse]:
        """좋아요한 동영상을 최근 순으로 조회합니다 (Liked videos, most recent first)."""
        videos: list[Video] = await toggle_repository.get_liked_videos(db, user.id)
        return [VideoResponse.model_validate(v) for v in videos]


# 싱글턴 인스턴스 — Singleton instance
like_service: LikeService = LikeService()
