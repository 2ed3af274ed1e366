"""동영상 서비스 — 동영상 목록, 게시, 조회, 수정, 삭제, 공개 토글.

Video Service — Business logic for listing, publishing, viewing, editing,
deleting videos and flipping their published flag.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.toggle import ToggleKind
from videotube.models.user import User
from videotube.models.video import Video
from videotube.repositories.comment_repository import comment_repository
from videotube.repositories.toggle_repository import toggle_repository
from videotube.repositories.user_repository import user_repository
from videotube.repositories.video_repository import VIDEO_SORT_COLUMNS, video_repository
from videotube.schemas.video import (
    VideoCreate,
    VideoDetailResponse,
    VideoResponse,
    VideoUpdate,
    VideoWithOwnerResponse,
)
from videotube.services.toggle_service import toggle_service
from videotube.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from videotube.utils.pagination import Page, paginate, resolve_sort


class VideoService:
    """동영상 관련 비즈니스 로직을 처리하는 서비스.

    Service handling video business logic.
    """

    async def list_videos(
        self,
        db: AsyncSession,
        viewer: User,
        page: int = 1,
        per_page: int = 10,
        query: str | None = None,
        owner_id: UUID | None = None,
        sort_by: str = "created_at",
        sort_type: str = "desc",
    ) -> Page[VideoResponse]:
        """동영상 목록을 페이지 단위로 조회합니다.

        List videos page by page. Unpublished videos are only listed for
        their owner (when filtering by the caller's own id).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            viewer: 요청한 사용자 (Caller)
            page: 페이지 번호 (Page number, 1-based)
            per_page: 페이지당 항목 수 (Items per page)
            query: 제목/설명 검색어 (Title/description search)
            owner_id: 업로더 필터 (Uploader filter)
            sort_by: 정렬 키 (Sort key)
            sort_type: "asc" 또는 "desc" (Sort direction)

        Returns:
            Page[VideoResponse]: 동영상 페이지 (Page of videos)

        Raises:
            BadRequestError: 잘못된 페이지/정렬 파라미터 (Bad paging or sort parameters)
        """
        order_by = resolve_sort(VIDEO_SORT_COLUMNS, sort_by, sort_type)
        list_query = video_repository.build_list_query(
            owner_id=owner_id,
            search=query,
            published_only=owner_id != viewer.id,
            order_by=order_by,
        )
        videos, total = await paginate(db, list_query, page, per_page)
        return Page[VideoResponse].build(
            [VideoResponse.model_validate(v) for v in videos], total, page, per_page
        )

    async def publish(
        self,
        db: AsyncSession,
        owner: User,
        data: VideoCreate,
    ) -> VideoResponse:
        """새 동영상을 게시합니다 (Publish a new video)."""
        video: Video = await video_repository.create(
            db,
            {"owner_id": owner.id, **data.model_dump()},
        )
        return VideoResponse.model_validate(video)

    async def _get_owned(
        self,
        db: AsyncSession,
        video_id: UUID,
        owner: User,
    ) -> Video:
        """소유한 동영상을 조회합니다 — 없으면 404, 타인 소유면 403.

        Load a video the caller owns. 404 if missing, 403 if someone else's.
        """
        video: Video | None = await video_repository.get_by_id(db, video_id)
        if video is None:
            raise NotFoundError("Video not found")
        if video.owner_id != owner.id:
            raise ForbiddenError("Only the owner can modify this video")
        return video

    async def get_video(
        self,
        db: AsyncSession,
        video_id: UUID,
        viewer: User,
    ) -> VideoDetailResponse:
        """동영상을 조회하고 조회수와 시청 기록을 갱신합니다.

        Fetch a video, increment its view count in SQL and append it to the
        caller's watch history. Unpublished videos are visible to their owner
        only.

        Raises:
            NotFoundError: 존재하지 않거나 비공개인 동영상 (Missing or unpublished)
        """
        video: Video | None = await video_repository.get_visible(db, video_id, viewer.id)
        if video is None:
            raise NotFoundError("Video not found")

        await video_repository.increment_views(db, video_id)
        await user_repository.add_watch_history(db, viewer.id, video_id)

        video = await video_repository.get_with_owner(db, video_id)
        if video is None:
            raise NotFoundError("Video not found")

        likes_count: int = await toggle_repository.count(db, video_id, ToggleKind.VIDEO)
        is_liked: bool = await toggle_service.is_on(db, viewer.id, video_id, ToggleKind.VIDEO)

        return VideoDetailResponse(
            **VideoWithOwnerResponse.model_validate(video).model_dump(),
            likes_count=likes_count,
            is_liked=is_liked,
        )

    async def update_video(
        self,
        db: AsyncSession,
        video_id: UUID,
        owner: User,
        data: VideoUpdate,
    ) -> VideoResponse:
        """동영상 제목/설명/썸네일을 수정합니다 (Owner-only partial update)."""
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            raise BadRequestError("At least one field is required")

        video: Video = await self._get_owned(db, video_id, owner)
        video = await video_repository.update(db, video, update_data)
        return VideoResponse.model_validate(video)

    async def delete_video(
        self,
        db: AsyncSession,
        video_id: UUID,
        owner: User,
    ) -> None:
        """동영상을 삭제합니다.

        Owner-only delete. Likes on the video and on its comments go with it.
        """
        video: Video = await self._get_owned(db, video_id, owner)
        comment_ids: list[UUID] = await comment_repository.get_ids_for_video(db, video.id)
        await toggle_repository.remove_for_targets(db, comment_ids, ToggleKind.COMMENT)
        await toggle_repository.remove_for_targets(db, [video.id], ToggleKind.VIDEO)
        await video_repository.delete(db, video.id)

    async def toggle_publish(
        self,
        db: AsyncSession,
        video_id: UUID,
        owner: User,
    ) -> VideoResponse:
        """공개 상태를 반전합니다.

        Flip ``is_published`` with a single UPDATE and return the new state.
        """
        await self._get_owned(db, video_id, owner)
        flipped: bool = await video_repository.flip_published(db, video_id, owner.id)
        if not flipped:
            raise NotFoundError("Video not found")

        video: Video | None = await video_repository.get_with_owner(db, video_id)
        if video is None:
            raise NotFoundError("Video not found")
        return VideoResponse.model_validate(video)


# 싱글턴 인스턴스 — Singleton instance
video_service: VideoService = VideoService()
