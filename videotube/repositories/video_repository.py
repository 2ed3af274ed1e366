"""동영상 레포지토리 — 동영상 목록, 조회수 증가, 공개 상태 토글.

Video Repository — Listing queries, atomic view counter and publish flag flip.
"""

from uuid import UUID

from sqlalchemy import Select, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from videotube.models.video import Video
from videotube.repositories.base import BaseRepository

# 정렬 허용 컬럼 — Sortable columns exposed to clients
VIDEO_SORT_COLUMNS = {
    "created_at": Video.created_at,
    "views": Video.views,
    "duration": Video.duration,
    "title": Video.title,
}


class VideoRepository(BaseRepository[Video]):
    """동영상 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the videos table.
    """

    def __init__(self) -> None:
        super().__init__(Video)

    def build_list_query(
        self,
        owner_id: UUID | None = None,
        search: str | None = None,
        published_only: bool = False,
        order_by=None,
    ) -> Select:
        """동영상 목록 쿼리를 생성합니다.

        Build the listing query. Pagination is applied by the caller.

        Args:
            owner_id: 업로더 필터 (Uploader filter, optional)
            search: 제목/설명 부분 검색어 (Case-insensitive title/description search)
            published_only: 공개 동영상만 (Only published videos)
            order_by: ORDER BY 절 (Order clause)

        Returns:
            Select: 목록 쿼리 (Listing query)
        """
        query: Select = select(Video)
        if owner_id is not None:
            query = query.where(Video.owner_id == owner_id)
        if search:
            pattern: str = f"%{search.strip()}%"
            query = query.where(
                or_(Video.title.ilike(pattern), Video.description.ilike(pattern))
            )
        if published_only:
            query = query.where(Video.is_published.is_(True))
        if order_by is not None:
            query = query.order_by(order_by, Video.id)
        return query

    async def get_with_owner(
        self,
        db: AsyncSession,
        video_id: UUID,
    ) -> Video | None:
        """동영상을 업로더 정보와 함께 조회합니다 (Load a video with its owner)."""
        result = await db.execute(
            select(Video)
            .options(selectinload(Video.owner))
            .where(Video.id == video_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_visible(
        self,
        db: AsyncSession,
        video_id: UUID,
        viewer_id: UUID,
    ) -> Video | None:
        """요청자가 볼 수 있는 동영상을 조회합니다.

        Load a video that is published or owned by the viewer; anything else
        reads as missing.
        """
        result = await db.execute(
            select(Video).where(
                Video.id == video_id,
                or_(Video.is_published.is_(True), Video.owner_id == viewer_id),
            )
        )
        return result.scalar_one_or_none()

    async def increment_views(
        self,
        db: AsyncSession,
        video_id: UUID,
    ) -> bool:
        """조회수를 1 증가시킵니다.

        Increment the view counter in SQL so concurrent viewers never lose updates.

        Returns:
            bool: 동영상 존재 여부 (False if the video does not exist)
        """
        stmt = (
            update(Video)
            .where(Video.id == video_id)
            .values(views=Video.views + 1)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1

    async def flip_published(
        self,
        db: AsyncSession,
        video_id: UUID,
        owner_id: UUID,
    ) -> bool:
        """공개 상태를 원자적으로 반전합니다.

        Flip ``is_published`` in one UPDATE, restricted to the owner's video.

        Returns:
            bool: 반전 성공 여부 (False if no owned video matched)
        """
        stmt = (
            update(Video)
            .where(Video.id == video_id, Video.owner_id == owner_id)
            .values(is_published=~Video.is_published)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1


# 싱글턴 인스턴스 — Singleton instance
video_repository: VideoRepository = VideoRepository()
