"""댓글 레포지토리 — 동영상별 댓글 조회.

Comment Repository — Per-video comment listing.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from videotube.models.video import Comment
from videotube.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """댓글 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the comments table.
    """

    def __init__(self) -> None:
        super().__init__(Comment)

    def build_video_query(self, video_id: UUID) -> Select:
        """동영상의 댓글 목록 쿼리를 생성합니다 (최신순).

        Build the newest-first comment listing query for a video,
        eagerly loading each author.

        Args:
            video_id: 동영상 ID (Video UUID)

        Returns:
            Select: 목록 쿼리 (Listing query)
        """
        return (
            select(Comment)
            .options(selectinload(Comment.owner))
            .where(Comment.video_id == video_id)
            .order_by(Comment.created_at.desc(), Comment.id)
        )

    async def get_ids_for_video(self, db: AsyncSession, video_id: UUID) -> list[UUID]:
        """동영상에 달린 댓글 ID 목록 (Ids of every comment on a video)."""
        result = await db.execute(select(Comment.id).where(Comment.video_id == video_id))
        return list(result.scalars().all())

    async def get_with_owner(
        self,
        db: AsyncSession,
        comment_id: UUID,
    ) -> Comment | None:
        """댓글을 작성자 정보와 함께 조회합니다 (Load a comment with its author)."""
        result = await db.execute(
            select(Comment)
            .options(selectinload(Comment.owner))
            .where(Comment.id == comment_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
comment_repository: CommentRepository = CommentRepository()
