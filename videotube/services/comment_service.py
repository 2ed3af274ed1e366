"""댓글 서비스 — 동영상 댓글 조회, 작성, 수정, 삭제.

Comment Service — Business logic for video comments.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.toggle import ToggleKind
from videotube.models.user import User
from videotube.models.video import Comment
from videotube.repositories.comment_repository import comment_repository
from videotube.repositories.toggle_repository import toggle_repository
from videotube.repositories.video_repository import video_repository
from videotube.schemas.video import CommentCreate, CommentResponse, CommentUpdate
from videotube.utils.exceptions import ForbiddenError, NotFoundError
from videotube.utils.pagination import Page, paginate


class CommentService:
    """댓글 관련 비즈니스 로직을 처리하는 서비스.

    Service handling comment business logic.
    """

    async def _ensure_video(self, db: AsyncSession, video_id: UUID, viewer: User) -> None:
        # 비공개 동영상은 소유자에게만 존재 (Unpublished videos exist for their owner only)
        if await video_repository.get_visible(db, video_id, viewer.id) is None:
            raise NotFoundError("Video not found")

    async def _get_owned(
        self,
        db: AsyncSession,
        comment_id: UUID,
        owner: User,
    ) -> Comment:
        comment: Comment | None = await comment_repository.get_by_id(db, comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        if comment.owner_id != owner.id:
            raise ForbiddenError("Only the author can modify this comment")
        return comment

    async def _load(self, db: AsyncSession, comment_id: UUID) -> CommentResponse:
        """작성자 정보와 함께 댓글을 다시 읽습니다 (Reload with the author)."""
        comment: Comment | None = await comment_repository.get_with_owner(db, comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return CommentResponse.model_validate(comment)

    async def list_comments(
        self,
        db: AsyncSession,
        video_id: UUID,
        viewer: User,
        page: int = 1,
        per_page: int = 10,
    ) -> Page[CommentResponse]:
        """동영상의 댓글을 최신순으로 페이지 단위 조회합니다.

        List a video's comments newest first, page by page.

        Raises:
            NotFoundError: 동영상이 없을 때 (Video not found)
            BadRequestError: 잘못된 페이지 파라미터 (Bad paging parameters)
        """
        await self._ensure_video(db, video_id, viewer)
        comments, total = await paginate(
            db, comment_repository.build_video_query(video_id), page, per_page
        )
        return Page[CommentResponse].build(
            [CommentResponse.model_validate(c) for c in comments], total, page, per_page
        )

    async def add_comment(
        self,
        db: AsyncSession,
        video_id: UUID,
        owner: User,
        data: CommentCreate,
    ) -> CommentResponse:
        """댓글을 작성합니다 (Add a comment to a video)."""
        await self._ensure_video(db, video_id, owner)
        comment: Comment = await comment_repository.create(
            db,
            {"video_id": video_id, "owner_id": owner.id, "content": data.content},
        )
        return await self._load(db, comment.id)

    async def update_comment(
        self,
        db: AsyncSession,
        comment_id: UUID,
        owner: User,
        data: CommentUpdate,
    ) -> CommentResponse:
        """댓글을 수정합니다 (Author-only update)."""
        comment: Comment = await self._get_owned(db, comment_id, owner)
        await comment_repository.update(db, comment, {"content": data.content})
        return await self._load(db, comment.id)

    async def delete_comment(
        self,
        db: AsyncSession,
        comment_id: UUID,
        owner: User,
    ) -> None:
        """댓글을 삭제합니다 (Author-only delete)."""
        comment: Comment = await self._get_owned(db, comment_id, owner)
        await toggle_repository.remove_for_targets(db, [comment.id], ToggleKind.COMMENT)
        await comment_repository.delete(db, comment.id)


# 싱글턴 인스턴스 — Singleton instance
comment_service: CommentService = CommentService()
