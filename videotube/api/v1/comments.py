"""댓글 라우터 — 동영상 댓글 API.

Comment Router — Endpoints for video comments.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.api.deps import get_current_user
from videotube.database import get_db
from videotube.models.user import User
from videotube.schemas.common import ApiResponse
from videotube.schemas.video import CommentCreate, CommentResponse, CommentUpdate
from videotube.services.comment_service import comment_service
from videotube.utils.pagination import Page

router: APIRouter = APIRouter()


@router.get("/{video_id}", response_model=ApiResponse[Page[CommentResponse]])
async def list_video_comments(
    video_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: int = 1,
    per_page: int = 10,
) -> ApiResponse[Page[CommentResponse]]:
    """동영상 댓글 목록 — 최신순 (Video comments, newest first)."""
    result: Page[CommentResponse] = await comment_service.list_comments(
        db, video_id, current_user, page=page, per_page=per_page
    )
    return ApiResponse.ok(result, "Comments fetched successfully")


@router.post("/{video_id}", response_model=ApiResponse[CommentResponse], status_code=201)
async def add_comment(
    video_id: UUID,
    data: CommentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[CommentResponse]:
    """댓글 작성 (Add a comment)."""
    comment: CommentResponse = await comment_service.add_comment(
        db, video_id, current_user, data
    )
    await db.commit()
    return ApiResponse.ok(comment, "Comment added successfully", status_code=201)


@router.patch("/c/{comment_id}", response_model=ApiResponse[CommentResponse])
async def update_comment(
    comment_id: UUID,
    data: CommentUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[CommentResponse]:
    """댓글 수정 (Update a comment, author only)."""
    comment: CommentResponse = await comment_service.update_comment(
        db, comment_id, current_user, data
    )
    await db.commit()
    return ApiResponse.ok(comment, "Comment updated successfully")


@router.delete("/c/{comment_id}", response_model=ApiResponse[dict])
async def delete_comment(
    comment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[dict]:
    """댓글 삭제 (Delete a comment, author only)."""
    await comment_service.delete_comment(db, comment_id, current_user)
    await db.commit()
    return ApiResponse.ok({}, "Comment deleted successfully")
