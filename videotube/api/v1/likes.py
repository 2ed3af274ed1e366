"""좋아요 라우터 — 동영상/댓글/트윗 좋아요 토글 API.

Like Router — Like toggles and the caller's liked videos.
Each toggle answers with the state after the call: ``{"liked": bool}``.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.api.deps import get_current_user
from videotube.database import get_db
from videotube.models.toggle import ToggleKind
from videotube.models.user import User
from videotube.schemas.common import ApiResponse
from videotube.schemas.engagement import LikeToggleResponse
from videotube.schemas.video import VideoResponse
from videotube.services.like_service import like_service

router: APIRouter = APIRouter()


async def _toggle(
    db: AsyncSession,
    user: User,
    target_id: UUID,
    kind: ToggleKind,
) -> ApiResponse[LikeToggleResponse]:
    result: LikeToggleResponse = await like_service.toggle_like(db, user, target_id, kind)
    await db.commit()
    message: str = "Liked" if result.liked else "Like removed"
    return ApiResponse.ok(result, message)


@router.post("/toggle/v/{video_id}", response_model=ApiResponse[LikeToggleResponse])
async def toggle_video_like(
    video_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[LikeToggleResponse]:
    """동영상 좋아요 토글 (Toggle like on a video)."""
    return await _toggle(db, current_user, video_id, ToggleKind.VIDEO)


@router.post("/toggle/c/{comment_id}", response_model=ApiResponse[LikeToggleResponse])
async def toggle_comment_like(
    comment_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[LikeToggleResponse]:
    """댓글 좋아요 토글 (Toggle like on a comment)."""
    return await _toggle(db, current_user, comment_id, ToggleKind.COMMENT)


@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse[LikeToggleResponse])
async def toggle_tweet_like(
    tweet_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[LikeToggleResponse]:
    """트윗 좋아요 토글 (Toggle like on a tweet)."""
    return await _toggle(db, current_user, tweet_id, ToggleKind.TWEET)


@router.get("/videos", response_model=ApiResponse[list[VideoResponse]])
async def get_liked_videos(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[list[VideoResponse]]:
    """좋아요한 동영상 목록 (Liked videos, most recent first)."""
    videos: list[VideoResponse] = await like_service.get_liked_videos(db, current_user)
    return ApiResponse.ok(videos, "Liked videos fetched successfully")
