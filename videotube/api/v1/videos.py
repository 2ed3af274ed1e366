"""동영상 라우터 — 동영상 목록, 게시, 조회, 수정, 삭제, 공개 토글 API.

Video Router — Endpoints for listing, publishing, viewing, editing,
deleting videos and toggling their published flag.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.api.deps import get_current_user
from videotube.database import get_db
from videotube.models.user import User
from videotube.schemas.common import ApiResponse
from videotube.schemas.video import (
    VideoCreate,
    VideoDetailResponse,
    VideoResponse,
    VideoUpdate,
)
from videotube.services.video_service import video_service
from videotube.utils.pagination import Page

router: APIRouter = APIRouter()


@router.get("", response_model=ApiResponse[Page[VideoResponse]])
async def list_videos(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: int = 1,
    per_page: int = 10,
    query: str | None = None,
    owner_id: UUID | None = None,
    sort_by: str = "created_at",
    sort_type: str = "desc",
) -> ApiResponse[Page[VideoResponse]]:
    """동영상 목록을 조회합니다.

    List videos with optional owner/text filters and sorting.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)
        page: 페이지 번호 (Page number)
        per_page: 페이지당 항목 수 (Items per page)
        query: 검색어 (Search text)
        owner_id: 업로더 필터 (Uploader filter)
        sort_by: 정렬 키 — created_at|views|duration|title (Sort key)
        sort_type: 정렬 방향 — asc|desc (Sort direction)

    Returns:
        ApiResponse[Page[VideoResponse]]: 동영상 페이지 (Page of videos)
    """
    result: Page[VideoResponse] = await video_service.list_videos(
        db,
        viewer=current_user,
        page=page,
        per_page=per_page,
        query=query,
        owner_id=owner_id,
        sort_by=sort_by,
        sort_type=sort_type,
    )
    return ApiResponse.ok(result, "Videos fetched successfully")


@router.post("", response_model=ApiResponse[VideoResponse], status_code=201)
async def publish_video(
    data: VideoCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[VideoResponse]:
    """동영상 게시 (Publish a video)."""
    video: VideoResponse = await video_service.publish(db, current_user, data)
    await db.commit()
    return ApiResponse.ok(video, "Video published successfully", status_code=201)


@router.get("/{video_id}", response_model=ApiResponse[VideoDetailResponse])
async def get_video(
    video_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[VideoDetailResponse]:
    """동영상 상세 조회 — 조회수 증가 및 시청 기록 추가.

    Fetch a video; increments its views and records the watch.
    """
    video: VideoDetailResponse = await video_service.get_video(db, video_id, current_user)
    await db.commit()
    return ApiResponse.ok(video, "Video fetched successfully")


@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse[VideoResponse])
async def toggle_publish_status(
    video_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[VideoResponse]:
    """공개 상태 토글 (Flip the published flag, owner only)."""
    video: VideoResponse = await video_service.toggle_publish(db, video_id, current_user)
    await db.commit()
    return ApiResponse.ok(video, "Publish status toggled")


@router.patch("/{video_id}", response_model=ApiResponse[VideoResponse])
async def update_video(
    video_id: UUID,
    data: VideoUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[VideoResponse]:
    """동영상 수정 (Update title, description or thumbnail, owner only)."""
    video: VideoResponse = await video_service.update_video(db, video_id, current_user, data)
    await db.commit()
    return ApiResponse.ok(video, "Video updated successfully")


@router.delete("/{video_id}", response_model=ApiResponse[dict])
async def delete_video(
    video_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[dict]:
    """동영상 삭제 (Delete a video, owner only)."""
    await video_service.delete_video(db, video_id, current_user)
    await db.commit()
    return ApiResponse.ok({}, "Video deleted successfully")
