"""재생목록 라우터 — 재생목록 및 재생목록 동영상 API.

Playlist Router — Endpoints for playlists and their videos.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.api.deps import get_current_user
from videotube.database import get_db
from videotube.models.user import User
from videotube.schemas.common import ApiResponse
from videotube.schemas.playlist import (
    PlaylistCreate,
    PlaylistDetailResponse,
    PlaylistResponse,
    PlaylistUpdate,
)
from videotube.services.playlist_service import playlist_service

router: APIRouter = APIRouter()


@router.post("", response_model=ApiResponse[PlaylistDetailResponse], status_code=201)
async def create_playlist(
    data: PlaylistCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[PlaylistDetailResponse]:
    """재생목록 생성 (Create a playlist)."""
    playlist: PlaylistDetailResponse = await playlist_service.create_playlist(
        db, current_user, data
    )
    await db.commit()
    return ApiResponse.ok(playlist, "Playlist created successfully", status_code=201)


@router.get("/user/{user_id}", response_model=ApiResponse[list[PlaylistResponse]])
async def get_user_playlists(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[list[PlaylistResponse]]:
    """사용자 재생목록 목록 — 비공개는 본인만.

    A user's playlists; private ones only for their owner.
    """
    playlists: list[PlaylistResponse] = await playlist_service.list_user_playlists(
        db, user_id, current_user
    )
    return ApiResponse.ok(playlists, "Playlists fetched successfully")


@router.get("/{playlist_id}", response_model=ApiResponse[PlaylistDetailResponse])
async def get_playlist(
    playlist_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[PlaylistDetailResponse]:
    """재생목록 상세 (Playlist with its videos)."""
    playlist: PlaylistDetailResponse = await playlist_service.get_playlist(
        db, playlist_id, current_user
    )
    return ApiResponse.ok(playlist, "Playlist fetched successfully")


@router.patch("/add/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistDetailResponse])
async def add_video_to_playlist(
    video_id: UUID,
    playlist_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[PlaylistDetailResponse]:
    """재생목록에 동영상 추가 (Append a video, owner only)."""
    playlist: PlaylistDetailResponse = await playlist_service.add_video(
        db, playlist_id, video_id, current_user
    )
    await db.commit()
    return ApiResponse.ok(playlist, "Video added to playlist")


@router.patch("/remove/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistDetailResponse])
async def remove_video_from_playlist(
    video_id: UUID,
    playlist_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[PlaylistDetailResponse]:
    """재생목록에서 동영상 제거 (Remove a video, owner only)."""
    playlist: PlaylistDetailResponse = await playlist_service.remove_video(
        db, playlist_id, video_id, current_user
    )
    await db.commit()
    return ApiResponse.ok(playlist, "Video removed from playlist")


@router.patch("/{playlist_id}", response_model=ApiResponse[PlaylistDetailResponse])
async def update_playlist(
    playlist_id: UUID,
    data: PlaylistUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[PlaylistDetailResponse]:
    """재생목록 수정 (Update name, description or privacy, owner only)."""
    playlist: PlaylistDetailResponse = await playlist_service.update_playlist(
        db, playlist_id, current_user, data
    )
    await db.commit()
    return ApiResponse.ok(playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}", response_model=ApiResponse[dict])
async def delete_playlist(
    playlist_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[dict]:
    """재생목록 삭제 (Delete a playlist, owner only)."""
    await playlist_service.delete_playlist(db, playlist_id, current_user)
    await db.commit()
    return ApiResponse.ok({}, "Playlist deleted successfully")
