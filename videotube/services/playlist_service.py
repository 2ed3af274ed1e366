"""재생목록 서비스 — 재생목록 생성, 조회, 수정, 삭제 및 동영상 추가/제거.

Playlist Service — Business logic for playlists and their video entries.
Private playlists behave as if they did not exist for anyone but their owner.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.playlist import Playlist
from videotube.models.user import User
from videotube.repositories.playlist_repository import playlist_repository
from videotube.repositories.user_repository import user_repository
from videotube.repositories.video_repository import video_repository
from videotube.schemas.playlist import (
    PlaylistCreate,
    PlaylistDetailResponse,
    PlaylistResponse,
    PlaylistUpdate,
)
from videotube.schemas.video import VideoWithOwnerResponse
from videotube.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    ForbiddenError,
    NotFoundError,
)


class PlaylistService:
    """재생목록 관련 비즈니스 로직을 처리하는 서비스.

    Service handling playlist business logic.
    """

    def build_response(self, playlist: Playlist) -> PlaylistResponse:
        """재생목록 요약 응답을 생성합니다 (entries must be loaded)."""
        return PlaylistResponse(
            id=playlist.id,
            name=playlist.name,
            description=playlist.description,
            owner_id=playlist.owner_id,
            is_private=playlist.is_private,
            video_count=len(playlist.entries),
            created_at=playlist.created_at,
            updated_at=playlist.updated_at,
        )

    def build_detail(self, playlist: Playlist) -> PlaylistDetailResponse:
        """동영상 목록을 포함한 상세 응답을 생성합니다 (Detail with videos)."""
        return PlaylistDetailResponse(
            **self.build_response(playlist).model_dump(),
            videos=[
                VideoWithOwnerResponse.model_validate(entry.video)
                for entry in playlist.entries
            ],
        )

    async def _get_visible(
        self,
        db: AsyncSession,
        playlist_id: UUID,
        viewer: User,
    ) -> Playlist:
        """요청자가 볼 수 있는 재생목록을 조회합니다.

        Load a playlist the viewer may see; a private playlist of someone
        else is reported as missing.
        """
        playlist: Playlist | None = await playlist_repository.get_with_videos(db, playlist_id)
        if playlist is None or (playlist.is_private and playlist.owner_id != viewer.id):
            raise NotFoundError("Playlist not found")
        return playlist

    async def _get_owned(
        self,
        db: AsyncSession,
        playlist_id: UUID,
        owner: User,
    ) -> Playlist:
        playlist: Playlist = await self._get_visible(db, playlist_id, owner)
        if playlist.owner_id != owner.id:
            raise ForbiddenError("Only the owner can modify this playlist")
        return playlist

    async def create_playlist(
        self,
        db: AsyncSession,
        owner: User,
        data: PlaylistCreate,
    ) -> PlaylistDetailResponse:
        """재생목록을 생성합니다.

        Create a playlist. Names are unique per owner.

        Raises:
            DuplicateError: 같은 이름의 재생목록이 이미 있을 때 (Name already used)
        """
        if await playlist_repository.name_taken(db, owner.id, data.name):
            raise DuplicateError("Playlist with this name already exists")

        try:
            async with db.begin_nested():
                playlist: Playlist = await playlist_repository.create(
                    db, {"owner_id": owner.id, **data.model_dump()}
                )
        except IntegrityError as exc:
            raise DuplicateError("Playlist with this name already exists") from exc

        loaded: Playlist = await self._get_owned(db, playlist.id, owner)
        return self.build_detail(loaded)

    async def list_user_playlists(
        self,
        db: AsyncSession,
        user_id: UUID,
        viewer: User,
    ) -> list[PlaylistResponse]:
        """사용자의 재생목록을 조회합니다 — 비공개는 본인에게만.

        List a user's playlists; private ones only when the viewer is the owner.

        Raises:
            NotFoundError: 사용자가 없을 때 (User not found)
        """
        if await user_repository.get_by_id(db, user_id) is None:
            raise NotFoundError("User not found")
        playlists: list[Playlist] = await playlist_repository.get_by_owner(
            db, user_id, include_private=user_id == viewer.id
        )
        return [self.build_response(p) for p in playlists]

    async def get_playlist(
        self,
        db: AsyncSession,
        playlist_id: UUID,
        viewer: User,
    ) -> PlaylistDetailResponse:
        """재생목록 상세를 조회합니다 (Playlist detail with videos)."""
        return self.build_detail(await self._get_visible(db, playlist_id, viewer))

    async def add_video(
        self,
        db: AsyncSession,
        playlist_id: UUID,
        video_id: UUID,
        owner: User,
    ) -> PlaylistDetailResponse:
        """재생목록에 동영상을 추가합니다.

        Append a video to an owned playlist.

        Raises:
            NotFoundError: 재생목록 또는 동영상이 없을 때 (Playlist or video missing)
            ForbiddenError: 소유자가 아닐 때 (Not the owner)
            DuplicateError: 이미 추가된 동영상 (Video already in the playlist)
        """
        playlist: Playlist = await self._get_owned(db, playlist_id, owner)
        if await video_repository.get_visible(db, video_id, owner.id) is None:
            raise NotFoundError("Video not found")

        await playlist_repository.add_video(db, playlist.id, video_id)
        return self.build_detail(await self._get_owned(db, playlist.id, owner))

    async def remove_video(
        self,
        db: AsyncSession,
        playlist_id: UUID,
        video_id: UUID,
        owner: User,
    ) -> PlaylistDetailResponse:
        """재생목록에서 동영상을 제거합니다.

        Raises:
            NotFoundError: 재생목록에 없는 동영상 (Video not in the playlist)
        """
        playlist: Playlist = await self._get_owned(db, playlist_id, owner)
        removed: bool = await playlist_repository.remove_video(db, playlist.id, video_id)
        if not removed:
            raise NotFoundError("Video not in playlist")
        return self.build_detail(await self._get_owned(db, playlist.id, owner))

    async def update_playlist(
        self,
        db: AsyncSession,
        playlist_id: UUID,
        owner: User,
        data: PlaylistUpdate,
    ) -> PlaylistDetailResponse:
        """재생목록 이름/설명/공개 여부를 수정합니다 (Owner-only partial update)."""
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        if not update_data:
            raise BadRequestError("At least one field is required")
        if "name" in update_data:
            if update_data["name"] is None:
                raise BadRequestError("Playlist name cannot be empty")
            if await playlist_repository.name_taken(
                db, owner.id, update_data["name"], exclude_playlist_id=playlist_id
            ):
                raise DuplicateError("Playlist with this name already exists")
        if update_data.get("is_private", False) is None:
            raise BadRequestError("is_private cannot be null")

        playlist: Playlist = await self._get_owned(db, playlist_id, owner)
        try:
            async with db.begin_nested():
                await playlist_repository.update(db, playlist, update_data)
        except IntegrityError as exc:
            raise DuplicateError("Playlist with this name already exists") from exc
        return self.build_detail(await self._get_owned(db, playlist.id, owner))

    async def delete_playlist(
        self,
        db: AsyncSession,
        playlist_id: UUID,
        owner: User,
    ) -> None:
        """재생목록을 삭제합니다 (Owner-only delete)."""
        playlist: Playlist = await self._get_owned(db, playlist_id, owner)
        await playlist_repository.delete(db, playlist.id)


# 싱글턴 인스턴스 — Singleton instance
playlist_service: PlaylistService = PlaylistService()
