"""재생목록 레포지토리 — 재생목록 조회 및 동영상 항목 관리.

Playlist Repository — Playlist lookups and playlist-video entry management.
"""

from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from videotube.models.playlist import Playlist, PlaylistVideo
from videotube.models.video import Video
from videotube.repositories.base import BaseRepository
from videotube.utils.exceptions import DuplicateError


class PlaylistRepository(BaseRepository[Playlist]):
    """재생목록 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the playlists and
    playlist_videos tables.
    """

    def __init__(self) -> None:
        super().__init__(Playlist)

    async def get_with_videos(
        self,
        db: AsyncSession,
        playlist_id: UUID,
    ) -> Playlist | None:
        """재생목록을 동영상 항목과 함께 조회합니다.

        Load a playlist with its entries, each entry's video and that
        video's owner.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            playlist_id: 재생목록 ID (Playlist UUID)

        Returns:
            Playlist | None: 재생목록 또는 None (Playlist or None)
        """
        query: Select = (
            select(Playlist)
            .options(
                selectinload(Playlist.entries)
                .selectinload(PlaylistVideo.video)
                .selectinload(Video.owner)
            )
            .where(Playlist.id == playlist_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_owner(
        self,
        db: AsyncSession,
        owner_id: UUID,
        include_private: bool = False,
    ) -> list[Playlist]:
        """사용자의 재생목록 목록을 조회합니다.

        Retrieve a user's playlists in creation order. Private playlists are
        included only when ``include_private`` is set (the owner is asking).
        """
        query: Select = (
            select(Playlist)
            .options(selectinload(Playlist.entries))
            .where(Playlist.owner_id == owner_id)
            .order_by(Playlist.created_at, Playlist.id)
        )
        if not include_private:
            query = query.where(Playlist.is_private.is_(False))
        result = await db.execute(query)
        return list(result.scalars().all())

    async def name_taken(
        self,
        db: AsyncSession,
        owner_id: UUID,
        name: str,
        exclude_playlist_id: UUID | None = None,
    ) -> bool:
        """같은 소유자에게 같은 이름의 재생목록이 있는지 확인합니다.

        Check the per-owner name uniqueness before insert/rename.
        """
        query: Select = select(Playlist.id).where(
            Playlist.owner_id == owner_id,
            Playlist.name == name,
        )
        if exclude_playlist_id is not None:
            query = query.where(Playlist.id != exclude_playlist_id)
        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def add_video(
        self,
        db: AsyncSession,
        playlist_id: UUID,
        video_id: UUID,
    ) -> PlaylistVideo:
        """재생목록 끝에 동영상을 추가합니다.

        Append a video to a playlist inside a SAVEPOINT.

        Raises:
            DuplicateError: 이미 재생목록에 있는 동영상 (Video already in playlist)
        """
        entry: PlaylistVideo = PlaylistVideo(playlist_id=playlist_id, video_id=video_id)
        try:
            async with db.begin_nested():
                db.add(entry)
        except IntegrityError as exc:
            raise DuplicateError("Video already in playlist") from exc
        return entry

    async def remove_video(
        self,
        db: AsyncSession,
        playlist_id: UUID,
        video_id: UUID,
    ) -> bool:
        """재생목록에서 동영상을 제거합니다.

        Returns:
            bool: 제거 여부 (False if the video was not in the playlist)
        """
        stmt = (
            delete(PlaylistVideo)
            .where(
                PlaylistVideo.playlist_id == playlist_id,
                PlaylistVideo.video_id == video_id,
            )
            .execution_options(synchronize_session="fetch")
        )
        result = await db.execute(stmt)
        await db.flush()
        return result.rowcount > 0


# 싱글턴 인스턴스 — Singleton instance
playlist_repository: PlaylistRepository = PlaylistRepository()
