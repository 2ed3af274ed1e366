"""재생목록 모델 — 재생목록과 재생목록-동영상 매핑.

Playlist models — Playlists and the ordered playlist-video association.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from videotube.database import Base


class Playlist(Base):
    """재생목록 테이블.

    Playlist owned by a user. Names are unique per owner.

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        name: 재생목록 이름 (Name, unique per owner)
        description: 설명 (Description, up to 300 chars)
        owner_id: 소유자 FK (Owner)
        is_private: 비공개 여부 (Private playlists are visible to their owner only)
    """

    __tablename__ = "playlists"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(300), nullable=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    is_private: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false", nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_playlist_owner_name"),
    )

    # Relationships
    owner = relationship("User")
    entries = relationship(
        "PlaylistVideo",
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="PlaylistVideo.id",
    )


class PlaylistVideo(Base):
    """재생목록-동영상 매핑 테이블.

    Playlist-video association. The integer key keeps insertion order.
    """

    __tablename__ = "playlist_videos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    playlist_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        UniqueConstraint("playlist_id", "video_id", name="uq_playlist_video"),
    )

    # Relationships
    playlist = relationship("Playlist", back_populates="entries")
    video = relationship("Video")
