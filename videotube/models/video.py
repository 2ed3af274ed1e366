"""동영상 및 댓글 SQLAlchemy ORM 모델 정의.

Video and comment SQLAlchemy ORM model definitions.

Tables:
    - videos: 업로드된 동영상 (Published/unpublished videos)
    - comments: 동영상 댓글 (Comments on videos)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from videotube.database import Base


class Video(Base):
    """동영상 모델.

    Video model. File and thumbnail are URLs in the external media store.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        owner_id: 업로더 FK (Uploader foreign key)
        title: 제목 (Title)
        description: 설명 (Description)
        video_file: 동영상 파일 URL (Video file URL)
        thumbnail: 썸네일 URL (Thumbnail URL)
        duration: 재생 시간(초) (Duration in seconds)
        views: 조회수 (View count, incremented atomically)
        is_published: 공개 여부 (Published flag)
    """

    __tablename__ = "videos"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    video_file: Mapped[str] = mapped_column(String(1024), nullable=False)
    thumbnail: Mapped[str] = mapped_column(String(1024), nullable=False)
    duration: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    # 조회수 — UPDATE ... SET views = views + 1 로만 증가 (incremented in SQL only)
    views: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True, server_default="true", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    owner = relationship("User", back_populates="videos")
    comments = relationship("Comment", back_populates="video", cascade="all, delete-orphan")


class Comment(Base):
    """댓글 모델.

    Comment on a video.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        content: 댓글 내용 (Comment body, 1-3000 chars)
        video_id: 대상 동영상 FK (Parent video)
        owner_id: 작성자 FK (Author)
    """

    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    content: Mapped[str] = mapped_column(String(3000), nullable=False)
    video_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("videos.id", ondelete="CASCADE"), index=True, nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    video = relationship("Video", back_populates="comments")
    owner = relationship("User")
