"""사용자 및 시청 기록 SQLAlchemy ORM 모델 정의.

User and watch history SQLAlchemy ORM model definitions.

Tables:
    - users: 사용자 계정 (User accounts, also the channel identity)
    - watch_history: 시청 기록 (Ordered watch history entries per user)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from videotube.database import Base


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    A user is also a channel: videos, tweets and playlists are owned by users,
    and subscriptions target users.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        username: 로그인 아이디 (Login username, globally unique, lower-cased)
        email: 이메일 (Email address, globally unique, lower-cased)
        full_name: 표시 이름 (Display name)
        avatar: 아바타 이미지 URL (Avatar URL, optional)
        cover_image: 커버 이미지 URL (Cover image URL, optional)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        refresh_token: 현재 유효한 리프레시 토큰 (The single live refresh token, nullable)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        videos: 업로드한 동영상 (Uploaded videos)
        watch_history: 시청 기록 (Watch history entries, append order)
    """

    __tablename__ = "users"

    # 사용자 고유 식별자 — User unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 아이디 — 소문자로 저장 (stored lower-cased)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    # 이메일 — 소문자로 저장 (stored lower-cased)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 표시 이름 — Display name
    full_name: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    # 아바타/커버 이미지 URL — 미디어 저장소는 외부 (media lives in an external store)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # 리프레시 토큰 — 로그인/갱신마다 덮어쓰고 로그아웃 시 NULL
    # Overwritten on every login/refresh, NULL after logout
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    videos = relationship("Video", back_populates="owner", cascade="all, delete-orphan")
    watch_history = relationship(
        "WatchHistory",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="WatchHistory.id",
    )


class WatchHistory(Base):
    """시청 기록 모델 — 사용자별 시청한 동영상 목록.

    Watch history entry. The integer primary key preserves append order;
    the same video may appear more than once.

    Attributes:
        id: 자동 증가 키 (Auto-increment key, defines order)
        user_id: 시청한 사용자 FK (Viewer foreign key)
        video_id: 시청한 동영상 FK (Watched video foreign key)
        watched_at: 시청 일시 (When the video was watched)
    """

    __tablename__ = "watch_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    video_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("videos.id", ondelete="CASCADE"), nullable=False)
    watched_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    user = relationship("User", back_populates="watch_history")
    video = relationship("Video")
