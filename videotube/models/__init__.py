"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 사용자 및 시청 기록 (User and WatchHistory)
    video: 동영상 및 댓글 (Video and Comment)
    tweet: 트윗 (Tweet)
    playlist: 재생목록 (Playlist and PlaylistVideo)
    toggle: 좋아요/구독 토글 관계 (Like/subscription toggle relations)
"""

from videotube.models.user import User, WatchHistory
from videotube.models.video import Video, Comment
from videotube.models.tweet import Tweet
from videotube.models.playlist import Playlist, PlaylistVideo
from videotube.models.toggle import ToggleKind, ToggleRelation

__all__ = [
    "User", "WatchHistory",
    "Video", "Comment",
    "Tweet",
    "Playlist", "PlaylistVideo",
    "ToggleKind", "ToggleRelation",
]
