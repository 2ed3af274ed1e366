"""재생목록 Pydantic 요청/응답 스키마 정의.

Playlist Pydantic request/response schema definitions.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints

from videotube.schemas.video import VideoWithOwnerResponse

PlaylistName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]


class PlaylistCreate(BaseModel):
    """재생목록 생성 요청 스키마.

    Playlist creation request. Names are unique per owner.

    Attributes:
        name: 이름 (Name)
        description: 설명 (Description, up to 300 chars)
        is_private: 비공개 여부 (Private flag, default False)
    """

    name: PlaylistName
    description: str | None = Field(None, max_length=300)
    is_private: bool = False


class PlaylistUpdate(BaseModel):
    """재생목록 수정 요청 스키마 (부분 업데이트)."""

    name: PlaylistName | None = None
    description: str | None = Field(None, max_length=300)
    is_private: bool | None = None


class PlaylistResponse(BaseModel):
    """재생목록 응답 스키마 (Playlist summary)."""

    id: UUID
    name: str
    description: str | None = None
    owner_id: UUID
    is_private: bool
    video_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PlaylistDetailResponse(PlaylistResponse):
    """재생목록 상세 — 추가 순서대로 정렬된 동영상 포함.

    Playlist with its videos in insertion order.
    """

    videos: list[VideoWithOwnerResponse] = Field(default_factory=list)
