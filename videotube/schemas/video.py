"""동영상 및 댓글 Pydantic 요청/응답 스키마 정의.

Video and comment Pydantic request/response schema definitions.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from videotube.schemas.user import NonBlankStr, UserPublic

# 댓글/트윗 본문 — 1~3000자 (Comment and tweet body, 1-3000 chars)
ContentStr = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=3000)
]


# === 동영상 (Video) 스키마 ===

class VideoCreate(BaseModel):
    """동영상 게시 요청 스키마.

    Video publish request. Media lives in an external store; the client sends
    the URLs it got from the upload.

    Attributes:
        title: 제목 (Title)
        description: 설명 (Description)
        video_file: 동영상 파일 URL (Video file URL)
        thumbnail: 썸네일 URL (Thumbnail URL)
        duration: 재생 시간(초) (Duration in seconds)
        is_published: 공개 여부 (Published flag, default True)
    """

    title: NonBlankStr
    description: NonBlankStr
    video_file: NonBlankStr
    thumbnail: NonBlankStr
    duration: float = Field(0.0, ge=0)
    is_published: bool = True


class VideoUpdate(BaseModel):
    """동영상 수정 요청 스키마 (부분 업데이트)."""

    title: NonBlankStr | None = None
    description: NonBlankStr | None = None
    thumbnail: NonBlankStr | None = None


class VideoResponse(BaseModel):
    """동영상 응답 스키마 (Video response)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VideoWithOwnerResponse(VideoResponse):
    """업로더 정보를 포함한 동영상 응답 (Video with its owner's public fields)."""

    owner: UserPublic


class VideoDetailResponse(VideoWithOwnerResponse):
    """동영상 상세 응답 — 좋아요 수와 요청자의 좋아요 여부 포함.

    Video detail with like count and whether the caller liked it.
    """

    likes_count: int = 0
    is_liked: bool = False


class WatchHistoryEntry(BaseModel):
    """시청 기록 항목 (Watch history entry)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    watched_at: datetime | None = None
    video: VideoWithOwnerResponse


# === 댓글 (Comment) 스키마 ===

class CommentCreate(BaseModel):
    """댓글 작성 요청 스키마 (Comment creation request)."""

    content: ContentStr


class CommentUpdate(BaseModel):
    """댓글 수정 요청 스키마 (Comment update request)."""

    content: ContentStr


class CommentResponse(BaseModel):
    """댓글 응답 스키마.

    Comment with its author's public fields.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content: str
    video_id: UUID
    owner: UserPublic
    created_at: datetime | None = None
    updated_at: datetime | None = None
