"""트윗 Pydantic 요청/응답 스키마 (Tweet request/response schemas)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from videotube.schemas.video import ContentStr


class TweetCreate(BaseModel):
    """트윗 작성 요청 스키마."""

    content: ContentStr


class TweetUpdate(BaseModel):
    """트윗 수정 요청 스키마."""

    content: ContentStr


class TweetResponse(BaseModel):
    """트윗 응답 스키마."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content: str
    owner_id: UUID
    created_at: datetime | None = None
    updated_at: datetime | None = None
