"""사용자 및 채널 관련 Pydantic 요청/응답 스키마 정의.

User and channel Pydantic request/response schema definitions.
Covers the public user view, account updates, the channel profile with its
subscription counts and subscriber listings.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, StringConstraints

# 공백 제거 후 비어 있으면 안 되는 문자열 (Non-blank string after trimming)
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
# 소문자 이메일 주소 (Lower-cased email address)
EmailAddress = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_lower=True, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"),
]


class UserPublic(BaseModel):
    """다른 리소스에 포함되는 최소 사용자 정보.

    Minimal public user view embedded in videos, comments and subscriber lists.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    full_name: str
    avatar: str | None = None


class UserResponse(BaseModel):
    """사용자 응답 스키마 — 비밀번호 해시와 리프레시 토큰은 절대 포함하지 않음.

    Public user response. Never carries the password hash or refresh token.

    Attributes:
        id: 사용자 UUID (User UUID)
        username: 로그인 아이디 (Login username)
        email: 이메일 (Email)
        full_name: 표시 이름 (Display name)
        avatar: 아바타 URL (Avatar URL)
        cover_image: 커버 이미지 URL (Cover image URL)
        created_at: 가입 일시 (Registration timestamp)
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    full_name: str
    avatar: str | None = None
    cover_image: str | None = None
    created_at: datetime | None = None


class UpdateAccountRequest(BaseModel):
    """계정 정보 수정 요청 스키마 (부분 업데이트).

    Partial account update. Only fields present in the body are applied.
    """

    full_name: NonBlankStr | None = None
    email: EmailAddress | None = None
    avatar: str | None = None
    cover_image: str | None = None


class ChannelProfileResponse(BaseModel):
    """채널 프로필 응답 스키마.

    Channel profile with subscription aggregates.

    Attributes:
        subscribers_count: 구독자 수 (Number of subscribers)
        channels_subscribed_to_count: 이 채널이 구독한 채널 수
                                      (Number of channels this user follows)
        is_subscribed: 요청자의 구독 여부 (Whether the caller subscribes)
    """

    id: UUID
    username: str
    email: str
    full_name: str
    avatar: str | None = None
    cover_image: str | None = None
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool


class SubscriptionEntry(BaseModel):
    """구독 관계 한 건 — 상대 사용자와 구독 일시.

    One subscription edge: the user on the other side and when it was made.
    """

    user: UserPublic
    subscribed_at: datetime
