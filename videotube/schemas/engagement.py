"""좋아요/구독 토글 응답 스키마.

Like and subscription toggle response schemas.
"""

from pydantic import BaseModel


class LikeToggleResponse(BaseModel):
    """좋아요 토글 결과 (Like state after the toggle)."""

    liked: bool


class SubscriptionToggleResponse(BaseModel):
    """구독 토글 결과 (Subscription state after the toggle)."""

    is_subscribed: bool
