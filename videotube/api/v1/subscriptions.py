"""구독 라우터 — 채널 구독 토글 및 구독 목록 API.

Subscription Router — Channel subscription toggle and listings.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.api.deps import get_current_user
from videotube.database import get_db
from videotube.models.user import User
from videotube.schemas.common import ApiResponse
from videotube.schemas.engagement import SubscriptionToggleResponse
from videotube.schemas.user import SubscriptionEntry
from videotube.services.subscription_service import subscription_service

router: APIRouter = APIRouter()


@router.post("/c/{channel_id}", response_model=ApiResponse[SubscriptionToggleResponse])
async def toggle_subscription(
    channel_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[SubscriptionToggleResponse]:
    """채널 구독 토글 (Toggle subscription to a channel)."""
    result: SubscriptionToggleResponse = await subscription_service.toggle_subscription(
        db, current_user, channel_id
    )
    await db.commit()
    message: str = "Subscribed" if result.is_subscribed else "Unsubscribed"
    return ApiResponse.ok(result, message)


@router.get("/c/{channel_id}", response_model=ApiResponse[list[SubscriptionEntry]])
async def get_channel_subscribers(
    channel_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[list[SubscriptionEntry]]:
    """채널 구독자 목록 (Subscribers of a channel)."""
    subscribers: list[SubscriptionEntry] = await subscription_service.get_subscribers(
        db, channel_id
    )
    return ApiResponse.ok(subscribers, "Subscribers fetched successfully")


@router.get("/u/{subscriber_id}", response_model=ApiResponse[list[SubscriptionEntry]])
async def get_subscribed_channels(
    subscriber_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[list[SubscriptionEntry]]:
    """사용자가 구독한 채널 목록 (Channels a user subscribes to)."""
    channels: list[SubscriptionEntry] = await subscription_service.get_subscribed_channels(
        db, subscriber_id
    )
    return ApiResponse.ok(channels, "Subscribed channels fetched successfully")
