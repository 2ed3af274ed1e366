"""구독 서비스 — 채널 구독 토글, 구독자/구독 채널 목록.

Subscription Service — Channel subscription toggle and both directions of the
subscription listing. A channel is a user.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.toggle import ToggleKind
from videotube.models.user import User
from videotube.repositories.toggle_repository import toggle_repository
from videotube.repositories.user_repository import user_repository
from videotube.schemas.engagement import SubscriptionToggleResponse
from videotube.schemas.user import SubscriptionEntry, UserPublic
from videotube.services.toggle_service import ToggleResult, toggle_service
from videotube.utils.exceptions import BadRequestError, NotFoundError


class SubscriptionService:
    """구독 관련 비즈니스 로직을 처리하는 서비스.

    Service handling subscription business logic.
    """

    async def toggle_subscription(
        self,
        db: AsyncSession,
        subscriber: User,
        channel_id: UUID,
    ) -> SubscriptionToggleResponse:
        """채널 구독을 토글합니다.

        Toggle the caller's subscription to a channel.

        Raises:
            BadRequestError: 자기 자신을 구독하려 할 때 (Subscribing to oneself)
            TargetNotFoundError: 채널이 없을 때 (Channel not found)
        """
        if channel_id == subscriber.id:
            raise BadRequestError("You cannot subscribe to your own channel")

        result: ToggleResult = await toggle_service.toggle(
            db, subscriber.id, channel_id, ToggleKind.CHANNEL
        )
        return SubscriptionToggleResponse(is_subscribed=result.is_on)

    async def get_subscribers(
        self,
        db: AsyncSession,
        channel_id: UUID,
    ) -> list[SubscriptionEntry]:
        """채널의 구독자 목록을 조회합니다 (Subscribers of a channel)."""
        if await user_repository.get_by_id(db, channel_id) is None:
            raise NotFoundError("Channel not found")
        rows = await toggle_repository.get_subscribers(db, channel_id)
        return [
            SubscriptionEntry(
                user=UserPublic.model_validate(user),
                subscribed_at=relation.created_at,
            )
            for relation, user in rows
        ]

    async def get_subscribed_channels(
        self,
        db: AsyncSession,
        subscriber_id: UUID,
    ) -> list[SubscriptionEntry]:
        """사용자가 구독한 채널 목록을 조회합니다 (Channels a user follows)."""
        if await user_repository.get_by_id(db, subscriber_id) is None:
            raise NotFoundError("User not found")
        rows = await toggle_repository.get_subscribed_channels(db, subscriber_id)
        return [
            SubscriptionEntry(
                user=UserPublic.model_validate(channel),
                subscribed_at=relation.created_at,
            )
            for relation, channel in rows
        ]


# 싱글턴 인스턴스 — Singleton instance
subscription_service: SubscriptionService = SubscriptionService()
