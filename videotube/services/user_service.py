"""사용자 서비스 — 계정 수정, 채널 프로필, 시청 기록 비즈니스 로직.

User Service — Business logic for account updates, the channel profile
aggregate and watch history.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.user import User, WatchHistory
from videotube.repositories.user_repository import user_repository
from videotube.schemas.user import (
    ChannelProfileResponse,
    UpdateAccountRequest,
    UserResponse,
)
from videotube.schemas.video import WatchHistoryEntry
from videotube.utils.exceptions import BadRequestError, DuplicateError, NotFoundError


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user account and channel business logic.
    """

    async def update_account(
        self,
        db: AsyncSession,
        user: User,
        data: UpdateAccountRequest,
    ) -> UserResponse:
        """계정 정보를 수정합니다.

        Apply a partial account update. A changed email must stay unique.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 현재 사용자 (Current user)
            data: 수정 요청 데이터 (Update request data)

        Returns:
            UserResponse: 수정된 사용자 (Updated user)

        Raises:
            BadRequestError: 변경할 필드가 없을 때 (Empty update)
            DuplicateError: 이메일이 이미 사용 중일 때 (Email already taken)
        """
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        if not update_data:
            raise BadRequestError("At least one field is required")

        if "email" in update_data:
            if update_data["email"] is None:
                raise BadRequestError("Email cannot be empty")
            taken: bool = await user_repository.username_or_email_taken(
                db, user.username, update_data["email"], exclude_user_id=user.id
            )
            if taken:
                raise DuplicateError("Email already in use")
        if "full_name" in update_data and update_data["full_name"] is None:
            raise BadRequestError("Full name cannot be empty")

        try:
            async with db.begin_nested():
                updated: User = await user_repository.update(db, user, update_data)
        except IntegrityError as exc:
            # 동시 변경 경합 — 고유 제약이 최종 판정 (Unique constraint decides the race)
            raise DuplicateError("Email already in use") from exc
        return UserResponse.model_validate(updated)

    async def get_channel_profile(
        self,
        db: AsyncSession,
        username: str,
        viewer: User,
    ) -> ChannelProfileResponse:
        """채널 프로필을 구독 집계와 함께 조회합니다.

        Load a channel profile with subscriber counts and the caller's
        subscription flag.

        Raises:
            NotFoundError: 존재하지 않는 사용자명 (Unknown username)
        """
        if not username.strip():
            raise BadRequestError("Username is missing")

        row = await user_repository.get_channel_profile(db, username, viewer.id)
        if row is None:
            raise NotFoundError("Channel does not exist")

        channel, subscribers, subscribed_to, is_subscribed = row
        return ChannelProfileResponse(
            id=channel.id,
            username=channel.username,
            email=channel.email,
            full_name=channel.full_name,
            avatar=channel.avatar,
            cover_image=channel.cover_image,
            subscribers_count=subscribers,
            channels_subscribed_to_count=subscribed_to,
            is_subscribed=is_subscribed,
        )

    async def get_watch_history(
        self,
        db: AsyncSession,
        user: User,
    ) -> list[WatchHistoryEntry]:
        """시청 기록을 추가 순서대로 조회합니다 (Watch history in append order)."""
        entries: list[WatchHistory] = await user_repository.get_watch_history(db, user.id)
        return [WatchHistoryEntry.model_validate(entry) for entry in entries]


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
