"""트윗 서비스 (Tweet Service) — 채널 커뮤니티 게시글 CRUD."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.toggle import ToggleKind
from videotube.models.tweet import Tweet
from videotube.models.user import User
from videotube.repositories.toggle_repository import toggle_repository
from videotube.repositories.tweet_repository import tweet_repository
from videotube.repositories.user_repository import user_repository
from videotube.schemas.tweet import TweetCreate, TweetResponse, TweetUpdate
from videotube.utils.exceptions import ForbiddenError, NotFoundError


class TweetService:
    """트윗 관련 비즈니스 로직을 처리하는 서비스."""

    async def create_tweet(
        self,
        db: AsyncSession,
        owner: User,
        data: TweetCreate,
    ) -> TweetResponse:
        tweet: Tweet = await tweet_repository.create(
            db, {"owner_id": owner.id, "content": data.content}
        )
        return TweetResponse.model_validate(tweet)

    async def list_user_tweets(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[TweetResponse]:
        """사용자의 트윗을 최신순으로 조회합니다.

        Raises:
            NotFoundError: 사용자가 없을 때 (User not found)
        """
        if await user_repository.get_by_id(db, user_id) is None:
            raise NotFoundError("User not found")
        tweets: list[Tweet] = await tweet_repository.get_by_owner(db, user_id)
        return [TweetResponse.model_validate(t) for t in tweets]

    async def _get_owned(
        self,
        db: AsyncSession,
        tweet_id: UUID,
        owner: User,
    ) -> Tweet:
        tweet: Tweet | None = await tweet_repository.get_by_id(db, tweet_id)
        if tweet is None:
            raise NotFoundError("Tweet not found")
        if tweet.owner_id != owner.id:
            raise ForbiddenError("Only the author can modify this tweet")
        return tweet

    async def update_tweet(
        self,
        db: AsyncSession,
        tweet_id: UUID,
        owner: User,
        data: TweetUpdate,
    ) -> TweetResponse:
        tweet: Tweet = await self._get_owned(db, tweet_id, owner)
        tweet = await tweet_repository.update(db, tweet, {"content": data.content})
        return TweetResponse.model_validate(tweet)

    async def delete_tweet(
        self,
        db: AsyncSession,
        tweet_id: UUID,
        owner: User,
    ) -> None:
        tweet: Tweet = await self._get_owned(db, tweet_id, owner)
        await toggle_repository.remove_for_targets(db, [tweet.id], ToggleKind.TWEET)
        await tweet_repository.delete(db, tweet.id)


# 싱글턴 인스턴스 — Singleton instance
tweet_service: TweetService = TweetService()
