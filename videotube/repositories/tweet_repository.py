"""트윗 레포지토리 (Tweet Repository)."""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.tweet import Tweet
from videotube.repositories.base import BaseRepository


class TweetRepository(BaseRepository[Tweet]):
    """트윗 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the tweets table.
    """

    def __init__(self) -> None:
        super().__init__(Tweet)

    async def get_by_owner(
        self,
        db: AsyncSession,
        owner_id: UUID,
    ) -> list[Tweet]:
        """작성자의 트윗을 최신순으로 조회합니다 (Tweets by owner, newest first)."""
        query: Select = (
            select(Tweet)
            .where(Tweet.owner_id == owner_id)
            .order_by(Tweet.created_at.desc(), Tweet.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
tweet_repository: TweetRepository = TweetRepository()
