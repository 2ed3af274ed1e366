"""트윗 라우터 (Tweet Router) — 채널 커뮤니티 게시글 API."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.api.deps import get_current_user
from videotube.database import get_db
from videotube.models.user import User
from videotube.schemas.common import ApiResponse
from videotube.schemas.tweet import TweetCreate, TweetResponse, TweetUpdate
from videotube.services.tweet_service import tweet_service

router: APIRouter = APIRouter()


@router.post("", response_model=ApiResponse[TweetResponse], status_code=201)
async def create_tweet(
    data: TweetCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[TweetResponse]:
    """트윗 작성 (Create a tweet)."""
    tweet: TweetResponse = await tweet_service.create_tweet(db, current_user, data)
    await db.commit()
    return ApiResponse.ok(tweet, "Tweet created successfully", status_code=201)


@router.get("/user/{user_id}", response_model=ApiResponse[list[TweetResponse]])
async def get_user_tweets(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[list[TweetResponse]]:
    """사용자 트윗 목록 (A user's tweets, newest first)."""
    tweets: list[TweetResponse] = await tweet_service.list_user_tweets(db, user_id)
    return ApiResponse.ok(tweets, "Tweets fetched successfully")


@router.patch("/{tweet_id}", response_model=ApiResponse[TweetResponse])
async def update_tweet(
    tweet_id: UUID,
    data: TweetUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[TweetResponse]:
    tweet: TweetResponse = await tweet_service.update_tweet(db, tweet_id, current_user, data)
    await db.commit()
    return ApiResponse.ok(tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}", response_model=ApiResponse[dict])
async def delete_tweet(
    tweet_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[dict]:
    await tweet_service.delete_tweet(db, tweet_id, current_user)
    await db.commit()
    return ApiResponse.ok({}, "Tweet deleted successfully")
