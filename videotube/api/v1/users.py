"""사용자 라우터 — 회원가입, 로그인, 토큰 갱신, 로그아웃, 계정 및 채널 API.

User Router — Registration, login, token refresh, logout, account and channel
endpoints. Login and refresh set the ``accessToken`` / ``refreshToken``
http-only cookies; logout clears them.
"""

from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.api.deps import get_current_user
from videotube.config import settings
from videotube.database import get_db
from videotube.models.user import User
from videotube.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from videotube.schemas.common import ApiResponse
from videotube.schemas.user import ChannelProfileResponse, UpdateAccountRequest, UserResponse
from videotube.schemas.video import WatchHistoryEntry
from videotube.services.auth_service import auth_service
from videotube.services.user_service import user_service

router: APIRouter = APIRouter()

ACCESS_COOKIE: str = "accessToken"
REFRESH_COOKIE: str = "refreshToken"


def _set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    """인증 쿠키를 설정합니다 (Set both auth cookies, http-only)."""
    for key, value in ((ACCESS_COOKIE, access_token), (REFRESH_COOKIE, refresh_token)):
        response.set_cookie(
            key,
            value,
            httponly=True,
            secure=settings.COOKIE_SECURE,
            samesite="lax",
        )


def _clear_auth_cookies(response: Response) -> None:
    for key in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(
            key,
            httponly=True,
            secure=settings.COOKIE_SECURE,
            samesite="lax",
        )


@router.post("/register", response_model=ApiResponse[UserResponse], status_code=201)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[UserResponse]:
    """회원가입 — 새 사용자 생성.

    Register a new user.

    Args:
        data: 회원가입 요청 데이터 (Registration request data)
        db: 비동기 데이터베이스 세션 (Async database session)

    Returns:
        ApiResponse[UserResponse]: 생성된 사용자 (Created user)
    """
    user: UserResponse = await auth_service.register(db, data)
    await db.commit()
    return ApiResponse.ok(user, "User registered successfully", status_code=201)


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    data: LoginRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[LoginResponse]:
    """로그인 — 토큰 쌍 발급 및 쿠키 설정.

    Log in with username or email, returning tokens and setting cookies.
    """
    result: LoginResponse = await auth_service.login(db, data)
    await db.commit()
    _set_auth_cookies(response, result.access_token, result.refresh_token)
    return ApiResponse.ok(result, "User logged in successfully")


@router.post("/logout", response_model=ApiResponse[dict])
async def logout(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[dict]:
    """로그아웃 — 리프레시 토큰 폐기 및 쿠키 삭제.

    Revoke the caller's refresh token and clear both cookies.
    """
    await auth_service.logout(db, current_user)
    await db.commit()
    _clear_auth_cookies(response)
    return ApiResponse.ok({}, "User logged out")


@router.post("/refresh-token", response_model=ApiResponse[TokenResponse])
async def refresh_token(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    data: RefreshRequest | None = None,
    cookie_token: Annotated[str | None, Cookie(alias=REFRESH_COOKIE)] = None,
) -> ApiResponse[TokenResponse]:
    """토큰 갱신 — 리프레시 토큰 교체 후 새 토큰 쌍 발급.

    Rotate the refresh token. The cookie takes precedence over the body.
    """
    presented: str | None = cookie_token or (data.refresh_token if data else None)
    pair: TokenResponse = await auth_service.refresh(db, presented)
    await db.commit()
    _set_auth_cookies(response, pair.access_token, pair.refresh_token)
    return ApiResponse.ok(pair, "Access token refreshed")


@router.post("/change-password", response_model=ApiResponse[dict])
async def change_password(
    data: ChangePasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[dict]:
    """비밀번호 변경 — 기존 리프레시 토큰도 폐기.

    Change the caller's password and revoke the live refresh token.
    """
    await auth_service.change_password(db, current_user, data)
    await db.commit()
    return ApiResponse.ok({}, "Password changed successfully")


@router.get("/current-user", response_model=ApiResponse[UserResponse])
async def get_current_user_profile(
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[UserResponse]:
    """현재 사용자 조회 (Current user)."""
    return ApiResponse.ok(
        UserResponse.model_validate(current_user), "User fetched successfully"
    )


@router.patch("/update-account", response_model=ApiResponse[UserResponse])
async def update_account(
    data: UpdateAccountRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[UserResponse]:
    """계정 정보 수정 (Update full name, email, avatar or cover image)."""
    user: UserResponse = await user_service.update_account(db, current_user, data)
    await db.commit()
    return ApiResponse.ok(user, "Account details updated successfully")


@router.get("/c/{username}", response_model=ApiResponse[ChannelProfileResponse])
async def get_channel_profile(
    username: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[ChannelProfileResponse]:
    """채널 프로필 조회 — 구독자 수, 구독 채널 수, 구독 여부 포함.

    Channel profile with subscriber counts and the caller's subscription flag.
    """
    profile: ChannelProfileResponse = await user_service.get_channel_profile(
        db, username, current_user
    )
    return ApiResponse.ok(profile, "User channel fetched successfully")


@router.get("/history", response_model=ApiResponse[list[WatchHistoryEntry]])
async def get_watch_history(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> ApiResponse[list[WatchHistoryEntry]]:
    """시청 기록 조회 (Watch history in append order)."""
    history: list[WatchHistoryEntry] = await user_service.get_watch_history(db, current_user)
    return ApiResponse.ok(history, "Watch history fetched successfully")
