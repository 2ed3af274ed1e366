"""FastAPI 의존성 주입 모듈 — 요청 인증.

FastAPI dependency injection module — Request authentication.

Authentication Flow:
    1. 쿠키 accessToken이 있으면 사용, 없으면 Authorization: Bearer <token> 헤더
       (Cookie ``accessToken`` first, then the ``Authorization: Bearer`` header)
    2. auth_service.authenticate()가 JWT를 검증하고 "sub"로 사용자를 조회
       (The token is verified and the user loaded by its "sub" claim)
    3. 인증된 사용자를 라우터에 명시적으로 전달
       (The authenticated user is handed to the router explicitly)

토큰이 없으면 401 Unauthorized, 검증 실패나 사용자 없음은 401 InvalidAccessToken.
Missing token → 401 Unauthorized; bad token or missing user → 401 InvalidAccessToken.
"""

from typing import Annotated

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.database import get_db
from videotube.models.user import User
from videotube.services.auth_service import auth_service

# HTTP Bearer 토큰 추출기 — 쿠키 인증을 허용하기 위해 auto_error=False
# (Extracts the bearer token; auto_error=False so cookie-only requests pass through)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)] = None,
    access_token: Annotated[str | None, Cookie(alias="accessToken")] = None,
) -> User:
    """쿠키 또는 Bearer 헤더의 액세스 토큰으로 현재 사용자를 반환합니다.

    Return the user the presented access token was issued for.

    Args:
        db: 비동기 DB 세션 (Async database session)
        credentials: Bearer 토큰 자격 증명 (Bearer credentials, optional)
        access_token: accessToken 쿠키 값 (Access token cookie, optional)

    Returns:
        User: 인증된 사용자 ORM 인스턴스 (Authenticated user ORM instance)

    Raises:
        UnauthorizedError: 토큰이 없을 때 (No token presented)
        InvalidAccessTokenError: 토큰이 유효하지 않거나 사용자 없음
                                 (Invalid token or user not found)
    """
    token: str | None = access_token
    if not token and credentials is not None:
        token = credentials.credentials
    return await auth_service.authenticate(db, token)
