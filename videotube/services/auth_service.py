"""인증 서비스 — 회원가입, 로그인, 토큰 검증/갱신, 로그아웃 비즈니스 로직.

Auth Service — Business logic for the session lifecycle.

Each user has at most one live refresh token, stored on the user row.
Login overwrites it, refresh swaps it with a conditional UPDATE, and logout
or a password change clears it. Any refresh token that no longer matches the
stored value is rejected, so a refresh token works exactly once.
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from videotube.models.user import User
from videotube.repositories.auth_repository import auth_repository
from videotube.repositories.user_repository import user_repository
from videotube.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    TokenResponse,
)
from videotube.schemas.user import UserResponse
from videotube.utils.exceptions import (
    BadRequestError,
    DuplicateError,
    ExpiredOrReusedRefreshTokenError,
    InternalError,
    InvalidAccessTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    UnauthorizedError,
)
from videotube.utils.jwt import TokenError, TokenKind, TokenService, token_service
from videotube.utils.password import burn_password_check, hash_password, verify_password


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.

    Attributes:
        tokens: 토큰 발급/검증 서비스 (Token issuing/verifying service)
    """

    def __init__(self, tokens: TokenService) -> None:
        self.tokens: TokenService = tokens

    def _issue_pair(self, user: User) -> TokenResponse:
        """액세스/리프레시 토큰 쌍을 발급합니다 (Issue a fresh token pair)."""
        return TokenResponse(
            access_token=self.tokens.issue_access_token(user),
            refresh_token=self.tokens.issue_refresh_token(user),
        )

    async def register(
        self,
        db: AsyncSession,
        data: RegisterRequest,
    ) -> UserResponse:
        """새 사용자를 등록합니다.

        Register a new user. Username and email are stored lower-cased.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 요청 데이터 (Registration request data)

        Returns:
            UserResponse: 생성된 사용자의 공개 정보 (Public view of the created user)

        Raises:
            DuplicateError: 사용자명 또는 이메일이 이미 존재할 때
                            (Username or email already exists)
            InternalError: 생성된 사용자를 다시 읽을 수 없을 때
                           (Created row could not be read back)
        """
        username: str = data.username.lower()
        email: str = data.email.lower()

        if await user_repository.username_or_email_taken(db, username, email):
            raise DuplicateError("User with email or username already exists")

        password_hash: str = await run_in_threadpool(hash_password, data.password)
        try:
            async with db.begin_nested():
                user: User = await user_repository.create(
                    db,
                    {
                        "username": username,
                        "email": email,
                        "full_name": data.full_name,
                        "password_hash": password_hash,
                        "avatar": data.avatar,
                        "cover_image": data.cover_image,
                    },
                )
        except IntegrityError as exc:
            # 동시 가입 경합 — 고유 제약이 최종 판정 (Unique constraints decide the race)
            raise DuplicateError("User with email or username already exists") from exc

        created: User | None = await auth_repository.get_user_by_id(db, user.id)
        if created is None:
            raise InternalError("Something went wrong while registering the user")
        return UserResponse.model_validate(created)

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> LoginResponse:
        """로그인을 처리합니다.

        Verify credentials, issue a token pair and store the refresh token.
        An unknown user still costs one bcrypt comparison.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 로그인 요청 데이터 (Login request data)

        Returns:
            LoginResponse: 토큰과 사용자 정보 (Tokens and public user)

        Raises:
            BadRequestError: 사용자명과 이메일이 모두 없을 때 (Neither identifier given)
            InvalidCredentialsError: 잘못된 인증 정보일 때 (Invalid credentials)
        """
        if not (data.username or "").strip() and not (data.email or "").strip():
            raise BadRequestError("Username or email is required")

        user: User | None = await auth_repository.get_user_by_login(
            db, username=data.username, email=data.email
        )
        if user is None:
            await run_in_threadpool(burn_password_check, data.password)
            raise InvalidCredentialsError()

        matches: bool = await run_in_threadpool(
            verify_password, data.password, user.password_hash
        )
        if not matches:
            raise InvalidCredentialsError()

        pair: TokenResponse = self._issue_pair(user)
        await auth_repository.store_refresh_token(db, user.id, pair.refresh_token)

        return LoginResponse(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            user=UserResponse.model_validate(user),
        )

    async def authenticate(
        self,
        db: AsyncSession,
        token: str | None,
    ) -> User:
        """액세스 토큰으로 사용자를 인증합니다.

        Resolve the user an access token was issued for.

        Raises:
            UnauthorizedError: 토큰이 없을 때 (No token presented)
            InvalidAccessTokenError: 검증 실패 또는 사용자 없음
                                     (Verification failed or user missing)
        """
        if not token:
            raise UnauthorizedError()

        try:
            payload: dict = self.tokens.verify(token, TokenKind.ACCESS)
            user_id: UUID = UUID(str(payload["sub"]))
        except (TokenError, ValueError) as exc:
            raise InvalidAccessTokenError() from exc

        user: User | None = await auth_repository.get_user_by_id(db, user_id)
        if user is None:
            raise InvalidAccessTokenError()
        return user

    async def refresh(
        self,
        db: AsyncSession,
        presented: str | None,
    ) -> TokenResponse:
        """리프레시 토큰을 교체하고 새 토큰 쌍을 발급합니다.

        Rotate the refresh token. The swap is a single conditional UPDATE, so
        of two concurrent refreshes with the same token only one succeeds.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            presented: 클라이언트가 제시한 리프레시 토큰 (Presented refresh token)

        Returns:
            TokenResponse: 새 토큰 쌍 (New token pair)

        Raises:
            UnauthorizedError: 토큰이 없을 때 (No token presented)
            InvalidRefreshTokenError: 서명/만료 오류 또는 사용자 없음
                                      (Bad signature/expiry or user missing)
            ExpiredOrReusedRefreshTokenError: 이미 사용되었거나 폐기된 토큰
                                              (Token was rotated out or revoked)
        """
        if not presented:
            raise UnauthorizedError()

        try:
            payload: dict = self.tokens.verify(presented, TokenKind.REFRESH)
            user_id: UUID = UUID(str(payload["sub"]))
        except (TokenError, ValueError) as exc:
            raise InvalidRefreshTokenError() from exc

        user: User | None = await auth_repository.get_user_by_id(db, user_id)
        if user is None:
            raise InvalidRefreshTokenError()
        if user.refresh_token != presented:
            raise ExpiredOrReusedRefreshTokenError()

        pair: TokenResponse = self._issue_pair(user)
        rotated: bool = await auth_repository.rotate_refresh_token(
            db, user.id, presented, pair.refresh_token
        )
        if not rotated:
            raise ExpiredOrReusedRefreshTokenError()
        return pair

    async def logout(self, db: AsyncSession, user: User) -> None:
        """저장된 리프레시 토큰을 폐기합니다 (Revoke the stored refresh token)."""
        await auth_repository.store_refresh_token(db, user.id, None)

    async def change_password(
        self,
        db: AsyncSession,
        user: User,
        data: ChangePasswordRequest,
    ) -> None:
        """비밀번호를 변경하고 현재 세션의 리프레시 토큰을 폐기합니다.

        Change the password and revoke the live refresh token.

        Raises:
            InvalidCredentialsError: 기존 비밀번호 불일치 (Old password mismatch)
        """
        matches: bool = await run_in_threadpool(
            verify_password, data.old_password, user.password_hash
        )
        if not matches:
            raise InvalidCredentialsError("Invalid old password")

        user.password_hash = await run_in_threadpool(hash_password, data.new_password)
        await db.flush()
        await auth_repository.store_refresh_token(db, user.id, None)


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService(token_service)
