"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers registration, login, token refresh and password change.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel

from videotube.schemas.user import EmailAddress, NonBlankStr, UserResponse

# bcrypt가 처리할 수 있는 최대 바이트 수 (bcrypt rejects longer secrets)
PASSWORD_MAX_BYTES: int = 72


def _check_password(value: str) -> str:
    """비밀번호를 변경하지 않고 검증합니다.

    Validate a password without altering it. Surrounding whitespace is part
    of the secret, so nothing is stripped.
    """
    if not value.strip():
        raise ValueError("Password cannot be blank")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password cannot be longer than {PASSWORD_MAX_BYTES} bytes")
    return value


# 원문 그대로 해싱/비교되는 비밀번호 (Password hashed and compared verbatim)
PasswordStr = Annotated[str, AfterValidator(_check_password)]


class RegisterRequest(BaseModel):
    """회원가입 요청 스키마.

    Registration request schema. Username and email are stored lower-cased.

    Attributes:
        username: 사용자 아이디 (Desired login username, globally unique)
        email: 이메일 (Email address, globally unique)
        full_name: 표시 이름 (Full display name)
        password: 비밀번호 (Plain text, will be bcrypt-hashed on server)
        avatar: 아바타 URL (Avatar URL, optional)
        cover_image: 커버 이미지 URL (Cover image URL, optional)
    """

    username: NonBlankStr  # 사용자 아이디 — 전역 고유 (Login ID, globally unique)
    email: EmailAddress  # 이메일 — 전역 고유 (Email, globally unique)
    full_name: NonBlankStr  # 표시 이름 (Display name)
    password: PasswordStr  # 비밀번호 — 평문, 서버에서 bcrypt 해싱 (Server hashes with bcrypt)
    avatar: str | None = None
    cover_image: str | None = None


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema. Either ``username`` or ``email`` identifies the user.

    Attributes:
        username: 사용자 아이디 (Login username, optional)
        email: 이메일 (Email, optional)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    username: str | None = None
    email: str | None = None
    password: PasswordStr


class RefreshRequest(BaseModel):
    """토큰 갱신 요청 스키마.

    Token refresh request. The body field is used only when the
    ``refreshToken`` cookie is absent.
    """

    refresh_token: str | None = None


class ChangePasswordRequest(BaseModel):
    """비밀번호 변경 요청 스키마 (Password change request)."""

    old_password: PasswordStr
    new_password: PasswordStr


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Token pair returned after a successful refresh.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived, single-use refresh token)
    """

    access_token: str  # 액세스 토큰 — 기본 15분 (Access token, default TTL: 15min)
    refresh_token: str  # 리프레시 토큰 — 기본 10일 (Refresh token, default TTL: 10 days)


class LoginResponse(TokenResponse):
    """로그인 응답 스키마 — 토큰과 공개 사용자 정보 (Tokens plus public user)."""

    user: UserResponse
