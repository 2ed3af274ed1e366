"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT token creation and verification utility module.
Issues and verifies the two token classes used by the session lifecycle.
Each class has its own signing secret and expiry, so a token of one class
never verifies as the other.

JWT Payload Structure:
    액세스 토큰 (Access token):
    {
        "sub": "user_uuid",         # 사용자 ID (User identifier)
        "username": "ada",          # 사용자명 (Username)
        "email": "ada@example.com", # 이메일 (Email)
        "full_name": "Ada L.",      # 표시 이름 (Display name)
        "type": "access",           # 토큰 유형 (Token type discriminator)
        "jti": "hex",               # 토큰 고유 ID (Unique token id)
        "iat": 1234567000,          # 발급 시간 (Issued at)
        "exp": 1234567890           # 만료 시간 UNIX timestamp (Expiration)
    }

    리프레시 토큰은 "sub", "type", "jti", "iat", "exp"만 포함합니다.
    Refresh tokens carry only "sub", "type", "jti", "iat" and "exp".
"""

import enum
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Protocol

import jwt

from videotube.config import Settings, settings


class TokenKind(str, enum.Enum):
    """토큰 유형 — 서명 비밀키와 만료 시간을 선택합니다 (Selects secret and expiry)."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenError(Exception):
    """토큰 검증 실패의 공통 부모 (Base class for token verification failures)."""


class InvalidTokenError(TokenError):
    """서명 불일치, 형식 오류, 유형 불일치 (Bad signature, malformed, or wrong type)."""


class ExpiredTokenError(TokenError):
    """만료된 토큰 (Token is past its expiry)."""


class TokenSubject(Protocol):
    """토큰 발급에 필요한 사용자 속성 (User attributes embedded in tokens)."""

    id: uuid.UUID
    username: str
    email: str
    full_name: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """액세스/리프레시 토큰 발급 및 검증 서비스.

    Issues and verifies access/refresh JWTs. Pure: all secrets and expiries
    come from the injected settings, the current time from ``clock``.

    Attributes:
        settings: 서명 설정 (Signing configuration)
        clock: 현재 UTC 시각 제공자 (Current UTC time provider)
    """

    def __init__(
        self,
        config: Settings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings: Settings = config
        self.clock: Callable[[], datetime] = clock or _utcnow

    def _secret(self, kind: TokenKind) -> str:
        if kind is TokenKind.ACCESS:
            return self.settings.ACCESS_TOKEN_SECRET
        return self.settings.REFRESH_TOKEN_SECRET

    def _lifetime(self, kind: TokenKind) -> timedelta:
        if kind is TokenKind.ACCESS:
            return timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return timedelta(days=self.settings.REFRESH_TOKEN_EXPIRE_DAYS)

    def _encode(self, claims: dict[str, Any], kind: TokenKind) -> str:
        now: datetime = self.clock()
        to_encode: dict[str, Any] = claims.copy()
        # jti — 같은 초에 발급된 토큰도 서로 다른 값을 갖도록 보장
        # jti keeps two tokens issued within the same second distinct
        to_encode.update({
            "type": kind.value,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + self._lifetime(kind),
        })
        return jwt.encode(to_encode, self._secret(kind), algorithm=self.settings.JWT_ALGORITHM)

    def issue_access_token(self, user: TokenSubject) -> str:
        """JWT 액세스 토큰을 생성합니다.

        Generate a short-lived access token embedding the user's id,
        username, email and display name.

        Args:
            user: 토큰 대상 사용자 (User the token is issued for)

        Returns:
            str: 인코딩된 JWT 문자열 (Encoded JWT token string)
        """
        return self._encode(
            {
                "sub": str(user.id),
                "username": user.username,
                "email": user.email,
                "full_name": user.full_name,
            },
            TokenKind.ACCESS,
        )

    def issue_refresh_token(self, user: TokenSubject) -> str:
        """JWT 리프레시 토큰을 생성합니다.

        Generate a long-lived refresh token embedding only the user id.

        Args:
            user: 토큰 대상 사용자 (User the token is issued for)

        Returns:
            str: 인코딩된 JWT 리프레시 토큰 문자열 (Encoded JWT refresh token string)
        """
        return self._encode({"sub": str(user.id)}, TokenKind.REFRESH)

    def verify(self, token: str, kind: TokenKind) -> dict[str, Any]:
        """JWT 토큰을 디코딩하고 검증합니다.

        Decode and verify a token with the secret of the given kind.

        Args:
            token: JWT 토큰 문자열 (Encoded JWT token string)
            kind: 기대하는 토큰 유형 (Expected token kind)

        Returns:
            dict[str, Any]: 디코딩된 페이로드 딕셔너리 (Decoded payload dictionary)

        Raises:
            ExpiredTokenError: 토큰 만료 시 (When token has expired)
            InvalidTokenError: 서명/형식/유형이 유효하지 않을 때
                               (Bad signature, malformed token, wrong type, missing subject)
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret(kind),
                algorithms=[self.settings.JWT_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("Token is invalid") from exc

        if payload.get("type") != kind.value:
            raise InvalidTokenError("Unexpected token type")
        return payload


# 싱글턴 인스턴스 — Singleton instance built from global settings
token_service: TokenService = TokenService(settings)
