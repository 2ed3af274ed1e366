"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification utility module.
Uses bcrypt directly for secure password storage.
Passwords are never stored in plain text — always hashed with bcrypt.
"""

import bcrypt

from videotube.config import settings

# 존재하지 않는 사용자 로그인 시 비교용 더미 해시 — 사용자 존재 여부에 따른 응답 시간 차이 제거
# Dummy hash checked when the login user does not exist, so both failure paths cost one bcrypt check
_DUMMY_HASH: bytes = bcrypt.hashpw(b"videotube-dummy-password", bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt.
    The resulting hash includes a random salt, making each hash unique
    even for identical passwords.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)

    Example:
        hashed = hash_password("my-secret-password")
        # "$2b$12$LJ3m4ys3..."
    """
    salt: bytes = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Verify a plain text password against a bcrypt hash.
    Uses constant-time comparison to prevent timing attacks.

    Args:
        plain_password: 검증할 평문 비밀번호 (Plain text password to verify)
        hashed_password: 저장된 bcrypt 해시 (Stored bcrypt hash to compare against)

    Returns:
        bool: 일치하면 True, 불일치하면 False (True if password matches hash)
    """
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def burn_password_check(plain_password: str) -> None:
    """사용자가 없을 때 더미 해시로 bcrypt 비교를 수행합니다.

    Run one bcrypt comparison against a dummy hash and discard the result.
    """
    bcrypt.checkpw(plain_password.encode("utf-8"), _DUMMY_HASH)
