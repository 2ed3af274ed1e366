"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns.
These simplify error raising across services and repositories by
eliminating the need to specify status codes at each call site.
Every exception is rendered by ``videotube.main`` as a JSON error envelope
``{"statusCode", "data": null, "message", "success": false}``.

Usage:
    from videotube.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Video not found")
    raise DuplicateError("Username already exists")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (user, video, playlist, etc.) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class TargetNotFoundError(NotFoundError):
    """토글 대상(동영상/댓글/트윗/채널)이 존재하지 않을 때 사용.

    Raised by the toggle engine when the like/subscribe target does not exist.
    """

    def __init__(self, detail: str = "Target not found") -> None:
        super().__init__(detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when attempting to create a resource that violates a uniqueness constraint
    (e.g. duplicate username, duplicate playlist name for the same owner).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class DuplicateRelationError(DuplicateError):
    """토글 관계 고유 제약 위반 — 동시 토글 경합에서 패배한 쪽.

    Raised by the toggle repository when the (actor, target, kind) unique
    constraint rejects an insert. The toggle service converts it into an
    "already on" result, so it only reaches clients if raised elsewhere.
    """

    def __init__(self, detail: str = "Relation already exists") -> None:
        super().__init__(detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    403 Forbidden exception.
    Raised when the authenticated user does not own the resource being modified
    (e.g. editing another user's tweet or playlist).

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    401 Unauthorized exception.
    Raised when authentication is missing. The subclasses below narrow the
    reason but all map to the same status code.

    Args:
        detail: 오류 메시지 (Error message, default: "Unauthorized request")
    """

    def __init__(self, detail: str = "Unauthorized request") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class InvalidCredentialsError(UnauthorizedError):
    """잘못된 사용자명/이메일 또는 비밀번호 (Invalid login credentials)."""

    def __init__(self, detail: str = "Invalid user credentials") -> None:
        super().__init__(detail=detail)


class InvalidAccessTokenError(UnauthorizedError):
    """액세스 토큰 서명/만료 오류 또는 사용자 없음 (Bad or expired access token)."""

    def __init__(self, detail: str = "Invalid access token") -> None:
        super().__init__(detail=detail)


class InvalidRefreshTokenError(UnauthorizedError):
    """리프레시 토큰 서명/만료 오류 또는 사용자 없음 (Bad or expired refresh token)."""

    def __init__(self, detail: str = "Invalid refresh token") -> None:
        super().__init__(detail=detail)


class ExpiredOrReusedRefreshTokenError(UnauthorizedError):
    """저장된 값과 다른 리프레시 토큰 — 이미 교체되었거나 로그아웃됨.

    The presented refresh token no longer matches the stored one: it was
    rotated out by a newer login/refresh, or revoked by logout.
    """

    def __init__(self, detail: str = "Refresh token is expired or used") -> None:
        super().__init__(detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. blank fields after trimming, unknown sort keys).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UpstreamError(HTTPException):
    """503 Service Unavailable — 외부 의존 서비스 실패 (Upstream dependency failure)."""

    def __init__(self, detail: str = "Upstream service unavailable") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


class InternalError(HTTPException):
    """500 Internal Server Error — 처리 중 일관성이 깨졌을 때 사용.

    Raised when a write could not be confirmed (e.g. a freshly created row
    cannot be read back), so the request fails before the router commits.
    """

    def __init__(self, detail: str = "Something went wrong") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
