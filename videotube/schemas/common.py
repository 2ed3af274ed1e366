"""공통 Pydantic 스키마 — 응답 봉투, 페이지, 메시지.

Common Pydantic schemas — Response envelope, paginated page and error body.
Every successful endpoint returns ``ApiResponse``; every error is rendered by
the exception handlers in ``videotube.main`` as ``ErrorResponse``.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """성공 응답 봉투 스키마.

    Success response envelope.

    Attributes:
        status_code: HTTP 상태 코드 (Serialized as ``statusCode``)
        data: 응답 데이터 (Payload)
        message: 응답 메시지 (Human-readable message)
        success: 성공 여부 (Always True for status codes below 400)
    """

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(200, alias="statusCode")  # HTTP 상태 코드
    data: DataT | None = None  # 응답 데이터 (Payload)
    message: str = "Success"  # 응답 메시지 (Message)
    success: bool = True  # 성공 여부 (Success flag)

    @classmethod
    def ok(
        cls,
        data: Any = None,
        message: str = "Success",
        status_code: int = 200,
    ) -> "ApiResponse":
        """성공 봉투를 생성합니다 (Build a success envelope)."""
        return cls(
            status_code=status_code,
            data=data,
            message=message,
            success=status_code < 400,
        )


class ErrorResponse(BaseModel):
    """오류 응답 봉투 스키마.

    Error envelope. ``data`` is always null and ``errors`` lists field-level
    validation problems when there are any.
    """

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(..., alias="statusCode")
    data: None = None
    message: str
    success: bool = False
    errors: list[Any] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """헬스 체크 응답 (Health check response)."""

    status: str
