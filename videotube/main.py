"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 처리기, 라우터 등록.

FastAPI application entry point — Middleware, exception handlers and router
registration. Every error leaves the API as the same JSON envelope:
``{"statusCode", "data": null, "message", "success": false, "errors": []}``.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from videotube.api.v1 import api_router
from videotube.config import settings
from videotube.middleware.axiom_logging import AxiomLoggingMiddleware
from videotube.schemas.common import ErrorResponse, HealthResponse
from videotube.utils.exceptions import UpstreamError

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — 쿠키 인증을 위해 출처를 명시 (Explicit origins, credentials allowed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(
    status_code: int,
    message: str,
    errors: list[Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """오류 봉투 응답을 생성합니다 (Build an error envelope response)."""
    body = ErrorResponse(status_code=status_code, message=message, errors=errors or [])
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True)),
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTPException(커스텀 예외 포함)을 오류 봉투로 변환합니다."""
    message: str = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 검증 오류를 400 오류 봉투로 변환합니다 (Validation errors → 400)."""
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation error",
        errors=jsonable_encoder(exc.errors()),
    )


@app.exception_handler(OperationalError)
async def database_exception_handler(request: Request, exc: OperationalError) -> JSONResponse:
    """데이터베이스 연결 실패를 503으로 변환합니다 (Store unavailable → 503)."""
    upstream = UpstreamError("Database unavailable")
    return error_response(upstream.status_code, upstream.detail)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외 — 내부 정보 없이 500 반환 (No internals leak)."""
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(api_router, prefix="/api/v1")
