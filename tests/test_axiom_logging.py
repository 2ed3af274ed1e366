"""Axiom 로깅 미들웨어 테스트 — 민감 정보 마스킹, 오류 메시지 추출.

Axiom logging middleware tests, using an in-memory client stand-in.
"""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from videotube.middleware.axiom_logging import (
    AxiomLoggingMiddleware,
    extract_error_message,
    mask_sensitive,
)
from videotube.utils.exceptions import NotFoundError


class _RecordingClient:
    def __init__(self) -> None:
        self.events: list[dict] = []

    def ingest_events(self, dataset: str, events: list[dict]) -> None:
        self.events.extend(events)


def _build_app(recorder: _RecordingClient) -> FastAPI:
    app = FastAPI()
    app.add_middleware(AxiomLoggingMiddleware, client=recorder)

    @app.post("/echo")
    async def echo(payload: dict) -> dict:
        return payload

    @app.get("/missing")
    async def missing() -> dict:
        raise NotFoundError("Video not found")

    return app


class TestMasking:
    def test_nested_keys_masked(self):
        data = {
            "username": "ada",
            "password": "secret123",
            "nested": {"refresh_token": "abc", "items": [{"Cookie": "x"}]},
        }
        assert mask_sensitive(data) == {
            "username": "ada",
            "password": "***",
            "nested": {"refresh_token": "***", "items": [{"Cookie": "***"}]},
        }

    def test_error_message_from_envelope(self):
        body = b'{"statusCode": 404, "data": null, "message": "Video not found", "success": false}'
        assert extract_error_message(body) == "Video not found"
        assert extract_error_message(b"plain failure") == "plain failure"


class TestMiddleware:
    async def test_logs_masked_request(self):
        recorder = _RecordingClient()
        transport = ASGITransport(app=_build_app(recorder))
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            res = await ac.post("/echo", json={"username": "ada", "password": "secret123"})

        assert res.status_code == 200
        assert res.json()["password"] == "secret123"
        [event] = recorder.events
        assert event["method"] == "POST"
        assert event["path"] == "/echo"
        assert event["status_code"] == 200
        assert event["request_body"] == {"username": "ada", "password": "***"}

    async def test_logs_error_message(self):
        recorder = _RecordingClient()
        transport = ASGITransport(app=_build_app(recorder))
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            res = await ac.get("/missing")

        assert res.status_code == 404
        assert res.json()["detail"] == "Video not found"
        [event] = recorder.events
        assert event["error"] == "Video not found"
