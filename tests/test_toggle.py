"""토글 엔진 테스트 — 멱등 on/off, 경합 수렴, 대상 확인.

Toggle engine tests — Involution, convergence under concurrent inserts and
target existence checks, exercised directly against the service.
"""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from videotube.models.toggle import ToggleKind, ToggleRelation
from videotube.models.user import User
from videotube.models.video import Video
from videotube.repositories.toggle_repository import toggle_repository
from videotube.services.toggle_service import toggle_service
from videotube.utils.exceptions import TargetNotFoundError


async def _row_count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count(ToggleRelation.id)))).scalar()


class TestToggle:
    """토글 기본 동작 테스트."""

    async def test_toggle_twice_is_noop(self, db: AsyncSession, ada: User, video: Video):
        """두 번 토글하면 원래 상태(행 없음)로 돌아간다."""
        first = await toggle_service.toggle(db, ada.id, video.id, ToggleKind.VIDEO)
        assert first.is_on is True
        assert first.created is True
        assert await _row_count(db) == 1

        second = await toggle_service.toggle(db, ada.id, video.id, ToggleKind.VIDEO)
        assert second.is_on is False
        assert second.created is False
        assert await _row_count(db) == 0

    async def test_is_on_tracks_state(self, db: AsyncSession, ada: User, video: Video):
        assert await toggle_service.is_on(db, ada.id, video.id, ToggleKind.VIDEO) is False
        await toggle_service.toggle(db, ada.id, video.id, ToggleKind.VIDEO)
        assert await toggle_service.is_on(db, ada.id, video.id, ToggleKind.VIDEO) is True

    async def test_kinds_are_independent(self, db: AsyncSession, ada: User, bob: User):
        """같은 대상 ID라도 유형이 다르면 별개의 관계."""
        await toggle_service.toggle(db, ada.id, bob.id, ToggleKind.CHANNEL)
        assert await toggle_service.is_on(db, ada.id, bob.id, ToggleKind.CHANNEL) is True
        assert await toggle_service.is_on(db, ada.id, bob.id, ToggleKind.VIDEO) is False

    async def test_actors_are_independent(self, db: AsyncSession, ada: User, bob: User, video: Video):
        await toggle_service.toggle(db, ada.id, video.id, ToggleKind.VIDEO)
        await toggle_service.toggle(db, bob.id, video.id, ToggleKind.VIDEO)
        assert await toggle_repository.count(db, video.id, ToggleKind.VIDEO) == 2

        await toggle_service.toggle(db, ada.id, video.id, ToggleKind.VIDEO)
        assert await toggle_repository.count(db, video.id, ToggleKind.VIDEO) == 1

    @pytest.mark.parametrize("kind", list(ToggleKind))
    async def test_unknown_target(self, db: AsyncSession, ada: User, kind: ToggleKind):
        """대상이 없으면 404이며 행을 만들지 않는다."""
        with pytest.raises(TargetNotFoundError) as exc_info:
            await toggle_service.toggle(db, ada.id, uuid.uuid4(), kind)
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == f"{kind.value.capitalize()} not found"
        assert await _row_count(db) == 0


class TestToggleRace:
    """동시 토글 경합 테스트."""

    async def test_concurrent_inserts_converge(
        self, db: AsyncSession, ada: User, video: Video, monkeypatch
    ):
        """모두 'off'를 본 N개의 토글은 행 하나로 수렴하고 한 번만 생성한다."""
        async def _never_found(*args, **kwargs):
            return None

        # 모든 요청이 같은 시점에 "없음"을 관찰한 상황 — Every caller observed "off"
        monkeypatch.setattr(toggle_repository, "find", _never_found)

        results = [
            await toggle_service.toggle(db, ada.id, video.id, ToggleKind.VIDEO)
            for _ in range(5)
        ]

        assert all(r.is_on for r in results)
        assert sum(1 for r in results if r.created) == 1
        assert await _row_count(db) == 1

    async def test_losing_insert_keeps_transaction_usable(
        self, db: AsyncSession, ada: User, video: Video, monkeypatch
    ):
        """경합에서 진 삽입 후에도 같은 트랜잭션을 계속 쓸 수 있다."""
        await toggle_service.toggle(db, ada.id, video.id, ToggleKind.VIDEO)

        async def _never_found(*args, **kwargs):
            return None

        monkeypatch.setattr(toggle_repository, "find", _never_found)
        result = await toggle_service.toggle(db, ada.id, video.id, ToggleKind.VIDEO)
        assert result.is_on is True
        assert result.created is False

        await db.commit()
        assert await _row_count(db) == 1

    async def test_remove_already_removed(self, db: AsyncSession, ada: User, video: Video):
        """이미 삭제된 관계의 삭제는 False를 반환한다."""
        await toggle_service.toggle(db, ada.id, video.id, ToggleKind.VIDEO)
        assert await toggle_repository.remove(db, ada.id, video.id, ToggleKind.VIDEO) is True
        assert await toggle_repository.remove(db, ada.id, video.id, ToggleKind.VIDEO) is False
