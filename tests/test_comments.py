"""댓글 API 테스트 — 목록(페이지네이션), 작성, 수정, 삭제.

Comment API tests.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_header, create_video
from videotube.models.toggle import ToggleRelation
from videotube.models.user import User
from videotube.models.video import Video

COMMENTS = "/api/v1/comments"


async def _add(client: AsyncClient, token: str, video: Video, content: str = "Great video") -> dict:
    res = await client.post(
        f"{COMMENTS}/{video.id}", json={"content": content}, headers=auth_header(token)
    )
    assert res.status_code == 201
    return res.json()["data"]


class TestComments:
    """댓글 CRUD 테스트."""

    async def test_add_and_list(self, client: AsyncClient, ada_token, bob_token, video: Video):
        """최신 댓글이 먼저 오고 작성자 정보가 포함된다."""
        first = await _add(client, ada_token, video, "First!")
        second = await _add(client, bob_token, video, "Thanks")
        assert first["owner"]["username"] == "ada"
        assert first["video_id"] == str(video.id)

        res = await client.get(f"{COMMENTS}/{video.id}", headers=auth_header(ada_token))
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["total"] == 2
        assert {c["id"] for c in data["items"]} == {first["id"], second["id"]}

    async def test_list_paginates(self, client: AsyncClient, ada_token, video: Video):
        for i in range(3):
            await _add(client, ada_token, video, f"Comment {i}")

        res = await client.get(
            f"{COMMENTS}/{video.id}", params={"page": 2, "per_page": 2}, headers=auth_header(ada_token)
        )
        data = res.json()["data"]
        assert len(data["items"]) == 1
        assert data["pages"] == 2

    async def test_comment_on_unknown_video(self, client: AsyncClient, ada_token):
        res = await client.post(
            f"{COMMENTS}/{uuid.uuid4()}", json={"content": "Hi"}, headers=auth_header(ada_token)
        )
        assert res.status_code == 404

    async def test_blank_comment(self, client: AsyncClient, ada_token, video: Video):
        res = await client.post(
            f"{COMMENTS}/{video.id}", json={"content": "   "}, headers=auth_header(ada_token)
        )
        assert res.status_code == 400

    async def test_update_by_author_only(
        self, client: AsyncClient, ada_token, bob_token, video: Video
    ):
        comment = await _add(client, ada_token, video)

        res = await client.patch(
            f"{COMMENTS}/c/{comment['id']}", json={"content": "Edited"}, headers=auth_header(bob_token)
        )
        assert res.status_code == 403

        res = await client.patch(
            f"{COMMENTS}/c/{comment['id']}", json={"content": "Edited"}, headers=auth_header(ada_token)
        )
        assert res.status_code == 200
        assert res.json()["data"]["content"] == "Edited"

    async def test_delete(self, client: AsyncClient, ada_token, bob_token, video: Video):
        comment = await _add(client, ada_token, video)

        res = await client.delete(f"{COMMENTS}/c/{comment['id']}", headers=auth_header(bob_token))
        assert res.status_code == 403
        res = await client.delete(f"{COMMENTS}/c/{comment['id']}", headers=auth_header(ada_token))
        assert res.status_code == 200

        res = await client.get(f"{COMMENTS}/{video.id}", headers=auth_header(ada_token))
        assert res.json()["data"]["total"] == 0

    async def test_delete_removes_likes(
        self, client: AsyncClient, db: AsyncSession, ada_token, bob_token, video: Video
    ):
        comment = await _add(client, ada_token, video)
        await client.post(f"/api/v1/likes/toggle/c/{comment['id']}", headers=auth_header(bob_token))

        res = await client.delete(f"{COMMENTS}/c/{comment['id']}", headers=auth_header(ada_token))
        assert res.status_code == 200
        count = (await db.execute(select(func.count(ToggleRelation.id)))).scalar()
        assert count == 0

    async def test_unpublished_video_hidden_from_others(
        self, client: AsyncClient, db: AsyncSession, bob: User, ada_token, bob_token
    ):
        """비공개 동영상의 댓글은 소유자만 보고 작성할 수 있다."""
        draft = await create_video(db, bob, title="Draft", is_published=False)

        res = await client.get(f"{COMMENTS}/{draft.id}", headers=auth_header(ada_token))
        assert res.status_code == 404
        res = await client.post(
            f"{COMMENTS}/{draft.id}", json={"content": "Hi"}, headers=auth_header(ada_token)
        )
        assert res.status_code == 404
        assert res.json()["message"] == "Video not found"

        await _add(client, bob_token, draft, "Note to self")
        res = await client.get(f"{COMMENTS}/{draft.id}", headers=auth_header(bob_token))
        assert res.json()["data"]["total"] == 1
