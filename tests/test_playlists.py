"""재생목록 API 테스트 — 생성, 조회, 동영상 추가/제거, 수정, 삭제, 비공개 처리.

Playlist API tests.
"""

import uuid

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import auth_header, create_video
from videotube.models.user import User
from videotube.models.video import Video
from videotube.repositories.playlist_repository import playlist_repository

PLAYLISTS = "/api/v1/playlists"


async def _create(client: AsyncClient, token: str, name: str = "Favourites", **extra) -> dict:
    res = await client.post(PLAYLISTS, json={"name": name, **extra}, headers=auth_header(token))
    assert res.status_code == 201
    return res.json()["data"]


class TestCreatePlaylist:
    """재생목록 생성 테스트."""

    async def test_create(self, client: AsyncClient, ada: User, ada_token):
        data = await _create(client, ada_token, description="Best clips")
        assert data["name"] == "Favourites"
        assert data["owner_id"] == str(ada.id)
        assert data["is_private"] is False
        assert data["video_count"] == 0
        assert data["videos"] == []

    async def test_duplicate_name_same_owner(self, client: AsyncClient, ada_token):
        await _create(client, ada_token)
        res = await client.post(PLAYLISTS, json={"name": "Favourites"}, headers=auth_header(ada_token))
        assert res.status_code == 409

    async def test_same_name_different_owner(self, client: AsyncClient, ada_token, bob_token):
        await _create(client, ada_token)
        await _create(client, bob_token)

    async def test_blank_name(self, client: AsyncClient, ada_token):
        res = await client.post(PLAYLISTS, json={"name": "  "}, headers=auth_header(ada_token))
        assert res.status_code == 400


class TestPlaylistVideos:
    """재생목록 동영상 추가/제거 테스트."""

    async def test_add_and_remove(
        self, client: AsyncClient, db: AsyncSession, bob: User, ada_token, video: Video
    ):
        """추가 순서가 유지되고 제거하면 목록에서 빠진다."""
        second = await create_video(db, bob, title="Second")
        playlist = await _create(client, ada_token)

        await client.patch(f"{PLAYLISTS}/add/{video.id}/{playlist['id']}", headers=auth_header(ada_token))
        res = await client.patch(
            f"{PLAYLISTS}/add/{second.id}/{playlist['id']}", headers=auth_header(ada_token)
        )
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["video_count"] == 2
        assert [v["id"] for v in data["videos"]] == [str(video.id), str(second.id)]
        assert data["videos"][0]["owner"]["username"] == "bob"

        res = await client.patch(
            f"{PLAYLISTS}/remove/{video.id}/{playlist['id']}", headers=auth_header(ada_token)
        )
        assert res.status_code == 200
        assert [v["id"] for v in res.json()["data"]["videos"]] == [str(second.id)]

    async def test_add_twice(self, client: AsyncClient, ada_token, video: Video):
        playlist = await _create(client, ada_token)
        url = f"{PLAYLISTS}/add/{video.id}/{playlist['id']}"
        assert (await client.patch(url, headers=auth_header(ada_token))).status_code == 200

        res = await client.patch(url, headers=auth_header(ada_token))
        assert res.status_code == 409
        assert res.json()["message"] == "Video already in playlist"

        res = await client.get(f"{PLAYLISTS}/{playlist['id']}", headers=auth_header(ada_token))
        assert res.json()["data"]["video_count"] == 1

    async def test_remove_absent_video(self, client: AsyncClient, ada_token, video: Video):
        playlist = await _create(client, ada_token)
        res = await client.patch(
            f"{PLAYLISTS}/remove/{video.id}/{playlist['id']}", headers=auth_header(ada_token)
        )
        assert res.status_code == 404
        assert res.json()["message"] == "Video not in playlist"

    async def test_add_unknown_video(self, client: AsyncClient, ada_token):
        playlist = await _create(client, ada_token)
        res = await client.patch(
            f"{PLAYLISTS}/add/{uuid.uuid4()}/{playlist['id']}", headers=auth_header(ada_token)
        )
        assert res.status_code == 404

    async def test_add_unpublished_video(
        self, client: AsyncClient, db: AsyncSession, bob: User, ada_token, bob_token
    ):
        """다른 사용자의 비공개 동영상은 추가할 수 없다."""
        draft = await create_video(db, bob, title="Draft", is_published=False)

        playlist = await _create(client, ada_token)
        res = await client.patch(
            f"{PLAYLISTS}/add/{draft.id}/{playlist['id']}", headers=auth_header(ada_token)
        )
        assert res.status_code == 404
        assert res.json()["message"] == "Video not found"

        own = await _create(client, bob_token, name="Drafts")
        res = await client.patch(
            f"{PLAYLISTS}/add/{draft.id}/{own['id']}", headers=auth_header(bob_token)
        )
        assert res.status_code == 200

    async def test_add_to_someone_elses_playlist(
        self, client: AsyncClient, ada_token, bob_token, video: Video
    ):
        playlist = await _create(client, ada_token)
        res = await client.patch(
            f"{PLAYLISTS}/add/{video.id}/{playlist['id']}", headers=auth_header(bob_token)
        )
        assert res.status_code == 403


class TestPlaylistVisibility:
    """비공개 재생목록 및 조회 테스트."""

    async def test_private_playlist_hidden(self, client: AsyncClient, ada: User, ada_token, bob_token):
        """다른 사용자의 비공개 재생목록은 존재하지 않는 것처럼 보인다."""
        playlist = await _create(client, ada_token, name="Secret", is_private=True)
        await _create(client, ada_token, name="Open")

        res = await client.get(f"{PLAYLISTS}/{playlist['id']}", headers=auth_header(bob_token))
        assert res.status_code == 404
        res = await client.get(f"{PLAYLISTS}/{playlist['id']}", headers=auth_header(ada_token))
        assert res.status_code == 200

        res = await client.get(f"{PLAYLISTS}/user/{ada.id}", headers=auth_header(bob_token))
        assert [p["name"] for p in res.json()["data"]] == ["Open"]
        res = await client.get(f"{PLAYLISTS}/user/{ada.id}", headers=auth_header(ada_token))
        assert {p["name"] for p in res.json()["data"]} == {"Open", "Secret"}

    async def test_list_unknown_user(self, client: AsyncClient, ada_token):
        res = await client.get(f"{PLAYLISTS}/user/{uuid.uuid4()}", headers=auth_header(ada_token))
        assert res.status_code == 404


class TestUpdateDeletePlaylist:
    """재생목록 수정/삭제 테스트."""

    async def test_rename(self, client: AsyncClient, ada_token):
        playlist = await _create(client, ada_token)
        res = await client.patch(
            f"{PLAYLISTS}/{playlist['id']}",
            json={"name": "Watch later", "is_private": True},
            headers=auth_header(ada_token),
        )
        assert res.status_code == 200
        assert res.json()["data"]["name"] == "Watch later"
        assert res.json()["data"]["is_private"] is True

    async def test_rename_to_taken_name(self, client: AsyncClient, ada_token):
        await _create(client, ada_token, name="One")
        two = await _create(client, ada_token, name="Two")
        res = await client.patch(
            f"{PLAYLISTS}/{two['id']}", json={"name": "One"}, headers=auth_header(ada_token)
        )
        assert res.status_code == 409

    async def test_delete(self, client: AsyncClient, ada_token, bob_token, video: Video):
        playlist = await _create(client, ada_token)
        await client.patch(f"{PLAYLISTS}/add/{video.id}/{playlist['id']}", headers=auth_header(ada_token))

        res = await client.delete(f"{PLAYLISTS}/{playlist['id']}", headers=auth_header(bob_token))
        assert res.status_code == 403

        res = await client.delete(f"{PLAYLISTS}/{playlist['id']}", headers=auth_header(ada_token))
        assert res.status_code == 200
        res = await client.get(f"{PLAYLISTS}/{playlist['id']}", headers=auth_header(ada_token))
        assert res.status_code == 404

    async def test_rename_race_hits_unique_constraint(
        self, client: AsyncClient, ada_token, monkeypatch
    ):
        """사전 검사를 통과해도 (owner, name) 제약 위반은 409."""
        await _create(client, ada_token, name="One")
        two = await _create(client, ada_token, name="Two")

        async def never_taken(*args, **kwargs):
            return False

        monkeypatch.setattr(playlist_repository, "name_taken", never_taken)
        res = await client.patch(
            f"{PLAYLISTS}/{two['id']}", json={"name": "One"}, headers=auth_header(ada_token)
        )
        assert res.status_code == 409

        res = await client.get(f"{PLAYLISTS}/{two['id']}", headers=auth_header(ada_token))
        assert res.json()["data"]["name"] == "Two"
