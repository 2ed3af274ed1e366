"""인증 API 테스트 — 회원가입, 로그인, 요청 인증, 토큰 갱신, 로그아웃, 비밀번호 변경.

Auth API tests — Registration, login, request authentication, refresh token
rotation, logout and password change.
"""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.orm.attributes import set_committed_value

from tests.conftest import auth_header, create_user, make_token
from videotube.models.user import User
from videotube.repositories.auth_repository import auth_repository
from videotube.repositories.user_repository import user_repository
from videotube.schemas.auth import LoginRequest
from videotube.services.auth_service import auth_service
from videotube.utils.exceptions import ExpiredOrReusedRefreshTokenError
from videotube.utils.jwt import TokenKind, token_service

USERS = "/api/v1/users"


async def _login(client: AsyncClient, username: str = "ada", password: str = "secret123"):
    return await client.post(f"{USERS}/login", json={"username": username, "password": password})


def _set_cookies(res) -> list[str]:
    return res.headers.get_list("set-cookie")


# ===== Register =====

class TestRegister:
    """회원가입 테스트."""

    async def test_register_then_login(self, client: AsyncClient):
        """가입한 자격 증명으로 로그인 성공, 틀린 비밀번호는 401."""
        res = await client.post(f"{USERS}/register", json={
            "username": "Ada",
            "email": "Ada@Example.com",
            "full_name": "Ada Lovelace",
            "password": "secret123",
        })
        assert res.status_code == 201
        body = res.json()
        assert body["statusCode"] == 201
        assert body["success"] is True
        assert body["data"]["username"] == "ada"
        assert body["data"]["email"] == "ada@example.com"
        assert "password_hash" not in body["data"]
        assert "refresh_token" not in body["data"]

        assert (await _login(client)).status_code == 200
        res = await _login(client, password="wrong-password")
        assert res.status_code == 401
        assert res.json()["message"] == "Invalid user credentials"

    async def test_register_duplicate_username(self, client: AsyncClient, ada):
        """이미 있는 사용자명으로 가입하면 409."""
        res = await client.post(f"{USERS}/register", json={
            "username": "ADA",
            "email": "other@example.com",
            "full_name": "Other",
            "password": "secret123",
        })
        assert res.status_code == 409
        assert res.json()["success"] is False

    async def test_register_duplicate_email(self, client: AsyncClient, ada):
        """이미 있는 이메일로 가입하면 409."""
        res = await client.post(f"{USERS}/register", json={
            "username": "someone",
            "email": "ada@example.com",
            "full_name": "Someone",
            "password": "secret123",
        })
        assert res.status_code == 409

    async def test_register_blank_field(self, client: AsyncClient):
        """공백만 있는 필드는 400."""
        res = await client.post(f"{USERS}/register", json={
            "username": "   ",
            "email": "blank@example.com",
            "full_name": "Blank",
            "password": "secret123",
        })
        assert res.status_code == 400
        body = res.json()
        assert body["data"] is None
        assert body["errors"]

    async def test_password_whitespace_is_kept(self, client: AsyncClient):
        """비밀번호 앞뒤 공백은 그대로 저장된다."""
        res = await client.post(f"{USERS}/register", json={
            "username": "spacey",
            "email": "spacey@example.com",
            "full_name": "Spacey",
            "password": "  secret123  ",
        })
        assert res.status_code == 201

        assert (await _login(client, "spacey", "  secret123  ")).status_code == 200
        assert (await _login(client, "spacey", "secret123")).status_code == 401

    async def test_register_password_too_long(self, client: AsyncClient):
        """72바이트를 넘는 비밀번호는 400."""
        res = await client.post(f"{USERS}/register", json={
            "username": "longpw",
            "email": "longpw@example.com",
            "full_name": "Long Password",
            "password": "x" * 100,
        })
        assert res.status_code == 400
        assert res.json()["errors"]

    async def test_register_password_multibyte_limit(self, client: AsyncClient):
        """한도는 문자 수가 아닌 UTF-8 바이트 수."""
        res = await client.post(f"{USERS}/register", json={
            "username": "multibyte",
            "email": "multibyte@example.com",
            "full_name": "Multibyte",
            "password": "비" * 25,
        })
        assert res.status_code == 400


# ===== Login =====

class TestLogin:
    """로그인 테스트."""

    async def test_login_issues_tokens_for_user(self, client: AsyncClient, ada: User):
        """로그인 토큰의 sub는 사용자 ID와 같다."""
        res = await _login(client)
        assert res.status_code == 200
        data = res.json()["data"]

        access = token_service.verify(data["access_token"], TokenKind.ACCESS)
        refresh = token_service.verify(data["refresh_token"], TokenKind.REFRESH)
        assert access["sub"] == str(ada.id)
        assert refresh["sub"] == str(ada.id)
        assert data["user"]["id"] == str(ada.id)

    async def test_login_stores_refresh_token(self, client: AsyncClient, db, ada: User):
        """로그인 시 리프레시 토큰이 사용자 행에 저장된다."""
        res = await _login(client)
        await db.refresh(ada)
        assert ada.refresh_token == res.json()["data"]["refresh_token"]

    async def test_login_sets_http_only_cookies(self, client: AsyncClient, ada):
        """로그인 응답은 http-only 쿠키 두 개를 설정한다."""
        cookies = _set_cookies(await _login(client))
        access = next(c for c in cookies if c.startswith("accessToken="))
        refresh = next(c for c in cookies if c.startswith("refreshToken="))
        assert "HttpOnly" in access
        assert "HttpOnly" in refresh
        assert "samesite=lax" in access.lower()

    async def test_login_by_email(self, client: AsyncClient, ada):
        """이메일로도 로그인할 수 있다 (대소문자 무시)."""
        res = await client.post(f"{USERS}/login", json={
            "email": "ADA@example.com",
            "password": "secret123",
        })
        assert res.status_code == 200

    async def test_login_unknown_user(self, client: AsyncClient):
        """없는 사용자는 비밀번호 오류와 같은 401."""
        res = await _login(client, username="ghost")
        assert res.status_code == 401
        assert res.json()["message"] == "Invalid user credentials"

    async def test_login_without_identifier(self, client: AsyncClient):
        """사용자명과 이메일이 모두 없으면 400."""
        res = await client.post(f"{USERS}/login", json={"password": "secret123"})
        assert res.status_code == 400

    @pytest.mark.parametrize("username", ["ada", "ghost"])
    async def test_login_password_too_long(self, client: AsyncClient, ada, username):
        """72바이트를 넘는 비밀번호는 해싱 전에 400으로 거부된다."""
        res = await _login(client, username=username, password="x" * 100)
        assert res.status_code == 400


# ===== Request authentication =====

class TestAuthenticate:
    """요청 인증 테스트."""

    async def test_bearer_header(self, client: AsyncClient, ada, ada_token):
        res = await client.get(f"{USERS}/current-user", headers=auth_header(ada_token))
        assert res.status_code == 200
        assert res.json()["data"]["username"] == "ada"

    async def test_cookie_takes_precedence(self, client: AsyncClient, ada, bob, ada_token, bob_token):
        """쿠키와 헤더가 모두 있으면 쿠키가 우선한다."""
        res = await client.get(
            f"{USERS}/current-user",
            headers={**auth_header(bob_token), "Cookie": f"accessToken={ada_token}"},
        )
        assert res.status_code == 200
        assert res.json()["data"]["username"] == "ada"

    async def test_missing_token(self, client: AsyncClient):
        res = await client.get(f"{USERS}/current-user")
        assert res.status_code == 401
        assert res.json()["message"] == "Unauthorized request"

    async def test_garbage_token(self, client: AsyncClient):
        res = await client.get(f"{USERS}/current-user", headers=auth_header("garbage"))
        assert res.status_code == 401
        assert res.json()["message"] == "Invalid access token"

    async def test_refresh_token_is_not_an_access_token(self, client: AsyncClient, ada):
        token = token_service.issue_refresh_token(ada)
        res = await client.get(f"{USERS}/current-user", headers=auth_header(token))
        assert res.status_code == 401

    async def test_token_for_unknown_user(self, client: AsyncClient, db):
        """존재하지 않는 사용자의 토큰은 401 (존재 여부 노출 없음)."""
        ghost = User(
            id=uuid.uuid4(), username="ghost", email="ghost@example.com", full_name="Ghost"
        )
        res = await client.get(f"{USERS}/current-user", headers=auth_header(make_token(ghost)))
        assert res.status_code == 401
        assert res.json()["message"] == "Invalid access token"


# ===== Refresh =====

class TestRefresh:
    """토큰 갱신 테스트."""

    async def test_refresh_is_single_use(self, client: AsyncClient, ada):
        """리프레시 토큰은 한 번만 사용할 수 있다."""
        refresh = (await _login(client)).json()["data"]["refresh_token"]

        first = await client.post(f"{USERS}/refresh-token", json={"refresh_token": refresh})
        assert first.status_code == 200
        new_refresh = first.json()["data"]["refresh_token"]
        assert new_refresh != refresh

        second = await client.post(f"{USERS}/refresh-token", json={"refresh_token": refresh})
        assert second.status_code == 401
        assert second.json()["message"] == "Refresh token is expired or used"

        third = await client.post(f"{USERS}/refresh-token", json={"refresh_token": new_refresh})
        assert third.status_code == 200

    async def test_refresh_cookie_precedence(self, client: AsyncClient, ada):
        """refreshToken 쿠키가 본문보다 우선한다."""
        refresh = (await _login(client)).json()["data"]["refresh_token"]

        res = await client.post(
            f"{USERS}/refresh-token",
            json={"refresh_token": "stale-body-token"},
            headers={"Cookie": f"refreshToken={refresh}"},
        )
        assert res.status_code == 200
        assert any(c.startswith("accessToken=") for c in _set_cookies(res))

    async def test_refresh_missing_token(self, client: AsyncClient):
        res = await client.post(f"{USERS}/refresh-token")
        assert res.status_code == 401

    async def test_refresh_bad_signature(self, client: AsyncClient, ada):
        access = token_service.issue_access_token(ada)
        res = await client.post(f"{USERS}/refresh-token", json={"refresh_token": access})
        assert res.status_code == 401
        assert res.json()["message"] == "Invalid refresh token"

    async def test_superseded_by_new_login(self, client: AsyncClient, ada):
        """새 로그인이 이전 리프레시 토큰을 무효화한다."""
        old = (await _login(client)).json()["data"]["refresh_token"]
        await _login(client)

        res = await client.post(f"{USERS}/refresh-token", json={"refresh_token": old})
        assert res.status_code == 401
        assert res.json()["message"] == "Refresh token is expired or used"

    async def test_concurrent_rotation_has_one_winner(self, db, ada):
        """같은 토큰으로 두 번 교체하면 한 번만 성공한다."""
        login = await auth_service.login(db, LoginRequest(username="ada", password="secret123"))
        await db.commit()

        await auth_service.refresh(db, login.refresh_token)
        with pytest.raises(ExpiredOrReusedRefreshTokenError):
            await auth_service.refresh(db, login.refresh_token)

    async def test_rotation_lost_after_token_check(self, db, ada, monkeypatch):
        """토큰 확인 후 다른 요청이 먼저 교체하면 조건부 UPDATE가 거부한다.

        The row is swapped behind the session's back between the stored-token
        check and the compare-and-swap, as a concurrent refresh would.
        """
        login = await auth_service.login(db, LoginRequest(username="ada", password="secret123"))
        await db.commit()

        original_get = auth_repository.get_user_by_id
        original_rotate = auth_repository.rotate_refresh_token
        rotations: list[bool] = []

        async def get_then_swap(session, user_id):
            user = await original_get(session, user_id)
            monkeypatch.setattr(auth_repository, "get_user_by_id", original_get)
            presented = user.refresh_token
            # 다른 요청이 먼저 교체 (the other request swaps first)
            await auth_repository.rotate_refresh_token(session, user_id, presented, "winner-token")
            # 이 요청은 교체 전의 행을 읽은 상태 (this request read the row before the swap)
            set_committed_value(user, "refresh_token", presented)
            return user

        async def recording_rotate(*args, **kwargs):
            rotated = await original_rotate(*args, **kwargs)
            rotations.append(rotated)
            return rotated

        monkeypatch.setattr(auth_repository, "get_user_by_id", get_then_swap)
        monkeypatch.setattr(auth_repository, "rotate_refresh_token", recording_rotate)

        with pytest.raises(ExpiredOrReusedRefreshTokenError):
            await auth_service.refresh(db, login.refresh_token)

        assert rotations == [True, False]
        stored = await auth_repository.get_user_by_id(db, ada.id)
        assert stored.refresh_token == "winner-token"


# ===== Logout & password =====

class TestLogout:
    """로그아웃 및 비밀번호 변경 테스트."""

    async def test_logout_is_terminal(self, client: AsyncClient, db, ada, ada_token):
        """로그아웃 후 기존 리프레시 토큰은 거부된다."""
        refresh = (await _login(client)).json()["data"]["refresh_token"]

        res = await client.post(f"{USERS}/logout", headers=auth_header(ada_token))
        assert res.status_code == 200
        cookies = _set_cookies(res)
        assert any(c.startswith("accessToken=") for c in cookies)
        assert any(c.startswith("refreshToken=") for c in cookies)

        await db.refresh(ada)
        assert ada.refresh_token is None

        res = await client.post(f"{USERS}/refresh-token", json={"refresh_token": refresh})
        assert res.status_code == 401
        assert res.json()["message"] == "Refresh token is expired or used"

    async def test_logout_requires_auth(self, client: AsyncClient):
        res = await client.post(f"{USERS}/logout")
        assert res.status_code == 401

    async def test_change_password(self, client: AsyncClient, ada, ada_token):
        """비밀번호 변경 후 새 비밀번호로만 로그인, 기존 리프레시 토큰은 폐기."""
        refresh = (await _login(client)).json()["data"]["refresh_token"]

        res = await client.post(
            f"{USERS}/change-password",
            json={"old_password": "secret123", "new_password": "n3w-secret"},
            headers=auth_header(ada_token),
        )
        assert res.status_code == 200

        assert (await _login(client)).status_code == 401
        assert (await _login(client, password="n3w-secret")).status_code == 200

        res = await client.post(f"{USERS}/refresh-token", json={"refresh_token": refresh})
        assert res.status_code == 401

    async def test_change_password_wrong_old(self, client: AsyncClient, ada, ada_token):
        res = await client.post(
            f"{USERS}/change-password",
            json={"old_password": "nope", "new_password": "n3w-secret"},
            headers=auth_header(ada_token),
        )
        assert res.status_code == 401

    async def test_change_password_too_long(self, client: AsyncClient, ada, ada_token):
        res = await client.post(
            f"{USERS}/change-password",
            json={"old_password": "secret123", "new_password": "x" * 100},
            headers=auth_header(ada_token),
        )
        assert res.status_code == 400
        assert (await _login(client)).status_code == 200


class TestAccount:
    """계정 수정 테스트."""

    async def test_update_account(self, client: AsyncClient, ada, ada_token):
        res = await client.patch(
            f"{USERS}/update-account",
            json={"full_name": "Countess Ada", "email": "Countess@Example.com"},
            headers=auth_header(ada_token),
        )
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["full_name"] == "Countess Ada"
        assert data["email"] == "countess@example.com"

    async def test_update_account_email_taken(self, client: AsyncClient, db, ada, ada_token):
        await create_user(db, "carol")
        res = await client.patch(
            f"{USERS}/update-account",
            json={"email": "carol@example.com"},
            headers=auth_header(ada_token),
        )
        assert res.status_code == 409

    async def test_update_account_email_race(
        self, client: AsyncClient, db, ada, ada_token, monkeypatch
    ):
        """사전 검사를 통과해도 고유 제약 위반은 409로 끝난다."""
        await create_user(db, "carol")

        async def never_taken(*args, **kwargs):
            return False

        monkeypatch.setattr(user_repository, "username_or_email_taken", never_taken)
        res = await client.patch(
            f"{USERS}/update-account",
            json={"email": "carol@example.com"},
            headers=auth_header(ada_token),
        )
        assert res.status_code == 409
        assert res.json()["message"] == "Email already in use"

        await db.refresh(ada)
        assert ada.email == "ada@example.com"

    async def test_update_account_empty(self, client: AsyncClient, ada, ada_token):
        res = await client.patch(
            f"{USERS}/update-account", json={}, headers=auth_header(ada_token)
        )
        assert res.status_code == 400
