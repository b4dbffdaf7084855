from app.core.config import settings
from app.services.auth_service import AuthService, UserAlreadyExistsError
from tests.helpers import HTMX, register

import pytest


class TestAuthService:
    """Tests for registration and login in the service layer."""

    def test_password_is_hashed(self, user):
        assert user.password_hash != "secret123"
        assert AuthService.verify_password("secret123", user.password_hash)
        assert not AuthService.verify_password("wrong", user.password_hash)

    def test_malformed_hash_never_verifies(self):
        assert AuthService.verify_password("secret123", "not-a-bcrypt-hash") is False

    def test_duplicate_username_rejected(self, auth_service, user):
        with pytest.raises(UserAlreadyExistsError, match="Username already exists"):
            auth_service.register(username="alice", password="another1")

    def test_duplicate_email_rejected(self, auth_service, user):
        with pytest.raises(UserAlreadyExistsError, match="Email already exists"):
            auth_service.register(username="carol", password="another1", email="ALICE@example.com")

    def test_login_returns_user(self, auth_service, user):
        assert auth_service.login("alice", "secret123").id == user.id

    def test_login_with_wrong_password(self, auth_service, user):
        with pytest.raises(ValueError, match="Invalid username or password"):
            auth_service.login("alice", "nope")

    def test_login_with_unknown_user(self, auth_service):
        with pytest.raises(ValueError, match="Invalid username or password"):
            auth_service.login("ghost", "secret123")

    def test_register_race_reports_conflict(self, auth_service, user, monkeypatch):
        # both lookups miss, the unique index catches the duplicate
        monkeypatch.setattr(auth_service.user_repository, "find_by_username", lambda username: None)

        with pytest.raises(UserAlreadyExistsError):
            auth_service.register(username="alice", password="another1")

    def test_update_password(self, auth_service, user):
        auth_service.update_user(user.id, {"password": "changed123"})
        assert auth_service.login("alice", "changed123").id == user.id

    def test_list_and_count(self, auth_service, user, other_user):
        assert auth_service.count_users() == 2
        assert {u.username for u in auth_service.list_users()} == {"alice", "bob"}

    def test_delete_user(self, auth_service, user):
        assert auth_service.delete_user(user.id) is True
        assert auth_service.get_user_by_id(user.id) is None
        assert auth_service.delete_user(user.id) is False


class TestUserRepository:
    """Tests for the SQL user repository."""

    def test_exists_by_username_or_email(self, auth_service, user):
        repository = auth_service.user_repository

        assert repository.exists("alice")
        assert repository.exists("someone", email="ALICE@example.com")
        assert not repository.exists("someone")
        assert not repository.exists("someone", email="someone@example.com")

    def test_update_touches_timestamp(self, auth_service, user):
        before = user.updated_at
        updated = auth_service.user_repository.update(user.id, {"email": "new@example.com", "id": "ignored"})

        assert updated.email == "new@example.com"
        assert updated.id == user.id
        assert updated.updated_at >= before


class TestRegisterRoute:
    """Tests for the HTML registration form."""

    def test_register_sets_cookie(self, client):
        response = register(client)

        assert response.status_code == 201
        assert settings.AUTH_COOKIE_NAME in response.cookies
        assert "httponly" in response.headers["set-cookie"].lower()
        assert 'hx-swap-oob="true"' in response.text
        assert "alice" in response.text

    def test_duplicate_username(self, client):
        register(client)
        client.cookies.clear()

        response = register(client)
        assert response.status_code == 409
        assert "Something went wrong!" in response.text
        assert "Username already exists" in response.text

    def test_password_mismatch(self, client):
        response = client.post(
            "/register",
            data={"username": "alice", "password": "secret123", "confirm_password": "secret124"},
            headers=HTMX,
        )
        assert response.status_code == 422
        assert "Passwords do not match" in response.text

    def test_short_username(self, client):
        response = register(client, username="al")
        assert response.status_code == 422

    def test_short_password(self, client):
        response = register(client, password="123")
        assert response.status_code == 422

    def test_invalid_email(self, client):
        response = register(client, email="not-an-email")
        assert response.status_code == 400


class TestLoginRoute:
    """Tests for login and logout through the HTML forms."""

    def test_login_sets_cookie(self, client):
        register(client)
        client.cookies.clear()

        response = client.post("/login", data={"username": "alice", "password": "secret123"}, headers=HTMX)
        assert response.status_code == 200
        assert settings.AUTH_COOKIE_NAME in response.cookies
        assert "Welcome back, alice" in response.text
        assert client.get("/house").status_code == 200

    def test_wrong_password(self, client):
        register(client)
        client.cookies.clear()

        response = client.post("/login", data={"username": "alice", "password": "wrong123"}, headers=HTMX)
        assert response.status_code == 401
        assert "Invalid username or password" in response.text
        assert settings.AUTH_COOKIE_NAME not in response.cookies

    def test_username_is_stripped_like_registration(self, client):
        register(client, username=" alice ")
        client.cookies.clear()

        response = client.post("/login", data={"username": " alice", "password": "secret123"}, headers=HTMX)
        assert response.status_code == 200
        assert "Welcome back, alice" in response.text

    def test_empty_fields(self, client):
        response = client.post("/login", data={"username": "", "password": ""}, headers=HTMX)
        assert response.status_code == 422

    def test_logout_clears_cookie(self, client):
        register(client)

        response = client.get("/logout", headers=HTMX)
        assert response.status_code == 200
        assert "Max-Age=0" in response.headers["set-cookie"]
        assert "logged out" in response.text
        assert client.get("/house", follow_redirects=False).status_code == 303

    def test_login_page_renders_layout(self, client):
        response = client.get("/login")
        assert "<!DOCTYPE html>" in response.text
        assert 'id="header"' in response.text
        assert 'hx-post="/login"' in response.text

    def test_login_page_fragment_for_htmx(self, client):
        response = client.get("/login", headers=HTMX)
        assert "<!DOCTYPE html>" not in response.text
        assert 'hx-post="/login"' in response.text

    def test_index_greets_logged_in_user(self, client):
        register(client)
        assert "Welcome back, alice" in client.get("/").text
