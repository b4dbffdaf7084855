from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt

from app.core.config import settings
from app.core.jwt_handler import create_access_token
from app.core.middleware import extract_bearer_token
from tests.helpers import HTMX, register


def token_for(sub=None, **overrides):
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub or str(uuid4()),
        "username": "alice",
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "nbf": now,
        "exp": now + timedelta(hours=1),
    }
    payload.update(overrides)
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


class TestBearerParsing:
    """Tests for Authorization header parsing."""

    def test_valid_header(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert extract_bearer_token("bearer abc") == "abc"

    def test_malformed_headers(self):
        assert extract_bearer_token(None) is None
        assert extract_bearer_token("") is None
        assert extract_bearer_token("Token abc") is None
        assert extract_bearer_token("Bearer") is None
        assert extract_bearer_token("Bearer a b") is None


class TestProtectedRoutes:
    """Tests for rejection of unauthenticated requests."""

    def test_page_request_redirects_to_login(self, client):
        response = client.get("/house", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    def test_every_group_is_protected(self, client):
        for path in ("/house", "/home", "/car", "/car/expenses/1", "/house/search"):
            response = client.get(path, follow_redirects=False)
            assert response.status_code == 303, path

    def test_htmx_request_gets_redirect_header(self, client):
        response = client.get("/car", headers=HTMX, follow_redirects=False)
        assert response.status_code == 401
        assert response.headers["HX-Redirect"] == "/login"

    def test_api_request_gets_json_401(self, client):
        response = client.get("/api/profile")
        assert response.status_code == 401
        assert response.json()["message"] == "Authentication required"

    def test_public_routes_pass_through(self, client):
        assert client.get("/").status_code == 200
        assert client.get("/login").status_code == 200
        assert client.get("/register").status_code == 200
        assert client.get("/health").json() == {"status": "ok"}

    def test_prefix_match_stops_at_path_boundary(self, client):
        response = client.get("/housekeeping", follow_redirects=False)
        assert response.status_code == 404


class TestTokenValidation:
    """Tests for cookie and header tokens."""

    def test_registered_user_can_open_pages(self, client):
        register(client)
        assert client.get("/house").status_code == 200
        assert client.get("/car").status_code == 200

    def test_bearer_header_is_accepted(self, client):
        response = client.get("/house", headers={"Authorization": f"Bearer {token_for()}"})
        assert response.status_code == 200

    def test_malformed_bearer_header_is_rejected(self, client):
        response = client.get(
            "/house",
            headers={"Authorization": f"Token {token_for()}"},
            follow_redirects=False,
        )
        assert response.status_code == 303

    def test_expired_cookie_is_cleared(self, client):
        past = datetime.now(timezone.utc) - timedelta(hours=3)
        client.cookies.set(settings.AUTH_COOKIE_NAME, token_for(iat=past, nbf=past, exp=past + timedelta(hours=1)))

        response = client.get("/house", follow_redirects=False)
        assert response.status_code == 303
        assert "Max-Age=0" in response.headers["set-cookie"]

    def test_foreign_issuer_is_rejected(self, client):
        client.cookies.set(settings.AUTH_COOKIE_NAME, token_for(iss="another-app"))
        response = client.get("/house", follow_redirects=False)
        assert response.status_code == 303

    def test_non_uuid_subject_is_rejected(self, client):
        client.cookies.set(settings.AUTH_COOKIE_NAME, token_for(sub="not-a-uuid"))
        response = client.get("/house", headers=HTMX, follow_redirects=False)
        assert response.status_code == 401


class TestCookieRefresh:
    """Tests for reissuing cookies close to expiry."""

    def test_cookie_close_to_expiry_is_reissued(self, client, monkeypatch):
        monkeypatch.setattr(settings, "JWT_REFRESH_THRESHOLD_MINUTES", 120)
        soon = datetime.now(timezone.utc) + timedelta(minutes=30)
        old_token = token_for(exp=soon)
        client.cookies.set(settings.AUTH_COOKIE_NAME, old_token)

        response = client.get("/house")
        assert response.status_code == 200
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{settings.AUTH_COOKIE_NAME}=")
        assert old_token not in set_cookie

    def test_fresh_cookie_is_not_reissued(self, client):
        client.cookies.set(
            settings.AUTH_COOKIE_NAME,
            create_access_token(user_id=str(uuid4()), username="alice").value,
        )
        response = client.get("/house")
        assert response.status_code == 200
        assert "set-cookie" not in response.headers

    def test_bearer_token_is_never_turned_into_a_cookie(self, client, monkeypatch):
        monkeypatch.setattr(settings, "JWT_REFRESH_THRESHOLD_MINUTES", 120)
        soon = datetime.now(timezone.utc) + timedelta(minutes=30)

        response = client.get("/house", headers={"Authorization": f"Bearer {token_for(exp=soon)}"})
        assert response.status_code == 200
        assert "set-cookie" not in response.headers
