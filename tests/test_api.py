from app.core.config import settings


def api_register(client, username="alice", password="secret123", email=None):
    body = {"username": username, "password": password}
    if email:
        body["email"] = email
    return client.post("/api/register", json=body)


class TestApiAuth:
    """Tests for the JSON register/login endpoints."""

    def test_register(self, client):
        response = api_register(client, email="alice@example.com")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["errors"] == []
        assert body["data"]["token"]
        assert body["data"]["expires_in"] == settings.JWT_EXPIRATION_HOURS * 3600
        assert body["data"]["user"]["username"] == "alice"
        assert body["data"]["user"]["email"] == "alice@example.com"

    def test_register_does_not_set_cookie(self, client):
        response = api_register(client)
        assert settings.AUTH_COOKIE_NAME not in response.cookies

    def test_register_duplicate(self, client):
        api_register(client)

        response = api_register(client)
        assert response.status_code == 409
        assert response.json()["message"] == "Username already exists"

    def test_register_short_password(self, client):
        response = api_register(client, password="123")

        assert response.status_code == 422
        assert response.json()["errors"] == ["Password must be at least 6 characters long"]

    def test_login(self, client):
        api_register(client)

        response = client.post("/api/login", json={"username": "alice", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["data"]["user"]["username"] == "alice"

    def test_login_wrong_password(self, client):
        api_register(client)

        response = client.post("/api/login", json={"username": "alice", "password": "nope123"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid username or password"


class TestApiProfile:
    """Tests for the bearer protected profile endpoint."""

    def test_profile_with_bearer_token(self, client):
        token = api_register(client).json()["data"]["token"]

        response = client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["data"]["username"] == "alice"

    def test_profile_with_invalid_token(self, client):
        response = client.get("/api/profile", headers={"Authorization": "Bearer not.a.token"})
        assert response.status_code == 401
        assert response.json()["message"].startswith("Invalid token")

    def test_api_token_opens_html_routes(self, client):
        token = api_register(client).json()["data"]["token"]

        response = client.get("/house", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
