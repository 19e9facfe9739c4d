"""End-to-end tests for the OAuth redirect flow."""

from urllib.parse import parse_qs, urlparse

from tests.harness import create_client_fixture

# E2E test fixture
client = create_client_fixture()

FRONTEND = "http://localhost:3000"


def _start(client, provider="google") -> str:
    response = client.post("/auth/login", json={"provider": provider})
    assert response.status_code == 200
    url = response.json()["authorization_url"]
    return parse_qs(urlparse(url).query)["state"][0]


def _callback(client, provider, email, state):
    return client.get(
        f"/auth/callback/{provider}",
        params={"code": email, "state": state},
        follow_redirects=False,
    )


class TestOAuthFlow:
    """End-to-end tests for provider sign-in."""

    def test_initiate_login_returns_provider_url(self, client):
        response = client.post("/auth/login", json={"provider": "github"})

        assert response.status_code == 200
        data = response.json()
        assert data["authorization_url"].startswith("https://github.example.com/")
        assert "oauth_state" in response.cookies

    def test_unknown_provider_is_rejected(self, client):
        response = client.post("/auth/login", json={"provider": "myspace"})

        assert response.status_code == 422

    def test_callback_signs_in_and_redirects_to_frontend(self, client):
        # Arrange
        state = _start(client)

        # Act
        response = _callback(client, "google", "ada@example.com", state)

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == FRONTEND
        session = client.get("/auth/session").json()
        assert session["authenticated"] is True
        assert session["session"]["email"] == "ada@example.com"
        assert session["session"]["primary_auth_method"] == "google"

    def test_callback_with_mismatched_state_is_refused(self, client):
        _start(client)

        response = _callback(client, "google", "ada@example.com", "forged-state")

        assert response.status_code == 302
        assert response.headers["location"] == (
            f"{FRONTEND}/auth/error?error=token_invalid"
        )
        assert client.get("/auth/session").json()["authenticated"] is False

    def test_provider_denial_redirects_to_error_page(self, client):
        state = _start(client)

        response = client.get(
            "/auth/callback/google",
            params={"error": "access_denied", "state": state},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == (
            f"{FRONTEND}/auth/error?error=provider_error"
        )

    def test_provider_sign_in_links_registered_account(self, client):
        """Signing in with GitHub under a registered email joins the account."""
        # Arrange
        registered = client.post(
            "/auth/register",
            json={"email": "ada@example.com", "password": "correct-horse"},
        ).json()
        state = _start(client, "github")

        # Act
        _callback(client, "github", "ada@example.com", state)

        # Assert
        session = client.get("/auth/session").json()["session"]
        assert session["user_id"] == registered["user_id"]
        assert session["primary_auth_method"] == "github"

        methods = client.get("/account/password").json()
        assert methods["methods"] == ["email", "github"]

    def test_credentials_on_provider_account_name_the_providers(self, client):
        state = _start(client, "discord")
        _callback(client, "discord", "bob@example.com", state)
        client.post("/auth/logout")

        response = client.post(
            "/auth/login/credentials",
            json={"email": "bob@example.com", "password": "anything-at-all"},
        )

        assert response.status_code == 401
        detail = response.json()["detail"]
        assert detail["code"] == "no_password_set"
        assert detail["available_providers"] == ["discord"]
