# tests/test_auth.py

"""
Tests for authentication endpoints.
"""

from fastapi.testclient import TestClient
from unittest.mock import patch, Mock

from models.enums import Role
from fakes import FakeSupabase


def test_login_success(client: TestClient):
    """Test successful login."""
    with patch("routers.auth.get_supabase_client") as mock_supabase:
        mock_client = Mock()
        mock_session = Mock()
        mock_session.access_token = "test-token"
        mock_response = Mock()
        mock_response.session = mock_session
        mock_client.auth.sign_in_with_password.return_value = mock_response
        mock_supabase.return_value = mock_client

        response = client.post(
            "/auth/login",
            json={"email": " Test@Example.com ", "password": "password123"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"] == "test-token"
        mock_client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "test@example.com", "password": "password123"}
        )


def test_login_invalid_credentials(client: TestClient):
    """Test login with invalid credentials."""
    with patch("routers.auth.get_supabase_client") as mock_supabase:
        mock_client = Mock()
        mock_client.auth.sign_in_with_password.side_effect = Exception("Invalid credentials")
        mock_supabase.return_value = mock_client

        response = client.post(
            "/auth/login",
            json={"email": "test@example.com", "password": "wrongpassword"}
        )

        assert response.status_code == 401
        assert "Invalid email or password" in response.json()["detail"]


def test_invalid_token_rejected(client: TestClient):
    with patch("dependencies.auth.get_supabase_client") as mock_supabase:
        mock_client = Mock()
        mock_client.auth.get_user.side_effect = Exception("bad jwt")
        mock_supabase.return_value = mock_client

        response = client.get("/auth/me", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401


def test_user_without_profile_row_has_no_access(client: TestClient):
    fake = FakeSupabase({"users": []})
    fake.auth.get_user.return_value = Mock(user=Mock(id="U1", email="u1@example.com"))

    with patch("dependencies.auth.get_supabase_client", return_value=fake):
        response = client.get("/auth/me", headers={"Authorization": "Bearer good"})

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "Unassigned"
    assert body["access_level"] == "none"
    assert body["team_not_configured"] is False


def test_profile_is_loaded_per_request(client: TestClient):
    fake = FakeSupabase({"users": [{"uid": "U1", "role": "Head", "team_id": None}]})
    fake.auth.get_user.return_value = Mock(user=Mock(id="U1", email="u1@example.com"))

    with patch("dependencies.auth.get_supabase_client", return_value=fake):
        response = client.get("/auth/me", headers={"Authorization": "Bearer good"})

    body = response.json()
    assert body["access_level"] == "head"
    assert body["team_not_configured"] is True
    assert fake.queries_for("users")[0].called("eq") == [("uid", "U1")]


def test_update_own_profile(client: TestClient, login_as, make_user):
    login_as(make_user(Role.volunteer, team_id="T1", uid="U8"))

    with patch("routers.auth.get_supabase_client") as mock_supabase:
        mock_client = Mock()
        mock_supabase.return_value = mock_client

        response = client.patch("/auth/me", json={"display_name": "  Eight  "})

        assert response.status_code == 200
        assert response.json()["display_name"] == "Eight"
        mock_client.table.return_value.update.assert_called_once_with({"display_name": "Eight"})
