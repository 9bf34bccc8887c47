# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch
from typing import Generator

from fakes import FakeQuery, FakeSupabase

from main import create_app
from dependencies.auth import CurrentUser, get_current_user
from models.enums import Role


# -----------------------------------------------------
# App + client
# -----------------------------------------------------
@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# -----------------------------------------------------
# Users
# -----------------------------------------------------
@pytest.fixture
def make_user():
    def factory(role, team_id=None, uid="U1", display_name="Test User"):
        return CurrentUser(
            uid=uid,
            email=f"{uid.lower()}@example.com",
            display_name=display_name,
            role=role,
            team_id=team_id,
        )
    return factory


@pytest.fixture
def login_as(app):
    """Make get_current_user return the given profile."""
    def set_user(user):
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return set_user


@pytest.fixture
def core_user(make_user):
    return make_user(Role.core, uid="CORE1")


@pytest.fixture
def semi_core_user(make_user):
    return make_user(Role.semi_core, uid="SEMI1")


@pytest.fixture
def head_user(make_user):
    return make_user(Role.head, team_id="T1", uid="HEAD1")


@pytest.fixture
def volunteer_user(make_user):
    return make_user(Role.volunteer, team_id="T1", uid="U8")


# -----------------------------------------------------
# Supabase
# -----------------------------------------------------
@pytest.fixture
def fake_supabase():
    """
    Routes reach Supabase through core.supabase_helpers.require_client.
    Call the fixture with table rows to configure it.
    """
    patchers = []

    def install(tables=None):
        fake = FakeSupabase(tables)
        patcher = patch("core.supabase_helpers.get_supabase_client", return_value=fake)
        patcher.start()
        patchers.append(patcher)
        return fake

    yield install

    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def fake_query():
    """Standalone query builder for filter tests."""
    return FakeQuery
