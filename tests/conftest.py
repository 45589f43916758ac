"""Shared test fixtures."""

import pytest

from entitykit.config import reset_settings
from entitykit.core.models import FieldRegistry
from sample_entities import FakeStorage, Team, User


@pytest.fixture(autouse=True)
def clean_settings():
    """Reset settings and registry caches around every test."""
    reset_settings()
    FieldRegistry.clear_cache()
    yield
    reset_settings()
    FieldRegistry.clear_cache()


@pytest.fixture
def user() -> User:
    """Fixture providing a user without relations."""
    return User(id=1, name="ada lovelace", email="ada@example.com")


@pytest.fixture
def team_with_members() -> Team:
    """Fixture providing a team whose members and lead point back to it."""
    team = Team(id=10, name="analytics")
    lead = User(id=1, name="ada", team=team)
    member = User(id=2, name="grace", team=team, manager=lead)
    team.lead = lead
    team.members = [lead, member]
    return team


@pytest.fixture
def storage(user) -> FakeStorage:
    """Fixture providing storage holding one user."""
    return FakeStorage([user])
