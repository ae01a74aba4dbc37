"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture
def make_profile():
    """Factory for valid profiles with overridable fields."""
    from buddy_finder.profiles.models import Profile

    def _make(profile_id: str = "user-1", **overrides) -> Profile:
        data = {
            "id": profile_id,
            "name": f"Player {profile_id}",
            "location_code": "411001",
            "sports": ["Football"],
            "skill_level": "Intermediate",
            "is_available": True,
            "availability": {"Saturday": ["Morning (6-10 AM)"]},
        }
        data.update(overrides)
        return Profile.from_dict(data)

    return _make


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Keep settings singletons and logging state from leaking between tests."""
    yield
    from buddy_finder.config.settings import reset_settings
    from buddy_finder.matching.config import reset_matching_config
    from buddy_finder.utils.logging import reset_logging

    reset_settings()
    reset_matching_config()
    reset_logging()
