"""Tests for profile data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError


class TestSkillLevel:
    """Test SkillLevel enum."""

    def test_skill_level_has_three_ordered_values(self):
        """SkillLevel should list Beginner, Intermediate and Pro in order."""
        from buddy_finder.profiles.models import SkillLevel

        assert [level.value for level in SkillLevel] == [
            "Beginner",
            "Intermediate",
            "Pro",
        ]


class TestProfileValidation:
    """Test Profile construction and validation."""

    def test_profile_valid_creation(self, make_profile):
        """Profile should accept a complete record."""
        from buddy_finder.profiles.models import SkillLevel, Weekday

        profile = make_profile("abc", name="Asha", sports=["Football", "Tennis"])

        assert profile.id == "abc"
        assert profile.name == "Asha"
        assert profile.location_code == "411001"
        assert profile.sports == frozenset({"Football", "Tennis"})
        assert profile.skill_level is SkillLevel.INTERMEDIATE
        assert profile.is_available is True
        assert profile.availability == {
            Weekday.SATURDAY: frozenset({"Morning (6-10 AM)"})
        }

    def test_sports_are_stripped_and_deduplicated(self, make_profile):
        """Duplicate and blank sport names should collapse."""
        profile = make_profile(sports=["Tennis", " Tennis ", "", "Squash"])

        assert profile.sports == frozenset({"Tennis", "Squash"})

    def test_sports_default_to_empty(self):
        """A profile may be stored before any sports are declared."""
        from buddy_finder.profiles.models import Profile

        profile = Profile.from_dict(
            {"id": "x", "name": "X", "location_code": "1", "skill_level": "Pro"}
        )

        assert profile.sports == frozenset()

    def test_sports_must_be_a_list(self, make_profile):
        """A bare string is not a list of sports."""
        from buddy_finder.profiles.models import InvalidProfileError

        with pytest.raises(InvalidProfileError):
            make_profile(sports="Tennis")

    def test_skill_level_is_case_insensitive(self, make_profile):
        """Skill level strings should be accepted in any case."""
        from buddy_finder.profiles.models import SkillLevel

        assert make_profile(skill_level="pro").skill_level is SkillLevel.PRO
        assert make_profile(skill_level=" BEGINNER ").skill_level is (
            SkillLevel.BEGINNER
        )

    def test_unknown_skill_level_is_rejected(self, make_profile):
        """Only the three defined skill levels are valid."""
        from buddy_finder.profiles.models import InvalidProfileError

        with pytest.raises(InvalidProfileError) as exc_info:
            make_profile("bad-skill", skill_level="Expert")

        assert exc_info.value.profile_id == "bad-skill"

    def test_blank_location_code_is_rejected(self, make_profile):
        """Location code must not be blank."""
        from buddy_finder.profiles.models import InvalidProfileError

        with pytest.raises(InvalidProfileError):
            make_profile(location_code="   ")

    def test_missing_id_is_rejected(self):
        """Profiles require an id."""
        from buddy_finder.profiles.models import InvalidProfileError, Profile

        with pytest.raises(InvalidProfileError) as exc_info:
            Profile.from_dict(
                {"name": "X", "location_code": "1", "skill_level": "Pro"}
            )

        assert exc_info.value.profile_id is None

    def test_availability_days_are_normalized(self, make_profile):
        """Day names should be case-insensitive and empty days dropped."""
        from buddy_finder.profiles.models import Weekday

        profile = make_profile(
            availability={
                "monday": ["Evening (5-9 PM)"],
                "SUNDAY": [],
                "Friday": ["Night (9-11 PM)", "Night (9-11 PM)"],
            }
        )

        assert profile.availability == {
            Weekday.MONDAY: frozenset({"Evening (5-9 PM)"}),
            Weekday.FRIDAY: frozenset({"Night (9-11 PM)"}),
        }

    def test_unknown_day_is_rejected(self, make_profile):
        """Availability keys must be weekday names."""
        from buddy_finder.profiles.models import InvalidProfileError

        with pytest.raises(InvalidProfileError):
            make_profile(availability={"Funday": ["Morning"]})

    def test_profile_is_immutable(self, make_profile):
        """Profiles should not be mutable after construction."""
        profile = make_profile()

        with pytest.raises(ValidationError):
            profile.name = "Someone else"  # type: ignore[misc]


class TestProfileSerialization:
    """Test Profile to_dict/from_dict."""

    def test_to_dict_emits_sorted_lists(self, make_profile):
        """Sets should serialize as sorted lists, days in calendar order."""
        profile = make_profile(
            sports=["Tennis", "Badminton", "Football"],
            availability={
                "Sunday": ["Morning (6-10 AM)"],
                "Monday": ["Night (9-11 PM)", "Evening (5-9 PM)"],
            },
        )

        data = profile.to_dict()

        assert data["sports"] == ["Badminton", "Football", "Tennis"]
        assert data["skill_level"] == "Intermediate"
        assert list(data["availability"]) == ["Monday", "Sunday"]
        assert data["availability"]["Monday"] == [
            "Evening (5-9 PM)",
            "Night (9-11 PM)",
        ]

    def test_round_trip_preserves_availability(self, make_profile):
        """Availability is not scored but must survive serialization."""
        from buddy_finder.profiles.models import Profile

        profile = make_profile(
            availability={"Wednesday": ["Afternoon (12-5 PM)"]},
            is_available=False,
        )

        restored = Profile.from_dict(profile.to_dict())

        assert restored == profile


class TestProfileErrors:
    """Test profile error types."""

    def test_invalid_profile_error_is_value_error(self):
        """InvalidProfileError should be a ValueError carrying the profile id."""
        from buddy_finder.profiles.models import InvalidProfileError

        error = InvalidProfileError("broken", profile_id="p1")

        assert isinstance(error, ValueError)
        assert error.profile_id == "p1"

    def test_profile_not_found_error_message(self):
        """ProfileNotFoundError should name the missing id."""
        from buddy_finder.profiles.models import ProfileNotFoundError

        error = ProfileNotFoundError("ghost")

        assert isinstance(error, LookupError)
        assert error.profile_id == "ghost"
        assert "ghost" in str(error)
