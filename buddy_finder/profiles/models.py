"""Data models for player profiles."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)


class InvalidProfileError(ValueError):
    """Raised when a profile violates a data-model invariant."""

    def __init__(self, message: str, profile_id: str | None = None):
        super().__init__(message)
        self.profile_id = profile_id


class ProfileNotFoundError(LookupError):
    """Raised when a profile id does not resolve to a stored profile."""

    def __init__(self, profile_id: str):
        super().__init__(f"Profile not found: {profile_id}")
        self.profile_id = profile_id


class SkillLevel(str, Enum):
    """Self-reported playing level, ordered from lowest to highest."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    PRO = "Pro"


class Weekday(str, Enum):
    """Days a player can declare availability for."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


def _clean_labels(values: object, field_name: str) -> frozenset[str]:
    if values is None:
        return frozenset()
    if not isinstance(values, (list, tuple, set, frozenset)):
        raise ValueError(f"{field_name} must be a list of strings")
    labels = set()
    for value in values:
        if not isinstance(value, str):
            raise ValueError(f"{field_name} entries must be strings (got {value!r})")
        label = value.strip()
        if label:
            labels.add(label)
    return frozenset(labels)


class Profile(BaseModel):
    """A registered player's sport interests, skill, location and availability.

    Profiles are immutable; the matching engine only ever reads them.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    name: str = Field(..., description="Display name")
    location_code: str = Field(
        ..., min_length=1, description="Pin/postal code or city name"
    )
    sports: frozenset[str] = Field(
        default_factory=frozenset, description="Sports the player wants to play"
    )
    skill_level: SkillLevel = Field(..., description="Beginner, Intermediate or Pro")
    is_available: bool = Field(
        default=True, description="Whether the player is open to new buddies"
    )
    availability: dict[Weekday, frozenset[str]] = Field(
        default_factory=dict, description="Time-slot labels per day of the week"
    )
    created_at: datetime | None = Field(default=None, description="First stored")
    updated_at: datetime | None = Field(default=None, description="Last stored")

    @field_validator("id", "location_code", mode="before")
    @classmethod
    def strip_tokens(cls, v: object) -> object:
        # YAML reads unquoted pin codes and numeric ids as ints
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("sports", mode="before")
    @classmethod
    def normalize_sports(cls, v: object) -> frozenset[str]:
        """Strip sport names, drop blanks and collapse duplicates."""
        return _clean_labels(v, "sports")

    @field_validator("skill_level", mode="before")
    @classmethod
    def parse_skill_level(cls, v: object) -> SkillLevel:
        """Accept skill levels case-insensitively."""
        if isinstance(v, SkillLevel):
            return v
        if isinstance(v, str):
            value = v.strip().lower()
            for level in SkillLevel:
                if level.value.lower() == value:
                    return level
        raise ValueError(
            f"Invalid skill level: {v!r}. Must be one of "
            f"{', '.join(level.value for level in SkillLevel)}"
        )

    @field_validator("availability", mode="before")
    @classmethod
    def normalize_availability(cls, v: object) -> dict[Weekday, frozenset[str]]:
        """Map day names to slot sets, dropping days without slots."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("availability must be a mapping of day -> time slots")

        days = {day.value.lower(): day for day in Weekday}
        result: dict[Weekday, frozenset[str]] = {}
        for key, slots in v.items():
            if isinstance(key, Weekday):
                day = key
            else:
                day = days.get(str(key).strip().lower())
            if day is None:
                raise ValueError(f"Unknown day of week: {key!r}")
            labels = _clean_labels(slots, f"availability[{day.value}]")
            if labels:
                result[day] = result.get(day, frozenset()) | labels
        return result

    @field_serializer("sports")
    def serialize_sports(self, sports: frozenset[str]) -> list[str]:
        return sorted(sports)

    @field_serializer("availability")
    def serialize_availability(
        self, availability: dict[Weekday, frozenset[str]]
    ) -> dict[str, list[str]]:
        # Emit days in calendar order so serialized profiles are stable
        return {
            day.value: sorted(availability[day])
            for day in Weekday
            if day in availability
        }

    def to_dict(self) -> dict:
        """Serialize to a JSON-safe dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Profile:
        """Deserialize from a dictionary.

        Raises:
            InvalidProfileError: If the data does not describe a valid profile.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            profile_id = data.get("id") if isinstance(data, dict) else None
            raise InvalidProfileError(
                f"Invalid profile {profile_id or '<unknown>'}: {e}",
                profile_id=str(profile_id) if profile_id is not None else None,
            ) from e
