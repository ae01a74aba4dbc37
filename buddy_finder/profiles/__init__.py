"""Player profiles and the Profile Store.

Public API:
- Profile: Validated, immutable profile model
- SkillLevel / Weekday: Enumerations used by profiles
- ProfileRepository: aiosqlite-backed Profile Store
- ProfileLoader: Load profile records from YAML/JSON files
- InvalidProfileError / ProfileNotFoundError: Profile errors
"""

from buddy_finder.profiles.loader import ProfileLoader
from buddy_finder.profiles.models import (
    InvalidProfileError,
    Profile,
    ProfileNotFoundError,
    SkillLevel,
    Weekday,
)
from buddy_finder.profiles.repository import ProfileRepository

__all__ = [
    "Profile",
    "SkillLevel",
    "Weekday",
    "ProfileRepository",
    "ProfileLoader",
    "InvalidProfileError",
    "ProfileNotFoundError",
]
