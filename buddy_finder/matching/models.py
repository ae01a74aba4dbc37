"""Data models for match results."""

from __future__ import annotations

from dataclasses import dataclass, field

from buddy_finder.profiles.models import Profile

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass(frozen=True)
class MatchResult:
    """A ranked candidate for one requester.

    Built fresh for every match request and never persisted.
    """

    profile: Profile
    score: int
    shared_sports: frozenset[str] = field(default_factory=frozenset)
    location_match: bool = False
    skill_match: bool = False

    def __post_init__(self) -> None:
        if not (MIN_SCORE <= self.score <= MAX_SCORE):
            raise ValueError(
                f"score must be between {MIN_SCORE} and {MAX_SCORE} (got {self.score})"
            )

    @property
    def invite_sports(self) -> list[str]:
        """Sports to suggest when reaching out.

        The shared sports, or the buddy's first sport when nothing is shared
        (the match came from location alone).
        """
        if self.shared_sports:
            return sorted(self.shared_sports)
        return sorted(self.profile.sports)[:1]

    @property
    def invite(self) -> str:
        """Connect-now message addressed to the buddy."""
        sports = ", ".join(self.invite_sports) or "sports"
        return (
            f"Hi {self.profile.name}, I found your profile on Find Your Buddy "
            f"and would love to play {sports} together!"
        )

    def to_dict(self) -> dict:
        """Serialize to a JSON-safe dictionary."""
        return {
            "profile": self.profile.to_dict(),
            "score": self.score,
            "shared_sports": sorted(self.shared_sports),
            "location_match": self.location_match,
            "skill_match": self.skill_match,
            "invite": self.invite,
        }
