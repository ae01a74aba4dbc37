"""Buddy matching service.

This module provides the MatchingService class which handles:
- Fetching the requester and the candidate pool from a Profile Store
- Filtering the pool down to eligible candidates
- Ranking the eligible candidates by match score
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from buddy_finder.matching.config import MatchingConfig, get_matching_config
from buddy_finder.matching.filters import filter_candidates
from buddy_finder.matching.models import MatchResult
from buddy_finder.matching.ranker import rank_candidates
from buddy_finder.profiles.models import Profile, ProfileNotFoundError

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    """Read operations the matching service needs from a Profile Store."""

    async def get_profile(self, profile_id: str) -> Profile | None: ...

    async def list_available_profiles(
        self, excluding: str | None = None
    ) -> list[Profile]: ...


class MatchingService:
    """Service for computing ranked buddy matches.

    The service holds no state between calls: every request re-reads the
    store and recomputes the result, so a refresh is just another call.
    """

    def __init__(
        self, store: ProfileStore, config: MatchingConfig | None = None
    ) -> None:
        """Initialize the service.

        Args:
            store: Profile Store to read the requester and pool from.
            config: Matching configuration (defaults to the singleton).
        """
        self.store = store
        self.config = config or get_matching_config()

    async def compute_matches(self, requester_id: str) -> list[MatchResult]:
        """Compute ranked matches for a requester.

        Store errors are propagated unchanged; retrying is left to the caller.

        Args:
            requester_id: Id of the profile asking for matches.

        Returns:
            Match results ordered by descending score.

        Raises:
            ProfileNotFoundError: If the requester id is unknown.
            InvalidProfileError: If the requester or a candidate is invalid.
        """
        requester = await self.get_requester(requester_id)
        return await self.matches_for(requester)

    async def get_requester(self, requester_id: str) -> Profile:
        """Load the requesting profile or raise ProfileNotFoundError."""
        requester = await self.store.get_profile(requester_id)
        if requester is None:
            raise ProfileNotFoundError(requester_id)
        return requester

    async def matches_for(self, requester: Profile) -> list[MatchResult]:
        """Fetch the available pool and match an already loaded requester."""
        pool = await self.store.list_available_profiles(excluding=requester.id)
        return self.match_profile(requester, pool)

    def match_profile(
        self, requester: Profile, pool: Sequence[Profile]
    ) -> list[MatchResult]:
        """Filter and rank a candidate pool for a requester.

        Raises:
            InvalidProfileError: If the requester or a candidate is invalid.
        """
        eligible = filter_candidates(requester, pool)
        results = rank_candidates(requester, eligible)
        logger.info(
            "Matched %s: %d eligible of %d candidates",
            requester.id,
            len(eligible),
            len(pool),
        )
        if results:
            logger.debug(
                "Top match for %s: %s (score=%d)",
                requester.id,
                results[0].profile.id,
                results[0].score,
            )
        return results

    def tier_for(self, score: int) -> str:
        """Return the display tier for a score: strong, good or fair."""
        if score >= self.config.strong_match_threshold:
            return "strong"
        if score >= self.config.good_match_threshold:
            return "good"
        return "fair"

    def format_results(
        self, requester: Profile, results: Sequence[MatchResult]
    ) -> str:
        """Format match results for CLI output."""
        lines: list[str] = []
        lines.append(
            f"{requester.name} ({requester.location_code}, "
            f"{requester.skill_level.value}): {', '.join(sorted(requester.sports))}"
        )

        if not results:
            lines.append("No matches found yet. Try adding sports or check back later.")
            return "\n".join(lines)

        lines.append(f"Found {len(results)} potential buddies:")
        for position, result in enumerate(results, start=1):
            buddy = result.profile
            lines.append(
                f"{position:>3}. {buddy.name} [{buddy.id}] "
                f"{result.score}% {self.tier_for(result.score).upper()}"
            )
            details = [
                f"location={buddy.location_code}",
                f"skill={buddy.skill_level.value}",
            ]
            if result.shared_sports:
                details.append(f"shared={', '.join(sorted(result.shared_sports))}")
            lines.append(f"     {' | '.join(details)}")
            lines.append(f"     invite: {result.invite}")
        return "\n".join(lines)
