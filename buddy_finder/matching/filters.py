"""Candidate eligibility rules."""

from __future__ import annotations

from collections.abc import Iterable

from buddy_finder.profiles.models import InvalidProfileError, Profile


def shared_sports(requester: Profile, candidate: Profile) -> frozenset[str]:
    """Return the sports both players declared."""
    return requester.sports & candidate.sports


def ensure_matchable(requester: Profile) -> None:
    """Raise InvalidProfileError if the requester cannot be matched at all."""
    if not requester.sports:
        raise InvalidProfileError(
            f"Profile {requester.id} has no sports declared",
            profile_id=requester.id,
        )


def is_eligible(requester: Profile, candidate: Profile) -> bool:
    """Return True if the candidate may be shown to the requester.

    A candidate must be someone else, be open to matching, and share at
    least one sport or the location code with the requester. Either kind
    of overlap is enough on its own.
    """
    if candidate.id == requester.id:
        return False
    if not candidate.is_available:
        return False
    return bool(shared_sports(requester, candidate)) or (
        candidate.location_code == requester.location_code
    )


def filter_candidates(requester: Profile, pool: Iterable[Profile]) -> list[Profile]:
    """Select the eligible candidates from a pool, keeping pool order.

    Raises:
        InvalidProfileError: If the requester has no sports declared.
    """
    ensure_matchable(requester)
    return [candidate for candidate in pool if is_eligible(requester, candidate)]
