"""Match scoring and ranking.

Score = 30 per shared sport, +25 for the same location code, +15 for the
same skill level, capped at 100. Candidates are ordered by descending
score; equal scores keep their input order.
"""

from __future__ import annotations

from collections.abc import Sequence

from buddy_finder.matching.filters import shared_sports
from buddy_finder.matching.models import MAX_SCORE, MatchResult
from buddy_finder.profiles.models import InvalidProfileError, Profile, SkillLevel

SHARED_SPORT_POINTS = 30
LOCATION_POINTS = 25
SKILL_LEVEL_POINTS = 15


def _require_skill_level(profile: Profile) -> SkillLevel:
    # Profiles built with model_construct skip validation
    level = profile.skill_level
    if isinstance(level, SkillLevel):
        return level
    try:
        return SkillLevel(level)
    except (TypeError, ValueError):
        raise InvalidProfileError(
            f"Profile {profile.id} has an undefined skill level: {level!r}",
            profile_id=profile.id,
        ) from None


def _build_result(requester: Profile, candidate: Profile) -> MatchResult:
    requester_level = _require_skill_level(requester)
    candidate_level = _require_skill_level(candidate)

    shared = shared_sports(requester, candidate)
    location_match = candidate.location_code == requester.location_code
    skill_match = candidate_level is requester_level

    score = len(shared) * SHARED_SPORT_POINTS
    if location_match:
        score += LOCATION_POINTS
    if skill_match:
        score += SKILL_LEVEL_POINTS

    return MatchResult(
        profile=candidate,
        score=min(MAX_SCORE, score),
        shared_sports=shared,
        location_match=location_match,
        skill_match=skill_match,
    )


def score_candidate(requester: Profile, candidate: Profile) -> int:
    """Return the 0-100 match score of a candidate for a requester.

    Raises:
        InvalidProfileError: If either profile has an undefined skill level.
    """
    return _build_result(requester, candidate).score


def rank_candidates(
    requester: Profile, candidates: Sequence[Profile]
) -> list[MatchResult]:
    """Score every candidate and order them by descending score.

    The sort is stable, so candidates with equal scores stay in the order
    they were given. No other tie-breaker is applied.

    Raises:
        InvalidProfileError: If a profile has an undefined skill level.
    """
    results = [_build_result(requester, candidate) for candidate in candidates]
    return sorted(results, key=lambda result: -result.score)
