"""Buddy matching engine.

This module filters a candidate pool down to the players a requester may
be matched with, scores each candidate, and returns them ranked.

Public API:
    - MatchingService: Store fetch -> filter -> rank orchestration
    - MatchResult: Ranked candidate with its score and shared sports
    - filter_candidates / is_eligible: Candidate Filter
    - rank_candidates / score_candidate: Match Ranker
    - MatchingConfig: Display tier settings
"""

from buddy_finder.matching.config import (
    MatchingConfig,
    get_matching_config,
    reset_matching_config,
)
from buddy_finder.matching.filters import filter_candidates, is_eligible, shared_sports
from buddy_finder.matching.models import MatchResult
from buddy_finder.matching.ranker import rank_candidates, score_candidate
from buddy_finder.matching.service import MatchingService, ProfileStore

__all__ = [
    "MatchingService",
    "ProfileStore",
    "MatchResult",
    "filter_candidates",
    "is_eligible",
    "shared_sports",
    "rank_candidates",
    "score_candidate",
    "MatchingConfig",
    "get_matching_config",
    "reset_matching_config",
]
