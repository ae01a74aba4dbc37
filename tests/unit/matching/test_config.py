"""Tests for matching configuration."""

import pytest


class TestMatchingConfig:
    """Test MatchingConfig settings."""

    def test_matching_config_has_defaults(self):
        """MatchingConfig should load with the original badge thresholds."""
        from buddy_finder.matching.config import MatchingConfig

        config = MatchingConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.strong_match_threshold == 70
        assert config.good_match_threshold == 50

    def test_matching_config_reads_from_environment_variables(self, monkeypatch):
        """MatchingConfig should read MATCHING_ environment variables."""
        from buddy_finder.matching.config import MatchingConfig

        monkeypatch.setenv("MATCHING_STRONG_MATCH_THRESHOLD", "80")
        monkeypatch.setenv("MATCHING_GOOD_MATCH_THRESHOLD", "40")

        config = MatchingConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.strong_match_threshold == 80
        assert config.good_match_threshold == 40

    def test_thresholds_must_be_ordered(self):
        """strong_match_threshold below good_match_threshold is invalid."""
        from pydantic import ValidationError

        from buddy_finder.matching.config import MatchingConfig

        with pytest.raises(ValidationError):
            MatchingConfig(
                _env_file=None,  # type: ignore[call-arg]
                strong_match_threshold=40,
                good_match_threshold=60,
            )

    def test_thresholds_must_be_in_range(self):
        """Thresholds live on the 0..100 score scale."""
        from pydantic import ValidationError

        from buddy_finder.matching.config import MatchingConfig

        with pytest.raises(ValidationError):
            MatchingConfig(
                _env_file=None,  # type: ignore[call-arg]
                strong_match_threshold=120,
            )


class TestMatchingConfigSingleton:
    """Test get_matching_config/reset_matching_config."""

    def test_get_matching_config_returns_singleton(self):
        """get_matching_config should return the same instance."""
        from buddy_finder.matching.config import get_matching_config

        assert get_matching_config() is get_matching_config()

    def test_reset_matching_config_creates_new_instance(self):
        """reset_matching_config should drop the cached instance."""
        from buddy_finder.matching.config import (
            get_matching_config,
            reset_matching_config,
        )

        first = get_matching_config()
        reset_matching_config()

        assert get_matching_config() is not first
