"""Profile file loading utilities."""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from buddy_finder.profiles.models import InvalidProfileError, Profile


class ProfileLoader:
    """Load and validate profile records from YAML or JSON files.

    A file may hold a single profile mapping, a list of mappings, or a
    mapping with a top-level ``profiles`` list.
    """

    def load_profiles(self, path: Path | str) -> list[Profile]:
        """Load and validate every profile in a YAML or JSON file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file cannot be parsed.
            InvalidProfileError: If a record is not a valid profile.
        """
        profile_path = Path(path)
        if not profile_path.exists():
            raise FileNotFoundError(f"Profile file not found: {profile_path}")

        suffix = profile_path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            data = self._load_yaml(profile_path)
        elif suffix == ".json":
            data = self._load_json(profile_path)
        else:
            data = self._load_unknown(profile_path)

        records = self._records(data, profile_path)
        profiles = [Profile.from_dict(record) for record in records]

        seen: set[str] = set()
        for profile in profiles:
            if profile.id in seen:
                raise InvalidProfileError(
                    f"Duplicate profile id in {profile_path}: {profile.id}",
                    profile_id=profile.id,
                )
            seen.add(profile.id)
        return profiles

    def validate_profile(self, profile: Profile) -> list[str]:
        """Return warnings for profiles that cannot take part in matching."""
        warnings: list[str] = []

        if not profile.sports:
            warnings.append("Sports list is empty")
        if not profile.availability:
            warnings.append("No availability declared")
        if not profile.is_available:
            warnings.append("Profile is paused and will not be matched")

        return warnings

    def _records(self, data: object, path: Path) -> list[dict]:
        if isinstance(data, dict) and "profiles" in data:
            data = data["profiles"]
        if isinstance(data, dict):
            return [data]
        if isinstance(data, list):
            for item in data:
                if not isinstance(item, dict):
                    raise ValueError(f"Profile entries must be mappings: {path}")
            return data
        if data is None:
            return []
        raise ValueError(f"Profile file must hold a mapping or a list: {path}")

    def _load_yaml(self, path: Path) -> object:
        try:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML profile file: {path}") from e

    def _load_json(self, path: Path) -> object:
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON profile file: {path}") from e

    def _load_unknown(self, path: Path) -> object:
        """Auto-detect the format when the file extension is unknown."""
        raw = path.read_text(encoding="utf-8")
        raw_stripped = raw.lstrip()

        # Try JSON first if it looks like JSON, otherwise fall back to YAML.
        if raw_stripped.startswith("{") or raw_stripped.startswith("["):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                pass

        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid profile file format: {path}") from e
