"""Database repository for player profiles.

This module provides async SQLite database operations for storing
and retrieving profiles. It is the Profile Store the matching engine
reads from.
"""

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import aiosqlite

from buddy_finder.profiles.models import Profile

# SQL schema for the profiles table
CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS profiles (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    location_code TEXT NOT NULL,
    sports TEXT NOT NULL,
    skill_level TEXT NOT NULL,
    is_available INTEGER NOT NULL DEFAULT 1,
    availability TEXT NOT NULL DEFAULT '{}',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

CREATE_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS idx_profiles_available ON profiles(is_available);
CREATE INDEX IF NOT EXISTS idx_profiles_location ON profiles(location_code);
"""

# Registration order; the ranker keeps this order for equal scores
POOL_ORDER_SQL = "ORDER BY created_at ASC, rowid ASC"


class ProfileRepository:
    """Async SQLite repository for profiles.

    This class provides CRUD operations for profiles using aiosqlite
    for async database access. Rows are validated into ``Profile``
    objects on the way out, so corrupt records fail here rather than
    inside the matcher.
    """

    def __init__(self, db_path: Path | str):
        """Initialize the repository.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._connection: aiosqlite.Connection | None = None

    @asynccontextmanager
    async def _get_connection(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """Get a database connection.

        Yields:
            An aiosqlite connection.
        """
        if self._connection is None:
            self._connection = await aiosqlite.connect(self.db_path)
            self._connection.row_factory = aiosqlite.Row
        yield self._connection

    async def initialize(self) -> None:
        """Initialize the database, creating tables if needed."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        async with self._get_connection() as conn:
            await conn.execute(CREATE_TABLE_SQL)
            await conn.executescript(CREATE_INDEX_SQL)
            await conn.commit()

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None

    async def upsert_profile(self, profile: Profile) -> Profile:
        """Insert a profile or replace the stored fields of an existing one.

        ``created_at`` is kept from the first insert; ``updated_at`` is
        refreshed on every write.

        Args:
            profile: The profile to store.

        Returns:
            The profile as stored, with timestamps filled in.
        """
        now = datetime.now()
        created_at = profile.created_at or now
        if created_at.tzinfo is not None:
            # Stored as naive local time so ISO strings sort chronologically
            created_at = created_at.astimezone().replace(tzinfo=None)
        data = profile.to_dict()

        async with self._get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO profiles (
                    id, name, location_code, sports, skill_level,
                    is_available, availability, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    location_code = excluded.location_code,
                    sports = excluded.sports,
                    skill_level = excluded.skill_level,
                    is_available = excluded.is_available,
                    availability = excluded.availability,
                    updated_at = excluded.updated_at
                """,
                (
                    profile.id,
                    profile.name,
                    profile.location_code,
                    json.dumps(data["sports"]),
                    profile.skill_level.value,
                    1 if profile.is_available else 0,
                    json.dumps(data["availability"]),
                    created_at.isoformat(),
                    now.isoformat(),
                ),
            )
            await conn.commit()

        stored = await self.get_profile(profile.id)
        if stored is None:
            raise RuntimeError(f"Profile {profile.id} missing after upsert")
        return stored

    async def get_profile(self, profile_id: str) -> Profile | None:
        """Get a profile by its id.

        Args:
            profile_id: The id to look up.

        Returns:
            The profile if found, None otherwise.

        Raises:
            InvalidProfileError: If the stored row is not a valid profile.
        """
        async with self._get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM profiles WHERE id = ?",
                (profile_id,),
            )
            row = await cursor.fetchone()

        if row is None:
            return None

        return self._row_to_profile(row)

    async def list_available_profiles(
        self, excluding: str | None = None
    ) -> list[Profile]:
        """List every profile open to matching, in registration order.

        Args:
            excluding: Optional profile id to leave out (usually the requester).

        Returns:
            Profiles with ``is_available`` set.
        """
        async with self._get_connection() as conn:
            if excluding is not None:
                cursor = await conn.execute(
                    f"""
                    SELECT * FROM profiles
                    WHERE is_available = 1 AND id != ?
                    {POOL_ORDER_SQL}
                    """,
                    (excluding,),
                )
            else:
                cursor = await conn.execute(
                    f"SELECT * FROM profiles WHERE is_available = 1 {POOL_ORDER_SQL}"
                )
            rows = await cursor.fetchall()

        return [self._row_to_profile(row) for row in rows]

    async def list_profiles(self) -> list[Profile]:
        """List all profiles, available or not, in registration order."""
        async with self._get_connection() as conn:
            cursor = await conn.execute(f"SELECT * FROM profiles {POOL_ORDER_SQL}")
            rows = await cursor.fetchall()

        return [self._row_to_profile(row) for row in rows]

    async def count_profiles(self) -> int:
        """Return the number of stored profiles."""
        async with self._get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) AS count FROM profiles")
            row = await cursor.fetchone()

        return int(row["count"]) if row is not None else 0

    async def set_available(self, profile_id: str, available: bool) -> bool:
        """Update the availability flag of a profile.

        Args:
            profile_id: The id of the profile to update.
            available: Whether the player is open to new buddies.

        Returns:
            True if a profile was updated, False if the id is unknown.
        """
        async with self._get_connection() as conn:
            cursor = await conn.execute(
                """
                UPDATE profiles
                SET is_available = ?, updated_at = ?
                WHERE id = ?
                """,
                (1 if available else 0, datetime.now().isoformat(), profile_id),
            )
            await conn.commit()

        return cursor.rowcount > 0

    async def delete_profile(self, profile_id: str) -> bool:
        """Delete a profile.

        Returns:
            True if a profile was deleted, False if the id is unknown.
        """
        async with self._get_connection() as conn:
            cursor = await conn.execute(
                "DELETE FROM profiles WHERE id = ?",
                (profile_id,),
            )
            await conn.commit()

        return cursor.rowcount > 0

    def _row_to_profile(self, row: aiosqlite.Row) -> Profile:
        """Convert a database row to a Profile.

        Args:
            row: The database row.

        Returns:
            A validated Profile instance.
        """
        return Profile.from_dict(
            {
                "id": row["id"],
                "name": row["name"],
                "location_code": row["location_code"],
                "sports": json.loads(row["sports"]),
                "skill_level": row["skill_level"],
                "is_available": bool(row["is_available"]),
                "availability": json.loads(row["availability"] or "{}"),
                "created_at": row["created_at"],
                "updated_at": row["updated_at"],
            }
        )
