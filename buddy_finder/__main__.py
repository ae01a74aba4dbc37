"""Main entry point for Find Your Buddy."""

import argparse
import asyncio
import json
import sqlite3
import sys
from pathlib import Path

from buddy_finder import __version__
from buddy_finder.config.settings import Settings
from buddy_finder.utils.logging import configure_logging, get_logger

logger = get_logger("cli")

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="buddy-finder",
        description="Find Your Buddy: match players by sport, location and skill",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m buddy_finder profiles import players.yaml
  python -m buddy_finder match user-123
  python -m buddy_finder match user-123 --json
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="commands",
        description="Available commands",
    )

    match_parser = subparsers.add_parser(
        "match",
        help="Compute ranked buddy matches for a profile",
    )
    match_parser.add_argument("requester_id", help="Id of the requesting profile")
    match_parser.add_argument(
        "--json",
        action="store_true",
        help="Print matches as JSON instead of a summary",
    )
    match_parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Override profile DB path (defaults to settings)",
    )

    profiles_parser = subparsers.add_parser(
        "profiles",
        help="Manage stored profiles",
    )
    profiles_subparsers = profiles_parser.add_subparsers(
        dest="profiles_cmd",
        title="profiles",
        description="Profile store commands",
    )

    profiles_import = profiles_subparsers.add_parser(
        "import", help="Import profiles from a YAML/JSON file"
    )
    profiles_import.add_argument("file", type=Path, help="Path to the profile file")

    profiles_show = profiles_subparsers.add_parser("show", help="Show one profile")
    profiles_show.add_argument("profile_id", help="Profile id")

    profiles_list = profiles_subparsers.add_parser("list", help="List profiles")
    profiles_list.add_argument(
        "--all",
        action="store_true",
        help="Include paused profiles",
    )

    profiles_pause = profiles_subparsers.add_parser(
        "pause", help="Stop a profile from being matched"
    )
    profiles_pause.add_argument("profile_id", help="Profile id")

    profiles_resume = profiles_subparsers.add_parser(
        "resume", help="Make a paused profile matchable again"
    )
    profiles_resume.add_argument("profile_id", help="Profile id")

    profiles_delete = profiles_subparsers.add_parser("delete", help="Delete a profile")
    profiles_delete.add_argument("profile_id", help="Profile id")

    for sub in (
        profiles_import,
        profiles_show,
        profiles_list,
        profiles_pause,
        profiles_resume,
        profiles_delete,
    ):
        sub.add_argument(
            "--db",
            type=Path,
            default=None,
            help="Override profile DB path (defaults to settings)",
        )

    return parser


def _run_match(parsed: argparse.Namespace, settings: Settings) -> int:
    from buddy_finder.matching.service import MatchingService
    from buddy_finder.profiles.models import InvalidProfileError, ProfileNotFoundError
    from buddy_finder.profiles.repository import ProfileRepository

    repo = ProfileRepository(parsed.db or settings.profile_db_path)

    async def _compute():
        await repo.initialize()
        try:
            service = MatchingService(repo)
            requester = await service.get_requester(parsed.requester_id)
            results = await service.matches_for(requester)
            return service, requester, results
        finally:
            await repo.close()

    try:
        service, requester, results = asyncio.run(_compute())
    except ProfileNotFoundError as e:
        logger.error(str(e))
        print(
            f"Profile {e.profile_id} does not exist. Re-register to find buddies.",
            file=sys.stderr,
        )
        return EXIT_NOT_FOUND
    except InvalidProfileError as e:
        logger.error(f"Invalid profile data: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (sqlite3.Error, OSError) as e:
        logger.error(f"Profile store failure: {e}")
        print("No matches available, try again.", file=sys.stderr)
        return EXIT_ERROR

    if parsed.json:
        print(json.dumps([result.to_dict() for result in results], indent=2))
    else:
        print(service.format_results(requester, results))
    return EXIT_OK


def _run_profiles(parsed: argparse.Namespace, settings: Settings) -> int:
    from buddy_finder.profiles.loader import ProfileLoader
    from buddy_finder.profiles.models import InvalidProfileError
    from buddy_finder.profiles.repository import ProfileRepository

    if parsed.profiles_cmd is None:
        print("Provide a profiles command", file=sys.stderr)
        return EXIT_ERROR

    profiles = []
    if parsed.profiles_cmd == "import":
        loader = ProfileLoader()
        try:
            profiles = loader.load_profiles(parsed.file)
        except (FileNotFoundError, ValueError) as e:
            # InvalidProfileError is a ValueError
            logger.error(f"Could not load profiles: {e}")
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        for profile in profiles:
            for warning in loader.validate_profile(profile):
                logger.warning(f"{profile.id}: {warning}")

    repo = ProfileRepository(parsed.db or settings.profile_db_path)

    async def _execute() -> int:
        await repo.initialize()
        try:
            if parsed.profiles_cmd == "import":
                for profile in profiles:
                    await repo.upsert_profile(profile)
                print(f"Imported {len(profiles)} profile(s)")
                return EXIT_OK

            if parsed.profiles_cmd == "show":
                profile = await repo.get_profile(parsed.profile_id)
                if profile is None:
                    print("Not found")
                    return EXIT_NOT_FOUND
                print(json.dumps(profile.to_dict(), indent=2))
                return EXIT_OK

            if parsed.profiles_cmd == "list":
                if parsed.all:
                    listed = await repo.list_profiles()
                else:
                    listed = await repo.list_available_profiles()
                for profile in listed:
                    status = "available" if profile.is_available else "paused"
                    print(
                        f"{profile.id} {status} {profile.location_code} "
                        f"{profile.skill_level.value} {profile.name}: "
                        f"{', '.join(sorted(profile.sports))}"
                    )
                return EXIT_OK

            if parsed.profiles_cmd in {"pause", "resume"}:
                available = parsed.profiles_cmd == "resume"
                if not await repo.set_available(parsed.profile_id, available):
                    print("Not found")
                    return EXIT_NOT_FOUND
                print("ok")
                return EXIT_OK

            if parsed.profiles_cmd == "delete":
                if not await repo.delete_profile(parsed.profile_id):
                    print("Not found")
                    return EXIT_NOT_FOUND
                print("ok")
                return EXIT_OK

            print("Unknown profiles command", file=sys.stderr)
            return EXIT_ERROR
        finally:
            await repo.close()

    try:
        return asyncio.run(_execute())
    except InvalidProfileError as e:
        logger.error(f"Invalid profile data: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (sqlite3.Error, OSError) as e:
        logger.error(f"Profile store failure: {e}")
        print(f"Error: profile store unavailable ({e})", file=sys.stderr)
        return EXIT_ERROR


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return EXIT_ERROR

    configure_logging(settings, override=parsed.log_level)

    # If no command specified, show help
    if parsed.mode is None:
        parser.print_help()
        return EXIT_OK

    logger.debug(f"Find Your Buddy v{__version__} running '{parsed.mode}'")

    if parsed.mode == "match":
        return _run_match(parsed, settings)

    if parsed.mode == "profiles":
        return _run_profiles(parsed, settings)

    print(f"Unknown command: {parsed.mode}", file=sys.stderr)
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
