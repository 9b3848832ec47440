#!/usr/bin/env python3
"""
Awards Judging Automation CLI

Usage:
    python -m awards_backend.cli <command> [options]

Commands:
    db              Database operations (init)
    assign-judges   Assign judges to submitted entries
    shortlist       Generate the shortlist for one award
    shortlist-all   Generate shortlists for every active award
    stats           Show judging progress
    remind-judges   Email judges with pending scores

Each command is a single run, so a scheduler (cron, systemd timer) can call
them directly.

Environment:
    DATABASE_URL    SQLAlchemy async connection string
    LOG_LEVEL       DEBUG|INFO|WARNING|ERROR
"""
import sys
import argparse
import logging
from typing import Optional

from awards_backend.cli.db_commands import DbCommand
from awards_backend.cli.automation_commands import AutomationCommand


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="awards",
        description="Awards Judging Automation CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s db init
  %(prog)s assign-judges --award-id 3
  %(prog)s shortlist --award-id 3 --top-n 5
  %(prog)s shortlist-all
  %(prog)s stats
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without executing"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Database commands
    db_parser = subparsers.add_parser("db", help="Database operations")
    db_subparsers = db_parser.add_subparsers(dest="db_action")
    db_subparsers.add_parser("init", help="Create missing tables")

    # assign-judges
    assign_parser = subparsers.add_parser("assign-judges", help="Assign judges to submitted entries")
    assign_parser.add_argument("--award-id", type=int, help="Only entries for this award")

    # shortlist
    shortlist_parser = subparsers.add_parser("shortlist", help="Generate shortlist for one award")
    shortlist_parser.add_argument("--award-id", type=int, required=True, help="Award ID")
    shortlist_parser.add_argument("--top-n", type=int, help="Shortlist size (default: SHORTLIST_TOP_N)")

    # shortlist-all
    shortlist_all_parser = subparsers.add_parser("shortlist-all", help="Generate shortlists for all active awards")
    shortlist_all_parser.add_argument("--top-n", type=int, help="Shortlist size (default: SHORTLIST_TOP_N)")

    # stats
    stats_parser = subparsers.add_parser("stats", help="Judging progress statistics")
    stats_parser.add_argument("--award-id", type=int, help="Only entries for this award")

    # remind-judges
    subparsers.add_parser("remind-judges", help="Email judges with pending scores")

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    setup_logging(parsed.log_level)

    command_map = {
        "db": DbCommand,
        "assign-judges": AutomationCommand,
        "shortlist": AutomationCommand,
        "shortlist-all": AutomationCommand,
        "stats": AutomationCommand,
        "remind-judges": AutomationCommand,
    }

    if parsed.command in command_map:
        handler = command_map[parsed.command](dry_run=parsed.dry_run)
        return handler.execute(parsed)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
