"""
Database CLI Commands

Database operations: init
"""
import asyncio

from sqlalchemy.exc import SQLAlchemyError


class DbCommand:
    """Database CLI command handler."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def execute(self, args) -> int:
        """Execute database command."""
        if args.db_action == "init":
            return self._init(args)
        else:
            print("Error: Unknown database action")
            return 1

    def _init(self, args) -> int:
        """Create any missing tables."""
        print("=== Database Init ===")

        if self.dry_run:
            print("[DRY RUN] Would create missing tables")
            return 0

        try:
            asyncio.run(self._async_init())
            print("✓ Tables created")
            return 0
        except SQLAlchemyError as e:
            print(f"Error: {e}")
            return 1

    async def _async_init(self) -> None:
        from awards_backend.database import init_db, close_db

        try:
            await init_db()
        finally:
            await close_db()
