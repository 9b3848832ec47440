"""
Judging Automation CLI Commands

assign-judges, shortlist, shortlist-all, stats, remind-judges
"""
import asyncio

from sqlalchemy.exc import SQLAlchemyError

from awards_backend.exceptions import (
    AwardNotFoundError, AwardsAutomationError, InvalidAutomationParameterError
)


class AutomationCommand:
    """Judging automation CLI command handler."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def _handler(self, command):
        return {
            "assign-judges": self._assign_judges,
            "shortlist": self._shortlist,
            "shortlist-all": self._shortlist_all,
            "stats": self._stats,
            "remind-judges": self._remind_judges,
        }.get(command)

    def execute(self, args) -> int:
        """Execute automation command."""
        if self._handler(args.command) is None:
            print("Error: Unknown automation command")
            return 1

        try:
            asyncio.run(self._run(args))
            return 0
        except (AwardsAutomationError, SQLAlchemyError) as e:
            print(f"Error: {e}")
            return 1

    async def _run(self, args) -> None:
        from awards_backend.config import get_settings
        from awards_backend.database import AsyncSessionLocal, close_db
        from awards_backend.services.notification_service import EmailNotifier

        settings = get_settings()
        notifier = EmailNotifier(settings.email, session_factory=AsyncSessionLocal)

        try:
            async with AsyncSessionLocal() as session:
                await self.run(args, session, notifier, settings)
        finally:
            await close_db()

    async def run(self, args, session, notifier, settings) -> None:
        """Run one command against an open session."""
        await self._handler(args.command)(args, session, notifier, settings)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    async def _assign_judges(self, args, session, notifier, settings) -> None:
        print("=== Judge Assignment ===")

        if self.dry_run:
            await self._preview_assignment(args.award_id, session, settings)
            return

        from awards_backend.services.judge_assignment_service import assign_judges_to_entries

        summary = await assign_judges_to_entries(
            session, notifier, settings.automation, award_id=args.award_id
        )
        print(f"✓ Assigned: {summary.assigned} judge-entry pairs")
        print(f"  Conflicts detected: {summary.conflicts}")
        print(f"  Entries: {summary.total_entries}  Judges: {summary.total_judges}")

    async def _preview_assignment(self, award_id, session, settings) -> None:
        from awards_backend.services import judging_store
        from awards_backend.services.judge_assignment_service import plan_entry_assignment

        automation = settings.automation
        judges = await judging_store.get_active_judges(session)
        entries = await judging_store.get_entries_for_assignment(session, award_id=award_id)

        for entry in entries:
            already = await judging_store.get_assigned_judge_emails(entry.id, session)
            plan = plan_entry_assignment(
                entry,
                judges,
                already,
                judges_per_entry=automation.judges_per_entry,
                keywords=automation.expertise_keywords,
                case_insensitive_domains=automation.conflict_domain_case_insensitive,
            )
            selected = ", ".join(j.email for j in plan.selected) or "-"
            print(f"[DRY RUN] Entry {entry.id}: {selected} (conflicts: {plan.conflict_count})")

    async def _shortlist(self, args, session, notifier, settings) -> None:
        print(f"=== Shortlist for Award {args.award_id} ===")

        if self.dry_run:
            await self._preview_shortlist(args.award_id, args.top_n, session, settings)
            return

        from awards_backend.services.shortlist_service import generate_shortlist

        shortlist = await generate_shortlist(
            args.award_id, session, notifier, settings.automation, top_n=args.top_n
        )
        if not shortlist:
            print("No eligible entries")
            return

        print(f"\n{'Rank':<6} {'Company':<40} {'Avg':>6} {'σ':>6}")
        print("-" * 60)
        for item in shortlist:
            company = (item.company_name or "")[:38]
            print(f"{item.rank:<6} {company:<40} {item.average_score:>6.2f} {item.score_consistency:>6.2f}")

    async def _preview_shortlist(self, award_id, top_n, session, settings) -> None:
        from awards_backend.services import judging_store
        from awards_backend.services.shortlist_service import rank_entries

        automation = settings.automation
        top_n = automation.shortlist_top_n if top_n is None else top_n
        if top_n < 1:
            raise InvalidAutomationParameterError("top_n must be at least 1")
        if await judging_store.get_award(award_id, session) is None:
            raise AwardNotFoundError(award_id)

        candidates = await judging_store.get_shortlist_candidates(award_id, session)
        shortlist = rank_entries(
            candidates,
            top_n=top_n,
            min_scores=automation.min_scores,
            consistency_penalty=automation.consistency_penalty,
        )
        for item in shortlist:
            print(f"[DRY RUN] {item.rank}. {item.company_name} ({item.composite_score:.3f})")

    async def _shortlist_all(self, args, session, notifier, settings) -> None:
        print("=== Shortlists for All Awards ===")

        if self.dry_run:
            print("[DRY RUN] Would generate shortlists for every active award")
            return

        from awards_backend.services.shortlist_service import generate_all_shortlists

        results = await generate_all_shortlists(
            session, notifier, settings.automation, top_n=args.top_n
        )
        for result in results:
            print(f"  {result.award_name}: {result.shortlist_count} shortlisted")

    async def _stats(self, args, session, notifier, settings) -> None:
        from awards_backend.services.judging_statistics_service import get_judging_statistics

        stats = await get_judging_statistics(session, settings.automation, award_id=args.award_id)

        print("=== Judging Statistics ===")
        print(f"  Total entries:        {stats.total_entries}")
        print(f"  With scores:          {stats.entries_with_scores}")
        print(f"  Fully judged:         {stats.entries_fully_judged}")
        print(f"  Avg scores per entry: {stats.average_scores_per_entry}")
        print(f"  Completion rate:      {stats.completion_rate}%")

    async def _remind_judges(self, args, session, notifier, settings) -> None:
        print("=== Judge Reminders ===")

        if self.dry_run:
            print("[DRY RUN] Would email judges with pending scores")
            return

        from awards_backend.services.judging_statistics_service import send_judge_reminders

        summary = await send_judge_reminders(session, notifier)
        print(f"✓ Reminders sent: {summary.reminders_sent}/{summary.judges_with_pending}")
