"""
CLI argument parsing and dry-run tests.
"""
import pytest
from sqlalchemy import func, select

from awards_backend.cli import create_parser, main
from awards_backend.cli.automation_commands import AutomationCommand
from awards_backend.config.settings import Settings
from awards_backend.exceptions import AwardNotFoundError, InvalidAutomationParameterError
from awards_backend.orm.entry import EntryStatus
from awards_backend.orm.judge_score import JudgeScore


def test_assign_judges_arguments():
    args = create_parser().parse_args(["assign-judges", "--award-id", "4"])

    assert args.command == "assign-judges"
    assert args.award_id == 4
    assert args.dry_run is False


def test_shortlist_requires_award_id():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["shortlist"])


def test_shortlist_arguments():
    args = create_parser().parse_args(["--dry-run", "shortlist", "--award-id", "2", "--top-n", "3"])

    assert args.dry_run is True
    assert (args.award_id, args.top_n) == (2, 3)


def test_db_init_arguments():
    args = create_parser().parse_args(["db", "init"])

    assert (args.command, args.db_action) == ("db", "init")


def test_no_command_prints_help():
    assert main([]) == 1


def test_unknown_automation_command():
    class Args:
        command = "winners"

    assert AutomationCommand().execute(Args()) == 1


# =============================================================================
# Dry-run previews
# =============================================================================

@pytest.mark.asyncio
async def test_dry_run_assignment_previews_without_writing(
    db, notifier, capsys, make_award, make_organisation, make_judge, make_entry
):
    award = await make_award()
    org = await make_organisation()
    await make_judge("a@judges.org")
    await make_judge("b@judges.org")
    entry = await make_entry(award, org)
    await db.commit()

    args = create_parser().parse_args(["--dry-run", "assign-judges"])
    await AutomationCommand(dry_run=args.dry_run).run(args, db, notifier, Settings())

    output = capsys.readouterr().out
    assert f"[DRY RUN] Entry {entry.id}: a@judges.org, b@judges.org (conflicts: 0)" in output

    result = await db.execute(select(func.count(JudgeScore.id)))
    assert result.scalar_one() == 0
    assert notifier.assigned == []


@pytest.mark.asyncio
async def test_dry_run_shortlist_previews_without_writing(
    db, notifier, capsys, make_award, make_organisation, make_entry, add_scores
):
    award = await make_award()
    org = await make_organisation(company_name="Widget Works Ltd")
    entry = await make_entry(award, org)
    await add_scores(entry, [8.0, 7.0, 9.0])
    await db.commit()

    args = create_parser().parse_args(["--dry-run", "shortlist", "--award-id", str(award.id)])
    await AutomationCommand(dry_run=args.dry_run).run(args, db, notifier, Settings())

    assert "[DRY RUN] 1. Widget Works Ltd (7.918)" in capsys.readouterr().out

    await db.refresh(entry)
    assert entry.status == EntryStatus.submitted
    assert entry.is_shortlisted is False
    assert notifier.shortlisted == []


@pytest.mark.asyncio
async def test_dry_run_shortlist_rejects_zero_top_n(db, notifier, make_award):
    award = await make_award()
    await db.commit()

    args = create_parser().parse_args(
        ["--dry-run", "shortlist", "--award-id", str(award.id), "--top-n", "0"]
    )

    with pytest.raises(InvalidAutomationParameterError):
        await AutomationCommand(dry_run=True).run(args, db, notifier, Settings())


@pytest.mark.asyncio
async def test_dry_run_shortlist_unknown_award(db, notifier):
    args = create_parser().parse_args(["--dry-run", "shortlist", "--award-id", "999"])

    with pytest.raises(AwardNotFoundError):
        await AutomationCommand(dry_run=True).run(args, db, notifier, Settings())
