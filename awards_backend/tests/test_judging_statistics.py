"""
Judging progress statistics and reminder tests.
"""
import pytest

from awards_backend.config.settings import AutomationSettings
from awards_backend.orm.judge_score import JudgeScore
from awards_backend.services.judging_statistics_service import (
    get_judging_statistics, send_judge_reminders
)
from conftest import RecordingNotifier


@pytest.mark.asyncio
async def test_statistics_on_empty_store(db, automation_settings):
    stats = await get_judging_statistics(db, automation_settings)

    assert stats.total_entries == 0
    assert stats.completion_rate == 0.0


@pytest.mark.asyncio
async def test_statistics_counts(
    db, automation_settings, make_award, make_organisation, make_entry, add_scores
):
    award = await make_award()
    org = await make_organisation()
    full = await make_entry(award, org)
    await add_scores(full, [7.0, 8.0, 9.0])
    partial = await make_entry(award, org)
    await add_scores(partial, [6.0])
    await make_entry(award, org)
    await db.commit()

    stats = await get_judging_statistics(db, automation_settings)

    assert stats.total_entries == 3
    assert stats.entries_with_scores == 2
    assert stats.entries_fully_judged == 1
    assert stats.average_scores_per_entry == 1.33
    assert stats.completion_rate == 33.3


@pytest.mark.asyncio
async def test_statistics_threshold_and_award_filter(
    db, make_award, make_organisation, make_entry, add_scores
):
    export = await make_award(award_name="Export")
    retail = await make_award(award_name="Retail")
    org = await make_organisation()
    entry = await make_entry(export, org)
    await add_scores(entry, [7.0, 8.0])
    await make_entry(retail, org)
    await db.commit()

    stats = await get_judging_statistics(
        db, AutomationSettings(fully_judged_threshold=2), award_id=export.id
    )

    assert stats.total_entries == 1
    assert stats.entries_fully_judged == 1
    assert stats.completion_rate == 100.0


# =============================================================================
# Reminders
# =============================================================================

@pytest.fixture
async def judged_entry(db, make_award, make_organisation, make_entry, make_judge):
    award = await make_award()
    org = await make_organisation()
    entry = await make_entry(award, org)
    other = await make_entry(award, org)

    await make_judge("pending@judges.org", full_name="Pat Pending")
    await make_judge("done@judges.org")
    await make_judge("idle@judges.org")
    await make_judge("retired@judges.org", is_active=False)

    db.add_all([
        JudgeScore(entry_id=entry.id, judge_email="pending@judges.org", is_complete=True, total_score=7.0),
        JudgeScore(entry_id=other.id, judge_email="pending@judges.org", is_complete=False),
        JudgeScore(entry_id=entry.id, judge_email="done@judges.org", is_complete=True, total_score=8.0),
        JudgeScore(entry_id=entry.id, judge_email="retired@judges.org", is_complete=False),
    ])
    await db.commit()
    return entry


@pytest.mark.asyncio
async def test_reminders_go_to_judges_with_pending_scores(db, notifier, judged_entry):
    summary = await send_judge_reminders(db, notifier)

    assert summary.judges_with_pending == 1
    assert summary.reminders_sent == 1
    assert notifier.reminders == [("pending@judges.org", 1, 2)]


@pytest.mark.asyncio
async def test_failed_reminders_are_not_counted_as_sent(db, judged_entry):
    notifier = RecordingNotifier(succeed=False)

    summary = await send_judge_reminders(db, notifier)

    assert summary.judges_with_pending == 1
    assert summary.reminders_sent == 0
