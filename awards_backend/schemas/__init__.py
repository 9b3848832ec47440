from .judging import (
    JudgeRecord,
    OrganisationRecord,
    AwardRecord,
    ScoreRecord,
    EntryRecord,
    AssignmentSummary,
    RankedEntry,
    AwardShortlistSummary,
    JudgingStatistics,
    ReminderSummary,
    AssignJudgesRequest,
    GenerateShortlistRequest,
    GenerateAllShortlistsRequest,
)
