"""Data models for the ESOP strategy calculator."""

from esop.models.enums import IssueSeverity, RankingGoal, Route, StrategyKind
from esop.models.inputs import (
    ComparisonInputs,
    ExerciseInputs,
    FieldIssue,
    InputReadResult,
    LongTermInputs,
    StrategyInputs,
    TaxEventInputs,
    VestedInputs,
)
from esop.models.results import (
    ComparisonReport,
    ComparisonRow,
    ExercisedSharesRow,
    ExerciseOnlyRow,
    ExerciseReport,
    ExerciseStrikeTable,
    LongTermReport,
    LongTermRow,
    LongTermStrikeTable,
    PerShareSummary,
    StrategyReport,
    StrikeCandidate,
    StrikeComparisonRow,
    TaxEventBundle,
    VestedReport,
    VestedRow,
    VestedStrikeTable,
)

__all__ = [
    "ComparisonInputs",
    "ComparisonReport",
    "ComparisonRow",
    "ExercisedSharesRow",
    "ExerciseInputs",
    "ExerciseOnlyRow",
    "ExerciseReport",
    "ExerciseStrikeTable",
    "FieldIssue",
    "InputReadResult",
    "IssueSeverity",
    "LongTermInputs",
    "LongTermReport",
    "LongTermRow",
    "LongTermStrikeTable",
    "PerShareSummary",
    "RankingGoal",
    "Route",
    "StrategyInputs",
    "StrategyKind",
    "StrategyReport",
    "StrikeCandidate",
    "StrikeComparisonRow",
    "TaxEventBundle",
    "TaxEventInputs",
    "VestedInputs",
    "VestedReport",
    "VestedRow",
    "VestedStrikeTable",
]
