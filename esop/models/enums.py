"""Enumerations for the ESOP strategy calculator."""

from enum import StrEnum


class StrategyKind(StrEnum):
    EXERCISE_ONLY = "EXERCISE_ONLY"
    VESTED = "VESTED"
    LONG_TERM = "LONG_TERM"
    COMPARISON = "COMPARISON"


class RankingGoal(StrEnum):
    MINIMIZE = "MINIMIZE"
    MAXIMIZE = "MAXIMIZE"


class Route(StrEnum):
    SHARES = "SHARES"  # exercise, hold, sell as LTCG
    OPTIONS = "OPTIONS"  # same-day sale


class IssueSeverity(StrEnum):
    WARNING = "WARNING"
    ERROR = "ERROR"
