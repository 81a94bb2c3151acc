"""Report generation for the ESOP strategy calculator."""

from esop.reports.comparison_report import ComparisonReportGenerator
from esop.reports.exercise_report import ExerciseReportGenerator
from esop.reports.long_term_report import LongTermReportGenerator
from esop.reports.vested_report import VestedReportGenerator

__all__ = [
    "ComparisonReportGenerator",
    "ExerciseReportGenerator",
    "LongTermReportGenerator",
    "VestedReportGenerator",
]
