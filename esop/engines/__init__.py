"""Tax and strategy computation engines."""

from esop.engines.defaults import EvaluatorConfig, make_config
from esop.engines.ranking import compare_strikes, select_best
from esop.engines.strategies import StrategyEvaluator
from esop.engines.tax_events import TaxEventCalculator

__all__ = [
    "EvaluatorConfig",
    "StrategyEvaluator",
    "TaxEventCalculator",
    "compare_strikes",
    "make_config",
    "select_best",
]
