"""Shared test fixtures for the ESOP strategy calculator."""

from decimal import Decimal

import pytest

from esop.engines import EvaluatorConfig, StrategyEvaluator
from esop.models.inputs import (
    ComparisonInputs,
    ExerciseInputs,
    LongTermInputs,
    VestedInputs,
)


@pytest.fixture
def evaluator() -> StrategyEvaluator:
    return StrategyEvaluator()


@pytest.fixture
def short_evaluator() -> StrategyEvaluator:
    """Two-row ladder, enough for per-quantity checks."""
    return StrategyEvaluator(EvaluatorConfig(quantities=(1000, 2000)))


@pytest.fixture
def exercise_inputs() -> ExerciseInputs:
    return ExerciseInputs(
        strike_prices=[Decimal("0.133")],
        fmv_price=Decimal("10"),
        dollar_rate=Decimal("85"),
        short_term_tax_high=Decimal("0.4274"),
        short_term_tax_actual=Decimal("0.30"),
    )


@pytest.fixture
def vested_inputs() -> VestedInputs:
    return VestedInputs(
        strike_prices=[Decimal("1")],
        buy_back_price=Decimal("5"),
        dollar_rate=Decimal("85"),
        short_term_tax_high=Decimal("0.4274"),
        short_term_tax_actual=Decimal("0.30"),
    )


@pytest.fixture
def long_term_inputs() -> LongTermInputs:
    return LongTermInputs(
        strike_prices=[Decimal("1")],
        fmv_at_exercise=Decimal("10"),
        sell_price=Decimal("20"),
        dollar_rate=Decimal("85"),
        short_term_tax_high=Decimal("0.4274"),
        short_term_tax_actual=Decimal("0.30"),
        long_term_tax=Decimal("0.125"),
    )


@pytest.fixture
def comparison_inputs() -> ComparisonInputs:
    return ComparisonInputs(
        strike_price=Decimal("1"),
        fmv_price=Decimal("10"),
        fmv_at_exercise=Decimal("10"),
        sell_price=Decimal("20"),
        dollar_rate=Decimal("85"),
        short_term_tax_high=Decimal("0.4274"),
        short_term_tax_actual=Decimal("0.30"),
        long_term_tax=Decimal("0.125"),
    )
