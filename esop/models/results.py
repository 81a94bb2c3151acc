"""Result models produced by the calculation engines.

All monetary amounts are unrounded USD unless the field name ends in ``_inr``.
"""

from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from esop.models.enums import RankingGoal, Route, StrategyKind
from esop.models.inputs import (
    ComparisonInputs,
    ExerciseInputs,
    LongTermInputs,
    VestedInputs,
)


class TaxEventBundle(BaseModel):
    """Per-share tax events for one strike price."""

    perquisite_tax_high: Decimal
    perquisite_tax_actual: Decimal
    short_term_cg_tax: Decimal
    long_term_cg_tax: Decimal
    direct_sale_tax: Decimal


class PerShareSummary(BaseModel):
    perquisite_tax_high: Decimal
    perquisite_tax_actual: Decimal
    short_term_cg_tax: Decimal
    long_term_cg_tax: Decimal
    gain_per_share: Decimal  # sell - strike
    perquisite_per_share: Decimal  # fmv - strike


# ---------------------------------------------------------------------------
# Rows (one per quantity)
# ---------------------------------------------------------------------------

class ExerciseOnlyRow(BaseModel):
    quantity: int
    exercise_amount: Decimal
    tax_at_high_rate: Decimal
    tax_at_actual_rate: Decimal
    total_company_deducts: Decimal
    tax_refund: Decimal
    net_cost_after_refund: Decimal


class VestedRow(BaseModel):
    quantity: int
    exercise_cost: Decimal
    sell_proceeds: Decimal
    tax_event_1: Decimal
    tax_at_actual_rate: Decimal
    company_deducts: Decimal
    transfer_to_account: Decimal
    transfer_in_inr: Decimal
    tax_event_2_short: Decimal
    overall_direct_tax: Decimal
    final_remains: Decimal
    tax_refund: Decimal
    final_amount: Decimal
    final_in_inr: Decimal


class ExercisedSharesRow(BaseModel):
    quantity: int
    sell_proceeds: Decimal
    transfer_to_account: Decimal
    transfer_in_inr: Decimal
    tax_event_2_long: Decimal
    final_remains: Decimal
    final_in_inr: Decimal


class LongTermRow(BaseModel):
    quantity: int
    exercise_amount: Decimal
    perquisite_tax_high: Decimal
    perquisite_tax_actual: Decimal
    total_upfront: Decimal
    tax_refund: Decimal
    net_exercise_cost: Decimal
    sell_proceeds: Decimal
    ltcg_tax: Decimal
    net_from_sale: Decimal
    net_profit: Decimal


class ComparisonRow(BaseModel):
    """Same-day option sale vs. exercise-and-hold for one quantity."""

    quantity: int
    option_sale_final: Decimal
    share_sale_final: Decimal
    exercise_cost: Decimal  # net cost after refund of the exercise step
    net_options: Decimal
    net_shares: Decimal
    difference: Decimal  # always |net_shares - net_options|
    better_route: Route


# ---------------------------------------------------------------------------
# Strike price ranking
# ---------------------------------------------------------------------------

class StrikeCandidate(BaseModel):
    strike_price: Decimal
    value: Decimal


class StrikeComparisonRow(BaseModel):
    """All strike prices evaluated for one quantity, with the winner."""

    quantity: int
    candidates: list[StrikeCandidate]
    best_strike_price: Decimal


# ---------------------------------------------------------------------------
# Per-strike tables
# ---------------------------------------------------------------------------

class ExerciseStrikeTable(BaseModel):
    strike_price: Decimal
    perquisite_per_share: Decimal
    tax_events: TaxEventBundle
    rows: list[ExerciseOnlyRow]


class VestedStrikeTable(BaseModel):
    strike_price: Decimal
    perquisite_per_share: Decimal
    tax_events: TaxEventBundle
    rows: list[VestedRow]


class LongTermStrikeTable(BaseModel):
    strike_price: Decimal
    perquisite_per_share: Decimal
    ltcg_per_share: Decimal
    rows: list[LongTermRow]


# ---------------------------------------------------------------------------
# Reports (one per strategy kind)
# ---------------------------------------------------------------------------

class ExerciseReport(BaseModel):
    kind: Literal[StrategyKind.EXERCISE_ONLY] = StrategyKind.EXERCISE_ONLY
    inputs: ExerciseInputs
    goal: RankingGoal = RankingGoal.MINIMIZE
    tables: list[ExerciseStrikeTable]
    comparison: list[StrikeComparisonRow]


class VestedReport(BaseModel):
    kind: Literal[StrategyKind.VESTED] = StrategyKind.VESTED
    inputs: VestedInputs
    goal: RankingGoal = RankingGoal.MAXIMIZE
    tables: list[VestedStrikeTable]
    comparison: list[StrikeComparisonRow]


class LongTermReport(BaseModel):
    kind: Literal[StrategyKind.LONG_TERM] = StrategyKind.LONG_TERM
    inputs: LongTermInputs
    goal: RankingGoal = RankingGoal.MAXIMIZE
    tables: list[LongTermStrikeTable]
    comparison: list[StrikeComparisonRow]


class ComparisonReport(BaseModel):
    kind: Literal[StrategyKind.COMPARISON] = StrategyKind.COMPARISON
    inputs: ComparisonInputs
    summary: PerShareSummary
    tax_events: TaxEventBundle
    vested_rows: list[VestedRow]
    exercised_rows: list[ExercisedSharesRow]
    exercise_rows: list[ExerciseOnlyRow]
    rows: list[ComparisonRow]


StrategyReport = Annotated[
    Union[ExerciseReport, VestedReport, LongTermReport, ComparisonReport],
    Field(discriminator="kind"),
]
