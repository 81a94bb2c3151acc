"""Strategy evaluation engine.

Turns per-share tax events into the money waterfall of each strategy, one row
per share quantity:

  EXERCISE_ONLY  exercise and hold; lowest net cost after refund wins
  VESTED         same-day sale at the buy-back price; highest final amount wins
  LONG_TERM      exercise now, sell as LTCG later; highest net profit wins
  COMPARISON     same-day option sale vs. exercise-and-hold at one strike price

Withholding happens at the high statutory rate; the difference to the
holder's actual slab comes back as a refund through the income-tax return.
"""

import logging
from collections.abc import Callable
from decimal import Decimal

from pydantic import BaseModel

from esop.engines.defaults import EvaluatorConfig
from esop.engines.ranking import compare_strikes
from esop.engines.tax_events import TaxEventCalculator
from esop.models.enums import RankingGoal, Route, StrategyKind
from esop.models.inputs import (
    ComparisonInputs,
    ExerciseInputs,
    LongTermInputs,
    StrategyInputs,
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
    StrategyReport,
    StrikeCandidate,
    StrikeComparisonRow,
    TaxEventBundle,
    VestedReport,
    VestedRow,
    VestedStrikeTable,
)

logger = logging.getLogger(__name__)


class StrategyEvaluator:
    """Evaluates exercise/sale strategies over the configured quantity ladder."""

    def __init__(self, config: EvaluatorConfig | None = None) -> None:
        self.config = config or EvaluatorConfig()
        self.calculator = TaxEventCalculator()

    @property
    def quantities(self) -> tuple[int, ...]:
        return self.config.quantities

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def evaluate(self, inputs: StrategyInputs) -> StrategyReport:
        """Build the complete report for the strategy named by ``inputs.kind``."""
        dispatch: dict[StrategyKind, Callable[..., StrategyReport]] = {
            StrategyKind.EXERCISE_ONLY: self._evaluate_exercise,
            StrategyKind.VESTED: self._evaluate_vested,
            StrategyKind.LONG_TERM: self._evaluate_long_term,
            StrategyKind.COMPARISON: self._evaluate_comparison,
        }
        logger.info("Evaluating %s over %d quantities", inputs.kind.value, len(self.quantities))
        return dispatch[inputs.kind](inputs)

    # ------------------------------------------------------------------
    # Row computations
    # ------------------------------------------------------------------

    def exercise_only(
        self, quantity: int, strike_price: Decimal, tax_events: TaxEventBundle
    ) -> ExerciseOnlyRow:
        exercise_amount = quantity * strike_price
        tax_at_high_rate = quantity * tax_events.perquisite_tax_high
        tax_at_actual_rate = quantity * tax_events.perquisite_tax_actual
        total_company_deducts = exercise_amount + tax_at_high_rate
        tax_refund = tax_at_high_rate - tax_at_actual_rate
        return ExerciseOnlyRow(
            quantity=quantity,
            exercise_amount=exercise_amount,
            tax_at_high_rate=tax_at_high_rate,
            tax_at_actual_rate=tax_at_actual_rate,
            total_company_deducts=total_company_deducts,
            tax_refund=tax_refund,
            net_cost_after_refund=total_company_deducts - tax_refund,
        )

    def vested(
        self,
        quantity: int,
        strike_price: Decimal,
        sell_price: Decimal,
        withholding_fmv: Decimal,
        dollar_rate: Decimal,
        tax_events: TaxEventBundle,
    ) -> VestedRow:
        """Same-day sale waterfall.

        Selling at the FMV the perquisite tax was withheld on leaves no
        short-term gain, so the STCG leg is zero in that case.
        """
        exercise_cost = quantity * strike_price
        sell_proceeds = quantity * sell_price
        tax_event_1 = quantity * tax_events.perquisite_tax_high
        tax_at_actual_rate = quantity * tax_events.perquisite_tax_actual
        company_deducts = exercise_cost + tax_event_1
        transfer_to_account = sell_proceeds - company_deducts
        if sell_price == withholding_fmv:
            tax_event_2_short = Decimal("0")
        else:
            tax_event_2_short = quantity * tax_events.short_term_cg_tax
        final_remains = transfer_to_account - tax_event_2_short
        tax_refund = tax_event_1 - tax_at_actual_rate
        final_amount = final_remains + tax_refund
        return VestedRow(
            quantity=quantity,
            exercise_cost=exercise_cost,
            sell_proceeds=sell_proceeds,
            tax_event_1=tax_event_1,
            tax_at_actual_rate=tax_at_actual_rate,
            company_deducts=company_deducts,
            transfer_to_account=transfer_to_account,
            transfer_in_inr=transfer_to_account * dollar_rate,
            tax_event_2_short=tax_event_2_short,
            overall_direct_tax=quantity * tax_events.direct_sale_tax,
            final_remains=final_remains,
            tax_refund=tax_refund,
            final_amount=final_amount,
            final_in_inr=final_amount * dollar_rate,
        )

    def exercised_shares(
        self,
        quantity: int,
        sell_price: Decimal,
        dollar_rate: Decimal,
        tax_events: TaxEventBundle,
    ) -> ExercisedSharesRow:
        """Sale of already-exercised shares, taxed as LTCG."""
        sell_proceeds = quantity * sell_price
        tax_event_2_long = quantity * tax_events.long_term_cg_tax
        final_remains = sell_proceeds - tax_event_2_long
        return ExercisedSharesRow(
            quantity=quantity,
            sell_proceeds=sell_proceeds,
            transfer_to_account=sell_proceeds,
            transfer_in_inr=sell_proceeds * dollar_rate,
            tax_event_2_long=tax_event_2_long,
            final_remains=final_remains,
            final_in_inr=final_remains * dollar_rate,
        )

    def long_term(
        self, quantity: int, strike_price: Decimal, inputs: LongTermInputs
    ) -> LongTermRow:
        """Exercise at ``fmv_at_exercise``, sell later at ``sell_price``.

        Perquisite and LTCG figures are scaled by quantity here rather than
        taken from a TaxEventBundle; both paths give the same numbers.
        """
        perquisite = inputs.fmv_at_exercise - strike_price
        exercise_amount = quantity * strike_price
        perquisite_tax_high = quantity * perquisite * inputs.short_term_tax_high
        perquisite_tax_actual = quantity * perquisite * inputs.short_term_tax_actual
        total_upfront = exercise_amount + perquisite_tax_high
        tax_refund = perquisite_tax_high - perquisite_tax_actual
        net_exercise_cost = total_upfront - tax_refund

        sell_proceeds = quantity * inputs.sell_price
        ltcg_tax = quantity * (inputs.sell_price - inputs.fmv_at_exercise) * inputs.long_term_tax
        net_from_sale = sell_proceeds - ltcg_tax

        return LongTermRow(
            quantity=quantity,
            exercise_amount=exercise_amount,
            perquisite_tax_high=perquisite_tax_high,
            perquisite_tax_actual=perquisite_tax_actual,
            total_upfront=total_upfront,
            tax_refund=tax_refund,
            net_exercise_cost=net_exercise_cost,
            sell_proceeds=sell_proceeds,
            ltcg_tax=ltcg_tax,
            net_from_sale=net_from_sale,
            net_profit=net_from_sale - net_exercise_cost,
        )

    @staticmethod
    def compare_routes(
        vested_row: VestedRow,
        exercised_row: ExercisedSharesRow,
        exercise_row: ExerciseOnlyRow,
    ) -> ComparisonRow:
        """Options win unless holding shares is strictly better."""
        net_options = vested_row.final_amount
        net_shares = exercised_row.final_remains - exercise_row.net_cost_after_refund
        diff = net_shares - net_options
        return ComparisonRow(
            quantity=vested_row.quantity,
            option_sale_final=vested_row.final_amount,
            share_sale_final=exercised_row.final_remains,
            exercise_cost=exercise_row.net_cost_after_refund,
            net_options=net_options,
            net_shares=net_shares,
            difference=abs(diff),
            better_route=Route.SHARES if diff > 0 else Route.OPTIONS,
        )

    # ------------------------------------------------------------------
    # Report builders
    # ------------------------------------------------------------------

    def _evaluate_exercise(self, inputs: ExerciseInputs) -> ExerciseReport:
        tables = []
        for strike in inputs.strike_prices:
            tax_events = self.calculator.compute(self.calculator.for_exercise(inputs, strike))
            tables.append(ExerciseStrikeTable(
                strike_price=strike,
                perquisite_per_share=inputs.fmv_price - strike,
                tax_events=tax_events,
                rows=[self.exercise_only(q, strike, tax_events) for q in self.quantities],
            ))
        comparison = self._rank(tables, lambda row: row.net_cost_after_refund, RankingGoal.MINIMIZE)
        return ExerciseReport(inputs=inputs, tables=tables, comparison=comparison)

    def _evaluate_vested(self, inputs: VestedInputs) -> VestedReport:
        price = inputs.buy_back_price
        tables = []
        for strike in inputs.strike_prices:
            tax_events = self.calculator.compute(self.calculator.for_vested(inputs, strike))
            tables.append(VestedStrikeTable(
                strike_price=strike,
                perquisite_per_share=price - strike,
                tax_events=tax_events,
                rows=[
                    self.vested(q, strike, price, price, inputs.dollar_rate, tax_events)
                    for q in self.quantities
                ],
            ))
        comparison = self._rank(tables, lambda row: row.final_amount, RankingGoal.MAXIMIZE)
        return VestedReport(inputs=inputs, tables=tables, comparison=comparison)

    def _evaluate_long_term(self, inputs: LongTermInputs) -> LongTermReport:
        tables = [
            LongTermStrikeTable(
                strike_price=strike,
                perquisite_per_share=inputs.fmv_at_exercise - strike,
                ltcg_per_share=inputs.sell_price - inputs.fmv_at_exercise,
                rows=[self.long_term(q, strike, inputs) for q in self.quantities],
            )
            for strike in inputs.strike_prices
        ]
        comparison = self._rank(tables, lambda row: row.net_profit, RankingGoal.MAXIMIZE)
        return LongTermReport(inputs=inputs, tables=tables, comparison=comparison)

    def _evaluate_comparison(self, inputs: ComparisonInputs) -> ComparisonReport:
        event_inputs = self.calculator.for_comparison(inputs)
        tax_events = self.calculator.compute(event_inputs)
        strike = inputs.strike_price

        vested_rows = [
            self.vested(q, strike, inputs.sell_price, inputs.fmv_price, inputs.dollar_rate, tax_events)
            for q in self.quantities
        ]
        exercised_rows = [
            self.exercised_shares(q, inputs.sell_price, inputs.dollar_rate, tax_events)
            for q in self.quantities
        ]
        exercise_rows = [self.exercise_only(q, strike, tax_events) for q in self.quantities]
        rows = [
            self.compare_routes(v, s, e)
            for v, s, e in zip(vested_rows, exercised_rows, exercise_rows)
        ]
        return ComparisonReport(
            inputs=inputs,
            summary=self.calculator.summarize(event_inputs),
            tax_events=tax_events,
            vested_rows=vested_rows,
            exercised_rows=exercised_rows,
            exercise_rows=exercise_rows,
            rows=rows,
        )

    def _rank(
        self,
        tables: list,
        value_of: Callable[[BaseModel], Decimal],
        goal: RankingGoal,
    ) -> list[StrikeComparisonRow]:
        """Per quantity, rank every strike price table's row by ``value_of``."""
        comparison = []
        for i, quantity in enumerate(self.quantities):
            candidates = [
                StrikeCandidate(strike_price=t.strike_price, value=value_of(t.rows[i]))
                for t in tables
            ]
            comparison.append(compare_strikes(quantity, candidates, goal))
        return comparison
