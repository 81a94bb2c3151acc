"""Per-share tax event computation.

Perquisite tax is charged on (FMV - strike) at exercise, first withheld at the
high statutory rate and later settled at the holder's actual slab. Capital
gains tax applies to appreciation above the FMV that was already taxed.
Negative results are credits and are passed through unchanged.
"""

import logging
from decimal import Decimal

from esop.models.inputs import (
    ComparisonInputs,
    ExerciseInputs,
    LongTermInputs,
    TaxEventInputs,
    VestedInputs,
)
from esop.models.results import PerShareSummary, TaxEventBundle

logger = logging.getLogger(__name__)


class TaxEventCalculator:
    """Derives the per-share tax events for one strike price."""

    def compute(self, inputs: TaxEventInputs) -> TaxEventBundle:
        perquisite = inputs.fmv_price - inputs.strike_price
        bundle = TaxEventBundle(
            perquisite_tax_high=perquisite * inputs.short_term_tax_high,
            perquisite_tax_actual=perquisite * inputs.short_term_tax_actual,
            direct_sale_tax=(inputs.sell_price - inputs.strike_price) * inputs.short_term_tax_high,
            short_term_cg_tax=(inputs.sell_price - inputs.fmv_price) * inputs.short_term_tax_high,
            long_term_cg_tax=(inputs.sell_price - inputs.fmv_at_exercise) * inputs.long_term_tax,
        )
        logger.debug("Tax events for strike %s: %s", inputs.strike_price, bundle)
        return bundle

    def summarize(self, inputs: TaxEventInputs) -> PerShareSummary:
        """Per-share overview: tax events plus the raw gains they are charged on."""
        bundle = self.compute(inputs)
        return PerShareSummary(
            perquisite_tax_high=bundle.perquisite_tax_high,
            perquisite_tax_actual=bundle.perquisite_tax_actual,
            short_term_cg_tax=bundle.short_term_cg_tax,
            long_term_cg_tax=bundle.long_term_cg_tax,
            gain_per_share=inputs.sell_price - inputs.strike_price,
            perquisite_per_share=inputs.fmv_price - inputs.strike_price,
        )

    # ------------------------------------------------------------------
    # Strategy-specific views of the market inputs
    # ------------------------------------------------------------------

    @staticmethod
    def for_exercise(inputs: ExerciseInputs, strike_price: Decimal) -> TaxEventInputs:
        return TaxEventInputs(
            strike_price=strike_price,
            fmv_price=inputs.fmv_price,
            short_term_tax_high=inputs.short_term_tax_high,
            short_term_tax_actual=inputs.short_term_tax_actual,
        )

    @staticmethod
    def for_vested(inputs: VestedInputs, strike_price: Decimal) -> TaxEventInputs:
        """Buy-back price is both the withholding FMV and the sale price."""
        return TaxEventInputs(
            strike_price=strike_price,
            fmv_price=inputs.buy_back_price,
            sell_price=inputs.buy_back_price,
            short_term_tax_high=inputs.short_term_tax_high,
            short_term_tax_actual=inputs.short_term_tax_actual,
        )

    @staticmethod
    def for_long_term(inputs: LongTermInputs, strike_price: Decimal) -> TaxEventInputs:
        return TaxEventInputs(
            strike_price=strike_price,
            fmv_price=inputs.fmv_at_exercise,
            fmv_at_exercise=inputs.fmv_at_exercise,
            sell_price=inputs.sell_price,
            short_term_tax_high=inputs.short_term_tax_high,
            short_term_tax_actual=inputs.short_term_tax_actual,
            long_term_tax=inputs.long_term_tax,
        )

    @staticmethod
    def for_comparison(inputs: ComparisonInputs) -> TaxEventInputs:
        return TaxEventInputs(
            strike_price=inputs.strike_price,
            fmv_price=inputs.fmv_price,
            fmv_at_exercise=inputs.fmv_at_exercise,
            sell_price=inputs.sell_price,
            short_term_tax_high=inputs.short_term_tax_high,
            short_term_tax_actual=inputs.short_term_tax_actual,
            long_term_tax=inputs.long_term_tax,
        )
