"""Calculator defaults and evaluator configuration.

Fallback strike prices, the share quantity ladder, and default rates used
when the caller leaves a field blank. Never hardcode these in computation
functions; pass an EvaluatorConfig instead.

Rates:
  - 42.74%: perquisite withholding at the top slab (30% with 37% surcharge
    and 4% cess, rounded)
  - 12.5%: LTCG on equity held past the long-term threshold (Budget 2024)
"""

from decimal import Decimal

from pydantic import BaseModel, ValidationError, field_validator

from esop.exceptions import ConfigurationError
from esop.models.enums import StrategyKind

# ---------------------------------------------------------------------------
# Quantity ladder: 1000, 1500, ..., 10000 (19 rows per table)
# ---------------------------------------------------------------------------
QUANTITY_SEQUENCE: tuple[int, ...] = tuple(range(1000, 10001, 500))

# ---------------------------------------------------------------------------
# Strike price list used when none (or none valid) is supplied.
# Comparison takes a single strike price and has no fallback list.
# ---------------------------------------------------------------------------
DEFAULT_STRIKE_PRICES: dict[StrategyKind, list[Decimal]] = {
    StrategyKind.EXERCISE_ONLY: [Decimal("0.133")],
    StrategyKind.VESTED: [Decimal("0.133")],
    StrategyKind.LONG_TERM: [Decimal("1")],
}

# ---------------------------------------------------------------------------
# CLI defaults, as the user would type them (percentages, not fractions)
# ---------------------------------------------------------------------------
DEFAULT_TAX_HIGH_PERCENT = "42.74"
DEFAULT_TAX_ACTUAL_PERCENT = "30"
DEFAULT_LONG_TERM_TAX_PERCENT = "12.5"
DEFAULT_DOLLAR_RATE = "85"


class EvaluatorConfig(BaseModel):
    """Evaluator configuration: which quantities get a row, in order."""

    quantities: tuple[int, ...] = QUANTITY_SEQUENCE

    @field_validator("quantities")
    @classmethod
    def _ascending_positive(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value:
            raise ValueError("at least one quantity is required")
        if any(q <= 0 for q in value):
            raise ValueError("quantities must be positive")
        if any(b <= a for a, b in zip(value, value[1:])):
            raise ValueError("quantities must be strictly ascending")
        return value


def make_config(quantities: list[int] | None = None) -> EvaluatorConfig:
    """Build an EvaluatorConfig, reporting bad quantity ladders as ConfigurationError."""
    if quantities is None:
        return EvaluatorConfig()
    try:
        return EvaluatorConfig(quantities=tuple(quantities))
    except ValidationError as exc:
        raise ConfigurationError(exc.errors()[0]["msg"]) from exc
