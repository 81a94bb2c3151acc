"""Sanitized input records consumed by the calculation engines.

Each strategy kind has its own record. All prices are USD per share, the
exchange rate converts USD to INR, and every tax rate is a fraction (42.74%
is ``Decimal("0.4274")``). Rates are deliberately not clamped to [0, 1].
"""

from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from esop.models.enums import IssueSeverity, StrategyKind

StrikePrice = Annotated[Decimal, Field(ge=0)]


class ExerciseInputs(BaseModel):
    """Exercise-only scenario: pay strike + perquisite tax, keep the shares."""

    kind: Literal[StrategyKind.EXERCISE_ONLY] = StrategyKind.EXERCISE_ONLY
    strike_prices: list[StrikePrice] = Field(min_length=1)
    fmv_price: Decimal = Decimal("0")
    dollar_rate: Decimal = Decimal("0")
    short_term_tax_high: Decimal = Decimal("0")
    short_term_tax_actual: Decimal = Decimal("0")


class VestedInputs(BaseModel):
    """Same-day sale of vested options at a company buy-back price."""

    kind: Literal[StrategyKind.VESTED] = StrategyKind.VESTED
    strike_prices: list[StrikePrice] = Field(min_length=1)
    buy_back_price: Decimal = Decimal("0")
    dollar_rate: Decimal = Decimal("0")
    short_term_tax_high: Decimal = Decimal("0")
    short_term_tax_actual: Decimal = Decimal("0")


class LongTermInputs(BaseModel):
    """Exercise now, sell after the long-term holding period."""

    kind: Literal[StrategyKind.LONG_TERM] = StrategyKind.LONG_TERM
    strike_prices: list[StrikePrice] = Field(min_length=1)
    fmv_at_exercise: Decimal = Decimal("0")
    sell_price: Decimal = Decimal("0")
    dollar_rate: Decimal = Decimal("0")
    short_term_tax_high: Decimal = Decimal("0")
    short_term_tax_actual: Decimal = Decimal("0")
    long_term_tax: Decimal = Decimal("0")


class ComparisonInputs(BaseModel):
    """Same-day option sale vs. exercise-and-hold for a single strike price."""

    kind: Literal[StrategyKind.COMPARISON] = StrategyKind.COMPARISON
    strike_price: StrikePrice = Decimal("0")
    fmv_price: Decimal = Decimal("0")
    fmv_at_exercise: Decimal = Decimal("0")
    sell_price: Decimal = Decimal("0")
    dollar_rate: Decimal = Decimal("0")
    short_term_tax_high: Decimal = Decimal("0")
    short_term_tax_actual: Decimal = Decimal("0")
    long_term_tax: Decimal = Decimal("0")


StrategyInputs = Annotated[
    Union[ExerciseInputs, VestedInputs, LongTermInputs, ComparisonInputs],
    Field(discriminator="kind"),
]


class TaxEventInputs(BaseModel):
    """Flat per-strike view of market inputs used to derive tax events.

    Fields a strategy does not use stay at zero.
    """

    strike_price: Decimal = Decimal("0")
    fmv_price: Decimal = Decimal("0")
    fmv_at_exercise: Decimal = Decimal("0")
    sell_price: Decimal = Decimal("0")
    short_term_tax_high: Decimal = Decimal("0")
    short_term_tax_actual: Decimal = Decimal("0")
    long_term_tax: Decimal = Decimal("0")


class FieldIssue(BaseModel):
    """A problem found while reading a single raw input field."""

    field: str
    raw_value: str | None = None
    message: str
    severity: IssueSeverity = IssueSeverity.WARNING


class InputReadResult(BaseModel):
    """Outcome of reading raw form fields.

    ``inputs`` is None only when reading failed; ``issues`` lists every
    coercion applied (warnings) or rejection (errors).
    """

    kind: StrategyKind
    inputs: StrategyInputs | None = None
    issues: list[FieldIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.inputs is not None

    @property
    def errors(self) -> list[FieldIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.ERROR]

    @property
    def warnings(self) -> list[FieldIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]
