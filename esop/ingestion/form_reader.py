"""Reads raw textual form fields into sanitized input records.

Numbers parse the way a browser form's ``parseFloat`` does: leading
whitespace is skipped and the longest numeric prefix is used, so ``"12abc"``
reads as 12. Anything missing, unparsable or out of range becomes 0.
Percentage fields are divided by 100. Strike price lists are comma
separated; invalid or negative entries are dropped, and an empty result
falls back to the strategy's default list.
"""

import logging
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ValidationError

from esop.engines.defaults import DEFAULT_STRIKE_PRICES
from esop.exceptions import DataValidationError
from esop.models.enums import IssueSeverity, StrategyKind
from esop.models.inputs import (
    ComparisonInputs,
    ExerciseInputs,
    FieldIssue,
    InputReadResult,
    LongTermInputs,
    VestedInputs,
)

logger = logging.getLogger(__name__)

_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

# Roughly the double range. Larger magnitudes are refused rather than
# carried as Infinity, so products of a few in-range values stay well inside
# the default Decimal context.
MAX_ADJUSTED_EXPONENT = 308

_NUMBER = "number"
_PERCENT = "percent"
_STRIKES = "strikes"

_FIELDS: dict[StrategyKind, dict[str, str]] = {
    StrategyKind.EXERCISE_ONLY: {
        "strike_prices": _STRIKES,
        "fmv_price": _NUMBER,
        "dollar_rate": _NUMBER,
        "short_term_tax_high": _PERCENT,
        "short_term_tax_actual": _PERCENT,
    },
    StrategyKind.VESTED: {
        "strike_prices": _STRIKES,
        "buy_back_price": _NUMBER,
        "dollar_rate": _NUMBER,
        "short_term_tax_high": _PERCENT,
        "short_term_tax_actual": _PERCENT,
    },
    StrategyKind.LONG_TERM: {
        "strike_prices": _STRIKES,
        "fmv_at_exercise": _NUMBER,
        "sell_price": _NUMBER,
        "dollar_rate": _NUMBER,
        "short_term_tax_high": _PERCENT,
        "short_term_tax_actual": _PERCENT,
        "long_term_tax": _PERCENT,
    },
    StrategyKind.COMPARISON: {
        "strike_price": _NUMBER,
        "fmv_price": _NUMBER,
        "fmv_at_exercise": _NUMBER,
        "sell_price": _NUMBER,
        "dollar_rate": _NUMBER,
        "short_term_tax_high": _PERCENT,
        "short_term_tax_actual": _PERCENT,
        "long_term_tax": _PERCENT,
    },
}

_MODELS: dict[StrategyKind, type[BaseModel]] = {
    StrategyKind.EXERCISE_ONLY: ExerciseInputs,
    StrategyKind.VESTED: VestedInputs,
    StrategyKind.LONG_TERM: LongTermInputs,
    StrategyKind.COMPARISON: ComparisonInputs,
}


def field_names(kind: StrategyKind) -> list[str]:
    """Field names accepted for a strategy kind, in form order."""
    return list(_FIELDS[kind])


def parse_number(raw: str | None) -> Decimal | None:
    """Parse the leading numeric prefix of *raw*.

    Returns None when there is no prefix or when its magnitude is out of
    range (see ``is_out_of_range``).
    """
    if raw is None:
        return None
    match = _NUMERIC_PREFIX.match(raw)
    if not match:
        return None
    try:
        value = Decimal(match.group(1))
    except InvalidOperation:
        return None
    if not value:
        return Decimal("0")
    if value.adjusted() > MAX_ADJUSTED_EXPONENT:
        return None
    return value


def is_out_of_range(raw: str) -> bool:
    """True if *raw* has a numeric prefix that parse_number rejects for size."""
    return parse_number(raw) is None and _NUMERIC_PREFIX.match(raw) is not None


def parse_strike_prices(raw: str | None, fallback: list[Decimal]) -> list[Decimal]:
    """Split a comma-separated strike price list, keeping valid non-negative entries."""
    prices = []
    for part in (raw or "").split(","):
        value = parse_number(part.strip())
        if value is not None and value >= 0:
            prices.append(value)
    return prices if prices else list(fallback)


def _as_text(raw: Any) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        return ",".join(str(v) for v in raw)
    return str(raw)


class FormReader:
    """Turns a mapping of raw field values into an InputReadResult.

    In the default lenient mode every coercion is reported as a warning and a
    usable record is always returned. With ``strict=True`` any coercion makes
    the read fail: the issues become errors and no record is returned.
    """

    def read(
        self,
        kind: StrategyKind,
        fields: Mapping[str, Any],
        strict: bool = False,
    ) -> InputReadResult:
        issues: list[FieldIssue] = []
        values: dict[str, Any] = {}

        for name in fields:
            if name not in _FIELDS[kind]:
                issues.append(FieldIssue(
                    field=name,
                    raw_value=_as_text(fields[name]),
                    message=f"Unknown field for {kind.value}, ignored",
                ))

        for name, field_type in _FIELDS[kind].items():
            raw = _as_text(fields.get(name))
            if field_type == _STRIKES:
                values[name] = self._read_strikes(kind, name, raw, issues)
            else:
                number = self._read_number(name, raw, issues)
                values[name] = number / 100 if field_type == _PERCENT else number

        if strict and issues:
            for issue in issues:
                issue.severity = IssueSeverity.ERROR
            logger.info("Strict read of %s rejected: %d issue(s)", kind.value, len(issues))
            return InputReadResult(kind=kind, issues=issues)

        try:
            inputs = _MODELS[kind](**values)
        except ValidationError as exc:
            for err in exc.errors():
                issues.append(FieldIssue(
                    field=".".join(str(p) for p in err["loc"]),
                    raw_value=_as_text(fields.get(str(err["loc"][0]))) if err["loc"] else None,
                    message=err["msg"],
                    severity=IssueSeverity.ERROR,
                ))
            return InputReadResult(kind=kind, issues=issues)

        if issues:
            logger.debug("Read %s with %d warning(s)", kind.value, len(issues))
        return InputReadResult(kind=kind, inputs=inputs, issues=issues)

    def read_or_raise(
        self,
        kind: StrategyKind,
        fields: Mapping[str, Any],
        strict: bool = False,
    ) -> InputReadResult:
        """Like read(), but raise DataValidationError on the first error."""
        result = self.read(kind, fields, strict=strict)
        if not result.ok:
            first = result.errors[0]
            raise DataValidationError(first.field, first.message)
        return result

    @staticmethod
    def _read_number(name: str, raw: str | None, issues: list[FieldIssue]) -> Decimal:
        if raw is None or not raw.strip():
            issues.append(FieldIssue(field=name, raw_value=raw, message="Missing value, using 0"))
            return Decimal("0")
        value = parse_number(raw)
        if value is None:
            message = "Out of range, using 0" if is_out_of_range(raw) else "Not a number, using 0"
            issues.append(FieldIssue(field=name, raw_value=raw, message=message))
            return Decimal("0")
        match = _NUMERIC_PREFIX.match(raw)
        if match and raw[match.end():].strip():
            issues.append(FieldIssue(
                field=name,
                raw_value=raw,
                message=f"Trailing text ignored, using {value}",
            ))
        return value

    @staticmethod
    def _read_strikes(
        kind: StrategyKind, name: str, raw: str | None, issues: list[FieldIssue]
    ) -> list[Decimal]:
        fallback = DEFAULT_STRIKE_PRICES[kind]
        prices = []
        for part in (raw or "").split(","):
            text = part.strip()
            if not text:
                continue
            value = parse_number(text)
            if value is None:
                reason = "out of range" if is_out_of_range(text) else "not a number"
                issues.append(FieldIssue(field=name, raw_value=text, message=f"Strike price ignored: {reason}"))
            elif value < 0:
                issues.append(FieldIssue(field=name, raw_value=text, message="Strike price ignored: negative"))
            else:
                prices.append(value)
        if prices:
            return prices
        issues.append(FieldIssue(
            field=name,
            raw_value=raw,
            message="No valid strike prices, using default " + ", ".join(str(p) for p in fallback),
        ))
        return list(fallback)
