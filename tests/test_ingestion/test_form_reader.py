"""Tests for reading raw form fields into input records."""

from decimal import Decimal

import pytest

from esop.engines import StrategyEvaluator
from esop.exceptions import DataValidationError
from esop.ingestion import FormReader, field_names, parse_number, parse_strike_prices
from esop.ingestion.form_reader import is_out_of_range
from esop.models.enums import IssueSeverity, StrategyKind
from esop.models.inputs import ComparisonInputs, ExerciseInputs, LongTermInputs, VestedInputs


class TestParseNumber:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("10", Decimal("10")),
            ("  3.5", Decimal("3.5")),
            (".5", Decimal("0.5")),
            ("-2", Decimal("-2")),
            ("1e2", Decimal("100")),
            ("12abc", Decimal("12")),
            ("42.74%", Decimal("42.74")),
        ],
    )
    def test_numeric_prefix(self, raw, expected):
        assert parse_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "$10", "."])
    def test_unparsable(self, raw):
        assert parse_number(raw) is None

    @pytest.mark.parametrize("raw", ["1e999999", "1e309", "-5e400"])
    def test_out_of_range(self, raw):
        assert parse_number(raw) is None
        assert is_out_of_range(raw)

    def test_largest_in_range(self):
        assert parse_number("9.99e308") == Decimal("9.99e308")
        assert not is_out_of_range("abc")

    def test_tiny_values_are_kept(self):
        assert parse_number("1e-400") == Decimal("1e-400")

    @pytest.mark.parametrize("raw", ["٣", "３", "٣.٥"])
    def test_non_ascii_digits_are_not_numbers(self, raw):
        assert parse_number(raw) is None

    def test_non_ascii_digits_end_the_prefix(self):
        assert parse_number("1٣") == Decimal("1")


class TestParseStrikePrices:
    def test_keeps_valid_entries_in_order(self):
        prices = parse_strike_prices("0.5, abc, -1, 0.133", [Decimal("1")])
        assert prices == [Decimal("0.5"), Decimal("0.133")]

    def test_zero_is_valid(self):
        assert parse_strike_prices("0", [Decimal("1")]) == [Decimal("0")]

    @pytest.mark.parametrize("raw", [None, "", " , ", "abc, -3"])
    def test_falls_back(self, raw):
        assert parse_strike_prices(raw, [Decimal("0.133")]) == [Decimal("0.133")]


class TestFormReader:
    def setup_method(self):
        self.reader = FormReader()
        self.exercise_fields = {
            "strike_prices": "0.133, 0.5",
            "fmv_price": "10",
            "dollar_rate": "85",
            "short_term_tax_high": "42.74",
            "short_term_tax_actual": "30",
        }

    def test_clean_read(self):
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.exercise_fields)
        assert result.ok
        assert result.issues == []
        assert isinstance(result.inputs, ExerciseInputs)
        assert result.inputs.strike_prices == [Decimal("0.133"), Decimal("0.5")]
        assert result.inputs.short_term_tax_high == Decimal("0.4274")
        assert result.inputs.short_term_tax_actual == Decimal("0.3")

    def test_missing_field_becomes_zero(self):
        del self.exercise_fields["fmv_price"]
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.exercise_fields)
        assert result.ok
        assert result.inputs.fmv_price == 0
        assert [w.field for w in result.warnings] == ["fmv_price"]

    def test_non_numeric_becomes_zero(self):
        self.exercise_fields["dollar_rate"] = "eighty"
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.exercise_fields)
        assert result.inputs.dollar_rate == 0
        assert result.warnings[0].raw_value == "eighty"
        assert result.warnings[0].severity == IssueSeverity.WARNING

    def test_trailing_text_warns_but_keeps_prefix(self):
        self.exercise_fields["fmv_price"] = "10 USD"
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.exercise_fields)
        assert result.inputs.fmv_price == Decimal("10")
        assert "Trailing text" in result.warnings[0].message

    def test_bad_percent_becomes_zero_rate(self):
        self.exercise_fields["short_term_tax_high"] = "n/a"
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.exercise_fields)
        assert result.inputs.short_term_tax_high == 0

    def test_json_numbers_and_lists(self):
        fields = {
            "strike_prices": [0.133, 1],
            "fmv_price": 10.5,
            "dollar_rate": 85,
            "short_term_tax_high": 42.74,
            "short_term_tax_actual": 30,
        }
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, fields)
        assert result.issues == []
        assert result.inputs.strike_prices == [Decimal("0.133"), Decimal("1")]
        assert result.inputs.fmv_price == Decimal("10.5")

    def test_unknown_field_warns(self):
        self.exercise_fields["sell_price"] = "20"
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.exercise_fields)
        assert result.ok
        assert result.warnings[0].field == "sell_price"

    def test_invalid_strikes_reported(self):
        self.exercise_fields["strike_prices"] = "0.5, abc, -1"
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.exercise_fields)
        assert result.inputs.strike_prices == [Decimal("0.5")]
        assert len(result.warnings) == 2

    def test_vested_fallback_strike(self):
        result = self.reader.read(StrategyKind.VESTED, {
            "buy_back_price": "5",
            "dollar_rate": "85",
            "short_term_tax_high": "42.74",
            "short_term_tax_actual": "30",
        })
        assert isinstance(result.inputs, VestedInputs)
        assert result.inputs.strike_prices == [Decimal("0.133")]
        assert "default 0.133" in result.warnings[0].message

    def test_long_term_fallback_strike(self):
        result = self.reader.read(StrategyKind.LONG_TERM, {"strike_prices": "none"})
        assert isinstance(result.inputs, LongTermInputs)
        assert result.inputs.strike_prices == [Decimal("1")]

    def test_everything_missing_still_reads(self):
        result = self.reader.read(StrategyKind.COMPARISON, {})
        assert isinstance(result.inputs, ComparisonInputs)
        assert result.inputs.sell_price == 0
        assert len(result.warnings) == len(field_names(StrategyKind.COMPARISON))

    def test_negative_comparison_strike_is_error(self):
        result = self.reader.read(StrategyKind.COMPARISON, {"strike_price": "-1"})
        assert not result.ok
        assert result.errors[0].field == "strike_price"

    def test_strict_rejects_coercions(self):
        self.exercise_fields["fmv_price"] = "abc"
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.exercise_fields, strict=True)
        assert not result.ok
        assert result.inputs is None
        assert result.errors[0].field == "fmv_price"
        assert result.warnings == []

    def test_strict_accepts_clean_fields(self):
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.exercise_fields, strict=True)
        assert result.ok

    def test_read_or_raise(self):
        self.exercise_fields["fmv_price"] = "abc"
        with pytest.raises(DataValidationError, match="fmv_price"):
            self.reader.read_or_raise(StrategyKind.EXERCISE_ONLY, self.exercise_fields, strict=True)

    def test_read_or_raise_returns_lenient_result(self):
        self.exercise_fields["fmv_price"] = "abc"
        result = self.reader.read_or_raise(StrategyKind.EXERCISE_ONLY, self.exercise_fields)
        assert result.inputs.fmv_price == 0


class TestFieldNames:
    def test_comparison_has_single_strike(self):
        names = field_names(StrategyKind.COMPARISON)
        assert "strike_price" in names
        assert "strike_prices" not in names

    def test_vested_uses_buy_back(self):
        assert "buy_back_price" in field_names(StrategyKind.VESTED)


class TestOutOfRangeValues:
    def setup_method(self):
        self.reader = FormReader()
        self.fields = {
            "strike_prices": "0.133",
            "fmv_price": "1e999999",
            "dollar_rate": "85",
            "short_term_tax_high": "42.74",
            "short_term_tax_actual": "30",
        }

    def test_huge_exponent_becomes_zero_with_warning(self):
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.fields)
        assert result.ok
        assert result.inputs.fmv_price == 0
        assert result.warnings[0].field == "fmv_price"
        assert result.warnings[0].message == "Out of range, using 0"

    def test_evaluates_after_coercion(self):
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.fields)
        report = StrategyEvaluator().evaluate(result.inputs)
        # strike above FMV: 133 exercise cost plus -39.9 tax at the actual rate
        assert report.tables[0].rows[0].net_cost_after_refund == Decimal("93.1")

    def test_strict_rejects(self):
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.fields, strict=True)
        assert not result.ok
        assert result.errors[0].field == "fmv_price"

    def test_huge_strike_dropped(self):
        self.fields["strike_prices"] = "1e999999, 0.5"
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.fields)
        assert result.inputs.strike_prices == [Decimal("0.5")]
        assert "Strike price ignored: out of range" in [w.message for w in result.warnings]

    def test_largest_accepted_values_evaluate(self):
        fields = {
            "strike_price": "0",
            "fmv_price": "9e308",
            "fmv_at_exercise": "9e308",
            "sell_price": "9e308",
            "dollar_rate": "9e308",
            "short_term_tax_high": "9e308",
            "short_term_tax_actual": "9e308",
            "long_term_tax": "9e308",
        }
        result = self.reader.read(StrategyKind.COMPARISON, fields)
        assert result.issues == []
        report = StrategyEvaluator().evaluate(result.inputs)
        assert report.rows[-1].net_shares.is_finite()

    def test_non_ascii_digit_becomes_zero(self):
        self.fields["fmv_price"] = "٣"
        result = self.reader.read(StrategyKind.EXERCISE_ONLY, self.fields)
        assert result.inputs.fmv_price == 0
        assert result.warnings[0].message == "Not a number, using 0"
