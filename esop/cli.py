"""Typer CLI interface for the ESOP strategy calculator."""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from esop.engines.defaults import (
    DEFAULT_DOLLAR_RATE,
    DEFAULT_LONG_TERM_TAX_PERCENT,
    DEFAULT_TAX_ACTUAL_PERCENT,
    DEFAULT_TAX_HIGH_PERCENT,
    make_config,
)
from esop.engines.strategies import StrategyEvaluator
from esop.exceptions import EsopError
from esop.ingestion import FormReader, field_names, load_fields
from esop.models.enums import Route, StrategyKind
from esop.models.results import (
    ComparisonReport,
    ExerciseReport,
    LongTermReport,
    StrikeComparisonRow,
    VestedReport,
)
from esop.reports import (
    ComparisonReportGenerator,
    ExerciseReportGenerator,
    LongTermReportGenerator,
    VestedReportGenerator,
)
from esop.reports.formatting import format_dual, format_quantity, format_strike

app = typer.Typer(
    name="esopcalc",
    help="ESOP exercise and sale strategy calculator (Indian perquisite, STCG and LTCG tax).",
)

_KIND_NAMES: dict[str, StrategyKind] = {
    "exercise": StrategyKind.EXERCISE_ONLY,
    "vested": StrategyKind.VESTED,
    "long-term": StrategyKind.LONG_TERM,
    "compare": StrategyKind.COMPARISON,
}

_DEFAULT_FIELDS: dict[str, str] = {
    "dollar_rate": DEFAULT_DOLLAR_RATE,
    "short_term_tax_high": DEFAULT_TAX_HIGH_PERCENT,
    "short_term_tax_actual": DEFAULT_TAX_ACTUAL_PERCENT,
    "long_term_tax": DEFAULT_LONG_TERM_TAX_PERCENT,
}

# Shared options
_INPUTS_OPTION = typer.Option(
    None, "--inputs", "-i", help="JSON file of raw field values; command-line options win",
)
_STRICT_OPTION = typer.Option(False, "--strict", help="Fail instead of coercing bad values to 0")
_JSON_OPTION = typer.Option(False, "--json", help="Output as JSON")
_QUANTITIES_OPTION = typer.Option(
    None, "--quantities", "-q", help="Comma-separated share quantities (default 1000..10000 step 500)",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """ESOP exercise and sale strategy calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


class _DecimalEncoder(json.JSONEncoder):
    """JSON encoder that serializes Decimal as string."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


def _parse_quantities(raw: str | None) -> list[int] | None:
    if raw is None:
        return None
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        typer.echo(f"Error: Invalid quantities '{raw}'. Use whole numbers, e.g. 1000,2000", err=True)
        raise typer.Exit(1)


def _evaluate(
    kind: StrategyKind,
    options: dict[str, str | None],
    inputs_file: Path | None,
    strict: bool,
    quantities: str | None,
):
    """Merge defaults, file fields and options, then read and evaluate."""
    accepted = field_names(kind)
    fields: dict[str, Any] = {k: v for k, v in _DEFAULT_FIELDS.items() if k in accepted}
    try:
        if inputs_file is not None:
            fields.update(load_fields(inputs_file))
        fields.update({k: v for k, v in options.items() if v is not None})
        result = FormReader().read_or_raise(kind, fields, strict=strict)
        config = make_config(_parse_quantities(quantities))
    except EsopError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    for issue in result.warnings:
        raw = f" ({issue.raw_value!r})" if issue.raw_value is not None else ""
        typer.echo(f"Warning: {issue.field}{raw}: {issue.message}", err=True)

    return StrategyEvaluator(config).evaluate(result.inputs)


def _echo_json(report: Any) -> None:
    typer.echo(json.dumps(report.model_dump(), cls=_DecimalEncoder, indent=2))


# ---------------------------------------------------------------------------
# Rich table output
# ---------------------------------------------------------------------------

def _strike_comparison_table(
    title: str, first_column: str, rows: list[StrikeComparisonRow], dollar_rate: Decimal
) -> Table:
    tbl = Table(title=title, show_header=True)
    tbl.add_column(first_column, style="cyan", justify="right")
    for candidate in rows[0].candidates:
        tbl.add_column(f"@ {format_strike(candidate.strike_price)}", justify="right")
    tbl.add_column("Best", style="bold green")
    for row in rows:
        tbl.add_row(
            format_quantity(row.quantity),
            *(format_dual(c.value, dollar_rate) for c in row.candidates),
            format_strike(row.best_strike_price),
        )
    return tbl


def _print_exercise(report: ExerciseReport, console: Console) -> None:
    rate = report.inputs.dollar_rate
    typer.echo("=== Exercise Only: Net Cost After Refund (lowest wins) ===")
    console.print(_strike_comparison_table("Comparison Summary", "Options", report.comparison, rate))
    for t in report.tables:
        tbl = Table(
            title=f"Strike Price {format_strike(t.strike_price)} "
            f"(Perquisite/share: {format_dual(t.perquisite_per_share, rate)})",
            show_header=True,
        )
        for col in ("Options", "Exercise Amount", "Tax @ High Rate", "Total Upfront",
                    "Tax @ Actual Rate", "Tax Refund", "Net Cost"):
            tbl.add_column(col, justify="right")
        for row in t.rows:
            tbl.add_row(
                format_quantity(row.quantity),
                format_dual(row.exercise_amount, rate),
                format_dual(row.tax_at_high_rate, rate),
                format_dual(row.total_company_deducts, rate),
                format_dual(row.tax_at_actual_rate, rate),
                format_dual(row.tax_refund, rate),
                format_dual(row.net_cost_after_refund, rate),
            )
        console.print(tbl)


def _print_vested(report: VestedReport, console: Console) -> None:
    rate = report.inputs.dollar_rate
    typer.echo(
        f"=== Vested Options: Final Amount @ Buy Back "
        f"{format_dual(report.inputs.buy_back_price, rate)} (highest wins) ==="
    )
    console.print(_strike_comparison_table("Comparison Summary", "Options", report.comparison, rate))
    for t in report.tables:
        tbl = Table(title=f"Strike Price {format_strike(t.strike_price)}", show_header=True)
        for col in ("Options", "Exercise Amount", "Sell Proceeds", "Tax @ High Rate",
                    "Total Deducted", "Transfer to A/C", "Tax Refund", "Final Amount"):
            tbl.add_column(col, justify="right")
        for row in t.rows:
            tbl.add_row(
                format_quantity(row.quantity),
                format_dual(row.exercise_cost, rate),
                format_dual(row.sell_proceeds, rate),
                format_dual(row.tax_event_1, rate),
                format_dual(row.company_deducts, rate),
                format_dual(row.transfer_to_account, rate),
                format_dual(row.tax_refund, rate),
                format_dual(row.final_amount, rate),
            )
        console.print(tbl)


def _print_long_term(report: LongTermReport, console: Console) -> None:
    rate = report.inputs.dollar_rate
    typer.echo("=== Long Term Sale: Net Profit (highest wins) ===")
    console.print(_strike_comparison_table("Comparison Summary", "Shares", report.comparison, rate))
    for t in report.tables:
        tbl = Table(
            title=f"Strike {format_strike(t.strike_price)} (LTCG/share: {format_dual(t.ltcg_per_share, rate)})",
            show_header=True,
        )
        for col in ("Shares", "Total Upfront", "Tax Refund", "Net Exercise Cost",
                    "Sell Proceeds", "LTCG Tax", "Net Profit"):
            tbl.add_column(col, justify="right")
        for row in t.rows:
            tbl.add_row(
                format_quantity(row.quantity),
                format_dual(row.total_upfront, rate),
                format_dual(row.tax_refund, rate),
                format_dual(row.net_exercise_cost, rate),
                format_dual(row.sell_proceeds, rate),
                format_dual(row.ltcg_tax, rate),
                format_dual(row.net_profit, rate),
            )
        console.print(tbl)


def _print_comparison(report: ComparisonReport, console: Console) -> None:
    rate = report.inputs.dollar_rate
    typer.echo(f"=== Options vs. Shares @ Strike {format_strike(report.inputs.strike_price)} ===")

    summary = Table(title="Per Share", show_header=False)
    summary.add_column("", style="cyan")
    summary.add_column("", justify="right", style="green")
    summary.add_row("Perquisite Tax (High)", format_dual(report.summary.perquisite_tax_high, rate))
    summary.add_row("Perquisite Tax (Actual)", format_dual(report.summary.perquisite_tax_actual, rate))
    summary.add_row("Short Term CG Tax", format_dual(report.summary.short_term_cg_tax, rate))
    summary.add_row("Long Term CG Tax", format_dual(report.summary.long_term_cg_tax, rate))
    summary.add_row("Gain per Share", format_dual(report.summary.gain_per_share, rate))
    summary.add_row("FMV Gain", format_dual(report.summary.perquisite_per_share, rate))
    console.print(summary)

    tbl = Table(title="Comparison", show_header=True)
    for col in ("Quantity", "Net Gain (Options)", "Net Gain (Shares)", "Difference", "Better"):
        tbl.add_column(col, justify="right")
    for row in report.rows:
        better = "Shares (LTCG)" if row.better_route == Route.SHARES else "Options (Same-Day)"
        tbl.add_row(
            format_quantity(row.quantity),
            format_dual(row.net_options, rate),
            format_dual(row.net_shares, rate),
            format_dual(row.difference, rate),
            f"[green]{better}[/green]" if row.better_route == Route.SHARES else f"[red]{better}[/red]",
        )
    console.print(tbl)


_PRINTERS = {
    StrategyKind.EXERCISE_ONLY: _print_exercise,
    StrategyKind.VESTED: _print_vested,
    StrategyKind.LONG_TERM: _print_long_term,
    StrategyKind.COMPARISON: _print_comparison,
}

_GENERATORS = {
    StrategyKind.EXERCISE_ONLY: ExerciseReportGenerator,
    StrategyKind.VESTED: VestedReportGenerator,
    StrategyKind.LONG_TERM: LongTermReportGenerator,
    StrategyKind.COMPARISON: ComparisonReportGenerator,
}


def _output(report: Any, json_output: bool) -> None:
    if json_output:
        _echo_json(report)
        return
    _PRINTERS[report.kind](report, Console())


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def exercise(
    strike_prices: str | None = typer.Option(
        None, "--strike-prices", "-s", help="Comma-separated strike prices in USD (default 0.133)",
    ),
    fmv: str | None = typer.Option(None, "--fmv", help="Fair market value per share (USD)"),
    dollar_rate: str | None = typer.Option(None, "--dollar-rate", help="USD to INR rate"),
    tax_high: str | None = typer.Option(None, "--tax-high", help="Withholding rate, percent"),
    tax_actual: str | None = typer.Option(None, "--tax-actual", help="Your actual slab rate, percent"),
    inputs_file: Path | None = _INPUTS_OPTION,
    strict: bool = _STRICT_OPTION,
    json_output: bool = _JSON_OPTION,
    quantities: str | None = _QUANTITIES_OPTION,
) -> None:
    """Exercise only: upfront cost, withholding, refund and net cost per strike price."""
    report = _evaluate(
        StrategyKind.EXERCISE_ONLY,
        {
            "strike_prices": strike_prices,
            "fmv_price": fmv,
            "dollar_rate": dollar_rate,
            "short_term_tax_high": tax_high,
            "short_term_tax_actual": tax_actual,
        },
        inputs_file, strict, quantities,
    )
    _output(report, json_output)


@app.command()
def vested(
    strike_prices: str | None = typer.Option(
        None, "--strike-prices", "-s", help="Comma-separated strike prices in USD (default 0.133)",
    ),
    buy_back: str | None = typer.Option(None, "--buy-back", help="Company buy-back price per share (USD)"),
    dollar_rate: str | None = typer.Option(None, "--dollar-rate", help="USD to INR rate"),
    tax_high: str | None = typer.Option(None, "--tax-high", help="Withholding rate, percent"),
    tax_actual: str | None = typer.Option(None, "--tax-actual", help="Your actual slab rate, percent"),
    inputs_file: Path | None = _INPUTS_OPTION,
    strict: bool = _STRICT_OPTION,
    json_output: bool = _JSON_OPTION,
    quantities: str | None = _QUANTITIES_OPTION,
) -> None:
    """Vested options sold the same day at the buy-back price."""
    report = _evaluate(
        StrategyKind.VESTED,
        {
            "strike_prices": strike_prices,
            "buy_back_price": buy_back,
            "dollar_rate": dollar_rate,
            "short_term_tax_high": tax_high,
            "short_term_tax_actual": tax_actual,
        },
        inputs_file, strict, quantities,
    )
    _output(report, json_output)


@app.command(name="long-term")
def long_term(
    strike_prices: str | None = typer.Option(
        None, "--strike-prices", "-s", help="Comma-separated strike prices in USD (default 1)",
    ),
    fmv_at_exercise: str | None = typer.Option(None, "--fmv-at-exercise", help="FMV on exercise date (USD)"),
    sell_price: str | None = typer.Option(None, "--sell-price", help="Expected sale price (USD)"),
    dollar_rate: str | None = typer.Option(None, "--dollar-rate", help="USD to INR rate"),
    tax_high: str | None = typer.Option(None, "--tax-high", help="Withholding rate, percent"),
    tax_actual: str | None = typer.Option(None, "--tax-actual", help="Your actual slab rate, percent"),
    ltcg: str | None = typer.Option(None, "--ltcg", help="Long-term capital gains rate, percent"),
    inputs_file: Path | None = _INPUTS_OPTION,
    strict: bool = _STRICT_OPTION,
    json_output: bool = _JSON_OPTION,
    quantities: str | None = _QUANTITIES_OPTION,
) -> None:
    """Exercise now and sell after the long-term holding period."""
    report = _evaluate(
        StrategyKind.LONG_TERM,
        {
            "strike_prices": strike_prices,
            "fmv_at_exercise": fmv_at_exercise,
            "sell_price": sell_price,
            "dollar_rate": dollar_rate,
            "short_term_tax_high": tax_high,
            "short_term_tax_actual": tax_actual,
            "long_term_tax": ltcg,
        },
        inputs_file, strict, quantities,
    )
    _output(report, json_output)


@app.command()
def compare(
    strike_price: str | None = typer.Option(None, "--strike-price", "-s", help="Strike price (USD)"),
    fmv: str | None = typer.Option(None, "--fmv", help="FMV used for withholding (USD)"),
    fmv_at_exercise: str | None = typer.Option(None, "--fmv-at-exercise", help="FMV on exercise date (USD)"),
    sell_price: str | None = typer.Option(None, "--sell-price", help="Sale price (USD)"),
    dollar_rate: str | None = typer.Option(None, "--dollar-rate", help="USD to INR rate"),
    tax_high: str | None = typer.Option(None, "--tax-high", help="Withholding rate, percent"),
    tax_actual: str | None = typer.Option(None, "--tax-actual", help="Your actual slab rate, percent"),
    ltcg: str | None = typer.Option(None, "--ltcg", help="Long-term capital gains rate, percent"),
    inputs_file: Path | None = _INPUTS_OPTION,
    strict: bool = _STRICT_OPTION,
    json_output: bool = _JSON_OPTION,
    quantities: str | None = _QUANTITIES_OPTION,
) -> None:
    """Same-day option sale vs. exercise-and-hold, per quantity."""
    report = _evaluate(
        StrategyKind.COMPARISON,
        {
            "strike_price": strike_price,
            "fmv_price": fmv,
            "fmv_at_exercise": fmv_at_exercise,
            "sell_price": sell_price,
            "dollar_rate": dollar_rate,
            "short_term_tax_high": tax_high,
            "short_term_tax_actual": tax_actual,
            "long_term_tax": ltcg,
        },
        inputs_file, strict, quantities,
    )
    _output(report, json_output)


@app.command()
def report(
    strategy: str = typer.Argument(..., help="Strategy: exercise, vested, long-term, compare"),
    inputs_file: Path = typer.Option(..., "--inputs", "-i", help="JSON file of raw field values"),
    output: Path = typer.Option(Path("./reports"), "--output", "-o", help="Output directory"),
    strict: bool = _STRICT_OPTION,
    quantities: str | None = _QUANTITIES_OPTION,
) -> None:
    """Write a plain-text report for one strategy."""
    kind = _KIND_NAMES.get(strategy.lower())
    if kind is None:
        valid = ", ".join(_KIND_NAMES)
        typer.echo(f"Error: Invalid strategy '{strategy}'. Valid: {valid}", err=True)
        raise typer.Exit(1)

    result = _evaluate(kind, {}, inputs_file, strict, quantities)
    text = _GENERATORS[kind]().render(result)

    output.mkdir(parents=True, exist_ok=True)
    path = output / f"{strategy.lower().replace('-', '_')}_report.txt"
    path.write_text(text)
    typer.echo(f"  Report: {path}")


if __name__ == "__main__":
    app()
