from __future__ import annotations

import json
from dataclasses import asdict
from typing import Optional

import typer

from .config import RateSourceConfig
from .data_sources import fallback_rates
from .exceptions import InvalidArgument
from .logging_config import configure_logging
from .model import calculate
from .schemas import CalculationReport, LoanInputs, RateSet
from .weights import DEFAULT_TERM_YEARS

app = typer.Typer(help="Mortgage affordability check and rate mix comparison.")


def _load_config() -> RateSourceConfig:
    try:
        return RateSourceConfig.from_env()
    except InvalidArgument as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)


def _resolve_rates(config: RateSourceConfig, offline: bool) -> RateSet:
    if offline:
        return fallback_rates()
    return config.build_provider().get_rates()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, help="Log level (env MORTGAGE_MIX_LOG_LEVEL if omitted)."
    ),
    json_logs: bool = typer.Option(False, help="Emit logs as JSON lines."),
) -> None:
    config = _load_config()
    configure_logging(log_level or config.log_level, json_logs=json_logs)


@app.command("calculate")
def calculate_command(
    property_price: float = typer.Argument(..., help="Property price."),
    down_payment: float = typer.Argument(..., help="Down payment (equity)."),
    monthly_income: float = typer.Argument(..., help="Net monthly household income."),
    deal_type: str = typer.Option("first", help="first, upgrade or investment."),
    property_type: str = typer.Option(
        "apartment", help="apartment, landAndHouse or land."
    ),
    term_years: int = typer.Option(DEFAULT_TERM_YEARS, help="Loan term in years."),
    select: Optional[str] = typer.Option(
        None, help="Mix to highlight: stable, balanced or saving."
    ),
    offline: bool = typer.Option(
        False, help="Skip the rate fetch and use the fallback rates."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON."),
) -> None:
    """
    Check affordability for one purchase and compare the rate mixes.
    """
    config = _load_config()
    try:
        inputs = LoanInputs(
            property_price=property_price,
            down_payment=down_payment,
            monthly_income=monthly_income,
            deal_type=deal_type,
            property_type=property_type,
        )
        rates = _resolve_rates(config, offline)
        report = calculate(
            inputs, rates=rates, term_years=term_years, selected_mix_id=select
        )
    except InvalidArgument as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2)

    if as_json:
        typer.echo(json.dumps(report_payload(report), indent=2, ensure_ascii=False))
        return
    _print_report(report)


@app.command()
def rates(
    offline: bool = typer.Option(
        False, help="Skip the rate fetch and use the fallback rates."
    ),
) -> None:
    """
    Show the rate snapshot a calculation would use.
    """
    snapshot = _resolve_rates(_load_config(), offline)
    _print_rates(snapshot)


def report_payload(report: CalculationReport) -> dict:
    result = report.result
    return {
        "inputs": asdict(report.inputs),
        "rates": _rates_payload(report.rates),
        "weighting_version": report.weighting_version,
        "loan_amount": result.loan_amount,
        "average_rate": result.average_rate,
        "monthly_payment": result.monthly_payment,
        "loan_to_value": result.loan_to_value,
        "payment_to_income": result.payment_to_income,
        "warnings": [asdict(warning) for warning in result.warnings],
        "mixes": [asdict(mix) for mix in report.mixes],
        "savings": dict(report.savings),
        "offer_comparison": asdict(report.offer_comparison),
        "selected_mix": report.selected_mix_id,
    }


def _rates_payload(snapshot: RateSet) -> dict:
    return {
        "prime": snapshot.prime,
        "fixed_5_years": snapshot.fixed_5_years,
        "variable": snapshot.variable,
        "last_updated": snapshot.last_updated.isoformat(),
        "is_fallback": snapshot.is_fallback,
    }


def _print_rates(snapshot: RateSet) -> None:
    source = "fallback" if snapshot.is_fallback else "published"
    typer.echo(f"Prime: {snapshot.prime:.2f}%")
    typer.echo(f"Fixed 5 years: {snapshot.fixed_5_years:.2f}%")
    typer.echo(f"Variable: {snapshot.variable:.2f}%")
    typer.echo(f"Updated: {snapshot.last_updated:%Y-%m-%d %H:%M} UTC ({source})")


def _print_report(report: CalculationReport) -> None:
    result = report.result
    inputs = report.inputs
    _print_rates(report.rates)
    typer.echo("")
    typer.echo(f"Loan amount: {result.loan_amount:,.0f}")
    typer.echo(f"Equity: {inputs.equity_percent:.1f}%")
    typer.echo(f"Average rate: {result.average_rate:.2f}%")
    typer.echo(f"Monthly payment: {result.monthly_payment:,.0f}")
    typer.echo(f"Loan to value: {result.loan_to_value:.1f}%")
    typer.echo(f"Payment to income: {result.payment_to_income:.1f}%")
    typer.echo("")
    for warning in result.warnings:
        typer.echo(f"- {warning.message}")
    typer.echo("")
    for mix in report.mixes:
        marker = " (recommended)" if mix.recommended else ""
        if mix.id == report.selected_mix_id:
            marker += " [selected]"
        composition = mix.composition
        typer.echo(f"{mix.name}{marker}")
        typer.echo(
            f"  fixed {composition.fixed}% / variable {composition.variable}% / "
            f"prime {composition.prime}% at {mix.weighted_rate:.2f}%"
        )
        typer.echo(
            f"  monthly {mix.monthly_payment:,.0f}, total {mix.total_cost:,.0f}, "
            f"volatility {mix.volatility}"
        )
        typer.echo(f"  saving vs typical bank: {report.savings[mix.id]:,.0f}")
    comparison = report.offer_comparison
    typer.echo("")
    typer.echo(
        f"Bank offer total: {comparison.bank_offer.total:,.0f} "
        f"(interest {comparison.bank_offer.interest:,.0f})"
    )
    typer.echo(
        f"Planned mix total: {comparison.planned_mix.total:,.0f} "
        f"(interest {comparison.planned_mix.interest:,.0f})"
    )
    typer.echo(
        f"Difference: {comparison.savings:,.0f} ({comparison.savings_percent:.1f}%)"
    )


if __name__ == "__main__":
    app()
