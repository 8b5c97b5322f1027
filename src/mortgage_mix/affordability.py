from __future__ import annotations

from typing import List

from .amortization import monthly_payment
from .exceptions import InvalidArgument
from .mixes import weighted_rate
from .schemas import AffordabilityWarning, LoanInputs, MortgageResult, RateSet
from .weights import (
    DEFAULT_TERM_YEARS,
    DEFAULT_WEIGHTING,
    INVESTMENT_MAX_LTV,
    LARGE_LOAN_THRESHOLD,
    MAX_LTV_BY_DEAL,
    MAX_PAYMENT_TO_INCOME,
    MAX_WARNINGS,
    WeightingTable,
)

LOOKS_GOOD = AffordabilityWarning(
    code="looks_good",
    message="Looks good! The numbers fit what lenders usually approve.",
)


def evaluate(
    inputs: LoanInputs,
    rates: RateSet,
    term_years: int = DEFAULT_TERM_YEARS,
    weights: WeightingTable = DEFAULT_WEIGHTING,
) -> MortgageResult:
    """
    Derive LTV and payment-to-income for the submission and flag problems.

    Rules run in a fixed order and only the first three that fire are kept.
    When none fire the result carries a single informational message.
    """
    loan_amount = inputs.loan_amount
    if loan_amount <= 0:
        raise InvalidArgument("loan amount must be positive")

    rate = average_rate(rates, weights)
    payment = monthly_payment(loan_amount, rate, term_years)
    loan_to_value = loan_amount / inputs.property_price * 100
    payment_to_income = payment / inputs.monthly_income * 100

    triggered = _collect_warnings(inputs, payment, loan_to_value, payment_to_income)

    return MortgageResult(
        loan_amount=loan_amount,
        average_rate=rate,
        monthly_payment=payment,
        loan_to_value=loan_to_value,
        payment_to_income=payment_to_income,
        warnings=tuple(triggered[:MAX_WARNINGS]) if triggered else (LOOKS_GOOD,),
        rates=rates,
    )


def average_rate(rates: RateSet, weights: WeightingTable = DEFAULT_WEIGHTING) -> float:
    return weighted_rate(weights.affordability_blend, rates)


def max_loan_to_value(deal_type: str) -> float:
    try:
        return MAX_LTV_BY_DEAL[deal_type]
    except KeyError as exc:
        raise InvalidArgument(f"Unknown deal type '{deal_type}'") from exc


def recommended_income(payment: float) -> float:
    return payment / (MAX_PAYMENT_TO_INCOME / 100)


def _collect_warnings(
    inputs: LoanInputs,
    payment: float,
    loan_to_value: float,
    payment_to_income: float,
) -> List[AffordabilityWarning]:
    warnings: List[AffordabilityWarning] = []

    max_ltv = max_loan_to_value(inputs.deal_type)
    if loan_to_value > max_ltv:
        required_equity = inputs.property_price * (1 - max_ltv / 100)
        shortfall = required_equity - inputs.down_payment
        warnings.append(
            AffordabilityWarning(
                code="insufficient_equity",
                message=(
                    f"Insufficient equity: at least {100 - max_ltv:.0f}% of the price "
                    f"is required (currently {inputs.equity_percent:.1f}%). "
                    f"You are short {shortfall:,.0f}."
                ),
            )
        )

    if payment_to_income > MAX_PAYMENT_TO_INCOME:
        warnings.append(
            AffordabilityWarning(
                code="payment_too_high",
                message=(
                    f"Monthly payment is too high: {payment_to_income:.1f}% of income "
                    f"(banks usually approve up to {MAX_PAYMENT_TO_INCOME:.0f}%). "
                    "Consider more equity or a cheaper property."
                ),
            )
        )

    if inputs.loan_amount > LARGE_LOAN_THRESHOLD:
        warnings.append(
            AffordabilityWarning(
                code="large_loan",
                message=(
                    f"Loan above {LARGE_LOAN_THRESHOLD:,.0f}: you may need blended "
                    "financing (part bank, part non-bank) at different rates."
                ),
            )
        )

    income_needed = recommended_income(payment)
    if inputs.monthly_income < income_needed:
        warnings.append(
            AffordabilityWarning(
                code="income_too_low",
                message=(
                    "Monthly income is low relative to the property price. "
                    f"A monthly income of at least {income_needed:,.0f} is recommended."
                ),
            )
        )

    if inputs.deal_type == "investment" and loan_to_value > INVESTMENT_MAX_LTV:
        warnings.append(
            AffordabilityWarning(
                code="investment_equity",
                message=(
                    f"Investment properties require at least "
                    f"{100 - INVESTMENT_MAX_LTV:.0f}% equity under Bank of Israel rules."
                ),
            )
        )

    return warnings
