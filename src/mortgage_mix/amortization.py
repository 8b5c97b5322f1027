from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from .exceptions import InvalidArgument
from .schemas import LoanBreakdown
from .weights import DEFAULT_TERM_YEARS


def monthly_payment(
    principal: float, annual_rate_pct: float, term_years: int = DEFAULT_TERM_YEARS
) -> float:
    """
    Fixed monthly annuity payment that fully amortizes ``principal``.

    M = P * r / (1 - (1+r)^-n), rounded to the nearest whole unit.
    A zero rate returns the exact straight-line payment P / n.
    """
    _validate(principal, annual_rate_pct, term_years)
    monthly_rate = annual_to_monthly_rate(annual_rate_pct)
    payments = term_years * 12
    if monthly_rate == 0:
        return principal / payments
    try:
        discount = (1 + monthly_rate) ** (-payments)
    except OverflowError as exc:
        raise InvalidArgument(
            f"annual rate {annual_rate_pct} is out of range for a {term_years}-year term"
        ) from exc
    payment = principal * monthly_rate / (1 - discount)
    if not math.isfinite(payment):
        raise InvalidArgument(f"annual rate {annual_rate_pct} gives no finite payment")
    return round_currency(payment)


def total_cost(
    principal: float, annual_rate_pct: float, term_years: int = DEFAULT_TERM_YEARS
) -> float:
    return monthly_payment(principal, annual_rate_pct, term_years) * term_years * 12


def loan_breakdown(
    principal: float, annual_rate_pct: float, term_years: int = DEFAULT_TERM_YEARS
) -> LoanBreakdown:
    payment = monthly_payment(principal, annual_rate_pct, term_years)
    total = payment * term_years * 12
    return LoanBreakdown(
        principal=principal,
        interest=total - principal,
        total=total,
        monthly_payment=payment,
    )


def annual_to_monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100.0 / 12.0


def round_currency(amount: float) -> float:
    # Half-up, so 0.5 always rounds away from zero for positive amounts.
    return float(Decimal(repr(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _validate(principal: float, annual_rate_pct: float, term_years: int) -> None:
    if not math.isfinite(principal) or principal <= 0:
        raise InvalidArgument(f"principal must be positive, got {principal}")
    if term_years <= 0:
        raise InvalidArgument(f"term_years must be positive, got {term_years}")
    if not math.isfinite(annual_rate_pct):
        raise InvalidArgument(f"annual rate must be finite, got {annual_rate_pct}")
    if annual_rate_pct <= -1200:
        raise InvalidArgument("annual rate must be greater than -1200%")
