"""Savings of the engineered mixes against a typical bank offer."""

from __future__ import annotations

from .amortization import loan_breakdown, round_currency
from .mixes import compose_mixes, get_mix, weighted_rate
from .schemas import LoanBreakdown, OfferComparison, RateSet
from .weights import DEFAULT_TERM_YEARS, DEFAULT_WEIGHTING, WeightingTable


def reference_bank_option(
    loan_amount: float,
    rates: RateSet,
    term_years: int = DEFAULT_TERM_YEARS,
    weights: WeightingTable = DEFAULT_WEIGHTING,
) -> LoanBreakdown:
    """The generic bank mix (80% fixed, 20% prime) priced like any other mix."""
    rate = weighted_rate(weights.reference_bank, rates)
    return loan_breakdown(loan_amount, rate, term_years)


def potential_saving(
    loan_amount: float,
    selected_mix_id: str,
    rates: RateSet,
    term_years: int = DEFAULT_TERM_YEARS,
    weights: WeightingTable = DEFAULT_WEIGHTING,
) -> float:
    """
    Reference bank total cost minus the selected mix total cost.

    Signed: a negative value means the selected mix costs more than the
    bank's default offer over the full term.
    """
    selected = get_mix(
        compose_mixes(loan_amount, rates, term_years, weights), selected_mix_id
    )
    reference = reference_bank_option(loan_amount, rates, term_years, weights)
    return round_currency(reference.total - selected.total_cost)


def compare_offers(
    loan_amount: float, rates: RateSet, term_years: int = DEFAULT_TERM_YEARS
) -> OfferComparison:
    """Bank offer entirely at the 5-year fixed rate versus a plan at the variable rate."""
    bank_offer = loan_breakdown(loan_amount, rates.fixed_5_years, term_years)
    planned_mix = loan_breakdown(loan_amount, rates.variable, term_years)
    savings = bank_offer.total - planned_mix.total
    return OfferComparison(
        bank_offer=bank_offer,
        planned_mix=planned_mix,
        savings=savings,
        savings_percent=savings / bank_offer.total * 100,
    )
