from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Optional

from .affordability import evaluate
from .data_sources import RateProvider
from .exceptions import InvalidArgument
from .mixes import compose_mixes, get_mix
from .savings import compare_offers, potential_saving
from .schemas import CalculationReport, LoanInputs, RateSet
from .weights import DEFAULT_TERM_YEARS, DEFAULT_WEIGHTING, WeightingTable

logger = logging.getLogger(__name__)


def calculate(
    inputs: LoanInputs,
    provider: Optional[RateProvider] = None,
    rates: Optional[RateSet] = None,
    term_years: int = DEFAULT_TERM_YEARS,
    selected_mix_id: Optional[str] = None,
    weights: WeightingTable = DEFAULT_WEIGHTING,
) -> CalculationReport:
    """
    Run one full calculation against a single rate snapshot.

    Rates are fetched at most once per call (or taken from ``rates``) and
    shared by the affordability check, the mixes and the savings figures, so
    every number in the report is consistent with every other.
    """
    if term_years <= 0:
        raise InvalidArgument(f"term_years must be positive, got {term_years}")
    if rates is None:
        rates = (provider or RateProvider()).get_rates()

    result = evaluate(inputs, rates, term_years, weights)
    mixes = compose_mixes(result.loan_amount, rates, term_years, weights)
    if selected_mix_id is not None:
        get_mix(mixes, selected_mix_id)

    savings = MappingProxyType(
        {
            mix.id: potential_saving(
                result.loan_amount, mix.id, rates, term_years, weights
            )
            for mix in mixes
        }
    )

    report = CalculationReport(
        inputs=inputs,
        result=result,
        mixes=tuple(mixes),
        savings=savings,
        offer_comparison=compare_offers(result.loan_amount, rates, term_years),
        selected_mix_id=selected_mix_id,
        weighting_version=weights.version,
    )
    logger.info(
        "Calculation completed",
        extra={
            "loan_amount": result.loan_amount,
            "monthly_payment": result.monthly_payment,
            "loan_to_value": round(result.loan_to_value, 2),
            "payment_to_income": round(result.payment_to_income, 2),
            "warning_codes": [warning.code for warning in result.warnings],
            "rates_fallback": rates.is_fallback,
            "weighting_version": weights.version,
        },
    )
    return report
