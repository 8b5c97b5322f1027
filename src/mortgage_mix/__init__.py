"""
Mortgage affordability and rate mix toolkit.

This package fetches published interest rates, checks whether a purchase is
affordable against lender rules, and prices a set of weighted rate mixes
against a typical bank offer.
"""

from .affordability import evaluate
from .amortization import loan_breakdown, monthly_payment
from .data_sources import RateProvider, fallback_rates
from .exceptions import InvalidArgument, MortgageMixError, RateFetchFailure
from .mixes import compose_mixes
from .model import calculate
from .savings import compare_offers, potential_saving
from .schemas import (
    AffordabilityWarning,
    CalculationReport,
    LoanBreakdown,
    LoanInputs,
    MixOption,
    MortgageResult,
    OfferComparison,
    RateSet,
)
from .weights import DEFAULT_WEIGHTING, TrackWeights, WeightingTable

__all__ = [
    "AffordabilityWarning",
    "CalculationReport",
    "DEFAULT_WEIGHTING",
    "InvalidArgument",
    "LoanBreakdown",
    "LoanInputs",
    "MixOption",
    "MortgageMixError",
    "MortgageResult",
    "OfferComparison",
    "RateFetchFailure",
    "RateProvider",
    "RateSet",
    "TrackWeights",
    "WeightingTable",
    "calculate",
    "compare_offers",
    "compose_mixes",
    "evaluate",
    "fallback_rates",
    "loan_breakdown",
    "monthly_payment",
    "potential_saving",
]
