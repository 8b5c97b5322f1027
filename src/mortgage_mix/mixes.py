"""Compose the named rate mixes offered alongside the affordability check."""

from __future__ import annotations

import logging
from typing import List, Sequence

from .amortization import monthly_payment, round_currency
from .exceptions import InvalidArgument
from .schemas import MixOption, RateSet
from .weights import DEFAULT_TERM_YEARS, DEFAULT_WEIGHTING, TrackWeights, WeightingTable

logger = logging.getLogger(__name__)


def weighted_rate(weights: TrackWeights, rates: RateSet) -> float:
    """Annual rate of a blend: sum(weight_i * rate_i) / 100."""
    return (
        weights.fixed * rates.fixed_5_years
        + weights.variable * rates.variable
        + weights.prime * rates.prime
    ) / 100.0


def compose_mixes(
    loan_amount: float,
    rates: RateSet,
    term_years: int = DEFAULT_TERM_YEARS,
    weights: WeightingTable = DEFAULT_WEIGHTING,
) -> List[MixOption]:
    """
    Price every mix in the weighting table against one rate snapshot.

    Options come back in table order (stable, balanced, saving), which is
    also ascending volatility.
    """
    options: List[MixOption] = []
    for profile in weights.mixes:
        rate = weighted_rate(profile.composition, rates)
        payment = monthly_payment(loan_amount, rate, term_years)
        options.append(
            MixOption(
                id=profile.id,
                composition=profile.composition,
                weighted_rate=rate,
                monthly_payment=payment,
                total_cost=round_currency(payment * term_years * 12),
                volatility=profile.volatility,
                recommended=profile.recommended,
                name=profile.name,
                description=profile.description,
                vs_bank=profile.vs_bank,
            )
        )
    logger.debug(
        "Composed mixes",
        extra={
            "weighting_version": weights.version,
            "loan_amount": loan_amount,
            "term_years": term_years,
        },
    )
    return options


def get_mix(mixes: Sequence[MixOption], mix_id: str) -> MixOption:
    for mix in mixes:
        if mix.id == mix_id:
            return mix
    known = ", ".join(mix.id for mix in mixes)
    raise InvalidArgument(f"Unknown mix '{mix_id}' (expected one of: {known})")
