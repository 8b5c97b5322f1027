"""Unit tests for savings against the typical bank offer"""

import pytest

from mortgage_mix.amortization import monthly_payment
from mortgage_mix.exceptions import InvalidArgument
from mortgage_mix.mixes import compose_mixes, get_mix
from mortgage_mix.savings import compare_offers, potential_saving, reference_bank_option
from mortgage_mix.schemas import RateSet


def test_reference_bank_is_80_fixed_20_prime(fallback_like_rates):
    reference = reference_bank_option(1_000_000, fallback_like_rates)
    # 0.8 * 5.2 + 0.2 * 4.5 = 5.06
    assert reference.monthly_payment == monthly_payment(1_000_000, 5.06, 25)
    assert reference.total == reference.monthly_payment * 300


def test_stable_saves_against_costlier_reference(fallback_like_rates):
    saving = potential_saving(1_000_000, "stable", fallback_like_rates)
    assert saving > 0


def test_saving_is_reference_minus_selected(fallback_like_rates):
    stable = get_mix(compose_mixes(1_000_000, fallback_like_rates), "stable")
    reference = reference_bank_option(1_000_000, fallback_like_rates)

    assert potential_saving(1_000_000, "stable", fallback_like_rates) == (
        reference.total - stable.total_cost
    )


def test_saving_can_be_negative(fallback_like_rates):
    """A prime-heavy mix costs more than the bank offer when prime is expensive"""
    rates = RateSet(
        prime=10.0,
        fixed_5_years=3.0,
        variable=3.0,
        last_updated=fallback_like_rates.last_updated,
    )
    assert potential_saving(1_000_000, "saving", rates) < 0


def test_unknown_mix_rejected(fallback_like_rates):
    with pytest.raises(InvalidArgument):
        potential_saving(1_000_000, "aggressive", fallback_like_rates)


def test_term_changes_saving(fallback_like_rates):
    short = potential_saving(1_000_000, "stable", fallback_like_rates, term_years=10)
    long = potential_saving(1_000_000, "stable", fallback_like_rates, term_years=30)
    assert long > short > 0


def test_compare_offers(fallback_like_rates):
    comparison = compare_offers(1_000_000, fallback_like_rates)

    assert comparison.bank_offer.principal == 1_000_000
    assert comparison.planned_mix.principal == 1_000_000
    assert comparison.bank_offer.monthly_payment == monthly_payment(1_000_000, 5.2, 25)
    assert comparison.planned_mix.monthly_payment == monthly_payment(1_000_000, 3.8, 25)
    assert comparison.savings == comparison.bank_offer.total - comparison.planned_mix.total
    assert comparison.savings > 0
    assert comparison.savings_percent == pytest.approx(
        comparison.savings / comparison.bank_offer.total * 100
    )
