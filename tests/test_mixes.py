"""Unit tests for mix composition"""

import pytest

from mortgage_mix.amortization import monthly_payment
from mortgage_mix.exceptions import InvalidArgument
from mortgage_mix.mixes import compose_mixes, get_mix, weighted_rate
from mortgage_mix.weights import (
    DEFAULT_WEIGHTING,
    STABLE,
    MixProfile,
    TrackWeights,
    WeightingTable,
)


def test_every_composition_sums_to_100(fallback_like_rates):
    for mix in compose_mixes(1_000_000, fallback_like_rates):
        assert mix.composition.total == 100
    assert DEFAULT_WEIGHTING.reference_bank.total == 100
    assert DEFAULT_WEIGHTING.affordability_blend.total == 100


def test_mixes_in_fixed_order_by_volatility(fallback_like_rates):
    mixes = compose_mixes(1_000_000, fallback_like_rates)

    assert [mix.id for mix in mixes] == ["stable", "balanced", "saving"]
    assert [mix.volatility for mix in mixes] == ["low", "medium", "high"]


def test_only_balanced_is_recommended(fallback_like_rates):
    mixes = compose_mixes(1_000_000, fallback_like_rates)
    assert [mix.id for mix in mixes if mix.recommended] == ["balanced"]


def test_weighted_rates(fallback_like_rates):
    """50/30/20, 40/20/40 and 30/20/50 across fixed/variable/prime"""
    mixes = {mix.id: mix for mix in compose_mixes(1_000_000, fallback_like_rates)}

    assert mixes["stable"].weighted_rate == pytest.approx(4.64)
    assert mixes["balanced"].weighted_rate == pytest.approx(4.64)
    assert mixes["saving"].weighted_rate == pytest.approx(4.57)


def test_weighted_rate_of_single_track(fallback_like_rates):
    prime_only = TrackWeights(fixed=0, variable=0, prime=100)
    assert weighted_rate(prime_only, fallback_like_rates) == pytest.approx(4.5)


def test_mix_payments_use_annuity_engine(fallback_like_rates):
    for mix in compose_mixes(1_200_000, fallback_like_rates, term_years=20):
        assert mix.monthly_payment == monthly_payment(1_200_000, mix.weighted_rate, 20)
        assert mix.total_cost == mix.monthly_payment * 20 * 12


def test_display_metadata_comes_from_profile(fallback_like_rates):
    stable = compose_mixes(1_000_000, fallback_like_rates)[0]
    assert stable.name == STABLE.name
    assert stable.vs_bank == STABLE.vs_bank
    assert stable.composition == TrackWeights(fixed=50, variable=30, prime=20)


def test_custom_weighting_table(fallback_like_rates):
    table = WeightingTable(
        version="test",
        mixes=(
            MixProfile(
                id="all_fixed",
                composition=TrackWeights(fixed=100, variable=0, prime=0),
                volatility="low",
                name="All fixed",
                description="",
                vs_bank="",
            ),
        ),
        reference_bank=TrackWeights(fixed=80, variable=0, prime=20),
        affordability_blend=TrackWeights(fixed=60, variable=40, prime=0),
    )
    mixes = compose_mixes(500_000, fallback_like_rates, weights=table)

    assert [mix.id for mix in mixes] == ["all_fixed"]
    assert mixes[0].weighted_rate == pytest.approx(5.2)
    assert table.mix_ids == ("all_fixed",)


@pytest.mark.parametrize(
    "fixed,variable,prime",
    [(50, 30, 30), (40, 40, 10), (120, -10, -10)],
)
def test_track_weights_must_sum_to_100(fixed, variable, prime):
    with pytest.raises(InvalidArgument):
        TrackWeights(fixed=fixed, variable=variable, prime=prime)


def test_duplicate_mix_ids_rejected():
    with pytest.raises(InvalidArgument):
        WeightingTable(
            version="dup",
            mixes=(STABLE, STABLE),
            reference_bank=TrackWeights(fixed=80, variable=0, prime=20),
            affordability_blend=TrackWeights(fixed=60, variable=40, prime=0),
        )


def test_get_mix(fallback_like_rates):
    mixes = compose_mixes(1_000_000, fallback_like_rates)
    assert get_mix(mixes, "saving").id == "saving"

    with pytest.raises(InvalidArgument, match="Unknown mix"):
        get_mix(mixes, "aggressive")
