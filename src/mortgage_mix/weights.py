"""
Weighting constants for rate blends and affordability rules.

Every blend the engine uses is a product decision rather than a derived value,
so the weights live here as one versioned table. Changing a mix means adding a
new ``WeightingTable`` with a new version, which keeps behaviour changes
auditable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple

from .exceptions import InvalidArgument

# ---------------------------------------------------------------------------
# Rate source heuristics
# ---------------------------------------------------------------------------

# Offsets applied to a published base rate to approximate each loan track.
# Unexplained upstream; preserved as-is.
PRIME_OFFSET: float = 1.5
FIXED_5_YEARS_OFFSET: float = 1.2
VARIABLE_OFFSET: float = -0.3

# Rates used when the source is unreachable or returns garbage.
FALLBACK_PRIME: float = 4.5
FALLBACK_FIXED_5_YEARS: float = 5.2
FALLBACK_VARIABLE: float = 3.8

# Per-track defaults when a named record is missing from a list payload.
MISSING_TRACK_DEFAULTS: Dict[str, float] = {
    "prime": 6.0,
    "fixed_5_years": 5.7,
    "variable": 4.2,
}

# Substrings identifying each track in a list of named rate records.
TRACK_NAME_PATTERNS: Dict[str, str] = {
    "prime": "ריבית פריים בנק ישראל",
    "fixed_5_years": "קבועה 5 שנים",
    "variable": "משתנה",
}

# ---------------------------------------------------------------------------
# Affordability rules
# ---------------------------------------------------------------------------

DEFAULT_TERM_YEARS: int = 25

MAX_LTV_BY_DEAL: Mapping[str, float] = {
    "first": 75.0,
    "upgrade": 70.0,
    "investment": 50.0,
}

MAX_PAYMENT_TO_INCOME: float = 35.0
LARGE_LOAN_THRESHOLD: float = 2_000_000.0
INVESTMENT_MAX_LTV: float = 50.0
MAX_WARNINGS: int = 3

DEAL_TYPES: Tuple[str, ...] = ("first", "upgrade", "investment")
PROPERTY_TYPES: Tuple[str, ...] = ("apartment", "landAndHouse", "land")


@dataclass(frozen=True)
class TrackWeights:
    """Percentages of the loan placed on each rate track."""

    fixed: int
    variable: int
    prime: int

    def __post_init__(self) -> None:
        if min(self.fixed, self.variable, self.prime) < 0:
            raise InvalidArgument("track weights must be non-negative")
        if self.fixed + self.variable + self.prime != 100:
            raise InvalidArgument(
                f"track weights must sum to 100, got {self.total} "
                f"({self.fixed}/{self.variable}/{self.prime})"
            )

    @property
    def total(self) -> int:
        return self.fixed + self.variable + self.prime


@dataclass(frozen=True)
class MixProfile:
    id: str
    composition: TrackWeights
    volatility: str
    name: str
    description: str
    vs_bank: str
    recommended: bool = False


@dataclass(frozen=True)
class WeightingTable:
    version: str
    mixes: Tuple[MixProfile, ...]
    reference_bank: TrackWeights
    # Blend used by the affordability check; prime carries no weight.
    affordability_blend: TrackWeights
    mix_ids: Tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        ids = tuple(profile.id for profile in self.mixes)
        if len(set(ids)) != len(ids):
            raise InvalidArgument(
                f"duplicate mix ids in weighting table {self.version}"
            )
        object.__setattr__(self, "mix_ids", ids)


STABLE = MixProfile(
    id="stable",
    composition=TrackWeights(fixed=50, variable=30, prime=20),
    volatility="low",
    name="Option 1 - Stability",
    description=(
        "For households on a tight budget who dislike surprises. "
        "Maximum stability with minimal payment swings."
    ),
    vs_bank=(
        "More stable than the standard bank mix: 50% fixed "
        "(versus 30-40% at most banks)."
    ),
)

BALANCED = MixProfile(
    id="balanced",
    composition=TrackWeights(fixed=40, variable=20, prime=40),
    volatility="medium",
    name="Option 2 - Balance",
    description=(
        "A balance between flexibility and stability. The most common mix "
        "and a fit for most families."
    ),
    vs_bank=(
        "Higher prime exposure (40%) allows flexibility and potential savings "
        "when rates fall."
    ),
    recommended=True,
)

SAVING = MixProfile(
    id="saving",
    composition=TrackWeights(fixed=30, variable=20, prime=50),
    volatility="high",
    name="Option 3 - Saving",
    description=(
        "For borrowers expecting income growth, planning early repayments, "
        "or able to absorb payment changes."
    ),
    vs_bank=(
        "Maximum prime exposure (50%): an aggressive mix that saves the most "
        "when rates fall and tracks the market quickly."
    ),
)

WEIGHTING_V3 = WeightingTable(
    version="v3",
    mixes=(STABLE, BALANCED, SAVING),
    reference_bank=TrackWeights(fixed=80, variable=0, prime=20),
    affordability_blend=TrackWeights(fixed=60, variable=40, prime=0),
)

DEFAULT_WEIGHTING = WEIGHTING_V3
