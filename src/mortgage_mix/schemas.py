from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional, Tuple

from .exceptions import InvalidArgument
from .weights import DEAL_TYPES, PROPERTY_TYPES, TrackWeights


@dataclass(frozen=True)
class LoanInputs:
    """Snapshot of one user submission."""

    property_price: float
    down_payment: float
    monthly_income: float
    deal_type: str = "first"
    property_type: str = "apartment"

    def __post_init__(self) -> None:
        for name in ("property_price", "down_payment", "monthly_income"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidArgument(f"{name} must be a finite number")
        if self.property_price <= 0:
            raise InvalidArgument("property_price must be positive")
        if self.down_payment < 0:
            raise InvalidArgument("down_payment cannot be negative")
        if self.down_payment >= self.property_price:
            raise InvalidArgument("down_payment must be less than property_price")
        if self.monthly_income <= 0:
            raise InvalidArgument("monthly_income must be positive")
        if self.deal_type not in DEAL_TYPES:
            raise InvalidArgument(
                f"deal_type must be one of {', '.join(DEAL_TYPES)}, got {self.deal_type!r}"
            )
        if self.property_type not in PROPERTY_TYPES:
            raise InvalidArgument(
                f"property_type must be one of {', '.join(PROPERTY_TYPES)}, "
                f"got {self.property_type!r}"
            )

    @property
    def loan_amount(self) -> float:
        return self.property_price - self.down_payment

    @property
    def equity_percent(self) -> float:
        return self.down_payment / self.property_price * 100


@dataclass(frozen=True)
class RateSet:
    prime: float  # annual percentage, e.g., 4.5
    fixed_5_years: float
    variable: float
    last_updated: datetime
    is_fallback: bool = False


@dataclass(frozen=True)
class LoanBreakdown:
    principal: float
    interest: float
    total: float
    monthly_payment: float


@dataclass(frozen=True)
class MixOption:
    id: str
    composition: TrackWeights
    weighted_rate: float
    monthly_payment: float
    total_cost: float
    volatility: str
    recommended: bool = False
    name: str = ""
    description: str = ""
    vs_bank: str = ""


@dataclass(frozen=True)
class AffordabilityWarning:
    code: str
    message: str

    @property
    def is_informational(self) -> bool:
        return self.code == "looks_good"


@dataclass(frozen=True)
class MortgageResult:
    loan_amount: float
    average_rate: float
    monthly_payment: float
    loan_to_value: float  # percent
    payment_to_income: float  # percent
    warnings: Tuple[AffordabilityWarning, ...]
    rates: RateSet

    @property
    def looks_good(self) -> bool:
        return len(self.warnings) == 1 and self.warnings[0].is_informational


@dataclass(frozen=True)
class OfferComparison:
    """Principal/interest split of a typical bank offer against a planned mix."""

    bank_offer: LoanBreakdown
    planned_mix: LoanBreakdown
    savings: float
    savings_percent: float


@dataclass(frozen=True)
class CalculationReport:
    inputs: LoanInputs
    result: MortgageResult
    mixes: Tuple[MixOption, ...]
    savings: Mapping[str, float]  # read-only view keyed by mix id
    offer_comparison: OfferComparison
    selected_mix_id: Optional[str] = None
    weighting_version: str = ""

    @property
    def rates(self) -> RateSet:
        return self.result.rates

    @property
    def selected_mix(self) -> Optional[MixOption]:
        if self.selected_mix_id is None:
            return None
        for mix in self.mixes:
            if mix.id == self.selected_mix_id:
                return mix
        return None
