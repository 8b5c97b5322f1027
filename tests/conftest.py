"""Pytest fixtures for testing"""

from datetime import datetime, timezone
from typing import Any, List, Optional

import pytest
import requests

from mortgage_mix.schemas import LoanInputs, RateSet

SNAPSHOT_TIME = datetime(2024, 11, 1, 9, 30, tzinfo=timezone.utc)


class FakeResponse:
    """Stand-in for ``requests.Response`` with just what the provider touches"""

    def __init__(self, payload: Any = None, status_code: int = 200, bad_json: bool = False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self) -> Any:
        if self.bad_json:
            raise requests.JSONDecodeError("Expecting value", "<html>", 0)
        return self.payload


class FakeSession:
    """Records every GET and replays a canned response or error"""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[dict] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


class CountingProvider:
    """Rate provider double that counts fetches"""

    def __init__(self, rates: RateSet):
        self.rates = rates
        self.calls = 0

    def get_rates(self) -> RateSet:
        self.calls += 1
        return self.rates


@pytest.fixture
def fallback_like_rates() -> RateSet:
    """Rates equal to the documented fallback values, with a fixed timestamp"""
    return RateSet(
        prime=4.5,
        fixed_5_years=5.2,
        variable=3.8,
        last_updated=SNAPSHOT_TIME,
    )


@pytest.fixture
def first_home_inputs() -> LoanInputs:
    return LoanInputs(
        property_price=1_500_000,
        down_payment=400_000,
        monthly_income=25_000,
        deal_type="first",
    )


@pytest.fixture
def make_session():
    """Build a ``FakeSession`` answering with a payload, a status, or an error"""

    def _make(
        payload: Any = None,
        status_code: int = 200,
        bad_json: bool = False,
        error: Optional[Exception] = None,
    ) -> FakeSession:
        response = FakeResponse(payload, status_code=status_code, bad_json=bad_json)
        return FakeSession(response=response, error=error)

    return _make


@pytest.fixture
def counting_provider(fallback_like_rates) -> CountingProvider:
    return CountingProvider(fallback_like_rates)
