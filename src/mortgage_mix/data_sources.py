from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from .exceptions import RateFetchFailure
from .schemas import RateSet
from .weights import (
    FALLBACK_FIXED_5_YEARS,
    FALLBACK_PRIME,
    FALLBACK_VARIABLE,
    FIXED_5_YEARS_OFFSET,
    MISSING_TRACK_DEFAULTS,
    PRIME_OFFSET,
    TRACK_NAME_PATTERNS,
    VARIABLE_OFFSET,
)

logger = logging.getLogger(__name__)

TRACK_OFFSETS: Dict[str, float] = {
    "prime": PRIME_OFFSET,
    "fixed_5_years": FIXED_5_YEARS_OFFSET,
    "variable": VARIABLE_OFFSET,
}


class RateProvider:
    """Fetch published interest rates, falling back to fixed values on any failure."""

    DEFAULT_URL = "https://www.boi.org.il/PublicApi/GetInterest"
    HEADERS = {"Accept": "application/json", "User-Agent": "Mozilla/5.0"}

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url or self.DEFAULT_URL
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_rates(self) -> RateSet:
        """
        Return the current rate snapshot. Never raises for retrieval problems:
        network errors, timeouts, bad status codes and malformed payloads all
        yield ``fallback_rates()``.
        """
        try:
            payload = self.fetch_payload()
            rates = parse_rate_payload(payload)
        except RateFetchFailure as exc:
            logger.warning(
                "Falling back to default interest rates",
                extra={"url": self.url, "reason": str(exc)},
            )
            return fallback_rates()

        logger.info(
            "Fetched interest rates",
            extra={
                "url": self.url,
                "prime": rates.prime,
                "fixed_5_years": rates.fixed_5_years,
                "variable": rates.variable,
                "is_fallback": rates.is_fallback,
            },
        )
        return rates

    def fetch_payload(self) -> Any:
        try:
            response = self.session.get(
                self.url, headers=self.HEADERS, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.Timeout as exc:
            raise RateFetchFailure(f"Rate source timeout after {self.timeout}s") from exc
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            raise RateFetchFailure(f"Rate source returned {status}") from exc
        except requests.JSONDecodeError as exc:
            raise RateFetchFailure(f"Rate source returned invalid JSON: {exc}") from exc
        except requests.RequestException as exc:
            raise RateFetchFailure(f"Rate source unreachable: {exc}") from exc
        except ValueError as exc:
            raise RateFetchFailure(f"Rate source returned invalid JSON: {exc}") from exc


def parse_rate_payload(payload: Any, now: Optional[datetime] = None) -> RateSet:
    """
    Turn either upstream payload shape into a ``RateSet``.

    A single object carries one ``currentInterest`` scalar that every track is
    derived from. A list carries named records; each track is matched by name
    and a missing track gets its per-track default. When no track matches the
    snapshot is marked as a fallback.
    """
    now = now or datetime.now(timezone.utc)

    if isinstance(payload, dict):
        base = _to_float(payload.get("currentInterest"))
        if base is None:
            raise RateFetchFailure("Rate payload has no numeric currentInterest")
        return RateSet(
            prime=base + PRIME_OFFSET,
            fixed_5_years=base + FIXED_5_YEARS_OFFSET,
            variable=base + VARIABLE_OFFSET,
            last_updated=now,
            is_fallback=bool(payload.get("fallback", False)),
        )

    if isinstance(payload, list):
        if not payload:
            raise RateFetchFailure("Rate payload is an empty list")
        matched = {
            track: _match_track(payload, track) for track in TRACK_NAME_PATTERNS
        }
        tracks = {
            track: MISSING_TRACK_DEFAULTS[track] if value is None else value
            for track, value in matched.items()
        }
        all_defaults = all(value is None for value in matched.values())
        return RateSet(last_updated=now, is_fallback=all_defaults, **tracks)

    raise RateFetchFailure(
        f"Unexpected rate payload type: {type(payload).__name__}"
    )


def fallback_rates(now: Optional[datetime] = None) -> RateSet:
    return RateSet(
        prime=FALLBACK_PRIME,
        fixed_5_years=FALLBACK_FIXED_5_YEARS,
        variable=FALLBACK_VARIABLE,
        last_updated=now or datetime.now(timezone.utc),
        is_fallback=True,
    )


def _match_track(records: list, track: str) -> Optional[float]:
    pattern = TRACK_NAME_PATTERNS[track]
    for record in records:
        if not isinstance(record, dict):
            continue
        name = record.get("InterestRateName")
        if not isinstance(name, str) or pattern not in _normalize(name):
            continue
        value = _to_float(record.get("currentInterest"))
        if value is not None:
            return value + TRACK_OFFSETS[track]
    return None


def _normalize(name: str) -> str:
    # Upstream names sometimes carry doubled spaces.
    return " ".join(name.split())


def _to_float(value: Any) -> Optional[float]:
    if value in (None, "", "null") or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None
