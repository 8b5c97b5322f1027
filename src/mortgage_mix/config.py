"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .data_sources import RateProvider
from .exceptions import InvalidArgument

RATES_URL_ENV = "MORTGAGE_RATES_URL"
RATES_TIMEOUT_ENV = "MORTGAGE_RATES_TIMEOUT"
LOG_LEVEL_ENV = "MORTGAGE_MIX_LOG_LEVEL"


@dataclass(frozen=True)
class RateSourceConfig:
    url: str = RateProvider.DEFAULT_URL
    timeout_seconds: float = 5.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise InvalidArgument("timeout_seconds must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RateSourceConfig":
        environ = os.environ if environ is None else environ
        raw_timeout = environ.get(RATES_TIMEOUT_ENV, "5.0")
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise InvalidArgument(
                f"{RATES_TIMEOUT_ENV} must be a number, got {raw_timeout!r}"
            ) from exc
        return cls(
            url=environ.get(RATES_URL_ENV) or RateProvider.DEFAULT_URL,
            timeout_seconds=timeout,
            log_level=environ.get(LOG_LEVEL_ENV, "INFO").upper(),
        )

    def build_provider(self) -> RateProvider:
        return RateProvider(url=self.url, timeout=self.timeout_seconds)
