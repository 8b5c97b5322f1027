import pytest

from mortgage_mix.config import RateSourceConfig
from mortgage_mix.data_sources import RateProvider
from mortgage_mix.exceptions import InvalidArgument


def test_defaults_when_environment_empty():
    config = RateSourceConfig.from_env({})

    assert config.url == RateProvider.DEFAULT_URL
    assert config.timeout_seconds == 5.0
    assert config.log_level == "INFO"


def test_reads_environment():
    config = RateSourceConfig.from_env(
        {
            "MORTGAGE_RATES_URL": "http://localhost:9000/rates",
            "MORTGAGE_RATES_TIMEOUT": "1.5",
            "MORTGAGE_MIX_LOG_LEVEL": "debug",
        }
    )

    assert config.url == "http://localhost:9000/rates"
    assert config.timeout_seconds == 1.5
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "0", "-2"])
def test_bad_timeout_rejected(raw):
    with pytest.raises(InvalidArgument):
        RateSourceConfig.from_env({"MORTGAGE_RATES_TIMEOUT": raw})


def test_build_provider_carries_settings():
    provider = RateSourceConfig(url="http://rates.local", timeout_seconds=2.0).build_provider()

    assert provider.url == "http://rates.local"
    assert provider.timeout == 2.0
