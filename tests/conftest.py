"""
Shared test configuration and fixtures.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from spot_rates.domain.currencies import CurrencyCatalog
from spot_rates.domain.models import CurrencyPair, ProviderConfig, Ticker, TickerResult
from spot_rates.services.universe import CurrencyUniverse, build_supported_universe

TEST_PROVIDER = "TESTX"

TEST_FIAT = ["USD", "EUR", "JPY"]
TEST_CRYPTO = ["BTC", "ETH", "LTC", "XMR", "DAI-ERC20", "USDT-ERC20", "USDT-TRC20"]


@pytest.fixture
def catalog():
    """Small catalog so expectations stay readable"""
    return CurrencyCatalog(fiat_codes=TEST_FIAT, crypto_codes=TEST_CRYPTO)


@pytest.fixture
def supported_universe(catalog):
    return build_supported_universe(catalog)


@pytest.fixture
def currency_universe(supported_universe):
    return CurrencyUniverse(supported_universe, TEST_PROVIDER)


@pytest.fixture
def provider_config():
    return ProviderConfig(name=TEST_PROVIDER, prefix="TX", exchange_id="testx")


@pytest.fixture
def make_ticker():
    """Factory: make_ticker("BTC/USD", "60000", 1000)"""
    def _make(symbol: str, last: str | None, timestamp: int | None = None) -> Ticker:
        return Ticker(
            pair=CurrencyPair.from_symbol(symbol),
            last=Decimal(last) if last is not None else None,
            timestamp=timestamp,
        )
    return _make


@pytest.fixture
def mock_venue():
    """Venue client whose calls are all AsyncMocks; bulk retrieval returns nothing by default"""
    venue = AsyncMock()
    venue.name = "testx"
    venue.fetch_pairs.return_value = []
    venue.fetch_tickers.return_value = TickerResult.ok([])
    return venue


def pairs(*symbols: str) -> list[CurrencyPair]:
    return [CurrencyPair.from_symbol(symbol) for symbol in symbols]


@pytest.fixture
def make_pairs():
    return pairs


def pytest_configure(config):
    """Configure custom pytest markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
