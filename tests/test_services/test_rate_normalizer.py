from decimal import Decimal
from unittest.mock import patch

import pytest

from spot_rates.domain.models import CurrencyPair, ExchangeRate
from spot_rates.services.rate_normalizer import RateNormalizer


@pytest.fixture
def normalizer(currency_universe, catalog):
    return RateNormalizer("TESTX", currency_universe, catalog)


@pytest.fixture
def fiat_pairs(make_pairs):
    return make_pairs("BTC/USD", "BTC/USDT", "XMR/EUR")


@pytest.fixture
def crypto_pairs(make_pairs):
    return make_pairs("ETH/BTC")


class TestOrientation:

    def test_fiat_pair_kept_as_quoted(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        rates = normalizer.normalize([make_ticker("BTC/USD", "60000.5", 1000)], fiat_pairs, crypto_pairs)

        assert rates == {ExchangeRate("BTC", "USD", Decimal("60000.5"), 1000, "TESTX")}

    def test_crypto_pair_kept_as_quoted(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        rates = normalizer.normalize([make_ticker("ETH/BTC", "0.05123", 1000)], fiat_pairs, crypto_pairs)

        assert rates == {ExchangeRate("ETH", "BTC", Decimal("0.05123"), 1000, "TESTX")}

    def test_stablecoin_quote_is_inverted(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        rates = normalizer.normalize([make_ticker("BTC/USDT", "1.002", 1000)], fiat_pairs, crypto_pairs)

        assert rates == {ExchangeRate("USDT", "BTC", Decimal("0.99800399"), 1000, "TESTX")}

    def test_inverted_price_rounds_half_up_to_eight_places(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        # 1 / 64000 = 0.000015625 -> 0.00001563
        rates = normalizer.normalize([make_ticker("BTC/USDT", "64000", 1000)], fiat_pairs, crypto_pairs)

        (rate,) = rates
        assert rate.price == Decimal("0.00001563")
        assert rate.price.as_tuple().exponent == -8

    def test_is_inverted(self, normalizer, fiat_pairs):
        assert normalizer.is_inverted(CurrencyPair("BTC", "USDT"), fiat_pairs)
        assert not normalizer.is_inverted(CurrencyPair("BTC", "USD"), fiat_pairs)
        # crypto pairs are never inverted
        assert not normalizer.is_inverted(CurrencyPair("ETH", "BTC"), fiat_pairs)

    def test_network_suffixed_codes_are_canonicalized(self, normalizer, make_ticker):
        fiat_pairs = [CurrencyPair("BTC", "USDT-ERC20")]

        rates = normalizer.normalize([make_ticker("BTC/USDT-ERC20", "2", 1000)], fiat_pairs, [])

        assert rates == {ExchangeRate("USDT", "BTC", Decimal("0.50000000"), 1000, "TESTX")}


class TestFiltering:

    def test_undesired_pairs_are_dropped(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        tickers = [make_ticker("LTC/EUR", "80", 1000), make_ticker("BTC/GBP", "50000", 1000)]

        assert normalizer.normalize(tickers, fiat_pairs, crypto_pairs) == frozenset()

    def test_missing_price_is_skipped(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        tickers = [make_ticker("BTC/USD", None, 1000), make_ticker("XMR/EUR", "150", 1000)]

        rates = normalizer.normalize(tickers, fiat_pairs, crypto_pairs)

        assert rates == {ExchangeRate("XMR", "EUR", Decimal("150"), 1000, "TESTX")}

    @pytest.mark.parametrize("last", ["0", "-1", "NaN"])
    def test_unusable_price_is_skipped(self, normalizer, make_ticker, fiat_pairs, crypto_pairs, last):
        tickers = [make_ticker("BTC/USDT", last, 1000), make_ticker("BTC/USD", last, 1000)]

        assert normalizer.normalize(tickers, fiat_pairs, crypto_pairs) == frozenset()

    def test_inverted_price_rounding_to_zero_is_skipped(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        # 1 / 300000000 rounds to 0.00000000 at eight places
        tickers = [make_ticker("BTC/USDT", "300000000", 1000), make_ticker("BTC/USD", "60000", 1000)]

        rates = normalizer.normalize(tickers, fiat_pairs, crypto_pairs)

        assert rates == {ExchangeRate("BTC", "USD", Decimal("60000"), 1000, "TESTX")}
        assert all(rate.price > 0 for rate in rates)


class TestTimestamps:

    def test_missing_timestamp_uses_current_time(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        with patch("spot_rates.services.rate_normalizer.current_millis", return_value=1_700_000_000_000):
            rates = normalizer.normalize([make_ticker("BTC/USD", "60000")], fiat_pairs, crypto_pairs)

        (rate,) = rates
        assert rate.timestamp == 1_700_000_000_000

    def test_reported_timestamp_is_kept(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        rates = normalizer.normalize([make_ticker("BTC/USD", "60000", 42)], fiat_pairs, crypto_pairs)

        (rate,) = rates
        assert rate.timestamp == 42

    def test_every_rate_carries_provider_name(self, normalizer, make_ticker, fiat_pairs, crypto_pairs):
        tickers = [
            make_ticker("BTC/USD", "60000", 1),
            make_ticker("BTC/USDT", "60010", 1),
            make_ticker("ETH/BTC", "0.05", 1),
        ]

        rates = normalizer.normalize(tickers, fiat_pairs, crypto_pairs)

        assert len(rates) == 3
        assert {rate.provider_name for rate in rates} == {"TESTX"}
