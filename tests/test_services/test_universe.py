"""
Tests for the supported currency universe and per-provider exclusions.
"""

import pytest

from spot_rates.domain.currencies import CurrencyCatalog
from spot_rates.services.universe import (
    CurrencyUniverse,
    build_supported_universe,
    parse_code_list,
    parse_provider_exclusions,
)


class TestParsing:

    def test_code_list_is_case_insensitive_and_whitespace_tolerant(self):
        assert parse_code_list(" usd ,Eur,,  jpy ") == {"USD", "EUR", "JPY"}

    def test_empty_code_list(self):
        assert parse_code_list("") == set()
        assert parse_code_list(None) == set()

    def test_provider_exclusions_only_keep_matching_provider(self):
        value = "binance:EUR, kraken:dai, BINANCE:jpy"
        assert parse_provider_exclusions(value, "Binance") == {"EUR", "JPY"}
        assert parse_provider_exclusions(value, "KRAKEN") == {"DAI"}

    def test_malformed_provider_exclusions_are_skipped(self):
        value = "binance, binance:eur:usd, :EUR, binance:XMR"
        assert parse_provider_exclusions(value, "BINANCE") == {"XMR"}


class TestBuildSupportedUniverse:

    def test_without_exclusions(self, catalog):
        universe = build_supported_universe(catalog)

        assert universe.fiat == {"USD", "EUR", "JPY"}
        assert universe.crypto == {"BTC", "ETH", "LTC", "XMR", "DAI", "USDT"}

    def test_crypto_codes_are_canonicalized(self, catalog):
        universe = build_supported_universe(catalog)

        assert "USDT-ERC20" not in universe.crypto
        assert "DAI-ERC20" not in universe.crypto
        assert "USDT" in universe.crypto

    def test_global_fiat_exclusion(self, catalog):
        universe = build_supported_universe(catalog, fiat_excluded="jpy, eur")

        assert universe.fiat == {"USD"}

    def test_fiat_exclusion_ignores_unknown_codes(self, catalog):
        universe = build_supported_universe(catalog, fiat_excluded="FOO,BTC")

        assert universe.fiat == {"USD", "EUR", "JPY"}

    def test_global_crypto_exclusion(self, catalog):
        universe = build_supported_universe(catalog, crypto_excluded="ltc,eth")

        assert "LTC" not in universe.crypto
        assert "ETH" not in universe.crypto

    def test_excluding_one_network_variant_keeps_the_other(self, catalog):
        universe = build_supported_universe(catalog, crypto_excluded="USDT-ERC20")

        assert "USDT" in universe.crypto

    def test_excluding_canonical_code_removes_all_variants(self, catalog):
        universe = build_supported_universe(catalog, crypto_excluded="USDT")

        assert "USDT" not in universe.crypto

    def test_xmr_survives_crypto_exclusion(self, catalog):
        universe = build_supported_universe(catalog, crypto_excluded="XMR")

        assert "XMR" in universe.crypto

    def test_fiat_and_crypto_are_disjoint(self):
        catalog = CurrencyCatalog(fiat_codes=["USD", "XMR"], crypto_codes=["BTC"])
        universe = build_supported_universe(catalog)

        assert universe.fiat.isdisjoint(universe.crypto)
        assert "XMR" in universe.crypto

    def test_empty_catalog(self):
        universe = build_supported_universe(CurrencyCatalog(fiat_codes=[], crypto_codes=[]))

        assert universe.fiat == set()
        assert universe.crypto == {"XMR"}

    def test_universe_is_immutable(self, catalog):
        universe = build_supported_universe(catalog)

        assert isinstance(universe.fiat, frozenset)
        assert isinstance(universe.crypto, frozenset)


class TestCurrencyUniverse:

    def test_provider_exclusion_removes_codes(self, supported_universe):
        universe = CurrencyUniverse(supported_universe, "TESTX", "testx:EUR,testx:ltc,other:USD")

        assert universe.supported_fiat() == {"USD", "JPY"}
        assert "LTC" not in universe.supported_crypto()

    def test_other_providers_are_unaffected(self, supported_universe):
        universe = CurrencyUniverse(supported_universe, "OTHER", "testx:EUR")

        assert universe.supported_fiat() == {"USD", "EUR", "JPY"}

    def test_repeated_reads_are_idempotent(self, supported_universe):
        universe = CurrencyUniverse(supported_universe, "TESTX", "testx:EUR")

        first = universe.supported_fiat()
        second = universe.supported_fiat()

        assert first == second == {"USD", "JPY"}
        assert supported_universe.fiat == {"USD", "EUR", "JPY"}

    def test_xmr_survives_provider_exclusion(self, supported_universe):
        universe = CurrencyUniverse(supported_universe, "TESTX", "testx:XMR")

        assert "XMR" in universe.supported_crypto()

    @pytest.mark.parametrize("code", ["JPY", "ETH"])
    def test_globally_excluded_codes_never_come_back(self, catalog, code):
        supported = build_supported_universe(catalog, fiat_excluded="JPY", crypto_excluded="ETH")
        universe = CurrencyUniverse(supported, "TESTX", "testx:EUR")

        assert code not in universe.supported_fiat()
        assert code not in universe.supported_crypto()

    def test_returned_sets_are_copies(self, currency_universe):
        currency_universe.supported_fiat().add("GBP")

        assert "GBP" not in currency_universe.supported_fiat()
