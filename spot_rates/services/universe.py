import logging
import re

from spot_rates.domain.currencies import CurrencyCatalog
from spot_rates.domain.models import SupportedUniverse

logger = logging.getLogger(__name__)

# XMR is also a pricing denominator, so it must stay quotable whatever the exclusions say
ALWAYS_SUPPORTED_CRYPTO = "XMR"

_LIST_SEPARATOR = re.compile(r"\s*,\s*")


def parse_code_list(value: str | None) -> set[str]:
    """Split a comma-separated list into uppercase codes, dropping empty entries"""
    if not value:
        return set()
    return {code for code in _LIST_SEPARATOR.split(value.upper().strip()) if code}


def parse_provider_exclusions(value: str | None, provider_name: str) -> set[str]:
    """
    Pick this provider's codes out of a 'provider:code' list.
    Entries that are not exactly 'provider:code' are skipped.
    """
    excluded = set()
    for entry in parse_code_list(value):
        parts = entry.split(":")
        if len(parts) == 2 and parts[0].strip().lower() == provider_name.lower():
            excluded.add(parts[1].strip())
    return excluded


def build_supported_universe(
    catalog: CurrencyCatalog,
    fiat_excluded: str | None = None,
    crypto_excluded: str | None = None,
) -> SupportedUniverse:
    """
    Compute the globally supported fiat and crypto codes.

    Called once at startup; the returned value is immutable and shared by
    every provider.
    """
    excluded_fiat = {code for code in parse_code_list(fiat_excluded) if catalog.is_fiat(code)}
    fiat = frozenset(
        code for code in catalog.all_fiat_codes()
        if code.upper() not in excluded_fiat
    )

    excluded_crypto = parse_code_list(crypto_excluded)
    crypto = {
        catalog.canonicalize(code) for code in catalog.all_crypto_codes()
        if code.upper() not in excluded_crypto
        and catalog.canonicalize(code) not in excluded_crypto
    }
    crypto.add(ALWAYS_SUPPORTED_CRYPTO)
    # a code quoted both ways would break pair classification
    fiat = fiat - crypto

    logger.info(f"fiat currencies excluded: {sorted(excluded_fiat)}")
    logger.info(f"fiat currencies supported: {len(fiat)}")
    logger.info(f"crypto currencies excluded: {sorted(excluded_crypto)}")
    logger.info(f"crypto currencies supported: {sorted(crypto)}")

    return SupportedUniverse(fiat=fiat, crypto=frozenset(crypto))


class CurrencyUniverse:
    """A provider's view of the supported universe, minus its own exclusions"""

    def __init__(
        self,
        universe: SupportedUniverse,
        provider_name: str,
        excluded_by_provider: str | None = None,
    ):
        self.universe = universe
        self.provider_name = provider_name
        self.provider_exclusions = frozenset(
            parse_provider_exclusions(excluded_by_provider, provider_name)
        )
        if self.provider_exclusions:
            logger.info(f"{provider_name} specific exclusion list={sorted(self.provider_exclusions)}")

    def supported_fiat(self) -> set[str]:
        return {
            code for code in self.universe.fiat
            if code.upper() not in self.provider_exclusions
        }

    def supported_crypto(self) -> set[str]:
        supported = {
            code for code in self.universe.crypto
            if code.upper() not in self.provider_exclusions
        }
        supported.add(ALWAYS_SUPPORTED_CRYPTO)
        return supported
