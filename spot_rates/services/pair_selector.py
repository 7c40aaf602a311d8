from dataclasses import dataclass, field

from spot_rates.domain.currencies import CurrencyCatalog
from spot_rates.domain.models import CurrencyPair
from spot_rates.services.universe import CurrencyUniverse

BTC = "BTC"
XMR = "XMR"


@dataclass(frozen=True)
class DesiredPairs:
    """Pairs worth polling this cycle, split by how they are quoted"""
    fiat_pairs: list[CurrencyPair] = field(default_factory=list)  # CRYPTO/FIAT, incl. stablecoin counters
    crypto_pairs: list[CurrencyPair] = field(default_factory=list)  # CRYPTO/BTC

    def is_fiat(self, pair: CurrencyPair) -> bool:
        return pair in self.fiat_pairs

    def is_crypto(self, pair: CurrencyPair) -> bool:
        return pair in self.crypto_pairs

    def all_pairs(self) -> list[CurrencyPair]:
        return [*self.fiat_pairs, *self.crypto_pairs]


def select_desired_pairs(
    pairs: list[CurrencyPair],
    universe: CurrencyUniverse,
    catalog: CurrencyCatalog,
) -> DesiredPairs:
    """Intersect the venue's tradable pairs with what this provider may quote"""
    supported_fiat = universe.supported_fiat()
    supported_crypto = universe.supported_crypto()

    fiat_pairs = [
        pair for pair in pairs
        if (pair.base == BTC or (pair.base == XMR and pair.counter != BTC))
        and (
            pair.counter in supported_fiat
            # stablecoins are quoted fiat-style, see RateNormalizer.is_inverted
            or catalog.canonicalize(pair.counter) in supported_crypto
        )
    ]

    crypto_pairs = [
        pair for pair in pairs
        if pair.counter == BTC and pair.base in supported_crypto
    ]

    return DesiredPairs(fiat_pairs=fiat_pairs, crypto_pairs=crypto_pairs)
