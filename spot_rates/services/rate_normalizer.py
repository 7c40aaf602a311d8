import logging
from decimal import ROUND_HALF_UP, Decimal

from spot_rates.domain.currencies import CurrencyCatalog
from spot_rates.domain.models import CurrencyPair, ExchangeRate, Ticker
from spot_rates.services.pair_selector import DesiredPairs
from spot_rates.services.universe import CurrencyUniverse
from spot_rates.utils.time import current_millis

logger = logging.getLogger(__name__)

INVERTED_PRICE_PRECISION = Decimal("0.00000001")


class RateNormalizer:
    """Turns venue tickers into canonically oriented exchange rates"""

    def __init__(self, provider_name: str, universe: CurrencyUniverse, catalog: CurrencyCatalog):
        self.provider_name = provider_name
        self.universe = universe
        self.catalog = catalog

    def is_inverted(self, pair: CurrencyPair, fiat_pairs: list[CurrencyPair]) -> bool:
        """
        Canonical rates quote every cryptocurrency against BTC or XMR. Most
        stablecoins are listed fiat-style (BTC/USDT), so those need flipping.
        """
        return pair in fiat_pairs and self.catalog.canonicalize(pair.counter) in self.universe.supported_crypto()

    def normalize(
        self,
        tickers: list[Ticker],
        fiat_pairs: list[CurrencyPair],
        crypto_pairs: list[CurrencyPair],
    ) -> frozenset[ExchangeRate]:
        desired = DesiredPairs(fiat_pairs=fiat_pairs, crypto_pairs=crypto_pairs)
        rates = set()
        for ticker in tickers:
            pair = ticker.pair
            if not desired.is_fiat(pair) and not desired.is_crypto(pair):
                continue
            if ticker.last is None:
                continue
            if not ticker.last.is_finite() or ticker.last <= 0:
                logger.warning(f"{self.provider_name} {pair} skipped, unusable last price {ticker.last}")
                continue

            # some exchanges don't provide timestamps
            timestamp = ticker.timestamp if ticker.timestamp is not None else current_millis()

            if self.is_inverted(pair, fiat_pairs):
                price = (Decimal(1) / ticker.last).quantize(INVERTED_PRICE_PRECISION, rounding=ROUND_HALF_UP)
                if price <= 0:
                    logger.warning(f"{self.provider_name} {pair} skipped, unusable last price {ticker.last}")
                    continue
                logger.info(f"{pair} isInverted, price translated from {ticker.last} to {price}")
                base = self.catalog.canonicalize(pair.counter)
                counter = self.catalog.canonicalize(pair.base)
            else:
                price = ticker.last
                base = self.catalog.canonicalize(pair.base)
                counter = self.catalog.canonicalize(pair.counter)

            rates.add(ExchangeRate(
                base_currency=base,
                counter_currency=counter,
                price=price,
                timestamp=timestamp,
                provider_name=self.provider_name,
            ))
        return frozenset(rates)
