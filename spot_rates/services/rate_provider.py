import logging
from dataclasses import replace
from datetime import timedelta

from spot_rates.domain.currencies import CurrencyCatalog
from spot_rates.domain.models import ExchangeRate, ProviderConfig, SupportedUniverse
from spot_rates.providers.base import VenueClient
from spot_rates.services.pair_selector import select_desired_pairs
from spot_rates.services.rate_normalizer import RateNormalizer
from spot_rates.services.staleness import STALE_PRICE_INTERVAL, UNKNOWN_TIMESTAMP, prune_stale_rates
from spot_rates.services.ticker_retriever import TickerRetriever
from spot_rates.services.universe import CurrencyUniverse
from spot_rates.utils.time import current_millis

logger = logging.getLogger(__name__)

# rates worth echoing to the log after each refresh
HIGHLIGHTED_COUNTER_CURRENCIES = {"USD"}
HIGHLIGHTED_BASE_CURRENCIES = {"XMR", "ETH", "BCH", "USDT"}


class ExchangeRateProvider:
    """
    Polls one venue and publishes its rates in canonical orientation.

    The published rate set is an immutable snapshot replaced wholesale on
    every poll or prune, so readers see either the previous or the next
    complete set. poll() never raises: a failing venue publishes nothing
    rather than stale or partial data.
    """

    def __init__(
        self,
        config: ProviderConfig,
        venue: VenueClient,
        universe: SupportedUniverse,
        catalog: CurrencyCatalog,
        excluded_by_provider: str | None = None,
        stale_interval: timedelta = STALE_PRICE_INTERVAL,
    ):
        self.config = config
        self.venue = venue
        self.catalog = catalog
        self.stale_interval = stale_interval
        self.universe = CurrencyUniverse(universe, config.name, excluded_by_provider)
        self.retriever = TickerRetriever(
            venue,
            config.name,
            call_delay=config.call_delay,
            requires_explicit_filter=config.requires_explicit_filter,
        )
        self.normalizer = RateNormalizer(config.name, self.universe, catalog)
        self._rates: frozenset[ExchangeRate] | None = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def prefix(self) -> str:
        return self.config.prefix

    def get_name(self) -> str:
        return self.config.name

    def get_supported_fiat_currencies(self) -> set[str]:
        return self.universe.supported_fiat()

    def get_supported_crypto_currencies(self) -> set[str]:
        return self.universe.supported_crypto()

    def get(self) -> frozenset[ExchangeRate] | None:
        """Latest published snapshot, None before the first poll"""
        return self._rates

    def put(self, rates: frozenset[ExchangeRate]) -> None:
        self._rates = rates

    async def poll(self) -> frozenset[ExchangeRate]:
        try:
            rates = await self._poll_internal()
        except Exception as e:
            logger.warning(f"{self.name} poll failed: {e!r}")
            rates = frozenset()
        self.put(rates)
        self._log_highlights(rates)
        return rates

    async def _poll_internal(self) -> frozenset[ExchangeRate]:
        pairs_on_exchange = await self.venue.fetch_pairs()
        desired = select_desired_pairs(pairs_on_exchange, self.universe, self.catalog)
        logger.debug(
            f"{self.name}: {len(desired.fiat_pairs)} fiat pairs, "
            f"{len(desired.crypto_pairs)} crypto pairs out of {len(pairs_on_exchange)}"
        )

        tickers = await self.retriever.retrieve(desired.fiat_pairs, desired.crypto_pairs)
        rates = self.normalizer.normalize(tickers, desired.fiat_pairs, desired.crypto_pairs)

        if not self.config.reports_timestamps:
            rates = frozenset(replace(rate, timestamp=UNKNOWN_TIMESTAMP) for rate in rates)
        return rates

    def prune_stale(self) -> None:
        current = self.get()
        if current is None:
            return

        fresh = prune_stale_rates(current, current_millis(), self.stale_interval)
        if len(fresh) < len(current):
            self.put(fresh)
            logger.warning(f"{self.name} {len(current) - len(fresh)} stale rates removed, now {len(fresh)} rates")

    def _log_highlights(self, rates: frozenset[ExchangeRate]) -> None:
        for rate in sorted(rates, key=lambda r: (r.base_currency, r.counter_currency)):
            if (rate.counter_currency in HIGHLIGHTED_COUNTER_CURRENCIES
                    or rate.base_currency in HIGHLIGHTED_BASE_CURRENCIES):
                logger.info(f"{rate.base_currency}/{rate.counter_currency}: {rate.price}")

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name})>"
