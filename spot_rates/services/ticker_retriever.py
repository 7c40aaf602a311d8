import asyncio
import logging

from spot_rates.domain.exceptions import ProviderError
from spot_rates.domain.models import CurrencyPair, Ticker, TickerStatus
from spot_rates.providers.base import VenueClient
from spot_rates.services.pair_selector import DesiredPairs

logger = logging.getLogger(__name__)


class TickerRetriever:
    """
    Fetches tickers for the desired pairs.

    A single bulk call is preferred: it is faster and keeps us below venue
    rate limits. Venues differ in how they treat the pair filter of a bulk
    call (some ignore it, some require it, some honor it), so whether one is
    sent is decided per provider by `requires_explicit_filter`.
    """

    def __init__(
        self,
        venue: VenueClient,
        provider_name: str,
        call_delay: float = 0.0,
        requires_explicit_filter: bool = False,
    ):
        self.venue = venue
        self.provider_name = provider_name
        self.call_delay = call_delay
        self.requires_explicit_filter = requires_explicit_filter

    async def retrieve(self, fiat_pairs: list[CurrencyPair], crypto_pairs: list[CurrencyPair]) -> list[Ticker]:
        desired_pairs = DesiredPairs(fiat_pairs=fiat_pairs, crypto_pairs=crypto_pairs).all_pairs()
        if not desired_pairs:
            return []

        result = await self.venue.fetch_tickers(desired_pairs if self.requires_explicit_filter else None)

        if result.status is TickerStatus.OK:
            return result.tickers

        if result.status is TickerStatus.EMPTY:
            # the call went through but returned nothing: most likely this venue
            # only answers bulk requests that carry an explicit filter
            logger.warning(
                f"No tickers retrieved from {self.provider_name}, "
                f"exchange requires explicit filter argument during bulk retrieval?"
            )
            return await self._retrieve_sequentially(desired_pairs)

        if result.status is TickerStatus.UNSUPPORTED:
            logger.info(f"{self.provider_name} has no bulk ticker retrieval, polling {len(desired_pairs)} pairs one by one")
            return await self._retrieve_sequentially(desired_pairs)

        logger.error(f"Could not query tickers for provider {self.provider_name}: {result.reason}")
        return []

    async def _retrieve_sequentially(self, pairs: list[CurrencyPair]) -> list[Ticker]:
        tickers = []
        for pair in pairs:
            # some venues block bursts of calls, so space them out
            if self.call_delay > 0:
                await asyncio.sleep(self.call_delay)
            try:
                tickers.append(await self.venue.fetch_ticker(pair))
            except ProviderError as e:
                logger.error(f"Could not query ticker {pair} for {self.provider_name}: {e}")
        return tickers
