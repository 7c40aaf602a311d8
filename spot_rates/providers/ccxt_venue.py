import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import ccxt.async_support as ccxt

from spot_rates.domain.exceptions import ConfigurationError, ProviderError
from spot_rates.domain.models import CurrencyPair, Ticker, TickerResult

from .base import VenueClient

logger = logging.getLogger(__name__)


class CcxtVenueClient(VenueClient):
    """Venue binding backed by a ccxt async exchange"""

    def __init__(self, exchange_id: str, exchange: Any | None = None, options: dict | None = None):
        self.exchange_id = exchange_id
        if exchange is None:
            try:
                klass = getattr(ccxt, exchange_id)
            except AttributeError as e:
                raise ConfigurationError(f"Unknown ccxt exchange: {exchange_id}") from e
            exchange = klass({"enableRateLimit": True, **(options or {})})
        self._exchange = exchange

    @property
    def name(self) -> str:
        return self.exchange_id

    async def fetch_pairs(self) -> list[CurrencyPair]:
        # venues list and delist pairs, so the market cache is refreshed on every call
        try:
            markets = await self._exchange.load_markets(reload=True)
        except ccxt.BaseError as e:
            raise ProviderError(f"{self.exchange_id} market listing failed: {e.__class__.__name__}: {e}") from e

        pairs = []
        for market in markets.values():
            if not market.get("spot", True):
                continue
            base, quote = market.get("base"), market.get("quote")
            if base and quote:
                pairs.append(CurrencyPair(base=base.upper(), counter=quote.upper()))
        return pairs

    async def fetch_tickers(self, pairs: list[CurrencyPair] | None = None) -> TickerResult:
        if self._exchange.has.get("fetchTickers") is False:
            return TickerResult.unsupported(f"{self.exchange_id} has no bulk ticker endpoint")

        symbols = [str(pair) for pair in pairs] if pairs else None
        try:
            raw_tickers = await self._exchange.fetch_tickers(symbols)
        except ccxt.NotSupported as e:
            return TickerResult.unsupported(str(e))
        except ccxt.BaseError as e:
            # exchange-reported errors (rate limit, bad symbol) and transport errors (timeouts)
            return TickerResult.failed(f"{e.__class__.__name__}: {e}")

        if not raw_tickers:
            return TickerResult.empty()

        try:
            tickers = [self._parse_ticker(symbol, data) for symbol, data in raw_tickers.items()]
        except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            return TickerResult.failed(f"Malformed ticker payload from {self.exchange_id}: {e!r}")

        return TickerResult.ok(tickers)

    async def fetch_ticker(self, pair: CurrencyPair) -> Ticker:
        try:
            data = await self._exchange.fetch_ticker(str(pair))
        except ccxt.BaseError as e:
            raise ProviderError(f"{self.exchange_id} ticker {pair} failed: {e.__class__.__name__}: {e}") from e

        try:
            return self._parse_ticker(str(pair), data)
        except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise ProviderError(f"Malformed ticker {pair} from {self.exchange_id}: {e!r}") from e

    def _parse_ticker(self, symbol: str, data: dict[str, Any]) -> Ticker:
        market = (self._exchange.markets or {}).get(data.get("symbol") or symbol)
        if market and market.get("base") and market.get("quote"):
            pair = CurrencyPair(base=market["base"].upper(), counter=market["quote"].upper())
        else:
            pair = CurrencyPair.from_symbol(data.get("symbol") or symbol)

        last = data.get("last")
        timestamp = data.get("timestamp")
        return Ticker(
            pair=pair,
            last=Decimal(str(last)) if last is not None else None,
            timestamp=int(timestamp) if timestamp is not None else None,
        )

    async def close(self) -> None:
        await self._exchange.close()
