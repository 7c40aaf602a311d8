from abc import ABC, abstractmethod

from spot_rates.domain.models import CurrencyPair, Ticker, TickerResult


class VenueClient(ABC):
    """Abstract market-data binding for one trading venue"""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def fetch_pairs(self) -> list[CurrencyPair]:
        """
        List the spot pairs currently tradable on the venue.

        Raises:
            ProviderError: the venue or the transport failed
        """
        pass

    @abstractmethod
    async def fetch_tickers(self, pairs: list[CurrencyPair] | None = None) -> TickerResult:
        """
        Bulk ticker retrieval.

        Args:
            pairs: explicit filter, or None to ask for every ticker on the venue

        Returns:
            TickerResult tagged OK, UNSUPPORTED, EMPTY or FAILED. Never raises.
        """
        pass

    @abstractmethod
    async def fetch_ticker(self, pair: CurrencyPair) -> Ticker:
        """
        Single ticker retrieval.

        Raises:
            ProviderError: the venue or the transport failed
        """
        pass

    async def close(self) -> None:
        """Release network resources held by the client"""
        pass

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name})>"
