from .currencies import CurrencyCatalog, default_catalog
from .exceptions import CacheError, ConfigurationError, ProviderError, SpotRatesError
from .models import (
    CurrencyPair,
    ExchangeRate,
    ProviderConfig,
    SupportedUniverse,
    Ticker,
    TickerResult,
    TickerStatus,
)

__all__ = [
    "CurrencyCatalog",
    "default_catalog",
    "SpotRatesError",
    "ProviderError",
    "ConfigurationError",
    "CacheError",
    "CurrencyPair",
    "ExchangeRate",
    "ProviderConfig",
    "SupportedUniverse",
    "Ticker",
    "TickerResult",
    "TickerStatus",
]
