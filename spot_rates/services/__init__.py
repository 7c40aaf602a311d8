from .pair_selector import DesiredPairs, select_desired_pairs
from .rate_normalizer import RateNormalizer
from .rate_provider import ExchangeRateProvider
from .service_factory import ServiceFactory
from .staleness import STALE_PRICE_INTERVAL, prune_stale_rates
from .ticker_retriever import TickerRetriever
from .universe import CurrencyUniverse, build_supported_universe

__all__ = [
    "DesiredPairs",
    "select_desired_pairs",
    "RateNormalizer",
    "ExchangeRateProvider",
    "ServiceFactory",
    "STALE_PRICE_INTERVAL",
    "prune_stale_rates",
    "TickerRetriever",
    "CurrencyUniverse",
    "build_supported_universe",
]
