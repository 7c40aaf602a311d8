import logging

from spot_rates.cache.redis_cache import RedisRateCache
from spot_rates.config.providers import get_provider_config
from spot_rates.config.settings import Settings, get_settings
from spot_rates.domain.currencies import CurrencyCatalog, default_catalog
from spot_rates.domain.models import ProviderConfig, SupportedUniverse
from spot_rates.providers import CcxtVenueClient, VenueClient
from spot_rates.services.rate_provider import ExchangeRateProvider
from spot_rates.services.universe import build_supported_universe

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Factory to create and wire up all services with dependencies"""

    def __init__(self, settings: Settings | None = None, catalog: CurrencyCatalog = default_catalog):
        self.settings = settings or get_settings()
        self.catalog = catalog
        self.universe: SupportedUniverse | None = None
        self.providers: dict[str, ExchangeRateProvider] = {}
        self.rate_cache: RedisRateCache | None = None

    def create_universe(self) -> SupportedUniverse:
        """Computed once; every provider shares the same immutable value"""
        if self.universe is None:
            self.universe = build_supported_universe(
                self.catalog,
                fiat_excluded=self.settings.FIAT_CURRENCY_EXCLUDED,
                crypto_excluded=self.settings.CRYPTO_CURRENCY_EXCLUDED,
            )
        return self.universe

    def create_venue(self, config: ProviderConfig) -> VenueClient:
        return CcxtVenueClient(config.exchange_id)

    def create_providers(self) -> dict[str, ExchangeRateProvider]:
        """Create one provider per enabled venue. Raises ConfigurationError for unknown names."""
        universe = self.create_universe()

        for name in self.settings.enabled_providers:
            config = get_provider_config(name)
            self.providers[config.name] = ExchangeRateProvider(
                config=config,
                venue=self.create_venue(config),
                universe=universe,
                catalog=self.catalog,
                excluded_by_provider=self.settings.CURRENCY_EXCLUDED_BY_PROVIDER,
                stale_interval=self.settings.stale_price_interval,
            )

        logger.info(f"Created {len(self.providers)} providers: {list(self.providers)}")
        return self.providers

    def create_rate_cache(self) -> RedisRateCache | None:
        if self.settings.RATE_CACHE_ENABLED and self.rate_cache is None:
            self.rate_cache = RedisRateCache.from_url(
                self.settings.REDIS_URL, rate_ttl=self.settings.stale_price_interval
            )
        return self.rate_cache

    async def cleanup(self):
        """Clean up all services"""
        for provider in self.providers.values():
            try:
                await provider.venue.close()
            except Exception as e:
                logger.error(f"Failed to close venue for {provider.name}: {e}")

        if self.rate_cache is not None:
            await self.rate_cache.close()

        logger.info("Services cleaned up successfully")
