from datetime import timedelta
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Currency universe
    FIAT_CURRENCY_EXCLUDED: str = ''
    CRYPTO_CURRENCY_EXCLUDED: str = ''
    CURRENCY_EXCLUDED_BY_PROVIDER: str = ''  # e.g. "KRAKEN:DAI,BINANCE:TRY"

    # Providers
    ENABLED_PROVIDERS: str = 'BINANCE,KRAKEN'
    STALE_PRICE_INTERVAL_SECONDS: int = 600

    # Rate cache
    REDIS_URL: str = 'redis://localhost:6379'
    RATE_CACHE_ENABLED: bool = False

    # Logging
    LOG_DIRECTORY: str = 'logs'
    LOG_LEVEL: str = 'INFO'

    model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

    @property
    def enabled_providers(self) -> list[str]:
        return [name.strip().upper() for name in self.ENABLED_PROVIDERS.split(',') if name.strip()]

    @property
    def stale_price_interval(self) -> timedelta:
        return timedelta(seconds=self.STALE_PRICE_INTERVAL_SECONDS)


@lru_cache
def get_settings() -> Settings:
    return Settings()
