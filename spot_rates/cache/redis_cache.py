import json
from datetime import timedelta
from decimal import Decimal

from redis import asyncio as redis
from redis.exceptions import RedisError

from spot_rates.domain.exceptions import CacheError
from spot_rates.domain.models import ExchangeRate

DEFAULT_RATE_TTL = timedelta(minutes=10)


class RedisRateCache:
    """Holds the latest published rate snapshot of each provider"""

    def __init__(self, redis_client: redis.Redis, rate_ttl: timedelta = DEFAULT_RATE_TTL):
        self.redis = redis_client
        self.rate_ttl = rate_ttl

    @classmethod
    def from_url(cls, redis_url: str, rate_ttl: timedelta = DEFAULT_RATE_TTL) -> "RedisRateCache":
        return cls(redis.from_url(redis_url, decode_responses=True), rate_ttl)

    def _make_rates_key(self, provider_name: str) -> str:
        return f"rates:{provider_name}"

    async def get_rates(self, provider_name: str) -> frozenset[ExchangeRate] | None:
        key = self._make_rates_key(provider_name)
        try:
            data = await self.redis.get(key)
        except RedisError as e:
            raise CacheError(f"Failed to read {key}: {e}") from e

        if not data:
            return None

        try:
            return frozenset(
                ExchangeRate(
                    base_currency=rate_dict["base_currency"],
                    counter_currency=rate_dict["counter_currency"],
                    price=Decimal(rate_dict["price"]),
                    timestamp=int(rate_dict["timestamp"]),
                    provider_name=rate_dict["provider_name"],
                )
                for rate_dict in json.loads(data)
            )
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise CacheError(f"Invalid json data in {key}: {e}") from e

    async def set_rates(self, provider_name: str, rates: frozenset[ExchangeRate]) -> None:
        key = self._make_rates_key(provider_name)
        payload = [
            {
                "base_currency": rate.base_currency,
                "counter_currency": rate.counter_currency,
                "price": str(rate.price),
                "timestamp": rate.timestamp,
                "provider_name": rate.provider_name,
            }
            for rate in sorted(rates, key=lambda r: (r.base_currency, r.counter_currency))
        ]

        try:
            await self.redis.setex(key, self.rate_ttl, json.dumps(payload))
        except RedisError as e:
            raise CacheError(f"Failed to write {key}: {e}") from e

    async def close(self) -> None:
        await self.redis.aclose()
