from .redis_cache import RedisRateCache

__all__ = ["RedisRateCache"]
