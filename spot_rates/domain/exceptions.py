class SpotRatesError(Exception):
    pass


class ProviderError(SpotRatesError):
    """Raised by venue clients when the venue or the transport fails"""
    pass


class ConfigurationError(SpotRatesError):
    pass


class CacheError(SpotRatesError):
    pass
