from datetime import timedelta

from spot_rates.domain.models import ExchangeRate

STALE_PRICE_INTERVAL = timedelta(minutes=10)

# rates from venues that never report a time carry 0 and are never considered stale
UNKNOWN_TIMESTAMP = 0


def prune_stale_rates(
    rates: frozenset[ExchangeRate],
    now_ms: int,
    threshold: timedelta = STALE_PRICE_INTERVAL,
) -> frozenset[ExchangeRate]:
    stale_timestamp = now_ms - int(threshold.total_seconds() * 1000)
    return frozenset(
        rate for rate in rates
        if rate.timestamp == UNKNOWN_TIMESTAMP or rate.timestamp > stale_timestamp
    )
