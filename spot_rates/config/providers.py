"""
Known venues and their quirks.

Each entry feeds the shared rate pipeline; only the configuration and the
ccxt exchange binding differ between venues.
"""
from datetime import timedelta

from spot_rates.domain.exceptions import ConfigurationError
from spot_rates.domain.models import ProviderConfig

KNOWN_PROVIDERS: dict[str, ProviderConfig] = {
    config.name: config
    for config in (
        ProviderConfig(name="BINANCE", prefix="BIN", exchange_id="binance"),
        # Kraken answers a bulk ticker call only when it carries the pair list
        ProviderConfig(name="KRAKEN", prefix="KRA", exchange_id="kraken", requires_explicit_filter=True),
        ProviderConfig(name="BITFINEX", prefix="BITF", exchange_id="bitfinex"),
        ProviderConfig(name="POLONIEX", prefix="POLO", exchange_id="poloniex"),
        # Bitstamp throttles bursts of single-ticker calls
        ProviderConfig(name="BITSTAMP", prefix="BITS", exchange_id="bitstamp", call_delay=1.0),
        ProviderConfig(
            name="COINBASE", prefix="COINB", exchange_id="coinbase",
            refresh_interval=timedelta(minutes=2), call_delay=0.5,
        ),
    )
}


def get_provider_config(name: str) -> ProviderConfig:
    try:
        return KNOWN_PROVIDERS[name.upper()]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown provider {name}, expected one of {sorted(KNOWN_PROVIDERS)}"
        ) from e
