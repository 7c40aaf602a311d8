from .base import VenueClient
from .ccxt_venue import CcxtVenueClient

__all__ = [
    "VenueClient",
    "CcxtVenueClient",
]
