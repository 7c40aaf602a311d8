from .providers import KNOWN_PROVIDERS, get_provider_config
from .settings import Settings, get_settings

__all__ = ["KNOWN_PROVIDERS", "get_provider_config", "Settings", "get_settings"]
