"""doccache: request-coalescing, cache-fronted lookups for document stores."""

from doccache.config.settings import ConfigurationError, Settings, load_settings
from doccache.datasource import CachingMethods, create_caching_methods
from doccache.version import __version__

__all__ = [
    "CachingMethods",
    "ConfigurationError",
    "Settings",
    "__version__",
    "create_caching_methods",
    "load_settings",
]
