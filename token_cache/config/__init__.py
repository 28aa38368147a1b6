"""Configuration for the token cache.

Example:
    >>> from token_cache.config import CacheSettings
    >>> settings = CacheSettings.from_yaml("token_cache.yaml")
    >>> settings.credential_file
"""

from token_cache.config.settings import CacheSettings, default_cache_dir

__all__ = ["CacheSettings", "default_cache_dir"]
