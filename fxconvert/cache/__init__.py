from .rate_cache import DEFAULT_TTL_SECONDS, CacheEntry, RateCache

__all__ = ["CacheEntry", "DEFAULT_TTL_SECONDS", "RateCache"]
