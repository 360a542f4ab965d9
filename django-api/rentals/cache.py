"""Cache keys for catalog reads and their invalidation.

Every key embeds the current catalog version. Invalidation bumps the version
instead of deleting entries, so a reader that loaded data before a change
committed and stores it afterwards writes under a key nobody reads again.
Readers must build their key before loading the data.
"""

from django.core.cache import cache

VERSION_KEY = "vehicles:version"


def catalog_version() -> int:
    return cache.get_or_set(VERSION_KEY, 1, timeout=None)


def vehicle_list_key(vehicle_type: str | None) -> str:
    return f"vehicles:v{catalog_version()}:list:{vehicle_type or 'all'}"


def vehicle_detail_key(vehicle_id: str) -> str:
    return f"vehicles:v{catalog_version()}:{vehicle_id}"


def invalidate_catalog_cache() -> None:
    """Retire every cached vehicle list and detail entry."""
    try:
        cache.incr(VERSION_KEY)
    except ValueError:
        # evicted; any value other than the default retires old entries
        cache.set(VERSION_KEY, 2, timeout=None)
