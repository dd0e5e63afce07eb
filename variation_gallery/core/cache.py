from typing import Any, Optional
import json
import logging
import redis
from variation_gallery.core.config import settings

logger = logging.getLogger(__name__)

redis_client = redis.Redis(
    host=settings.REDIS_HOST,
    port=settings.REDIS_PORT,
    decode_responses=True,
    socket_connect_timeout=1,
)

def set_cache(key: str, value: Any, expire: int = settings.CACHE_EXPIRE_SECONDS) -> bool:
    """
    Set a cache value with expiration time (default from settings)
    """
    if not settings.CACHE_ENABLED:
        return False
    try:
        redis_client.setex(key, expire, json.dumps(value))
        return True
    except Exception as e:
        logger.debug("Cache write failed for %s: %s", key, e)
        return False

def get_cache(key: str) -> Optional[Any]:
    """
    Get a cached value
    """
    if not settings.CACHE_ENABLED:
        return None
    try:
        data = redis_client.get(key)
        return json.loads(data) if data else None
    except Exception as e:
        logger.debug("Cache read failed for %s: %s", key, e)
        return None

def clear_cache_pattern(pattern: str) -> bool:
    """
    Clear all cache keys matching a pattern
    """
    if not settings.CACHE_ENABLED:
        return False
    try:
        keys = redis_client.keys(pattern)
        if keys:
            redis_client.delete(*keys)
        return True
    except Exception:
        return False
