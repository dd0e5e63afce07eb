from typing import Dict, Any, Callable
from functools import wraps
from fastapi import Depends, HTTPException, status, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlalchemy.orm import Session
from variation_gallery.core.config import settings
from variation_gallery.core.cache import get_cache, set_cache, clear_cache_pattern
from variation_gallery.db.catalog import SqlCatalog
from variation_gallery.db.session import get_db
from variation_gallery.engine.cache import DatasetCache
from variation_gallery.engine.gallery import GalleryOptions
import json
import logging
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

def get_catalog(db: Session = Depends(get_db)) -> SqlCatalog:
    return SqlCatalog(db)

def get_options() -> GalleryOptions:
    return GalleryOptions.from_settings(settings)

def get_dataset_cache() -> DatasetCache:
    """One dataset cache per request, shared by every lookup the request makes."""
    return DatasetCache()

async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security),
) -> Dict[str, Any]:
    """Decode the bearer token and return its claims"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    try:
        payload = jwt.decode(
            credentials.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials"
        )
    if not payload.get("sub"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials"
        )
    return payload

async def get_current_superuser(
    current_user: Dict[str, Any] = Security(get_current_user)
) -> Dict[str, Any]:
    """Superuser authentication - returns current superuser claims"""
    if not current_user.get("is_superuser"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Superuser privileges required"
        )
    return current_user

def gallery_cache_key(key_prefix: str, func_name: str, cache_kwargs: Dict[str, Any]) -> str:
    cache_key = f"{key_prefix}:{func_name}"
    if cache_kwargs:
        cache_key += f":{json.dumps(cache_kwargs, sort_keys=True)}"
    return cache_key

def cache_response(expire: int = 3600, key_prefix: str = "") -> Callable:
    """
    Cache decorator for API responses
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            cache_kwargs = {
                k: v for k, v in kwargs.items()
                if k not in ['db', 'catalog', 'options', 'cache', 'credentials']
            }
            cache_key = gallery_cache_key(key_prefix, func.__name__, cache_kwargs)

            cached_response = get_cache(cache_key)
            if cached_response is not None:
                return cached_response

            response = await func(*args, **kwargs)
            set_cache(cache_key, jsonable_encoder(response), expire=expire)
            return response

        return wrapper
    return decorator

# Callable dependencies for router use
require_superuser = Security(get_current_superuser)

def clear_gallery_cache(catalog: SqlCatalog, product_id: int) -> None:
    """Drop every cached gallery response of a product and of its translations."""
    for pid in [product_id] + catalog.get_translation_ids(product_id):
        clear_cache_pattern(f'gallery:*:{{"product_id": {pid},*')
