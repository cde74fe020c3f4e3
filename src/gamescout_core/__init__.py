# core package for GameScout
from . import catalog_api_manager, deals_api_manager, exceptions, models, network, parsing, store_directory, ttl_cache

__all__ = [
    "catalog_api_manager",
    "deals_api_manager",
    "exceptions",
    "models",
    "network",
    "parsing",
    "store_directory",
    "ttl_cache",
]
