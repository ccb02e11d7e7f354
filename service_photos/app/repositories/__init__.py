"""
Repository layer: the persistence contract and its caching decorator.
"""

from .base import Repository
from .cached import CachedRepository, categories_preview_key, leaderboard_key

__all__ = ["Repository", "CachedRepository", "categories_preview_key", "leaderboard_key"]
