"""
Photo service for the Photo Sharing backend.
"""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.metrics import MetricsCollector

from .caching import CacheService, MemoryCacheService
from .contracts import CategoryContract, CategoryPreviewContract, LeaderboardContract
from .repositories import CachedRepository, Repository


SERVICE_NAME = "photos"
DEFAULT_PORT = 8020


def order_by_latest_photo(previews: List[CategoryPreviewContract]) -> List[CategoryPreviewContract]:
    """Order category previews by their newest thumbnail, newest first.

    Returns a new list; cached lists are shared between requests and must not
    be reordered in place.
    """
    def sort_key(preview: CategoryPreviewContract):
        if not preview.photo_thumbnails:
            return (0, 0.0)
        return (1, preview.photo_thumbnails[0].created_at.timestamp())

    return sorted(previews, key=sort_key, reverse=True)


class PhotoService(BaseService):
    """Photo service implementation."""

    def __init__(
        self,
        repository: Repository,
        cache_service: Optional[CacheService] = None,
        config: Optional[ServiceConfig] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        super().__init__(SERVICE_NAME, DEFAULT_PORT, config=config, metrics=metrics)

        self.cache_service: Optional[CacheService] = None
        if self.config.cache_enabled:
            self.cache_service = cache_service or MemoryCacheService.from_config(self.config, metrics=self.metrics)
            repository = CachedRepository(repository, self.cache_service)
        self.repository = repository

        self._setup_photo_routes()
        if self.config.enable_cache_admin and self.cache_service is not None:
            self._setup_cache_admin_routes()

    def _setup_photo_routes(self):
        """Set up photo-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": SERVICE_NAME,
                "message": "Photo Sharing - Photo Service",
                "version": "1.0.0",
                "cache_enabled": self.cache_service is not None
            }

        @self.app.get("/api/category", response_model=List[CategoryPreviewContract])
        async def get_categories_preview(
            number_of_thumbnails: int = Query(..., alias="numberOfThumbnails", ge=0)
        ):
            """Categories with at least one photo, newest activity first."""
            previews = await self.repository.get_categories_preview(number_of_thumbnails)
            return order_by_latest_photo(previews)

        @self.app.get("/api/categories", response_model=List[CategoryContract])
        async def get_categories():
            return await self.repository.get_categories()

        @self.app.get("/api/leaderboard", response_model=LeaderboardContract)
        async def get_leaderboard(
            most_gold_categories_count: int = Query(..., alias="mostGoldCategoriesCount", ge=0),
            most_gold_photos_count: int = Query(..., alias="mostGoldPhotosCount", ge=0),
            most_gold_users_count: int = Query(..., alias="mostGoldUsersCount", ge=0),
            most_giving_users_count: int = Query(..., alias="mostGivingUsersCount", ge=0),
        ):
            return await self.repository.get_leaderboard(
                most_gold_categories_count,
                most_gold_photos_count,
                most_gold_users_count,
                most_giving_users_count,
            )

    def _setup_cache_admin_routes(self):
        """Administrative cache routes, for test and operations environments."""

        @self.app.delete("/api/cache")
        async def clear_cache():
            self.cache_service.clear()
            self.logger.info("Cache cleared through admin endpoint")
            return {"cleared": True}

        @self.app.post("/api/cache/purge")
        async def purge_expired_cache_entries():
            if not isinstance(self.cache_service, MemoryCacheService):
                return {"purged": 0}
            return {"purged": self.cache_service.purge_expired()}

    async def _check_dependencies(self) -> Dict[str, Any]:
        if self.cache_service is None:
            return {"cache": "disabled"}

        dependencies: Dict[str, Any] = {"cache": "ok"}
        if isinstance(self.cache_service, MemoryCacheService):
            dependencies["cache_entries"] = self.cache_service.size
        return dependencies


def create_app(
    repository: Repository,
    cache_service: Optional[CacheService] = None,
    config: Optional[ServiceConfig] = None,
) -> FastAPI:
    """Create the photo service application around a repository backend."""
    return PhotoService(repository, cache_service=cache_service, config=config).app
