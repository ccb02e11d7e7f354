"""
Repository decorator that serves selected reads from a cache.
"""

from typing import List, Optional

from shared.logging import get_logger

from ..caching import CacheService
from ..contracts import (
    AnnotationContract,
    CategoryContract,
    CategoryPreviewContract,
    IapPurchaseContract,
    LeaderboardContract,
    PagedResponse,
    PhotoContract,
    ReportContract,
    UserContract,
)
from .base import Repository


def categories_preview_key(number_of_thumbnails: int) -> str:
    return f"categories_preview:{number_of_thumbnails}"


def leaderboard_key(
    most_gold_categories_count: int,
    most_gold_photos_count: int,
    most_gold_users_count: int,
    most_giving_users_count: int,
) -> str:
    return (
        f"leaderboard:{most_gold_categories_count}:{most_gold_photos_count}"
        f":{most_gold_users_count}:{most_giving_users_count}"
    )


class CachedRepository(Repository):
    """A repository that uses a cache for some repository calls.

    Category previews and leaderboards are cached. Everything else, writes
    included, goes straight to the wrapped repository; writes do not
    invalidate cached reads.
    """

    def __init__(self, repository: Repository, cache_service: CacheService):
        self.repository = repository
        self.cache_service = cache_service
        self.logger = get_logger("photos.repository.cached")

    async def get_categories_preview(self, number_of_thumbnails: int) -> List[CategoryPreviewContract]:
        return await self.cache_service.get_or_insert(
            categories_preview_key(number_of_thumbnails),
            lambda: self.repository.get_categories_preview(number_of_thumbnails),
        )

    async def get_leaderboard(
        self,
        most_gold_categories_count: int,
        most_gold_photos_count: int,
        most_gold_users_count: int,
        most_giving_users_count: int,
    ) -> LeaderboardContract:
        return await self.cache_service.get_or_insert(
            leaderboard_key(
                most_gold_categories_count,
                most_gold_photos_count,
                most_gold_users_count,
                most_giving_users_count,
            ),
            lambda: self.repository.get_leaderboard(
                most_gold_categories_count,
                most_gold_photos_count,
                most_gold_users_count,
                most_giving_users_count,
            ),
        )

    # Passthrough

    async def create_category(self, name: str) -> CategoryContract:
        return await self.repository.create_category(name)

    async def create_user(self, registration_reference: str) -> UserContract:
        return await self.repository.create_user(registration_reference)

    async def delete_annotation(self, annotation_id: str, user_registration_reference: str) -> None:
        await self.repository.delete_annotation(annotation_id, user_registration_reference)

    async def delete_photo(self, photo_id: str, user_registration_reference: str) -> None:
        await self.repository.delete_photo(photo_id, user_registration_reference)

    async def get_categories(self) -> List[CategoryContract]:
        return await self.repository.get_categories()

    async def get_category_photo_stream(
        self, category_id: str, continuation_token: Optional[str]
    ) -> PagedResponse[PhotoContract]:
        return await self.repository.get_category_photo_stream(category_id, continuation_token)

    async def get_hero_photos(self, count: int, days_old: int) -> List[PhotoContract]:
        return await self.repository.get_hero_photos(count, days_old)

    async def get_photo(self, photo_id: str) -> PhotoContract:
        return await self.repository.get_photo(photo_id)

    async def get_user(self, user_id: Optional[str], registration_reference: Optional[str] = None) -> UserContract:
        return await self.repository.get_user(user_id, registration_reference)

    async def get_user_photo_stream(
        self, user_id: str, continuation_token: Optional[str], include_non_active_photos: bool = False
    ) -> PagedResponse[PhotoContract]:
        return await self.repository.get_user_photo_stream(user_id, continuation_token, include_non_active_photos)

    async def initialize_database_if_not_existing(self, server_path: Optional[str]) -> None:
        await self.repository.initialize_database_if_not_existing(server_path)

    async def insert_annotation(self, annotation: AnnotationContract) -> AnnotationContract:
        return await self.repository.insert_annotation(annotation)

    async def insert_iap_purchase(self, validated_receipt: IapPurchaseContract) -> UserContract:
        return await self.repository.insert_iap_purchase(validated_receipt)

    async def insert_photo(self, photo: PhotoContract, gold_increment: int) -> PhotoContract:
        return await self.repository.insert_photo(photo, gold_increment)

    async def insert_report(self, report: ReportContract, user_registration_reference: str) -> ReportContract:
        return await self.repository.insert_report(report, user_registration_reference)

    async def reinitialize_database(self, server_path: Optional[str]) -> None:
        self.logger.warning("Reinitializing database, cached reads are not cleared")
        await self.repository.reinitialize_database(server_path)

    async def update_photo(self, photo: PhotoContract) -> PhotoContract:
        return await self.repository.update_photo(photo)

    async def update_photo_status(self, photo: PhotoContract) -> PhotoContract:
        return await self.repository.update_photo_status(photo)

    async def update_user(self, user: UserContract) -> UserContract:
        return await self.repository.update_user(user)
