"""
Repository contract for photo service persistence.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

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


class Repository(ABC):
    """Persistence operations used by the photo service.

    Implementations raise ``shared.errors.DataLayerException`` on storage
    failures.
    """

    @abstractmethod
    async def create_category(self, name: str) -> CategoryContract:
        """Create a new category with the provided name."""

    @abstractmethod
    async def create_user(self, registration_reference: str) -> UserContract:
        """Insert a new user record for an auth provider registration reference."""

    @abstractmethod
    async def delete_annotation(self, annotation_id: str, user_registration_reference: str) -> None:
        pass

    @abstractmethod
    async def delete_photo(self, photo_id: str, user_registration_reference: str) -> None:
        pass

    @abstractmethod
    async def get_categories(self) -> List[CategoryContract]:
        """Fetch all categories sorted by name."""

    @abstractmethod
    async def get_categories_preview(self, number_of_thumbnails: int) -> List[CategoryPreviewContract]:
        """Fetch every category with at least one photo, with up to
        ``number_of_thumbnails`` recent thumbnails each."""

    @abstractmethod
    async def get_category_photo_stream(
        self, category_id: str, continuation_token: Optional[str]
    ) -> PagedResponse[PhotoContract]:
        pass

    @abstractmethod
    async def get_hero_photos(self, count: int, days_old: int) -> List[PhotoContract]:
        pass

    @abstractmethod
    async def get_leaderboard(
        self,
        most_gold_categories_count: int,
        most_gold_photos_count: int,
        most_gold_users_count: int,
        most_giving_users_count: int,
    ) -> LeaderboardContract:
        """Build the leaderboard with the requested number of entries per board."""

    @abstractmethod
    async def get_photo(self, photo_id: str) -> PhotoContract:
        pass

    @abstractmethod
    async def get_user(self, user_id: Optional[str], registration_reference: Optional[str] = None) -> UserContract:
        """Look a user up by app user id or, when that is unknown, by registration reference."""

    @abstractmethod
    async def get_user_photo_stream(
        self, user_id: str, continuation_token: Optional[str], include_non_active_photos: bool = False
    ) -> PagedResponse[PhotoContract]:
        pass

    @abstractmethod
    async def initialize_database_if_not_existing(self, server_path: Optional[str]) -> None:
        pass

    @abstractmethod
    async def insert_annotation(self, annotation: AnnotationContract) -> AnnotationContract:
        """Insert an annotation and perform its gold transfer."""

    @abstractmethod
    async def insert_iap_purchase(self, validated_receipt: IapPurchaseContract) -> UserContract:
        """Record a validated purchase receipt and credit the user's gold."""

    @abstractmethod
    async def insert_photo(self, photo: PhotoContract, gold_increment: int) -> PhotoContract:
        pass

    @abstractmethod
    async def insert_report(self, report: ReportContract, user_registration_reference: str) -> ReportContract:
        pass

    @abstractmethod
    async def reinitialize_database(self, server_path: Optional[str]) -> None:
        """Drop and recreate the database, deleting existing data."""

    @abstractmethod
    async def update_photo(self, photo: PhotoContract) -> PhotoContract:
        """Update a photo's category and description."""

    @abstractmethod
    async def update_photo_status(self, photo: PhotoContract) -> PhotoContract:
        pass

    @abstractmethod
    async def update_user(self, user: UserContract) -> UserContract:
        """Update the user's profile picture, awarding gold on the first update."""
