"""
Shared fixtures for photo service tests.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import pytest

from service_photos.app.contracts import (
    AnnotationContract,
    CategoryContract,
    CategoryPreviewContract,
    IapPurchaseContract,
    LeaderboardContract,
    LeaderboardEntryContract,
    PagedResponse,
    PhotoContract,
    PhotoThumbnailContract,
    ReportContract,
    UserContract,
)
from service_photos.app.repositories import Repository


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_preview(category_id: str, name: str, newest: Optional[datetime]) -> CategoryPreviewContract:
    thumbnails = []
    if newest is not None:
        thumbnails = [
            PhotoThumbnailContract(created_at=newest, image_url=f"https://img.example/{category_id}/1.jpg"),
            PhotoThumbnailContract(created_at=newest - timedelta(hours=1), image_url=f"https://img.example/{category_id}/2.jpg"),
        ]
    return CategoryPreviewContract(id=category_id, name=name, photo_thumbnails=thumbnails)


class RepositoryMock(Repository):
    """In-memory repository that counts calls per operation.

    ``get_categories_preview_func`` and ``get_leaderboard_func`` can be replaced
    to control what the cached reads return.
    """

    def __init__(self):
        self.calls: Counter = Counter()
        base = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        self.get_categories_preview_func: Callable[[int], List[CategoryPreviewContract]] = lambda n: [
            make_preview("cat-1", "Landscapes", base),
            make_preview("cat-2", "Pets", base + timedelta(days=2)),
        ]
        self.get_leaderboard_func: Callable[..., LeaderboardContract] = lambda *counts: LeaderboardContract(
            most_gold_users=[
                LeaderboardEntryContract[UserContract](
                    rank=1, value=120, model=UserContract(user_id="user-1", gold_balance=120)
                )
            ]
        )

    async def create_category(self, name: str) -> CategoryContract:
        self.calls["create_category"] += 1
        return CategoryContract(id=f"cat-{name.lower()}", name=name)

    async def create_user(self, registration_reference: str) -> UserContract:
        self.calls["create_user"] += 1
        return UserContract(user_id="user-new", registration_reference=registration_reference, gold_balance=40)

    async def delete_annotation(self, annotation_id: str, user_registration_reference: str) -> None:
        self.calls["delete_annotation"] += 1

    async def delete_photo(self, photo_id: str, user_registration_reference: str) -> None:
        self.calls["delete_photo"] += 1

    async def get_categories(self) -> List[CategoryContract]:
        self.calls["get_categories"] += 1
        return [CategoryContract(id="cat-1", name="Landscapes"), CategoryContract(id="cat-2", name="Pets")]

    async def get_categories_preview(self, number_of_thumbnails: int) -> List[CategoryPreviewContract]:
        self.calls["get_categories_preview"] += 1
        return self.get_categories_preview_func(number_of_thumbnails)

    async def get_category_photo_stream(self, category_id: str, continuation_token: Optional[str]) -> PagedResponse[PhotoContract]:
        self.calls["get_category_photo_stream"] += 1
        return PagedResponse[PhotoContract](items=[PhotoContract(id="photo-1", category_id=category_id)])

    async def get_hero_photos(self, count: int, days_old: int) -> List[PhotoContract]:
        self.calls["get_hero_photos"] += 1
        return [PhotoContract(id=f"hero-{i}", category_id="cat-1") for i in range(count)]

    async def get_leaderboard(self, most_gold_categories_count: int, most_gold_photos_count: int,
                              most_gold_users_count: int, most_giving_users_count: int) -> LeaderboardContract:
        self.calls["get_leaderboard"] += 1
        return self.get_leaderboard_func(most_gold_categories_count, most_gold_photos_count,
                                         most_gold_users_count, most_giving_users_count)

    async def get_photo(self, photo_id: str) -> PhotoContract:
        self.calls["get_photo"] += 1
        return PhotoContract(id=photo_id, category_id="cat-1")

    async def get_user(self, user_id: Optional[str], registration_reference: Optional[str] = None) -> UserContract:
        self.calls["get_user"] += 1
        return UserContract(user_id=user_id or "user-1", registration_reference=registration_reference)

    async def get_user_photo_stream(self, user_id: str, continuation_token: Optional[str],
                                    include_non_active_photos: bool = False) -> PagedResponse[PhotoContract]:
        self.calls["get_user_photo_stream"] += 1
        return PagedResponse[PhotoContract](items=[], continuation_token=continuation_token)

    async def initialize_database_if_not_existing(self, server_path: Optional[str]) -> None:
        self.calls["initialize_database_if_not_existing"] += 1

    async def insert_annotation(self, annotation: AnnotationContract) -> AnnotationContract:
        self.calls["insert_annotation"] += 1
        return annotation.model_copy(update={"id": "annotation-1"})

    async def insert_iap_purchase(self, validated_receipt: IapPurchaseContract) -> UserContract:
        self.calls["insert_iap_purchase"] += 1
        return UserContract(user_id=validated_receipt.user_id, gold_balance=validated_receipt.gold_increment)

    async def insert_photo(self, photo: PhotoContract, gold_increment: int) -> PhotoContract:
        self.calls["insert_photo"] += 1
        return photo.model_copy(update={"id": "photo-new"})

    async def insert_report(self, report: ReportContract, user_registration_reference: str) -> ReportContract:
        self.calls["insert_report"] += 1
        return report.model_copy(update={"id": "report-1"})

    async def reinitialize_database(self, server_path: Optional[str]) -> None:
        self.calls["reinitialize_database"] += 1

    async def update_photo(self, photo: PhotoContract) -> PhotoContract:
        self.calls["update_photo"] += 1
        return photo

    async def update_photo_status(self, photo: PhotoContract) -> PhotoContract:
        self.calls["update_photo_status"] += 1
        return photo

    async def update_user(self, user: UserContract) -> UserContract:
        self.calls["update_user"] += 1
        return user


@pytest.fixture
def fake_clock():
    """Manually advanced clock for expiration tests."""
    return FakeClock()


@pytest.fixture
def repository_mock():
    """Counting in-memory repository."""
    return RepositoryMock()
