"""
Data contracts exchanged between the photo service and its repository.
"""

from datetime import datetime
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

M = TypeVar("M")


class Contract(BaseModel):
    """Base contract: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryContract(Contract):
    id: str
    name: str


class PhotoThumbnailContract(Contract):
    created_at: datetime
    image_url: str


class CategoryPreviewContract(Contract):
    id: str
    name: str
    photo_thumbnails: List[PhotoThumbnailContract] = Field(default_factory=list)


class UserContract(Contract):
    user_id: str
    registration_reference: Optional[str] = None
    gold_balance: int = 0
    profile_photo_id: Optional[str] = None
    profile_photo_url: Optional[str] = None
    user_created: Optional[datetime] = None
    user_modified: Optional[datetime] = None


class AnnotationContract(Contract):
    id: Optional[str] = None
    photo_id: str
    from_user: Optional[UserContract] = None
    text: str = ""
    gold_count: int = 0
    created_at: Optional[datetime] = None


class PhotoStatus(str, Enum):
    ACTIVE = "Active"
    UNDER_REVIEW = "UnderReview"
    HIDDEN = "Hidden"
    OBJECTIONABLE_CONTENT = "ObjectionableContent"
    DELETED_BY_USER = "DeletedByUser"


class PhotoContract(Contract):
    id: Optional[str] = None
    category_id: str
    category_name: Optional[str] = None
    user: Optional[UserContract] = None
    description: str = ""
    status: PhotoStatus = PhotoStatus.ACTIVE
    os_platform: Optional[str] = None
    high_resolution_url: Optional[str] = None
    standard_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    number_of_annotations: int = 0
    number_of_gold_votes: int = 0
    rank: int = 0
    annotations: List[AnnotationContract] = Field(default_factory=list)


class LeaderboardEntryContract(Contract, Generic[M]):
    rank: int
    value: int
    model: M


class LeaderboardContract(Contract):
    most_gold_categories: List[LeaderboardEntryContract[CategoryContract]] = Field(default_factory=list)
    most_gold_photos: List[LeaderboardEntryContract[PhotoContract]] = Field(default_factory=list)
    most_gold_users: List[LeaderboardEntryContract[UserContract]] = Field(default_factory=list)
    most_giving_users: List[LeaderboardEntryContract[UserContract]] = Field(default_factory=list)


class ContentType(str, Enum):
    PHOTO = "Photo"
    ANNOTATION = "Annotation"


class ReportReason(str, Enum):
    INAPPROPRIATE = "Inappropriate"
    SPAM = "Spam"
    COPYRIGHT = "Copyright"
    OTHER = "Other"


class ReportContract(Contract):
    id: Optional[str] = None
    content_id: str
    content_type: ContentType
    report_reason: ReportReason
    reporter_user_id: Optional[str] = None
    created_date_time: Optional[datetime] = None
    active: bool = True


class IapPurchaseContract(Contract):
    iap_purchase_id: str
    product_id: str
    user_id: str
    gold_increment: int
    purchase_datetime: datetime
    expiration_datetime: Optional[datetime] = None


class PagedResponse(Contract, Generic[M]):
    items: List[M] = Field(default_factory=list)
    continuation_token: Optional[str] = None
