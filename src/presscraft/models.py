"""Data models for fact sheets, news clippings, report files and calendar events."""

from datetime import date as Date, datetime
from enum import Enum
from typing import Any, List, Optional

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PrType(str, Enum):
    """Narrative angle of a press release."""

    NEW_PRODUCT = "new_product"
    CAMPAIGN = "campaign"
    TREND = "trend"
    PROMOTION = "promotion"
    ISSUE = "issue"

    @classmethod
    def coerce(cls, value: Any) -> "PrType":
        """Map free-form input onto an angle; `activity` means issue, anything unknown is new_product."""
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        if key == "activity":
            return cls.ISSUE
        try:
            return cls(key)
        except ValueError:
            return cls.NEW_PRODUCT


class SpecCategory(str, Enum):
    DIMENSIONS = "dimensions"
    MATERIAL = "material"
    FUNCTION = "function"
    OTHER = "other"


class EventStatus(str, Enum):
    SCHEDULED = "scheduled"
    DRAFT = "draft"
    PUBLISHED = "published"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_text_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [_as_text(item) for item in value]


class FactSheet(BaseModel):
    """Source material for one press release."""

    model_config = ConfigDict(populate_by_name=True)

    brand_name: str = Field("", alias="brandName")
    product_name: str = Field(
        "", alias="productName", description="Product or campaign name."
    )
    pr_type: PrType = Field(PrType.NEW_PRODUCT, alias="prType")
    definition: str = Field("", description="One-line slogan or theme.")
    features: List[str] = Field(default_factory=list)
    usage_context: str = Field("", alias="usageContext")
    core_messages: List[str] = Field(default_factory=list, alias="coreMessages")
    launch_date: str = Field("", alias="launchDate")
    discount_promo: str = Field(
        "", alias="discountPromo", description="Promotion text; empty means omitted."
    )
    channels: str = ""
    comment_intent: str = Field("", alias="commentIntent")

    @field_validator("pr_type", mode="before")
    @classmethod
    def _coerce_pr_type(cls, value: Any) -> PrType:
        return PrType.coerce(value)

    @field_validator("features", "core_messages", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> List[str]:
        return _as_text_list(value)

    @field_validator(
        "brand_name",
        "product_name",
        "definition",
        "usage_context",
        "launch_date",
        "discount_promo",
        "channels",
        "comment_intent",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class SpecItem(BaseModel):
    """One physical product specification."""

    category: SpecCategory = SpecCategory.OTHER
    value: str
    detail: str = ""

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> SpecCategory:
        try:
            return SpecCategory(str(value or "").strip().lower())
        except ValueError:
            return SpecCategory.OTHER

    @field_validator("value", "detail", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class NewsItem(BaseModel):
    """One article returned by the news search collaborator."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(..., description="Headline; may contain markup such as <b>.")
    link: str
    originallink: Optional[str] = None
    description: str = ""
    pub_date: datetime = Field(..., alias="pubDate")
    source: Optional[str] = Field(None, description="Feed name for items collected from RSS.")

    @field_validator("pub_date", mode="before")
    @classmethod
    def _parse_pub_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            # Accepts RFC 822 ("Mon, 18 Mar 2024 09:00:00 +0900") and ISO-8601.
            return date_parser.parse(value)
        return value


class FeedSource(BaseModel):
    """An RSS or Atom feed watched on the monitoring dashboard."""

    name: str
    url: str


class NewsGroup(BaseModel):
    """Cluster of news items judged to report the same story."""

    main: NewsItem
    all: List[NewsItem]

    @property
    def count(self) -> int:
        return len(self.all)


class DailyNewsGroups(BaseModel):
    date: Date
    groups: List[NewsGroup]


class ReportFileMetadata(BaseModel):
    """Fields derived from one uploaded performance-report file."""

    model_config = ConfigDict(populate_by_name=True)

    extracted_date: Date = Field(..., alias="extractedDate")
    extracted_title: str = Field(..., alias="extractedTitle")
    article_count: int = Field(0, ge=0, alias="articleCount")


class Event(BaseModel):
    """A calendar record for one distribution."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    date: Date
    status: EventStatus = EventStatus.SCHEDULED
    type: str = "Press Release"
    content: str = ""
    article_count: int = Field(0, ge=0, alias="articleCount")
    performance_file: Optional[str] = Field(None, alias="performanceFile")
