"""Pydantic data models shared by the engine, the stores and the CLI."""
from __future__ import annotations

from datetime import date as CalendarDate
from datetime import datetime, timezone
from enum import Enum
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import MalformedRecordError

_COUNT_FIELDS = ("retweet_count", "reply_count", "like_count", "quote_count", "bookmark_count")


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Post(BaseModel):
    """A single social-media item with its interaction counts."""

    post_id: str
    url: str = ""
    twitter_url: str = Field("", description="Empty for posts that did not come from Twitter/X")
    text: str = ""
    created_at: datetime
    search_term: str = Field("", description="Query that surfaced this post")
    retweet_count: int = Field(0, ge=0)
    reply_count: int = Field(0, ge=0)
    like_count: int = Field(0, ge=0)
    quote_count: int = Field(0, ge=0)
    bookmark_count: int = Field(0, ge=0)
    is_retweet: bool = False
    is_quote: bool = False
    engagement_score: float = Field(0, ge=0, description="Precomputed score; 0 means derive it")
    inserted_at: Optional[datetime] = None

    model_config = {
        "frozen": True,
    }

    @field_validator(*_COUNT_FIELDS, "engagement_score", mode="before")
    @classmethod
    def _missing_count_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("url", "twitter_url", "text", "search_term", mode="before")
    @classmethod
    def _missing_text_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("created_at", "inserted_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)

    @property
    def is_twitter(self) -> bool:
        return bool(self.twitter_url)


class Trend(BaseModel):
    """A labeled topic that posts can be linked to."""

    trend_id: str
    slug: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    is_active: bool = True
    alt_names: List[str] = Field(default_factory=list)
    created_at: datetime
    brief_url: Optional[str] = None

    model_config = {
        "frozen": True,
    }

    @field_validator("alt_names", mode="before")
    @classmethod
    def _missing_alt_names(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)  # type: ignore[return-value]


class PostTrendLink(BaseModel):
    """Many-to-many association produced by the external classifier."""

    post_id: str
    trend_id: str
    method: Optional[str] = None
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    raw_label: Optional[str] = None
    normalized_label: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "frozen": True,
    }

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)


class TrendLink(BaseModel):
    """Realized marketing-brief artifact for a trend. Newest one wins."""

    trend_id: str
    url: str
    label: Optional[str] = None
    created_at: datetime

    model_config = {
        "frozen": True,
    }

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)  # type: ignore[return-value]


class DashboardFilters(BaseModel):
    """Ephemeral filter configuration chosen on the dashboard."""

    search_terms: FrozenSet[str] = Field(default_factory=frozenset, description="Empty means no restriction")
    date_preset: int = Field(7, ge=0, description="Window size in days, anchored to now")
    min_engagement: float = Field(0, ge=0, description="Inclusive floor on the computed score")

    model_config = {
        "frozen": True,
    }


class TrendStatus(str, Enum):
    EMERGING = "Emerging"
    STABLE = "Stable"
    DECLINING = "Declining"


class TrendMetrics(BaseModel):
    """Derived metrics for one trend. Recomputed on every aggregation."""

    trend_id: str
    trend: Trend
    posts: List[Post] = Field(default_factory=list, description="Filtered posts, oldest first")
    total_engagement: float = 0
    wow_growth_pct: float = 0
    status: TrendStatus = TrendStatus.STABLE
    first_seen: datetime
    last_seen: datetime

    model_config = {
        "frozen": True,
    }

    @property
    def post_count(self) -> int:
        return len(self.posts)


class KPIData(BaseModel):
    active_trends: int = 0
    eligible_posts: int = 0
    total_engagement: float = 0
    new_trends: int = 0

    model_config = {
        "frozen": True,
    }


class SparklinePoint(BaseModel):
    date: CalendarDate
    engagement: float
    synthetic: bool = Field(False, description="True when produced by the sparse-data fallback")

    model_config = {
        "frozen": True,
    }


M = TypeVar("M", bound=BaseModel)


def parse_rows(model: Type[M], rows: Iterable[Mapping[str, Any]]) -> List[M]:
    """Validate raw store rows into *model* instances.

    Raises :class:`MalformedRecordError` on the first row that does not parse,
    so a bad ``created_at`` never gets silently coerced.
    """
    parsed: List[M] = []
    for index, row in enumerate(rows):
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise MalformedRecordError(model.__name__, index, f"{location}: {first['msg']}") from exc
    return parsed
