from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


SEARCH_VOLUME_OPTIONS = (10000, 50000, 100000, 500000)
SATURATION_OPTIONS = (0.05, 0.01, 0.001, 0.0001)
SORT_OPTIONS = ("dailySearches", "saturation", "videoCount")

DEFAULT_SEARCH_VOLUME = 50000
DEFAULT_SATURATION = 0.01
DEFAULT_SORT = "dailySearches"

SortOption = Literal["dailySearches", "saturation", "videoCount"]


class Trend(BaseModel):
    """A search term with its estimated demand and supply."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    term: str = Field(..., min_length=1)
    daily_searches: int = Field(..., ge=0, strict=True, alias="dailySearches")
    video_count: int = Field(..., ge=0, strict=True, alias="videoCount")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ContentIdeas(BaseModel):
    titles: list[str]
    outline: str

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump()


class SearchParameters(BaseModel):
    selected_date: str = Field(default_factory=lambda: date.today().isoformat())
    niche: str = ""
    min_search_volume: int = DEFAULT_SEARCH_VOLUME
    max_saturation: float = DEFAULT_SATURATION
    sort_by: SortOption = DEFAULT_SORT

    @field_validator("selected_date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        date.fromisoformat(value)
        return value

    @field_validator("min_search_volume")
    @classmethod
    def _check_volume(cls, value: int) -> int:
        if value not in SEARCH_VOLUME_OPTIONS:
            raise ValueError(f"min_search_volume must be one of {SEARCH_VOLUME_OPTIONS}")
        return value

    @field_validator("max_saturation")
    @classmethod
    def _check_saturation(cls, value: float) -> float:
        if value not in SATURATION_OPTIONS:
            raise ValueError(f"max_saturation must be one of {SATURATION_OPTIONS}")
        return value

    def to_fetch_payload(self) -> dict[str, str]:
        # Thresholds travel as their string-encoded option values.
        return {
            "selectedDate": self.selected_date,
            "niche": self.niche,
            "searchVolume": str(self.min_search_volume),
            "saturationLevel": format_saturation(self.max_saturation),
        }


def format_saturation(value: float) -> str:
    return format(value, "f").rstrip("0").rstrip(".")


class FetchTrendsPayload(BaseModel):
    selectedDate: str
    niche: str = ""
    searchVolume: str
    saturationLevel: str


class GenerateIdeasPayload(BaseModel):
    term: str


class TrendsRequest(BaseModel):
    action: Any = None
    payload: dict[str, Any] = Field(default_factory=dict)
