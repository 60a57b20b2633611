import logging
import math
from dataclasses import dataclass, field
from typing import Literal, Protocol

from backend.app.models import ContentIdeas, SearchParameters, Trend


logger = logging.getLogger(__name__)

ViewOption = Literal["search", "saved"]

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
NO_RESULTS_MESSAGE = (
    "No Results Found. No topics matched your specific criteria. Try broadening your search "
    "filters, like using a lower minimum search volume or a higher saturation level."
)
NO_SAVED_MESSAGE = "No saved trends yet. Save a topic from the search results to keep it here."


class TrendsApi(Protocol):
    def fetch_trends(self, params: SearchParameters) -> list[Trend]: ...

    def generate_ideas(self, term: str) -> ContentIdeas: ...


class TrendsStore(Protocol):
    def load(self) -> list[Trend]: ...

    def save(self, trends: list[Trend]) -> bool: ...


# ---------------------------
# Derivation
# ---------------------------

def saturation(trend: Trend) -> float:
    """videoCount / dailySearches; terms nobody searches for rank as fully saturated."""
    if trend.daily_searches > 0:
        return trend.video_count / trend.daily_searches
    return math.inf


def saturation_percent(trend: Trend) -> float:
    if trend.daily_searches > 0:
        return trend.video_count / trend.daily_searches * 100
    return 0.0


def saturation_bar_width(trend: Trend) -> float:
    return min(saturation_percent(trend), 100.0)


SORT_KEYS = {
    "dailySearches": lambda trend: -trend.daily_searches,
    "videoCount": lambda trend: trend.video_count,
    "saturation": saturation,
}


def sort_trends(data: list[Trend], sort_by: str) -> list[Trend]:
    key = SORT_KEYS.get(sort_by)
    if key is None:
        raise ValueError(f"sort_by must be one of: {', '.join(SORT_KEYS)}")
    return sorted(data, key=key)


# ---------------------------
# View state
# ---------------------------

@dataclass
class ViewState:
    api: TrendsApi
    storage: TrendsStore
    params: SearchParameters = field(default_factory=SearchParameters)
    trends: list[Trend] = field(default_factory=list)
    saved_trends: list[Trend] = field(default_factory=list)
    current_view: ViewOption = "search"
    is_loading: bool = False
    error: str | None = None
    has_searched: bool = False

    def __post_init__(self):
        if not self.saved_trends:
            self.saved_trends = self.storage.load()

    def visible_trends(self) -> list[Trend]:
        data = self.trends if self.current_view == "search" else self.saved_trends
        return sort_trends(data, self.params.sort_by)

    def is_saved(self, trend: Trend) -> bool:
        return any(saved.term == trend.term for saved in self.saved_trends)

    def toggle_save(self, trend: Trend) -> list[Trend]:
        if self.is_saved(trend):
            updated = [saved for saved in self.saved_trends if saved.term != trend.term]
        else:
            updated = [*self.saved_trends, trend]
        self.saved_trends = updated
        self.storage.save(updated)
        return updated

    def search(self) -> list[Trend]:
        self.is_loading = True
        self.error = None
        self.trends = []
        self.has_searched = True
        try:
            self.trends = self.api.fetch_trends(self.params)
        except Exception as exc:
            logger.error("Error fetching YouTube trends: %s", exc)
            self.error = str(exc) or UNKNOWN_ERROR_MESSAGE
        finally:
            self.is_loading = False
        return self.trends

    def empty_state_message(self) -> str | None:
        if self.is_loading or self.error:
            return None
        if self.current_view == "search" and self.has_searched and not self.trends:
            return NO_RESULTS_MESSAGE
        if self.current_view == "saved" and not self.saved_trends:
            return NO_SAVED_MESSAGE
        return None


@dataclass
class IdeaPanel:
    """Per-card idea state: fetched on first toggle, hidden on the next."""

    api: TrendsApi
    trend: Trend
    ideas: ContentIdeas | None = None
    is_loading: bool = False
    error: str | None = None

    def toggle(self) -> ContentIdeas | None:
        if self.is_loading:
            return self.ideas
        if self.ideas is not None:
            self.ideas = None
            return None
        self.is_loading = True
        self.error = None
        try:
            self.ideas = self.api.generate_ideas(self.trend.term)
        except Exception as exc:
            logger.error("Error generating content ideas: %s", exc)
            self.error = str(exc) or "An unknown error occurred while fetching ideas."
        finally:
            self.is_loading = False
        return self.ideas
