import math

import pytest

from backend.app.models import ContentIdeas, SearchParameters, Trend
from frontend.view_state import (
    NO_RESULTS_MESSAGE,
    NO_SAVED_MESSAGE,
    IdeaPanel,
    ViewState,
    saturation,
    saturation_bar_width,
    saturation_percent,
    sort_trends,
)


def make_trend(term: str, searches: int, videos: int) -> Trend:
    return Trend(term=term, daily_searches=searches, video_count=videos)


FIXTURE = [
    make_trend("a", 100000, 500),
    make_trend("b", 0, 1),
    make_trend("c", 500000, 50),
    make_trend("d", 50000, 2),
    make_trend("e", 100000, 10),
]


class MemoryStore:
    def __init__(self, initial=None):
        self.items = list(initial or [])
        self.writes = []

    def load(self):
        return list(self.items)

    def save(self, trends):
        self.items = list(trends)
        self.writes.append(list(trends))
        return True


class StubApi:
    def __init__(self, trends=None, ideas=None, error=None):
        self.trends = trends or []
        self.ideas = ideas
        self.error = error
        self.calls = 0

    def fetch_trends(self, params):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.trends)

    def generate_ideas(self, term):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.ideas


def test_saturation_ratio_and_zero_searches():
    assert saturation(make_trend("x", 1000, 5)) == 0.005
    assert saturation(make_trend("x", 0, 0)) == math.inf
    assert saturation_percent(make_trend("x", 0, 7)) == 0.0
    assert saturation_percent(make_trend("x", 1000, 5)) == pytest.approx(0.5)
    assert saturation_bar_width(make_trend("x", 10, 50)) == 100.0


def test_sort_by_daily_searches_is_non_increasing():
    ordered = sort_trends(FIXTURE, "dailySearches")
    searches = [t.daily_searches for t in ordered]
    assert searches == sorted(searches, reverse=True)
    # equal counts keep their input order
    assert [t.term for t in ordered if t.daily_searches == 100000] == ["a", "e"]


def test_sort_by_video_count_is_non_decreasing():
    counts = [t.video_count for t in sort_trends(FIXTURE, "videoCount")]
    assert counts == sorted(counts)


def test_zero_search_terms_sort_last_by_saturation():
    ordered = sort_trends(FIXTURE + [make_trend("z", 0, 0)], "saturation")
    assert [t.term for t in ordered[-2:]] == ["b", "z"]
    assert [t.term for t in ordered[:3]] == ["d", "c", "e"]


def test_sort_does_not_mutate_input():
    data = list(FIXTURE)
    sort_trends(data, "videoCount")
    assert data == FIXTURE


def test_sort_rejects_unknown_key():
    with pytest.raises(ValueError):
        sort_trends(FIXTURE, "views")


def test_state_loads_saved_trends_on_start():
    store = MemoryStore([FIXTURE[0]])
    state = ViewState(api=StubApi(), storage=store)
    assert state.saved_trends == [FIXTURE[0]]


def test_toggle_save_adds_then_removes_and_persists():
    original = [FIXTURE[0], FIXTURE[2]]
    store = MemoryStore(original)
    state = ViewState(api=StubApi(), storage=store)

    state.toggle_save(FIXTURE[3])
    assert state.saved_trends == original + [FIXTURE[3]]
    state.toggle_save(FIXTURE[3])
    assert state.saved_trends == original
    assert store.items == original
    assert len(store.writes) == 2


def test_toggle_save_matches_on_term_only():
    state = ViewState(api=StubApi(), storage=MemoryStore([FIXTURE[0]]))
    assert state.is_saved(make_trend("a", 1, 1))
    assert not state.is_saved(make_trend("A", 100000, 500))
    state.toggle_save(make_trend("a", 1, 1))
    assert state.saved_trends == []


def test_search_success():
    api = StubApi(trends=FIXTURE)
    state = ViewState(api=api, storage=MemoryStore())
    state.error = "old error"
    result = state.search()
    assert result == FIXTURE
    assert state.has_searched
    assert not state.is_loading
    assert state.error is None
    assert [t.term for t in state.visible_trends()] == ["c", "a", "e", "d", "b"]


def test_search_failure_sets_message_and_clears_results():
    api = StubApi(error=RuntimeError("Server error: quota"))
    state = ViewState(api=api, storage=MemoryStore())
    state.trends = list(FIXTURE)
    state.search()
    assert state.trends == []
    assert state.error == "Server error: quota"
    assert not state.is_loading


def test_visible_trends_follow_tab_and_sort():
    state = ViewState(
        api=StubApi(),
        storage=MemoryStore([FIXTURE[1], FIXTURE[3]]),
        params=SearchParameters(sort_by="saturation"),
    )
    state.trends = [FIXTURE[0]]
    assert state.visible_trends() == [FIXTURE[0]]
    state.current_view = "saved"
    assert [t.term for t in state.visible_trends()] == ["d", "b"]


def test_empty_state_messages():
    state = ViewState(api=StubApi(), storage=MemoryStore())
    assert state.empty_state_message() is None
    state.search()
    assert state.empty_state_message() == NO_RESULTS_MESSAGE
    state.current_view = "saved"
    assert state.empty_state_message() == NO_SAVED_MESSAGE


def test_idea_panel_toggles_and_records_errors():
    ideas = ContentIdeas(titles=["1", "2", "3", "4", "5"], outline="## Outline")
    api = StubApi(ideas=ideas)
    panel = IdeaPanel(api=api, trend=FIXTURE[0])
    assert panel.toggle() == ideas
    assert panel.toggle() is None
    assert api.calls == 1

    failing = IdeaPanel(api=StubApi(error=RuntimeError("boom")), trend=FIXTURE[0])
    assert failing.toggle() is None
    assert failing.error == "boom"
    assert not failing.is_loading


def test_idea_panel_ignores_toggle_while_loading():
    api = StubApi(ideas=ContentIdeas(titles=[], outline=""))
    panel = IdeaPanel(api=api, trend=FIXTURE[0])
    panel.is_loading = True
    panel.toggle()
    assert api.calls == 0
