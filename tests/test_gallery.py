"""Gallery controller: day index, navigation and mutation flows."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Set, Tuple

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from controllers.cards import EMPTY_STATE_MESSAGE, render_cards
from controllers.gallery import (
    DELETED_MESSAGE,
    LOAD_FAILED_MESSAGE,
    MULTI_EDIT_MESSAGE,
    NOTHING_TO_DELETE_MESSAGE,
    UPDATE_FAILED_MESSAGE,
    GalleryController,
    GalleryState,
)
from controllers.views import EditRequest
from models.outfit_entry import OutfitEntry
from tools.outfit_api_client import OutfitApiError
from views.snapshot import SnapshotGalleryView


class _FakeClient:
    """In-memory stand-in for the outfit API client."""

    def __init__(self, entries: List[OutfitEntry] | None = None) -> None:
        self.entries = list(entries or [])
        self.fail_list = False
        self.fail_update = False
        self.fail_delete_ids: Set[str] = set()
        self.calls: List[Tuple[Any, ...]] = []

    def list_entries(self) -> List[OutfitEntry]:
        self.calls.append(("list",))
        if self.fail_list:
            raise OutfitApiError("GET /outfits failed", status_code=503)
        return list(self.entries)

    def delete_entry(self, entry_id: str) -> None:
        self.calls.append(("delete", entry_id))
        if entry_id in self.fail_delete_ids:
            raise OutfitApiError("DELETE failed", status_code=500)
        self.entries = [entry for entry in self.entries if entry.id != entry_id]

    def update_entry(self, entry_id: str, title: Optional[str], notes: Optional[str]) -> None:
        self.calls.append(("update", entry_id, title, notes))
        if self.fail_update:
            raise OutfitApiError("PUT failed", status_code=500)
        for entry in self.entries:
            if entry.id == entry_id:
                entry.title = title or ""
                entry.notes = notes


def _entry(entry_id: str, day: str, **fields: Any) -> OutfitEntry:
    return OutfitEntry(id=entry_id, title=fields.pop("title", entry_id), date=f"{day}T09:00:00Z", **fields)


def _clock(day: str):
    return lambda: datetime.fromisoformat(f"{day}T12:00:00").replace(tzinfo=timezone.utc)


@pytest.fixture()
def view() -> SnapshotGalleryView:
    return SnapshotGalleryView()


@pytest.fixture()
def client() -> _FakeClient:
    return _FakeClient(
        [
            _entry("a", "2024-03-05"),
            _entry("b", "2024-03-01"),
            _entry("c", "2024-03-03"),
            _entry("d", "2024-03-03"),
        ]
    )


@pytest.fixture()
def gallery(client: _FakeClient, view: SnapshotGalleryView) -> GalleryController:
    return GalleryController(client, view, clock=_clock("2030-01-01"))


def test_load_builds_sorted_distinct_index(gallery: GalleryController, view: SnapshotGalleryView) -> None:
    assert gallery.state is GalleryState.UNINITIALIZED
    assert gallery.load() is True

    assert gallery.state is GalleryState.READY
    assert gallery.dates == ["2024-03-01", "2024-03-03", "2024-03-05"]
    assert view.date_options == gallery.dates
    assert gallery.selected_date == "2024-03-01"
    assert view.shown_date == "2024-03-01"
    assert [card.entry_id for card in view.cards] == ["b"]


def test_load_prefers_today_when_present(client: _FakeClient, view: SnapshotGalleryView) -> None:
    gallery = GalleryController(client, view, clock=_clock("2024-03-03"))
    gallery.load()
    assert gallery.selected_date == "2024-03-03"
    assert [card.entry_id for card in view.cards] == ["c", "d"]


def test_reload_keeps_previous_selection(gallery: GalleryController) -> None:
    gallery.load()
    gallery.next_date()
    gallery.load()
    assert gallery.selected_date == "2024-03-03"


def test_empty_collection_falls_back_to_today(view: SnapshotGalleryView) -> None:
    gallery = GalleryController(_FakeClient(), view, clock=_clock("2024-06-30"))
    gallery.load()

    assert gallery.dates == []
    assert gallery.selected_date == "2024-06-30"
    assert view.empty_message == EMPTY_STATE_MESSAGE

    gallery.next_date()
    gallery.prev_date()
    assert gallery.selected_date == "2024-06-30"


def test_failed_load_leaves_state_untouched(
    gallery: GalleryController, client: _FakeClient, view: SnapshotGalleryView
) -> None:
    gallery.load()
    client.entries = []
    client.fail_list = True

    assert gallery.load() is False

    assert gallery.state is GalleryState.READY
    assert gallery.dates == ["2024-03-01", "2024-03-03", "2024-03-05"]
    assert len(gallery.entries) == 4
    assert view.messages == [LOAD_FAILED_MESSAGE]


def test_first_load_failure_stays_uninitialized(client: _FakeClient, view: SnapshotGalleryView) -> None:
    client.fail_list = True
    gallery = GalleryController(client, view)
    gallery.load()
    assert gallery.state is GalleryState.UNINITIALIZED
    assert view.shown_date is None


def test_next_is_clamped_at_last_date(gallery: GalleryController) -> None:
    gallery.load()
    for _ in range(10):
        gallery.on_key("ArrowRight")
        assert gallery.selected_date in gallery.dates

    assert gallery.selected_date == "2024-03-05"
    gallery.next_date()
    assert gallery.selected_date == "2024-03-05"


def test_prev_is_clamped_at_first_date(gallery: GalleryController) -> None:
    gallery.load()
    gallery.on_key("ArrowLeft")
    assert gallery.selected_date == "2024-03-01"
    gallery.on_key("ArrowRight")
    gallery.on_key("ArrowLeft")
    assert gallery.selected_date == "2024-03-01"
    gallery.on_key("Escape")
    assert gallery.selected_date == "2024-03-01"


def test_load_date_inserts_new_day_in_order(gallery: GalleryController, view: SnapshotGalleryView) -> None:
    gallery.load()

    assert gallery.load_date("2024-03-02") is True

    assert gallery.dates == ["2024-03-01", "2024-03-02", "2024-03-03", "2024-03-05"]
    assert view.date_options == gallery.dates
    assert view.empty_message == EMPTY_STATE_MESSAGE
    gallery.next_date()
    assert gallery.selected_date == "2024-03-03"
    assert gallery.load_date("") is False


def test_dropdown_only_accepts_indexed_days(gallery: GalleryController) -> None:
    gallery.load()
    assert gallery.on_date_selected("2024-03-05") is True
    assert gallery.selected_date == "2024-03-05"
    assert gallery.on_date_selected("2024-04-01") is False
    assert gallery.selected_date == "2024-03-05"


def test_date_picker_keeps_selection_in_index(gallery: GalleryController) -> None:
    gallery.load()
    gallery.on_date_picked("2024-02-20")
    assert gallery.selected_date == "2024-02-20"
    assert gallery.selected_date in gallery.dates


def test_render_cards_fallbacks() -> None:
    entries = [OutfitEntry(id="x", title="", date="2024-03-01T00:00:00Z", rating=3, brands=["A"])]

    (card,) = render_cards(entries, "2024-03-01")

    assert card.title == "Untitled"
    assert card.notes == "No notes"
    assert card.image is None
    assert card.stars == "★★★☆☆"
    assert card.brands == ("A",)
    assert render_cards(entries, "2024-03-02") == []


def test_card_html_escapes_entry_text(view: SnapshotGalleryView) -> None:
    client = _FakeClient([_entry("x", "2024-03-01", title="<b>Bold</b>", notes="a & b")])
    gallery = GalleryController(client, view, clock=_clock("2024-03-01"))
    gallery.load()

    markup = view.html()
    assert "&lt;b&gt;Bold&lt;/b&gt;" in markup
    assert "a &amp; b" in markup
    assert '<div class="no-photo">No image</div>' in markup


def test_delete_removes_every_entry_on_selected_day(
    client: _FakeClient, view: SnapshotGalleryView
) -> None:
    gallery = GalleryController(client, view, clock=_clock("2024-03-03"))
    gallery.load()

    assert gallery.delete_selected() == 2

    assert view.questions == ["Delete 2 outfit(s) for 2024-03-03?"]
    assert [call for call in client.calls if call[0] == "delete"] == [("delete", "c"), ("delete", "d")]
    assert gallery.dates == ["2024-03-01", "2024-03-05"]
    assert view.messages[-1] == DELETED_MESSAGE


def test_delete_requires_confirmation(client: _FakeClient) -> None:
    view = SnapshotGalleryView(confirm_policy=lambda _: False)
    gallery = GalleryController(client, view)
    gallery.load()

    assert gallery.delete_selected() == 0
    assert not [call for call in client.calls if call[0] == "delete"]


def test_delete_partial_failure_is_not_rolled_back(client: _FakeClient, view: SnapshotGalleryView) -> None:
    client.fail_delete_ids = {"c"}
    gallery = GalleryController(client, view, clock=_clock("2024-03-03"))
    gallery.load()

    assert gallery.delete_selected() == 1

    assert [entry.id for entry in gallery.matches("2024-03-03")] == ["c"]
    assert view.messages[-1] == DELETED_MESSAGE


def test_delete_with_nothing_selected_for_day(gallery: GalleryController, view: SnapshotGalleryView) -> None:
    gallery.load()
    gallery.load_date("2024-05-05")
    assert gallery.delete_selected() == 0
    assert view.messages == [NOTHING_TO_DELETE_MESSAGE]


def test_edit_with_multiple_matches_sends_nothing(client: _FakeClient, view: SnapshotGalleryView) -> None:
    edits: List[OutfitEntry] = []
    view.edit_policy = lambda entry: edits.append(entry) or EditRequest(title="nope")
    gallery = GalleryController(client, view, clock=_clock("2024-03-03"))
    gallery.load()
    calls_before = list(client.calls)

    assert gallery.edit_selected() is False

    assert view.messages == [MULTI_EDIT_MESSAGE]
    assert client.calls == calls_before
    assert edits == []


def test_edit_single_match_updates_and_reloads(client: _FakeClient, view: SnapshotGalleryView) -> None:
    view.edit_policy = lambda entry: EditRequest(title=entry.title + " (edited)", notes="new notes")
    gallery = GalleryController(client, view, clock=_clock("2024-03-05"))
    gallery.load()

    assert gallery.edit_selected() is True

    assert ("update", "a", "a (edited)", "new notes") in client.calls
    assert client.calls[-1] == ("list",)
    assert view.cards[0].title == "a (edited)"
    assert view.cards[0].notes == "new notes"
    assert gallery.selected_date == "2024-03-05"


def test_edit_cancel_and_failure(client: _FakeClient, view: SnapshotGalleryView) -> None:
    gallery = GalleryController(client, view, clock=_clock("2024-03-05"))
    gallery.load()

    assert gallery.edit_selected() is False
    assert not [call for call in client.calls if call[0] == "update"]

    view.edit_policy = lambda entry: EditRequest(title="x")
    client.fail_update = True
    assert gallery.edit_selected() is False
    assert view.messages[-1] == UPDATE_FAILED_MESSAGE
    assert gallery.state is GalleryState.READY
