"""Date-indexed gallery controller.

Keeps a day-granular index over the whole outfit collection and shows one
day's entries at a time. Every mutation is followed by a full reload rather
than a local patch. Handlers run to completion one at a time, so a reload
always applies the snapshot it fetched and the last one to finish wins.
"""

from __future__ import annotations

import bisect
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from controllers.cards import EMPTY_STATE_MESSAGE, entries_for_day, render_cards
from controllers.views import GalleryView
from logic.dates import Clock, normalize_day, today
from models.outfit_entry import OutfitEntry
from outfit_log.logging_config import get_logger, log_event, operation_context
from tools.outfit_api_client import OutfitApiClient, OutfitApiError

LOGGER = get_logger(__name__)

LOAD_FAILED_MESSAGE = "Could not load outfits. Please try again."
NOTHING_TO_DELETE_MESSAGE = "No outfits to delete for this date."
DELETED_MESSAGE = "Deleted."
NOTHING_TO_EDIT_MESSAGE = "No outfit to edit for this date."
MULTI_EDIT_MESSAGE = (
    "Multiple outfits found for this date; editing one of several entries is not supported."
)
UPDATED_MESSAGE = "Updated"
UPDATE_FAILED_MESSAGE = "Update failed"


class GalleryState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    LOADING = "LOADING"
    READY = "READY"


class GalleryController:
    """Owns the cached collection, the sorted day index and the selected day."""

    def __init__(
        self,
        client: OutfitApiClient,
        view: GalleryView,
        clock: Clock | None = None,
    ) -> None:
        self.client = client
        self.view = view
        self.clock = clock
        self.state = GalleryState.UNINITIALIZED
        self.entries: List[OutfitEntry] = []
        self.dates: List[str] = []
        self.selected_date: Optional[str] = None

    def handlers(self) -> Dict[str, Callable[..., Any]]:
        """Event name to handler mapping for the page to bind."""

        return {
            "load": self.load,
            "load_date": self.load_date,
            "date_selected": self.on_date_selected,
            "date_picked": self.on_date_picked,
            "prev": self.prev_date,
            "next": self.next_date,
            "key": self.on_key,
            "delete": self.delete_selected,
            "edit": self.edit_selected,
        }

    def today(self) -> str:
        return today(self.clock)

    # Loading

    def load(self) -> bool:
        """Refetch everything and re-render. Returns False if the fetch failed."""

        previous_state = self.state
        self.state = GalleryState.LOADING
        with operation_context("gallery.load"):
            try:
                entries = self.client.list_entries()
            except OutfitApiError as exc:
                self.state = previous_state
                log_event(LOGGER, logging.ERROR, "gallery_load_failed", status_code=exc.status_code, error=str(exc))
                self.view.notify(LOAD_FAILED_MESSAGE)
                return False

            self.entries = entries
            self.dates = sorted({entry.day for entry in entries if entry.day})
            self.selected_date = self._initial_date()
            self.view.render_date_options(list(self.dates))
            self.render_for_date(self.selected_date)
            self.state = GalleryState.READY
            log_event(
                LOGGER,
                logging.INFO,
                "gallery_loaded",
                entry_count=len(self.entries),
                date_count=len(self.dates),
                selected_date=self.selected_date,
            )
            return True

    def _initial_date(self) -> str:
        current_day = self.today()
        if self.selected_date and self.selected_date in self.dates:
            return self.selected_date
        if current_day in self.dates:
            return current_day
        if self.dates:
            return self.dates[0]
        return current_day

    # Rendering

    def matches(self, day: Optional[str] = None) -> List[OutfitEntry]:
        target = day or self.selected_date
        if not target:
            return []
        return entries_for_day(self.entries, target)

    def render_for_date(self, day: str) -> None:
        self.selected_date = day
        self.view.show_date(day)
        cards = render_cards(self.entries, day)
        if not cards:
            self.view.render_empty(EMPTY_STATE_MESSAGE)
            return
        self.view.render_cards(cards)

    # Navigation

    def load_date(self, value: str) -> bool:
        """Show a picked day, adding it to the index if it has no entries yet."""

        day = normalize_day(value)
        if day is None:
            log_event(LOGGER, logging.WARNING, "invalid_date_ignored", value=value)
            return False
        if day not in self.dates:
            bisect.insort(self.dates, day)
            self.view.render_date_options(list(self.dates))
        self.render_for_date(day)
        return True

    def on_date_selected(self, value: str) -> bool:
        """Dropdown change; only days already in the index are offered."""

        day = normalize_day(value)
        if day is None or day not in self.dates:
            return False
        self.render_for_date(day)
        return True

    def on_date_picked(self, value: str) -> bool:
        return self.load_date(value)

    def _set_index(self, index: int) -> None:
        if not self.dates:
            return
        index = max(0, min(len(self.dates) - 1, index))
        self.render_for_date(self.dates[index])

    def _current_index(self) -> int:
        try:
            return self.dates.index(self.selected_date)
        except ValueError:
            return -1

    def prev_date(self) -> None:
        index = self._current_index()
        if index > 0:
            self._set_index(index - 1)

    def next_date(self) -> None:
        index = self._current_index()
        if index < len(self.dates) - 1:
            self._set_index(index + 1)

    def on_key(self, key: str) -> None:
        if key == "ArrowLeft":
            self.prev_date()
        elif key == "ArrowRight":
            self.next_date()

    # Mutations

    def delete_selected(self) -> int:
        """Delete every entry on the selected day after confirmation.

        Failures on individual entries are logged and skipped; the reload shows
        whatever actually went away. Returns the number of entries deleted.
        """

        if not self.selected_date:
            return 0
        day = self.selected_date
        targets = self.matches(day)
        if not targets:
            self.view.notify(NOTHING_TO_DELETE_MESSAGE)
            return 0
        if not self.view.confirm(f"Delete {len(targets)} outfit(s) for {day}?"):
            return 0

        deleted = 0
        with operation_context("gallery.delete", day=day, count=len(targets)):
            for entry in targets:
                try:
                    self.client.delete_entry(entry.id)
                except OutfitApiError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        "outfit_delete_failed",
                        outfit_id=entry.id,
                        status_code=exc.status_code,
                    )
                    continue
                deleted += 1
            self.load()
        self.view.notify(DELETED_MESSAGE)
        return deleted

    def edit_selected(self) -> bool:
        """Edit title and notes of the single entry on the selected day."""

        targets = self.matches()
        if not targets:
            self.view.notify(NOTHING_TO_EDIT_MESSAGE)
            return False
        if len(targets) > 1:
            self.view.notify(MULTI_EDIT_MESSAGE)
            return False

        entry = targets[0]
        edit = self.view.request_edit(entry)
        if edit is None:
            return False

        with operation_context("gallery.edit", outfit_id=entry.id):
            try:
                self.client.update_entry(entry.id, title=edit.title, notes=edit.notes)
            except OutfitApiError as exc:
                log_event(LOGGER, logging.ERROR, "outfit_update_failed", outfit_id=entry.id, status_code=exc.status_code)
                self.view.notify(UPDATE_FAILED_MESSAGE)
                return False
            self.load()
        self.view.notify(UPDATED_MESSAGE)
        return True


__all__ = ["GalleryController", "GalleryState"]
