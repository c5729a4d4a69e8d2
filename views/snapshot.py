"""In-memory rendering surfaces that keep the last rendered state.

They render HTML fragments so a page shell (or a test) can embed or inspect
exactly what the controllers drew.
"""

from __future__ import annotations

from html import escape
from typing import Callable, List, Optional, Sequence

from controllers.cards import OutfitCard
from controllers.views import EditRequest, FormView, GalleryView
from logic.ratings import EMPTY_STAR, FILLED_STAR, STAR_COUNT
from models.outfit_entry import OutfitEntry

NO_IMAGE = "No image"


def _always_yes(_: str) -> bool:
    return True


def _cancel_edit(_: OutfitEntry) -> Optional[EditRequest]:
    return None


def card_html(card: OutfitCard) -> str:
    """Markup for one gallery card; all entry text is escaped."""

    if card.image:
        image_html = f'<img src="{escape(card.image)}" alt="{escape(card.title)}"/>'
    else:
        image_html = f'<div class="no-photo">{NO_IMAGE}</div>'
    tags_html = ""
    if card.brands:
        chips = "".join(f'<span class="tag">{escape(brand)}</span>' for brand in card.brands)
        tags_html = f'<div class="card-tags">{chips}</div>'
    notes_html = escape(card.notes) if card.has_notes else f"<i>{escape(card.notes)}</i>"
    return (
        f'<article class="outfit-card" data-id="{escape(card.entry_id)}">'
        f'<div class="card-left">{image_html}{tags_html}</div>'
        '<div class="card-right">'
        f'<h3 class="card-title">{escape(card.title)}</h3>'
        f'<div class="card-date">{escape(card.day)}</div>'
        f'<div class="card-rating">{card.stars}</div>'
        f'<div class="card-notes">{notes_html}</div>'
        "</div></article>"
    )


class SnapshotFormView(FormView):
    """Form surface remembering tags, preview, stars and messages."""

    def __init__(self) -> None:
        self.tags: List[str] = []
        self.preview: Optional[str] = None
        self.stars: str = EMPTY_STAR * STAR_COUNT
        self.custom_occasion_visible = False
        self.reset_count = 0
        self.messages: List[str] = []

    def render_tags(self, brands: Sequence[str]) -> None:
        self.tags = list(brands)

    def render_preview(self, image_data: Optional[str]) -> None:
        self.preview = image_data

    def render_stars(self, rating: int) -> None:
        self.stars = "".join(
            FILLED_STAR if position <= rating else EMPTY_STAR for position in range(1, STAR_COUNT + 1)
        )

    def show_custom_occasion(self, visible: bool) -> None:
        self.custom_occasion_visible = visible

    def reset_fields(self) -> None:
        self.reset_count += 1

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def tags_html(self) -> str:
        return "".join(
            f'<span class="tag">{escape(tag)}<button type="button" title="Remove tag" data-index="{index}">×</button></span>'
            for index, tag in enumerate(self.tags)
        )

    def preview_html(self) -> str:
        if not self.preview:
            return NO_IMAGE
        return f'<img src="{escape(self.preview)}"/>'


class SnapshotGalleryView(GalleryView):
    """Gallery surface remembering the dropdown, selected day and card area."""

    def __init__(
        self,
        confirm_policy: Callable[[str], bool] = _always_yes,
        edit_policy: Callable[[OutfitEntry], Optional[EditRequest]] = _cancel_edit,
    ) -> None:
        self.confirm_policy = confirm_policy
        self.edit_policy = edit_policy
        self.date_options: List[str] = []
        self.shown_date: Optional[str] = None
        self.cards: List[OutfitCard] = []
        self.empty_message: Optional[str] = None
        self.messages: List[str] = []
        self.questions: List[str] = []

    def render_date_options(self, dates: Sequence[str]) -> None:
        self.date_options = list(dates)

    def show_date(self, day: str) -> None:
        self.shown_date = day

    def render_cards(self, cards: List[OutfitCard]) -> None:
        self.cards = list(cards)
        self.empty_message = None

    def render_empty(self, message: str) -> None:
        self.cards = []
        self.empty_message = message

    def notify(self, message: str) -> None:
        self.messages.append(message)

    def confirm(self, message: str) -> bool:
        self.questions.append(message)
        return self.confirm_policy(message)

    def request_edit(self, entry: OutfitEntry) -> Optional[EditRequest]:
        return self.edit_policy(entry)

    def html(self) -> str:
        """Markup of the card area as last rendered."""

        if self.empty_message is not None:
            return f'<div class="empty-card"><div class="empty-content">{escape(self.empty_message)}</div></div>'
        return "".join(card_html(card) for card in self.cards)


__all__ = ["SnapshotFormView", "SnapshotGalleryView", "card_html"]
