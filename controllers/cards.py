"""Pure card rendering for the gallery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from logic.ratings import star_glyphs
from models.outfit_entry import OutfitEntry

UNTITLED = "Untitled"
NO_NOTES = "No notes"
NO_DATE = "No date"
EMPTY_STATE_MESSAGE = "Your wardrobe is empty. Start by adding an outfit!"


@dataclass(frozen=True)
class OutfitCard:
    """Display-ready view of one entry."""

    entry_id: str
    title: str
    day: str
    stars: str
    notes: str
    has_notes: bool
    image: Optional[str] = None
    brands: Tuple[str, ...] = ()


def card_for(entry: OutfitEntry) -> OutfitCard:
    return OutfitCard(
        entry_id=entry.id,
        title=entry.title or UNTITLED,
        day=entry.day or NO_DATE,
        stars=star_glyphs(entry.rating),
        notes=entry.notes or NO_NOTES,
        has_notes=bool(entry.notes),
        image=entry.photo or None,
        brands=tuple(entry.brands),
    )


def entries_for_day(entries: Iterable[OutfitEntry], day: str) -> List[OutfitEntry]:
    return [entry for entry in entries if entry.day == day]


def render_cards(entries: Iterable[OutfitEntry], day: str) -> List[OutfitCard]:
    """Cards for every entry on ``day``; an empty list means show the empty state."""

    return [card_for(entry) for entry in entries_for_day(entries, day)]


__all__ = [
    "EMPTY_STATE_MESSAGE",
    "NO_NOTES",
    "OutfitCard",
    "UNTITLED",
    "card_for",
    "entries_for_day",
    "render_cards",
]
