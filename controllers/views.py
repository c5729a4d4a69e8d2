"""Rendering-surface interfaces the controllers draw through.

A page (or a test) supplies concrete views; the controllers never touch a
widget toolkit directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from controllers.cards import OutfitCard
    from models.outfit_entry import OutfitEntry


@dataclass(frozen=True)
class FormFields:
    """Plain form inputs read by the view at submit time."""

    title: str = ""
    date: str = ""
    occasion: str = ""
    occasion_other: str = ""
    notes: str = ""


@dataclass(frozen=True)
class EditRequest:
    """New title and notes collected for an edit."""

    title: str
    notes: Optional[str] = None


class FormView(ABC):
    """Surface the entry form controller renders into."""

    @abstractmethod
    def render_tags(self, brands: Sequence[str]) -> None:
        """Redraw brand chips; chip ``i`` removes position ``i``."""

    @abstractmethod
    def render_preview(self, image_data: Optional[str]) -> None:
        """Show the image preview, or the placeholder for ``None``."""

    @abstractmethod
    def render_stars(self, rating: int) -> None:
        """Redraw every star, filled up to ``rating``."""

    @abstractmethod
    def show_custom_occasion(self, visible: bool) -> None:
        """Reveal or hide the free-text occasion field."""

    @abstractmethod
    def reset_fields(self) -> None:
        """Clear title, date, occasion, notes and the file input."""

    @abstractmethod
    def notify(self, message: str) -> None:
        """Tell the user something."""


class GalleryView(ABC):
    """Surface the gallery controller renders into."""

    @abstractmethod
    def render_date_options(self, dates: Sequence[str]) -> None:
        """Refill the date dropdown."""

    @abstractmethod
    def show_date(self, day: str) -> None:
        """Point the date picker and dropdown at ``day``."""

    @abstractmethod
    def render_cards(self, cards: List["OutfitCard"]) -> None:
        """Replace the card area with ``cards``."""

    @abstractmethod
    def render_empty(self, message: str) -> None:
        """Replace the card area with the empty-state placeholder."""

    @abstractmethod
    def notify(self, message: str) -> None:
        """Tell the user something."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question."""

    @abstractmethod
    def request_edit(self, entry: "OutfitEntry") -> Optional[EditRequest]:
        """Collect a new title and notes, or ``None`` if the user cancels."""


__all__ = ["EditRequest", "FormFields", "FormView", "GalleryView"]
