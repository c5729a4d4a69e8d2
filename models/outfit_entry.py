"""Outfit entry data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from logic.dates import normalize_day
from logic.ratings import clamp_rating


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def unique_tags(values: Iterable[Any]) -> List[str]:
    """Trim tags, drop blanks and keep the first occurrence of each (case-sensitive)."""

    tags: List[str] = []
    for value in values:
        tag = str(value).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


@dataclass
class OutfitEntry:
    """One logged outfit as held by the client after a load."""

    id: str
    title: str
    date: Optional[str] = None
    photo: Optional[str] = None
    brands: List[str] = field(default_factory=list)
    occasion: Optional[str] = None
    rating: int = 0
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        self.brands = unique_tags(_ensure_list(self.brands))
        self.rating = clamp_rating(self.rating)

    @property
    def day(self) -> Optional[str]:
        """Calendar day (``YYYY-MM-DD``, UTC) the entry is grouped under."""

        return normalize_day(self.date)


def from_payload(payload: Dict[str, Any]) -> OutfitEntry:
    """Build an :class:`OutfitEntry` from a loose backend document.

    Older versions of the form posted ``name`` and ``image`` and the first
    gallery read ``photoURL``; those keys are accepted as fallbacks.
    """

    if payload.get("id") in (None, ""):
        raise ValueError("Outfit payload is missing its id")

    title = payload.get("title")
    if title is None:
        title = payload.get("name")
    photo = payload.get("photo") or payload.get("image") or payload.get("photoURL")

    return OutfitEntry(
        id=str(payload["id"]),
        title=str(title or ""),
        date=payload.get("date"),
        photo=photo,
        brands=_ensure_list(payload.get("brands")),
        occasion=payload.get("occasion"),
        rating=payload.get("rating") or 0,
        notes=payload.get("notes"),
    )


__all__ = ["OutfitEntry", "from_payload", "unique_tags"]
