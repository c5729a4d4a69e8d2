"""Occasion vocabulary offered by the entry form.

The form shows a fixed list of occasions. Picking the ``Other`` sentinel
reveals a free-text field whose committed value becomes the occasion instead.
"""

from typing import Optional, Tuple

OTHER_OCCASION = "Other"

OCCASIONS: Tuple[str, ...] = (
    "Casual",
    "Work",
    "Formal",
    "Party",
    "Date night",
    "Sport",
    "Travel",
    OTHER_OCCASION,
)


def is_known_occasion(choice: str) -> bool:
    """Return True for a vocabulary value or the empty "no occasion" choice."""

    return choice == "" or choice in OCCASIONS


def resolve_occasion(choice: Optional[str], custom: Optional[str] = None) -> Optional[str]:
    """Return the effective occasion for a select value and committed custom text."""

    if not choice:
        return None
    if choice == OTHER_OCCASION:
        text = (custom or "").strip()
        return text or None
    return choice


__all__ = ["OCCASIONS", "OTHER_OCCASION", "is_known_occasion", "resolve_occasion"]
