"""Pydantic schemas for outfit payloads crossing the HTTP boundary."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from logic.dates import normalize_day
from models.outfit_entry import unique_tags


class OutfitCreate(BaseModel):
    """Body of ``POST /outfits``: a full entry minus its id."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    date: Optional[str] = None
    photo: Optional[str] = None
    brands: List[str] = Field(default_factory=list)
    occasion: Optional[str] = None
    rating: int = Field(default=0, ge=0, le=5)
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _strip_title(cls, title: str) -> str:
        stripped = title.strip()
        if not stripped:
            raise ValueError("title must not be blank")
        return stripped

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value: Optional[str]) -> Optional[str]:
        if value in (None, ""):
            return None
        if normalize_day(value) is None:
            raise ValueError(f"date is not an ISO-8601 timestamp: {value!r}")
        return value

    @field_validator("brands", mode="before")
    @classmethod
    def _dedupe_brands(cls, value: Any) -> List[str]:
        if value is None:
            return []
        return unique_tags(value)

    @field_validator("occasion", "notes", "photo")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class OutfitUpdate(BaseModel):
    """Body of ``PUT /outfits/{id}``; only title and notes are mutable."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _reject_null_title(cls, title: Optional[str]) -> str:
        if title is None:
            raise ValueError("title may be changed but not removed")
        return title

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly present in the request."""

        return self.model_dump(exclude_unset=True)


class OutfitRecord(BaseModel):
    """Stored entry as returned by the backend.

    Looser than :class:`OutfitCreate`: edits may blank the title and documents
    written by older clients may lack optional fields.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    title: str = ""
    date: Optional[str] = None
    photo: Optional[str] = None
    brands: List[str] = Field(default_factory=list)
    occasion: Optional[str] = None
    rating: int = 0
    notes: Optional[str] = None


__all__ = ["OutfitCreate", "OutfitRecord", "OutfitUpdate"]
