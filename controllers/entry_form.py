"""Entry form controller: draft state, tag/rating widgets and submission."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from controllers.views import FormFields, FormView
from logic.dates import day_to_timestamp
from logic.ratings import STAR_COUNT
from logic.validation import OutfitCreate
from models.occasions import OTHER_OCCASION, is_known_occasion, resolve_occasion
from models.outfit_entry import OutfitEntry
from outfit_log.logging_config import get_logger, log_event, operation_context
from tools.image_data import ImageReadError, read_image_as_data_uri
from tools.outfit_api_client import OutfitApiClient, OutfitApiError

LOGGER = get_logger(__name__)

COMMIT_KEYS = ("Enter", ",")
MISSING_TITLE_MESSAGE = "Please provide a title/name for the entry."
CREATED_MESSAGE = "Outfit saved."
UNREADABLE_CREATE_MESSAGE = "Outfit saved, but the server reply could not be read."


@dataclass
class DraftState:
    """Unsaved form input that lives outside the plain form fields."""

    brands: List[str] = field(default_factory=list)
    occasion_choice: str = ""
    occasion_custom: Optional[str] = None
    rating: int = 0
    image_data: Optional[str] = None

    @property
    def occasion(self) -> Optional[str]:
        return resolve_occasion(self.occasion_choice, self.occasion_custom)


class EntryFormController:
    """Builds one outfit entry from user input and submits it."""

    def __init__(
        self,
        client: OutfitApiClient,
        view: FormView,
        on_created: Callable[[], Any] | None = None,
    ) -> None:
        self.client = client
        self.view = view
        self.on_created = on_created
        self.draft = DraftState()

    def handlers(self) -> Dict[str, Callable[..., Any]]:
        """Event name to handler mapping for the page to bind."""

        return {
            "image_selected": self.on_image_selected,
            "brand_key": self.on_brand_key,
            "brand_blur": self.on_brand_blur,
            "remove_brand": self.remove_brand,
            "occasion_changed": self.on_occasion_changed,
            "occasion_key": self.on_occasion_key,
            "occasion_blur": self.on_occasion_blur,
            "star_clicked": self.on_star_clicked,
            "reset": self.on_reset,
            "submit": self.on_submit,
        }

    # Image

    def on_image_selected(self, path: str | Path | None) -> None:
        """Load the chosen file into the draft, or clear it when nothing is chosen."""

        if not path:
            self._clear_image()
            return
        try:
            image_data = read_image_as_data_uri(path)
        except ImageReadError as exc:
            log_event(LOGGER, logging.WARNING, "image_read_failed", error=str(exc))
            self._clear_image()
            self.view.notify(str(exc))
            return
        self.draft.image_data = image_data
        self.view.render_preview(image_data)

    def _clear_image(self) -> None:
        self.draft.image_data = None
        self.view.render_preview(None)

    # Brand tags

    def add_brand(self, value: str) -> bool:
        """Append a trimmed, non-empty, unseen tag. Returns whether the list changed."""

        tag = value.strip()
        if not tag or tag in self.draft.brands:
            return False
        if tag == self.draft.occasion:
            return False
        self.draft.brands.append(tag)
        self.view.render_tags(list(self.draft.brands))
        return True

    def remove_brand(self, index: int) -> None:
        if not 0 <= index < len(self.draft.brands):
            return
        del self.draft.brands[index]
        self.view.render_tags(list(self.draft.brands))

    def on_brand_key(self, key: str, text: str) -> bool:
        """Commit on Enter or comma. True means the view should clear the input."""

        if key not in COMMIT_KEYS:
            return False
        self.add_brand(text.replace(",", ""))
        return True

    def on_brand_blur(self, text: str) -> bool:
        if not text.strip():
            return False
        self.add_brand(text)
        return True

    # Occasion

    def on_occasion_changed(self, choice: str) -> None:
        if not is_known_occasion(choice):
            log_event(LOGGER, logging.WARNING, "unknown_occasion_ignored", choice=choice)
            return
        self.draft.occasion_choice = choice
        self.view.show_custom_occasion(choice == OTHER_OCCASION)
        self._drop_occasion_brand()

    def commit_custom_occasion(self, value: str) -> None:
        self.draft.occasion_custom = value.strip() or None
        self._drop_occasion_brand()

    def _drop_occasion_brand(self) -> None:
        occasion = self.draft.occasion
        if occasion and occasion in self.draft.brands:
            self.draft.brands.remove(occasion)
            self.view.render_tags(list(self.draft.brands))

    def on_occasion_key(self, key: str, text: str) -> bool:
        """Same commit triggers as brand tags; the custom field keeps its text."""

        if key not in COMMIT_KEYS:
            return False
        self.commit_custom_occasion(text.replace(",", ""))
        return False

    def on_occasion_blur(self, text: str) -> None:
        self.commit_custom_occasion(text)

    # Rating

    def on_star_clicked(self, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            return
        if not 1 <= value <= STAR_COUNT:
            return
        self.draft.rating = value
        self.view.render_stars(value)

    # Submission

    def clear_draft(self) -> None:
        self.draft = DraftState()
        self.view.render_tags([])
        self.view.render_preview(None)
        self.view.render_stars(0)
        self.view.show_custom_occasion(False)

    def on_reset(self) -> None:
        """Discard everything typed so far; no request is made."""

        self.clear_draft()
        self.view.reset_fields()

    def build_payload(self, fields: FormFields) -> Dict[str, Any]:
        """Assemble the create body from the form fields and the draft."""

        if fields.occasion and is_known_occasion(fields.occasion):
            self.draft.occasion_choice = fields.occasion
        if self.draft.occasion_choice == OTHER_OCCASION and fields.occasion_other.strip():
            self.commit_custom_occasion(fields.occasion_other)
        occasion = self.draft.occasion
        payload = OutfitCreate(
            title=fields.title,
            date=day_to_timestamp(fields.date),
            photo=self.draft.image_data,
            brands=[brand for brand in self.draft.brands if brand != occasion],
            occasion=occasion,
            rating=self.draft.rating,
            notes=fields.notes.strip() or None,
        )
        return payload.model_dump()

    def on_submit(self, fields: FormFields) -> Optional[OutfitEntry]:
        """Validate and create the entry. Returns it on success, ``None`` otherwise."""

        if not fields.title.strip():
            self.view.notify(MISSING_TITLE_MESSAGE)
            return None

        with operation_context("form.submit"):
            payload = self.build_payload(fields)
            try:
                created = self.client.create_entry(payload)
            except OutfitApiError as exc:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "outfit_create_failed",
                    status_code=exc.status_code,
                    error=str(exc),
                )
                if exc.status_code is not None and 200 <= exc.status_code < 300:
                    self._finish_created(UNREADABLE_CREATE_MESSAGE)
                    return None
                self.view.notify(f"Could not save outfit: {exc.detail or exc}")
                return None

            log_event(LOGGER, logging.INFO, "outfit_created", outfit_id=created.id, day=created.day)
            self._finish_created(CREATED_MESSAGE)
            return created

    def _finish_created(self, message: str) -> None:
        self.clear_draft()
        self.view.reset_fields()
        self.view.notify(message)
        if self.on_created is not None:
            self.on_created()


__all__ = ["DraftState", "EntryFormController", "MISSING_TITLE_MESSAGE"]
