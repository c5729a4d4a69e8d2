"""Outfit Log page bootstrap."""

from __future__ import annotations

from typing import Any, Callable, Dict

from controllers.entry_form import EntryFormController
from controllers.gallery import GalleryController
from controllers.views import FormView, GalleryView
from logic.dates import Clock
from outfit_log.config import OutfitLogConfig
from outfit_log.logging_config import configure_logging, get_logger
from tools.outfit_api_client import OutfitApiClient
from views.snapshot import SnapshotFormView, SnapshotGalleryView

LOGGER = get_logger(__name__)


class OutfitLogApp:
    """Wires the API client, both controllers and their views for one page session."""

    def __init__(
        self,
        config: OutfitLogConfig | None = None,
        form_view: FormView | None = None,
        gallery_view: GalleryView | None = None,
        session: Any | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config or OutfitLogConfig.from_env()
        configure_logging()

        self.client = OutfitApiClient(
            base_url=self.config.api_base_url,
            timeout_seconds=self.config.request_timeout_seconds,
            session=session,
        )
        self.form_view = form_view or SnapshotFormView()
        self.gallery_view = gallery_view or SnapshotGalleryView()
        self.gallery = GalleryController(self.client, self.gallery_view, clock=clock)
        self.form = EntryFormController(self.client, self.form_view, on_created=self.gallery.load)

    def start(self) -> bool:
        """Initial gallery load on page entry."""

        LOGGER.info("Starting outfit log page", extra={"api_base_url": self.config.api_base_url})
        return self.gallery.load()

    def handlers(self) -> Dict[str, Callable[..., Any]]:
        """All page event handlers keyed ``form.<event>`` / ``gallery.<event>``."""

        registry: Dict[str, Callable[..., Any]] = {}
        for prefix, controller in (("form", self.form), ("gallery", self.gallery)):
            for event, handler in controller.handlers().items():
                registry[f"{prefix}.{event}"] = handler
        return registry

    def dispatch(self, event: str, *args: Any, **kwargs: Any) -> Any:
        """Route one page event to its handler."""

        handlers = self.handlers()
        if event not in handlers:
            raise KeyError(f"Unknown page event: {event}")
        return handlers[event](*args, **kwargs)


__all__ = ["OutfitLogApp"]
