"""HTTP client for the outfit backend (``/outfits`` REST contract)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from models.outfit_entry import OutfitEntry, from_payload
from tools.observability import instrument_call

logger = logging.getLogger(__name__)

OUTFITS_PATH = "/outfits"


class OutfitApiError(RuntimeError):
    """Raised when the backend rejects a request or cannot be reached.

    ``status_code`` is ``None`` for transport failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


def _status_text(response: Any) -> str:
    # requests exposes ``reason``, httpx (and the FastAPI test client) ``reason_phrase``.
    return getattr(response, "reason", None) or getattr(response, "reason_phrase", None) or ""


def _error_detail(response: Any) -> Any:
    """Best-effort JSON error body, falling back to the status text."""

    try:
        body = response.json()
    except ValueError:
        return _status_text(response) or f"HTTP {response.status_code}"
    if isinstance(body, dict) and "detail" in body:
        return body["detail"]
    return body


class OutfitApiClient:
    """Thin wrapper around the backend's list/create/update/delete endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        session: Any | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, payload: Dict[str, Any] | None = None) -> Any:
        url = self._url(path)
        headers = {"Accept": "application/json"}
        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error("Network error calling outfit API", extra={"method": method, "url": url, "error": str(exc)})
            raise OutfitApiError(f"Network error calling {method} {path}: {exc}") from exc

        if not 200 <= response.status_code < 300:
            detail = _error_detail(response)
            logger.warning(
                "Non-success status from outfit API",
                extra={"method": method, "url": url, "status_code": response.status_code},
            )
            raise OutfitApiError(
                f"{method} {path} failed: HTTP {response.status_code} {detail}",
                status_code=response.status_code,
                detail=detail,
            )
        return response

    @instrument_call("list_entries")
    def list_entries(self) -> List[OutfitEntry]:
        """Fetch the whole collection."""

        response = self._request("GET", OUTFITS_PATH)
        try:
            documents = response.json()
        except ValueError as exc:
            raise OutfitApiError("Outfit list response was not JSON", status_code=response.status_code) from exc
        if not isinstance(documents, list):
            raise OutfitApiError("Outfit list response was not an array", status_code=response.status_code)
        entries = []
        for document in documents:
            try:
                entries.append(from_payload(document))
            except (TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed outfit document", extra={"document": document})
        return entries

    @instrument_call("create_entry")
    def create_entry(self, payload: Dict[str, Any]) -> OutfitEntry:
        """Create an entry; returns it with the backend-assigned id."""

        response = self._request("POST", OUTFITS_PATH, payload)
        try:
            return from_payload(response.json())
        except (ValueError, AttributeError, TypeError) as exc:
            raise OutfitApiError("Create response did not contain an outfit", status_code=response.status_code) from exc

    @instrument_call("update_entry")
    def update_entry(self, entry_id: str, title: Optional[str], notes: Optional[str]) -> None:
        """Change only the title and notes of one entry."""

        self._request("PUT", f"{OUTFITS_PATH}/{entry_id}", {"title": title, "notes": notes})

    @instrument_call("delete_entry")
    def delete_entry(self, entry_id: str) -> None:
        self._request("DELETE", f"{OUTFITS_PATH}/{entry_id}")


__all__ = ["OUTFITS_PATH", "OutfitApiClient", "OutfitApiError"]
