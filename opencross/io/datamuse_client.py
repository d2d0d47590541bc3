"""Lightweight HTTP client for the Datamuse word-finding API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from ..core.exceptions import LexiconError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class DatamuseAPIError(LexiconError):
    """Raised when a Datamuse request fails or returns an unexpected payload."""


class DatamuseClient:
    """Minimal client around the public Datamuse ``/words`` endpoint."""

    API_BASE = "https://api.datamuse.com/words"

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def words(self, **params: Any) -> List[Dict[str, Any]]:
        """Run one query and return the raw result items.

        Definitions are always requested (``md=d``) since every candidate
        needs a clue.
        """

        query = {"md": "d", **params}
        try:
            response = self._session.get(
                self.API_BASE,
                params=query,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DatamuseAPIError(f"Datamuse request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise DatamuseAPIError("Datamuse response is not valid JSON") from exc
        if not isinstance(data, list):
            LOGGER.warning("Unexpected Datamuse payload for %s: %r", query, data)
            raise DatamuseAPIError("Datamuse response is not a list")
        LOGGER.debug("Datamuse %s returned %s items", query, len(data))
        return data

    @staticmethod
    def first_definition(item: Dict[str, Any]) -> Optional[str]:
        defs = item.get("defs") or []
        for definition in defs:
            if isinstance(definition, str) and definition.strip():
                return definition
        return None
