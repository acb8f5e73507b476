"""Show records and the providers that fetch them."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

import httpx
import yaml

from .errors import ShowFetchError, ShowNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShowRecord:
    id: Optional[int]
    phrases: Tuple[str, ...]
    center_square: Optional[str] = None
    show_title: str = ""
    game_title: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "ShowRecord":
        """Build from the record service's camelCase JSON (snake_case also accepted)."""
        if not isinstance(data, Mapping):
            raise ValueError("Show payload must be a mapping")
        phrases = data.get("phrases") or []
        if not isinstance(phrases, list):
            raise ValueError("Show 'phrases' must be a list")
        raw_id = data.get("id")
        center = data.get("centerSquare", data.get("center_square"))
        game_title = data.get("gameTitle", data.get("game_title"))
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            phrases=tuple(str(p) for p in phrases if p is not None),
            center_square=str(center) if center is not None else None,
            show_title=str(data.get("showTitle", data.get("show_title")) or ""),
            game_title=str(game_title) if game_title is not None else None,
        )


class ShowProvider(Protocol):
    async def get_show(self, show_id: int) -> ShowRecord:
        """Return the record or raise ShowNotFoundError / ShowFetchError."""
        ...


@dataclass
class InMemoryShowProvider:
    shows: Dict[int, ShowRecord] = field(default_factory=dict)
    calls: List[int] = field(default_factory=list)

    def add(self, record: ShowRecord) -> None:
        if record.id is None:
            raise ValueError("record needs an id to be stored")
        self.shows[record.id] = record

    async def get_show(self, show_id: int) -> ShowRecord:
        self.calls.append(show_id)
        try:
            return self.shows[show_id]
        except KeyError:
            raise ShowNotFoundError(show_id) from None


class HttpShowProvider:
    """Fetches `GET {base_url}/api/shows/{id}` once; no retry."""

    def __init__(
        self,
        base_url: str = "",
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    async def get_show(self, show_id: int) -> ShowRecord:
        url = f"{self.base_url}/api/shows/{show_id}"
        if self._client is not None:
            return await self._fetch(self._client, url, show_id)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await self._fetch(client, url, show_id)

    async def _fetch(self, client: httpx.AsyncClient, url: str, show_id: int) -> ShowRecord:
        logger.debug("GET %s", url)
        try:
            response = await client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as e:
            raise ShowFetchError("Network error", status=0) from e

        if response.status_code == 404:
            raise ShowNotFoundError(show_id)
        if response.is_error:
            raise ShowFetchError(response.reason_phrase or "Request failed", status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ShowFetchError("Invalid JSON in show response", status=response.status_code) from e
        if data is None:
            raise ShowNotFoundError(show_id)
        try:
            return ShowRecord.from_payload(data)
        except (TypeError, ValueError) as e:
            raise ShowFetchError(f"Malformed show record: {e}", status=response.status_code) from e


def load_show_file(path: Path) -> ShowRecord:
    """Read a show record from a YAML or JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Show file not found: {path}")
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported show file extension: {suffix}")
    if not isinstance(data, dict):
        raise ValueError("Top-level show file must be a mapping")
    return ShowRecord.from_payload(data)
