#!/usr/bin/env python3
# navshell/services/record_index.py
from __future__ import annotations

"""
Record index adapters (titles + ids used for the dynamic directory).

The site API answers `GET /api/blogs` with:
    {"success": true, "data": [{"_id": "...", "title": "..."}, ...]}

Notes:
- Keep a conservative timeout; the shell shows a loading panel meanwhile.
- Any transport or shape problem surfaces as RecordIndexError.
"""

import json
import urllib.error
import urllib.request
from typing import Any, Iterable

from navshell.errors import RecordIndexError
from navshell.services.base import TitledRecord

USER_AGENT = "navshell/1.0 (+https://local)"


def _records_from_payload(payload: Any) -> list[TitledRecord]:
    """Normalize either the wrapped API payload or a bare list of records."""
    if isinstance(payload, dict):
        if payload.get("success") is False:
            raise RecordIndexError(payload.get("error") or "record index reported failure")
        payload = payload.get("data")
    if not isinstance(payload, list):
        raise RecordIndexError("unexpected record index payload")

    records: list[TitledRecord] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        ident = item.get("_id", item.get("id"))
        title = item.get("title")
        if ident is None or not title:
            continue
        records.append(TitledRecord(id=str(ident), title=str(title)))
    return records


class HttpRecordIndex:
    """Fetch titled records from the site's JSON API."""

    def __init__(self, base_url: str, path: str = "/api/blogs", *, timeout_seconds: float = 6.0) -> None:
        self.url = base_url.rstrip("/") + "/" + path.lstrip("/")
        self.timeout_seconds = timeout_seconds

    def fetch_titled_records(self) -> list[TitledRecord]:
        request = urllib.request.Request(
            self.url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"})
        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as response:
                payload = json.loads(response.read().decode("utf-8", errors="replace"))
        except (urllib.error.URLError, TimeoutError, OSError) as exc:
            raise RecordIndexError(f"GET {self.url} failed: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise RecordIndexError(f"GET {self.url} returned invalid JSON") from exc
        return _records_from_payload(payload)


class StaticRecordIndex:
    """In-process index over a fixed set of records."""

    def __init__(self, records: Iterable[TitledRecord] = ()) -> None:
        self._records = list(records)

    def fetch_titled_records(self) -> list[TitledRecord]:
        return list(self._records)


class UnconfiguredRecordIndex:
    """Placeholder used when no site URL is configured."""

    def fetch_titled_records(self) -> list[TitledRecord]:
        raise RecordIndexError("no record index configured (set SITE_URL)")
