"""Activity and time-entry queries.

This module is the query layer on top of the cached request engine. It turns
raw API payloads into domain records, resolves each entry's activity and
returns entries in chronological order. Printing and progress stay in the CLI.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from adapters.timeular import FailureHandler, TimeularClient
from core.config import AppSettings
from core.domain.models import Activity, TimeEntry
from core.domain.timestamps import to_service_timestamp
from core.errors import ResponseDecodeError
from core.interfaces.cache import ResponseCache

log = logging.getLogger(__name__)

ACTIVITIES_ENDPOINT = "activities"


def time_entries_endpoint(start: date | datetime, end: date | datetime) -> str:
    return f"time-entries/{to_service_timestamp(start)}/{to_service_timestamp(end)}"


def find_activity(activities: Iterable[Activity], activity_id: str) -> Activity | None:
    """First activity whose id equals `activity_id` (linear scan)."""

    return next((activity for activity in activities if activity.id == activity_id), None)


def sort_entries_chronologically(entries: list[TimeEntry]) -> list[TimeEntry]:
    """Sort in place by start time; entries sharing a start keep their order."""

    entries.sort(key=lambda entry: entry.started_at)
    return entries


class TimeularApi:
    """Public surface: `debug`, `connect`, `get_activities`, `get_activity`,
    `get_time_entries`.

    Owns a `TimeularClient` (token + cache) unless one is passed in.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: TimeularClient | None = None,
        cache: ResponseCache | None = None,
        http_client: httpx.AsyncClient | None = None,
        on_failure: FailureHandler | None = None,
    ) -> None:
        self._client = client or TimeularClient(
            settings,
            cache=cache,
            http_client=http_client,
            on_failure=on_failure,
        )

    async def __aenter__(self) -> "TimeularApi":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def client(self) -> TimeularClient:
        return self._client

    def debug(self, enabled: bool = False) -> None:
        self._client.debug(enabled)

    async def connect(self, api_key: str, api_secret: str) -> str:
        return await self._client.connect(api_key, api_secret)

    def _records(self, payload: Any, key: str, endpoint: str) -> list[dict[str, Any]]:
        records = payload.get(key) if isinstance(payload, dict) else None
        if not isinstance(records, list):
            raise self._client.handle_failure(
                ResponseDecodeError(endpoint, f"Response has no '{key}' list.")
            )
        return records

    async def get_activities(self) -> list[Activity]:
        """All activities of the account, in server order."""

        response = await self._client.request(ACTIVITIES_ENDPOINT)
        records = self._records(response, "activities", ACTIVITIES_ENDPOINT)
        try:
            return [Activity.model_validate(record) for record in records]
        except ValidationError as exc:
            raise self._client.handle_failure(
                ResponseDecodeError(ACTIVITIES_ENDPOINT, f"Invalid activity record: {exc}.")
            ) from exc

    async def get_activity(self, activity_id: str) -> Activity | None:
        activities = await self.get_activities()
        return find_activity(activities, activity_id)

    async def get_time_entries(
        self,
        start_date: date | datetime,
        end_date: date | datetime,
    ) -> list[TimeEntry]:
        """Entries between two timestamps, each with its activity attached.

        Steps:
        1) request the entries for the range and the activity list concurrently;
           if either fails, the other is cancelled before the error propagates;
        2) build every entry and attach the activity matching `activity_id`
           (None when nothing matches);
        3) sort ascending by start time (stable).
        """

        endpoint = time_entries_endpoint(start_date, end_date)
        pending = [
            asyncio.ensure_future(self._client.request(endpoint)),
            asyncio.ensure_future(self.get_activities()),
        ]
        try:
            response, activities = await asyncio.gather(*pending)
        except BaseException:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            raise

        records = self._records(response, "timeEntries", endpoint)
        entries: list[TimeEntry] = []
        for record in records:
            try:
                entry = TimeEntry.model_validate(record)
            except ValidationError as exc:
                raise self._client.handle_failure(
                    ResponseDecodeError(endpoint, f"Invalid time entry record: {exc}.")
                ) from exc
            entry.activity = find_activity(activities, entry.activity_id)
            if entry.activity is None:
                log.warning("Time entry %s references unknown activity %s", entry.id, entry.activity_id)
            entries.append(entry)

        return sort_entries_chronologically(entries)
