"""Domain models (Pydantic v2).

- Pure records for what the Timeular API returns; no HTTP, no CLI.
- Field aliases match the API's camelCase keys; Python code uses snake_case.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Activity(BaseModel):
    """A named tracked category (one side of the Timeular tracker, or virtual)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque activity identifier.",
    )
    name: str = Field(
        default="",
        description="Display name of the activity.",
    )
    color: str | None = Field(
        default=None,
        description="Hex color, e.g. '#a1b2c3'.",
    )
    integration: str | None = Field(
        default=None,
        description="Integration the activity belongs to ('zei' for native ones).",
    )
    space_id: str | None = Field(
        default=None,
        alias="spaceId",
        description="Space (workspace) the activity lives in.",
    )
    device_side: int | None = Field(
        default=None,
        alias="deviceSide",
        description="Tracker side assigned to the activity, if any.",
    )


class Duration(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    started_at: datetime = Field(..., alias="startedAt")
    stopped_at: datetime = Field(..., alias="stoppedAt")


class Note(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = Field(
        default=None,
        description="Free text of the note, with tag/mention placeholders.",
    )
    tags: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Tag objects referenced from the text (raw API shape).",
    )
    mentions: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Mention objects referenced from the text (raw API shape).",
    )


class TimeEntry(BaseModel):
    """A recorded interval of tracked time.

    `activity` is not part of the API payload: the query layer resolves it from
    `activity_id` after construction and attaches it in place.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(
        ...,
        description="Opaque time-entry identifier.",
    )
    activity_id: str = Field(
        ...,
        alias="activityId",
        description="Foreign key to `Activity.id`.",
    )
    duration: Duration = Field(
        ...,
        description="Start/stop pair (naive timestamps, as sent by the API).",
    )
    note: Note | None = Field(
        default=None,
        description="Free text plus tag/mention annotations.",
    )
    activity: Activity | None = Field(
        default=None,
        description="Resolved activity (None when no activity matches `activity_id`).",
    )

    @property
    def started_at(self) -> datetime:
        return self.duration.started_at

    @property
    def stopped_at(self) -> datetime:
        return self.duration.stopped_at

    @property
    def elapsed(self) -> timedelta:
        return self.duration.stopped_at - self.duration.started_at

    @property
    def note_text(self) -> str:
        if self.note is None or not self.note.text:
            return ""
        return self.note.text
