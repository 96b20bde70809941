# axion-stamp/models/options.py
# Purpose: Pydantic option schemas for timestamp injection.

from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TimeFormat(str, Enum):
    """User clock preference."""

    TWELVE = "12"
    TWENTY_FOUR = "24"


class TimestampInjectionOptions(BaseModel):
    """Options for ``inject_timestamp``. Every field may be absent; defaults apply at call time."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timezone: Optional[str] = Field(default=None, description="IANA name or fixed offset, e.g. +05:30")
    # "12" or "24"; anything else falls back to the default clock format when rendering.
    time_format: Optional[str] = Field(default=None, alias="timeFormat")
    now: Optional[datetime] = None
