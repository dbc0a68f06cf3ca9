"""Schemas for operational endpoints."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UsageSnapshot(BaseModel):
    """Today's admission total and current presence count."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    total: int
    concurrent_users: int = Field(alias="concurrentUsers")
