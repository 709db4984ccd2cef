"""Analysis result models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ChartType = Literal["bar", "pie", "line", "number"]


class Visualization(BaseModel):
    """A chart descriptor; renderers decide how to draw it."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: ChartType
    title: str
    labels: list[str] | None = None
    data: list[int | float] | None = None
    value: str | None = None


class Analysis(BaseModel):
    """Summary, insight sentences and an optional chart for one result set."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    summary: str
    insights: list[str] = Field(default_factory=list)
    visualization: Visualization | None = None
