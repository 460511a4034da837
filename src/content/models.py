"""Content domain models — pure Pydantic v2 data types.

A ContentItem is built fresh from disk on every query. Which of ``body``
and ``rendered_html`` is populated depends on the RenderMode the item was
loaded with; summaries carry neither.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RenderMode(StrEnum):
    """How much of a content file to load."""

    NONE = "none"
    RAW_BODY = "raw"
    RENDERED_HTML = "html"


class ContentItem(BaseModel):
    """A single addressable piece of content, keyed by ``id``."""

    model_config = ConfigDict(frozen=True)

    id: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    body: str | None = None
    rendered_html: str | None = None

    @property
    def title(self) -> str | None:
        value = self.metadata.get("title")
        return None if value is None else str(value)

    @property
    def date(self) -> str | None:
        value = self.metadata.get("date")
        return None if value is None else str(value)

    @property
    def is_summary(self) -> bool:
        return self.body is None and self.rendered_html is None

    def to_props(self) -> dict[str, Any]:
        """Flatten into the props mapping page templates consume.

        Metadata keys are spread at the top level next to ``id``; the
        rendered body is exposed as ``contentHtml``.
        """
        props: dict[str, Any] = {"id": self.id, **self.metadata}
        if self.body is not None:
            props["body"] = self.body
        if self.rendered_html is not None:
            props["contentHtml"] = self.rendered_html
        return props


class RouteParams(BaseModel):
    """Route parameters for one generated page."""

    id: str


class RouteDescriptor(BaseModel):
    """Routing descriptor in the ``{"params": {"id": ...}}`` shape."""

    params: RouteParams

    @classmethod
    def for_id(cls, item_id: str) -> RouteDescriptor:
        return cls(params=RouteParams(id=item_id))
