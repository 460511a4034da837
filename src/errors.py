"""Exception hierarchy for the content pipeline.

Every failure is a deterministic function of file content, so none of
these are retried. Callers building a site should let them halt the build.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base class for all folio errors."""


class NotFoundError(FolioError):
    """The content directory or a requested item does not exist."""


class ParseError(FolioError):
    """A content file's frontmatter header could not be parsed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class RenderError(FolioError):
    """Markdown to HTML rendering failed for an item."""

    def __init__(self, item_id: str, reason: str) -> None:
        self.item_id = item_id
        self.reason = reason
        super().__init__(f"{item_id}: {reason}")
