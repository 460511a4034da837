"""Directory-backed content store.

Exposes a read-only view over one flat directory of Markdown files.
Nothing is cached: every call re-reads the directory, so the files on
disk are the only source of truth.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from folio.content.frontmatter import DEFAULT_EXTENSION, derive_id, read_document
from folio.content.models import ContentItem, RenderMode, RouteDescriptor
from folio.content.render import DEFAULT_STYLE, MarkdownRenderer
from folio.errors import NotFoundError

if TYPE_CHECKING:
    from folio.config import FolioConfig

logger = logging.getLogger(__name__)


def summary_sort_key(item: ContentItem) -> tuple[Any, ...]:
    """Order by (date, title) ascending; missing values sort last."""
    date = item.date
    title = item.title
    return (date is None, date or "", title is None, title or "")


class ContentStore:
    """Read-only store over a directory of Markdown content files.

    Args:
        content_dir: Flat directory holding one file per item.
        extension: Content file suffix stripped to form item ids.
        render_mode: What ``get_item`` populates by default.
        highlight_style: Pygments style used for code blocks.
        strict_languages: Fail rendering on unknown code block languages.
    """

    def __init__(
        self,
        content_dir: Path,
        extension: str = DEFAULT_EXTENSION,
        render_mode: RenderMode = RenderMode.RENDERED_HTML,
        highlight_style: str = DEFAULT_STYLE,
        strict_languages: bool = True,
    ) -> None:
        self.content_dir = Path(content_dir)
        self.extension = extension
        self.render_mode = RenderMode(render_mode)
        self._renderer = MarkdownRenderer(
            highlight_style=highlight_style,
            strict_languages=strict_languages,
        )

    @classmethod
    def from_config(cls, config: FolioConfig) -> ContentStore:
        """Build a store from a loaded FolioConfig."""
        return cls(
            Path(config.content.directory),
            extension=config.content.extension,
            render_mode=RenderMode(config.content.render_mode),
            highlight_style=config.render.highlight_style,
            strict_languages=config.render.strict_languages,
        )

    # ── Private helpers ──────────────────────────────────────────

    def _file_names(self) -> list[str]:
        """Return content file names in directory enumeration order.

        Files without the content extension are skipped.
        """
        try:
            with os.scandir(self.content_dir) as entries:
                names = [entry.name for entry in entries if entry.is_file()]
        except FileNotFoundError as exc:
            raise NotFoundError(f"Content directory not found: {self.content_dir}") from exc
        except NotADirectoryError as exc:
            raise NotFoundError(f"Content root is not a directory: {self.content_dir}") from exc
        except OSError as exc:
            raise NotFoundError(f"Content directory not readable: {self.content_dir}") from exc
        content = [n for n in names if n.endswith(self.extension) and n != self.extension]
        if len(content) != len(names):
            logger.debug(
                "Skipped %d non-content files in %s", len(names) - len(content), self.content_dir
            )
        return content

    def _path_for(self, item_id: str) -> Path:
        if not item_id or "/" in item_id or os.sep in item_id or item_id in (".", ".."):
            raise NotFoundError(f"No content item with id {item_id!r}")
        path = self.content_dir / f"{item_id}{self.extension}"
        if not path.is_file():
            if not self.content_dir.is_dir():
                raise NotFoundError(f"Content directory not found: {self.content_dir}")
            raise NotFoundError(f"No content item with id {item_id!r}")
        return path

    def _load_summary(self, file_name: str) -> ContentItem:
        path = self.content_dir / file_name
        metadata, _ = read_document(path)
        logger.debug("Loaded header of %s", path)
        return ContentItem(id=derive_id(file_name, self.extension), metadata=metadata)

    def _load_item(self, item_id: str, mode: RenderMode) -> ContentItem:
        path = self._path_for(item_id)
        metadata, body = read_document(path)
        if mode is RenderMode.RAW_BODY:
            return ContentItem(id=item_id, metadata=metadata, body=body)
        if mode is RenderMode.RENDERED_HTML:
            html = self._renderer.render(item_id, body)
            return ContentItem(id=item_id, metadata=metadata, rendered_html=html)
        return ContentItem(id=item_id, metadata=metadata)

    # ── Read operations ──────────────────────────────────────────

    def list_summaries(self) -> list[ContentItem]:
        """Return header-only items for every file, sorted by (date, title).

        Raises:
            NotFoundError: if the content directory does not exist.
            ParseError: if any file's header is malformed.
        """
        items = [self._load_summary(name) for name in self._file_names()]
        logger.info("Loaded %d summaries from %s", len(items), self.content_dir)
        return sorted(items, key=summary_sort_key)

    def list_identifiers(self) -> list[RouteDescriptor]:
        """Return one routing descriptor per file, in directory order.

        Raises:
            NotFoundError: if the content directory does not exist.
        """
        return [
            RouteDescriptor.for_id(derive_id(name, self.extension))
            for name in self._file_names()
        ]

    def get_item(self, item_id: str, mode: RenderMode | None = None) -> ContentItem:
        """Return one fully loaded item.

        ``mode`` overrides the store's render mode for this call.

        Raises:
            NotFoundError: if no file matches ``item_id``.
            ParseError: if the header is malformed.
            RenderError: if rendering was requested and failed.
        """
        return self._load_item(item_id, RenderMode(mode or self.render_mode))

    # ── Async variants ───────────────────────────────────────────

    async def alist_summaries(self) -> list[ContentItem]:
        """Async ``list_summaries``: one worker per file, sorted after all finish."""
        names = await asyncio.to_thread(self._file_names)
        items = await asyncio.gather(
            *(asyncio.to_thread(self._load_summary, name) for name in names)
        )
        logger.info("Loaded %d summaries from %s", len(items), self.content_dir)
        return sorted(items, key=summary_sort_key)

    async def aget_item(self, item_id: str, mode: RenderMode | None = None) -> ContentItem:
        """Async ``get_item``."""
        return await asyncio.to_thread(self.get_item, item_id, mode)
