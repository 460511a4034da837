"""Content domain: Markdown content models, parsing, rendering and store.

ContentStore is the read-only entry point: it lists sorted summaries,
enumerates routing descriptors, and loads single items in full.
"""

from folio.content.frontmatter import derive_id, split_document
from folio.content.models import ContentItem, RenderMode, RouteDescriptor, RouteParams
from folio.content.render import MarkdownRenderer, highlight_css
from folio.content.store import ContentStore

__all__ = [
    "ContentItem",
    "ContentStore",
    "MarkdownRenderer",
    "RenderMode",
    "RouteDescriptor",
    "RouteParams",
    "derive_id",
    "highlight_css",
    "split_document",
]
