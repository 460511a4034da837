"""folio: Markdown content indexing and rendering for static blogs."""

__version__ = "0.1.0"
