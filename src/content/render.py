"""Markdown to HTML rendering with Pygments syntax highlighting."""

from __future__ import annotations

import logging
from typing import Any

import markdown
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from folio.errors import RenderError

logger = logging.getLogger(__name__)

HIGHLIGHT_CSS_CLASS = "codehilite"
DEFAULT_STYLE = "default"
LANG_PREFIX = "language-"

MARKDOWN_EXTENSIONS = ["extra", "codehilite", "pymdownx.inlinehilite", "toc"]


class UnknownLanguageError(Exception):
    """A code block was tagged with a language Pygments does not know."""

    def __init__(self, lang: str) -> None:
        self.lang = lang
        super().__init__(f"unknown code block language {lang!r}")


class StrictHtmlFormatter(HtmlFormatter):
    """HtmlFormatter that rejects unknown code block languages.

    codehilite builds one formatter per block and passes the tag the parser
    found as ``lang_str``; untagged blocks arrive as ``language-text``.
    """

    def __init__(self, lang_str: str = "", **options: Any) -> None:
        lang = lang_str.removeprefix(LANG_PREFIX)
        if lang:
            try:
                get_lexer_by_name(lang)
            except ClassNotFound as exc:
                raise UnknownLanguageError(lang) from exc
        super().__init__(**options)


def highlight_css(style: str = DEFAULT_STYLE) -> str:
    """Return the Pygments stylesheet matching rendered code blocks.

    Raises:
        RenderError: if ``style`` is not a known Pygments style.
    """
    try:
        formatter = HtmlFormatter(style=style)
    except ClassNotFound as exc:
        raise RenderError("<stylesheet>", f"unknown highlight style {style!r}") from exc
    return formatter.get_style_defs(f".{HIGHLIGHT_CSS_CLASS}")


class MarkdownRenderer:
    """Renders Markdown bodies to HTML.

    Fenced code blocks tagged with a language are highlighted by Pygments
    and wrapped in ``<div class="codehilite">``; inline code written as
    ``#!python print(1)`` is highlighted in place. With
    ``strict_languages`` an unknown code block language is an error
    instead of a plain-text fallback.
    """

    def __init__(self, highlight_style: str = DEFAULT_STYLE, strict_languages: bool = True) -> None:
        self.highlight_style = highlight_style
        self.strict_languages = strict_languages

    def _build(self) -> markdown.Markdown:
        # Markdown instances keep per-document state; one per render.
        return markdown.Markdown(
            extensions=MARKDOWN_EXTENSIONS,
            extension_configs={
                "codehilite": {
                    "css_class": HIGHLIGHT_CSS_CLASS,
                    "guess_lang": False,
                    "lang_prefix": LANG_PREFIX,
                    "pygments_style": self.highlight_style,
                    "pygments_formatter": StrictHtmlFormatter if self.strict_languages else "html",
                },
                "pymdownx.inlinehilite": {
                    "css_class": HIGHLIGHT_CSS_CLASS,
                },
            },
            output_format="html",
        )

    def render(self, item_id: str, body: str) -> str:
        """Render ``body`` to HTML.

        Raises:
            RenderError: if the body cannot be rendered.
        """
        try:
            html = self._build().convert(body)
        except UnknownLanguageError as exc:
            raise RenderError(item_id, str(exc)) from exc
        except Exception as exc:
            raise RenderError(item_id, f"markdown rendering failed: {exc}") from exc
        logger.debug("Rendered %s (%d chars of HTML)", item_id, len(html))
        return html
