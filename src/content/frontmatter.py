"""Frontmatter header parsing and identifier derivation.

A content file is an optional YAML header fenced by ``---`` lines followed
by a free-text Markdown body.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from folio.errors import NotFoundError, ParseError

DEFAULT_EXTENSION = ".md"

_yaml_handler = frontmatter.YAMLHandler()


def derive_id(file_name: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Strip one trailing ``extension`` from ``file_name``.

    Names without the extension pass through unchanged.
    """
    if extension and file_name.endswith(extension):
        return file_name[: -len(extension)]
    return file_name


def _normalise(value: Any) -> Any:
    # YAML turns bare dates into date objects; keep them as ISO strings so
    # every item's date compares with every other's.
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, list):
        return [_normalise(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _normalise(v) for k, v in value.items()}
    return value


def split_document(text: str, path: Path | str = "<string>") -> tuple[dict[str, Any], str]:
    """Split ``text`` into (metadata, body).

    Text without an opening ``---`` line yields empty metadata and the
    whole text as body.

    Raises:
        ParseError: if the header is never closed, is not valid YAML, or
            does not hold a mapping.
    """
    text = text.removeprefix("\ufeff")
    if not _yaml_handler.detect(text):
        return {}, text

    try:
        raw_header, body = _yaml_handler.split(text)
    except ValueError as exc:
        raise ParseError(path, "unterminated frontmatter header") from exc

    try:
        loaded = _yaml_handler.load(raw_header)
    except (yaml.YAMLError, ValueError) as exc:
        # Well-formed but impossible timestamps (2021-02-30) raise ValueError.
        raise ParseError(path, f"invalid YAML in header: {exc}") from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ParseError(path, f"header must be a mapping, got {type(loaded).__name__}")

    metadata = {str(key): _normalise(value) for key, value in loaded.items()}
    return metadata, body.lstrip("\r\n")


def read_document(path: Path) -> tuple[dict[str, Any], str]:
    """Read a UTF-8 content file and split it into (metadata, body)."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, "file is not valid UTF-8") from exc
    except FileNotFoundError as exc:
        raise NotFoundError(f"Content file disappeared: {path}") from exc
    except OSError as exc:
        raise ParseError(path, f"could not read file: {exc.strerror or exc}") from exc
    return split_document(text, path)
