"""Markdown article parser: YAML front matter plus Markdown body.

Front matter is the block between a leading ``---`` line and the next ``---``
line, parsed with PyYAML. The body is kept as raw Markdown for search; HTML
rendering goes through the `markdown` library and `HTMLParser.sanitize`.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Tuple

import markdown as md  # type: ignore[import-untyped]
import yaml

from almanac.exceptions import ParsingError

from .base_parser import BaseParser, ParsedDocument
from .html_parser import HTMLParser

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)??---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def split_front_matter(raw: str) -> Tuple[Dict[str, Any], str]:
    """Split ``raw`` into (metadata, body).

    Files without a front-matter block yield empty metadata and the full text.
    """
    match = _FRONT_MATTER.match(raw)
    if not match:
        return {}, raw
    try:
        data = yaml.safe_load(match.group(1) or "")
    except yaml.YAMLError as e:
        raise ParsingError(f"Invalid front matter: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParsingError("Front matter must be a mapping")
    return data, raw[match.end() :]


class MarkdownParser(BaseParser):
    """Parser for `.md` and `.mdx` article files."""

    def __init__(self) -> None:
        self._html = HTMLParser()
        # GFM-like output; "toc" assigns heading ids used as section anchors
        self._extensions = [
            "tables",
            "fenced_code",
            "toc",
            "sane_lists",
        ]

    def can_parse(self, path: Path) -> bool:
        return path.suffix.lower() in {".md", ".mdx"}

    def parse(self, path: Path) -> ParsedDocument:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParsingError(
                f"{path.name}: not valid UTF-8 ({e.reason} at byte {e.start})"
            ) from e
        try:
            metadata, body = split_front_matter(text)
        except ParsingError as e:
            raise ParsingError(f"{path.name}: {e}") from e
        metadata = dict(metadata)
        metadata["source_path"] = str(path)
        return ParsedDocument(text=body, metadata=metadata)

    def render_html(self, markdown_text: str) -> str:
        """Render Markdown to sanitized HTML."""
        html = md.markdown(markdown_text, extensions=self._extensions)
        return self._html.sanitize(html)

    def render(self, markdown_text: str) -> ParsedDocument:
        """Render Markdown; returns plain text, heading sections and ``metadata["html"]``."""
        html = self.render_html(markdown_text)
        doc = self._html.parse_html_content(html)
        doc.metadata["html"] = html
        return doc
