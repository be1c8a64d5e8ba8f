"""HTML helpers for rendered article bodies.

Sanitizes Markdown-generated HTML before it is handed to a page renderer and
extracts plain text and heading structure for previews.
"""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup  # type: ignore[import-untyped]

from .base_parser import ParsedDocument, SectionInfo

# Elements removed together with their content
_DROP_TAGS = ("script", "style", "iframe", "object", "embed", "form")
_URL_ATTRS = ("href", "src")


class HTMLParser:
    """Sanitizer and text extractor for HTML content."""

    def sanitize(self, html: str) -> str:
        """Strip active content from ``html`` and return the cleaned markup."""
        soup = BeautifulSoup(html, "html.parser")
        for tag in soup.find_all(_DROP_TAGS):
            tag.decompose()
        for tag in soup.find_all(True):
            for attr in list(tag.attrs):
                if attr.lower().startswith("on"):
                    del tag.attrs[attr]
                elif attr.lower() in _URL_ATTRS:
                    value = str(tag.attrs[attr]).strip().lower()
                    if value.startswith(("javascript:", "vbscript:", "data:text/html")):
                        del tag.attrs[attr]
        return str(soup)

    def parse_html_content(self, html: str) -> ParsedDocument:
        """Extract visible text and h1-h6 headings from HTML."""
        soup = BeautifulSoup(html, "html.parser")
        text = soup.get_text(" ", strip=True)

        sections: List[SectionInfo] = []
        for tag in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
            title = tag.get_text(" ", strip=True)
            if title:
                anchor = tag.get("id")
                sections.append(
                    SectionInfo(title=title, level=int(tag.name[1]), anchor=anchor or None)
                )

        return ParsedDocument(text=text, sections=sections)
