"""In-memory document store backed by a directory of Markdown articles.

The store is rebuilt as a whole: `reload()` parses every file into a new list
and swaps it in, so readers holding the previous list never observe a partial
update.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from almanac.exceptions import ParsingError, SourceUnavailable
from almanac.parsers.base_parser import ParsedDocument
from almanac.parsers.markdown_parser import MarkdownParser
from almanac.storage.models import Article

logger = logging.getLogger(__name__)


class DocumentStore:
    """Loads and caches all articles from a content directory."""

    def __init__(
        self,
        directory: str | Path,
        *,
        extensions: Iterable[str] = (".md", ".mdx"),
        parser: Optional[MarkdownParser] = None,
    ) -> None:
        self.directory = Path(directory)
        self.extensions = {e.lower() for e in extensions}
        self._parser = parser or MarkdownParser()
        self._articles: Optional[List[Article]] = None

    def _article_paths(self) -> List[Path]:
        if not self.directory.is_dir():
            raise SourceUnavailable(f"Content directory not found: {self.directory}")
        try:
            entries = sorted(self.directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise SourceUnavailable(f"Cannot list {self.directory}: {e}") from e
        return [p for p in entries if p.is_file() and p.suffix.lower() in self.extensions]

    def load(self) -> List[Article]:
        """Parse every article in the content directory.

        Raises `SourceUnavailable` when the directory or a file cannot be read,
        or when a file has malformed front matter.
        """
        articles: List[Article] = []
        seen: set[str] = set()
        for path in self._article_paths():
            slug = path.stem
            if slug in seen:
                # e.g. "intro.md" and "intro.mdx"; the first in name order wins
                logger.warning("Duplicate slug '%s' from %s ignored", slug, path.name)
                continue
            try:
                doc = self._parser.parse(path)
            except (OSError, UnicodeDecodeError) as e:
                raise SourceUnavailable(f"Cannot read {path}: {e}") from e
            except ParsingError as e:
                raise SourceUnavailable(str(e)) from e
            seen.add(slug)
            articles.append(Article.from_parsed(slug, doc))
        logger.debug("Loaded %d articles from %s", len(articles), self.directory)
        return articles

    def reload(self) -> List[Article]:
        """Rebuild the cached article list from the content source."""
        articles = self.load()
        self._articles = articles
        return articles

    def articles(self) -> List[Article]:
        """Return the cached article list, loading it on first use."""
        if self._articles is None:
            return self.reload()
        return self._articles

    def get(self, slug: str) -> Optional[Article]:
        return next((a for a in self.articles() if a.slug == slug), None)

    def slugs(self) -> List[str]:
        return [a.slug for a in self.articles()]

    def by_category(self, category: str) -> List[Article]:
        """Articles whose category equals ``category`` (case-sensitive)."""
        return [a for a in self.articles() if a.category == category]

    def categories(self) -> List[str]:
        """Unique categories in first-seen order."""
        out: List[str] = []
        for a in self.articles():
            if a.category and a.category not in out:
                out.append(a.category)
        return out

    def render(self, slug: str) -> Optional[ParsedDocument]:
        """Render an article body: sanitized HTML (``metadata["html"]``), text and headings."""
        article = self.get(slug)
        if article is None:
            return None
        return self._parser.render(article.content)
