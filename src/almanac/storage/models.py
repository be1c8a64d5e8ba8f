"""Article model for the in-memory document store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from almanac.parsers.base_parser import ParsedDocument


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    return text or None


def _tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(t) for t in value if t is not None and str(t).strip()]
    return [str(value)]


@dataclass(slots=True)
class Article:
    """A single article: front-matter metadata plus the raw Markdown body."""

    slug: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    date: Optional[str] = None
    author: Optional[str] = None
    image: Optional[str] = None
    content: str = ""

    @property
    def body_text(self) -> str:
        return self.content

    @classmethod
    def from_parsed(cls, slug: str, doc: ParsedDocument) -> "Article":
        meta: Dict[str, Any] = doc.metadata or {}
        return cls(
            slug=slug,
            title=_opt_str(meta.get("title")) or slug,
            description=_opt_str(meta.get("description")),
            category=_opt_str(meta.get("category")),
            tags=_tags(meta.get("tags")),
            date=_opt_str(meta.get("date")),
            author=_opt_str(meta.get("author")),
            image=_opt_str(meta.get("image")),
            content=doc.text or "",
        )

    def to_record(self) -> Dict[str, Optional[str]]:
        """Return the reduced result record used by the query interface."""
        return {
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "category": self.category,
        }
