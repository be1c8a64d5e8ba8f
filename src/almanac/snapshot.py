"""Client-side snapshot (``articles.json``) export and load.

The snapshot is every article with its metadata intact and the body cut to a
short ``contentPreview``. Writes go to a temporary file in the target
directory that is renamed over the destination, so readers only ever see a
complete file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from almanac.exceptions import SourceUnavailable
from almanac.storage.models import Article

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 500


class SnapshotArticle(BaseModel):
    """One snapshot entry; serialized with a camelCase ``contentPreview`` key."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    slug: str
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    date: Optional[str] = None
    author: Optional[str] = None
    image: Optional[str] = None
    content_preview: str = Field(default="", alias="contentPreview")

    @property
    def body_text(self) -> str:
        return self.content_preview

    def to_record(self) -> dict:
        return {
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "category": self.category,
        }


_SNAPSHOT_ADAPTER = TypeAdapter(List[SnapshotArticle])


def export_snapshot(
    articles: Sequence[Article], *, preview_chars: int = PREVIEW_CHARS
) -> List[SnapshotArticle]:
    """Project every article into a snapshot entry, preserving order."""
    return [
        SnapshotArticle(
            slug=a.slug,
            title=a.title,
            description=a.description,
            category=a.category,
            tags=list(a.tags or []),
            date=a.date,
            author=a.author,
            image=a.image,
            content_preview=a.content[:preview_chars],
        )
        for a in articles
    ]


def dumps_snapshot(entries: Sequence[SnapshotArticle]) -> str:
    payload = [e.model_dump(by_alias=True, exclude_none=True) for e in entries]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def write_snapshot(entries: Sequence[SnapshotArticle], path: str | Path) -> Path:
    """Atomically write ``entries`` as JSON to ``path``."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    data = dumps_snapshot(entries)

    fd, tmp_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Wrote %d snapshot entries to %s", len(entries), target)
    return target


def parse_snapshot(data: str | bytes) -> List[SnapshotArticle]:
    """Validate raw snapshot JSON; raises `SourceUnavailable` when malformed."""
    try:
        return _SNAPSHOT_ADAPTER.validate_json(data)
    except ValidationError as e:
        raise SourceUnavailable(f"Malformed snapshot: {e.error_count()} validation error(s)") from e


def load_snapshot(path: str | Path) -> List[SnapshotArticle]:
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise SourceUnavailable(f"Cannot read snapshot {path}: {e}") from e
    return parse_snapshot(raw)
