import json
import os
from pathlib import Path
from typing import List

import pytest

from almanac.exceptions import SourceUnavailable
from almanac.search.local import local_search
from almanac.snapshot import export_snapshot, load_snapshot, parse_snapshot, write_snapshot
from almanac.storage.models import Article


@pytest.fixture()
def articles() -> List[Article]:
    return [
        Article(
            slug="ai",
            title="Artificial Intelligence",
            description="Thinking machines",
            category="Technology",
            tags=["AI", "ml"],
            date="2024-01-15",
            author="Ada",
            image="/images/ai.png",
            content="x" * 450 + " needle " + "y" * 600 + " deep-secret",
        ),
        Article(slug="bread", title="Sourdough Bread", category="Food", tags=["baking"], content="Flour."),
        Article(slug="plain", title="Plain", content=""),
    ]


def test_export_projects_every_article_in_order(articles: List[Article]) -> None:
    entries = export_snapshot(articles)
    assert [e.slug for e in entries] == ["ai", "bread", "plain"]
    ai = entries[0]
    assert ai.title == "Artificial Intelligence"
    assert ai.tags == ["AI", "ml"]
    assert ai.date == "2024-01-15"
    assert ai.image == "/images/ai.png"
    assert len(ai.content_preview) == 500
    assert ai.content_preview == articles[0].content[:500]
    assert entries[1].content_preview == "Flour."


def test_export_is_deterministic(articles: List[Article]) -> None:
    assert export_snapshot(articles) == export_snapshot(articles)


def test_write_produces_camel_case_json(tmp_path: Path, articles: List[Article]) -> None:
    target = tmp_path / "public" / "articles.json"
    write_snapshot(export_snapshot(articles), target)

    data = json.loads(target.read_text(encoding="utf-8"))
    assert isinstance(data, list) and len(data) == 3
    assert list(data[0]) == [
        "slug", "title", "description", "category", "tags", "date", "author", "image",
        "contentPreview",
    ]
    # Unset optionals are omitted
    assert data[2] == {"slug": "plain", "title": "Plain", "tags": [], "contentPreview": ""}
    # No temporary files left behind
    assert sorted(p.name for p in target.parent.iterdir()) == ["articles.json"]


def test_failed_write_keeps_previous_snapshot(
    tmp_path: Path, articles: List[Article], monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "articles.json"
    write_snapshot(export_snapshot(articles[:1]), target)
    before = target.read_text(encoding="utf-8")

    def broken_replace(src: str, dst: str) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    with pytest.raises(OSError):
        write_snapshot(export_snapshot(articles), target)

    assert target.read_text(encoding="utf-8") == before
    assert [p.name for p in tmp_path.iterdir()] == ["articles.json"]


def test_load_round_trip(tmp_path: Path, articles: List[Article]) -> None:
    target = write_snapshot(export_snapshot(articles), tmp_path / "articles.json")
    loaded = load_snapshot(target)
    assert loaded == export_snapshot(articles)


@pytest.mark.parametrize("query", ["artificial", "ML", "food", "thinking", "bread", "a"])
def test_snapshot_search_matches_full_search_on_metadata(
    tmp_path: Path, articles: List[Article], query: str
) -> None:
    loaded = load_snapshot(write_snapshot(export_snapshot(articles), tmp_path / "a.json"))
    full = {a.slug for a in local_search(articles, query)}
    snap = {e.slug for e in local_search(loaded, query)}
    assert snap == full


def test_snapshot_preview_limits_body_recall(articles: List[Article]) -> None:
    entries = export_snapshot(articles)
    assert [e.slug for e in local_search(entries, "needle")] == ["ai"]
    assert local_search(entries, "deep-secret") == []
    assert [a.slug for a in local_search(articles, "deep-secret")] == ["ai"]


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailable):
        load_snapshot(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "raw",
    ["not json", '{"slug": "x"}', '[{"title": "no slug"}]', '[{"slug": "x", "title": 3}]'],
)
def test_parse_malformed_snapshot_raises(raw: str) -> None:
    with pytest.raises(SourceUnavailable):
        parse_snapshot(raw)
