import json
from pathlib import Path

import pytest

from almanac import commands


def test_export_writes_snapshot(tmp_path: Path) -> None:
    content = tmp_path / "content"
    content.mkdir()
    (content / "intro.md").write_text("---\ntitle: Intro\n---\nHello", encoding="utf-8")
    out = tmp_path / "public" / "articles.json"

    assert commands.export(["--content", str(content), "--output", str(out)]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == [{"slug": "intro", "title": "Intro", "tags": [], "contentPreview": "Hello"}]


def test_export_missing_content_fails(tmp_path: Path) -> None:
    out = tmp_path / "articles.json"
    assert commands.export(["--content", str(tmp_path / "nope"), "--output", str(out)]) == 1
    assert not out.exists()


def test_init_search_disabled_index_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ALMANAC_SEARCH_INDEX__ENABLED", "false")
    monkeypatch.setenv("ALMANAC_CONTENT__DIRECTORY", str(tmp_path))
    assert commands.init_search([]) == 1


def test_commands_raise_when_services_missing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(commands.AppState, "init_services", lambda self: None)
    with pytest.raises(RuntimeError):
        commands.init_search([])
    with pytest.raises(RuntimeError):
        commands.export(["--content", str(tmp_path), "--output", str(tmp_path / "a.json")])
