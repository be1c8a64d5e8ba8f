"""One-shot maintenance commands run at publish time.

  - almanac-init-search: provision the Meilisearch index and sync all articles
  - almanac-export-snapshot: write the client-side articles.json snapshot
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from almanac.config import load_settings
from almanac.exceptions import SourceUnavailable
from almanac.log import setup_logging
from almanac.mcp.server import AppState
from almanac.snapshot import export_snapshot, write_snapshot

logger = logging.getLogger(__name__)


def init_search(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the article search index.")
    parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.app.log_level)
    state = AppState(settings)
    state.init_services()
    if state.search_service is None:
        raise RuntimeError("Search service is not initialized.")

    logger.info("Initializing search index...")
    try:
        ok = asyncio.run(state.search_service.initialize_index())
    except SourceUnavailable as e:
        logger.error("Cannot read articles: %s", e)
        return 1
    if ok:
        logger.info("Search index initialized successfully")
        return 0
    logger.error(
        "Search index initialization failed. Make sure Meilisearch is running at %s",
        settings.search_index.host,
    )
    return 1


def export(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Export the client-side articles snapshot.")
    parser.add_argument("--output", "-o", default=settings.snapshot.path)
    parser.add_argument("--content", default=settings.content.directory)
    args = parser.parse_args(argv)

    setup_logging(settings.app.log_level)
    settings.content.directory = args.content
    state = AppState(settings)
    state.init_services()
    if state.store is None:
        raise RuntimeError("Document store is not initialized.")

    try:
        entries = export_snapshot(
            state.store.articles(), preview_chars=settings.snapshot.preview_chars
        )
    except SourceUnavailable as e:
        logger.error("Error generating articles snapshot: %s", e)
        return 1
    write_snapshot(entries, args.output)
    return 0


def init_search_main() -> None:
    sys.exit(init_search())


def export_snapshot_main() -> None:
    sys.exit(export())
