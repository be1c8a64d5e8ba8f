"""Abstract base classes and data structures for article parsers.

Parsers turn a raw content file into its body text, heading structure and
front-matter metadata. Concrete implementations subclass `BaseParser` and
implement `can_parse()` and `parse()`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class SectionInfo:
    """Represents a heading within a rendered article.

    Attributes
    ----------
    title: str
        The human-readable heading text.
    level: int
        A hierarchical level where 1 is top-level (H1), 2 is H2, etc.
    anchor: str | None
        The heading's HTML id, when the renderer assigned one.
    """

    title: str
    level: int
    anchor: Optional[str] = None


@dataclass(slots=True)
class ParsedDocument:
    """Container for parsed article outputs."""

    text: str = ""
    sections: List[SectionInfo] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class BaseParser(ABC):
    """Abstract parser interface."""

    @abstractmethod
    def can_parse(self, path: Path) -> bool:
        """Return True if this parser can handle the given file/path."""

    @abstractmethod
    def parse(self, path: Path) -> ParsedDocument:
        """Parse the file and return a `ParsedDocument`.

        Implementations should raise `almanac.exceptions.ParsingError` on failure.
        """
        raise NotImplementedError
