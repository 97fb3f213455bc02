"""Structured documents produced by crawling."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class Document:
    """A crawled document with its extracted structure."""

    id: str
    url: str
    title: str = ""
    text: str = ""
    headings: list[str] = field(default_factory=list)
    code_snippets: list[str] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    version: int = 1
    last_updated: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation served for a document."""
        return {
            "ID": self.id,
            "URL": self.url,
            "Title": self.title,
            "Text": self.text,
            "Headings": list(self.headings),
            "CodeSnippets": list(self.code_snippets),
            "Metadata": dict(self.metadata),
            "Version": self.version,
            "LastUpdated": self.last_updated.isoformat(),
        }