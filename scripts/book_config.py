#!/usr/bin/env python3

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml
from slugify import slugify

from dump_records import ConfigError


DEFAULT_BOOKS_CONFIG = "mapping/books.yml"


def make_url_safe(name: str) -> str:
    return slugify(name)


@dataclass
class Book:
    source_title: str
    display_name: str = ""
    import_book: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Book":
        source_title = str(data.get("source_title") or "").strip()
        if not source_title:
            raise ConfigError(f"Book entry without source_title: {data!r}")
        return cls(
            source_title=source_title,
            display_name=str(data.get("display_name") or "").strip(),
            import_book=bool(data.get("import", False)),
        )

    @property
    def name(self) -> str:
        return self.display_name or self.source_title

    @property
    def dir_name(self) -> str:
        return make_url_safe(self.name)


def load_books(path: Path) -> List[Book]:
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Missing books config {path}")
    try:
        mapping = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Can't parse {path}: {exc}") from exc
    if not isinstance(mapping, dict) or "books" not in mapping:
        raise ConfigError(f"{path} must have a top-level 'books' list")
    # "books:" with nothing under it loads as None
    entries = mapping["books"] or []
    if not isinstance(entries, list):
        raise ConfigError(f"{path} must have a top-level 'books' list")
    books: List[Book] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ConfigError(f"Book entry in {path} is not a mapping: {entry!r}")
        books.append(Book.from_dict(entry))
    return books


def books_to_import(books: List[Book]) -> List[Book]:
    return [b for b in books if b.import_book]
