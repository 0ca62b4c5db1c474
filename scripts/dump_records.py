#!/usr/bin/env python3

import gzip
import json
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


DEFAULT_DUMP_DIR = "stack-overflow-docs-dump"

DOCTAGS_FILE = "doctags.json.gz"
TOPICS_FILE = "topics.json.gz"
TOPIC_HISTORIES_FILE = "topichistories.json.gz"
EXAMPLES_FILE = "examples.json.gz"


class ImportFailure(Exception):
    """Base for every condition that aborts an import run."""


class LoadError(ImportFailure):
    pass


class ConfigError(ImportFailure):
    pass


class MissingTagError(ImportFailure):
    pass


class WriteError(ImportFailure):
    pass


class SeparatorCollisionError(ImportFailure):
    pass


def _text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _int(data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    return int(value) if isinstance(value, (int, float)) else 0


@dataclass
class Tag:
    id: int
    title: str = ""
    topic_count: int = 0
    # derived per run, see Linker.example_count
    example_count: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tag":
        return cls(
            id=_int(data, "Id"),
            title=_text(data, "Title"),
            topic_count=_int(data, "TopicCount"),
        )


@dataclass
class Topic:
    id: int
    tag_id: int
    title: str = ""
    versions_json: str = ""
    hello_world_versions_html: str = ""
    introduction_markdown: str = ""
    introduction_html: str = ""
    syntax_markdown: str = ""
    syntax_html: str = ""
    parameters_markdown: str = ""
    parameters_html: str = ""
    remarks_markdown: str = ""
    remarks_html: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Topic":
        return cls(
            id=_int(data, "Id"),
            tag_id=_int(data, "DocTagId"),
            title=_text(data, "Title"),
            versions_json=_text(data, "VersionsJson"),
            hello_world_versions_html=_text(data, "HelloWorldVersionsHtml"),
            introduction_markdown=_text(data, "IntroductionMarkdown"),
            introduction_html=_text(data, "IntroductionHtml"),
            syntax_markdown=_text(data, "SyntaxMarkdown"),
            syntax_html=_text(data, "SyntaxHtml"),
            parameters_markdown=_text(data, "ParametersMarkdown"),
            parameters_html=_text(data, "ParametersHtml"),
            remarks_markdown=_text(data, "RemarksMarkdown"),
            remarks_html=_text(data, "RemarksHtml"),
        )


@dataclass(frozen=True)
class TopicHistory:
    tag_id: int
    topic_id: int
    example_id: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TopicHistory":
        return cls(
            tag_id=_int(data, "DocTagId"),
            topic_id=_int(data, "DocTopicId"),
            example_id=_int(data, "DocExampleId"),
        )


@dataclass
class Example:
    id: int
    title: str = ""
    score: int = 0
    is_pinned: bool = False
    body_markdown: str = ""
    body_html: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Example":
        return cls(
            id=_int(data, "Id"),
            title=_text(data, "Title"),
            score=_int(data, "Score"),
            is_pinned=bool(data.get("IsPinned") or False),
            body_markdown=_text(data, "BodyMarkdown"),
            body_html=_text(data, "BodyHtml"),
        )


@dataclass
class ImportSession:
    """Everything one run reads and accumulates; built once, passed explicitly."""

    tags: List[Tag] = field(default_factory=list)
    topics: List[Topic] = field(default_factory=list)
    topic_histories: List[TopicHistory] = field(default_factory=list)
    examples: List[Example] = field(default_factory=list)
    # diagnostics accumulated while building books
    empty_examples: List[Example] = field(default_factory=list)


def load_records(path: Path) -> List[Dict[str, Any]]:
    """Read one gzip-compressed JSON array of objects."""
    if not path.is_file():
        raise LoadError(f"Missing dump file {path}")
    try:
        with gzip.open(path, "rt", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, EOFError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LoadError(f"Can't read {path}: {exc}") from exc
    if not isinstance(data, list):
        raise LoadError(f"Expected a JSON array in {path}, got {type(data).__name__}")
    for row in data:
        if not isinstance(row, dict):
            raise LoadError(f"Expected JSON objects in {path}, got {type(row).__name__}")
    return data


def load_dump(dump_dir: Path) -> ImportSession:
    dump_dir = Path(dump_dir)
    time_start = time.monotonic()
    session = ImportSession(
        tags=[Tag.from_dict(r) for r in load_records(dump_dir / DOCTAGS_FILE)],
        topics=[Topic.from_dict(r) for r in load_records(dump_dir / TOPICS_FILE)],
        topic_histories=[TopicHistory.from_dict(r) for r in load_records(dump_dir / TOPIC_HISTORIES_FILE)],
        examples=[Example.from_dict(r) for r in load_records(dump_dir / EXAMPLES_FILE)],
    )
    # stderr keeps stdout clean for list_tags.py output
    print(f"Loaded dump from {dump_dir} in {time.monotonic() - time_start:.2f}s", file=sys.stderr)
    return session
