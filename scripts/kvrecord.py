#!/usr/bin/env python3

from typing import Dict, List

from dump_records import Example, SeparatorCollisionError, Topic


# Fields are "Key: value" on one line, or "Key:" followed by the value
# lines and a separator line. Empty fields are not written.
KV_RECORD_SEPARATOR = "|======|"
MAX_ONE_LINE_LEN = 80


def is_empty_string(s: str) -> bool:
    return len(s.strip()) == 0


def fits_one_line(s: str) -> bool:
    if len(s) > MAX_ONE_LINE_LEN:
        return False
    if "\n" in s:
        return False
    # a colon in the value would be ambiguous with a block key line
    if ":" in s:
        return False
    return True


def ser_field(key: str, value: str) -> str:
    if is_empty_string(value):
        return ""
    if fits_one_line(value):
        return f"{key}: {value}\n"
    if KV_RECORD_SEPARATOR in value:
        raise SeparatorCollisionError(f"Value of '{key}' contains {KV_RECORD_SEPARATOR}")
    return f"{key}:\n{value}\n{KV_RECORD_SEPARATOR}\n"


def ser_markdown_field(key: str, markdown: str, html: str) -> str:
    """Markdown wins; the Html variant is only written when markdown is empty."""
    if not is_empty_string(markdown):
        return ser_field(key, markdown)
    return ser_field(key + "Html", html)


def shorten_versions(s: str) -> str:
    if s == "[]":
        return ""
    return s


def serialize_chapter(topic: Topic) -> str:
    s = ser_field("Title", topic.title)
    versions = shorten_versions(topic.versions_json)
    s += ser_field("Versions", versions)
    if is_empty_string(versions):
        s += ser_field("VersionsHtml", topic.hello_world_versions_html)
    s += ser_markdown_field("Introduction", topic.introduction_markdown, topic.introduction_html)
    s += ser_markdown_field("Syntax", topic.syntax_markdown, topic.syntax_html)
    s += ser_markdown_field("Parameters", topic.parameters_markdown, topic.parameters_html)
    s += ser_markdown_field("Remarks", topic.remarks_markdown, topic.remarks_html)
    return s


def serialize_section(example: Example) -> str:
    s = ser_field("Title", example.title)
    s += ser_field("Score", str(example.score))
    s += ser_markdown_field("Body", example.body_markdown, example.body_html)
    return s


def parse_kv_record(text: str) -> Dict[str, str]:
    """Read a record back into an ordered key -> value dict."""
    fields: Dict[str, str] = {}
    lines = text.split("\n")
    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1
        if not line.strip():
            continue
        if line.endswith(":") and ": " not in line:
            key = line[:-1]
            block: List[str] = []
            while i < len(lines) and lines[i] != KV_RECORD_SEPARATOR:
                block.append(lines[i])
                i += 1
            if i >= len(lines):
                raise ValueError(f"Block for '{key}' is missing {KV_RECORD_SEPARATOR}")
            i += 1
            fields[key] = "\n".join(block)
            continue
        key, sep, value = line.partition(": ")
        if not sep:
            raise ValueError(f"Malformed line {i}: {line!r}")
        fields[key] = value
    return fields
