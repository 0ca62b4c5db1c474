#!/usr/bin/env python3
import argparse
import sys
import textwrap
from pathlib import Path

import yaml

from dump_records import DEFAULT_DUMP_DIR, ImportFailure, load_dump
from linker import Linker


def main() -> None:
    parser = argparse.ArgumentParser(description="List dump tags with topic/example counts as books.yml entries.")
    parser.add_argument("--dump-dir", default=DEFAULT_DUMP_DIR, help="Directory with the *.json.gz dump files")
    parser.add_argument("--min-examples", type=int, default=0, help="Hide tags with fewer examples")
    args = parser.parse_args()

    try:
        session = load_dump(Path(args.dump_dir))
    except ImportFailure as exc:
        sys.exit(f"Listing failed: {exc}")

    Linker(session).calc_example_counts()
    tags = sorted(session.tags, key=lambda t: t.example_count)

    print("books:")
    for tag in tags:
        if tag.example_count < args.min_examples:
            continue
        entry = {"source_title": tag.title, "display_name": "", "import": False}
        print(f"  # {tag.example_count} examples, {tag.topic_count} topics")
        print(textwrap.indent(yaml.safe_dump([entry], sort_keys=False, allow_unicode=True), "  "), end="")


if __name__ == "__main__":
    main()
