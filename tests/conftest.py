import gzip
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))


def write_gz_json(path: Path, rows) -> None:
    with gzip.open(path, "wt", encoding="utf-8") as f:
        json.dump(rows, f)


@pytest.fixture
def make_dump(tmp_path):
    """Write the four dump files and return the dump directory."""

    def _make(tags=(), topics=(), histories=(), examples=()):
        dump_dir = tmp_path / "dump"
        dump_dir.mkdir(exist_ok=True)
        write_gz_json(dump_dir / "doctags.json.gz", list(tags))
        write_gz_json(dump_dir / "topics.json.gz", list(topics))
        write_gz_json(dump_dir / "topichistories.json.gz", list(histories))
        write_gz_json(dump_dir / "examples.json.gz", list(examples))
        return dump_dir

    return _make
