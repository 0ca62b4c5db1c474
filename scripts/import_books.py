#!/usr/bin/env python3
import argparse
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

from tqdm import tqdm

from book_config import DEFAULT_BOOKS_CONFIG, Book, books_to_import, load_books, make_url_safe
from dump_records import DEFAULT_DUMP_DIR, ImportFailure, ImportSession, WriteError, load_dump
from kvrecord import is_empty_string, serialize_chapter, serialize_section
from linker import Linker
from ordering import sort_examples


log = logging.getLogger("so-books")

CHAPTER_INDEX_FILE = "index.txt"
NUMBER_STEP = 10


@dataclass
class BookReport:
    name: str
    chapters: int
    sections: int
    elapsed: float


def chapter_dir_name(number: int, title: str) -> str:
    return f"{number:04d}-{make_url_safe(title)}"


def section_file_name(number: int, title: str) -> str:
    return f"{number:03d}-{make_url_safe(title)}.md"


def write_record(path: Path, text: str) -> None:
    # encode before opening so a bad value leaves no truncated file behind
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise WriteError(f"Can't encode {path}: {exc}") from exc
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    log.debug("Wrote %s, %d bytes", path, len(data))


def gen_book(session: ImportSession, linker: Linker, book: Book, books_dir: Path, show_progress: bool = True) -> BookReport:
    time_start = time.monotonic()
    tag = linker.find_tag_by_title(book.source_title)
    book_dir = books_dir / book.dir_name
    topics = linker.topics_for_tag(tag.id)
    tag.example_count = linker.example_count(tag.id)
    log.debug("%s: tag %d, %d topics, %d examples", book.source_title, tag.id, len(topics), tag.example_count)

    n_sections = 0
    chapter = NUMBER_STEP
    for topic in tqdm(topics, desc=book.name, disable=not show_progress):
        examples = sort_examples(linker.examples_for_topic(tag.id, topic.id))

        chapter_dir = book_dir / chapter_dir_name(chapter, topic.title)
        write_record(chapter_dir / CHAPTER_INDEX_FILE, serialize_chapter(topic))
        chapter += NUMBER_STEP

        section = NUMBER_STEP
        for ex in examples:
            if is_empty_string(ex.body_markdown) and is_empty_string(ex.body_html):
                session.empty_examples.append(ex)
                continue
            write_record(chapter_dir / section_file_name(section, ex.title), serialize_section(ex))
            section += NUMBER_STEP
            n_sections += 1

    return BookReport(
        name=book.source_title,
        chapters=len(topics),
        sections=n_sections,
        elapsed=time.monotonic() - time_start,
    )


def import_books(session: ImportSession, books: List[Book], books_dir: Path, show_progress: bool = True) -> List[BookReport]:
    linker = Linker(session)
    reports: List[BookReport] = []
    for book in books_to_import(books):
        report = gen_book(session, linker, book, books_dir, show_progress=show_progress)
        print(f"Imported {report.name} ({report.chapters} chapters, {report.sections} sections) in {report.elapsed:.2f}s")
        reports.append(report)
    if linker.unresolved_count:
        print(f"Skipped {linker.unresolved_count} unresolved example references")
    return reports


def print_empty_examples(session: ImportSession) -> None:
    for ex in session.empty_examples:
        print(f"empty example: {ex.title}, len(BodyHtml): {len(ex.body_html)}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Import books from the Stack Overflow Documentation dump.")
    parser.add_argument("--dump-dir", default=DEFAULT_DUMP_DIR, help="Directory with the *.json.gz dump files")
    parser.add_argument("--config", default=DEFAULT_BOOKS_CONFIG, help="YAML list of books to import")
    parser.add_argument("--books-dir", default="books", help="Output directory for generated books")
    parser.add_argument("--verbose", action="store_true", help="Log every written file and unresolved example")
    parser.add_argument("--quiet", action="store_true", help="Hide progress bars")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    time_start = time.monotonic()
    try:
        books = load_books(Path(args.config))
        session = load_dump(Path(args.dump_dir))
        import_books(session, books, Path(args.books_dir), show_progress=not args.quiet)
    except (ImportFailure, OSError) as exc:
        sys.exit(f"Import failed: {exc}")
    print(f"Took {time.monotonic() - time_start:.2f}s")
    print_empty_examples(session)


if __name__ == "__main__":
    main()
