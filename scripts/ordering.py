#!/usr/bin/env python3

from typing import Iterable, List, Tuple

from dump_records import Example


def example_sort_key(ex: Example) -> Tuple[int, int]:
    return (0 if ex.is_pinned else 1, -ex.score)


def sort_examples(examples: Iterable[Example]) -> List[Example]:
    # sorted() is stable: equal keys keep history order
    return sorted(examples, key=example_sort_key)
