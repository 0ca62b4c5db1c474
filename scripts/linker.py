#!/usr/bin/env python3

import logging
from typing import Dict, List, Optional, Set

from dump_records import Example, ImportSession, MissingTagError, Tag, Topic


log = logging.getLogger("so-books")


class Linker:
    def __init__(self, session: ImportSession) -> None:
        self.session = session
        self.unresolved_count = 0
        self._examples_by_id: Dict[int, Example] = {}
        for ex in session.examples:
            # first record wins if the dump repeats an id
            self._examples_by_id.setdefault(ex.id, ex)

    def find_tag_by_title(self, title: str) -> Tag:
        for tag in self.session.tags:
            if tag.title == title:
                return tag
        raise MissingTagError(f"Didn't find DocTag with title '{title}'")

    def topics_for_tag(self, tag_id: int) -> List[Topic]:
        return [t for t in self.session.topics if t.tag_id == tag_id]

    def example_by_id(self, example_id: int) -> Optional[Example]:
        return self._examples_by_id.get(example_id)

    def examples_for_topic(self, tag_id: int, topic_id: int) -> List[Example]:
        """Examples linked to a topic, each at most once, in history order."""
        res: List[Example] = []
        seen_ids: Set[int] = set()
        for th in self.session.topic_histories:
            if th.tag_id != tag_id or th.topic_id != topic_id:
                continue
            if th.example_id in seen_ids:
                continue
            seen_ids.add(th.example_id)
            ex = self.example_by_id(th.example_id)
            if ex is None:
                self.unresolved_count += 1
                log.debug("Didn't find example %d, tag: %d, topic: %d", th.example_id, tag_id, topic_id)
                continue
            res.append(ex)
        return res

    def example_count(self, tag_id: int) -> int:
        topic_ids = {t.id for t in self.topics_for_tag(tag_id)}
        ids: Set[int] = set()
        for th in self.session.topic_histories:
            if th.tag_id == tag_id and th.topic_id in topic_ids and th.example_id in self._examples_by_id:
                ids.add(th.example_id)
        return len(ids)

    def calc_example_counts(self) -> None:
        for tag in self.session.tags:
            tag.example_count = self.example_count(tag.id)
