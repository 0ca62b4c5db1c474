"""Tests for section ordering (scripts/ordering.py)"""

import random

from dump_records import Example
from ordering import sort_examples


def ex(id, score, pinned=False):
    return Example(id=id, title=str(id), score=score, is_pinned=pinned)


class TestSortExamples:
    def test_pinned_first_then_score_desc(self):
        examples = [ex(1, 5), ex(2, 9, True), ex(3, 20), ex(4, 1, True)]
        assert [e.id for e in sort_examples(examples)] == [2, 4, 3, 1]

    def test_equal_scores_keep_input_order(self):
        examples = [ex(1, 3), ex(2, 3), ex(3, 3)]
        assert [e.id for e in sort_examples(examples)] == [1, 2, 3]

    def test_input_list_is_untouched(self):
        examples = [ex(1, 1), ex(2, 2)]
        sort_examples(examples)
        assert [e.id for e in examples] == [1, 2]

    def test_groups_hold_for_shuffled_input(self):
        rng = random.Random(7)
        examples = [ex(i, rng.randint(-5, 50), rng.random() < 0.3) for i in range(60)]
        rng.shuffle(examples)
        ordered = sort_examples(examples)
        pinned = [e for e in ordered if e.is_pinned]
        assert ordered[: len(pinned)] == pinned
        for group in (pinned, ordered[len(pinned):]):
            scores = [e.score for e in group]
            assert scores == sorted(scores, reverse=True)
