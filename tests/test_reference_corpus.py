"""
tests/test_reference_corpus.py
------------------------------
Checks against the real novel text, which is not bundled with the repo.

Skipped unless NOVELSTATS_CORPUS_PATH points at an existing corpus.

Run with: NOVELSTATS_CORPUS_PATH=data/novels.jsonl python -m pytest tests/test_reference_corpus.py -v
"""

import os
from pathlib import Path

import pytest

from analytics.frequency import count_words, total_words
from collection.corpus import load_corpus
from extraction.processing.tokenizer import tokenize_corpus

CORPUS_ENV = "NOVELSTATS_CORPUS_PATH"
PHILOSOPHERS_STONE_TOTAL = 77875

pytestmark = pytest.mark.skipif(
    not os.getenv(CORPUS_ENV) or not Path(os.getenv(CORPUS_ENV)).exists(),
    reason=f"{CORPUS_ENV} not set to an existing corpus",
)


@pytest.fixture(scope="module")
def tokens():
    return tokenize_corpus(load_corpus(os.environ[CORPUS_ENV]))


def find_book(names, fragment: str) -> str:
    matches = [name for name in names if fragment in name.lower()]
    if not matches:
        pytest.skip(f"No book matching {fragment!r} in corpus")
    return matches[0]


class TestReferenceCorpus:
    """Tests for the supplied novel corpus."""

    def test_philosophers_stone_total(self, tokens):
        """Philosopher's Stone has 77875 tokens."""
        totals = total_words(tokens)
        totals["book"] = totals["book"].astype(str)
        book = find_book(totals["book"].tolist(), "philosopher")

        assert totals.set_index("book").loc[book, "total_words"] == PHILOSOPHERS_STONE_TOTAL

    def test_word_counts_sum_to_book_totals(self, tokens):
        """Unfiltered per-book word counts sum to each book's total."""
        summed = count_words(tokens, by="book").groupby("book", observed=False)["count"].sum()
        totals = total_words(tokens).set_index("book")["total_words"]

        for book, total in totals.items():
            assert summed.get(book, 0) == total, book


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
