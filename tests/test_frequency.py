"""
tests/test_frequency.py
-----------------------
Unit tests for word-frequency aggregation:
- Exact counts per corpus, book, and chapter
- Stop-word filtering (idempotent, non-mutating)
- Top-N selection with deterministic word-order tie-break
- Totals per book and chapter

Run with: python -m pytest tests/test_frequency.py -v
"""

import pandas as pd
import pytest

from analytics.frequency import (
    chapter_totals,
    count_words,
    normalize_group_keys,
    remove_stop_words,
    top_n_words,
    total_words,
)
from collection.corpus import Corpus
from extraction.processing.tokenizer import tokenize_corpus


def make_tokens(mapping: dict) -> pd.DataFrame:
    return tokenize_corpus(Corpus.from_mapping(mapping))


@pytest.fixture
def tokens():
    return make_tokens({
        "Book A": [
            "Harry saw Harry. The owl saw the castle.",
            "Harry and the owl.",
        ],
        "Book B": [
            "Dobby the elf. Dobby is free!",
        ],
        "Book C": [""],
    })


class TestCountWords:
    """Tests for count_words."""

    def test_end_to_end_example(self):
        """'Harry saw Harry.' counts harry twice and saw once."""
        tokens = make_tokens({"Book A": ["Harry saw Harry."]})
        counts = count_words(tokens, by=None)

        assert list(counts.columns) == ["word", "count"]
        assert list(counts.itertuples(index=False, name=None)) == [("harry", 2), ("saw", 1)]

    def test_case_insensitive_single_key(self):
        """'Harry' and 'harry' aggregate to one key."""
        tokens = make_tokens({"A": ["Harry harry HARRY"]})
        counts = count_words(tokens, by=None)
        assert counts["word"].tolist() == ["harry"]
        assert counts["count"].tolist() == [3]

    def test_counts_by_book(self, tokens):
        """Counts are exact per book."""
        counts = count_words(tokens, by="book")
        book_a = counts[counts["book"] == "Book A"].set_index("word")["count"]

        assert book_a["harry"] == 3
        assert book_a["the"] == 3
        assert book_a["saw"] == 2
        assert book_a["castle"] == 1

    def test_counts_sum_to_book_totals(self, tokens):
        """Per-book counts sum to the per-book token total."""
        counts = count_words(tokens, by="book")
        summed = counts.groupby("book", observed=True)["count"].sum()
        totals = total_words(tokens).set_index("book")["total_words"]

        for book, n in summed.items():
            assert n == totals[book]
        assert summed.sum() == len(tokens)

    def test_ordering(self, tokens):
        """Books in corpus order, then count descending, then word ascending."""
        counts = count_words(tokens, by="book")

        assert counts["book"].astype(str).tolist()[0] == "Book A"
        assert counts["book"].astype(str).tolist()[-1] == "Book B"
        book_a = counts[counts["book"] == "Book A"]
        # harry and the tie at 3: lexical order puts harry first
        assert book_a["word"].tolist()[:2] == ["harry", "the"]
        # owl and saw tie at 2: owl first
        assert book_a["word"].tolist()[2:4] == ["owl", "saw"]

    def test_counts_by_chapter(self, tokens):
        """Grouping by book and chapter counts within each chapter."""
        counts = count_words(tokens, by=("book", "chapter"))

        assert list(counts.columns) == ["book", "chapter", "word", "count"]
        ch2 = counts[(counts["book"] == "Book A") & (counts["chapter"] == 2)]
        assert dict(zip(ch2["word"], ch2["count"])) == {"and": 1, "harry": 1, "owl": 1, "the": 1}

    def test_stop_words_removed_before_counting(self, tokens):
        """Stop words never appear in filtered counts."""
        counts = count_words(tokens, by="book", stop_words={"the", "and", "is"})
        assert not counts["word"].isin({"the", "and", "is"}).any()
        assert "harry" in set(counts["word"])

    def test_empty_input(self):
        """No tokens gives an empty table with the right columns."""
        tokens = make_tokens({"A": [""]})
        counts = count_words(tokens, by="book")
        assert counts.empty
        assert list(counts.columns) == ["book", "word", "count"]

    def test_input_not_modified(self, tokens):
        """count_words leaves the token table unchanged."""
        before = tokens.copy()
        count_words(tokens, by="book", stop_words={"the"})
        pd.testing.assert_frame_equal(tokens, before)

    def test_invalid_grouping(self, tokens):
        """Only corpus, book, or book+chapter grouping is allowed."""
        with pytest.raises(ValueError, match="Unsupported grouping"):
            count_words(tokens, by="chapter")
        with pytest.raises(ValueError):
            count_words(tokens, by=("chapter", "book"))


class TestNormalizeGroupKeys:
    """Tests for grouping argument normalisation."""

    def test_accepted_forms(self):
        """Strings, lists and tuples map to column lists."""
        assert normalize_group_keys(None) == []
        assert normalize_group_keys("book") == ["book"]
        assert normalize_group_keys(["book"]) == ["book"]
        assert normalize_group_keys(("book", "chapter")) == ["book", "chapter"]
        assert normalize_group_keys(()) == []


class TestRemoveStopWords:
    """Tests for stop-word filtering."""

    def test_idempotent(self, tokens):
        """Filtering twice equals filtering once."""
        stop_words = {"the", "and", "is", "saw"}
        once = remove_stop_words(tokens, stop_words)
        twice = remove_stop_words(once, stop_words)
        pd.testing.assert_frame_equal(once, twice)

    def test_empty_stop_set_keeps_everything(self, tokens):
        """No stop words means no rows dropped."""
        assert len(remove_stop_words(tokens, set())) == len(tokens)

    def test_does_not_mutate(self, tokens):
        """The input table keeps its rows."""
        n_before = len(tokens)
        remove_stop_words(tokens, {"the"})
        assert len(tokens) == n_before


class TestTopNWords:
    """Tests for per-group top-N selection."""

    def test_never_more_than_n(self, tokens):
        """Each group has at most n rows."""
        counts = count_words(tokens, by="book")
        top = top_n_words(counts, 2, by="book")

        per_book = top.groupby("book", observed=True).size()
        assert (per_book <= 2).all()

    def test_returned_counts_dominate_excluded(self, tokens):
        """Every kept count is >= every dropped count in its group."""
        counts = count_words(tokens, by="book")
        top = top_n_words(counts, 3, by="book")

        for book, group in counts.groupby("book", observed=True):
            kept = top[top["book"] == book]
            dropped = group[~group["word"].isin(kept["word"])]
            if not kept.empty and not dropped.empty:
                assert kept["count"].min() >= dropped["count"].max()

    def test_tie_break_is_lexical(self):
        """Words tied at the boundary are chosen in alphabetical order."""
        counts = pd.DataFrame({
            "word": ["pear", "apple", "fig", "kiwi"],
            "count": [5, 1, 1, 1],
        })
        top = top_n_words(counts, 3, by=None)
        assert top["word"].tolist() == ["pear", "apple", "fig"]

    def test_fewer_than_n(self, tokens):
        """Groups with fewer than n words return all of them."""
        counts = count_words(tokens, by="book")
        top = top_n_words(counts, 100, by="book")
        assert len(top) == len(counts)

    def test_empty_group_absent(self, tokens):
        """A book without tokens contributes no rows."""
        counts = count_words(tokens, by="book")
        top = top_n_words(counts, 5, by="book")
        assert "Book C" not in set(top["book"].astype(str))

    def test_whole_corpus(self, tokens):
        """by=None picks the top words overall."""
        counts = count_words(tokens, by=None)
        top = top_n_words(counts, 2, by=None)
        assert top["word"].tolist() == ["the", "harry"]

    def test_invalid_n(self, tokens):
        """n must be at least 1."""
        counts = count_words(tokens, by="book")
        with pytest.raises(ValueError, match="n must be"):
            top_n_words(counts, 0)

    def test_missing_group_column(self):
        """Grouping by a column the counts do not have fails."""
        counts = pd.DataFrame({"word": ["a"], "count": [1]})
        with pytest.raises(ValueError, match="no"):
            top_n_words(counts, 1, by="book")


class TestTotals:
    """Tests for per-book and per-chapter totals."""

    def test_total_words_per_book(self, tokens):
        """Totals are in corpus order and include empty books."""
        totals = total_words(tokens)

        assert list(totals.columns) == ["book", "total_words"]
        assert totals["book"].astype(str).tolist() == ["Book A", "Book B", "Book C"]
        assert totals["total_words"].tolist() == [12, 6, 0]

    def test_chapter_totals(self, tokens):
        """Totals per chapter with tokens."""
        chapters = chapter_totals(tokens)

        assert list(chapters.columns) == ["book", "chapter", "total_words"]
        rows = list(zip(chapters["book"].astype(str), chapters["chapter"], chapters["total_words"]))
        assert rows == [("Book A", 1, 8), ("Book A", 2, 4), ("Book B", 1, 6)]

    def test_chapter_totals_empty(self):
        """No tokens gives an empty chapter table."""
        chapters = chapter_totals(make_tokens({"A": [""]}))
        assert chapters.empty
        assert list(chapters.columns) == ["book", "chapter", "total_words"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
