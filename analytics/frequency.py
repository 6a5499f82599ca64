"""
analytics/frequency.py
----------------------
Word-frequency aggregation over token tables.

All functions return new DataFrames; inputs are never modified. Counts
are always ordered by group (corpus book order, then chapter), then
count descending, then word ascending. The word ordering is the
tie-break for top-N selection.
"""

import logging

import pandas as pd

logger = logging.getLogger(__name__)

GROUP_KEYS = {
    None: [],
    ("book",): ["book"],
    ("book", "chapter"): ["book", "chapter"],
}


def normalize_group_keys(by) -> list[str]:
    """
    Normalise a grouping argument to a list of columns.

    Accepts None, "book", ["book"], ("book", "chapter").

    Raises:
        ValueError: For any other grouping
    """
    if isinstance(by, str):
        key = (by,)
    elif by is None:
        key = None
    else:
        key = tuple(by) or None

    if key not in GROUP_KEYS:
        raise ValueError(
            f"Unsupported grouping {by!r}: expected None, 'book' or ('book', 'chapter')"
        )
    return list(GROUP_KEYS[key])


def sort_counts(counts: pd.DataFrame, keys: list[str]) -> pd.DataFrame:
    """Order a frequency table: group, count descending, word ascending."""
    return counts.sort_values(
        keys + ["count", "word"],
        ascending=[True] * len(keys) + [False, True],
        kind="mergesort",
    ).reset_index(drop=True)


def remove_stop_words(tokens: pd.DataFrame, stop_words) -> pd.DataFrame:
    """Drop rows whose word is in the stop-word set."""
    if not stop_words:
        return tokens.reset_index(drop=True)

    mask = ~tokens["word"].isin(stop_words)
    filtered = tokens[mask].reset_index(drop=True)
    logger.debug(f"Stop-word filter: {len(tokens):,} -> {len(filtered):,} tokens")
    return filtered


def count_words(
    tokens: pd.DataFrame,
    by="book",
    stop_words=None,
) -> pd.DataFrame:
    """
    Count word occurrences per group.

    Args:
        tokens: Token table (book, chapter, word)
        by: None, "book", or ("book", "chapter")
        stop_words: Optional set of words to exclude before counting

    Returns:
        DataFrame with the group columns, then word, count
    """
    keys = normalize_group_keys(by)

    if stop_words:
        tokens = remove_stop_words(tokens, stop_words)

    if tokens.empty:
        return _empty_counts(tokens, keys)

    counts = (
        tokens.groupby(keys + ["word"], observed=True, sort=False)
        .size()
        .reset_index(name="count")
    )
    counts["count"] = counts["count"].astype("int64")

    counts = sort_counts(counts, keys)
    logger.debug(f"Counted {len(counts):,} distinct (group, word) pairs by {keys or 'corpus'}")
    return counts


def top_n_words(counts: pd.DataFrame, n: int, by="book") -> pd.DataFrame:
    """
    Keep the n highest-count words within each group.

    Ties at the boundary are broken by word, ascending. Groups with fewer
    than n words return all of them.

    Raises:
        ValueError: If n < 1
    """
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")

    keys = normalize_group_keys(by)
    missing = [key for key in keys if key not in counts.columns]
    if missing:
        raise ValueError(f"Counts table has no {missing} column(s) to group top words by")
    ordered = sort_counts(counts, keys)

    if not keys:
        return ordered.head(n).reset_index(drop=True)

    top = ordered.groupby(keys, observed=True, sort=False).head(n)
    return top.reset_index(drop=True)


def total_words(tokens: pd.DataFrame) -> pd.DataFrame:
    """
    Total token count per book.

    Books without any tokens report 0 when `book` is categorical.

    Returns:
        DataFrame with columns book, total_words in corpus order
    """
    totals = (
        tokens.groupby("book", observed=False, sort=True)
        .size()
        .reset_index(name="total_words")
    )
    totals["total_words"] = totals["total_words"].astype("int64")
    return totals


def chapter_totals(tokens: pd.DataFrame) -> pd.DataFrame:
    """
    Total token count per chapter.

    Returns:
        DataFrame with columns book, chapter, total_words
    """
    if tokens.empty:
        return pd.DataFrame({
            "book": tokens["book"].iloc[:0],
            "chapter": pd.Series(dtype="int64"),
            "total_words": pd.Series(dtype="int64"),
        })

    totals = (
        tokens.groupby(["book", "chapter"], observed=True, sort=True)
        .size()
        .reset_index(name="total_words")
    )
    totals["total_words"] = totals["total_words"].astype("int64")
    return totals


def _empty_counts(tokens: pd.DataFrame, keys: list[str]) -> pd.DataFrame:
    columns = {key: tokens[key].iloc[:0] for key in keys}
    columns["word"] = pd.Series(dtype="object")
    columns["count"] = pd.Series(dtype="int64")
    return pd.DataFrame(columns)
