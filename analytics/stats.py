"""
analytics/stats.py
------------------
Vocabulary statistics per book.

- total_words: token count
- unique_words: distinct word types
- type_token_ratio: unique_words / total_words
- hapax_legomena: words occurring exactly once in the book
"""

import logging

import pandas as pd

from .frequency import count_words, total_words

logger = logging.getLogger(__name__)


def vocabulary_stats(tokens: pd.DataFrame) -> pd.DataFrame:
    """
    Compute vocabulary richness metrics per book.

    Returns:
        DataFrame with columns book, total_words, unique_words,
        type_token_ratio, hapax_legomena in corpus order
    """
    totals = total_words(tokens)
    counts = count_words(tokens, by="book")

    per_book = (
        counts.assign(is_hapax=(counts["count"] == 1).astype("int64"))
        .groupby("book", observed=False)
        .agg(unique_words=("word", "count"), hapax_legomena=("is_hapax", "sum"))
        .reset_index()
    )

    stats = totals.merge(per_book, on="book", how="left")
    stats["unique_words"] = stats["unique_words"].fillna(0).astype("int64")
    stats["hapax_legomena"] = stats["hapax_legomena"].fillna(0).astype("int64")

    ratio = stats["unique_words"] / stats["total_words"].where(stats["total_words"] > 0)
    stats["type_token_ratio"] = ratio.fillna(0.0).round(4)

    logger.debug(f"Computed vocabulary stats for {len(stats)} books")
    return stats[["book", "total_words", "unique_words", "type_token_ratio", "hapax_legomena"]]


def corpus_summary(tokens: pd.DataFrame) -> dict:
    """Corpus-wide totals for reporting (chapters counted only if they have tokens)."""
    return {
        "n_books": int(tokens["book"].nunique()),
        "n_chapters": int(tokens[["book", "chapter"]].drop_duplicates().shape[0]),
        "total_words": int(len(tokens)),
        "unique_words": int(tokens["word"].nunique()),
    }
