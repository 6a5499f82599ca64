"""
extraction/processing/tokenizer.py
----------------------------------
Word tokenizer for chapter text.

Splits raw text into lowercase word tokens with surrounding punctuation
removed. Inner apostrophes are kept ("harry's", "don't"), hyphenated words
split into their parts. Typographic apostrophes are normalised first so
that "Harry’s" and "Harry's" produce the same token. Text is put in
NFC form so accents written as combining marks stay inside the word.

Configuration is tracked for reproducibility.
"""

import logging
import re
import unicodedata
from functools import reduce

import pandas as pd

from collection.corpus import Book, Corpus

logger = logging.getLogger(__name__)

# Configuration - tracked for reproducibility
TOKENIZER_CONFIG = {
    "pattern": r"[^\W_]+(?:'[^\W_]+)*",
    "lowercase": True,
    "unicode_form": "NFC",  # combining accents composed before matching
    "apostrophes": "’‘ʼ",  # normalised to "'"
}

WORD_REGEX = re.compile(TOKENIZER_CONFIG["pattern"])
_APOSTROPHE_TABLE = str.maketrans({ch: "'" for ch in TOKENIZER_CONFIG["apostrophes"]})

TOKEN_COLUMNS = ["book", "chapter", "word"]


def get_config() -> dict:
    """Get tokenizer configuration for tracking."""
    config = TOKENIZER_CONFIG.copy()
    config["pandas_version"] = pd.__version__
    return config


def tokenize_text(text: str) -> list[str]:
    """
    Split text into lowercase word tokens.

    Args:
        text: Raw chapter text

    Returns:
        Tokens in reading order (empty list for empty text)

    Examples:
        >>> tokenize_text("Harry saw Harry.")
        ['harry', 'saw', 'harry']
    """
    if not text:
        return []
    text = unicodedata.normalize(TOKENIZER_CONFIG["unicode_form"], text)
    text = text.translate(_APOSTROPHE_TABLE)
    if TOKENIZER_CONFIG["lowercase"]:
        text = text.lower()
    return WORD_REGEX.findall(text)


def empty_tokens() -> pd.DataFrame:
    """Token table with no rows and the standard columns."""
    return pd.DataFrame({
        "book": pd.Series(dtype="object"),
        "chapter": pd.Series(dtype="int64"),
        "word": pd.Series(dtype="object"),
    })


def tokenize_book(book: Book) -> pd.DataFrame:
    """
    Tokenize every chapter of a book.

    Returns:
        DataFrame with columns book, chapter (1-based), word - one row per
        token occurrence, in reading order
    """
    chapters = []
    words = []
    for chapter_idx, text in enumerate(book.chapters, 1):
        tokens = tokenize_text(text)
        chapters.extend([chapter_idx] * len(tokens))
        words.extend(tokens)

    if not words:
        logger.debug(f"No tokens in {book.name!r}")
        return empty_tokens()

    return pd.DataFrame({
        "book": [book.name] * len(words),
        "chapter": pd.Series(chapters, dtype="int64"),
        "word": words,
    })


def accumulate_tokens(frames: list[pd.DataFrame]) -> pd.DataFrame:
    """
    Fold per-book token tables into one table, preserving order.

    Each step builds a new frame; none of the inputs are modified.
    """
    def combine(acc: pd.DataFrame, frame: pd.DataFrame) -> pd.DataFrame:
        if frame.empty:
            return acc
        if acc.empty:
            return frame.reset_index(drop=True)
        return pd.concat([acc, frame], ignore_index=True)

    return reduce(combine, frames, empty_tokens())


def tokenize_corpus(corpus: Corpus) -> pd.DataFrame:
    """
    Tokenize all books of a corpus.

    Returns:
        DataFrame with columns book, chapter, word. `book` is an ordered
        categorical whose categories follow the corpus book order, so
        downstream groupings and sorts keep that order.
    """
    frames = [tokenize_book(book) for book in corpus]
    tokens = accumulate_tokens(frames)

    tokens = tokens.assign(
        book=pd.Categorical(tokens["book"], categories=corpus.book_names, ordered=True),
        chapter=tokens["chapter"].astype("int64"),
    )

    logger.info(
        f"Tokenized {len(corpus)} books ({corpus.total_chapters:,} chapters) "
        f"into {len(tokens):,} tokens"
    )
    return tokens[TOKEN_COLUMNS]
