"""
extraction/processing/stopwords.py
----------------------------------
Stop-word reference data.

The default list is scikit-learn's English stop-word list, the same one
CountVectorizer(stop_words="english") applies. Custom lists are plain text
files with one word per line; blank lines and "#" comments are ignored.
"""

import logging
from pathlib import Path

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

logger = logging.getLogger(__name__)

DEFAULT_STOP_WORDS: frozenset[str] = frozenset(ENGLISH_STOP_WORDS)


def read_stop_word_file(path: Path) -> set[str]:
    """
    Read a stop-word file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Stop-word list not found at {path}")

    words = set()
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.split("#", 1)[0].strip().lower()
            if word:
                words.add(word)

    logger.info(f"Loaded {len(words):,} stop words from {path}")
    return words


def load_stop_words(
    path: Path | None = None,
    extra: list[str] | None = None,
    include_defaults: bool = True,
) -> frozenset[str]:
    """
    Build the stop-word set used for frequency filtering.

    Args:
        path: Optional stop-word file merged into the set
        extra: Additional words (e.g. character names) to exclude
        include_defaults: Start from DEFAULT_STOP_WORDS

    Returns:
        Lowercased, read-only stop-word set
    """
    words = set(DEFAULT_STOP_WORDS) if include_defaults else set()

    if path is not None:
        words |= read_stop_word_file(path)

    if extra:
        words |= {w.strip().lower() for w in extra if w.strip()}

    logger.debug(f"Stop-word set has {len(words):,} entries")
    return frozenset(words)
