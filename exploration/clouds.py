"""
exploration/clouds.py
---------------------
Seeded word clouds from frequency tables.

Layout randomness (which words are drawn vertically, where they land,
their colours) comes only from the random.Random instance passed to
build_word_cloud, so the same seed and counts give the same cloud.
"""

import logging
import random
from pathlib import Path

import pandas as pd
from wordcloud import WordCloud

from .config import WORDCLOUD_CONFIG, WordCloudConfig

logger = logging.getLogger(__name__)

LAYOUT_COLUMNS = ["word", "weight", "font_size", "x", "y", "angle"]


def make_rng(seed: int | None) -> random.Random:
    """Create the random source for a word-cloud layout."""
    return random.Random(seed)


def word_frequencies(counts: pd.DataFrame) -> dict[str, int]:
    """Sum counts by word across any grouping columns."""
    if counts.empty:
        return {}
    totals = counts.groupby("word", sort=False)["count"].sum()
    totals = totals[totals > 0]
    return {str(word): int(n) for word, n in totals.items()}


def build_word_cloud(
    counts: pd.DataFrame,
    rng: random.Random,
    config: WordCloudConfig = WORDCLOUD_CONFIG,
) -> WordCloud:
    """
    Lay out a word cloud for a frequency table.

    Args:
        counts: DataFrame with columns word, count (grouping columns are summed over)
        rng: Random source for rotation, placement and colour
        config: Canvas and layout settings

    Returns:
        Generated WordCloud (see word_cloud_layout for the placed words)

    Raises:
        ValueError: If there are no words to draw
    """
    frequencies = word_frequencies(counts)
    if not frequencies:
        raise ValueError("No words to draw in word cloud")

    cloud = WordCloud(
        width=config.width,
        height=config.height,
        background_color=config.background_color,
        colormap=config.colormap,
        max_words=config.max_words,
        min_font_size=config.min_font_size,
        prefer_horizontal=1.0 - config.rotate_share,
        random_state=rng,
    )
    cloud.generate_from_frequencies(frequencies)

    logger.info(
        f"Word cloud placed {len(cloud.layout_)} of {len(frequencies):,} words "
        f"({config.width}x{config.height})"
    )
    return cloud


def word_cloud_layout(cloud: WordCloud) -> pd.DataFrame:
    """
    Table of placed words.

    Returns:
        DataFrame with columns word, weight (relative to the top word),
        font_size, x, y (top-left pixel), angle (0 or 90)
    """
    rows = []
    for (word, weight), font_size, position, orientation, _color in cloud.layout_:
        rows.append({
            "word": word,
            "weight": float(weight),
            "font_size": int(font_size),
            "x": int(position[1]),
            "y": int(position[0]),
            "angle": 0 if orientation is None else 90,
        })
    return pd.DataFrame(rows, columns=LAYOUT_COLUMNS)


def save_word_cloud(cloud: WordCloud, path: Path) -> Path:
    """Write the word cloud image (PNG)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    cloud.to_file(str(path))
    logger.info(f"Saved word cloud to {path}")
    return path
