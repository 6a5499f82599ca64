"""
exploration/config.py
---------------------
Configuration for word-frequency charts and word clouds.
"""

from dataclasses import dataclass


@dataclass
class ChartConfig:
    """Configuration for matplotlib bar and line charts."""

    # Version tracking
    version: str = "1.0.0"

    # Output
    dpi: int = 120

    # Total words per book (bar chart)
    totals_figsize: tuple = (10, 6)
    totals_color: str = "steelblue"

    # Top words per book (one panel per book)
    facet_columns: int = 2
    facet_width: float = 5.0
    facet_height: float = 3.5
    top_words_color: str = "darkorange"

    # Words per chapter (line chart)
    chapter_figsize: tuple = (12, 6)


@dataclass
class WordCloudConfig:
    """Configuration for word-cloud layout."""

    # Version tracking
    version: str = "1.0.0"

    # Canvas
    width: int = 800
    height: int = 400
    background_color: str = "white"
    colormap: str = "viridis"

    # Words placed
    max_words: int = 100
    min_font_size: int = 4

    # Share of words drawn vertically (90 degrees); the rest are horizontal
    rotate_share: float = 0.4


# Default configurations
CHART_CONFIG = ChartConfig()
WORDCLOUD_CONFIG = WordCloudConfig()
