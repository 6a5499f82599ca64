"""
analytics/config.py
-------------------
Configuration for word-frequency aggregation.
"""

from dataclasses import dataclass, field


@dataclass
class FrequencyConfig:
    """Configuration for word counting and top-N selection."""

    # Version tracking
    version: str = "1.0.0"

    # Top-N words kept per group
    top_n: int = 10

    # Grouping for top-N tables: None (whole corpus), "book", or ("book", "chapter")
    group_by: str | tuple | None = "book"

    # Stop-word filtering for top-N tables and word clouds
    remove_stop_words: bool = True

    # Words excluded in addition to the stop-word list
    extra_stop_words: list = field(default_factory=list)


# Default configuration
FREQUENCY_CONFIG = FrequencyConfig()
