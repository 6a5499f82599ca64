"""
exploration/charts.py
---------------------
matplotlib charts for word-frequency tables.

Each function returns the Figure and saves it when a path is given.
The caller closes figures it no longer needs (plt.close(fig)).
"""

import logging
import math
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from .config import CHART_CONFIG, ChartConfig

logger = logging.getLogger(__name__)


def _save(fig, path: Path | None, config: ChartConfig) -> None:
    if path is None:
        return
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=config.dpi, bbox_inches="tight")
    logger.info(f"Saved chart to {path}")


def plot_total_words(
    totals: pd.DataFrame,
    path: Path | None = None,
    config: ChartConfig = CHART_CONFIG,
):
    """
    Bar chart of total words per book.

    Args:
        totals: DataFrame with columns book, total_words
        path: Optional PNG output path

    Raises:
        ValueError: If totals is empty
    """
    if totals.empty:
        raise ValueError("No book totals to plot")

    fig, ax = plt.subplots(figsize=config.totals_figsize)
    books = totals["book"].astype(str).tolist()
    ax.bar(books, totals["total_words"], color=config.totals_color)

    ax.set_title("Total words per book")
    ax.set_xlabel("Book")
    ax.set_ylabel("Total words")
    ax.tick_params(axis="x", labelrotation=45)
    for label in ax.get_xticklabels():
        label.set_horizontalalignment("right")
    fig.tight_layout()

    _save(fig, path, config)
    return fig


def plot_top_words(
    top: pd.DataFrame,
    path: Path | None = None,
    config: ChartConfig = CHART_CONFIG,
):
    """
    Horizontal bar panels of the top words, one panel per book.

    Args:
        top: DataFrame with columns book, word, count (top-N per book)
        path: Optional PNG output path

    Raises:
        ValueError: If top is empty
    """
    if top.empty:
        raise ValueError("No top words to plot")

    groups = [(book, group) for book, group in top.groupby("book", observed=True, sort=True)]
    n_panels = len(groups)
    ncols = max(1, min(config.facet_columns, n_panels))
    nrows = math.ceil(n_panels / ncols)

    fig, axes = plt.subplots(
        nrows, ncols,
        figsize=(ncols * config.facet_width, nrows * config.facet_height),
        squeeze=False,
    )
    flat_axes = axes.flatten()

    for ax, (book, group) in zip(flat_axes, groups):
        # Largest bar at the top
        group = group.iloc[::-1]
        ax.barh(group["word"], group["count"], color=config.top_words_color)
        ax.set_title(str(book))
        ax.set_xlabel("Count")

    for ax in flat_axes[n_panels:]:
        ax.set_visible(False)

    fig.suptitle("Top words per book")
    fig.tight_layout()

    _save(fig, path, config)
    return fig


def plot_chapter_lengths(
    chapter_totals: pd.DataFrame,
    path: Path | None = None,
    config: ChartConfig = CHART_CONFIG,
):
    """
    Line chart of words per chapter, one line per book.

    Args:
        chapter_totals: DataFrame with columns book, chapter, total_words
        path: Optional PNG output path

    Raises:
        ValueError: If chapter_totals is empty
    """
    if chapter_totals.empty:
        raise ValueError("No chapter totals to plot")

    fig, ax = plt.subplots(figsize=config.chapter_figsize)
    for book, group in chapter_totals.groupby("book", observed=True, sort=True):
        ax.plot(group["chapter"], group["total_words"], marker="o", markersize=3, label=str(book))

    ax.set_title("Words per chapter")
    ax.set_xlabel("Chapter")
    ax.set_ylabel("Total words")
    ax.legend(fontsize="small")
    fig.tight_layout()

    _save(fig, path, config)
    return fig
