"""
analytics/pipeline.py
---------------------
End-to-end word-frequency analysis: tokens -> counts -> tables and charts.
"""

import json
import logging
from dataclasses import asdict
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from collection.corpus import Corpus
from extraction.processing.tokenizer import (
    get_config as get_tokenizer_config,
    tokenize_corpus,
)
from exploration.charts import plot_chapter_lengths, plot_top_words, plot_total_words
from exploration.clouds import build_word_cloud, make_rng, save_word_cloud, word_cloud_layout
from novelstats.config import OUTPUT_DIR, get_random_seed

from .config import FREQUENCY_CONFIG, FrequencyConfig
from .frequency import chapter_totals, count_words, normalize_group_keys, top_n_words, total_words
from .stats import vocabulary_stats

logger = logging.getLogger(__name__)


def save_tables(tables: dict[str, pd.DataFrame], output_dir: Path) -> dict:
    """Write each table to <output_dir>/<name>.parquet (book names stored as text)."""
    paths = {}
    for name, df in tables.items():
        path = output_dir / f"{name}.parquet"
        categorical = df.select_dtypes("category").columns
        df.astype({col: str for col in categorical}).to_parquet(path, index=False)
        paths[name] = path
        logger.info(f"Saved {name} ({len(df):,} rows) to {path}")
    return paths


def save_top_words_json(top: pd.DataFrame, output_dir: Path, by="book") -> Path:
    """Write top words as JSON, one entry per group (a single entry for by=None)."""
    keys = normalize_group_keys(by)
    groups = top.groupby(keys, observed=True, sort=True) if keys else [((), top)]

    groups_json = []
    for key, group in groups:
        key = key if isinstance(key, tuple) else (key,)
        entry = {
            col: str(value) if col == "book" else int(value)
            for col, value in zip(keys, key)
        }
        entry["words"] = [
            {"word": row["word"], "count": int(row["count"])}
            for _, row in group.iterrows()
        ]
        groups_json.append(entry)

    path = output_dir / "top_words.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(groups_json, f, indent=2)
    logger.info(f"Saved top words to {path}")
    return path


def save_run_config(
    output_dir: Path,
    frequency_config: FrequencyConfig,
    top_n: int,
    seed: int,
) -> Path:
    """Record the tokenizer and frequency settings used for this run."""
    run_config = {
        "tokenizer": get_tokenizer_config(),
        "frequency": asdict(frequency_config),
        "top_n": top_n,
        "seed": seed,
    }

    path = output_dir / "run_config.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(run_config, f, indent=2)
    logger.info(f"Saved run configuration to {path}")
    return path


def generate_visualizations(
    totals: pd.DataFrame,
    top: pd.DataFrame,
    chapters: pd.DataFrame,
    filtered_counts: pd.DataFrame,
    output_dir: Path,
    seed: int,
    by="book",
) -> dict:
    """Render charts and the word cloud into output_dir."""
    paths = {}

    charts = [
        ("total_words_chart", plot_total_words, totals, "total_words.png"),
        ("top_words_chart", plot_top_words, top, "top_words.png"),
        ("chapter_lengths_chart", plot_chapter_lengths, chapters, "chapter_lengths.png"),
    ]
    if normalize_group_keys(by) != ["book"]:
        logger.info(f"Skipping top_words_chart: panels need per-book top words, got by={by!r}")
        charts = [chart for chart in charts if chart[0] != "top_words_chart"]

    for name, plot, table, filename in charts:
        if table.empty:
            logger.warning(f"Skipping {name}: no data")
            continue
        path = output_dir / filename
        fig = plot(table, path)
        plt.close(fig)
        paths[name] = path

    if filtered_counts.empty:
        logger.warning("Skipping word cloud: no words left after filtering")
        return paths

    cloud = build_word_cloud(filtered_counts, make_rng(seed))
    paths["wordcloud"] = save_word_cloud(cloud, output_dir / "wordcloud.png")

    layout_path = output_dir / "wordcloud_layout.parquet"
    word_cloud_layout(cloud).to_parquet(layout_path, index=False)
    paths["wordcloud_layout"] = layout_path
    logger.info(f"Saved word cloud layout to {layout_path}")

    return paths


def run_analysis(
    corpus: Corpus,
    stop_words=None,
    output_dir: Path | None = None,
    top_n: int | None = None,
    seed: int | None = None,
    generate_viz: bool = True,
    frequency_config: FrequencyConfig = FREQUENCY_CONFIG,
) -> dict:
    """
    Full word-frequency pipeline.

    Args:
        corpus: Books to analyse
        stop_words: Words excluded from top-N and word cloud (totals always
            count every token). Ignored when
            frequency_config.remove_stop_words is False
        output_dir: Where tables and charts are written (default OUTPUT_DIR)
        top_n: Words kept per group (default frequency_config.top_n)
        seed: Word-cloud layout seed (default from NOVELSTATS_SEED)
        generate_viz: Also render PNG charts and the word cloud
        frequency_config: Grouping (group_by) and stop-word switch for the
            word_counts and top_words tables

    Returns:
        Dict with the result tables, corpus counts, and output paths
    """
    output_dir = Path(output_dir) if output_dir is not None else OUTPUT_DIR
    top_n = top_n if top_n is not None else frequency_config.top_n
    by = frequency_config.group_by
    if not frequency_config.remove_stop_words:
        stop_words = None
    seed = seed if seed is not None else get_random_seed()
    output_dir.mkdir(parents=True, exist_ok=True)

    logger.info("=" * 60)
    logger.info("Starting Word Frequency Analysis")
    logger.info("=" * 60)

    logger.info("Step 1: Tokenizing corpus...")
    tokens = tokenize_corpus(corpus)

    logger.info("Step 2: Aggregating word counts...")
    totals = total_words(tokens)
    chapters = chapter_totals(tokens)
    word_counts = count_words(tokens, by=by)
    filtered_counts = count_words(tokens, by=by, stop_words=stop_words)
    top = top_n_words(filtered_counts, top_n, by=by)
    stats = vocabulary_stats(tokens)

    logger.info("Step 3: Saving tables...")
    paths = save_tables(
        {
            "total_words": totals,
            "chapter_totals": chapters,
            "word_counts": word_counts,
            "top_words": top,
            "vocabulary_stats": stats,
        },
        output_dir,
    )
    paths["top_words_json"] = save_top_words_json(top, output_dir, by=by)
    paths["run_config"] = save_run_config(output_dir, frequency_config, top_n, seed)

    if generate_viz:
        logger.info("Step 4: Generating visualizations...")
        paths.update(generate_visualizations(
            totals, top, chapters, filtered_counts, output_dir, seed, by=by
        ))

    results = {
        "n_books": len(corpus),
        "n_chapters": corpus.total_chapters,
        "n_tokens": len(tokens),
        "seed": seed,
        "group_by": by,
        "total_words": totals,
        "top_words": top,
        "vocabulary_stats": stats,
        "paths": paths,
    }

    logger.info("=" * 60)
    logger.info("Word Frequency Analysis Complete!")
    logger.info(f"  Books: {len(corpus)}")
    logger.info(f"  Chapters: {corpus.total_chapters:,}")
    logger.info(f"  Tokens: {len(tokens):,}")
    logger.info("=" * 60)

    return results
