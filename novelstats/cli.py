"""
novelstats/cli.py
-----------------
Command-line interface for the novelstats word-frequency pipeline.

Usage:
    novelstats totals                      # Total words per book
    novelstats top-words --n 10            # Top words per book, stop words removed
    novelstats top-words --by-chapter      # Top words per chapter
    novelstats stats                       # Vocabulary statistics per book
    novelstats wordcloud --seed 7          # Seeded word cloud PNG
    novelstats run --output-dir output     # Full pipeline: tables + charts
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from . import config


def setup_logging(command: str, verbose: bool = False) -> logging.Logger:
    """Configure logging to console and file."""
    logs_dir = config.LOG_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    log_file = logs_dir / f"novelstats_{command}_{timestamp}.log"

    log_level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging to {log_file}")
    return logger


def load_inputs(args):
    """
    Load the corpus and stop-word set selected by the global options.

    The stop-word set is None when filtering is switched off, either by
    --keep-stop-words or by FREQUENCY_CONFIG.remove_stop_words.
    """
    from analytics.config import FREQUENCY_CONFIG
    from collection.corpus import load_corpus
    from extraction.processing.stopwords import load_stop_words

    corpus = load_corpus(args.corpus or config.CORPUS_PATH)
    stop_words = load_stop_words(
        path=args.stop_words or config.STOP_WORDS_PATH,
        extra=FREQUENCY_CONFIG.extra_stop_words,
    )
    if getattr(args, "keep_stop_words", False) or not FREQUENCY_CONFIG.remove_stop_words:
        stop_words = None
    return corpus, stop_words


def print_table(title: str, df) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)
    if df.empty:
        print("(no rows)")
    else:
        print(df.to_string(index=False))
    print("=" * 60)


def cmd_totals(args, logger):
    """Print total words per book."""
    from analytics.frequency import total_words
    from extraction.processing.tokenizer import tokenize_corpus

    corpus, _ = load_inputs(args)
    totals = total_words(tokenize_corpus(corpus))

    print_table("TOTAL WORDS PER BOOK", totals)

    if args.plot:
        import matplotlib.pyplot as plt
        from exploration.charts import plot_total_words

        plt.close(plot_total_words(totals, args.plot))
        print(f"Chart: {args.plot}")

    return 0


def cmd_top_words(args, logger):
    """Print the top words per group (FREQUENCY_CONFIG.group_by, or per chapter)."""
    from analytics.config import FREQUENCY_CONFIG
    from analytics.frequency import count_words, normalize_group_keys, top_n_words
    from extraction.processing.tokenizer import tokenize_corpus

    corpus, stop_words = load_inputs(args)
    tokens = tokenize_corpus(corpus)

    by = ("book", "chapter") if args.by_chapter else FREQUENCY_CONFIG.group_by
    keys = normalize_group_keys(by)
    counts = count_words(tokens, by=by, stop_words=stop_words)
    top = top_n_words(counts, args.n, by=by)

    scope = {(): "IN CORPUS", ("book",): "PER BOOK", ("book", "chapter"): "PER CHAPTER"}[tuple(keys)]
    print_table(f"TOP {args.n} WORDS {scope}", top)

    if args.plot:
        if keys != ["book"]:
            logger.warning("--plot is only available for per-book top words, skipping chart")
        elif top.empty:
            logger.warning("No words to plot, skipping chart")
        else:
            import matplotlib.pyplot as plt
            from exploration.charts import plot_top_words

            plt.close(plot_top_words(top, args.plot))
            print(f"Chart: {args.plot}")

    return 0


def cmd_stats(args, logger):
    """Print vocabulary statistics per book."""
    from analytics.stats import corpus_summary, vocabulary_stats
    from extraction.processing.tokenizer import tokenize_corpus

    corpus, _ = load_inputs(args)
    tokens = tokenize_corpus(corpus)

    print_table("VOCABULARY STATISTICS", vocabulary_stats(tokens))

    summary = corpus_summary(tokens)
    print(f"Books:        {len(corpus)}")
    print(f"Chapters:     {corpus.total_chapters:,}")
    print(f"Total words:  {summary['total_words']:,}")
    print(f"Unique words: {summary['unique_words']:,}")

    return 0


def cmd_wordcloud(args, logger):
    """Render a seeded word cloud for the corpus or one book."""
    from analytics.frequency import count_words
    from collection.corpus import Corpus
    from exploration.clouds import build_word_cloud, make_rng, save_word_cloud, word_cloud_layout
    from extraction.processing.tokenizer import tokenize_corpus

    corpus, stop_words = load_inputs(args)

    if args.book:
        book = corpus.get(args.book)
        if book is None:
            raise ValueError(
                f"Book {args.book!r} not in corpus. Available: {', '.join(corpus.book_names)}"
            )
        corpus = Corpus(books=(book,))

    tokens = tokenize_corpus(corpus)
    counts = count_words(tokens, by=None, stop_words=stop_words)

    seed = args.seed if args.seed is not None else config.get_random_seed()
    cloud = build_word_cloud(counts, make_rng(seed))
    output = Path(args.output) if args.output else config.OUTPUT_DIR / "wordcloud.png"
    save_word_cloud(cloud, output)

    layout = word_cloud_layout(cloud)
    vertical = int((layout["angle"] == 90).sum())

    print("\n" + "=" * 60)
    print("WORD CLOUD GENERATED")
    print("=" * 60)
    print(f"Seed:          {seed}")
    print(f"Words placed:  {len(layout)} ({vertical} vertical)")
    print(f"Output:        {output}")
    print("=" * 60)

    return 0


def cmd_run(args, logger):
    """Run the full analysis pipeline."""
    from analytics.pipeline import run_analysis

    corpus, stop_words = load_inputs(args)

    results = run_analysis(
        corpus,
        stop_words=stop_words,
        output_dir=Path(args.output_dir) if args.output_dir else None,
        top_n=args.n,
        seed=args.seed,
        generate_viz=not args.no_viz,
    )

    print("\n" + "=" * 60)
    print("ANALYSIS COMPLETE")
    print("=" * 60)
    print(f"Books processed:    {results['n_books']}")
    print(f"Chapters processed: {results['n_chapters']:,}")
    print(f"Tokens counted:     {results['n_tokens']:,}")
    print("\nOutput files:")
    for name, path in results["paths"].items():
        print(f"  {name}: {path}")
    print("=" * 60)

    return 0


def build_parser() -> argparse.ArgumentParser:
    from analytics.config import FREQUENCY_CONFIG

    parser = argparse.ArgumentParser(
        prog="novelstats",
        description="novelstats - Word frequencies, charts and word clouds for a corpus of novels",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--corpus",
        metavar="PATH",
        help="Corpus directory, .jsonl or .json file (default: NOVELSTATS_CORPUS_PATH)",
    )
    parser.add_argument(
        "--stop-words",
        metavar="PATH",
        help="Extra stop-word file, one word per line (default: NOVELSTATS_STOP_WORDS_PATH)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # totals command
    totals_parser = subparsers.add_parser("totals", help="Total words per book")
    totals_parser.add_argument("--plot", metavar="FILE", help="Save a bar chart to FILE")

    # top-words command
    top_parser = subparsers.add_parser("top-words", help="Top words per book")
    top_parser.add_argument(
        "--n", type=int, default=FREQUENCY_CONFIG.top_n,
        help=f"Words per group (default: {FREQUENCY_CONFIG.top_n})",
    )
    top_parser.add_argument(
        "--keep-stop-words", action="store_true", help="Do not remove stop words"
    )
    top_parser.add_argument(
        "--by-chapter", action="store_true", help="Group by book and chapter"
    )
    top_parser.add_argument("--plot", metavar="FILE", help="Save a faceted bar chart to FILE")

    # stats command
    subparsers.add_parser("stats", help="Vocabulary statistics per book")

    # wordcloud command
    cloud_parser = subparsers.add_parser("wordcloud", help="Render a word cloud")
    cloud_parser.add_argument("--book", help="Only use this book")
    cloud_parser.add_argument(
        "--seed", type=int, default=None, help="Layout seed (default: NOVELSTATS_SEED or 42)"
    )
    cloud_parser.add_argument("--output", metavar="FILE", help="PNG path (default: OUTPUT_DIR/wordcloud.png)")
    cloud_parser.add_argument(
        "--keep-stop-words", action="store_true", help="Do not remove stop words"
    )

    # run command
    run_parser = subparsers.add_parser("run", help="Full pipeline: tables and charts")
    run_parser.add_argument("--output-dir", metavar="DIR", help="Output directory (default: OUTPUT_DIR)")
    run_parser.add_argument(
        "--n", type=int, default=None,
        help=f"Top words per book (default: {FREQUENCY_CONFIG.top_n})",
    )
    run_parser.add_argument(
        "--seed", type=int, default=None, help="Word-cloud seed (default: NOVELSTATS_SEED or 42)"
    )
    run_parser.add_argument(
        "--no-viz", action="store_true", help="Skip chart and word-cloud generation"
    )

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_logging(args.command, args.verbose)

    commands = {
        "totals": cmd_totals,
        "top-words": cmd_top_words,
        "stats": cmd_stats,
        "wordcloud": cmd_wordcloud,
        "run": cmd_run,
    }

    try:
        exit_code = commands[args.command](args, logger)
        sys.exit(exit_code)
    except Exception as e:
        logger.exception(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
