"""
novelstats - Word-frequency exploration for a corpus of novels.

Pipeline: raw chapter text -> tokens -> frequency tables -> charts.

Usage:
    novelstats totals            # Words per book
    novelstats top-words --n 10  # Top words per book (stop words removed)
    novelstats wordcloud         # Seeded word cloud
    novelstats run               # Full pipeline, tables + charts on disk
"""

__version__ = "0.1.0"
