"""
novelstats Analytics

Word-frequency aggregation over token tables: counts per book or chapter,
stop-word filtering, top-N selection, vocabulary statistics, and the
end-to-end analysis pipeline.

Usage:
    from analytics.frequency import count_words, top_n_words, total_words
    from analytics.pipeline import run_analysis
"""

__version__ = "1.0.0"
