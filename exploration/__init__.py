"""
exploration - Charts and word clouds for word-frequency tables.

Usage:
    from exploration.charts import plot_total_words, plot_top_words
    from exploration.clouds import make_rng, build_word_cloud
"""

__version__ = "0.1.0"
