"""
collection - Corpus acquisition.

Loads the novels under analysis from disk into an ordered, immutable Corpus.
"""
