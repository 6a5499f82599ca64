"""
processing/
-----------
Text processing modules for novelstats.

Modules:
- tokenizer: Chapter text -> lowercase word tokens
- stopwords: Stop-word reference lists
"""

__version__ = "0.1.0"
