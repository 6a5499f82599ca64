"""
novelstats - setup.py
---------------------
Installs all novelstats packages and provides CLI entry point.

Usage:
    pip install -e .
    novelstats totals --help
"""
from setuptools import setup, find_packages

setup(
    name="novelstats",
    version="0.1.0",
    description="Word-frequency exploration, charts and word clouds for a corpus of novels",
    author="novelstats",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pandas",
        "pyarrow",
        "scikit-learn",
        "matplotlib",
        "wordcloud",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "novelstats=novelstats.cli:main",
        ],
    },
)
