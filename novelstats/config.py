"""
novelstats/config.py
--------------------
Shared configuration for all novelstats modules.

Loads settings from environment variables with sensible defaults.
"""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Load .env file if it exists
from dotenv import load_dotenv
load_dotenv()

# Project root (parent of this file's directory)
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Corpus input: directory of .txt books, .jsonl chapter records, or .json mapping
CORPUS_PATH = Path(os.getenv("NOVELSTATS_CORPUS_PATH", PROJECT_ROOT / "data" / "novels.jsonl"))

# Tables and charts written by `novelstats run`
OUTPUT_DIR = Path(os.getenv("NOVELSTATS_OUTPUT_DIR", PROJECT_ROOT / "output"))

# Log directory
LOG_DIR = Path(os.getenv("NOVELSTATS_LOG_DIR", PROJECT_ROOT / "logs"))

# Optional custom stop-word list (one word per line), merged with the default list
_stop_words_env = os.getenv("NOVELSTATS_STOP_WORDS_PATH")
STOP_WORDS_PATH = Path(_stop_words_env) if _stop_words_env else None

DEFAULT_SEED = 42


def get_random_seed() -> int:
    """
    Get the word-cloud layout seed from the environment.

    Returns:
        NOVELSTATS_SEED as an int, or DEFAULT_SEED when unset

    Raises:
        ValueError: If NOVELSTATS_SEED is not an integer
    """
    raw = os.getenv("NOVELSTATS_SEED")
    if raw is None or raw.strip() == "":
        logger.debug(f"NOVELSTATS_SEED not set, using default seed {DEFAULT_SEED}")
        return DEFAULT_SEED

    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            f"NOVELSTATS_SEED must be an integer, got {raw!r}"
        ) from None
