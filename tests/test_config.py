"""
tests/test_config.py
--------------------
Unit tests for environment configuration.

Run with: python -m pytest tests/test_config.py -v
"""

import pytest

from novelstats.config import DEFAULT_SEED, get_random_seed


class TestRandomSeed:
    """Tests for NOVELSTATS_SEED parsing."""

    def test_default(self, monkeypatch):
        """Unset seed falls back to the default."""
        monkeypatch.delenv("NOVELSTATS_SEED", raising=False)
        assert get_random_seed() == DEFAULT_SEED == 42

    def test_blank_is_default(self, monkeypatch):
        """An empty value is treated as unset."""
        monkeypatch.setenv("NOVELSTATS_SEED", " ")
        assert get_random_seed() == DEFAULT_SEED

    def test_integer(self, monkeypatch):
        """An integer value is used."""
        monkeypatch.setenv("NOVELSTATS_SEED", "1234")
        assert get_random_seed() == 1234

    def test_invalid(self, monkeypatch):
        """A non-integer seed raises ValueError."""
        monkeypatch.setenv("NOVELSTATS_SEED", "abc")
        with pytest.raises(ValueError, match="NOVELSTATS_SEED"):
            get_random_seed()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
