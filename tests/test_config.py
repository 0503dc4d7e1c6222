"""Tests for application configuration."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from docindex.config import AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig()

        assert config.variant_suffix == "_CN"
        assert config.extensions == (".md",)
        assert config.concurrency is None
        assert ".git" in config.ignore_dirs
        assert "readme" in config.entry_stems

    def test_custom_config(self) -> None:
        """Should create config with custom values."""
        config = AppConfig(variant_suffix="_ZH", extensions=(".markdown",), concurrency=3)

        assert config.variant_suffix == "_ZH"
        assert config.extensions == (".markdown",)
        assert config.concurrency == 3

    def test_empty_variant_suffix_rejected(self) -> None:
        """Should refuse an empty variant marker."""
        with pytest.raises(ValueError):
            AppConfig(variant_suffix="")

    def test_zero_concurrency_rejected(self) -> None:
        """Should refuse a worker count below one."""
        with pytest.raises(ValueError):
            AppConfig(concurrency=0)

    def test_resolve_concurrency_explicit(self) -> None:
        """Should return the configured worker count as-is."""
        assert AppConfig(concurrency=4).resolve_concurrency() == 4

    def test_resolve_concurrency_default_uses_cpu_count(self) -> None:
        """Should fall back to the CPU count."""
        with patch("docindex.config.os.cpu_count", return_value=6):
            assert AppConfig().resolve_concurrency() == 6

    def test_resolve_concurrency_unknown_cpu_count(self) -> None:
        """Should use one worker when the CPU count is unknown."""
        with patch("docindex.config.os.cpu_count", return_value=None):
            assert AppConfig().resolve_concurrency() == 1

    def test_normalized_extensions(self) -> None:
        """Should lower-case, add dots and drop duplicates and blanks."""
        config = AppConfig(extensions=("MD", ".md", "", ".Markdown"))

        assert config.normalized_extensions() == (".md", ".markdown")
