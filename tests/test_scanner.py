"""Tests for Scanner."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from docindex.config import AppConfig
from docindex.errors import RootDirectoryError
from docindex.index.scanner import ScanResult, Scanner
from docindex.models import Document, LanguageVariant, SkippedFile


def _scanner(root: Path, concurrency: int = 1) -> Scanner:
    return Scanner(root, variant_suffix="_CN", extensions=[".md"], concurrency=concurrency)


class TestScanResult:
    """Test ScanResult accumulation."""

    def test_init_defaults(self):
        """Test default initialization."""
        result = ScanResult()
        assert result.documents == []
        assert result.skipped == []

    def test_add_routes_outcomes(self):
        """Documents and skipped files go to separate lists."""
        result = ScanResult()
        document = Document("a.md", "A", ".", LanguageVariant.BASE, "a")
        skipped = SkippedFile("b.md", "bad")

        result.add(document)
        result.add(skipped)

        assert result.documents == [document]
        assert result.skipped == [skipped]

    def test_sort(self):
        """Sorting orders both lists by path."""
        result = ScanResult()
        result.add(Document("b.md", "B", ".", LanguageVariant.BASE, "b"))
        result.add(Document("a.md", "A", ".", LanguageVariant.BASE, "a"))

        result.sort()

        assert [d.path for d in result.documents] == ["a.md", "b.md"]


class TestScanner:
    """Test Scanner functionality."""

    def test_from_config(self, tmp_path):
        """Settings come from AppConfig."""
        config = AppConfig(variant_suffix="_ZH", extensions=("MD",), concurrency=3)

        scanner = Scanner.from_config(tmp_path, config)

        assert scanner.variant_suffix == "_ZH"
        assert scanner.extensions == (".md",)
        assert scanner.concurrency == 3

    def test_missing_root(self, tmp_path):
        """A missing root raises RootDirectoryError."""
        with pytest.raises(RootDirectoryError):
            _scanner(tmp_path / "missing").scan()

    def test_root_is_file(self, tmp_path):
        """A file root raises RootDirectoryError."""
        path = tmp_path / "file.md"
        path.write_text("# x")

        with pytest.raises(RootDirectoryError) as info:
            _scanner(path).scan()

        assert "not a directory" in str(info.value)

    def test_scan_documents(self, make_tree):
        """Each matching file becomes a Document."""
        root = make_tree(
            {
                "patterns/01_Adapter.md": "# Adapter\n[cn](01_Adapter_CN.md)",
                "patterns/01_Adapter_CN.md": "# 适配器\n",
                "notes.txt": "ignored",
            }
        )

        result = _scanner(root).scan()

        assert [d.path for d in result.documents] == [
            "patterns/01_Adapter.md",
            "patterns/01_Adapter_CN.md",
        ]
        assert result.documents[0].outbound_links == ("01_Adapter_CN.md",)
        assert result.documents[1].language_variant is LanguageVariant.CN
        assert result.skipped == []

    def test_unreadable_file_is_skipped(self, make_tree):
        """One undecodable file is recorded and the others are still scanned."""
        files = {f"series/{i:02d}_Doc.md": f"# Doc {i}\n" for i in range(49)}
        files["series/99_Bad.md"] = b"\xff\xfe\x00bad"
        root = make_tree(files)

        result = _scanner(root).scan()

        assert len(result.documents) == 49
        assert len(result.skipped) == 1
        assert result.skipped[0].path == "series/99_Bad.md"

    def test_parallel_scan_matches_sequential(self, make_tree):
        """Thread count does not change the result."""
        root = make_tree({f"s{i % 3}/{i:02d}_Doc.md": f"# Doc {i}\n[n](x.md)" for i in range(30)})

        sequential = _scanner(root, concurrency=1).scan()
        parallel = _scanner(root, concurrency=8).scan()

        assert parallel.documents == sequential.documents
        assert parallel.skipped == sequential.skipped

    def test_parallel_scan_uses_thread_pool(self, make_tree):
        """More than one worker goes through the executor."""
        root = make_tree({"a.md": "# A", "b.md": "# B"})

        with patch("docindex.index.scanner.ThreadPoolExecutor") as mock_pool_class:
            mock_pool_class.return_value.__enter__.return_value.map.return_value = iter(())
            _scanner(root, concurrency=4).scan()

        assert mock_pool_class.call_args[1]["max_workers"] == 4

    def test_iter_documents_is_lazy(self, make_tree):
        """Documents are loaded one at a time and unreadable files dropped."""
        root = make_tree({"a.md": "# A", "b.md": b"\xff", "c.md": "# C"})

        iterator = _scanner(root).iter_documents()
        first = next(iterator)

        assert first.title == "A"
        assert [d.path for d in iterator] == ["c.md"]

    def test_concurrency_floor(self, tmp_path):
        """Worker count is at least one."""
        assert _scanner(tmp_path, concurrency=0).concurrency == 1

    def test_unreadable_root(self, tmp_path):
        """An existing root without read permission raises RootDirectoryError."""
        with patch("docindex.index.scanner.os.access", return_value=False):
            with pytest.raises(RootDirectoryError) as info:
                _scanner(tmp_path).scan()

        assert "not readable" in str(info.value)

    def test_unreadable_directory_is_skipped(self, make_tree):
        """A directory that cannot be listed is recorded among skipped files."""
        root = make_tree({"s/a.md": "# A\n[b](../t/b.md)", "t/b.md": "# B"})
        real_scandir = os.scandir

        def _scandir(path):
            if Path(path) == root / "t":
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        with patch("docindex.utils.files.os.scandir", side_effect=_scandir):
            result = _scanner(root).scan()

        assert [d.path for d in result.documents] == ["s/a.md"]
        assert [item.path for item in result.skipped] == ["t"]
        assert "unreadable directory" in result.skipped[0].reason

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="directory permissions are not enforced for root",
    )
    def test_mode_000_directory_is_skipped(self, make_tree):
        """Permission bits on a series directory surface as a skipped entry."""
        root = make_tree({"s/a.md": "# A\n[b](../t/b.md)", "t/b.md": "# B"})
        (root / "t").chmod(0)
        try:
            result = _scanner(root).scan()
        finally:
            (root / "t").chmod(0o755)

        assert [item.path for item in result.skipped] == ["t"]
