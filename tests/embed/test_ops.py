"""Tests for embed/ops.py pattern expansion and document sync."""

import os
from pathlib import Path

import pytest

from embedsync.config.models import EmbedSyncConfig, SyncConfig
from embedsync.core.errors import ErrorCode, InternalError
from embedsync.embed.cache import SourceCache
from embedsync.embed.models import DocumentResult
from embedsync.embed.ops import EmbedSync, expand_patterns, split_patterns

MARKER = "<!-- cs-embed: ../src/sample.cs#LoanId -->\n<!-- /cs-embed -->\n"


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestSplitPatterns:
    def test_comma_separated(self) -> None:
        assert split_patterns("docs/**/*.md, specs/*.md,") == ["docs/**/*.md", "specs/*.md"]

    def test_many_arguments(self) -> None:
        assert split_patterns(["a.md,b.md", "c.md"]) == ["a.md", "b.md", "c.md"]


class TestExpandPatterns:
    """Glob expansion relative to a root."""

    def test_recursive_glob(self, tmp_path: Path) -> None:
        a = _touch(tmp_path / "docs" / "a.md")
        b = _touch(tmp_path / "docs" / "deep" / "b.md")
        _touch(tmp_path / "docs" / "c.txt")

        result = expand_patterns("docs/**/*.md", root=tmp_path)

        assert set(result) == {a.resolve(), b.resolve()}

    def test_overlapping_patterns_are_deduplicated(self, tmp_path: Path) -> None:
        a = _touch(tmp_path / "docs" / "a.md")

        result = expand_patterns("docs/*.md,docs/**/*.md,docs/a.md", root=tmp_path)

        assert result == [a.resolve()]

    def test_excluded_dirs_are_skipped(self, tmp_path: Path) -> None:
        keep = _touch(tmp_path / "README.md")
        _touch(tmp_path / "node_modules" / "pkg" / "README.md")

        result = expand_patterns("**/*.md", root=tmp_path, exclude_dirs={"node_modules"})

        assert result == [keep.resolve()]

    def test_excludes_only_apply_below_root(self, tmp_path: Path) -> None:
        """A root that itself sits under an excluded name still matches."""
        root = tmp_path / "packages" / "site"
        doc = _touch(root / "index.md")

        result = expand_patterns("*.md", root=root, exclude_dirs={"packages"})

        assert result == [doc.resolve()]

    def test_directories_are_not_documents(self, tmp_path: Path) -> None:
        (tmp_path / "folder.md").mkdir()

        assert expand_patterns("*.md", root=tmp_path) == []

    def test_no_match(self, tmp_path: Path) -> None:
        assert expand_patterns("nothing/*.md", root=tmp_path) == []


class TestSyncDocument:
    """Per-document rewrite and write-back."""

    def test_given_stale_doc_when_synced_then_written(self, workspace: Path) -> None:
        # Given
        doc = _touch(workspace / "docs" / "guide.md", MARKER)

        # When
        result = EmbedSync(root=workspace).sync_document(doc)

        # Then
        assert result.rewritten
        assert result.directive_count == 1
        assert "public record LoanId(string Value);" in doc.read_text(encoding="utf-8")

    def test_given_current_doc_when_synced_then_file_untouched(self, workspace: Path) -> None:
        """A doc already in sync is not written, so its mtime is unchanged."""
        # Given
        doc = _touch(workspace / "docs" / "guide.md", MARKER)
        EmbedSync(root=workspace).sync_document(doc)
        os.utime(doc, ns=(1_000_000_000, 1_000_000_000))

        # When
        result = EmbedSync(root=workspace).sync_document(doc)

        # Then
        assert not result.rewritten
        assert doc.stat().st_mtime_ns == 1_000_000_000

    def test_check_mode_reports_without_writing(self, workspace: Path) -> None:
        doc = _touch(workspace / "docs" / "guide.md", MARKER)

        result = EmbedSync(root=workspace).sync_document(doc, check=True)

        assert result.rewritten
        assert doc.read_text(encoding="utf-8") == MARKER

    def test_crlf_line_endings_preserved(self, workspace: Path) -> None:
        doc = workspace / "docs" / "guide.md"
        doc.write_bytes(b"Intro\r\n" + MARKER.encode() + b"Outro\r\n")

        EmbedSync(root=workspace).sync_document(doc)

        data = doc.read_bytes()
        assert data.startswith(b"Intro\r\n")
        assert data.endswith(b"Outro\r\n")

    def test_doc_without_directives(self, workspace: Path) -> None:
        doc = _touch(workspace / "docs" / "plain.md", "# Plain\n")

        result = EmbedSync(root=workspace).sync_document(doc)

        assert result.directive_count == 0
        assert not result.rewritten

    def test_unreadable_document_is_fatal(self, workspace: Path) -> None:
        with pytest.raises(InternalError) as exc_info:
            EmbedSync(root=workspace).sync_document(workspace / "docs" / "gone.md")

        assert exc_info.value.code == ErrorCode.DOCUMENT_READ_ERROR

    def test_undecodable_document_is_fatal(self, workspace: Path) -> None:
        doc = workspace / "docs" / "binary.md"
        doc.write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(InternalError) as exc_info:
            EmbedSync(root=workspace).sync_document(doc)

        assert exc_info.value.code == ErrorCode.DOCUMENT_READ_ERROR
        assert str(doc.resolve()) in exc_info.value.message


class TestRun:
    """Run aggregation across documents."""

    def test_summary_counts(self, workspace: Path) -> None:
        # Given
        good = _touch(workspace / "docs" / "good.md", MARKER)
        bad = _touch(
            workspace / "docs" / "bad.md",
            "<!-- cs-embed: ../src/sample.cs#Nope -->\n<!-- /cs-embed -->\n",
        )
        plain = _touch(workspace / "docs" / "plain.md", "# Plain\n")
        seen: list[DocumentResult] = []

        # When
        summary = EmbedSync(root=workspace).run([good, bad, plain], on_document=seen.append)

        # Then
        assert summary.documents_matched == 3
        assert summary.documents_touched == 2
        assert summary.documents_updated == 1
        assert summary.total_directives == 2
        assert len(summary.errors) == 1
        assert summary.exit_code == 1
        assert [r.path for r in seen] == [good.resolve(), bad.resolve(), plain.resolve()]

    def test_check_run_with_stale_doc_fails(self, workspace: Path) -> None:
        doc = _touch(workspace / "docs" / "guide.md", MARKER)

        summary = EmbedSync(root=workspace).run([doc], check=True)

        assert summary.ok
        assert summary.exit_code == 1
        assert summary.to_dict()["check"] is True

    def test_clean_run_exits_zero(self, workspace: Path) -> None:
        doc = _touch(workspace / "docs" / "guide.md", MARKER)
        ops = EmbedSync(root=workspace)
        ops.run([doc])

        summary = ops.run([doc], check=True)

        assert summary.exit_code == 0

    def test_one_cache_per_run(self, workspace: Path) -> None:
        cache = SourceCache()
        a = _touch(workspace / "docs" / "a.md", MARKER)
        b = _touch(workspace / "docs" / "b.md", MARKER)

        EmbedSync(root=workspace, cache=cache).run([a, b])

        assert len(cache) == 1

    def test_expand_uses_configured_excludes(self, workspace: Path) -> None:
        _touch(workspace / "docs" / "skip" / "x.md")
        keep = _touch(workspace / "docs" / "y.md")
        config = EmbedSyncConfig(sync=SyncConfig(exclude_dirs=["skip"]))

        result = EmbedSync(config, root=workspace).expand(["docs/**/*.md"])

        assert result == [keep.resolve()]
