"""Tests for parsing/treesitter.py and the language packs."""

from dataclasses import replace
from pathlib import Path

import pytest

from embedsync.core.errors import ErrorCode, InternalError
from embedsync.parsing import packs
from embedsync.parsing.treesitter import TreeSitterParser


class TestPacks:
    @pytest.mark.parametrize(
        ("ext", "pack_name"),
        [("ts", "typescript"), ("mts", "typescript"), ("tsx", "tsx"), ("jsx", "tsx")],
    )
    def test_extension_lookup(self, ext: str, pack_name: str) -> None:
        pack = packs.get_pack_for_ext(ext)

        assert pack is not None
        assert pack.name == pack_name

    def test_unknown_extension(self) -> None:
        assert packs.get_pack_for_ext("cs") is None


class TestTreeSitterParser:
    def test_parse_keeps_source_bytes(self) -> None:
        content = b"export const a = 1;\n"

        result = TreeSitterParser().parse(Path("a.ts"), content)

        assert result.source == content
        assert result.language == "typescript"
        assert result.error_count == 0
        assert result.root_node.type == "program"

    def test_unknown_suffix_uses_default_pack(self) -> None:
        parser = TreeSitterParser()

        assert parser.pack_for(Path("notes.txt")) is packs.TYPESCRIPT_PACK

    def test_reads_file_when_no_content(self, tmp_path: Path) -> None:
        path = tmp_path / "b.ts"
        path.write_bytes(b"type B = 1;\n")

        result = TreeSitterParser().parse(path)

        assert result.source == b"type B = 1;\n"

    def test_syntax_errors_are_counted_not_raised(self) -> None:
        result = TreeSitterParser().parse(Path("c.ts"), b"function (((\n")

        assert result.error_count > 0

    def test_missing_grammar_is_internal_error(self) -> None:
        broken = replace(packs.TYPESCRIPT_PACK, grammar_module="no_such_grammar_module")
        parser = TreeSitterParser(default_pack=broken)

        with pytest.raises(InternalError) as exc_info:
            parser.parse(Path("d.unknown"), b"x")

        assert exc_info.value.code == ErrorCode.GRAMMAR_UNAVAILABLE
