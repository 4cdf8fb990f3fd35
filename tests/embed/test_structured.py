"""Tests for embed/extraction/structured.py TypeScript extraction."""

from pathlib import Path

from embedsync.embed.cache import SourceCache
from embedsync.embed.extraction.structured import StructuredExtractor, extract_declaration
from embedsync.parsing.treesitter import TreeSitterParser


def _extract(source: str | bytes, symbol: str, filename: str = "mod.ts") -> str | None:
    data = source.encode("utf-8") if isinstance(source, str) else source
    result = TreeSitterParser().parse(Path(filename), data)
    return extract_declaration(result.source, result.root_node, symbol)


class TestTopLevelDeclarations:
    """Declarations directly under the program node."""

    def test_given_bare_interface_when_extracted_then_exact_text(self) -> None:
        """A declaration with no leading comment is returned verbatim."""
        # Given
        source = "interface Foo { a: number }\n"

        # When
        text = _extract(source, "Foo")

        # Then
        assert text == "interface Foo { a: number }"

    def test_given_doc_comment_when_extracted_then_comment_included(self) -> None:
        """The JSDoc block above a function is kept with it."""
        # Given
        source = "const x = 1;\n\n/**\n * Bar does things.\n */\nfunction bar() {}\n"

        # When
        text = _extract(source, "bar")

        # Then
        assert text == "/**\n * Bar does things.\n */\nfunction bar() {}"

    def test_exported_interface_keeps_export_keyword(self, sample_ts: bytes) -> None:
        text = _extract(sample_ts, "ILoanPosition")

        assert text is not None
        assert text.startswith(
            "/**\n"
            " * Represents a loan position in the securities lending system.\n"
            " */\n"
            "export interface ILoanPosition {\n"
        )
        assert text.endswith('  status: "open" | "closed" | "pending";\n}')

    def test_exported_function(self, sample_ts: bytes) -> None:
        text = _extract(sample_ts, "calculateCollateral")

        assert text == (
            "/**\n"
            " * Calculates the total collateral value for a set of positions.\n"
            " */\n"
            "export function calculateCollateral(positions: ILoanPosition[]): number {\n"
            "  return positions.reduce((sum, p) => sum + p.collateralValue, 0);\n"
            "}"
        )

    def test_enum_and_type_alias(self, sample_ts: bytes) -> None:
        assert _extract(sample_ts, "LoanId") == "export type LoanId = string;"
        enum_text = _extract(sample_ts, "LoanStatus")
        assert enum_text is not None
        assert enum_text.startswith("export enum LoanStatus {")

    def test_line_comment_above_variable(self, sample_ts: bytes) -> None:
        text = _extract(sample_ts, "DEFAULT_MARGIN")

        assert text == (
            "// Default margin applied to new loans.\n"
            "export const DEFAULT_MARGIN = 1.02, MAX_MARGIN = 1.5;"
        )

    def test_only_first_declarator_is_addressable(self, sample_ts: bytes) -> None:
        assert _extract(sample_ts, "MAX_MARGIN") is None

    def test_class_and_declare(self) -> None:
        source = "declare function ambient(x: number): void;\nclass Box {\n  v = 1;\n}\n"

        assert _extract(source, "ambient") == "declare function ambient(x: number): void;"
        assert _extract(source, "Box") == "class Box {\n  v = 1;\n}"

    def test_blank_lines_between_comment_and_declaration_are_dropped(self) -> None:
        source = "/** doc */\n\n\nfunction f() {}\n"

        assert _extract(source, "f") == "/** doc */\nfunction f() {}"

    def test_first_match_wins_for_overloads(self) -> None:
        source = "function over(a: string): void;\nfunction over(a: any) {}\n"

        assert _extract(source, "over") == "function over(a: string): void;"

    def test_nested_function_is_not_top_level(self) -> None:
        source = "function outer() {\n  function inner() {}\n}\n"

        assert _extract(source, "inner") is None

    def test_missing_symbol(self) -> None:
        assert _extract("const a = 1;\n", "b") is None


class TestNamespaces:
    """``Outer.Inner`` lookups one level into a namespace."""

    def test_namespace_member_with_comment(self, sample_ts: bytes) -> None:
        text = _extract(sample_ts, "Lending.FeeSchedule")

        assert text == (
            "  /** Fee schedule for a lender. */\n"
            "export interface FeeSchedule {\n"
            "    rate: number;\n"
            "  }"
        )

    def test_nested_namespace_is_one_level(self, sample_ts: bytes) -> None:
        text = _extract(sample_ts, "Lending.Internal")

        assert text == "export namespace Internal {\n    export type Secret = string;\n  }"

    def test_two_levels_deep_never_matches(self, sample_ts: bytes) -> None:
        assert _extract(sample_ts, "Lending.Internal.Secret") is None

    def test_namespace_itself(self, sample_ts: bytes) -> None:
        text = _extract(sample_ts, "Lending")

        assert text is not None
        assert text.startswith("export namespace Lending {")
        assert text.endswith("}")

    def test_unknown_namespace(self, sample_ts: bytes) -> None:
        assert _extract(sample_ts, "Nope.FeeSchedule") is None


class TestStructuredExtractor:
    """Extractor wrapper over the source cache."""

    def test_parse_is_cached_per_file(self, workspace: Path) -> None:
        cache = SourceCache()
        extractor = StructuredExtractor(cache)
        path = workspace / "src" / "sample.ts"

        first = extractor.extract(path, "LoanId")
        second = extractor.extract(path, "LoanStatus")

        assert first == "export type LoanId = string;"
        assert second is not None
        assert len(cache) == 1

    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        extractor = StructuredExtractor(SourceCache())

        assert extractor.extract(tmp_path / "gone.ts", "X") is None

    def test_tsx_source(self, tmp_path: Path) -> None:
        path = tmp_path / "view.tsx"
        path.write_text("export const View = () => <div>{1}</div>;\n", encoding="utf-8")

        text = StructuredExtractor(SourceCache()).extract(path, "View")

        assert text == "export const View = () => <div>{1}</div>;"
