"""Tests for the top-level markdiff API: Differ, diff, render."""

import markdiff
from markdiff import DiffConfig, Differ, diff, parse, render
from markdiff.nodes import Document, Paragraph


class TestDiffer:
    """The high-level Differ class."""

    def test_default_is_paired(self) -> None:
        differ = Differ()
        assert differ.config == DiffConfig()
        assert differ("Hello world.", "Hello there.") == "Hello ~~world.~~ **there.**\n"

    def test_whole_block_mode(self) -> None:
        differ = Differ(paired=False)
        assert differ("One.", "One.\n\nTwo.") == "One.\n\n**Two.**\n"

    def test_config_property(self) -> None:
        differ = Differ(paired=False, max_nesting_depth=4)
        assert differ.config == DiffConfig(paired=False, max_nesting_depth=4)

    def test_does_not_leak_config(self) -> None:
        Differ(paired=False)("a", "b")
        assert markdiff.get_diff_config() == DiffConfig()

    def test_nesting_limit(self) -> None:
        differ = Differ(max_nesting_depth=1)
        try:
            differ("> > deep", "plain")
        except markdiff.NestingDepthError as e:
            assert e.source_name == "old"
        else:
            raise AssertionError("expected NestingDepthError")

    def test_diff_documents(self) -> None:
        differ = Differ()
        result = differ.diff_documents(parse("a b"), parse("a c"))
        assert isinstance(result, Document)
        assert render(result) == "a ~~b~~ **c**\n"

    def test_diff_documents_whole_block(self) -> None:
        result = Differ(paired=False).diff_documents(parse("a b"), parse("a c"))
        assert [type(b) for b in result.children] == [Paragraph, Paragraph]

    def test_diff_documents_checks_nesting(self) -> None:
        differ = Differ(max_nesting_depth=0)
        try:
            differ.diff_documents(parse("plain"), parse("- item"))
        except markdiff.NestingDepthError as e:
            assert e.source_name == "new"
        else:
            raise AssertionError("expected NestingDepthError")


class TestModuleFunctions:
    """diff() and render() helpers."""

    def test_diff_paired_flag(self) -> None:
        assert diff("a b", "a c", paired=True) == "a ~~b~~ **c**\n"
        assert diff("a b", "a c", paired=False) == "~~a b~~\n\n**a c**\n"

    def test_render_document(self) -> None:
        assert render(parse("# Hello")) == "# Hello\n"

    def test_render_block_sequence(self) -> None:
        assert render(parse("a\n\nb").children) == "a\n\nb\n"


class TestPackage:
    """Package metadata and exports."""

    def test_version(self) -> None:
        assert markdiff.__version__ == "0.1.0"

    def test_all_exports_resolve(self) -> None:
        for name in markdiff.__all__:
            assert hasattr(markdiff, name), name
