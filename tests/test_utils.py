"""Tests for Subrayado utility modules."""

import logging


class TestGetLogger:
    """Tests for get_logger function."""

    def test_prefixes_name(self) -> None:
        from subrayado.utils.logger import get_logger

        assert get_logger("mymodule").name == "subrayado.mymodule"

    def test_keeps_package_names(self) -> None:
        from subrayado.utils.logger import get_logger

        assert get_logger("subrayado.parser").name == "subrayado.parser"
        assert get_logger("subrayado").name == "subrayado"

    def test_returns_stdlib_logger(self) -> None:
        from subrayado.utils.logger import get_logger

        assert isinstance(get_logger("x"), logging.Logger)

    def test_no_handlers_installed(self) -> None:
        import subrayado  # noqa: F401

        assert logging.getLogger("subrayado").handlers == []


class TestStringBuilder:
    """Tests for StringBuilder."""

    def test_chaining(self) -> None:
        from subrayado.stringbuilder import StringBuilder

        sb = StringBuilder()
        assert sb.append("<em>").append("Hello").append("</em>").build() == "<em>Hello</em>"

    def test_empty_strings_skipped(self) -> None:
        from subrayado.stringbuilder import StringBuilder

        sb = StringBuilder()
        sb.append("").append("a").append("")
        assert len(sb) == 1
        assert sb.build() == "a"

    def test_bool(self) -> None:
        from subrayado.stringbuilder import StringBuilder

        sb = StringBuilder()
        assert not sb
        sb.append("x")
        assert sb


class TestCharsets:
    """Tests for character classification helpers."""

    def test_boundary(self) -> None:
        from subrayado.charsets import is_boundary

        assert is_boundary("")
        assert is_boundary(" ")
        assert is_boundary("\t")
        assert not is_boundary("a")
        assert not is_boundary("_")

    def test_digit_squeeze(self) -> None:
        from subrayado.charsets import is_digit_squeezed

        assert is_digit_squeezed("1", "2")
        assert not is_digit_squeezed("a", "2")
        assert not is_digit_squeezed("1", "")

    def test_contains_whitespace(self) -> None:
        from subrayado.charsets import contains_whitespace

        assert contains_whitespace("a b")
        assert not contains_whitespace("ab")
        assert not contains_whitespace("")
