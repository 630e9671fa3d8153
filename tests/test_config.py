"""Tests for tag definitions and ContextVar-based parse configuration.

Validates eager validation, thread isolation and context manager behavior.
"""

from threading import Thread

import pytest

from subrayado import (
    BOLD_TAG,
    DEFAULT_TAGS,
    HEADER_TAG,
    ITALIC_TAG,
    ParseConfig,
    Parser,
    TagDefinition,
    TagDefinitionError,
    TextType,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)


class TestTagDefinition:
    """TagDefinition frozen dataclass behavior."""

    def test_builtin_nesting_table(self) -> None:
        assert ITALIC_TAG.nests == frozenset()
        assert BOLD_TAG.nests == frozenset({TextType.ITALIC})
        assert HEADER_TAG.nests == frozenset({TextType.ITALIC, TextType.BOLD})

    def test_allows(self) -> None:
        assert BOLD_TAG.allows(TextType.ITALIC)
        assert not ITALIC_TAG.allows(TextType.BOLD)

    def test_immutability(self) -> None:
        with pytest.raises(AttributeError):
            ITALIC_TAG.open_delimiter = "*"  # type: ignore[misc]

    def test_nests_coerced_to_frozenset(self) -> None:
        tag = TagDefinition("*", "*", TextType.ITALIC, nests=[TextType.BOLD])  # type: ignore[arg-type]
        assert tag.nests == frozenset({TextType.BOLD})

    @pytest.mark.parametrize(
        ("open_delimiter", "close_delimiter"),
        [("", "_"), ("_", ""), ("", "")],
    )
    def test_empty_delimiter_rejected(self, open_delimiter: str, close_delimiter: str) -> None:
        with pytest.raises(TagDefinitionError, match="non-empty"):
            TagDefinition(open_delimiter, close_delimiter, TextType.ITALIC)

    def test_newline_in_inline_delimiter_rejected(self) -> None:
        with pytest.raises(TagDefinitionError):
            TagDefinition("_", "_\n", TextType.ITALIC)

    def test_block_tag_must_close_on_newline(self) -> None:
        with pytest.raises(TagDefinitionError, match="paragraph break"):
            TagDefinition("# ", "#", TextType.HEADER, block=True)

    def test_text_type_must_be_enum(self) -> None:
        with pytest.raises(TagDefinitionError):
            TagDefinition("_", "_", "italic")  # type: ignore[arg-type]

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            TagDefinition("", "_", TextType.ITALIC)


class TestTagDefinitionFromDict:
    """TagDefinition.from_dict coercion."""

    def test_by_value(self) -> None:
        tag = TagDefinition.from_dict(
            {"open_delimiter": "*", "close_delimiter": "*", "text_type": "italic"}
        )
        assert tag.text_type is TextType.ITALIC

    def test_by_name_with_nests(self) -> None:
        tag = TagDefinition.from_dict(
            {
                "open_delimiter": "**",
                "close_delimiter": "**",
                "text_type": "BOLD",
                "nests": ["ITALIC"],
            }
        )
        assert tag.nests == frozenset({TextType.ITALIC})

    def test_unknown_text_type(self) -> None:
        with pytest.raises(TagDefinitionError):
            TagDefinition.from_dict({"open_delimiter": "*", "close_delimiter": "*", "text_type": "x"})

    def test_missing_delimiter(self) -> None:
        with pytest.raises(TagDefinitionError):
            TagDefinition.from_dict({"open_delimiter": "*", "text_type": "italic"})


class TestParseConfig:
    """ParseConfig validation."""

    def test_default_tags(self) -> None:
        assert ParseConfig().tags == DEFAULT_TAGS

    def test_list_converted_to_tuple(self) -> None:
        config = ParseConfig(tags=[ITALIC_TAG])  # type: ignore[arg-type]
        assert config.tags == (ITALIC_TAG,)

    def test_empty_rejected(self) -> None:
        with pytest.raises(TagDefinitionError):
            ParseConfig(tags=())

    def test_duplicate_text_type_rejected(self) -> None:
        other = TagDefinition("*", "*", TextType.ITALIC)
        with pytest.raises(TagDefinitionError, match="more than once"):
            ParseConfig(tags=(ITALIC_TAG, other))

    def test_non_tag_rejected(self) -> None:
        with pytest.raises(TagDefinitionError):
            ParseConfig(tags=("_",))  # type: ignore[arg-type]

    def test_tag_for(self) -> None:
        config = ParseConfig(tags=(BOLD_TAG,))
        assert config.tag_for(TextType.BOLD) is BOLD_TAG
        assert config.tag_for(TextType.ITALIC) is None

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = ParseConfig.from_dict({"unknown_key": 1})
        assert config == ParseConfig()

    def test_from_dict_builds_tags(self) -> None:
        config = ParseConfig.from_dict(
            {
                "tags": [
                    ITALIC_TAG,
                    {"open_delimiter": "**", "close_delimiter": "**", "text_type": "bold"},
                ]
            }
        )
        assert config.tags[0] is ITALIC_TAG
        assert config.tags[1].open_delimiter == "**"


class TestContextVarFunctions:
    """get/set/reset functions and the context manager."""

    def test_default_config(self) -> None:
        reset_parse_config()
        assert get_parse_config().tags == DEFAULT_TAGS

    def test_set_and_reset(self) -> None:
        config = ParseConfig(tags=(ITALIC_TAG,))
        set_parse_config(config)
        try:
            assert get_parse_config() is config
        finally:
            reset_parse_config()
        assert get_parse_config().tags == DEFAULT_TAGS

    def test_context_manager_restores_on_error(self) -> None:
        config = ParseConfig(tags=(ITALIC_TAG,))
        with pytest.raises(RuntimeError), parse_config_context(config):
            assert get_parse_config() is config
            raise RuntimeError("boom")
        assert get_parse_config().tags == DEFAULT_TAGS

    def test_parser_reads_active_config(self) -> None:
        with parse_config_context(ParseConfig(tags=(ITALIC_TAG,))):
            paragraphs = Parser("__a__").parse()
        # Without BOLD the single underscores pair up: <em>_a</em>_
        span = paragraphs[0].children[0]
        assert span.text_type is TextType.ITALIC

    def test_thread_isolation(self) -> None:
        seen: list[tuple[TagDefinition, ...]] = []

        def worker() -> None:
            set_parse_config(ParseConfig(tags=(BOLD_TAG,)))
            seen.append(get_parse_config().tags)

        thread = Thread(target=worker)
        thread.start()
        thread.join()

        assert seen == [(BOLD_TAG,)]
        assert get_parse_config().tags == DEFAULT_TAGS
