"""Tag definitions and ContextVar-based parse configuration for Subrayado.

Recognised markup is not hardcoded: the parser reads an ordered tuple of
TagDefinition objects from the active ParseConfig. Config is set once per
Markdown instance and read by the parser in the current context.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed. TagDefinition and ParseConfig are frozen.

Usage:
    # In Markdown class
    md = Markdown()
    html = md("_Hello_")  # Sets config internally via ContextVar

    # Direct parser usage (advanced)
    from subrayado.config import set_parse_config, reset_parse_config, ParseConfig

    set_parse_config(ParseConfig(tags=(ITALIC_TAG,)))
    try:
        paragraphs = Parser(source).parse()
    finally:
        reset_parse_config()

    # Or use the context manager
    with parse_config_context(ParseConfig(tags=(ITALIC_TAG,))):
        paragraphs = Parser(source).parse()

"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from subrayado.errors import TagDefinitionError
from subrayado.nodes import TextType


@dataclass(frozen=True, slots=True)
class TagDefinition:
    """Immutable description of one recognisable span type.

    Attributes:
        open_delimiter: Text that opens the span (e.g. "__")
        close_delimiter: Text that closes the span. For block tags this is
            the paragraph break "\\n".
        text_type: Semantic type the span produces
        nests: Text types allowed to open while this span is open
        block: Recognised only at paragraph start and closed by the
            paragraph break or end of input (headers)

    Raises:
        TagDefinitionError: On empty delimiters or delimiters that would
            cross a paragraph boundary.

    """

    open_delimiter: str
    close_delimiter: str
    text_type: TextType
    nests: frozenset[TextType] = field(default_factory=frozenset)
    block: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.text_type, TextType):
            raise TagDefinitionError(f"text_type must be a TextType, got {self.text_type!r}")
        if not self.open_delimiter or not self.close_delimiter:
            raise TagDefinitionError("delimiters must be non-empty", self.text_type)
        if "\n" in self.open_delimiter:
            raise TagDefinitionError("opening delimiter may not contain a newline", self.text_type)
        if self.block:
            if self.close_delimiter != "\n":
                raise TagDefinitionError(
                    "block tags are closed by the paragraph break", self.text_type
                )
        elif "\n" in self.close_delimiter:
            raise TagDefinitionError("closing delimiter may not contain a newline", self.text_type)
        # Accept any iterable for nests but store a frozenset
        if not isinstance(self.nests, frozenset):
            object.__setattr__(self, "nests", frozenset(self.nests))

    def allows(self, text_type: TextType) -> bool:
        """Whether a span of text_type may open inside this one."""
        return text_type in self.nests

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TagDefinition":
        """Create a TagDefinition from a dictionary.

        text_type and the nests entries may be TextType members, enum
        names ("BOLD") or enum values ("bold").

        Example:
            >>> TagDefinition.from_dict({
            ...     "open_delimiter": "_",
            ...     "close_delimiter": "_",
            ...     "text_type": "italic",
            ... }).text_type
            <TextType.ITALIC: 'italic'>

        """
        try:
            return cls(
                open_delimiter=data.get("open_delimiter", ""),
                close_delimiter=data.get("close_delimiter", ""),
                text_type=_coerce_text_type(data.get("text_type")),
                nests=frozenset(_coerce_text_type(t) for t in data.get("nests", ())),
                block=bool(data.get("block", False)),
            )
        except TagDefinitionError:
            raise
        except ValueError as e:
            raise TagDefinitionError(f"invalid tag definition {dict(data)!r}") from e


def _coerce_text_type(value: object) -> TextType:
    if isinstance(value, TextType):
        return value
    if isinstance(value, str):
        if value in TextType.__members__:
            return TextType[value]
        return TextType(value)
    raise TagDefinitionError(f"unknown text type {value!r}")


ITALIC_TAG = TagDefinition("_", "_", TextType.ITALIC)
BOLD_TAG = TagDefinition("__", "__", TextType.BOLD, nests=frozenset({TextType.ITALIC}))
HEADER_TAG = TagDefinition(
    "# ",
    "\n",
    TextType.HEADER,
    nests=frozenset({TextType.ITALIC, TextType.BOLD}),
    block=True,
)

DEFAULT_TAGS: tuple[TagDefinition, ...] = (ITALIC_TAG, BOLD_TAG, HEADER_TAG)


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Set once per Markdown instance, read by the parser in the context.
    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        tags: Recognised tag definitions. Order only breaks ties between
            definitions registering the identical delimiter string; longer
            delimiters always win over shorter ones.

    """

    tags: tuple[TagDefinition, ...] = DEFAULT_TAGS

    def __post_init__(self) -> None:
        tags = tuple(self.tags)
        if not tags:
            raise TagDefinitionError("at least one tag definition is required")
        seen: set[TextType] = set()
        for tag in tags:
            if not isinstance(tag, TagDefinition):
                raise TagDefinitionError(f"expected TagDefinition, got {type(tag).__name__}")
            if tag.text_type in seen:
                raise TagDefinitionError("defined more than once", tag.text_type)
            seen.add(tag.text_type)
        object.__setattr__(self, "tags", tags)

    def tag_for(self, text_type: TextType) -> TagDefinition | None:
        """Return the definition producing text_type, if configured."""
        for tag in self.tags:
            if tag.text_type is text_type:
                return tag
        return None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored. Entries of "tags" may be TagDefinition
        instances or dictionaries accepted by TagDefinition.from_dict.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "tags": [{"open_delimiter": "_", "close_delimiter": "_", "text_type": "ITALIC"}],
            ...     "unknown_key": "ignored",
            ... })
            >>> [t.text_type.name for t in config.tags]
            ['ITALIC']

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "tags" in filtered:
            filtered["tags"] = tuple(
                t if isinstance(t, TagDefinition) else TagDefinition.from_dict(t)
                for t in filtered["tags"]
            )
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

# Thread-local configuration via ContextVar
_parse_config: ContextVar[ParseConfig] = ContextVar(
    "subrayado_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context. Other threads are unaffected.
    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.
    """
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(tags=(ITALIC_TAG,))):
        ...     paragraphs = Parser("__not bold__").parse()

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "BOLD_TAG",
    "DEFAULT_TAGS",
    "HEADER_TAG",
    "ITALIC_TAG",
    "ParseConfig",
    "TagDefinition",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
