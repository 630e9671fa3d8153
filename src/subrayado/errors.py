"""Exception classes for Subrayado.

Malformed markup is never an error: it degrades to literal text. The only
failures are programmer errors, surfaced eagerly:

- Bad tag definitions or configuration, at configuration time
- A renderer with no tag name for a text type the parser produced
"""

from __future__ import annotations


class SubrayadoError(Exception):
    """Base exception for all Subrayado errors.

    Subclass this for specific error categories.
    """

    pass


class TagDefinitionError(SubrayadoError, ValueError):
    """Invalid tag definition or parse configuration.

    Raised when a TagDefinition or ParseConfig is constructed, never
    while parsing or rendering.
    """

    def __init__(self, message: str, text_type: object | None = None) -> None:
        """Initialize tag definition error.

        Args:
            message: Description of the problem
            text_type: Text type of the offending definition (optional)
        """
        self.text_type = text_type

        prefix = f"Tag {getattr(text_type, 'name', text_type)}: " if text_type is not None else ""
        super().__init__(f"{prefix}{message}")


class RenderError(SubrayadoError):
    """Error during rendering.

    Raised when the renderer meets a node it cannot produce output for.
    """

    pass


class UnknownTextTypeError(RenderError, LookupError):
    """Renderer has no tag name for a text type present in the tree."""

    def __init__(self, text_type: object) -> None:
        self.text_type = text_type
        name = getattr(text_type, "name", text_type)
        super().__init__(f"No tag name registered for text type {name}")
