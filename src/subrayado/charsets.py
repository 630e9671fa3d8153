"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Classification is ASCII only. The empty string stands for "no character"
at a paragraph boundary and counts as whitespace for boundary checks.

Usage:
    from subrayado.charsets import DIGITS

    if before in DIGITS and after in DIGITS:  # O(1) lookup
        ...
"""

BACKSLASH = "\\"

PARAGRAPH_BREAK = "\n"

DIGITS: frozenset[str] = frozenset("0123456789")

WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")

# Extended whitespace including empty string (for boundary checks)
WHITESPACE_OR_EMPTY: frozenset[str] = WHITESPACE | frozenset([""])


def is_boundary(char: str) -> bool:
    """True for whitespace or an absent neighbour ("")."""
    return char in WHITESPACE_OR_EMPTY


def is_digit_squeezed(before: str, after: str) -> bool:
    """True when both neighbours of a delimiter are decimal digits."""
    return before in DIGITS and after in DIGITS


def contains_whitespace(text: str) -> bool:
    """True if text contains any whitespace character."""
    return any(char in WHITESPACE for char in text)
