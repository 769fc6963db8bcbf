"""Whitespace tokenizer for shell input lines."""

from typing import List

DEFAULT_DELIMITER = " "


def tokenize(line: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Split a line on a delimiter, dropping empty tokens.

    Only ASCII space separates tokens by default. There is no quoting,
    so ``echo "a b"`` yields three tokens.

    Args:
        line: Raw input line.
        delimiter: Single separator string.

    Returns:
        Ordered non-empty tokens; an empty list for blank input.
    """
    return [token for token in line.split(delimiter) if token]
