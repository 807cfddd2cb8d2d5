"""Utilities for chunking text into length-bounded paragraphs."""

from typing import List

from mediautils.utils.errors import InvalidArgumentError


def split_text_into_paragraphs(text: str, max_chars: int) -> List[str]:
    """Split text into paragraphs of at most ``max_chars`` characters.

    Lines are kept together while they fit. A line that does not fit ends
    the current paragraph and is wrapped word by word. Words are never
    broken, so a single word longer than ``max_chars`` becomes its own
    paragraph.

    Args:
        text: The text to split. Newlines separate lines.
        max_chars: Maximum number of characters per paragraph.

    Returns:
        List of paragraphs without trailing whitespace. Text that already
        fits is returned unchanged as the only element.

    Raises:
        InvalidArgumentError: If ``max_chars`` is not a positive integer.
    """
    if isinstance(max_chars, bool) or not isinstance(max_chars, int) or max_chars <= 0:
        raise InvalidArgumentError(f"max_chars must be a positive integer, got {max_chars!r}")

    if len(text) <= max_chars:
        return [text]

    paragraphs: List[str] = []
    current = ""

    def flush():
        paragraph = current.strip()
        if paragraph:
            paragraphs.append(paragraph)

    for line in text.split("\n"):
        if len(current) + len(line) <= max_chars:
            current += line + "\n"
            continue

        # Line boundaries are preferred break points
        flush()
        current = ""

        for word in line.split(" "):
            if not word:
                continue
            # +1 for the separating space
            if len(current) + len(word) + 1 > max_chars:
                flush()
                current = word + " "
            else:
                current += word + " "

    flush()

    return paragraphs
