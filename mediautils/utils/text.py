"""Text helpers for subtitles, slugs and incremental text updates."""

import re

# Lines that carry WebVTT metadata rather than spoken text
VTT_HEADER_PREFIXES = ("WEBVTT", "Kind:", "Language:")
VTT_TIMING_PATTERN = re.compile(r'^\d{2}:\d{2}:\d{2}\.\d{3} --> \d{2}:\d{2}:\d{2}\.\d{3}')

# Inline tags found in auto-generated captions
VTT_TAG_PATTERNS = [
    re.compile(r'<c[.\w]+>'),
    re.compile(r'<c>'),
    re.compile(r'</c>'),
    re.compile(r'<\d{2}:\d{2}:\d{2}\.\d{3}>'),
]

TURKISH_TO_ENGLISH = {
    'ş': 's',
    'ç': 'c',
    'ğ': 'g',
    'ı': 'i',
    'ö': 'o',
    'ü': 'u',
}


def _is_vtt_text_line(line):
    """Check whether a raw VTT line holds caption text."""
    if line.startswith(VTT_HEADER_PREFIXES):
        return False
    if VTT_TIMING_PATTERN.match(line):
        return False
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("NOTE")


def vtt_content_to_plain_text(content):
    """Convert WebVTT content to plain text.

    Metadata, timestamps, notes and inline tags are stripped. Rolling
    auto-captions repeat each line in the next cue, so a line identical to
    the previous one is kept only once.

    Args:
        content: Raw WebVTT content

    Returns:
        Caption text joined with single spaces
    """
    lines = []
    for line in content.splitlines():
        if not _is_vtt_text_line(line):
            continue

        for pattern in VTT_TAG_PATTERNS:
            line = pattern.sub("", line)
        line = line.strip()

        if not line or (lines and lines[-1] == line):
            continue
        lines.append(line)

    return " ".join(lines)


def vtt_to_plain_text(vtt_path):
    """Convert a WebVTT (.vtt) file to plain text.

    Args:
        vtt_path: Path to the WebVTT file

    Returns:
        The caption text of the file as plain text
    """
    with open(vtt_path, 'r', encoding='utf-8') as file:
        content = file.read()
    return vtt_content_to_plain_text(content)


def convert_tr_text_to_slug(text):
    """Convert Turkish text to a URL slug.

    Turkish letters are mapped to their ASCII counterparts; any other
    non-ASCII symbol (emoji included) is dropped.

    Args:
        text: Text to convert

    Returns:
        Lowercase slug with whitespace runs replaced by hyphens
    """
    slug = text.strip().lower()
    slug = re.sub(r'[şçğüöı]', lambda match: TURKISH_TO_ENGLISH[match.group(0)], slug)
    slug = re.sub(r'[^\w\s-]', '', slug, flags=re.ASCII)
    return re.sub(r'\s+', '-', slug)


def find_updated_part(old_str, new_str):
    """Return the part of ``new_str`` that differs from ``old_str``.

    Characters are compared position by position over the common length;
    whatever ``new_str`` has beyond the end of ``old_str`` is appended.

    Args:
        old_str: Previous version of the text
        new_str: Current version of the text

    Returns:
        The changed characters followed by the appended tail
    """
    updated = "".join(
        new_char for old_char, new_char in zip(old_str, new_str)
        if old_char != new_char
    )
    return updated + new_str[len(old_str):]
