"""Free-text helpers for description and tag input."""

import re

_WHITESPACE = re.compile(r"\s+")

# Plain and fullwidth number signs, as typed on Thai and CJK keyboards.
HASHTAG_PREFIXES = ("#", "＃")


def normalize(text: str) -> str:
    """Trim text and collapse whitespace runs, newlines included, to one space."""
    return _WHITESPACE.sub(" ", text.strip())


def detect_end_marker(text: str, marker: str) -> tuple[bool, str]:
    """Return whether the marker occurs and the text before its first occurrence.

    The search is a plain substring match, so "broken#donezo" still ends the
    input. Everything from the marker onward is discarded.
    """
    position = text.find(marker)
    if position < 0:
        return False, text
    return True, text[:position]


def extract_hashtags(text: str) -> list[str]:
    """Return tags from #-prefixed tokens in discovery order, duplicates kept."""
    return [
        token[1:]
        for token in normalize(text).split(" ")
        if token and token[0] in HASHTAG_PREFIXES
    ]
