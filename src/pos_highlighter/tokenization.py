from __future__ import annotations

import re
from typing import Iterator

WORD_PATTERN = re.compile(r"\w+(?:'\w+)?", re.UNICODE)


def iter_words(text: str) -> Iterator[tuple[str, int, int]]:
    """Yield (word, start, end) for each word in text."""
    for match in WORD_PATTERN.finditer(text):
        yield match.group(), match.start(), match.end()
