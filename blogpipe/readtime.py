from __future__ import annotations

import math
from typing import Optional

WORDS_PER_MINUTE = 200


def count_words(text: Optional[str]) -> int:
    if not text:
        return 0
    return len(text.split())


def read_time(text: Optional[str], words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Estimated minutes to read ``text``, half-minutes rounded up, never less than one."""
    if words_per_minute <= 0:
        raise ValueError("words_per_minute must be positive")
    minutes = math.floor(count_words(text) / words_per_minute + 0.5)
    return max(1, minutes)
