"""Text normalization shared by the grammar compiler and the engine adapter.

Trigger words and recognized text go through the same normalizer, so a
configured phrase matches whatever Vosk reports for it.
"""

import re

_NON_WORD = re.compile(r"[^\w' ]+")


def normalize_phrase(text: str) -> str:
    """Lower-case *text*, turn punctuation into spaces and collapse whitespace.

    Apostrophes are kept (``what's``); Vosk vocabularies contain them.
    """
    return " ".join(_NON_WORD.sub(" ", (text or "").lower()).split())
