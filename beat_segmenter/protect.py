"""Mask punctuation that must not end a sentence: abbreviations and quoted dialogue.

Each protected mark is swapped for a single private-use code point, so masked
text has the same length as the original and offsets carry over between them.
"""

import re
from functools import lru_cache

from beat_segmenter.config import SegmenterConfig, DEFAULT_CONFIG

TERMINAL_PUNCTUATION = ".!?"
SENTINELS = "\ue000\ue001\ue002"

_MASK = str.maketrans(TERMINAL_PUNCTUATION, SENTINELS)
_UNMASK = str.maketrans(SENTINELS, TERMINAL_PUNCTUATION)
_STRIP_SENTINELS = str.maketrans("", "", SENTINELS)

# A quoted run is an opening quote up to the next closing quote. A stray
# opening quote protects everything up to the end of the text unit.
_QUOTE_RUN_RE = re.compile(r'"[^"]*(?:"|$)|“[^”]*(?:”|$)')
_CLOSING_QUOTES = ('"', "”")

_TRAILING_TERMINAL_RE = re.compile(r"[.!?]+$")


@lru_cache(maxsize=32)
def _abbreviation_re(abbreviations: tuple[str, ...]) -> re.Pattern | None:
    if not abbreviations:
        return None
    # Longest first so "Mrs." wins over "Mr."
    ordered = sorted(abbreviations, key=len, reverse=True)
    alternation = "|".join(re.escape(a) for a in ordered)
    return re.compile(rf"(?<![\w.])(?:{alternation})", re.IGNORECASE)


def mask(text: str) -> str:
    """Mask every terminal punctuation mark in text."""
    return text.translate(_MASK)


def decode(text: str) -> str:
    """Restore masked punctuation."""
    return text.translate(_UNMASK)


def sanitize(text: str) -> str:
    """Drop sentinel code points from raw input so decode never invents punctuation."""
    return text.translate(_STRIP_SENTINELS)


def is_masked(char: str) -> bool:
    return bool(char) and char in SENTINELS


def _is_closed(run: str) -> bool:
    return len(run) > 1 and run.endswith(_CLOSING_QUOTES)


def _mask_quote_run(match: re.Match) -> str:
    run = match.group(0)
    if not _is_closed(run):
        return run[0] + mask(run[1:])

    body = run[1:-1]
    # The punctuation closing the quoted speech still ends the outer sentence
    tail = _TRAILING_TERMINAL_RE.search(body)
    if tail:
        return run[0] + mask(body[:tail.start()]) + body[tail.start():] + run[-1]
    return run[0] + mask(body) + run[-1]


def quote_spans(text: str) -> list[tuple[int, int]]:
    """Half-open (start, end) spans of quoted runs, quote marks included."""
    return [m.span() for m in _QUOTE_RUN_RE.finditer(text)]


def inside_span(index: int, spans: list[tuple[int, int]]) -> bool:
    """True when index falls strictly between the ends of any span."""
    return any(start < index < end for start, end in spans)


def encode(text: str, config: SegmenterConfig = DEFAULT_CONFIG) -> str:
    """Mask abbreviation periods and punctuation inside quoted dialogue."""
    masked = _QUOTE_RUN_RE.sub(_mask_quote_run, text)
    abbreviation_re = _abbreviation_re(config.abbreviations)
    if abbreviation_re is not None:
        masked = abbreviation_re.sub(lambda m: mask(m.group(0)), masked)
    return masked
