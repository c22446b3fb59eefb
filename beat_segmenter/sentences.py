"""Sentence normalization: coarse sentence splitting over masked text."""

import re

from beat_segmenter.config import SegmenterConfig, DEFAULT_CONFIG
from beat_segmenter.protect import encode, decode

# Terminal punctuation (optionally closed by a quote), whitespace, then a capital
_SENTENCE_BOUNDARY_RE = re.compile(
    r"(?<=[.!?])\s+(?=[A-Z])|(?<=[.!?][\"'”’])\s+(?=[A-Z])"
)

# Looser tokenization: everything up to a punctuation run plus closing quotes,
# or a trailing tail with no terminal punctuation at all
_FRAGMENT_RE = re.compile(r"[^.!?]*[.!?]+[\"'”’]*|[^.!?]+$")


def split_sentences(text: str, config: SegmenterConfig = DEFAULT_CONFIG) -> list[str]:
    """Split text into coarse sentences.

    Never returns an empty list for text that is non-empty after trimming.
    """
    flat = text.replace("\n", " ")
    if not flat.strip():
        return []

    masked = encode(flat, config)
    sentences = []
    for piece in _SENTENCE_BOUNDARY_RE.split(masked):
        piece = decode(piece).strip()
        if piece:
            sentences.append(piece)

    return sentences or [flat.strip()]


def fragment_spans(text: str, config: SegmenterConfig = DEFAULT_CONFIG) -> list[tuple[int, int]]:
    """(start, end) offsets in text of the pieces rough_fragments returns."""
    return [m.span() for m in _FRAGMENT_RE.finditer(encode(text, config)) if m.group(0).strip()]


def rough_fragments(text: str, config: SegmenterConfig = DEFAULT_CONFIG) -> list[str]:
    """Cut text after every unprotected punctuation run, no capital-letter check."""
    return [text[start:end].strip() for start, end in fragment_spans(text, config)]


def parse_narrative_to_sentences(narrative: str, config: SegmenterConfig = DEFAULT_CONFIG) -> list[str]:
    """Sentences of a whole narrative, ignoring paragraph structure."""
    if not narrative or not narrative.strip():
        return []
    return split_sentences(re.sub(r"\n\s*\n+", " ", narrative), config)
