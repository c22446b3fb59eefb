"""Pre-sentence visual beat segmentation.

A paragraph is cut into rough fragments and regrouped into beats: a fragment
that opens with a new-beat signature (someone observing, a named character,
a pronoun doing something, speech, a change of setting) starts a new beat.
"""

import re
from functools import lru_cache

from beat_segmenter.config import SegmenterConfig, DEFAULT_CONFIG
from beat_segmenter.patterns import QUOTE_MARKS, alternation, verb_alternation
from beat_segmenter.sentences import fragment_spans

ONSET_KINDS = ("observation", "dialogue", "character", "action", "environment")


@lru_cache(maxsize=32)
def onset_patterns(config: SegmenterConfig = DEFAULT_CONFIG) -> tuple[tuple[str, re.Pattern], ...]:
    """(kind, pattern) pairs tested against the start of a fragment, in order."""
    leading_quotes = rf"^[\s{QUOTE_MARKS}]*"
    return (
        ("observation", re.compile(
            rf"^\s*You\s+(?:{verb_alternation(config.observation_verbs)})\b", re.IGNORECASE)),
        ("dialogue", re.compile(rf"^\s*[{QUOTE_MARKS}]")),
        ("character", re.compile(
            rf"{leading_quotes}(?:(?:{alternation(config.characters)})\b"
            rf"|(?:{alternation(config.honorifics)})(?=\s))",
            re.IGNORECASE)),
        ("action", re.compile(
            rf"^\s*(?:{alternation(config.pronouns)})\s+(?:{verb_alternation(config.action_verbs)})\b",
            re.IGNORECASE)),
        ("environment", re.compile(
            rf"^\s*(?:The|A|An)\s+(?:{alternation(config.setting_nouns)})\b", re.IGNORECASE)),
    )


def visual_beat_onset(fragment: str, config: SegmenterConfig = DEFAULT_CONFIG) -> str | None:
    """Name of the new-beat signature the fragment opens with, if any."""
    for kind, pattern in onset_patterns(config):
        if pattern.search(fragment):
            return kind
    return None


def introduces_new_visual_beat(fragment: str, config: SegmenterConfig = DEFAULT_CONFIG) -> bool:
    return visual_beat_onset(fragment, config) is not None


def split_paragraph_into_visual_beats(paragraph: str, config: SegmenterConfig = DEFAULT_CONFIG) -> list[str]:
    """Group a paragraph's fragments into visual beats.

    Paragraphs shorter than the minimum come back whole. Otherwise beats
    shorter than the minimum are dropped.
    """
    text = paragraph.strip()
    if len(text) < config.min_length:
        return [text] if text else []

    # Beats are slices of the paragraph, so dots inside "a.m." or "3.5" survive
    spans = []
    for start, end in fragment_spans(text, config):
        if spans and not introduces_new_visual_beat(text[start:end].strip(), config):
            spans[-1] = (spans[-1][0], end)
        else:
            spans.append((start, end))

    beats = [" ".join(text[start:end].split()) for start, end in spans]
    return [beat for beat in beats if len(beat) >= config.min_length]
