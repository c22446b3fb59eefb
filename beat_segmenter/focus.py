"""Classify what a beat shows, for illustrators and page metadata."""

import re
from functools import lru_cache

from beat_segmenter.config import SegmenterConfig, DEFAULT_CONFIG
from beat_segmenter.patterns import alternation
from beat_segmenter.protect import quote_spans
from beat_segmenter.visual_beats import visual_beat_onset

FOCUS_KINDS = (
    "dialogue",
    "observation",
    "group",
    "character-action",
    "environment",
    "narration",
)


@lru_cache(maxsize=32)
def _actor_re(config: SegmenterConfig) -> re.Pattern:
    names = alternation(config.characters)
    honorifics = alternation(config.honorifics)
    return re.compile(rf"\b(?:{names})\b|(?<!\w)(?:{honorifics})\s+[A-Z][\w'-]*")


def find_actor(text: str, config: SegmenterConfig = DEFAULT_CONFIG) -> str | None:
    """First roster character (or titled name like "Mr. Rodriguez") in the beat."""
    match = _actor_re(config).search(text)
    return match.group(0) if match else None


def _distinct_actors(text: str, config: SegmenterConfig) -> set[str]:
    return {m.group(0) for m in _actor_re(config).finditer(text)}


def classify_focus(text: str, config: SegmenterConfig = DEFAULT_CONFIG) -> str:
    """Pick one of FOCUS_KINDS for a beat."""
    onset = visual_beat_onset(text, config)
    if onset == "dialogue" or quote_spans(text):
        return "dialogue"
    if onset == "observation":
        return "observation"
    if len(_distinct_actors(text, config)) >= 2:
        return "group"
    if onset in ("character", "action") or find_actor(text, config):
        return "character-action"
    if onset == "environment":
        return "environment"
    return "narration"
