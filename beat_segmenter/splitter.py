"""Split sentences at story beats, with a forced split as the last resort.

The boundary table is applied to the remainder of a unit until it is shorter
than two minimum-length beats or no rule yields a split. Every cut keeps a
first half of at least the minimum length, so the remainder strictly shrinks.
Units that still look like several beats are then split on terminal
punctuation, and each strictly shorter piece goes through the same process.
"""

import logging
import re
from functools import lru_cache

from beat_segmenter.config import SegmenterConfig, DEFAULT_CONFIG
from beat_segmenter.constants import MULTI_BEAT_DISTINCT_ENTITIES, MULTI_BEAT_SENTENCE_ENDERS
from beat_segmenter.patterns import alternation, build_boundary_rules, verb_alternation
from beat_segmenter.protect import encode, quote_spans
from beat_segmenter.sentences import rough_fragments

logger = logging.getLogger(__name__)

_TERMINAL_RUN_RE = re.compile(r"[.!?]+")


@lru_cache(maxsize=32)
def _entity_re(config: SegmenterConfig) -> re.Pattern:
    entities = alternation(config.characters + config.entity_pronouns)
    return re.compile(rf"\b(?:{entities})\b", re.IGNORECASE)


@lru_cache(maxsize=32)
def _action_re(config: SegmenterConfig) -> re.Pattern:
    return re.compile(rf"\b(?:{verb_alternation(config.action_verbs)})\b", re.IGNORECASE)


def has_multiple_visual_beats(text: str, config: SegmenterConfig = DEFAULT_CONFIG) -> bool:
    """Heuristic check for a unit that still holds more than one beat."""
    # Several sentence enders outside quotes and abbreviations
    enders = _TERMINAL_RUN_RE.findall(encode(text, config))
    if len(enders) >= MULTI_BEAT_SENTENCE_ENDERS:
        return True

    # Several distinct actors
    entities = {m.group(0).lower() for m in _entity_re(config).finditer(text)}
    if len(entities) >= MULTI_BEAT_DISTINCT_ENTITIES:
        return True

    # Someone speaks and someone acts in a long unit
    has_dialogue = bool(quote_spans(text))
    has_action = bool(_action_re(config).search(text))
    return has_dialogue and has_action and len(text) > config.dialogue_action_min_length


def force_visual_beat_split(text: str, config: SegmenterConfig = DEFAULT_CONFIG) -> list[str]:
    """Split on every unprotected punctuation run, dropping short fragments.

    Returns [text] when there is nothing to split or nothing would survive.
    """
    fragments = rough_fragments(text, config)
    if len(fragments) <= 1:
        return [text]
    kept = [f for f in fragments if len(f) >= config.min_length]
    return kept or [text]


def _split_on_first_boundary(text: str, config: SegmenterConfig) -> tuple[str, str] | None:
    masked = encode(text, config)
    protected = quote_spans(text)
    for rule in build_boundary_rules(config):
        point = rule.find_split(text, masked, protected)
        if point is not None:
            logger.debug("Split at %s boundary (offset %d)", rule.name, point)
            return text[:point].strip(), text[point:].strip()
    return None


def _fallback_split(text: str, config: SegmenterConfig) -> list[str]:
    if not has_multiple_visual_beats(text, config):
        return [text]
    pieces = force_visual_beat_split(text, config)
    if len(pieces) <= 1:
        return [text]
    logger.debug("Forced split into %d pieces", len(pieces))
    panels = []
    for piece in pieces:
        panels.extend(split_at_story_beats(piece, config))
    return panels


def split_at_story_beats(unit: str, config: SegmenterConfig = DEFAULT_CONFIG) -> list[str]:
    """Divide one unit into beats. Units under twice the minimum are never split."""
    panels = []
    remainder = unit.strip()
    while len(remainder) >= 2 * config.min_length:
        split = _split_on_first_boundary(remainder, config)
        if split is None:
            panels.extend(_fallback_split(remainder, config))
            return panels
        first, remainder = split
        panels.append(first)

    if remainder:
        panels.append(remainder)
    return panels


def split_into_panels(sentences: list[str], config: SegmenterConfig = DEFAULT_CONFIG) -> list[str]:
    """Apply split_at_story_beats to each sentence, keeping order."""
    panels = []
    for sentence in sentences:
        panels.extend(split_at_story_beats(sentence, config))
    return panels
