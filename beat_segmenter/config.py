"""Immutable segmentation configuration and roster sidecar loading."""

import json
import logging
import os
from dataclasses import dataclass, fields, replace

from beat_segmenter.constants import (
    MIN_BEAT_LENGTH,
    MAX_BEATS,
    DIALOGUE_ACTION_MIN_LENGTH,
    ROSTER_SUFFIX,
)

logger = logging.getLogger(__name__)

# Honorific and Latin abbreviations whose periods never end a sentence
ABBREVIATIONS = (
    "Mr.", "Mrs.", "Ms.", "Dr.", "Jr.", "Sr.", "St.",
    "Prof.", "vs.", "etc.", "i.e.", "e.g.", "a.m.", "p.m.",
)

# Story cast used for onset detection
CHARACTERS = ("Kai", "Zara", "Maya", "Leo", "Sam", "Alex", "Jordan", "Taylor")

HONORIFICS = ("Mr.", "Mrs.", "Ms.", "Dr.")

# Role nouns that act like names at the start of a clause
ROLE_NOUNS = ("The teacher", "The student")

PRONOUNS = ("She", "He", "They", "It")

# Pronouns counted as distinct entities by the multi-beat detector
ENTITY_PRONOUNS = ("She", "He", "They", "You")

# Base forms; third-person forms are derived when patterns are built
ACTION_VERBS = (
    "walk", "say", "look", "turn", "point", "kneel", "stand", "pick",
    "notice", "move", "step", "reach",
)

# Extra verbs only the boundary table accepts after a pronoun
BOUNDARY_VERBS = (
    "see", "hear", "run", "smile", "frown", "nod", "shake",
)

OBSERVATION_VERBS = (
    "notice", "see", "hear", "spot", "realize", "find", "watch", "feel",
    "look", "turn", "walk", "step",
)

SETTING_NOUNS = (
    "garden", "classroom", "room", "table", "desk", "floor", "wall", "door",
    "window", "ground", "sky", "sun", "wind", "rain", "spade", "tool", "bin",
    "trail", "mark", "soil", "sound", "voice", "noise", "air", "smell",
    "feeling",
)

DESCRIPTIVE_ADJECTIVES = (
    "small", "large", "old", "new", "strange", "familiar", "quiet", "loud",
    "bright", "dark", "soft", "hard", "warm", "cold", "sudden", "gentle",
)

GERUNDS = ("noticing", "seeing", "hearing", "spotting", "watching", "feeling")


@dataclass(frozen=True)
class SegmenterConfig:
    """Everything the segmenter reads. Frozen so one instance can be shared."""

    abbreviations: tuple[str, ...] = ABBREVIATIONS
    characters: tuple[str, ...] = CHARACTERS
    honorifics: tuple[str, ...] = HONORIFICS
    role_nouns: tuple[str, ...] = ROLE_NOUNS
    pronouns: tuple[str, ...] = PRONOUNS
    entity_pronouns: tuple[str, ...] = ENTITY_PRONOUNS
    action_verbs: tuple[str, ...] = ACTION_VERBS
    boundary_verbs: tuple[str, ...] = BOUNDARY_VERBS
    observation_verbs: tuple[str, ...] = OBSERVATION_VERBS
    setting_nouns: tuple[str, ...] = SETTING_NOUNS
    descriptive_adjectives: tuple[str, ...] = DESCRIPTIVE_ADJECTIVES
    gerunds: tuple[str, ...] = GERUNDS
    min_length: int = MIN_BEAT_LENGTH
    max_beats: int = MAX_BEATS
    dialogue_action_min_length: int = DIALOGUE_ACTION_MIN_LENGTH

    def __post_init__(self):
        # Word lists are stored as tuples so configs stay hashable
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, int):
                continue
            if isinstance(value, str):
                raise ValueError(f"{f.name} must be a sequence of strings, got {value!r}")
            object.__setattr__(self, f.name, tuple(value))
        if self.min_length < 1:
            raise ValueError(f"min_length must be positive, got {self.min_length}")
        if self.max_beats < 1:
            raise ValueError(f"max_beats must be positive, got {self.max_beats}")
        if not self.characters:
            raise ValueError("character roster must not be empty")

    def with_roster(self, characters=(), honorifics=()) -> "SegmenterConfig":
        """Return a copy whose roster also includes the given names."""
        return replace(
            self,
            characters=_merge(self.characters, characters),
            honorifics=_merge(self.honorifics, honorifics),
            abbreviations=_merge(self.abbreviations, [h for h in honorifics if str(h).strip().endswith(".")]),
        )


def _merge(existing: tuple[str, ...], extra) -> tuple[str, ...]:
    """Append new entries, skipping case-insensitive duplicates and blanks."""
    seen = {item.lower() for item in existing}
    merged = list(existing)
    for item in extra:
        item = str(item).strip()
        if item and item.lower() not in seen:
            seen.add(item.lower())
            merged.append(item)
    return tuple(merged)


DEFAULT_CONFIG = SegmenterConfig()


def load_roster_file(roster_path: str, config: SegmenterConfig = DEFAULT_CONFIG) -> SegmenterConfig:
    """Extend config with the names listed in a roster JSON file.

    Expected shape: {"characters": [...], "honorifics": [...]}. A missing or
    malformed file leaves the config unchanged.
    """
    if not os.path.exists(roster_path):
        return config
    try:
        with open(roster_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError:
        logger.warning("Malformed roster file: %s, using default roster", roster_path)
        return config
    if not isinstance(data, dict):
        logger.warning("Roster file %s is not a JSON object, using default roster", roster_path)
        return config
    roster = {key: data.get(key, []) for key in ("characters", "honorifics")}
    for key, names in roster.items():
        if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
            logger.warning("Roster file %s: \"%s\" is not a list of names, using default roster", roster_path, key)
            return config
    return config.with_roster(**roster)


def load_roster(story_path: str, config: SegmenterConfig = DEFAULT_CONFIG) -> SegmenterConfig:
    """Load the <story>.roster.json sidecar if it exists."""
    base = os.path.splitext(story_path)[0]
    return load_roster_file(base + ROSTER_SUFFIX, config)
