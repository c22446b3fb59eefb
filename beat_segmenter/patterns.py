"""Ordered table of story-beat boundary rules.

Each rule pairs a boundary matcher with the minimum length both sides of a
split must reach. Rules are tried in order and the first valid split wins, so
adding or reordering a heuristic is a change to the table only.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from beat_segmenter.config import SegmenterConfig, DEFAULT_CONFIG
from beat_segmenter.protect import inside_span, is_masked

QUOTE_MARKS = "\"'“”‘’"


def alternation(words) -> str:
    """Regex alternation of literal words, longest first."""
    return "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))


def _third_person(verb: str) -> str:
    if verb.endswith(("s", "sh", "ch", "x", "z")):
        return verb + "es"
    return verb + "s"


def verb_alternation(verbs) -> str:
    """Alternation matching each verb in base and third-person form."""
    forms = set()
    for verb in verbs:
        forms.add(verb)
        forms.add(_third_person(verb))
    return alternation(forms)


@dataclass(frozen=True)
class BoundaryRule:
    name: str
    pattern: re.Pattern
    min_length: int

    def find_split(self, text: str, masked: str, protected: list[tuple[int, int]]) -> int | None:
        """Offset of the first split point leaving both halves long enough.

        Matches that begin right after protected punctuation, or whose split
        point lands inside quoted dialogue, are skipped.
        """
        for match in self.pattern.finditer(text):
            point = match.end()
            if match.start() > 0 and is_masked(masked[match.start() - 1]):
                continue
            if inside_span(point, protected) or inside_span(match.start(), protected):
                continue
            first = text[:point].strip()
            rest = text[point:].strip()
            if len(first) >= self.min_length and len(rest) >= self.min_length:
                return point
        return None


@lru_cache(maxsize=32)
def build_boundary_rules(config: SegmenterConfig = DEFAULT_CONFIG) -> tuple[BoundaryRule, ...]:
    """Compile the boundary table for a configuration, in priority order."""
    actors = alternation(config.characters + config.role_nouns + config.honorifics)
    pronouns = alternation(config.pronouns)
    subjects = alternation(config.characters + tuple(p.lower() for p in config.entity_pronouns) + ("the",))
    clause_start = r"(?<=[.!?,])\s*"

    table = [
        ("quote_close", rf"(?<=[.!?][{QUOTE_MARKS}])\s+", 0),
        ("observation", rf"{clause_start}(?=You (?:{verb_alternation(config.observation_verbs)})\b)", re.IGNORECASE),
        ("character", rf"{clause_start}(?=(?:{actors})\s)", 0),
        ("pronoun_action", rf"{clause_start}(?=(?:{pronouns})\s+(?:{verb_alternation(config.action_verbs + config.boundary_verbs)})\b)", re.IGNORECASE),
        ("environment", rf"{clause_start}(?=The (?:{alternation(config.setting_nouns)})\b)", re.IGNORECASE),
        ("adjective_onset", rf"{clause_start}(?=An? (?:{alternation(config.descriptive_adjectives)})\b)", re.IGNORECASE),
        ("conjunction", rf", (?=and (?:{subjects})\s)", re.IGNORECASE),
        ("gerund", rf", (?=(?:{alternation(config.gerunds)})\s)", re.IGNORECASE),
    ]
    return tuple(
        BoundaryRule(name=name, pattern=re.compile(regex, flags), min_length=config.min_length)
        for name, regex, flags in table
    )
