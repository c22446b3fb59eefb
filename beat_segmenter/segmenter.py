"""Turn a narrative into an ordered sequence of visual beats, one per page."""

import logging
import re

from beat_segmenter.config import SegmenterConfig, DEFAULT_CONFIG
from beat_segmenter.focus import classify_focus, find_actor
from beat_segmenter.models import Beat, Segmentation
from beat_segmenter.protect import sanitize
from beat_segmenter.sentences import split_sentences
from beat_segmenter.splitter import split_into_panels
from beat_segmenter.visual_beats import split_paragraph_into_visual_beats

logger = logging.getLogger(__name__)

_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")


def segment_with_report(narrative: str, config: SegmenterConfig = DEFAULT_CONFIG) -> Segmentation:
    """Segment a narrative and report how many beats the cap dropped.

    Paragraphs are split into visual beats first, then each visual beat is
    normalized into sentences and split at story beats.
    """
    text = sanitize(narrative or "").strip()
    if not text:
        return Segmentation()
    if len(text) < 2 * config.min_length:
        return Segmentation(beats=[text])

    panels = []
    for paragraph in _PARAGRAPH_BREAK_RE.split(text):
        for visual_beat in split_paragraph_into_visual_beats(paragraph, config):
            panels.extend(split_into_panels(split_sentences(visual_beat, config), config))

    panels = [panel for panel in panels if panel]
    if not panels:
        # Every candidate was too short; keep the narrative as one page
        panels = [" ".join(text.split())]

    dropped = max(0, len(panels) - config.max_beats)
    if dropped:
        logger.info("Beat cap of %d reached, dropping %d trailing beats", config.max_beats, dropped)
    return Segmentation(beats=panels[:config.max_beats], dropped=dropped)


def segment(narrative: str, config: SegmenterConfig = DEFAULT_CONFIG) -> list[str]:
    """Segment a narrative into at most config.max_beats beats."""
    return segment_with_report(narrative, config).beats


def describe_beats(beats: list[str], config: SegmenterConfig = DEFAULT_CONFIG) -> list[Beat]:
    """Index beats and attach focus and actor metadata."""
    return [
        Beat(index=i, text=text, focus=classify_focus(text, config), actor=find_actor(text, config))
        for i, text in enumerate(beats)
    ]
