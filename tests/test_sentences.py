"""Tests for sentences module (sentence normalization)."""

from beat_segmenter.sentences import (
    parse_narrative_to_sentences,
    fragment_spans,
    rough_fragments,
    split_sentences,
)


def test_split_on_capital_after_punctuation():
    """Period + space + capital letter is a boundary."""
    assert split_sentences("Kai ran home. Maya stayed behind.") == ["Kai ran home.", "Maya stayed behind."]


def test_no_split_before_lowercase():
    """Without a capital letter the text stays whole."""
    assert split_sentences("kai ran. maya stayed") == ["kai ran. maya stayed"]


def test_abbreviation_not_split():
    """Mr. does not end a sentence."""
    assert split_sentences("Mr. Rodriguez set up chairs. Kai helped.") == [
        "Mr. Rodriguez set up chairs.",
        "Kai helped.",
    ]


def test_quoted_dialogue_kept_together():
    """Punctuation inside quotes does not split; the closing quote does."""
    text = 'Maya said, "Where did it go? I can\'t find it." Kai shook his head.'
    assert split_sentences(text) == [
        'Maya said, "Where did it go? I can\'t find it."',
        "Kai shook his head.",
    ]


def test_newlines_become_spaces():
    """Single line breaks inside a paragraph are flattened."""
    assert split_sentences("Kai ran\nhome.") == ["Kai ran home."]


def test_empty_input():
    """Blank text has no sentences."""
    assert split_sentences("") == []
    assert split_sentences("   \n ") == []


def test_rough_fragments_keep_trailing_text():
    """Text after the last punctuation mark is its own fragment."""
    assert rough_fragments("Kai ran. then he stopped") == ["Kai ran.", "then he stopped"]


def test_rough_fragments_split_without_capital():
    """Fragments ignore what follows the punctuation."""
    assert rough_fragments("one. two! three?") == ["one.", "two!", "three?"]


def test_parse_narrative_flattens_paragraphs():
    """Whole-narrative parsing ignores paragraph breaks."""
    assert parse_narrative_to_sentences("Kai ran.\n\nMaya hid.") == ["Kai ran.", "Maya hid."]
    assert parse_narrative_to_sentences("") == []


def test_fragment_spans_index_original_text():
    text = 'Kai ran. "Stop. Wait!" Maya called'
    spans = fragment_spans(text)
    assert [text[start:end].strip() for start, end in spans] == rough_fragments(text)
    assert rough_fragments(text) == ["Kai ran.", '"Stop. Wait!"', "Maya called"]
