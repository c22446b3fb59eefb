"""Tests for parser module (story file loading)."""

from beat_segmenter.parser import extract_metadata, read_story, strip_metadata_header


def test_extract_metadata():
    """Title and author extracted from header."""
    text = "The Garden Mystery\n\nby Test Author\n\nThey found the trail."
    assert extract_metadata(text) == ("The Garden Mystery", "Test Author")


def test_extract_metadata_fallback():
    """No 'by' line falls back to defaults."""
    text = "Just a random paragraph with no clear metadata."
    assert extract_metadata(text) == ("Untitled", "Unknown Author")


def test_strip_metadata_header():
    """Title and author paragraphs are removed, the narrative is kept."""
    text = "The Garden Mystery\n\nby Test Author\n\nThey found the trail.\n\nThe garden was quiet."
    assert strip_metadata_header(text) == "They found the trail.\n\nThe garden was quiet."


def test_strip_metadata_header_single_paragraph():
    """Title and by-line in one paragraph."""
    text = "The Garden Mystery\nby Test Author\n\nThey found the trail."
    assert strip_metadata_header(text) == "They found the trail."


def test_strip_metadata_header_without_header():
    """Text without a by-line is left alone."""
    text = "Kai searched the box.\n\nMaya watched quietly."
    assert strip_metadata_header(text) == text


def test_read_story(story_file, sample_narrative):
    title, author, narrative = read_story(story_file)
    assert title == "The Garden Mystery"
    assert author == "Test Author"
    assert narrative == sample_narrative


def test_read_story_utf8(tmp_path):
    """Curly quotes survive the round trip from disk."""
    path = tmp_path / "curly.txt"
    path.write_text("“Look!” said Kai.", encoding="utf-8")
    assert read_story(str(path)) == ("Untitled", "Unknown Author", "“Look!” said Kai.")


def test_extract_metadata_ignores_by_in_narrative():
    """A narrative line starting with 'by' is not a by-line."""
    text = "Kai searched the box.\nMaya watched quietly.\nShe looked worried.\nby the gate, a shadow moved."
    assert extract_metadata(text) == ("Untitled", "Unknown Author")
