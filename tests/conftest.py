"""Shared fixtures for beat segmenter tests."""

import pytest


@pytest.fixture
def sample_narrative():
    """Three paragraphs with names, dialogue, and a setting change."""
    return (
        "Kai searched the box. Maya watched quietly. She looked worried.\n\n"
        'Maya said, "Where did it go? I can\'t find it." Kai shook his head and looked away.\n\n'
        "They found the trail. The garden was quiet and still."
    )


@pytest.fixture
def story_file(tmp_path, sample_narrative):
    """A story file with a title/author header."""
    path = tmp_path / "garden_mystery.txt"
    path.write_text(f"The Garden Mystery\n\nby Test Author\n\n{sample_narrative}", encoding="utf-8")
    return str(path)
