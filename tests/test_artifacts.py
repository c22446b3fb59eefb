"""Tests for artifacts module (project directories and beats.json)."""

import json
import os

from beat_segmenter.artifacts import (
    build_beats_artifact,
    get_project_status,
    init_output_dir,
    list_projects,
    load_artifact,
    slug_from_path,
    write_artifact,
)
from beat_segmenter.config import DEFAULT_CONFIG
from beat_segmenter.models import Beat, Segmentation


def _beats_payload():
    segmentation = Segmentation(beats=["Kai searched the box.", "The garden was quiet."], dropped=2)
    beats = [
        Beat(index=0, text="Kai searched the box.", focus="character-action", actor="Kai"),
        Beat(index=1, text="The garden was quiet.", focus="environment"),
    ]
    return build_beats_artifact("Title", "Author", "/tmp/story.txt", segmentation, beats, DEFAULT_CONFIG)


def test_slug_from_path():
    """Various filename formats → correct slugs."""
    assert slug_from_path("/path/to/The Garden Mystery.txt") == "the_garden_mystery"
    assert slug_from_path("missing_project.txt") == "missing_project"
    assert slug_from_path("/a/b/My Story.txt") == "my_story"


def test_init_output_dir(tmp_path):
    project_dir = init_output_dir(str(tmp_path / "My Story.txt"), output_base=str(tmp_path / "output"))
    assert project_dir == str(tmp_path / "output" / "my_story")
    assert os.path.isdir(project_dir)


def test_init_output_dir_existing(tmp_path):
    """Re-running on an existing dir keeps its files."""
    story = str(tmp_path / "story.txt")
    project_dir = init_output_dir(story, output_base=str(tmp_path / "output"))
    marker = os.path.join(project_dir, "marker.txt")
    with open(marker, "w") as f:
        f.write("marker")
    assert init_output_dir(story, output_base=str(tmp_path / "output")) == project_dir
    assert os.path.exists(marker)


def test_write_and_load_artifact(tmp_path):
    """Writes indented UTF-8 JSON that loads back unchanged."""
    data = {"beats": [{"text": "“Look!” said Kai."}]}
    path = write_artifact(str(tmp_path), "beats.json", data)
    assert load_artifact(str(tmp_path), "beats.json") == data
    with open(path, encoding="utf-8") as f:
        assert "“Look!”" in f.read()


def test_load_artifact_missing(tmp_path):
    assert load_artifact(str(tmp_path), "nope.json") is None


def test_build_beats_artifact():
    payload = _beats_payload()
    assert payload["metadata"] == {"title": "Title", "author": "Author"}
    assert payload["settings"] == {"min_length": 20, "max_beats": 50}
    assert payload["dropped"] == 2
    assert payload["beats"][0] == {
        "index": 0, "text": "Kai searched the box.", "focus": "character-action", "actor": "Kai",
    }
    assert payload["beats"][1]["actor"] is None
    json.dumps(payload)


def test_list_projects(tmp_path):
    """Only directories holding beats.json are projects."""
    output = tmp_path / "output"
    (output / "b_story").mkdir(parents=True)
    (output / "a_story").mkdir()
    (output / "empty").mkdir()
    (output / "b_story" / "beats.json").write_text("{}")
    (output / "a_story" / "beats.json").write_text("{}")
    assert list_projects(str(output)) == ["a_story", "b_story"]


def test_list_projects_no_output_dir(tmp_path):
    assert list_projects(str(tmp_path / "missing")) == []


def test_project_status(tmp_path):
    assert get_project_status(str(tmp_path)) == {"state": "pending"}
    write_artifact(str(tmp_path), "beats.json", _beats_payload())
    assert get_project_status(str(tmp_path)) == {
        "state": "done",
        "beats": 2,
        "dropped": 2,
        "focus": {"character-action": 1, "environment": 1},
    }
