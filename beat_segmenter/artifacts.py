"""Output directory management and JSON beat artifacts."""

import json
import os
import re
from collections import Counter

from beat_segmenter.constants import OUTPUT_DIR, BEATS_ARTIFACT
from beat_segmenter.config import SegmenterConfig
from beat_segmenter.models import Beat, Segmentation


def slug_from_path(story_path: str) -> str:
    """Convert story filename to output directory slug.

    "Missing Project.txt" → "missing_project"
    "/path/to/The Garden Mystery.txt" → "the_garden_mystery"
    """
    basename = os.path.splitext(os.path.basename(story_path))[0]
    return re.sub(r"[^a-zA-Z0-9]+", "_", basename).strip("_").lower()


def init_output_dir(story_path: str, output_base: str = OUTPUT_DIR) -> str:
    """Create output/<slug>/ and return its path."""
    project_dir = os.path.join(output_base, slug_from_path(story_path))
    os.makedirs(project_dir, exist_ok=True)
    return project_dir


def write_artifact(project_dir: str, filename: str, data: dict) -> str:
    """Write JSON artifact to project_dir/filename.

    Returns path to the written file.
    """
    path = os.path.join(project_dir, filename)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return path


def load_artifact(project_dir: str, filename: str) -> dict | None:
    """Read JSON artifact. Returns None if file doesn't exist."""
    path = os.path.join(project_dir, filename)
    if not os.path.exists(path):
        return None
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def build_beats_artifact(
    title: str,
    author: str,
    source: str,
    segmentation: Segmentation,
    beats: list[Beat],
    config: SegmenterConfig,
) -> dict:
    """Assemble the beats.json payload."""
    return {
        "metadata": {"title": title, "author": author},
        "source": source,
        "settings": {"min_length": config.min_length, "max_beats": config.max_beats},
        "beats": [
            {"index": b.index, "text": b.text, "focus": b.focus, "actor": b.actor}
            for b in beats
        ],
        "dropped": segmentation.dropped,
    }


def list_projects(output_base: str = OUTPUT_DIR) -> list[str]:
    """Sorted slugs of project directories that contain a beats.json."""
    if not os.path.exists(output_base):
        return []
    return sorted(
        name for name in os.listdir(output_base)
        if os.path.exists(os.path.join(output_base, name, BEATS_ARTIFACT))
    )


def get_project_status(project_dir: str) -> dict:
    """Summarize a project's beats.json: counts and focus breakdown."""
    data = load_artifact(project_dir, BEATS_ARTIFACT)
    if data is None:
        return {"state": "pending"}
    beats = data.get("beats", [])
    return {
        "state": "done",
        "beats": len(beats),
        "dropped": data.get("dropped", 0),
        "focus": dict(Counter(b.get("focus", "narration") for b in beats)),
    }
