"""Data models for beat segmentation."""

from dataclasses import dataclass, field


@dataclass
class Beat:
    index: int
    text: str
    focus: str = "narration"   # see focus.FOCUS_KINDS
    actor: str | None = None   # first roster character named in the beat


@dataclass
class Segmentation:
    beats: list[str] = field(default_factory=list)
    dropped: int = 0           # beats cut by the cap

    @property
    def truncated(self) -> bool:
        return self.dropped > 0
