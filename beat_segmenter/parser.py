"""Read story files and separate the title/author header from the narrative."""

import re

_BY_LINE_RE = re.compile(r"^by\s+(.+)$", re.IGNORECASE)

# The by-line must sit in the first few lines, before the narrative starts
_HEADER_LINES = 3


def extract_metadata(text: str) -> tuple[str, str]:
    """Extract title and author from the text file header.

    Convention: a line matching ^by .+ names the author, and only then is the
    first non-empty line taken as the title.
    Falls back to ("Untitled", "Unknown Author").
    """
    lines = [line.strip() for line in text.strip().split("\n") if line.strip()]
    for line in lines[:_HEADER_LINES]:
        match = _BY_LINE_RE.match(line)
        if match:
            return lines[0], match.group(1).strip()
    return "Untitled", "Unknown Author"


def strip_metadata_header(text: str) -> str:
    """Drop leading title and "by Author" paragraphs, keeping the narrative."""
    paragraphs = re.split(r"\n\s*\n", text.strip())
    title, author = extract_metadata(text)
    if (title, author) == ("Untitled", "Unknown Author"):
        return text.strip()

    header = {title.lower(), f"by {author}".lower()}
    start = 0
    for paragraph in paragraphs:
        lines = {line.strip().lower() for line in paragraph.strip().split("\n") if line.strip()}
        if lines and lines <= header:
            start += 1
        else:
            break
    return "\n\n".join(paragraphs[start:])


def read_story(path: str) -> tuple[str, str, str]:
    """Return (title, author, narrative) for a UTF-8 story file."""
    with open(path, encoding="utf-8") as f:
        text = f.read()
    title, author = extract_metadata(text)
    return title, author, strip_metadata_header(text)
